"""
cometlookup: Resolve comet names and designations against JPL Horizons,
the aerith.net comet catalog and the JPL Small-Body Database.

Quick start::

    import cometlookup

    # Catalog page (or SBDB magnitude) for one comet
    r = cometlookup.resolve_identifier(cometlookup.Identifier("1", "12P"))
    print(r.source, r.matched_url, r.magnitude_h)

    # Topocentric RA/Dec from Horizons
    eph = cometlookup.radec("12P", "2025-11-24 00:00", lon=4.84, lat=49.34, alt_m=130)

    # URLs that would be tried, without touching the network
    cometlookup.catalog_candidates("Hartley 2", "103P")
"""
__version__ = "0.1.0"

from cometlookup.api import resolve_identifier, resolve_batch, radec, magnitude  # noqa: F401
from cometlookup.candidates import catalog_candidates, Directory, Page  # noqa: F401
from cometlookup.coordinates import hms_to_hours, dms_to_deg  # noqa: F401
from cometlookup.config import ClientConfig  # noqa: F401
from cometlookup.models import Identifier, EphemerisResult, ResolutionResult  # noqa: F401
