"""
cometlookup.api — Per-object resolution and batch driver.

This module ties the resolvers together.  All public functions
(resolve_identifier, resolve_batch, radec, magnitude) are re-exported
from the top-level ``cometlookup`` package.

Typical usage::

    import cometlookup

    # One comet: catalog page, or SBDB absolute magnitude as a fallback
    result = cometlookup.resolve_identifier(
        cometlookup.Identifier("1", "12P/Pons-Brooks", "12P"))

    # Where is it right now?
    eph = cometlookup.radec("12P", "2025-11-24 00:00", lon=4.84, lat=49.34)
"""

from __future__ import annotations
import logging
from typing import Callable, Iterable, Iterator, Optional

from cometlookup.catalog import locate_catalog_page, parse_photometry
from cometlookup.config import ClientConfig
from cometlookup.errors import NoMatchError
from cometlookup.horizons import ObserverSite, query_radec
from cometlookup.models import EphemerisResult, Identifier, ResolutionResult
from cometlookup.sbdb import lookup_magnitude
from cometlookup.transport import HttpProbe

logger = logging.getLogger(__name__)


def resolve_identifier(identifier: Identifier, probe=None,
                       config: Optional[ClientConfig] = None,
                       photometry: bool = False) -> ResolutionResult:
    """Resolve one Identifier: catalog page first, SBDB magnitude second.

    Never raises for remote trouble; a total failure comes back as a
    result with ``source == "none"``.

    Parameters
    ----------
    identifier : Identifier
        The object to resolve.
    probe : HttpProbe, optional
        Request capability; one is built from *config* when omitted.
    config : ClientConfig, optional
        Timeouts and endpoint URLs (defaults when omitted).
    photometry : bool, optional
        Also scrape ``H``/``n``/phase from the matched catalog page.

    Returns
    -------
    ResolutionResult
    """
    config = config or ClientConfig()
    if probe is None:
        with HttpProbe(config) as owned:
            return resolve_identifier(identifier, owned, config, photometry)

    try:
        match = locate_catalog_page(identifier.name, identifier.designation, probe,
                                    base=config.catalog_base,
                                    timeout=config.catalog_timeout)
    except NoMatchError as e:
        logger.info("%s: %s; trying SBDB", identifier.label(), e)
    else:
        phot = None
        magnitude = None
        if photometry:
            phot = parse_photometry(match.body)
            magnitude = phot.h
        return ResolutionResult(identifier, matched_url=match.url, magnitude_h=magnitude,
                                source="catalog", photometry=phot)

    sbdb = lookup_magnitude(identifier.query, probe, url=config.sbdb_url,
                            timeout=config.sbdb_timeout)
    if sbdb is not None:
        return ResolutionResult(identifier, magnitude_h=sbdb.magnitude_h,
                                source="sbdb", sbdb_query=sbdb.query)
    return ResolutionResult(identifier)


def resolve_batch(identifiers: Iterable[Identifier], probe=None,
                  config: Optional[ClientConfig] = None, photometry: bool = False,
                  on_result: Optional[Callable[[ResolutionResult], None]] = None,
                  ) -> Iterator[ResolutionResult]:
    """Resolve Identifiers one after another, yielding each result.

    Identifiers are independent: nothing learned about one is reused
    for the next.  *on_result* is called with every result as it is made.
    """
    config = config or ClientConfig()
    if probe is None:
        with HttpProbe(config) as owned:
            yield from resolve_batch(identifiers, owned, config, photometry, on_result)
        return
    for ident in identifiers:
        result = resolve_identifier(ident, probe, config, photometry=photometry)
        if on_result is not None:
            on_result(result)
        yield result


def radec(designation: str, when, lon: float = 0.0, lat: float = 0.0,
          alt_m: float = 0.0, ephem: Optional[str] = None, probe=None,
          config: Optional[ClientConfig] = None) -> EphemerisResult:
    """Topocentric RA/Dec of *designation* from Horizons.

    Examples
    --------
    >>> eph = cometlookup.radec("12P", "2025-11-24 00:00", lon=0, lat=0)
    >>> print(f"RA={eph.ra_hours:.4f}h Dec={eph.dec_degrees:+.4f}°")
    """
    config = config or ClientConfig()
    if probe is None:
        with HttpProbe(config) as owned:
            return radec(designation, when, lon, lat, alt_m, ephem, owned, config)
    return query_radec(designation, when, ObserverSite(lon, lat, alt_m),
                       probe=probe, ephem=ephem,
                       url=config.horizons_url, timeout=config.horizons_timeout)


def magnitude(query: str, probe=None,
              config: Optional[ClientConfig] = None) -> Optional[float]:
    """Absolute magnitude ``H`` from SBDB, or ``None``."""
    config = config or ClientConfig()
    if probe is None:
        with HttpProbe(config) as owned:
            return magnitude(query, owned, config)
    found = lookup_magnitude(query, probe, url=config.sbdb_url,
                             timeout=config.sbdb_timeout)
    return found.magnitude_h if found is not None else None
