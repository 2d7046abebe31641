"""
cometlookup.horizons — Topocentric RA/Dec from JPL Horizons.

Horizons treats many designations as ambiguous and answers with a list
of candidate objects instead of an ephemeris.  :func:`query_radec` acts
like a person filling in the form: it retries with the record numbers
from that list (most recent apparition first), then with numbers picked
out of numbered choices, then with any non-year number in the reply,
and finally with an explicit small-body ``DES=`` command when Horizons
hints that a precomputed trajectory exists.

The data row of the ephemeris is split on commas and the RA/Dec columns
are found by :func:`~cometlookup.coordinates.locate_radec`.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from astropy.time import Time, TimeDelta

from cometlookup.candidates import horizons_command, small_body_command
from cometlookup.classify import (
    ResponseKind, classify_horizons, data_block, disambiguation_tiers,
    suggests_small_body, unwrap_horizons,
)
from cometlookup.config import HORIZONS_URL
from cometlookup.coordinates import dms_to_deg, hms_to_hours, locate_radec
from cometlookup.errors import (
    AmbiguousResponseError, NoMatchError, ParseError, TransportError,
)
from cometlookup.models import EphemerisResult

logger = logging.getLogger(__name__)

#: Default per-request timeout for ephemeris queries (seconds).
HORIZONS_TIMEOUT = 30.0

_COMMENT_MARKER = "***"
_FIELD_SPLIT = re.compile(r"\s*,\s*")


@dataclass(frozen=True)
class ObserverSite:
    """Geodetic observer position.

    Attributes
    ----------
    lon, lat : float
        East longitude and latitude in degrees.
    alt_m : float
        Altitude above the reference ellipsoid in metres.
    """
    lon: float
    lat: float
    alt_m: float = 0.0

    @property
    def site_coord(self) -> str:
        alt_km = self.alt_m / 1000.0
        return f"'{self.lon},{self.lat},{alt_km}'"


def observation_window(when: Union[str, Time]) -> tuple[str, str]:
    """Return Horizons ``(START_TIME, STOP_TIME)`` one minute apart, UTC."""
    t = when if isinstance(when, Time) else Time(when, scale="utc")
    stop = t + TimeDelta(60, format="sec")
    return (t.utc.to_value("iso", subfmt="date_hm"),
            stop.utc.to_value("iso", subfmt="date_hm"))


def build_request(command: str, site: ObserverSite, start: str, stop: str,
                  ephem: Optional[str] = None) -> dict[str, str]:
    """Form fields for one OBSERVER-table request in CSV format."""
    params = {
        "format": "json",
        "COMMAND": command,
        "EPHEM_TYPE": "OBSERVER",
        "CENTER": "coord@399",
        "SITE_COORD": site.site_coord,
        "START_TIME": f"'{start}'",
        "STOP_TIME": f"'{stop}'",
        "STEP_SIZE": "'1 m'",
        "CSV_FORMAT": "YES",
    }
    if ephem is not None and ephem.strip():
        params["EPHEM"] = ephem.strip()
    return params


def extract_radec(text: str, used_query: str) -> EphemerisResult:
    """Parse the first data row of a Horizons ephemeris.

    Raises
    ------
    AmbiguousResponseError
        If *text* has no ``$$SOE … $$EOE`` block.
    ParseError
        If the block holds no usable data row or the coordinates do not parse.
    """
    block = data_block(text)
    if block is None:
        raise AmbiguousResponseError("no $$SOE data block", text=text)

    row = None
    for line in block.strip().splitlines():
        line = line.strip()
        if not line or line.startswith(_COMMENT_MARKER):
            continue
        if "," in line and re.search(r"\d", line):
            row = line
            break
    if row is None:
        raise ParseError("no data line in block")

    fields = [f.strip() for f in _FIELD_SPLIT.split(row)]
    raw_ra, raw_dec, matcher = locate_radec(fields)
    logger.debug("RA/Dec columns chosen by %s: %r %r", matcher, raw_ra, raw_dec)
    try:
        ra = hms_to_hours(raw_ra)
        dec = dms_to_deg(raw_dec)
    except ValueError as e:
        raise ParseError(f"unparseable RA/Dec {raw_ra!r} {raw_dec!r}: {e}") from e
    return EphemerisResult(ra, dec, raw_ra, raw_dec, used_query)


class _Session:
    """One designation's worth of Horizons requests."""

    def __init__(self, probe, site, start, stop, ephem, url, timeout):
        self.probe = probe
        self.site = site
        self.start = start
        self.stop = stop
        self.ephem = ephem
        self.url = url
        self.timeout = timeout

    def send(self, command: str):
        data = build_request(command, self.site, self.start, self.stop, self.ephem)
        outcome = self.probe.post(self.url, data=data, timeout=self.timeout)
        if not outcome.ok:
            logger.debug("COMMAND=%s failed: %s", command, outcome.error or outcome.status)
            return outcome, ""
        return outcome, unwrap_horizons(outcome.body)

    def attempt(self, command: str) -> Optional[EphemerisResult]:
        _, text = self.send(command)
        if data_block(text) is None:
            return None
        return extract_radec(text, command)


def query_radec(designation: str, when: Union[str, Time], site: ObserverSite,
                probe=None, ephem: Optional[str] = None, url: str = HORIZONS_URL,
                timeout: float = HORIZONS_TIMEOUT) -> EphemerisResult:
    """Ask Horizons where *designation* is, disambiguating when needed.

    Parameters
    ----------
    designation : str
        Free-text designation, e.g. ``"12P"`` or ``"C/2025 A6"``.
    when : str or astropy.time.Time
        UTC start of the one-minute window, e.g. ``"2025-11-18 16:08"``.
    site : ObserverSite
        Observer location.
    probe : HttpProbe
        Anything with ``post(url, data=..., timeout=...)``.
    ephem : str, optional
        Planetary ephemeris name (``"DE440"``).

    Returns
    -------
    EphemerisResult

    Raises
    ------
    TransportError
        If the first request fails outright.
    ParseError
        If a reply carries neither data nor anything to retry with.
    NoMatchError
        If every retry came back without data.
    """
    if probe is None:
        from cometlookup.transport import HttpProbe
        with HttpProbe() as owned:
            return query_radec(designation, when, site, owned, ephem, url, timeout)
    start, stop = observation_window(when)
    session = _Session(probe, site, start, stop, ephem, url, timeout)

    command = horizons_command(designation)
    outcome, text = session.send(command)
    if not outcome.ok:
        raise TransportError(f"horizons request failed: {outcome.error or outcome.status}",
                             url=url, status_code=outcome.status_code)
    if classify_horizons(text) is ResponseKind.EMPTY:
        raise ParseError("horizons empty")

    try:
        return extract_radec(text, command)
    except AmbiguousResponseError:
        logger.info("Horizons listed several matches for %r; disambiguating", designation)

    retried = False
    for tier, tokens in disambiguation_tiers(text):
        if not tokens:
            continue
        logger.debug("tier %s: %s", tier, tokens)
        retried = True
        for token in tokens:
            result = session.attempt(horizons_command(token))
            if result is not None:
                return result
        break

    if suggests_small_body(text):
        result = session.attempt(small_body_command(designation))
        if result is not None:
            return result

    if retried:
        raise NoMatchError(f"no data block for {designation!r} after retries")
    raise ParseError(f"no data block and no record id for {designation!r}")
