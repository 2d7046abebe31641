"""
cometlookup.sbdb — Absolute magnitude from the JPL Small-Body Database.

Only used when no catalog page could be found.  Every failure here
(network, non-JSON reply, no ``H`` anywhere) simply yields ``None``.

References
----------
https://ssd-api.jpl.nasa.gov/doc/sbdb.html
"""

from __future__ import annotations
import json
import logging
from typing import Any, Optional

from cometlookup.config import SBDB_URL
from cometlookup.models import SbdbResult

logger = logging.getLogger(__name__)

#: Default per-request timeout for SBDB lookups (seconds).
SBDB_TIMEOUT = 10.0


def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _from_phys_par(phys_par: Any) -> Optional[float]:
    # Either {"H": ..} or the API's list of {"name": "H", "value": ..}
    if isinstance(phys_par, dict):
        for key in ("H", "h"):
            if key in phys_par:
                return _as_float(phys_par[key])
    if isinstance(phys_par, list):
        for entry in phys_par:
            if isinstance(entry, dict) and entry.get("name") in ("H", "h"):
                return _as_float(entry.get("value"))
    return None


def find_magnitude(payload: Any) -> Optional[float]:
    """Pull ``H`` out of an SBDB reply.

    ``phys_par`` is checked first, then every top-level object for an
    ``H`` key.
    """
    if not isinstance(payload, dict):
        return None
    h = _from_phys_par(payload.get("phys_par"))
    if h is not None:
        return h
    for value in payload.values():
        if isinstance(value, dict) and "H" in value:
            h = _as_float(value["H"])
            if h is not None:
                return h
    return None


def lookup_magnitude(query: str, probe=None, url: str = SBDB_URL,
                     timeout: float = SBDB_TIMEOUT) -> Optional[SbdbResult]:
    """Query SBDB by designation (or name) and return its ``H``, if any."""
    q = (query or "").strip()
    if not q:
        return None
    if probe is None:
        from cometlookup.transport import HttpProbe
        with HttpProbe() as owned:
            return lookup_magnitude(q, owned, url, timeout)

    outcome = probe.get(url, params={"des": q, "phys-par": "1"}, timeout=timeout)
    if not outcome.ok:
        logger.info("SBDB lookup for %r failed: %s", q, outcome.error or outcome.status)
        return None
    try:
        payload = json.loads(outcome.body)
    except ValueError:
        logger.warning("SBDB returned non-JSON for %r", q)
        return None

    h = find_magnitude(payload)
    if h is None:
        logger.info("SBDB has no H for %r", q)
        return None
    return SbdbResult(magnitude_h=h, query=q)
