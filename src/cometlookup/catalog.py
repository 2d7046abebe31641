"""
cometlookup.catalog — Find an object's page in the aerith.net comet catalog.

Candidates from :func:`~cometlookup.candidates.catalog_candidates` are
probed in order.  A directory that answers is searched for year pages
(``2024.html``, ``2023.html``, …); the newest live one wins, otherwise
the directory itself is the match.  404s and transport errors only skip
a candidate.
"""

from __future__ import annotations
import logging
import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from cometlookup.candidates import Candidate, Directory, catalog_candidates
from cometlookup.classify import year_links
from cometlookup.config import CATALOG_BASE
from cometlookup.errors import NoMatchError
from cometlookup.models import CatalogMatch, CometPhotometry

logger = logging.getLogger(__name__)

#: Default per-probe timeout for catalog pages (seconds).
CATALOG_TIMEOUT = 10.0


def _expand_directory(directory: Directory, listing: str, probe,
                      timeout: float) -> CatalogMatch:
    """Pick the newest live year page below *directory*, else the directory."""
    for year in year_links(listing):
        url = directory.year_page(year)
        outcome = probe.get(url, timeout=timeout)
        if outcome.ok:
            logger.debug("year page %s is live", url)
            return CatalogMatch(url, outcome.body)
        logger.debug("year page %s skipped (%s)", url, outcome.status)
    return CatalogMatch(directory.url, listing)


def probe_candidates(candidates: Iterable[Candidate], probe,
                     timeout: float = CATALOG_TIMEOUT) -> Optional[CatalogMatch]:
    """Probe *candidates* in order and return the first match, or ``None``."""
    for cand in candidates:
        outcome = probe.get(cand.url, timeout=timeout)
        if outcome.status == "not_found":
            continue
        if not outcome.ok:
            logger.debug("skipping %s: %s", cand.url, outcome.error)
            continue
        if isinstance(cand, Directory):
            return _expand_directory(cand, outcome.body, probe, timeout)
        return CatalogMatch(cand.url, outcome.body)
    return None


def locate_catalog_page(name: str, designation: Optional[str] = None, probe=None,
                        base: str = CATALOG_BASE,
                        timeout: float = CATALOG_TIMEOUT) -> CatalogMatch:
    """Resolve a name/designation to a live catalog page.

    Parameters
    ----------
    name : str
        Object name.
    designation : str, optional
        Provisional or periodic designation.
    probe : HttpProbe
        Anything with ``get(url, timeout=...)`` returning a
        :class:`~cometlookup.transport.ProbeOutcome`.
    base : str, optional
        Catalog root.
    timeout : float, optional
        Per-request timeout in seconds.

    Returns
    -------
    CatalogMatch

    Raises
    ------
    NoMatchError
        If no candidate answered.
    """
    if probe is None:
        from cometlookup.transport import HttpProbe
        with HttpProbe() as owned:
            return locate_catalog_page(name, designation, owned, base, timeout)
    match = probe_candidates(catalog_candidates(name, designation, base), probe, timeout)
    if match is None:
        raise NoMatchError(f"No catalog page for {name!r} ({designation or '-'})")
    logger.info("catalog match for %r: %s", name, match.url)
    return match


# ---------------------------------------------------------------------------
# Photometry
# ---------------------------------------------------------------------------

_NUMBER = r"([0-9]+\.?[0-9]*)"
_H_RE = re.compile(r"\bH\s*=\s*" + _NUMBER, re.IGNORECASE)
_N_RE = re.compile(r"\bn\s*=\s*" + _NUMBER, re.IGNORECASE)
_PHASE_RE = re.compile(r"phase.*?" + _NUMBER, re.IGNORECASE)


def parse_photometry(html: str) -> CometPhotometry:
    """Scrape ``H = …``, ``n = …`` and a phase coefficient from a catalog page.

    Each text node is checked on its own; when several nodes match, the
    last one wins.
    """
    soup = BeautifulSoup(html, "html.parser")
    h = n = phase = None
    for node in soup.find_all(string=True):
        text = node.strip()
        if not text:
            continue
        m = _H_RE.search(text)
        if m:
            h = float(m.group(1))
        m = _N_RE.search(text)
        if m:
            n = float(m.group(1))
        m = _PHASE_RE.search(text)
        if m:
            phase = float(m.group(1))
    return CometPhotometry(h=h, n=n, phase_coeff=phase)
