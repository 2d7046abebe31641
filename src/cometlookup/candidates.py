"""
cometlookup.candidates — Ordered guesses for where an object lives.

The aerith.net comet catalog has no search; pages are found by trying
the URL conventions it has used over the years.  Horizons is queried by
free-text ``COMMAND`` tokens.  Both guess lists are built here without
touching the network.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from cometlookup.config import CATALOG_BASE

# Non-periodic provisional designation, e.g. 2025A6
_NONPERIODIC = re.compile(r"^\d{4}[A-Z]\d+$")
# Periodic number + type letter, e.g. 103P
_PERIODIC = re.compile(r"^(\d+)([A-Za-z])$")
# Same, found anywhere inside a free-text name
_PERIODIC_IN_NAME = re.compile(r"(\d+)\s*([A-Za-z])")


@dataclass(frozen=True)
class Directory:
    """A catalog directory; its listing may point at per-apparition year pages."""
    url: str

    def year_page(self, year: Union[int, str]) -> str:
        return f"{self.url.rstrip('/')}/{year}.html"

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class Page:
    """A flat catalog page."""
    url: str

    def __str__(self) -> str:
        return self.url


Candidate = Union[Directory, Page]


def _dedupe(candidates: Iterable[Candidate]) -> list[Candidate]:
    seen: set[str] = set()
    out = []
    for c in candidates:
        if c.url and c.url not in seen:
            seen.add(c.url)
            out.append(c)
    return out


def _periodic_forms(base: str, number: int, kind: str) -> list[Candidate]:
    padded = f"{number:04d}{kind.upper()}"
    plain = f"{number}{kind.upper()}"
    return [
        Directory(f"{base}{padded}/"),
        Directory(f"{base}{plain}/"),
        Page(f"{base}{padded}.html"),
        Page(f"{base}{plain}.html"),
    ]


def slugify(name: str) -> str:
    """Lower-case *name* and strip everything but ``[a-z0-9]``."""
    return re.sub(r"[^a-z0-9]", "", name.lower())


def catalog_candidates(name: str, designation: Optional[str] = None,
                       base: str = CATALOG_BASE) -> list[Candidate]:
    """Generate catalog URLs to try for an object, most specific first.

    Rules, in priority order:

    1. Non-periodic designation (``2025A6``): ``2025A6/``,
       ``2025A6/2025A6.html``, ``2025A6.html``.
    2. Periodic designation (``103P``), or the first ``<number><letter>``
       found in *name*: zero-padded and plain forms, each as a directory
       and as a flat page.
    3. Name slug (``"Pons-Brooks"`` → ``ponsbrooks``): flat page, then
       directory.
    4. The catalog root, always last.

    Exact duplicates are dropped, keeping the first occurrence.

    Parameters
    ----------
    name : str
        Free-text object name (may be empty).
    designation : str, optional
        Provisional or periodic designation.
    base : str, optional
        Catalog root URL, with trailing slash.

    Returns
    -------
    list[Directory | Page]
        Never empty; the last element is ``Directory(base)``.

    Examples
    --------
    >>> [c.url for c in catalog_candidates("", "103P")][:2]
    ['https://www.aerith.net/comet/catalog/0103P/', 'https://www.aerith.net/comet/catalog/103P/']
    """
    name = name or ""
    desig = (designation or "").strip().upper()
    candidates: list[Candidate] = []

    if desig and _NONPERIODIC.match(desig):
        candidates += [
            Directory(f"{base}{desig}/"),
            Page(f"{base}{desig}/{desig}.html"),
            Page(f"{base}{desig}.html"),
        ]

    m = _PERIODIC.match(desig) if desig else None
    if m is None:
        m = _PERIODIC_IN_NAME.search(name)
    if m is not None:
        candidates += _periodic_forms(base, int(m.group(1)), m.group(2))

    slug = slugify(name)
    if slug:
        candidates += [Page(f"{base}{slug}.html"), Directory(f"{base}{slug}/")]

    candidates.append(Directory(base))
    return _dedupe(candidates)


# ---------------------------------------------------------------------------
# Horizons command forms
# ---------------------------------------------------------------------------

def horizons_command(token: str) -> str:
    """Quote *token* as a Horizons ``COMMAND`` value."""
    return f"'{token.strip()}'"


def small_body_command(designation: str) -> str:
    """Explicit small-body lookup, closest apparition first."""
    return f"'DES={designation.strip()}; CAP;'"
