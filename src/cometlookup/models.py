"""
cometlookup.models — Value objects passed between the resolvers.

Everything here is built per Identifier and dropped once its
:class:`ResolutionResult` has been recorded.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Optional

#: Where a :class:`ResolutionResult` got its answer from.
Source = Literal["catalog", "sbdb", "none"]


@dataclass(frozen=True)
class Identifier:
    """One object to resolve, as supplied by the input source.

    Attributes
    ----------
    raw_id : str, optional
        Row identifier from the input (database key, file column).
    name : str
        Free-text name, e.g. ``"12P/Pons-Brooks"``.
    designation : str, optional
        Provisional or periodic designation, e.g. ``"2025A6"`` or ``"103P"``.
    """
    raw_id: Optional[str]
    name: str
    designation: Optional[str] = None

    @property
    def query(self) -> str:
        """Designation when present, otherwise the name."""
        return (self.designation or "").strip() or self.name.strip()

    def label(self) -> str:
        desig = f" ({self.designation})" if self.designation else ""
        return f"[{self.raw_id if self.raw_id is not None else '-'}] {self.name}{desig}"


@dataclass(frozen=True)
class AmbiguousRecord:
    """A ``(record, epoch year)`` row from a Horizons index listing."""
    record: str
    epoch_year: int


@dataclass(frozen=True)
class EphemerisResult:
    """Apparent RA/Dec returned by Horizons for one designation."""
    ra_hours: float
    dec_degrees: float
    raw_ra: str
    raw_dec: str
    used_query: str

    def to_dict(self) -> dict:
        return {
            "ra_hours": self.ra_hours,
            "dec_deg": self.dec_degrees,
            "raw_ra": self.raw_ra,
            "raw_dec": self.raw_dec,
            "used_command": self.used_query,
        }

    def to_skycoord(self):
        """Return the position as an ICRS :class:`~astropy.coordinates.SkyCoord`."""
        from astropy.coordinates import SkyCoord
        import astropy.units as u
        return SkyCoord(ra=self.ra_hours * u.hourangle, dec=self.dec_degrees * u.deg)


@dataclass(frozen=True)
class CatalogMatch:
    """A live catalog page and the body it served."""
    url: str
    body: str = field(default="", repr=False)


@dataclass(frozen=True)
class CometPhotometry:
    """Photometric parameters scraped from a catalog page."""
    h: Optional[float] = None
    n: Optional[float] = None
    phase_coeff: Optional[float] = None

    def is_empty(self) -> bool:
        return self.h is None and self.n is None and self.phase_coeff is None


@dataclass(frozen=True)
class SbdbResult:
    """Absolute magnitude found in the Small-Body Database."""
    magnitude_h: float
    query: str


@dataclass(frozen=True)
class ResolutionResult:
    """Final outcome for one :class:`Identifier`.

    ``source`` is ``"none"`` exactly when neither ``matched_url`` nor
    ``magnitude_h`` is set; construction fails otherwise.
    """
    identifier: Identifier
    matched_url: Optional[str] = None
    magnitude_h: Optional[float] = None
    source: Source = "none"
    sbdb_query: Optional[str] = None
    photometry: Optional[CometPhotometry] = None

    def __post_init__(self):
        empty = self.matched_url is None and self.magnitude_h is None
        if empty != (self.source == "none"):
            raise ValueError(
                f"source={self.source!r} inconsistent with "
                f"matched_url={self.matched_url!r}, magnitude_h={self.magnitude_h!r}"
            )

    @property
    def matched(self) -> bool:
        return self.source != "none"
