"""
cometlookup.coordinates — Sexagesimal parsing and RA/Dec column detection.

Horizons CSV rows carry positions as ``"HH MM SS.ff"`` / ``"+DD MM SS.f"``
strings in columns whose order depends on the requested quantities.
:func:`locate_radec` picks the right pair with a short, ordered list of
named matchers; :func:`hms_to_hours` and :func:`dms_to_deg` turn them
into numbers.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import astropy.units as u
from astropy.coordinates import Angle

#: ``H[:\s]M[:\s]S`` at the start of a field.
RA_PATTERN = re.compile(r"^\s*\d{1,2}[:\s]\d{1,2}[:\s]\d{1,2}(\.\d+)?")
#: Signed ``±D[:\s]M[:\s]S`` at the start of a field.
DEC_PATTERN = re.compile(r"^[\+\-]\d{1,3}[:\s]\d{1,2}[:\s]\d{1,2}(\.\d+)?")

#: Horizons' apparent RA/Dec pair in CSV observer tables.
APPARENT_RA_COLUMN = 5
APPARENT_DEC_COLUMN = 6


def _angle(text: str, unit) -> Angle:
    s = text.strip()
    if not s:
        raise ValueError("Empty sexagesimal string")
    try:
        return Angle(s, unit=unit)
    except (ValueError, u.UnitsError) as e:
        raise ValueError(f"Cannot parse angle {text!r}: {e}") from e


def hms_to_hours(text: str) -> float:
    """Convert ``"HH:MM:SS.s"`` or ``"HH MM SS.s"`` to decimal hours.

    Missing minutes/seconds count as zero; a string without separators is
    taken as already decimal.

    >>> hms_to_hours("12:30:00")
    12.5
    """
    return float(_angle(text, u.hourangle).hour)


def dms_to_deg(text: str) -> float:
    """Convert ``"±DD:MM:SS.s"`` or ``"±DD MM SS.s"`` to signed decimal degrees.

    The sign applies to the whole value, so ``"-00 30 00"`` is ``-0.5``.

    >>> dms_to_deg("-45:30:00")
    -45.5
    """
    return float(_angle(text, u.deg).degree)


# ---------------------------------------------------------------------------
# RA/Dec field detection
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldMatcher:
    """One named rule for picking ``(ra_index, dec_index)`` out of a CSV row.

    ``locate`` returns ``None`` when the rule does not apply.
    """
    name: str
    locate: Callable[[Sequence[str]], Optional[tuple[int, int]]]


def _first_index(fields: Sequence[str], pattern: re.Pattern) -> int:
    for i, f in enumerate(fields):
        if pattern.match(f):
            return i
    return -1


def _apparent_pair(fields: Sequence[str]) -> Optional[tuple[int, int]]:
    if len(fields) > APPARENT_DEC_COLUMN:
        if (RA_PATTERN.match(fields[APPARENT_RA_COLUMN])
                and DEC_PATTERN.match(fields[APPARENT_DEC_COLUMN])):
            return APPARENT_RA_COLUMN, APPARENT_DEC_COLUMN
    return None


def _pattern_search(fields: Sequence[str]) -> Optional[tuple[int, int]]:
    ra = _first_index(fields, RA_PATTERN)
    dec = _first_index(fields, DEC_PATTERN)
    if ra < 0 and dec < 0:
        return None
    fixed = _fixed_columns(fields)
    return (ra if ra >= 0 else fixed[0]), (dec if dec >= 0 else fixed[1])


def _fixed_columns(fields: Sequence[str]) -> tuple[int, int]:
    n = len(fields)
    ra = 5 if n > 5 else (3 if n > 3 else 0)
    dec = 6 if n > 6 else (4 if n > 4 else 1)
    return ra, dec


#: Tried in order; the first rule that applies wins.
FIELD_MATCHERS: tuple[FieldMatcher, ...] = (
    FieldMatcher("apparent-columns", _apparent_pair),
    FieldMatcher("pattern-search", _pattern_search),
    FieldMatcher("fixed-columns", _fixed_columns),
)


def locate_radec(fields: Sequence[str]) -> tuple[str, str, str]:
    """Return ``(raw_ra, raw_dec, matcher_name)`` for a split CSV row.

    Fields outside the row come back as empty strings.
    """
    for matcher in FIELD_MATCHERS:
        found = matcher.locate(fields)
        if found is None:
            continue
        ra_i, dec_i = found
        ra = fields[ra_i] if ra_i < len(fields) else ""
        dec = fields[dec_i] if dec_i < len(fields) else ""
        return ra, dec, matcher.name
    return "", "", "none"
