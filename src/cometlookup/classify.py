"""
cometlookup.classify — Make sense of what the remote sources sent back.

Horizons answers a ``COMMAND`` with one of three things: an ephemeris
(data between ``$$SOE`` and ``$$EOE``), a human-oriented list of matching
objects, or an error message.  The catalog answers a directory request
with an HTML listing whose year pages are the real targets.  The
functions here classify and mine those payloads; none of them touch the
network.
"""

from __future__ import annotations
import enum
import json
import re
from typing import Any, Optional

from bs4 import BeautifulSoup

from cometlookup.models import AmbiguousRecord

_DATA_BLOCK = re.compile(r"\$\$SOE([\s\S]*?)\$\$EOE")
_EPOCH_ROW = re.compile(r"^\s*(\d{4,9})\s+(\d{4})\s+", re.MULTILINE)
_CHOICE_LINE = re.compile(r"^\s*\d+\)\s*(.+)$", re.MULTILINE)
_NUMERIC_TOKEN = re.compile(r"\b(\d{1,9})\b")
_YEAR_LINK = re.compile(r"^(?:\./)?(\d{4})\.html$")

#: Numeric tokens in this range read as calendar years, not record numbers.
YEAR_RANGE = (1800, 2200)

#: Phrases suggesting Horizons can serve a precomputed small-body trajectory.
SMALL_BODY_MARKERS_CI = ("spk-based ephemeris", "precomputed", "multiple trajectories")
SMALL_BODY_MARKERS = ("DES=", "There are two trajectories")


class ResponseKind(enum.Enum):
    """Coarse classification of a Horizons reply."""
    DIRECT_HIT = "direct_hit"
    AMBIGUOUS = "ambiguous"
    EMPTY = "empty"


# ---------------------------------------------------------------------------
# Horizons
# ---------------------------------------------------------------------------

def _find_block_string(item: Any) -> Optional[str]:
    if isinstance(item, str):
        return item if "$$SOE" in item else None
    if isinstance(item, dict):
        item = list(item.values())
    if isinstance(item, list):
        for value in item:
            found = _find_block_string(value)
            if found is not None:
                return found
    return None


def unwrap_horizons(body: str) -> str:
    """Return the text part of a Horizons reply.

    JSON replies are searched for the first string containing ``$$SOE``,
    then the ``result`` and ``data`` strings.  Anything else is returned
    as-is so the text heuristics can still run on it.
    """
    try:
        decoded = json.loads(body)
    except (ValueError, TypeError):
        return body
    if not isinstance(decoded, (dict, list)):
        return body
    block = _find_block_string(decoded)
    if block is not None:
        return block
    if isinstance(decoded, dict):
        for key in ("result", "data"):
            if isinstance(decoded.get(key), str):
                return decoded[key]
    return body


def data_block(text: str) -> Optional[str]:
    """Contents between ``$$SOE`` and ``$$EOE``, or ``None``."""
    m = _DATA_BLOCK.search(text or "")
    return m.group(1) if m else None


def classify_horizons(text: str) -> ResponseKind:
    if not text or not text.strip():
        return ResponseKind.EMPTY
    if data_block(text) is not None:
        return ResponseKind.DIRECT_HIT
    return ResponseKind.AMBIGUOUS


def _is_year(token: str) -> bool:
    return YEAR_RANGE[0] <= int(token) <= YEAR_RANGE[1]


def epoch_records(text: str) -> list[AmbiguousRecord]:
    """``<record> <epoch-year>`` rows, most recent epoch first.

    Ties keep their listing order.
    """
    records = [AmbiguousRecord(m.group(1), int(m.group(2)))
               for m in _EPOCH_ROW.finditer(text)]
    return sorted(records, key=lambda r: r.epoch_year, reverse=True)


def choice_tokens(text: str) -> list[str]:
    """First non-year number from the numbered ``N) ...`` choice lines."""
    for m in _CHOICE_LINE.finditer(text):
        for tok in _NUMERIC_TOKEN.findall(m.group(1)):
            if not _is_year(tok):
                return [tok]
    return []


def numeric_tokens(text: str) -> list[str]:
    """First non-year number anywhere in the reply."""
    for tok in _NUMERIC_TOKEN.findall(text):
        if not _is_year(tok):
            return [tok]
    return []


def disambiguation_tiers(text: str):
    """Yield ``(tier_name, tokens)`` in priority order.

    Each tier is computed lazily; callers stop at the first non-empty one.
    """
    yield "epoch-records", [r.record for r in epoch_records(text)]
    yield "numbered-choice", choice_tokens(text)
    yield "numeric-scan", numeric_tokens(text)


def suggests_small_body(text: str) -> bool:
    lowered = text.lower()
    return (any(marker in lowered for marker in SMALL_BODY_MARKERS_CI)
            or any(marker in text for marker in SMALL_BODY_MARKERS))


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

def year_links(html: str) -> list[int]:
    """Years linked as ``YYYY.html`` (or ``./YYYY.html``), newest first, unique."""
    soup = BeautifulSoup(html, "html.parser")
    years = set()
    for a in soup.find_all("a", href=True):
        m = _YEAR_LINK.match(a["href"].strip())
        if m:
            years.add(int(m.group(1)))
    return sorted(years, reverse=True)
