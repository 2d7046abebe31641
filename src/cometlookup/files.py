"""
cometlookup.files — Reading Identifier lists and writing summaries.

Supported inputs: ``.fits``/``.fit``/``.ecsv``/``.vot`` tables, ``.csv``/``.tsv``
with a header row, and header-less text with one object per line
(``id<TAB>name[<TAB>designation]``, ``id,name[,designation]`` or just a name).
"""

from __future__ import annotations
import csv
import io
from pathlib import Path
from typing import Iterable, Optional, Sequence

from cometlookup.errors import InputError
from cometlookup.models import Identifier, ResolutionResult

#: Column names tried, in order, when none is given explicitly.
ID_COLUMNS = ("id", "ID", "comet_id", "pk")
NAME_COLUMNS = ("name", "object", "object_name", "longname", "designation")
DESIGNATION_COLUMNS = ("designation", "desig", "prov_desig", "prov_designation")

SUMMARY_FIELDS = ["id", "name", "designation", "matched_url", "magnitude_h", "source"]

_TABLE_EXTS = (".fits", ".fit", ".ecsv", ".vot", ".xml")


def _pick(columns: Sequence[str], explicit: Optional[str],
          preferred: Sequence[str], exclude: Sequence[str] = ()) -> Optional[str]:
    if explicit:
        if explicit not in columns:
            raise InputError(f"Column {explicit!r} not found; have {list(columns)}")
        return explicit
    for c in preferred:
        if c in columns and c not in exclude:
            return c
    return None


def _clean(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    text = str(value).strip()
    if text in ("", "--", "None"):
        return None
    return text


def _from_rows(rows: Iterable[dict], columns: Sequence[str], id_col, name_col,
               designation_col) -> list[Identifier]:
    name_key = _pick(columns, name_col, NAME_COLUMNS)
    if name_key is None:
        raise InputError(f"No name column among {list(columns)}")
    id_key = _pick(columns, id_col, ID_COLUMNS)
    desig_key = _pick(columns, designation_col, DESIGNATION_COLUMNS, exclude=(name_key,))

    out = []
    for row in rows:
        name = _clean(row.get(name_key))
        if name is None:
            continue
        out.append(Identifier(
            raw_id=_clean(row.get(id_key)) if id_key else None,
            name=name,
            designation=_clean(row.get(desig_key)) if desig_key else None,
        ))
    return out


def _has_header(first_line: str) -> bool:
    cells = [c.strip() for c in first_line.replace("\t", ",").split(",")]
    known = set(ID_COLUMNS) | set(NAME_COLUMNS) | set(DESIGNATION_COLUMNS)
    return any(c in known for c in cells)


def _parse_line(line: str) -> Identifier:
    if "\t" in line:
        parts = line.split("\t")
    elif "," in line:
        parts = next(csv.reader([line]))
    else:
        return Identifier(raw_id=None, name=line.strip())
    parts = [p.strip() for p in parts]
    if len(parts) == 1:
        return Identifier(raw_id=None, name=parts[0])
    desig = _clean(parts[2]) if len(parts) > 2 else None
    return Identifier(raw_id=_clean(parts[0]), name=parts[1], designation=desig)


def read_identifiers(filepath, id_col: str = "", name_col: str = "",
                     designation_col: str = "", limit: int = 0) -> list[Identifier]:
    """Load Identifiers from a table or text file.

    Parameters
    ----------
    filepath : str or Path
        Input file.
    id_col, name_col, designation_col : str, optional
        Explicit column names; otherwise picked from the preference lists.
    limit : int, optional
        Keep at most this many Identifiers (``0`` means all).

    Raises
    ------
    InputError
        If the file cannot be read or has no usable name column.
    """
    path = Path(filepath)
    ext = path.suffix.lower()

    if ext in _TABLE_EXTS:
        from astropy.table import Table
        try:
            tbl = Table.read(str(path))
        except (OSError, ValueError) as e:
            raise InputError(f"Cannot read {path}: {e}") from e
        rows = ({c: row[c] for c in tbl.colnames} for row in tbl)
        idents = _from_rows(rows, tbl.colnames, id_col, name_col, designation_col)
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read {path}: {e}") from e
        lines = [ln for ln in text.splitlines() if ln.strip()]
        if lines and (name_col or _has_header(lines[0])):
            sep = "\t" if (ext == ".tsv" or "\t" in lines[0]) else ","
            reader = csv.DictReader(io.StringIO("\n".join(lines)), delimiter=sep)
            columns = [c.strip() for c in (reader.fieldnames or [])]
            reader.fieldnames = columns
            idents = _from_rows(reader, columns, id_col, name_col, designation_col)
        else:
            idents = [_parse_line(ln.strip()) for ln in lines]

    return idents[:limit] if limit else idents


def result_to_dict(result: ResolutionResult) -> dict:
    """Flat summary row for one result."""
    ident = result.identifier
    url = result.matched_url
    if result.source == "sbdb":
        url = f"SBDB:{result.sbdb_query or ident.query}"
    return {
        "id": ident.raw_id or "",
        "name": ident.name,
        "designation": ident.designation or "",
        "matched_url": url or "",
        "magnitude_h": "" if result.magnitude_h is None else result.magnitude_h,
        "source": result.source,
    }


def write_summary(results: Iterable[ResolutionResult], filepath) -> int:
    """Write results as CSV. Returns the number of rows written."""
    count = 0
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=SUMMARY_FIELDS)
        writer.writeheader()
        for r in results:
            writer.writerow(result_to_dict(r))
            count += 1
    return count
