from __future__ import annotations

import pytest

from cometlookup.candidates import (
    Directory, Page, catalog_candidates, horizons_command, slugify, small_body_command,
)

BASE = "https://www.aerith.net/comet/catalog/"


def urls(cands):
    return [c.url for c in cands]


@pytest.mark.parametrize("name,designation", [
    ("12P", None),
    ("12P/Pons-Brooks", "12P"),
    ("Lemmon", "2025A6"),
    ("", None),
    ("", "103P"),
    ("C/2023 A3 (Tsuchinshan-ATLAS)", ""),
    ("!!!", "   "),
])
def test_candidates_are_deterministic_unique_and_end_at_root(name, designation) -> None:
    first = catalog_candidates(name, designation)
    assert first == catalog_candidates(name, designation)
    assert first
    assert len(urls(first)) == len(set(urls(first)))
    assert first[-1] == Directory(BASE)


def test_periodic_designation_padded_and_plain() -> None:
    got = urls(catalog_candidates("", "103P"))
    assert got[:4] == [
        BASE + "0103P/",
        BASE + "103P/",
        BASE + "0103P.html",
        BASE + "103P.html",
    ]


def test_nonperiodic_designation_forms_come_first() -> None:
    cands = catalog_candidates("Lemmon", "2025a6")
    assert cands[:3] == [
        Directory(BASE + "2025A6/"),
        Page(BASE + "2025A6/2025A6.html"),
        Page(BASE + "2025A6.html"),
    ]
    assert Page(BASE + "lemmon.html") in cands


def test_periodic_number_taken_from_name_when_no_designation() -> None:
    got = urls(catalog_candidates("12P", None))
    assert got == [
        BASE + "0012P/",
        BASE + "12P/",
        BASE + "0012P.html",
        BASE + "12P.html",
        BASE + "12p.html",
        BASE + "12p/",
        BASE,
    ]


def test_slug_forms_follow_periodic_forms() -> None:
    got = urls(catalog_candidates("Hartley 2", "103P"))
    assert got.index(BASE + "0103P/") < got.index(BASE + "hartley2.html")
    assert got.index(BASE + "hartley2.html") + 1 == got.index(BASE + "hartley2/")


def test_directory_and_page_are_tagged() -> None:
    cands = catalog_candidates("", "103P")
    assert isinstance(cands[0], Directory)
    assert isinstance(cands[2], Page)
    assert Directory(BASE + "0103P/").year_page(2024) == BASE + "0103P/2024.html"


def test_slugify() -> None:
    assert slugify("12P/Pons-Brooks") == "12pponsbrooks"
    assert slugify("---") == ""


def test_horizons_command_forms() -> None:
    assert horizons_command(" 12P ") == "'12P'"
    assert small_body_command("12P") == "'DES=12P; CAP;'"
