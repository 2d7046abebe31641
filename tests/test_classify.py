from __future__ import annotations

import json

from cometlookup import classify
from cometlookup.classify import ResponseKind
from cometlookup.models import AmbiguousRecord

INDEX_REPLY = """\
*******************************************************************************
JPL/DASTCOM            Small-body Index Search Results
 Comet AND asteroid index search:

    DES = 12P;

  Matching small-bodies:

    Record #  Epoch-yr  >MATCH DESIG<  Primary Desig  Name
    --------  --------  -------------  -------------  -------------------------
    90000100    2010    12P            12P             Pons-Brooks
    90000224    2024    12P            12P             Pons-Brooks
    90000150    1954    12P            12P             Pons-Brooks

 (3 matches. To SELECT, enter record # (integer), followed by semi-colon.)
*******************************************************************************
"""

CHOICE_REPLY = """\
Multiple major-bodies match string "MARS*"

  1) 1999 Mars Barycenter      499
  2) 2010 Phobos             401
"""


def test_unwrap_prefers_block_string_anywhere() -> None:
    body = json.dumps({"signature": {"v": "1.2"},
                       "nested": [{"x": "header\n$$SOE\nrow\n$$EOE\n"}],
                       "result": "other"})
    assert "$$SOE" in classify.unwrap_horizons(body)


def test_unwrap_falls_back_to_result_then_raw() -> None:
    assert classify.unwrap_horizons(json.dumps({"result": "text"})) == "text"
    assert classify.unwrap_horizons(json.dumps({"data": "d"})) == "d"
    assert classify.unwrap_horizons("plain text") == "plain text"
    assert classify.unwrap_horizons('{"error": 1}') == '{"error": 1}'


def test_classify_horizons() -> None:
    assert classify.classify_horizons("") is ResponseKind.EMPTY
    assert classify.classify_horizons("x\n$$SOE\n1,2\n$$EOE") is ResponseKind.DIRECT_HIT
    assert classify.classify_horizons(INDEX_REPLY) is ResponseKind.AMBIGUOUS


def test_epoch_records_ranked_most_recent_first() -> None:
    records = classify.epoch_records(INDEX_REPLY)
    assert records == [
        AmbiguousRecord("90000224", 2024),
        AmbiguousRecord("90000100", 2010),
        AmbiguousRecord("90000150", 1954),
    ]


def test_choice_tokens_skip_years() -> None:
    assert classify.choice_tokens(CHOICE_REPLY) == ["499"]


def test_numeric_scan_skips_years() -> None:
    assert classify.numeric_tokens("Epoch 2024 and 1999, object 90000224 ok") == ["90000224"]
    assert classify.numeric_tokens("only 2024 and 1850") == []


def test_tiers_in_priority_order() -> None:
    tiers = list(classify.disambiguation_tiers(INDEX_REPLY))
    assert [name for name, _ in tiers] == ["epoch-records", "numbered-choice", "numeric-scan"]
    assert tiers[0][1][0] == "90000224"


def test_small_body_markers() -> None:
    assert classify.suggests_small_body("Use a PRECOMPUTED trajectory")
    assert classify.suggests_small_body("try DES=12P;")
    assert classify.suggests_small_body("There are two trajectories for this object")
    assert not classify.suggests_small_body("No matches found.")


def test_year_links_sorted_descending() -> None:
    html = """
    <html><body>
      <a href="2023.html">2023</a>
      <a href="./2024.html">2024</a>
      <a href="1999.html">1999</a>
      <a href="2024.html">again</a>
      <a href="index.html">index</a>
      <a href="../2020.html">parent</a>
    </body></html>
    """
    assert classify.year_links(html) == [2024, 2023, 1999]
