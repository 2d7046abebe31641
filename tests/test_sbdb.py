from __future__ import annotations

import json

from cometlookup import sbdb
from cometlookup.transport import ProbeOutcome


def test_phys_par_dict() -> None:
    assert sbdb.find_magnitude({"phys_par": {"H": "10.5"}}) == 10.5
    assert sbdb.find_magnitude({"phys_par": {"h": 3}}) == 3.0


def test_phys_par_list_as_served_by_api() -> None:
    payload = {"object": {"fullname": "12P/Pons-Brooks"},
               "phys_par": [{"name": "M1", "value": "5.0"}, {"name": "H", "value": "11.2"}]}
    assert sbdb.find_magnitude(payload) == 11.2


def test_shallow_scan_for_any_h_field() -> None:
    assert sbdb.find_magnitude({"object": {"des": "x"}, "extra": {"H": 9.1}}) == 9.1


def test_no_h_anywhere() -> None:
    assert sbdb.find_magnitude({"object": {"des": "x"}}) is None
    assert sbdb.find_magnitude(["not", "a", "dict"]) is None
    assert sbdb.find_magnitude({"phys_par": {"H": "n/a"}}) is None


def test_lookup_returns_query_and_h(stub_probe) -> None:
    probe = stub_probe(sbdb=json.dumps({"phys_par": {"H": 10.5}}))
    found = sbdb.lookup_magnitude(" 12P ", probe)
    assert found.magnitude_h == 10.5
    assert found.query == "12P"
    assert probe.urls == [sbdb.SBDB_URL + "?des=12P"]


def test_lookup_failures_yield_none(stub_probe) -> None:
    assert sbdb.lookup_magnitude("12P", stub_probe()) is None
    assert sbdb.lookup_magnitude("12P", stub_probe(sbdb="<html>oops</html>")) is None
    failed = ProbeOutcome.failure(sbdb.SBDB_URL, "SSLError")
    assert sbdb.lookup_magnitude("12P", stub_probe(sbdb=failed)) is None
    assert sbdb.lookup_magnitude("   ", stub_probe()) is None
