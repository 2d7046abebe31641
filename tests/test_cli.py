from __future__ import annotations

import json

from click.testing import CliRunner

from cometlookup import cli
from cometlookup.errors import ParseError
from cometlookup.models import EphemerisResult, ResolutionResult


def test_candidates_command() -> None:
    result = CliRunner().invoke(cli.main, ["candidates", "-d", "103P", "Hartley", "2"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "dir   https://www.aerith.net/comet/catalog/0103P/"
    assert lines[-1] == "dir   https://www.aerith.net/comet/catalog/"


def test_batch_writes_summary_and_reports(tmp_path, monkeypatch) -> None:
    src = tmp_path / "comets.txt"
    src.write_text("1\t12P\n2\tzzz\n")
    out = tmp_path / "out.csv"

    def fake_resolve(ident, probe=None, config=None, photometry=False):
        if ident.name == "12P":
            return ResolutionResult(ident, matched_url="https://x/12P/", source="catalog")
        return ResolutionResult(ident)

    monkeypatch.setattr("cometlookup.api.resolve_identifier", fake_resolve)
    result = CliRunner().invoke(cli.main, ["batch", str(src), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "MATCH: [1] 12P -> https://x/12P/" in result.output
    assert "NO MATCH: [2] zzz" in result.output
    assert "Matched 1 of 2 comets." in result.output
    assert out.read_text().startswith("id,name,designation,matched_url,magnitude_h,source")


def test_batch_unreadable_input_exits_2(tmp_path) -> None:
    result = CliRunner().invoke(cli.main, ["batch", str(tmp_path / "missing.txt")])
    assert result.exit_code == 2


def test_radec_prints_json(monkeypatch) -> None:
    def fake_radec(designation, when, **kwargs):
        return EphemerisResult(12.5, -45.5, "12 30 00", "-45 30 00", "'12P'")

    monkeypatch.setattr("cometlookup.api.radec", fake_radec)
    result = CliRunner().invoke(cli.main, ["radec", "12P", "2025-11-18 16:08", "4.8", "49.3", "130"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "ra_hours": 12.5, "dec_deg": -45.5, "raw_ra": "12 30 00",
        "raw_dec": "-45 30 00", "used_command": "'12P'",
    }


def test_radec_error_record(monkeypatch) -> None:
    def failing(designation, when, **kwargs):
        raise ParseError("no data block and no record id")

    monkeypatch.setattr("cometlookup.api.radec", failing)
    result = CliRunner().invoke(cli.main, ["radec", "x", "2025-11-18 16:08", "0", "0", "0"])
    assert result.exit_code == 1
    assert json.loads(result.output) == {"error": "no data block and no record id"}


def test_sbdb_command_without_h(monkeypatch) -> None:
    monkeypatch.setattr("cometlookup.api.magnitude", lambda q, config=None: None)
    result = CliRunner().invoke(cli.main, ["sbdb", "12P"])
    assert result.exit_code == 1


def test_no_verify_flag_disables_tls_checks(monkeypatch) -> None:
    seen = {}

    def fake_magnitude(q, config=None):
        seen["verify"] = config.verify
        return 10.5

    monkeypatch.setattr("cometlookup.api.magnitude", fake_magnitude)
    monkeypatch.setenv("AERITH_VERIFY", "/etc/ssl/ca.pem")
    result = CliRunner().invoke(cli.main, ["--no-verify", "sbdb", "12P"])
    assert result.exit_code == 0
    assert seen["verify"] is False
    assert "H=10.5" in result.output
