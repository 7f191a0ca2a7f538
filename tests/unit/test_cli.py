"""
Unit tests for hydrostab/cli/

Runs the entry point in-process and inspects the JSON output.
"""

import json

import pytest

from hydrostab.cli import CommandResult, OutputFormat, build_parser, format_output, main


def _run_json(capsys, *argv):
    exit_code = main(["--format", "json", *argv])
    payload = json.loads(capsys.readouterr().out)
    return exit_code, payload


class TestHydrostaticsCommand:
    """hydrostab hydrostatics"""

    def test_barge_default_draft(self, capsys):
        exit_code, payload = _run_json(capsys, "hydrostatics", "--hull", "barge")
        assert exit_code == 0
        assert payload["success"] is True
        assert payload["data"]["draft_m"] == 5.0
        assert payload["data"]["volume_m3"] == pytest.approx(10000.0)

    def test_kg_and_heel(self, capsys):
        exit_code, payload = _run_json(
            capsys, "hydrostatics", "--draft", "5", "--kg", "3", "--heel", "5",
        )
        assert exit_code == 0
        assert payload["data"]["gmt_m"] == pytest.approx(6.1667, abs=1e-4)
        assert payload["data"]["tcb_m"] > 0

    def test_draft_out_of_range(self, capsys):
        exit_code, payload = _run_json(capsys, "hydrostatics", "--draft", "20")
        assert exit_code == 2
        assert payload["success"] is False
        assert payload["error"]["code"] == "GEOM_002"

    def test_explicit_density(self, capsys):
        exit_code, payload = _run_json(capsys, "hydrostatics", "--rho", "1000")
        assert exit_code == 0
        assert payload["data"]["rho_kg_m3"] == 1000.0
        assert payload["data"]["displacement_kg"] == pytest.approx(1.0e7)

    @pytest.mark.parametrize("rho", ["0", "-1025"])
    def test_non_positive_density_rejected(self, capsys, rho):
        exit_code, payload = _run_json(capsys, "hydrostatics", "--rho", rho)
        assert exit_code == 2
        assert payload["success"] is False
        assert "density" in payload["error"]["message"]

    def test_text_output(self, capsys):
        assert main(["hydrostatics", "--hull", "wigley"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Hydrostatics for Wigley")
        assert "volume_m3:" in out


class TestTableCommand:
    """hydrostab table"""

    def test_wigley_table(self, capsys):
        exit_code, payload = _run_json(
            capsys, "table", "--hull", "wigley", "--min-draft", "1", "--points", "5",
        )
        assert exit_code == 0
        rows = payload["data"]["rows"]
        assert len(rows) == 5
        assert rows[-1]["draft_m"] == 6.25
        volumes = [r["volume_m3"] for r in rows]
        assert volumes == sorted(volumes)

    def test_invalid_points(self, capsys):
        exit_code, payload = _run_json(capsys, "table", "--points", "1")
        assert exit_code == 2
        assert "points" in payload["error"]["message"]

    def test_inverted_draft_range(self, capsys):
        exit_code, payload = _run_json(capsys, "table", "--min-draft", "6", "--max-draft", "2")
        assert exit_code == 2
        assert "greater than min draft" in payload["error"]["message"]


class TestStabilityCommand:
    """hydrostab stability"""

    def test_low_kg_passes(self, capsys):
        exit_code, payload = _run_json(capsys, "stability", "--kg", "3")
        assert exit_code == 0
        criteria = payload["data"]["criteria"]
        assert criteria["all_criteria_passed"] is True
        assert criteria["total_count"] == 6
        assert len(payload["data"]["curve"]["points"]) == 61

    def test_high_kg_fails_criteria(self, capsys):
        exit_code, payload = _run_json(capsys, "stability", "--kg", "12")
        assert exit_code == 3
        assert payload["success"] is True
        assert payload["data"]["criteria"]["all_criteria_passed"] is False

    def test_missing_kg(self, capsys):
        exit_code, payload = _run_json(capsys, "stability")
        assert exit_code == 2
        assert payload["error"]["code"] == "STAB_003"

    def test_unknown_method(self, capsys):
        exit_code, payload = _run_json(capsys, "stability", "--kg", "3", "--method", "Krylov")
        assert exit_code == 2
        assert payload["error"]["code"] == "STAB_002"

    def test_flooding_angle(self, capsys):
        exit_code, payload = _run_json(
            capsys, "stability", "--kg", "3", "--max-angle", "40", "--flooding-angle", "35",
        )
        assert exit_code == 0
        names = [c["name"] for c in payload["data"]["criteria"]["criteria"]]
        assert names[1] == "Area under GZ curve (0° to 35°)"

    def test_invalid_flooding_angle(self, capsys):
        exit_code, payload = _run_json(capsys, "stability", "--kg", "3", "--flooding-angle", "-5")
        assert exit_code == 2
        assert payload["success"] is False
        assert "flooding_angle_deg" in payload["error"]["message"]

    def test_curve_too_short_for_criteria(self, capsys):
        exit_code, payload = _run_json(capsys, "stability", "--kg", "3", "--max-angle", "20")
        assert exit_code == 2
        assert payload["error"]["code"] == "STAB_005"


class TestBenchmarkCommand:
    """hydrostab benchmark"""

    def test_benchmark_passes(self, capsys):
        exit_code, payload = _run_json(capsys, "benchmark")
        assert exit_code == 0
        assert payload["message"] == "Benchmark passed"
        assert len(payload["data"]) == 2
        for entries in payload["data"].values():
            assert all(e["passed"] for e in entries)


class TestFormatting:
    """Output formatting and parser."""

    def test_error_text(self):
        result = CommandResult(
            success=False,
            error={"message": "bad draft", "recovery_hint": "lower it"},
        )
        assert format_output(result, OutputFormat.TEXT) == "Error: bad draft\nHint: lower it"

    def test_nested_text(self):
        result = CommandResult(message="Done", data={"rows": [{"a": 1}], "inner": {"b": 2}})
        text = format_output(result, OutputFormat.TEXT)
        assert "a=1" in text
        assert "inner:" in text
        assert "b: 2" in text

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
