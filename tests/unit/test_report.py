"""Unit tests for SARIF report parsing."""

import pytest

from conftest import sarif_result, write_sarif

from qodana_cli.models.report import AnalysisReport, BaselineState, Finding, FindingLevel


class TestFinding:
    """Tests for Finding."""

    def test_from_sarif(self):
        """Test the fields read from a SARIF result."""
        finding = Finding.from_sarif(sarif_result("PyUnusedLocal", line=4, message="Unused", level="error"))
        assert finding.rule_id == "PyUnusedLocal"
        assert finding.level == FindingLevel.ERROR
        assert finding.message == "Unused"
        assert finding.location == "src/hello.py:4"
        assert finding.suppressed is False

    def test_missing_location(self):
        """Test project-level findings without a location."""
        finding = Finding.from_sarif({"ruleId": "Sanity", "message": {"text": "No sources"}})
        assert finding.uri is None
        assert finding.location == "-"
        assert finding.level == FindingLevel.WARNING

    def test_unknown_level_and_state(self):
        """Test unrecognized values fall back instead of failing."""
        finding = Finding.from_sarif(sarif_result("A", level="fatal", baselineState="gone"))
        assert finding.level == FindingLevel.WARNING
        assert finding.baseline_state is None

    def test_baseline_state(self):
        """Test a known baseline state is parsed."""
        assert Finding.from_sarif(sarif_result("A", baselineState="absent")).baseline_state == BaselineState.ABSENT

    def test_key_prefers_fingerprints(self):
        """Test fingerprinted findings are keyed by fingerprint only."""
        a = Finding.from_sarif(sarif_result("A", line=1, partialFingerprints={"h": "1"}))
        b = Finding.from_sarif(sarif_result("A", line=20, partialFingerprints={"h": "1"}))
        assert a.key == b.key

    def test_key_without_fingerprints(self):
        """Test location and message identify unfingerprinted findings."""
        a = Finding.from_sarif(sarif_result("A", line=1))
        b = Finding.from_sarif(sarif_result("A", line=2))
        assert a.key != b.key


class TestAnalysisReport:
    """Tests for AnalysisReport."""

    def test_from_file(self, tmp_path, sample_findings):
        """Test reading findings and tool info from disk."""
        path = write_sarif(tmp_path / "qodana.sarif.json", sample_findings)
        report = AnalysisReport.from_file(path)
        assert len(report) == 5
        assert report.tool_name == "Qodana for Python"
        assert report.tool_version == "2022.1"
        assert report.path == path

    def test_multiple_runs(self):
        """Test findings from every run are collected."""
        data = {"runs": [{"results": [sarif_result("A")]}, {"results": [sarif_result("B")]}]}
        assert [f.rule_id for f in AnalysisReport.from_dict(data).findings] == ["A", "B"]

    def test_run_without_results(self):
        """Test a run with no results array."""
        assert len(AnalysisReport.from_dict({"runs": [{}]})) == 0

    def test_not_sarif(self):
        """Test documents without runs are rejected."""
        with pytest.raises(ValueError, match="runs"):
            AnalysisReport.from_dict({"version": "2.1.0"})

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON raises ValueError."""
        path = tmp_path / "broken.json"
        path.write_text("{")
        with pytest.raises(ValueError, match="invalid JSON"):
            AnalysisReport.from_file(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file raises OSError."""
        with pytest.raises(OSError):
            AnalysisReport.from_file(tmp_path / "missing.json")

    @pytest.mark.parametrize(
        "data",
        [
            {"runs": [None]},
            {"runs": [{"results": ["not a result"]}]},
            {"runs": [{"results": {"ruleId": "A"}}]},
            {"runs": [{"results": [{"ruleId": "A", "locations": {"physicalLocation": {}}}]}]},
            {"runs": [{"results": [{"ruleId": "A", "locations": ["src/a.py"]}]}]},
            {"runs": [{"tool": "qodana"}]},
        ],
    )
    def test_malformed_structure(self, data):
        """Test wrongly typed SARIF nodes raise ValueError."""
        with pytest.raises(ValueError):
            AnalysisReport.from_dict(data)
