"""Analysis report models.

The analyzer writes a SARIF 2.1.0 document. Only the parts needed to
count and display problems are modeled; everything else is ignored.
"""

from __future__ import annotations

import json
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


def _object(parent: dict[str, Any], key: str) -> dict[str, Any]:
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' is not an object")
    return value


def _list(parent: dict[str, Any], key: str) -> list[Any]:
    value = parent.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' is not an array")
    return value


class FindingLevel(str, Enum):
    """SARIF result level."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    NONE = "none"


class BaselineState(str, Enum):
    """SARIF baselineState of a result relative to a baseline run."""

    NEW = "new"
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    ABSENT = "absent"


class Finding(BaseModel):
    """A single problem reported by the analyzer."""

    model_config = {"frozen": True}

    rule_id: str = Field(description="Inspection identifier")
    level: FindingLevel = Field(default=FindingLevel.WARNING, description="Result level")
    message: str = Field(default="", description="Problem description")
    uri: str | None = Field(default=None, description="File the problem is in")
    start_line: int | None = Field(default=None, description="1-based line number")
    fingerprints: dict[str, str] = Field(default_factory=dict, description="partialFingerprints")
    baseline_state: BaselineState | None = Field(default=None, description="Baseline comparison state")
    suppressed: bool = Field(default=False, description="Suppressed in source")

    @property
    def key(self) -> tuple[str, ...]:
        """Identity used to match the finding against a baseline."""
        if self.fingerprints:
            return ("fp",) + tuple(f"{k}={v}" for k, v in sorted(self.fingerprints.items()))
        return (self.rule_id, self.uri or "", str(self.start_line or 0), self.message)

    @property
    def location(self) -> str:
        if self.uri is None:
            return "-"
        if self.start_line is None:
            return self.uri
        return f"{self.uri}:{self.start_line}"

    @classmethod
    def from_sarif(cls, result: dict[str, Any]) -> "Finding":
        """Build a finding from a SARIF result object.

        Raises:
            ValueError: If the result is not shaped like a SARIF result
        """
        if not isinstance(result, dict):
            raise ValueError(f"result is not an object: {result!r}")

        uri = None
        start_line = None
        locations = _list(result, "locations")
        if locations:
            if not isinstance(locations[0], dict):
                raise ValueError(f"location is not an object: {locations[0]!r}")
            physical = _object(locations[0], "physicalLocation")
            uri = _object(physical, "artifactLocation").get("uri")
            start_line = _object(physical, "region").get("startLine")

        level = result.get("level") or FindingLevel.WARNING.value
        try:
            parsed_level = FindingLevel(level)
        except ValueError:
            parsed_level = FindingLevel.WARNING

        state = result.get("baselineState")
        try:
            baseline_state = BaselineState(state) if state else None
        except ValueError:
            baseline_state = None

        return cls(
            rule_id=result.get("ruleId") or _object(result, "rule").get("id") or "unknown",
            level=parsed_level,
            message=_object(result, "message").get("text", ""),
            uri=uri,
            start_line=start_line,
            fingerprints={
                str(k): str(v) for k, v in _object(result, "partialFingerprints").items()
            },
            baseline_state=baseline_state,
            suppressed=bool(result.get("suppressions")),
        )


class AnalysisReport(BaseModel):
    """Parsed analyzer report."""

    model_config = {"frozen": True}

    path: Path | None = Field(default=None, description="File the report was read from")
    tool_name: str = Field(default="", description="Analyzer name")
    tool_version: str = Field(default="", description="Analyzer version")
    findings: list[Finding] = Field(default_factory=list, description="Reported problems")

    def __len__(self) -> int:
        return len(self.findings)

    @property
    def key_counts(self) -> Counter[tuple[str, ...]]:
        return Counter(f.key for f in self.findings)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> "AnalysisReport":
        """Build a report from a decoded SARIF document.

        Raises:
            ValueError: If the document is not SARIF
        """
        if not isinstance(data, dict) or not isinstance(data.get("runs"), list):
            raise ValueError("document has no 'runs' array")

        findings: list[Finding] = []
        tool_name = ""
        tool_version = ""
        for run in data["runs"]:
            if not isinstance(run, dict):
                raise ValueError(f"run is not an object: {run!r}")
            driver = _object(_object(run, "tool"), "driver")
            tool_name = tool_name or driver.get("fullName") or driver.get("name", "")
            tool_version = tool_version or driver.get("version", "")
            for result in _list(run, "results"):
                findings.append(Finding.from_sarif(result))

        return cls(path=path, tool_name=tool_name, tool_version=tool_version, findings=findings)

    @classmethod
    def from_file(cls, path: Path | str) -> "AnalysisReport":
        """Read a SARIF report from disk.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not a SARIF document
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e}") from e
        return cls.from_dict(data, path=path)
