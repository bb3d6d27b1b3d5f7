"""Scan configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from qodana_cli.models.common import BackendKind
from qodana_cli.utils.errors import ConfigError, validate_env_entry, validate_volume_entry

DEFAULT_SCRIPT = "default"
DEFAULT_PORT = 8080


class ProfileConfig(BaseModel):
    """Inspection profile selection stored in qodana.yaml."""

    model_config = {"frozen": True, "extra": "ignore"}

    name: str | None = Field(default=None, description="Profile name")
    path: str | None = Field(default=None, description="Profile file path")


class ProjectConfig(BaseModel):
    """The persisted subset of scan options, as stored in qodana.yaml.

    Keys use the camelCase spelling of the file format. Unknown keys
    (exclude, include, bootstrap, ...) belong to the analyzer and are
    ignored here.
    """

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    version: str = Field(default="1.0", description="Configuration format version")
    linter: str | None = Field(default=None, description="Linter Docker image")
    ide: str | None = Field(default=None, description="Native IDE identifier")
    profile: ProfileConfig | None = Field(default=None, description="Inspection profile")
    baseline: str | None = Field(default=None, description="Baseline report path")
    baseline_include_absent: bool | None = Field(
        default=None,
        alias="baselineIncludeAbsent",
        description="Count findings absent from the baseline",
    )
    fail_threshold: int | None = Field(
        default=None,
        alias="failThreshold",
        ge=0,
        description="Problem count that fails the build",
    )
    script: str | None = Field(default=None, description="Analyzer script name")
    properties: dict[str, Any] = Field(
        default_factory=dict,
        description="Analyzer properties",
    )

    @field_validator("version", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> Any:
        # `version: 1.0` parses as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    def to_overrides(self) -> dict[str, Any]:
        """Flatten into ScanOptions field names, skipping unset values."""
        values: dict[str, Any] = {
            "linter": self.linter,
            "ide": self.ide,
            "baseline": self.baseline,
            "baseline_include_absent": self.baseline_include_absent,
            "fail_threshold": self.fail_threshold,
            "script": self.script,
        }
        if self.profile is not None:
            values["profile_name"] = self.profile.name
            values["profile_path"] = self.profile.path
        if self.properties:
            values["properties"] = [f"{k}={_yaml_scalar(v)}" for k, v in self.properties.items()]
        return {k: v for k, v in values.items() if v is not None}


def _yaml_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ScanOptions(BaseModel):
    """Immutable configuration snapshot governing one scan.

    Produced once per invocation by :func:`qodana_cli.core.resolver.resolve`
    from CLI overrides, the project's qodana.yaml and built-in defaults.
    """

    model_config = {"frozen": True}

    # Locations
    project_dir: Path = Field(description="Project root")
    results_dir: Path = Field(description="Directory the analyzer writes reports to")
    cache_dir: Path = Field(description="Directory persisted between runs")

    # Analyzer identity, exactly one is set
    linter: str | None = Field(default=None, description="Linter Docker image reference")
    ide: str | None = Field(default=None, description="Native IDE identifier")

    # Analyzer-facing options
    save_report: bool = Field(default=False, description="Generate HTML report")
    source_directory: str = Field(default="", description="Directory inside the project to analyze")
    disable_sanity: bool = Field(default=False, description="Skip sanity inspections")
    profile_name: str = Field(default="", description="Profile name")
    profile_path: str = Field(default="", description="Profile file path")
    run_promo: str = Field(default="", description="Run promo inspections")
    script: str = Field(default=DEFAULT_SCRIPT, description="Analyzer script")
    baseline: str = Field(default="", description="Baseline report path")
    baseline_include_absent: bool = Field(default=False, description="Count baseline-absent findings")
    properties: list[str] = Field(default_factory=list, description="key=value analyzer properties")
    fail_threshold: int | None = Field(default=None, ge=0, description="Problem count that fails the run")
    changes: bool = Field(default=False, description="Analyze changed files only")
    send_report: bool = Field(default=False, description="Upload report to Qodana Cloud")
    analysis_id: str = Field(default="", description="Unique report identifier")
    apply_fixes: bool = Field(default=False, description="Apply quick-fixes")
    cleanup: bool = Field(default=False, description="Run project cleanup")

    # Backend-facing options
    show_report: bool = Field(default=False, description="Serve the report after the run")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Host port for the report server")
    env: list[str] = Field(default_factory=list, description="NAME=value container environment")
    volumes: list[str] = Field(default_factory=list, description="host:container[:mode] mounts")
    user: str = Field(default="", description="User (uid:gid) to run as")
    token: str = Field(default="", description="Qodana Cloud token")

    # Orchestration
    clear_cache: bool = Field(default=False, description="Erase the cache before the run")
    skip_pull: bool = Field(default=False, description="Never pull the linter image")
    print_problems: bool = Field(default=False, description="Print counted problems")

    @field_validator("env")
    @classmethod
    def _check_env(cls, value: list[str]) -> list[str]:
        for entry in value:
            validate_env_entry(entry)
        return value

    @field_validator("volumes")
    @classmethod
    def _check_volumes(cls, value: list[str]) -> list[str]:
        for entry in value:
            validate_volume_entry(entry)
        return value

    @field_validator("properties")
    @classmethod
    def _check_properties(cls, value: list[str]) -> list[str]:
        for entry in value:
            if "=" not in entry or entry.startswith("="):
                raise ConfigError(f"Property must be key=value: {entry!r}", config_key="properties")
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "ScanOptions":
        if self.linter and self.ide:
            raise ConfigError(
                f"Both linter ({self.linter}) and ide ({self.ide}) are set, choose one",
                config_key="linter",
            )
        if not self.linter and not self.ide:
            raise ConfigError("No linter or ide configured", config_key="linter")
        if self.apply_fixes and self.cleanup:
            raise ConfigError(
                "--apply-fixes and --cleanup are mutually exclusive",
                config_key="apply_fixes",
            )
        return self

    @property
    def backend_kind(self) -> BackendKind:
        """Which execution backend runs this scan."""
        return BackendKind.DOCKER if self.linter else BackendKind.NATIVE

    @property
    def has_baseline(self) -> bool:
        return bool(self.baseline)

    @property
    def report_path(self) -> Path:
        """Where the analyzer writes its SARIF report."""
        return self.results_dir / "qodana.sarif.json"
