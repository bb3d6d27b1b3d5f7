"""Configuration resolver: qodana.yaml + CLI overrides + defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from qodana_cli.core.inspector import ProjectInspector
from qodana_cli.models.options import ProjectConfig, ScanOptions
from qodana_cli.utils.errors import ConfigError
from qodana_cli.utils.hashing import project_id
from qodana_cli.utils.logging import get_logger

logger = get_logger("resolver")

# Searched in order, first match wins
CONFIG_FILENAMES = ("qodana.yaml", "qodana.yml")


def get_system_dir(project_dir: Path, root: Path | None = None) -> Path:
    """Per-project directory holding the default cache and results.

    Args:
        project_dir: Project root
        root: Base directory. Defaults to ~/.cache/qodana

    Returns:
        Directory unique to the project
    """
    if root is None:
        root = Path.home() / ".cache" / "qodana"
    return Path(root) / project_id(project_dir)


def find_config_file(project_dir: Path) -> Path | None:
    """Find the project configuration file, if any."""
    for name in CONFIG_FILENAMES:
        candidate = project_dir / name
        if candidate.is_file():
            return candidate
    return None


def load_project_config(project_dir: Path | str) -> ProjectConfig | None:
    """Load qodana.yaml from a project root.

    Args:
        project_dir: Project root

    Returns:
        Parsed configuration, or None if the project has no config file

    Raises:
        ConfigError: If the file exists but is malformed
    """
    path = find_config_file(Path(project_dir))
    if path is None:
        return None

    data = _read_mapping(path)
    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {_describe(e)}", path=str(path)) from e


def _read_mapping(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{path} must contain a mapping, got {type(data).__name__}",
            path=str(path),
        )
    return data


def save_project_config(project_dir: Path | str, config: ProjectConfig) -> Path:
    """Write qodana.yaml into a project root.

    Args:
        project_dir: Project root
        config: Configuration to save

    Settings already in the file that ProjectConfig does not model
    are written back unchanged.

    Returns:
        Path where the configuration was written

    Raises:
        ConfigError: If an existing file is malformed
    """
    existing = find_config_file(Path(project_dir))
    path = existing or Path(project_dir) / CONFIG_FILENAMES[0]
    # Keys this tool does not model belong to the analyzer and are kept
    data = _read_mapping(existing) if existing else {}
    values = config.model_dump(mode="json", exclude_none=True)
    for name, field in ProjectConfig.model_fields.items():
        key = field.alias or name
        if key != name:
            data.pop(name, None)
        if values.get(name) in (None, {}):
            data.pop(key, None)
        else:
            data[key] = values[name]
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8")
    return path


def resolve(
    project_dir: Path | str,
    overrides: dict[str, Any] | None = None,
    inspector: ProjectInspector | None = None,
    system_root: Path | None = None,
    save_detected: bool = False,
) -> ScanOptions:
    """Produce the configuration snapshot for one scan.

    Values are merged field by field: an explicit override beats the
    project file, which beats the built-in default. ``None`` overrides
    count as not given.

    Args:
        project_dir: Project root
        overrides: Options given on the command line
        inspector: Used to pick a linter when none is configured
        system_root: Base for the default cache and results directories
        save_detected: Write a detected linter to a new qodana.yaml

    Returns:
        Validated ScanOptions

    Raises:
        ConfigError: If the configuration is malformed or contradictory
    """
    project = Path(project_dir).expanduser().resolve()
    if not project.is_dir():
        raise ConfigError(f"Project directory does not exist: {project}", config_key="project_dir")

    cli = {k: v for k, v in (overrides or {}).items() if v is not None}
    file_config = load_project_config(project)
    persisted = file_config.to_overrides() if file_config else {}

    system_dir = get_system_dir(project, system_root)
    merged: dict[str, Any] = {
        "project_dir": project,
        "results_dir": system_dir / "results",
        "cache_dir": system_dir / "cache",
    }
    merged.update(persisted)

    # An analyzer chosen on the command line replaces the persisted one
    # of either kind.
    if cli.get("linter") or cli.get("ide"):
        merged.pop("linter", None)
        merged.pop("ide", None)
    merged.update(cli)

    detected = None
    if not merged.get("linter") and not merged.get("ide"):
        detected = (inspector or ProjectInspector()).detect(project)
        if detected is None:
            raise ConfigError(
                f"No linter configured for {project} and none could be detected, "
                "run `qodana init` or pass --linter",
                config_key="linter",
            )
        logger.info(f"Using detected linter {detected}")
        merged["linter"] = detected

    for key in ("results_dir", "cache_dir"):
        merged[key] = Path(merged[key]).expanduser().resolve()

    try:
        options = ScanOptions.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid scan options: {_describe(e)}") from e

    if detected and save_detected and file_config is None:
        path = save_project_config(project, ProjectConfig(linter=detected))
        logger.info(f"Saved detected linter to {path}")

    logger.debug(
        f"Resolved options for {project}: backend={options.backend_kind.value} "
        f"target={options.linter or options.ide} config_file={file_config is not None}"
    )
    return options


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "value"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)
