"""Option compiler: ScanOptions -> analyzer command line."""

from __future__ import annotations

from typing import Callable

from qodana_cli.models.options import DEFAULT_SCRIPT, ScanOptions


def _flag(name: str, enabled: bool) -> list[str]:
    return [name] if enabled else []


def _value(name: str, value: str | int | None, default: str | int | None = "") -> list[str]:
    if value is None or value == default:
        return []
    return [name, str(value)]


def _run_promo(options: ScanOptions) -> list[str]:
    # The analyzer's parser expects this one as a single argument.
    if not options.run_promo:
        return []
    return [f"--run-promo {options.run_promo}"]


def _properties(options: ScanOptions) -> list[str]:
    tokens: list[str] = []
    for prop in options.properties:
        tokens.extend(["--property", prop])
    return tokens


# Emission order of analyzer options. Backend settings (volumes, env,
# port, user, show_report, token) are consumed by the backends instead.
OPTION_ORDER: tuple[Callable[[ScanOptions], list[str]], ...] = (
    lambda o: _flag("--save-report", o.save_report),
    lambda o: _value("--source-directory", o.source_directory),
    lambda o: _flag("--disable-sanity", o.disable_sanity),
    lambda o: _value("--profile-name", o.profile_name),
    lambda o: _value("--profile-path", o.profile_path),
    _run_promo,
    lambda o: _value("--script", o.script, DEFAULT_SCRIPT),
    lambda o: _value("--baseline", o.baseline),
    lambda o: _flag("--baseline-include-absent", o.baseline_include_absent),
    _properties,
    lambda o: _value("--fail-threshold", o.fail_threshold, None),
    lambda o: _flag("--changes", o.changes),
    lambda o: _flag("--send-report", o.send_report),
    lambda o: _value("--analysis-id", o.analysis_id),
    lambda o: _flag("--apply-fixes", o.apply_fixes),
    lambda o: _flag("--cleanup", o.cleanup),
)


def compile_options(options: ScanOptions) -> list[str]:
    """Translate a configuration snapshot into analyzer arguments.

    The result depends only on the snapshot: options are visited in
    OPTION_ORDER, booleans become bare flags when true, and value options
    are emitted as separate flag and value tokens when they differ from
    their default.

    Args:
        options: Resolved scan options

    Returns:
        Ordered list of argument tokens
    """
    tokens: list[str] = []
    for emit in OPTION_ORDER:
        tokens.extend(emit(options))
    return tokens
