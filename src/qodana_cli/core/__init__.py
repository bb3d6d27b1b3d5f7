"""Core scan orchestration for qodana-cli.

This module provides the main library API for resolving options,
running an analyzer and evaluating its report.
"""

from qodana_cli.core.cache import CacheManager
from qodana_cli.core.evaluator import ResultEvaluator
from qodana_cli.core.inspector import ProjectInspector
from qodana_cli.core.options import compile_options
from qodana_cli.core.pipeline import ScanPipeline, run_scan
from qodana_cli.core.plan import build_plan
from qodana_cli.core.resolver import (
    CONFIG_FILENAMES,
    find_config_file,
    get_system_dir,
    load_project_config,
    resolve,
    save_project_config,
)

__all__ = [
    "CacheManager",
    "ResultEvaluator",
    "ProjectInspector",
    "compile_options",
    "ScanPipeline",
    "run_scan",
    "build_plan",
    "CONFIG_FILENAMES",
    "find_config_file",
    "get_system_dir",
    "load_project_config",
    "resolve",
    "save_project_config",
]
