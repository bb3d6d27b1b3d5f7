"""Execution plan, cache and backend result models."""

from pathlib import Path

from pydantic import BaseModel, Field

from qodana_cli.models.common import BackendKind


class Mount(BaseModel):
    """A host directory bound into the analyzer container."""

    model_config = {"frozen": True}

    source: str = Field(description="Host path")
    target: str = Field(description="Path inside the container")
    mode: str = Field(default="rw", description="Mount mode (rw or ro)")


class CacheHandle(BaseModel):
    """A cache directory that persists across scans of one project."""

    model_config = {"frozen": True}

    path: Path = Field(description="Cache directory")
    project_id: str = Field(description="Identity of the project owning the cache")


class ExecutionPlan(BaseModel):
    """Backend-ready bundle for a single analyzer invocation.

    Combines process/container parameters with the analyzer argument
    list produced by the option compiler. A plan is handed to exactly
    one backend and discarded afterwards.
    """

    model_config = {"frozen": True}

    backend: BackendKind = Field(description="Backend the plan was built for")
    target: str = Field(description="Linter image reference or IDE identifier")
    args: list[str] = Field(default_factory=list, description="Analyzer arguments")

    project_dir: Path = Field(description="Project root on the host")
    results_dir: Path = Field(description="Results directory on the host")
    cache: CacheHandle = Field(description="Prepared cache")

    mounts: list[Mount] = Field(default_factory=list, description="Container mounts")
    environment: dict[str, str] = Field(default_factory=dict, description="Analyzer environment")
    ports: dict[str, int] = Field(default_factory=dict, description="Container port -> host port")
    user: str = Field(default="", description="User identity to run as")
    working_dir: str = Field(default="", description="Working directory of the analyzer")
    skip_pull: bool = Field(default=False, description="Never pull the image")


class ExecutionResult(BaseModel):
    """What a backend observed while running the analyzer."""

    model_config = {"frozen": True}

    exit_code: int = Field(description="Analyzer exit code")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")
    duration: float = Field(default=0.0, description="Wall-clock duration in seconds")
    backend: BackendKind = Field(description="Backend that produced the result")
