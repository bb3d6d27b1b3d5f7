"""Data models for qodana-cli.

All models are Pydantic BaseModel with frozen=True for immutability.

Modules:
    common: shared enums and the ScanError model
    options: ScanOptions snapshot and the qodana.yaml ProjectConfig
    plan: ExecutionPlan, CacheHandle, ExecutionResult
    report: SARIF AnalysisReport and Finding
    outcome: ScanOutcome and ExitCode
"""
