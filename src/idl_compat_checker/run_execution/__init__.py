"""Run execution domain exports."""

from .check_run_use_case import (
    CheckExecutionError,
    execute_compatibility_check,
    resolve_configuration,
)
from .run_contracts import CheckArtifacts, CheckOutcome, CheckRequest

__all__ = [
    "CheckRequest",
    "CheckOutcome",
    "CheckArtifacts",
    "CheckExecutionError",
    "execute_compatibility_check",
    "resolve_configuration",
]
