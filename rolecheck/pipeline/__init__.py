"""Pipeline orchestration for roster checking."""

from .models import RowOutcome, RunResult
from .runner import RoleCheckPipeline

__all__ = [
    "RoleCheckPipeline",
    "RowOutcome",
    "RunResult",
]
