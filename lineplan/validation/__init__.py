"""Input validation and error types for line planning."""

from .matrix_validator import MatrixValidator, ValidationIssue, ValidationSeverity
from .errors import (
    PlanningError,
    DegenerateInputError,
    UnreachableOperationError,
    PlanningShortfallError,
)

__all__ = [
    "MatrixValidator",
    "ValidationIssue",
    "ValidationSeverity",
    "PlanningError",
    "DegenerateInputError",
    "UnreachableOperationError",
    "PlanningShortfallError",
]
