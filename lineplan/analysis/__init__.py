"""Analysis module for line plans.

This module provides reporting metrics for computed assignments, including:
- Per-machine busy time and relative workload
- Per-operation share of output by machine
- Display rounding for percentages
"""

from .workload import OperationLoad, WorkloadAnalyzer, WorkloadReport
from .formatting import format_percent, round_half_away_from_zero

__all__ = [
    "OperationLoad",
    "WorkloadAnalyzer",
    "WorkloadReport",
    "format_percent",
    "round_half_away_from_zero",
]
