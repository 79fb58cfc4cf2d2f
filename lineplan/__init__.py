"""Throughput planning and workload balancing for a manufacturing line.

Exports the capability matrix model and the top-level planning entry point.
"""

from lineplan.models import Assignment, CapabilityMatrix
from lineplan.production import LinePlanner, PlanResult, PlanStatus, plan_line

__all__ = [
    "Assignment",
    "CapabilityMatrix",
    "LinePlanner",
    "PlanResult",
    "PlanStatus",
    "plan_line",
]
