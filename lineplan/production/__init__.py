"""Production planning module.

This module computes the line's maximum output and its balanced plan:
- Capacity feasibility checking for a target output
- Binary search for the maximum feasible output
- Greedy load-balancing allocation
- Planning orchestration and results
"""

from .feasibility import CapacityFeasibilityChecker, FeasibilityResult
from .throughput import MaxThroughputSolver, SearchBound
from .allocation import AllocationPlanner
from .planner import LinePlanner, PlanResult, PlanStatus, plan_line

__all__ = [
    'CapacityFeasibilityChecker',
    'FeasibilityResult',
    'MaxThroughputSolver',
    'SearchBound',
    'AllocationPlanner',
    'LinePlanner',
    'PlanResult',
    'PlanStatus',
    'plan_line',
]
