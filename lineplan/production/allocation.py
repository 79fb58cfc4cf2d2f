"""
Balanced allocation of a target output to machines.

Builds the per-(machine, operation) unit counts for a chosen output level
by assigning one unit at a time to the least loaded capable machine.
"""

from fractions import Fraction
from typing import List
import logging

from lineplan.models.assignment import Assignment
from lineplan.models.capability_matrix import CapabilityMatrix

logger = logging.getLogger(__name__)


class AllocationPlanner:
    """
    Greedy load-balancing allocator.

    For each operation (most constrained first), every unit goes to the
    capable machine with the lowest busy time that still has room for it.
    Ties prefer the smaller cycle time, then the lower machine index.

    Unlike the feasibility check, which fills the fastest machines first,
    this rule spreads work to minimize the busiest machine. The two can
    disagree; an operation that runs out of room is left short and the
    caller sees it through ``Assignment.shortfalls()``.
    """

    def __init__(self, matrix: CapabilityMatrix):
        """
        Initialize allocation planner.

        Args:
            matrix: Capability matrix with cycle times and period
        """
        self.matrix = matrix

    def build_plan(self, units: int) -> Assignment:
        """
        Assign `units` per operation across machines.

        Args:
            units: Target units per operation (>= 0)

        Returns:
            Assignment with per-(machine, operation) unit counts

        Raises:
            ValueError: If units is negative
        """
        if units < 0:
            raise ValueError(f"Target units must be non-negative, got {units}")

        period = self.matrix.exact_period
        qty: List[List[int]] = [
            [0] * self.matrix.operation_count for _ in range(self.matrix.machine_count)
        ]
        # Same exact fractions as the feasibility check
        used: List[Fraction] = [Fraction(0)] * self.matrix.machine_count

        for operation in self.matrix.tightness_order():
            capable = self.matrix.exact_capable_machines(operation)

            produced = 0
            while produced < units:
                fits = [(used[machine], ct, machine) for machine, ct in capable if used[machine] + ct <= period]
                if not fits:
                    logger.debug(
                        f"{self.matrix.operation_name(operation)}: no machine has room, "
                        f"placed {produced}/{units}"
                    )
                    break

                _, ct, best = min(fits)
                qty[best][operation] += 1
                used[best] += ct
                produced += 1

        return Assignment.from_lists(qty, target_units=units)
