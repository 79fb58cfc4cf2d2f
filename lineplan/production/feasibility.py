"""
Capacity feasibility checking for a target output level.

This module decides whether every operation's required unit count can be
packed into the machines' available time for one period.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import math

from lineplan.models.capability_matrix import CapabilityMatrix


@dataclass
class FeasibilityResult:
    """
    Result of a feasibility check.

    Attributes:
        is_feasible: Whether the target output fits in the period
        reason: Explanation of result
        units: Target units per operation that were checked
        blocking_operation: First operation that could not be satisfied (if any)
        unmet_units: Units of the blocking operation left unplaced
        remaining_time: Time left per machine when the check stopped
    """
    is_feasible: bool
    reason: str
    units: int
    blocking_operation: Optional[int] = None
    unmet_units: int = 0
    remaining_time: List[float] = field(default_factory=list)

    def __str__(self) -> str:
        if self.is_feasible:
            return f"Feasible: {self.reason}"
        else:
            return f"Infeasible: {self.reason}"


class CapacityFeasibilityChecker:
    """
    Greedy capacity check for a per-operation output target.

    Operations are processed from the most constrained (lowest tightness)
    to the least. Each operation fills its fastest capable machines first,
    consuming as many whole units as their remaining time allows.

    The check is a heuristic: a False answer does not prove that no
    assignment exists.
    """

    def __init__(self, matrix: CapabilityMatrix):
        """
        Initialize feasibility checker.

        Args:
            matrix: Capability matrix with cycle times and period
        """
        self.matrix = matrix

    def check(self, units: int) -> FeasibilityResult:
        """
        Check if every operation can produce the given units in one period.

        Args:
            units: Target units per operation (>= 0)

        Returns:
            FeasibilityResult indicating feasibility

        Raises:
            ValueError: If units is negative
        """
        if units < 0:
            raise ValueError(f"Target units must be non-negative, got {units}")

        # Remaining time in exact fractions of the decimal cell values
        remaining = [self.matrix.exact_period] * self.matrix.machine_count

        if units == 0:
            return FeasibilityResult(
                is_feasible=True,
                reason="Zero production",
                units=0,
                remaining_time=[float(r) for r in remaining],
            )

        for operation in self.matrix.tightness_order():
            # Fastest machines first; sort is stable so equal cycle times keep machine order
            candidates = sorted(self.matrix.exact_capable_machines(operation), key=lambda c: c[1])

            need = units
            for machine, ct in candidates:
                if need <= 0:
                    break
                max_units = math.floor(remaining[machine] / ct)
                take = min(max_units, need)
                remaining[machine] -= take * ct
                need -= take

            if need > 0:
                return FeasibilityResult(
                    is_feasible=False,
                    reason=(
                        f"{self.matrix.operation_name(operation)} short by {need} of {units} units"
                    ),
                    units=units,
                    blocking_operation=operation,
                    unmet_units=need,
                    remaining_time=[float(r) for r in remaining],
                )

        return FeasibilityResult(
            is_feasible=True,
            reason=f"All {self.matrix.operation_count} operations fit {units} units",
            units=units,
            remaining_time=[float(r) for r in remaining],
        )

    def is_feasible(self, units: int) -> bool:
        """Return True if the greedy packing places `units` for every operation."""
        return self.check(units).is_feasible
