"""
Maximum throughput search.

Binary-searches the largest per-operation output the feasibility check
accepts, assuming feasibility does not get worse as the target decreases.
"""

from enum import Enum
from typing import List, Optional, Tuple
import logging
import math

from lineplan.models.capability_matrix import CapabilityMatrix
from lineplan.validation.errors import UnreachableOperationError
from .feasibility import CapacityFeasibilityChecker

logger = logging.getLogger(__name__)


class SearchBound(str, Enum):
    """Upper bound used to start the search."""
    FASTEST_MACHINE = "fastest_machine"  # each operation limited to its fastest machine alone
    POOLED_CAPACITY = "pooled_capacity"  # each operation limited to all capable machines together


class MaxThroughputSolver:
    """
    Find the maximum output U* such that every operation can produce U* units.

    The search probes mid = ceil((lo + hi) / 2) on [0, hi] and keeps the
    lower half when the probe is infeasible, so only feasible values are
    ever returned.

    Example:
        >>> matrix = CapabilityMatrix.from_rows([[30, 15, 0], [0, 15, 35]])
        >>> MaxThroughputSolver(matrix).find_max_units()
        22
    """

    def __init__(
        self,
        matrix: CapabilityMatrix,
        checker: Optional[CapacityFeasibilityChecker] = None,
        bound: SearchBound = SearchBound.FASTEST_MACHINE,
    ):
        """
        Initialize solver.

        Args:
            matrix: Capability matrix with cycle times and period
            checker: Feasibility checker (created from the matrix if not provided)
            bound: Upper bound policy for the search interval
        """
        self.matrix = matrix
        self.checker = checker or CapacityFeasibilityChecker(matrix)
        self.bound = SearchBound(bound)
        self.probes: List[Tuple[int, bool]] = []

    def upper_bound(self) -> int:
        """
        Compute the upper end of the search interval.

        Returns:
            Non-negative bound on the per-operation output

        Raises:
            UnreachableOperationError: If an operation has no capable machine
        """
        unreachable = self.matrix.unreachable_operations()
        if unreachable:
            raise UnreachableOperationError(unreachable)

        period = self.matrix.exact_period
        per_operation = []
        for operation in range(self.matrix.operation_count):
            if self.bound == SearchBound.POOLED_CAPACITY:
                per_operation.append(self.matrix.operation_tightness(operation))
            else:
                best_ct = min(ct for _, ct in self.matrix.exact_capable_machines(operation))
                per_operation.append(math.floor(period / best_ct))

        return max(0, min(per_operation, default=0))

    def find_max_units(self) -> int:
        """
        Binary-search the largest feasible output.

        Returns:
            U*, the largest probed output accepted by the feasibility check (0 if none)
        """
        self.probes = []
        lo = 0
        hi = self.upper_bound()
        logger.debug(f"Searching max units on [0, {hi}] ({self.bound.value} bound)")

        while lo < hi:
            mid = (lo + hi + 1) // 2
            feasible = self.checker.is_feasible(mid)
            self.probes.append((mid, feasible))
            logger.debug(f"  probe {mid}: {'feasible' if feasible else 'infeasible'}")
            if feasible:
                lo = mid
            else:
                hi = mid - 1

        logger.info(f"Max units: {lo} per {self.matrix.period_seconds:g}s ({len(self.probes)} probes)")
        return lo
