"""
Line planner: validation, throughput search, allocation and workload.

This module ties the planning steps together as a pure function of the
capability matrix:

1. Validate the matrix (degenerate input, unreachable operations)
2. Search the maximum feasible output U*
3. Allocate U* units per operation across machines
4. Summarize machine workload for reporting
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging

from lineplan.analysis.workload import WorkloadAnalyzer, WorkloadReport
from lineplan.models.assignment import Assignment
from lineplan.models.capability_matrix import CapabilityMatrix
from lineplan.validation.errors import (
    DegenerateInputError,
    PlanningShortfallError,
    UnreachableOperationError,
)
from lineplan.validation.matrix_validator import (
    MatrixValidator,
    ValidationIssue,
    ValidationSeverity,
)
from .allocation import AllocationPlanner
from .feasibility import CapacityFeasibilityChecker
from .throughput import MaxThroughputSolver, SearchBound

logger = logging.getLogger(__name__)


class PlanStatus(str, Enum):
    """Outcome of a planning request."""
    PLANNED = "planned"
    INVALID_INPUT = "invalid_input"


@dataclass
class PlanResult:
    """
    Result of one planning request.

    Attributes:
        status: PLANNED, or INVALID_INPUT when validation blocked the search
        matrix: Capability matrix that was planned
        max_units: Maximum output per period (None if not planned)
        assignment: Balanced assignment for max_units (None if not planned)
        workload: Workload metrics for the assignment (None if not planned)
        issues: Validation issues found before planning (warnings and info included)
    """
    status: PlanStatus
    matrix: CapabilityMatrix
    max_units: Optional[int] = None
    assignment: Optional[Assignment] = None
    workload: Optional[WorkloadReport] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_planned(self) -> bool:
        return self.status == PlanStatus.PLANNED

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity in MatrixValidator.BLOCKING_SEVERITIES]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def unreachable_operations(self) -> List[int]:
        """Indices of operations reported as having no capable machine."""
        return [
            issue.metadata["operation"]
            for issue in self.issues
            if issue.id == "UNREACHABLE_OPERATION"
        ]

    def raise_for_status(self) -> None:
        """
        Raise the matching exception if the request was not planned.

        Raises:
            DegenerateInputError: If the matrix dimensions or period are invalid
            UnreachableOperationError: If operations have no capable machine
        """
        if self.is_planned:
            return
        degenerate = [i for i in self.issues if i.id == "DEGENERATE_INPUT"]
        if degenerate:
            raise DegenerateInputError(degenerate[0].description, context=degenerate[0].metadata)
        raise UnreachableOperationError(self.unreachable_operations)

    def summary_lines(self) -> List[str]:
        """Plain-text report: the plan summary, or the blocking issues."""
        if not self.is_planned:
            return [issue.description for issue in self.errors]
        return self.workload.summary_lines(self.max_units)

    def __str__(self) -> str:
        if self.is_planned:
            return f"PlanResult: {self.max_units} units per {self.matrix.period_seconds:g}s"
        return f"PlanResult: INVALID INPUT ({len(self.errors)} issues)"


class LinePlanner:
    """
    Plan maximum balanced output for a capability matrix.

    The planner holds no state between calls; each ``plan()`` call works
    only from the matrix it was given.

    Example:
        >>> matrix = CapabilityMatrix.from_rows([[30, 15, 0], [0, 15, 35]])
        >>> result = LinePlanner(matrix).plan()
        >>> result.max_units, result.assignment.to_lists()
        (22, [[22, 15, 0], [0, 7, 22]])
    """

    def __init__(
        self,
        matrix: CapabilityMatrix,
        bound: SearchBound = SearchBound.FASTEST_MACHINE,
    ):
        """
        Initialize line planner.

        Args:
            matrix: Capability matrix with cycle times and period
            bound: Upper bound policy for the throughput search
        """
        self.matrix = matrix
        self.bound = SearchBound(bound)

    def plan(self) -> PlanResult:
        """
        Compute the maximum output and its balanced assignment.

        Returns:
            PlanResult; status INVALID_INPUT (with issues) if validation fails

        Raises:
            PlanningShortfallError: If the allocation cannot place the output
                the feasibility search accepted
        """
        validator = MatrixValidator(self.matrix)
        issues = validator.validate_all()
        if validator.has_errors():
            result = PlanResult(status=PlanStatus.INVALID_INPUT, matrix=self.matrix, issues=issues)
            logger.info(f"Planning skipped: {len(result.errors)} blocking validation issues")
            return result

        solver = MaxThroughputSolver(
            self.matrix,
            checker=CapacityFeasibilityChecker(self.matrix),
            bound=self.bound,
        )
        max_units = solver.find_max_units()

        assignment = AllocationPlanner(self.matrix).build_plan(max_units)
        shortfalls = assignment.shortfalls()
        if shortfalls:
            logger.error(
                f"Allocation diverged from feasibility check at {max_units} units: {shortfalls}"
            )
            raise PlanningShortfallError(max_units, shortfalls, assignment=assignment)

        workload = WorkloadAnalyzer(self.matrix).analyze(assignment)
        if workload.busiest_machine is not None:
            logger.info(
                f"Planned {max_units} units; busiest machine "
                f"{self.matrix.machine_name(workload.busiest_machine)} at {workload.max_used_time:g}s"
            )

        return PlanResult(
            status=PlanStatus.PLANNED,
            matrix=self.matrix,
            max_units=max_units,
            assignment=assignment,
            workload=workload,
            issues=issues,
        )


def plan_line(
    matrix: CapabilityMatrix,
    bound: SearchBound = SearchBound.FASTEST_MACHINE,
) -> PlanResult:
    """
    Plan maximum balanced output for a capability matrix.

    Args:
        matrix: Capability matrix with cycle times and period
        bound: Upper bound policy for the throughput search

    Returns:
        PlanResult for the matrix
    """
    return LinePlanner(matrix, bound=bound).plan()
