"""Pre-flight validation for capability matrices.

This module checks a capability matrix for input problems before the
throughput search runs, and describes each problem with guidance for
fixing it in the cycle time table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

from lineplan.models.capability_matrix import CapabilityMatrix

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ValidationIssue:
    """Represents a single validation issue.

    Attributes:
        id: Unique identifier for the issue type
        category: Category of validation (e.g., "Dimensions", "Reachability")
        severity: Severity level (INFO, WARNING, ERROR, CRITICAL)
        title: Short title describing the issue
        description: Detailed description of the issue
        impact: Explanation of how this affects planning
        fix_guidance: Guidance on how to fix the issue
        metadata: Additional metadata about the issue (e.g. operation index)
    """
    id: str
    category: str
    severity: ValidationSeverity
    title: str
    description: str
    impact: str
    fix_guidance: str
    metadata: Optional[Dict[str, Any]] = None


class MatrixValidator:
    """Validates a capability matrix before planning.

    Validates:
    - Dimensions: at least one machine and one operation, positive period
    - Reachability: every operation has a capable machine
    - Cycle times: capable cells that cannot finish one unit in the period
    - Idle machines: machines that cannot perform any operation
    """

    BLOCKING_SEVERITIES = (ValidationSeverity.ERROR, ValidationSeverity.CRITICAL)

    def __init__(self, matrix: CapabilityMatrix):
        """Initialize validator with the matrix to validate.

        Args:
            matrix: Capability matrix to check
        """
        self.matrix = matrix
        self.issues: List[ValidationIssue] = []

    def validate_all(self) -> List[ValidationIssue]:
        """Run all validation checks and return list of issues.

        Reachability and cycle time checks are skipped for degenerate input,
        since the matrix has nothing to check.

        Returns:
            List of ValidationIssue objects found during validation
        """
        self.issues = []

        self.check_dimensions()
        if not self.has_errors():
            self.check_reachability()
            self.check_cycle_times()
            self.check_idle_machines()

        for issue in self.issues:
            if issue.severity == ValidationSeverity.WARNING:
                logger.warning(f"{issue.title}: {issue.description}")

        return self.issues

    def check_dimensions(self):
        """Reject matrices without machines or operations, or with a non-positive period."""
        problems = []
        if self.matrix.machine_count < 1:
            problems.append("no machines")
        if self.matrix.operation_count < 1:
            problems.append("no operations")
        if self.matrix.period_seconds <= 0:
            problems.append(f"period {self.matrix.period_seconds:g}s is not positive")

        if problems:
            self.issues.append(ValidationIssue(
                id="DEGENERATE_INPUT",
                category="Dimensions",
                severity=ValidationSeverity.CRITICAL,
                title="Degenerate planning input",
                description=f"The capability matrix has {', '.join(problems)}.",
                impact="No plan can be computed.",
                fix_guidance=(
                    "Enter at least one TM and one operation, and use a period greater than 0 seconds."
                ),
                metadata={
                    "machine_count": self.matrix.machine_count,
                    "operation_count": self.matrix.operation_count,
                    "period_seconds": self.matrix.period_seconds,
                },
            ))

    def check_reachability(self):
        """Flag every operation that no machine can perform."""
        for operation in self.matrix.unreachable_operations():
            self.issues.append(ValidationIssue(
                id="UNREACHABLE_OPERATION",
                category="Reachability",
                severity=ValidationSeverity.ERROR,
                title=f"{self.matrix.operation_name(operation)} has no capable TM",
                description=(
                    f"Operation {operation + 1} has no capable TM. "
                    f"Set CT > 0 for at least one TM."
                ),
                impact="Line output is undefined while any operation cannot be produced.",
                fix_guidance=(
                    f"Enter a cycle time greater than 0 in column "
                    f"'{self.matrix.operation_name(operation)}' for at least one TM."
                ),
                metadata={"operation": operation},
            ))

    def check_cycle_times(self):
        """Flag capable cells whose cycle time exceeds the whole period."""
        period = self.matrix.period_seconds
        for operation in range(self.matrix.operation_count):
            for machine, ct in self.matrix.capable_machines(operation):
                if ct > period:
                    self.issues.append(ValidationIssue(
                        id="CYCLE_TIME_EXCEEDS_PERIOD",
                        category="Cycle Times",
                        severity=ValidationSeverity.WARNING,
                        title="Cycle time longer than period",
                        description=(
                            f"{self.matrix.machine_name(machine)} needs {ct:g}s for "
                            f"{self.matrix.operation_name(operation)}, longer than the "
                            f"{period:g}s period."
                        ),
                        impact="This TM can never complete a unit of the operation within one period.",
                        fix_guidance="Check the cycle time unit (seconds) or set the cell to 0.",
                        metadata={"machine": machine, "operation": operation, "cycle_time": ct},
                    ))

    def check_idle_machines(self):
        """Report machines that cannot perform any operation."""
        for machine in range(self.matrix.machine_count):
            if not any(self.matrix.is_capable(machine, op) for op in range(self.matrix.operation_count)):
                self.issues.append(ValidationIssue(
                    id="IDLE_MACHINE",
                    category="Capacity",
                    severity=ValidationSeverity.INFO,
                    title=f"{self.matrix.machine_name(machine)} has no operations",
                    description=(
                        f"{self.matrix.machine_name(machine)} has CT = 0 for every operation."
                    ),
                    impact="This TM will stay idle in every plan.",
                    fix_guidance="Enter cycle times for the operations this TM can perform.",
                    metadata={"machine": machine},
                ))

    def has_errors(self) -> bool:
        """True if any blocking (ERROR or CRITICAL) issue was found."""
        return any(issue.severity in self.BLOCKING_SEVERITIES for issue in self.issues)

    def get_issues_by_severity(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        """Get issues filtered by severity.

        Args:
            severity: Severity level to filter by

        Returns:
            List of issues with the specified severity
        """
        return [issue for issue in self.issues if issue.severity == severity]
