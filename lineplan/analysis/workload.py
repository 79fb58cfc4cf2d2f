"""Workload analysis for line plans.

Derives reporting metrics from a completed assignment:
- Busy time per machine
- Workload relative to the busiest machine
- Each machine's share of every operation's output
"""

from dataclasses import dataclass
from typing import List, Optional
import pandas as pd

from lineplan.models.assignment import Assignment
from lineplan.models.capability_matrix import CapabilityMatrix
from .formatting import format_percent, round_half_away_from_zero


@dataclass
class OperationLoad:
    """One operation's contribution to a machine's plan."""
    operation: int
    name: str
    units: int
    share_percent: float

    def __str__(self) -> str:
        return f"{self.name} {self.units} pcs · {format_percent(self.share_percent)}"


@dataclass
class WorkloadReport:
    """
    Workload metrics for one assignment.

    Attributes:
        matrix: Capability matrix the assignment was built for
        assignment: Analyzed assignment
        used_time: Busy seconds per machine
        workload_percent: Busy time as percentage of the busiest machine (all 0 if idle)
        operation_totals: Units produced per operation
        operation_share: operation_share[machine][operation] percentage of that operation's units
    """
    matrix: CapabilityMatrix
    assignment: Assignment
    used_time: List[float]
    workload_percent: List[float]
    operation_totals: List[int]
    operation_share: List[List[float]]

    @property
    def max_used_time(self) -> float:
        return max(self.used_time, default=0.0)

    @property
    def busiest_machine(self) -> Optional[int]:
        """Index of the machine with the most busy time (None if every machine is idle)."""
        if self.max_used_time <= 0:
            return None
        return self.used_time.index(self.max_used_time)

    def idle_time(self, machine: int) -> float:
        """Seconds of the period the machine is not busy."""
        return self.matrix.period_seconds - self.used_time[machine]

    def display_workload(self, machine: int) -> float:
        """Workload rounded for display."""
        return round_half_away_from_zero(self.workload_percent[machine])

    def display_share(self, machine: int, operation: int) -> float:
        """Operation share rounded for display."""
        return round_half_away_from_zero(self.operation_share[machine][operation])

    def machine_breakdown(self, machine: int) -> List[OperationLoad]:
        """
        Operations a machine works on, in operation order.

        Args:
            machine: Machine index

        Returns:
            List of OperationLoad for operations with units > 0 (empty if idle)
        """
        return [
            OperationLoad(
                operation=operation,
                name=self.matrix.operation_name(operation),
                units=self.assignment.quantity(machine, operation),
                share_percent=self.operation_share[machine][operation],
            )
            for operation in range(self.matrix.operation_count)
            if self.assignment.quantity(machine, operation) > 0
            and self.matrix.is_capable(machine, operation)
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per (machine, operation) pair."""
        rows = []
        for machine in range(self.matrix.machine_count):
            for operation in range(self.matrix.operation_count):
                units = self.assignment.quantity(machine, operation)
                ct = self.matrix.cycle_time(machine, operation)
                rows.append({
                    'Machine': self.matrix.machine_name(machine),
                    'Operation': self.matrix.operation_name(operation),
                    'Units': units,
                    'Cycle Time (s)': ct,
                    'Busy Time (s)': units * ct,
                    'Share %': self.display_share(machine, operation),
                })
        return pd.DataFrame(rows)

    def machine_summary(self) -> pd.DataFrame:
        """One row per machine with busy time, workload and idle time."""
        return pd.DataFrame([
            {
                'Machine': self.matrix.machine_name(machine),
                'Units': self.assignment.machine_totals()[machine],
                'Busy Time (s)': self.used_time[machine],
                'Workload %': self.display_workload(machine),
                'Idle Time (s)': self.idle_time(machine),
            }
            for machine in range(self.matrix.machine_count)
        ])

    def summary_lines(self, max_units: int) -> List[str]:
        """
        Plain-text plan summary.

        Args:
            max_units: Line output the assignment was built for

        Returns:
            Header line followed by one line per machine
        """
        lines = [
            f"Line output {max_units} units per {self.matrix.period_seconds:g}s. "
            f"Operation workload is shown as share of total pcs for that operation."
        ]
        for machine in range(self.matrix.machine_count):
            loads = self.machine_breakdown(machine)
            detail = ", ".join(str(load) for load in loads) if loads else "No operation assigned"
            lines.append(
                f"{self.matrix.machine_name(machine)} "
                f"({format_percent(self.workload_percent[machine])}): {detail}"
            )
        return lines


class WorkloadAnalyzer:
    """Compute workload metrics for assignments over one capability matrix."""

    def __init__(self, matrix: CapabilityMatrix):
        """
        Initialize analyzer.

        Args:
            matrix: Capability matrix with cycle times and period
        """
        self.matrix = matrix

    def analyze(self, assignment: Assignment) -> WorkloadReport:
        """
        Derive busy time, workload and operation share from an assignment.

        Args:
            assignment: Completed assignment for this matrix

        Returns:
            WorkloadReport with unrounded percentages

        Raises:
            ValueError: If the assignment dimensions do not match the matrix
        """
        if (assignment.machine_count, assignment.operation_count) != (
            self.matrix.machine_count, self.matrix.operation_count
        ):
            raise ValueError(
                f"Assignment is {assignment.machine_count}x{assignment.operation_count}, "
                f"matrix is {self.matrix.machine_count}x{self.matrix.operation_count}"
            )

        used_time = assignment.used_time(self.matrix)
        max_time = max(used_time, default=0.0)
        workload_percent = [
            (t / max_time) * 100 if max_time > 0 else 0.0
            for t in used_time
        ]

        totals = assignment.operation_totals()
        operation_share = [
            [
                (assignment.quantity(machine, operation) / totals[operation]) * 100
                if totals[operation] > 0 else 0.0
                for operation in range(assignment.operation_count)
            ]
            for machine in range(assignment.machine_count)
        ]

        return WorkloadReport(
            matrix=self.matrix,
            assignment=assignment,
            used_time=used_time,
            workload_percent=workload_percent,
            operation_totals=totals,
            operation_share=operation_share,
        )
