"""Assignment of unit counts to (machine, operation) pairs."""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .capability_matrix import CapabilityMatrix


@dataclass(frozen=True)
class Assignment:
    """
    Unit counts produced by each machine for each operation.

    Attributes:
        quantities: quantities[machine][operation] -> units (non-negative)
        target_units: Units every operation was asked to produce
    """
    quantities: Tuple[Tuple[int, ...], ...]
    target_units: int

    @classmethod
    def zeros(cls, machine_count: int, operation_count: int, target_units: int = 0) -> "Assignment":
        """Create an all-zero assignment."""
        return cls(
            quantities=tuple(tuple(0 for _ in range(operation_count)) for _ in range(machine_count)),
            target_units=target_units,
        )

    @classmethod
    def from_lists(cls, quantities: Sequence[Sequence[int]], target_units: int) -> "Assignment":
        """Freeze a mutable quantity table into an assignment."""
        return cls(
            quantities=tuple(tuple(int(q) for q in row) for row in quantities),
            target_units=target_units,
        )

    @property
    def machine_count(self) -> int:
        return len(self.quantities)

    @property
    def operation_count(self) -> int:
        return len(self.quantities[0]) if self.quantities else 0

    def quantity(self, machine: int, operation: int) -> int:
        return self.quantities[machine][operation]

    def operation_totals(self) -> List[int]:
        """Units produced per operation across all machines."""
        return [
            sum(row[operation] for row in self.quantities)
            for operation in range(self.operation_count)
        ]

    def machine_totals(self) -> List[int]:
        """Units produced per machine across all operations."""
        return [sum(row) for row in self.quantities]

    def used_time(self, matrix: CapabilityMatrix) -> List[float]:
        """
        Busy time per machine.

        Args:
            matrix: Capability matrix the assignment was built for

        Returns:
            List with sum of units x cycle time per machine (seconds)
        """
        return [
            float(sum(q * matrix.exact_cycle_time(machine, operation) for operation, q in enumerate(row)))
            for machine, row in enumerate(self.quantities)
        ]

    def shortfalls(self) -> Dict[int, int]:
        """
        Operations that did not reach the target.

        Returns:
            Dict mapping operation index to missing units (empty if complete)
        """
        return {
            operation: self.target_units - total
            for operation, total in enumerate(self.operation_totals())
            if total < self.target_units
        }

    @property
    def is_complete(self) -> bool:
        """True if every operation reached the target."""
        return not self.shortfalls()

    def to_lists(self) -> List[List[int]]:
        return [list(row) for row in self.quantities]

    def __str__(self) -> str:
        status = "complete" if self.is_complete else f"short on {len(self.shortfalls())} operations"
        return (
            f"Assignment ({self.machine_count}x{self.operation_count}): "
            f"{self.target_units} units per operation - {status}"
        )
