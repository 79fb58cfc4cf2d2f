"""Capability matrix data model for machines and operations."""

import math
from fractions import Fraction
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lineplan.constants import (
    DEFAULT_MACHINE_LABEL,
    DEFAULT_OPERATION_LABEL,
    DEFAULT_PERIOD_SECONDS,
)


class CapabilityMatrix(BaseModel):
    """
    Per-(machine, operation) cycle times for one planning request.

    A cycle time of 0 means the machine cannot perform the operation.
    Cells must already be normalized (see ``lineplan.parsers.cell_normalizer``);
    negative or non-finite values are rejected here.

    Attributes:
        cycle_times: cycle_times[machine][operation] in seconds
        period_seconds: Planning period in seconds
        operation_names: Optional display names, one per operation
        machine_names: Optional display names, one per machine

    Example:
        >>> matrix = CapabilityMatrix.from_rows([[30, 15, 0], [0, 15, 35]])
        >>> matrix.capable_machines(1)
        [(0, 15.0), (1, 15.0)]
        >>> matrix.tightness_order()
        [2, 0, 1]
    """
    model_config = ConfigDict(frozen=True)

    cycle_times: List[List[float]] = Field(
        ...,
        description="Cycle time in seconds per machine (rows) and operation (columns)"
    )
    period_seconds: float = Field(
        default=DEFAULT_PERIOD_SECONDS,
        description="Planning period in seconds"
    )
    operation_names: Optional[List[str]] = Field(
        None,
        description="Operation display names"
    )
    machine_names: Optional[List[str]] = Field(
        None,
        description="Machine display names"
    )

    @field_validator('cycle_times')
    @classmethod
    def valid_cycle_times(cls, v: List[List[float]]) -> List[List[float]]:
        """Ensure the matrix is rectangular with finite, non-negative cells."""
        if not v:
            return v
        width = len(v[0])
        for i, row in enumerate(v):
            if len(row) != width:
                raise ValueError(
                    f"Cycle time rows must have equal length: row 0 has {width}, row {i} has {len(row)}"
                )
            for j, value in enumerate(row):
                if not math.isfinite(value) or value < 0:
                    raise ValueError(
                        f"Cycle time for machine {i}, operation {j} must be finite and >= 0, got {value}"
                    )
        return [[float(value) for value in row] for row in v]

    @field_validator('period_seconds')
    @classmethod
    def finite_period(cls, v: float) -> float:
        """Ensure the period is a finite number (positivity is checked by the validator)."""
        if not math.isfinite(v):
            raise ValueError(f"Period must be finite, got {v}")
        return v

    @model_validator(mode='after')
    def validate_names(self):
        """Validate display name lists match the matrix dimensions."""
        if self.operation_names is not None and len(self.operation_names) != self.operation_count:
            raise ValueError(
                f"Expected {self.operation_count} operation names, got {len(self.operation_names)}"
            )
        if self.machine_names is not None and len(self.machine_names) != self.machine_count:
            raise ValueError(
                f"Expected {self.machine_count} machine names, got {len(self.machine_names)}"
            )
        return self

    @classmethod
    def from_rows(
        cls,
        rows: List[List[float]],
        period_seconds: float = DEFAULT_PERIOD_SECONDS,
        operation_names: Optional[List[str]] = None,
        machine_names: Optional[List[str]] = None,
    ) -> "CapabilityMatrix":
        """Build a matrix from nested rows of cycle times."""
        return cls(
            cycle_times=[list(row) for row in rows],
            period_seconds=period_seconds,
            operation_names=list(operation_names) if operation_names is not None else None,
            machine_names=list(machine_names) if machine_names is not None else None,
        )

    @property
    def machine_count(self) -> int:
        return len(self.cycle_times)

    @property
    def operation_count(self) -> int:
        return len(self.cycle_times[0]) if self.cycle_times else 0

    def cycle_time(self, machine: int, operation: int) -> float:
        return self.cycle_times[machine][operation]

    def is_capable(self, machine: int, operation: int) -> bool:
        return self.cycle_times[machine][operation] > 0

    def capable_machines(self, operation: int) -> List[Tuple[int, float]]:
        """
        List machines able to perform an operation.

        Args:
            operation: Operation index

        Returns:
            List of (machine index, cycle time) in ascending machine order
        """
        return [
            (machine, row[operation])
            for machine, row in enumerate(self.cycle_times)
            if row[operation] > 0
        ]

    @property
    def exact_period(self) -> Fraction:
        """Period as an exact fraction of its decimal value."""
        return Fraction(repr(float(self.period_seconds)))

    def exact_cycle_time(self, machine: int, operation: int) -> Fraction:
        """
        Cycle time as an exact fraction of its decimal value (0.1 -> 1/10).

        Time accounting uses these values so that repeated additions of a
        decimal cycle time land exactly on the period.
        """
        return Fraction(repr(self.cycle_times[machine][operation]))

    def exact_capable_machines(self, operation: int) -> List[Tuple[int, Fraction]]:
        """Same as ``capable_machines`` with exact cycle times."""
        return [
            (machine, self.exact_cycle_time(machine, operation))
            for machine, _ in self.capable_machines(operation)
        ]

    def unreachable_operations(self) -> List[int]:
        """Operation indices that no machine can perform."""
        return [
            operation
            for operation in range(self.operation_count)
            if not self.capable_machines(operation)
        ]

    def operation_tightness(self, operation: int) -> int:
        """
        Upper bound on units an operation could receive with all its
        capable machines to itself for the whole period.
        """
        return sum(
            math.floor(self.exact_period / ct)
            for _, ct in self.exact_capable_machines(operation)
        )

    def tightness_order(self) -> List[int]:
        """Operation indices sorted from most to least constrained."""
        return sorted(range(self.operation_count), key=self.operation_tightness)

    def operation_name(self, operation: int) -> str:
        """Display name for an operation, falling back to 'Operation N'."""
        if self.operation_names is not None:
            name = (self.operation_names[operation] or "").strip()
            if name:
                return name
        return f"{DEFAULT_OPERATION_LABEL} {operation + 1}"

    def machine_name(self, machine: int) -> str:
        """Display name for a machine, falling back to 'TM N'."""
        if self.machine_names is not None:
            name = (self.machine_names[machine] or "").strip()
            if name:
                return name
        return f"{DEFAULT_MACHINE_LABEL} {machine + 1}"

    def __str__(self) -> str:
        """String representation."""
        return (
            f"CapabilityMatrix: {self.machine_count} machines x "
            f"{self.operation_count} operations, period={self.period_seconds:g}s"
        )
