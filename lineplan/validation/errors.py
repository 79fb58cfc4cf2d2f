"""Exceptions raised by the line planner."""

from typing import Dict, List, Optional


class PlanningError(Exception):
    """Base exception for planning errors with context."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with context."""
        msg = f"Line Planning Error: {self.message}"
        if self.context:
            msg += "\n\nContext:"
            for key, value in self.context.items():
                msg += f"\n  {key}: {value}"
        return msg


class DegenerateInputError(PlanningError):
    """Raised when the matrix has no machines, no operations or a non-positive period."""
    pass


class UnreachableOperationError(PlanningError):
    """Raised when one or more operations have no capable machine."""

    def __init__(self, operations: List[int], context: Optional[Dict] = None):
        self.operations = list(operations)
        labels = ", ".join(str(op + 1) for op in self.operations)
        super().__init__(
            f"Operation(s) {labels} have no capable TM. Set CT > 0 for at least one TM.",
            context={"operations": self.operations, **(context or {})},
        )


class PlanningShortfallError(PlanningError):
    """
    Raised when the allocation heuristic cannot place a target the
    feasibility check accepted.

    This is a consistency failure between the two heuristics, not an
    input problem.
    """

    def __init__(self, target_units: int, shortfalls: Dict[int, int], assignment=None):
        self.target_units = target_units
        self.shortfalls = dict(shortfalls)
        self.assignment = assignment
        missing = ", ".join(
            f"operation {op + 1}: {units} units" for op, units in sorted(self.shortfalls.items())
        )
        super().__init__(
            f"Allocation could not place {target_units} units per operation ({missing})",
            context={"target_units": target_units, "shortfalls": self.shortfalls},
        )
