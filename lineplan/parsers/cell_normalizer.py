"""Normalization of raw cycle time input.

Cycle time tables come from spreadsheets and forms, so cells can be blank,
text, NaN or negative. Everything that is not a usable cycle time is read
as 0 ("machine cannot perform this operation") before the matrix is built.
"""

import math
from typing import Any, List, Optional, Sequence

import pandas as pd

from lineplan.constants import (
    DEFAULT_MACHINE_LABEL,
    DEFAULT_OPERATION_LABEL,
    DEFAULT_PERIOD_SECONDS,
)
from lineplan.models.capability_matrix import CapabilityMatrix


def _is_missing(raw: Any) -> bool:
    """True for None and pandas/numpy missing scalars."""
    if raw is None:
        return True
    try:
        return bool(pd.isna(raw))
    except (TypeError, ValueError):
        return False


def _to_float(raw: Any) -> Optional[float]:
    # Checkbox cells (True/False) are not cycle times
    if _is_missing(raw) or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def normalize_cycle_time(raw: Any) -> float:
    """
    Read one cycle time cell.

    Args:
        raw: Cell value (number, numeric string, blank, text, ...)

    Returns:
        Cycle time in seconds, or 0.0 if the cell is blank, non-numeric,
        non-finite or negative

    Example:
        >>> normalize_cycle_time("30")
        30.0
        >>> normalize_cycle_time("n/a")
        0.0
    """
    value = _to_float(raw)
    if value is None or value < 0:
        return 0.0
    return value


def normalize_count(raw: Any, minimum: int = 1) -> int:
    """
    Read a machine or operation count.

    Non-numeric counts and counts below ``minimum`` become ``minimum``;
    fractional counts are truncated.
    """
    value = _to_float(raw)
    if value is None:
        return minimum
    return max(minimum, int(value))


def resize_matrix(
    rows: Sequence[Sequence[Any]],
    machine_count: int,
    operation_count: int,
) -> List[List[float]]:
    """
    Fit raw rows to the requested dimensions.

    Missing rows and cells are filled with 0; extra rows and cells are
    dropped. Every kept cell is passed through ``normalize_cycle_time``.

    Args:
        rows: Raw rows, one per machine
        machine_count: Number of machine rows to return
        operation_count: Number of cells per row

    Returns:
        machine_count x operation_count list of cycle times
    """
    resized = []
    for machine in range(machine_count):
        row = rows[machine] if machine < len(rows) and rows[machine] is not None else []
        resized.append([
            normalize_cycle_time(row[operation]) if operation < len(row) else 0.0
            for operation in range(operation_count)
        ])
    return resized


def resize_names(names: Optional[Sequence[Any]], count: int, label: str) -> List[str]:
    """Keep existing non-blank names and fill the rest with '{label} {k}'."""
    names = list(names) if names is not None else []
    resized = []
    for k in range(count):
        name = names[k] if k < len(names) else None
        text = "" if _is_missing(name) else str(name).strip()
        resized.append(text or f"{label} {k + 1}")
    return resized


def normalize_matrix(
    raw_rows: Sequence[Sequence[Any]],
    machine_count: Any = None,
    operation_count: Any = None,
    period_seconds: float = DEFAULT_PERIOD_SECONDS,
    operation_names: Optional[Sequence[Any]] = None,
    machine_names: Optional[Sequence[Any]] = None,
) -> CapabilityMatrix:
    """
    Build a capability matrix from raw table input.

    Counts given explicitly are normalized to at least 1. Counts that are
    not given are taken from the data, so an empty table produces an empty
    matrix, which the validator reports as degenerate.

    Args:
        raw_rows: Raw cycle time rows, one per machine
        machine_count: Requested machine count (default: number of rows)
        operation_count: Requested operation count (default: longest row)
        period_seconds: Planning period in seconds
        operation_names: Optional operation names
        machine_names: Optional machine names

    Returns:
        CapabilityMatrix with normalized cells
    """
    raw_rows = [list(row) if row is not None else [] for row in raw_rows]

    if machine_count is None:
        machines = len(raw_rows)
    else:
        machines = normalize_count(machine_count)
    if operation_count is None:
        operations = max((len(row) for row in raw_rows), default=0)
    else:
        operations = normalize_count(operation_count)

    cycle_times = resize_matrix(raw_rows, machines, operations)
    if not cycle_times:
        operations = 0

    return CapabilityMatrix.from_rows(
        cycle_times,
        period_seconds=period_seconds,
        operation_names=(
            resize_names(operation_names, operations, DEFAULT_OPERATION_LABEL)
            if operation_names is not None else None
        ),
        machine_names=(
            resize_names(machine_names, machines, DEFAULT_MACHINE_LABEL)
            if machine_names is not None else None
        ),
    )
