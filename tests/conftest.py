"""Pytest configuration and shared fixtures."""

import random

import pytest

from lineplan.models import CapabilityMatrix


@pytest.fixture
def single_machine_matrix():
    """One machine, one operation, 100s cycle time."""
    return CapabilityMatrix.from_rows([[100]], period_seconds=900)


@pytest.fixture
def two_machine_single_op_matrix():
    """Two machines sharing one operation (100s and 150s)."""
    return CapabilityMatrix.from_rows([[100], [150]], period_seconds=900)


@pytest.fixture
def three_op_matrix():
    """
    Two machines, three operations.

    Operation 1 only on TM 1 (30s), operation 2 on both (15s each),
    operation 3 only on TM 2 (35s).
    """
    return CapabilityMatrix.from_rows([[30, 15, 0], [0, 15, 35]], period_seconds=900)


@pytest.fixture
def unreachable_matrix():
    """Operation 3 has no capable machine."""
    return CapabilityMatrix.from_rows([[30, 15, 0], [0, 15, 0]], period_seconds=900)


@pytest.fixture
def non_monotone_matrix():
    """
    Greedy feasibility holds at 1 and 3 units but not at 2.

    At 2 units operation 2 fits entirely on TM 1 and leaves no time for
    operation 3; at 3 units it spills to TM 2 and leaves 10s free.
    """
    return CapabilityMatrix.from_rows([[20, 30, 1], [0, 30, 0]], period_seconds=100)


@pytest.fixture
def shortfall_matrix():
    """
    Feasibility accepts 2 units, but balancing sends the second unit of
    operation 1 to TM 2 and leaves too little time for operation 2.
    """
    return CapabilityMatrix.from_rows([[5, 0], [6, 3]], period_seconds=10)


def random_cycle_time(rng: random.Random) -> float:
    """Cycle time between 5.0s and 120.0s with one decimal place."""
    return rng.randint(50, 1200) / 10


def make_random_matrix(seed: int, max_machines: int = 5, max_operations: int = 5) -> CapabilityMatrix:
    """Build a random matrix where every operation has at least one capable machine."""
    rng = random.Random(seed)
    machines = rng.randint(1, max_machines)
    operations = rng.randint(1, max_operations)
    rows = [
        [rng.choice([0, 0, random_cycle_time(rng)]) for _ in range(operations)]
        for _ in range(machines)
    ]
    for operation in range(operations):
        if all(row[operation] == 0 for row in rows):
            rows[rng.randrange(machines)][operation] = random_cycle_time(rng)
    return CapabilityMatrix.from_rows(rows, period_seconds=rng.choice([300, 900, 1800]))


@pytest.fixture
def random_matrices():
    """Seeded random matrices for property checks."""
    return [make_random_matrix(seed) for seed in range(60)]
