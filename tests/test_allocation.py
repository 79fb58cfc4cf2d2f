"""Tests for the balanced allocation planner."""

import pytest

from lineplan.models import CapabilityMatrix
from lineplan.production.allocation import AllocationPlanner
from lineplan.production.throughput import MaxThroughputSolver


class TestAllocationPlanner:
    """Tests for AllocationPlanner.build_plan."""

    def test_single_machine(self, single_machine_matrix):
        """Test all units land on the only machine."""
        assignment = AllocationPlanner(single_machine_matrix).build_plan(9)
        assert assignment.to_lists() == [[9]]
        assert assignment.used_time(single_machine_matrix) == [900.0]

    def test_balances_across_machines(self, two_machine_single_op_matrix):
        """Test units alternate toward the less loaded machine."""
        assignment = AllocationPlanner(two_machine_single_op_matrix).build_plan(9)
        assert assignment.to_lists() == [[5], [4]]
        assert assignment.used_time(two_machine_single_op_matrix) == [500.0, 600.0]

    def test_three_op_matrix(self, three_op_matrix):
        """Test the shared operation is split to even out busy time."""
        assignment = AllocationPlanner(three_op_matrix).build_plan(22)
        assert assignment.to_lists() == [[22, 15, 0], [0, 7, 22]]
        assert assignment.used_time(three_op_matrix) == [885.0, 875.0]
        assert assignment.is_complete

    def test_decimal_cycle_time_fills_period(self):
        """Test repeated 0.1s units land exactly on the period end."""
        matrix = CapabilityMatrix.from_rows([[0.1]], period_seconds=900)
        assignment = AllocationPlanner(matrix).build_plan(9000)
        assert assignment.to_lists() == [[9000]]
        assert assignment.is_complete
        assert assignment.used_time(matrix) == [900.0]

    def test_zero_units(self, three_op_matrix):
        """Test zero target gives an all-zero assignment."""
        assignment = AllocationPlanner(three_op_matrix).build_plan(0)
        assert assignment.to_lists() == [[0, 0, 0], [0, 0, 0]]
        assert assignment.is_complete

    def test_negative_units_rejected(self, three_op_matrix):
        """Test negative targets are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            AllocationPlanner(three_op_matrix).build_plan(-3)

    def test_tie_prefers_smaller_cycle_time(self):
        """Test equal load picks the faster machine, then the lower index."""
        matrix = CapabilityMatrix.from_rows([[20], [10], [10]], period_seconds=900)
        assignment = AllocationPlanner(matrix).build_plan(1)
        assert assignment.to_lists() == [[0], [1], [0]]

    def test_shortfall_left_visible(self, shortfall_matrix):
        """Test an operation without room stays short instead of overfilling."""
        assignment = AllocationPlanner(shortfall_matrix).build_plan(2)
        assert assignment.to_lists() == [[1, 0], [1, 1]]
        assert assignment.shortfalls() == {1: 1}
        assert max(assignment.used_time(shortfall_matrix)) <= shortfall_matrix.period_seconds

    def test_non_monotone_matrix_at_three(self, non_monotone_matrix):
        """Test the pooled-bound output is fully placed."""
        assignment = AllocationPlanner(non_monotone_matrix).build_plan(3)
        assert assignment.to_lists() == [[3, 1, 3], [0, 2, 0]]
        assert assignment.used_time(non_monotone_matrix) == [93.0, 60.0]


class TestAllocationProperties:
    """Property checks over random matrices at their maximum output."""

    def test_period_never_exceeded(self, random_matrices):
        """Test no machine is busy longer than the period."""
        for matrix in random_matrices:
            units = MaxThroughputSolver(matrix).find_max_units()
            assignment = AllocationPlanner(matrix).build_plan(units)
            for used in assignment.used_time(matrix):
                assert used <= matrix.period_seconds

    def test_operation_totals_never_above_target(self, random_matrices):
        """Test every operation produces at most the target."""
        for matrix in random_matrices:
            units = MaxThroughputSolver(matrix).find_max_units()
            assignment = AllocationPlanner(matrix).build_plan(units)
            assert all(total <= units for total in assignment.operation_totals())

    def test_only_capable_machines_used(self, random_matrices):
        """Test units are never assigned where the cycle time is 0."""
        for matrix in random_matrices:
            units = MaxThroughputSolver(matrix).find_max_units()
            assignment = AllocationPlanner(matrix).build_plan(units)
            for machine in range(matrix.machine_count):
                for operation in range(matrix.operation_count):
                    if not matrix.is_capable(machine, operation):
                        assert assignment.quantity(machine, operation) == 0

    def test_deterministic(self, random_matrices):
        """Test identical input gives an identical assignment."""
        for matrix in random_matrices:
            units = MaxThroughputSolver(matrix).find_max_units()
            assert (
                AllocationPlanner(matrix).build_plan(units)
                == AllocationPlanner(matrix).build_plan(units)
            )
