"""Tests for capability matrix validation."""

from lineplan.models import CapabilityMatrix
from lineplan.validation import MatrixValidator, ValidationSeverity


class TestMatrixValidator:
    """Tests for MatrixValidator checks."""

    def test_clean_matrix(self, three_op_matrix):
        """Test a valid matrix produces no issues."""
        validator = MatrixValidator(three_op_matrix)
        assert validator.validate_all() == []
        assert not validator.has_errors()

    def test_unreachable_operation(self, unreachable_matrix):
        """Test each unreachable operation is an error with its index."""
        validator = MatrixValidator(unreachable_matrix)
        issues = validator.validate_all()

        errors = validator.get_issues_by_severity(ValidationSeverity.ERROR)
        assert len(errors) == 1
        assert errors[0].id == "UNREACHABLE_OPERATION"
        assert errors[0].metadata == {"operation": 2}
        assert errors[0].description == "Operation 3 has no capable TM. Set CT > 0 for at least one TM."
        assert validator.has_errors()
        assert errors[0] in issues

    def test_multiple_unreachable_operations(self):
        """Test every unreachable operation is reported."""
        matrix = CapabilityMatrix.from_rows([[0, 10, 0], [0, 0, 0]])
        validator = MatrixValidator(matrix)
        validator.validate_all()
        errors = validator.get_issues_by_severity(ValidationSeverity.ERROR)
        assert [issue.metadata["operation"] for issue in errors] == [0, 2]

    def test_degenerate_empty_matrix(self):
        """Test a matrix without machines is critical."""
        validator = MatrixValidator(CapabilityMatrix(cycle_times=[]))
        issues = validator.validate_all()
        assert len(issues) == 1
        assert issues[0].id == "DEGENERATE_INPUT"
        assert issues[0].severity == ValidationSeverity.CRITICAL
        assert "no machines" in issues[0].description

    def test_degenerate_no_operations(self):
        """Test machines without operation columns are critical."""
        validator = MatrixValidator(CapabilityMatrix(cycle_times=[[], []]))
        issues = validator.validate_all()
        assert [issue.id for issue in issues] == ["DEGENERATE_INPUT"]
        assert "no operations" in issues[0].description

    def test_degenerate_period(self):
        """Test a non-positive period is critical and skips other checks."""
        matrix = CapabilityMatrix.from_rows([[10, 0]], period_seconds=0)
        validator = MatrixValidator(matrix)
        issues = validator.validate_all()
        assert [issue.id for issue in issues] == ["DEGENERATE_INPUT"]
        assert "period 0s is not positive" in issues[0].description

    def test_cycle_time_exceeds_period_warning(self, caplog):
        """Test a capable cell slower than the period is a logged warning."""
        matrix = CapabilityMatrix.from_rows([[1000, 10]], period_seconds=900)
        validator = MatrixValidator(matrix)
        with caplog.at_level("WARNING"):
            issues = validator.validate_all()
        assert [issue.id for issue in issues] == ["CYCLE_TIME_EXCEEDS_PERIOD"]
        assert not validator.has_errors()
        assert "TM 1 needs 1000s for Operation 1" in caplog.text

    def test_idle_machine_info(self):
        """Test machines with no capable cell are reported as info."""
        matrix = CapabilityMatrix.from_rows([[10, 10], [0, 0]])
        validator = MatrixValidator(matrix)
        validator.validate_all()
        info = validator.get_issues_by_severity(ValidationSeverity.INFO)
        assert [issue.id for issue in info] == ["IDLE_MACHINE"]
        assert info[0].metadata == {"machine": 1}
        assert not validator.has_errors()

    def test_validate_all_resets_issues(self, unreachable_matrix):
        """Test running validation twice does not duplicate issues."""
        validator = MatrixValidator(unreachable_matrix)
        validator.validate_all()
        assert len(validator.validate_all()) == len(validator.issues)
        assert len(validator.issues) == 1
