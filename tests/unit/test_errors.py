"""Unit tests for the errors module."""

import pytest

from pagescore.models.common import ErrorDetail
from pagescore.utils.errors import (
    ConfigurationError,
    ConfigValidationError,
    DanglingReferenceError,
    DuplicateIdError,
    InvalidConfigError,
    InvalidResultError,
    InvalidWeightError,
    MissingResultError,
    PageScoreError,
)


class TestPageScoreError:
    """Tests for base PageScoreError."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = PageScoreError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "UNKNOWN_ERROR"
        assert error.details == {}

    def test_error_with_code_and_details(self):
        """Test error with custom code and details."""
        error = PageScoreError(
            "Test error",
            code="TEST_ERROR",
            details={"key": "value"},
        )
        assert error.code == "TEST_ERROR"
        assert error.details == {"key": "value"}

    def test_to_error_detail(self):
        """Test conversion to ErrorDetail."""
        error = PageScoreError("Test", code="TEST", details={"a": 1})
        detail = error.to_error_detail()

        assert isinstance(detail, ErrorDetail)
        assert detail.code == "TEST"
        assert detail.message == "Test"
        assert detail.details == {"a": 1}


class TestConfigValidationErrors:
    """Tests for configuration validation errors."""

    def test_duplicate_id(self):
        """Test DuplicateIdError."""
        error = DuplicateIdError("audit", "viewport")

        assert isinstance(error, ConfigValidationError)
        assert error.code == "DUPLICATE_ID"
        assert error.kind == "audit"
        assert error.entity_id == "viewport"
        assert "viewport" in str(error)

    def test_duplicate_id_with_scope(self):
        """Test DuplicateIdError scoped to a pass."""
        error = DuplicateIdError("gatherer", "offline", scope="pass offlinePass")

        assert "in pass offlinePass" in error.message
        assert error.details["scope"] == "pass offlinePass"

    def test_dangling_reference(self):
        """Test DanglingReferenceError."""
        error = DanglingReferenceError("group", "seo-mobile", "category seo")

        assert error.code == "DANGLING_REFERENCE"
        assert error.referrer == "category seo"
        assert error.message == "category seo references unknown group: seo-mobile"

    def test_invalid_weight(self):
        """Test InvalidWeightError."""
        error = InvalidWeightError("viewport", "seo", -1)

        assert error.code == "INVALID_WEIGHT"
        assert error.weight == -1
        assert error.details == {"audit_id": "viewport", "category_id": "seo", "weight": "-1"}

    def test_invalid_config(self):
        """Test InvalidConfigError."""
        error = InvalidConfigError("bad shape", field="passes")

        assert error.code == "INVALID_CONFIG"
        assert error.field == "passes"
        assert error.details == {"field": "passes"}

    @pytest.mark.parametrize(
        "error",
        [
            DuplicateIdError("audit", "a"),
            DanglingReferenceError("audit", "a", "category c"),
            InvalidWeightError("a", "c", float("nan")),
            InvalidConfigError("bad"),
        ],
    )
    def test_common_base(self, error):
        """Test that all validation errors can be caught together."""
        assert isinstance(error, ConfigValidationError)
        assert isinstance(error, PageScoreError)


class TestOtherErrors:
    """Tests for result and settings errors."""

    def test_missing_result(self):
        """Test MissingResultError is not a validation error."""
        error = MissingResultError("viewport", "seo")

        assert not isinstance(error, ConfigValidationError)
        assert error.code == "MISSING_RESULT"
        assert error.to_error_detail().details == {"audit_id": "viewport", "category_id": "seo"}

    def test_missing_result_without_category(self):
        """Test MissingResultError details without a category."""
        assert MissingResultError("viewport").details == {"audit_id": "viewport"}

    def test_invalid_result(self):
        """Test InvalidResultError."""
        error = InvalidResultError("bad record", audit_id="a")

        assert error.code == "INVALID_RESULT"
        assert error.details == {"audit_id": "a"}

    def test_configuration_error(self):
        """Test ConfigurationError."""
        error = ConfigurationError("Invalid config", config_key="output.locale")

        assert error.code == "CONFIG_ERROR"
        assert error.details["config_key"] == "output.locale"
