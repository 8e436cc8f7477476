"""
Unit tests for custom exception hierarchy.

Tests status code mapping and error serialization.
"""

import pytest

from analysis_pro.core.exceptions import (
    AppError,
    MalformedDataError,
    NotFoundError,
    SessionBusyError,
    ValidationError,
)

# ===== Base AppError Tests =====


class TestAppError:
    """Test base AppError functionality"""

    def test_create_app_error(self):
        """Test creating basic AppError"""
        error = AppError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.status_code == 500
        assert error.error_type == "internal_error"

    def test_app_error_to_dict(self):
        """Test AppError serialization to dict"""
        error = AppError("Error occurred", symbol="TCS", page=3)

        assert error.to_dict() == {
            "error_type": "internal_error",
            "message": "Error occurred",
            "status_code": 500,
            "symbol": "TCS",
            "page": 3,
        }


# ===== Subclass mapping =====


class TestErrorMapping:
    """Test each subclass maps to its status code"""

    @pytest.mark.parametrize(
        "error_cls,status_code,error_type",
        [
            (ValidationError, 400, "validation_error"),
            (NotFoundError, 404, "not_found_error"),
            (SessionBusyError, 409, "session_busy_error"),
            (MalformedDataError, 502, "malformed_data_error"),
        ],
    )
    def test_status_codes(self, error_cls, status_code, error_type):
        """Test status code and error type per class"""
        error = error_cls("boom")

        assert isinstance(error, AppError)
        assert error.status_code == status_code
        assert error.error_type == error_type

    def test_every_subclass_is_mapped(self):
        """Test the mapping table covers the whole hierarchy"""
        assert set(AppError.__subclasses__()) == {
            ValidationError,
            NotFoundError,
            SessionBusyError,
            MalformedDataError,
        }
