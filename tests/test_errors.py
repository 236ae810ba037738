"""Tests for the polity error hierarchy."""

import pytest

from polity.errors import (
    CliqueBudgetExceeded,
    PolityError,
    SerializationError,
    ValidationError,
)


def test_polity_error_hierarchy():
    """Test error inheritance hierarchy."""
    assert issubclass(CliqueBudgetExceeded, PolityError)
    assert issubclass(SerializationError, PolityError)
    assert issubclass(ValidationError, PolityError)

    assert issubclass(PolityError, Exception)


def test_clique_budget_exceeded_attributes():
    """Test CliqueBudgetExceeded stores call count and budget."""
    error = CliqueBudgetExceeded(501, 500)

    assert error.calls == 501
    assert error.budget == 500
    assert "501 calls > 500" in str(error)


def test_serialization_error_can_be_raised():
    """Test SerializationError can be raised and caught as PolityError."""
    with pytest.raises(PolityError):
        raise SerializationError("Failed to restore tracker")


def test_validation_error_can_be_raised():
    """Test ValidationError can be raised and caught."""
    with pytest.raises(ValidationError):
        raise ValidationError("Invalid input at boundary")
