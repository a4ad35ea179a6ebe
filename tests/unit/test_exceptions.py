"""
Tests for custom exceptions.
"""
import pytest
from rf_link_planner.utils.exceptions import (
    LinkPlannerError,
    ConfigurationError,
    DataValidationError,
    TowerValidationError,
    DataLoadError,
    GeometryError
)


def test_base_exception():
    """Test base exception."""
    with pytest.raises(LinkPlannerError):
        raise LinkPlannerError("Base error")


def test_configuration_error():
    """Test configuration error."""
    with pytest.raises(ConfigurationError):
        raise ConfigurationError("Invalid config")

    # Should also be catchable as base class
    with pytest.raises(LinkPlannerError):
        raise ConfigurationError("Invalid config")


def test_data_validation_error():
    """Test data validation error with details."""
    error = DataValidationError(
        "Validation failed",
        invalid_rows=3,
        details={'row_indices': [0, 4, 7]}
    )

    assert error.invalid_rows == 3
    assert error.details['row_indices'] == [0, 4, 7]
    assert "invalid_rows=3" in str(error)


def test_data_validation_error_defaults():
    error = DataValidationError("Validation failed")

    assert error.invalid_rows == 0
    assert error.details == {}
    assert str(error) == "Validation failed"


def test_tower_validation_error():
    """Test tower validation error with tower id."""
    error = TowerValidationError("Bad latitude", tower_id=4, details={'lat': 95.0})

    assert error.tower_id == 4
    assert error.details['lat'] == 95.0
    assert "tower_id=4" in str(error)

    with pytest.raises(DataValidationError):
        raise error


def test_tower_validation_error_without_id():
    error = TowerValidationError("Bad latitude")
    assert error.tower_id is None
    assert str(error) == "Bad latitude"


def test_data_load_error():
    """Test data load error."""
    with pytest.raises(DataLoadError):
        raise DataLoadError("File not found")


def test_geometry_error():
    """Test geometry error."""
    with pytest.raises(GeometryError):
        raise GeometryError("Invalid ellipse steps")


def test_exception_inheritance():
    """Test that all custom exceptions inherit from base."""
    exceptions = [
        ConfigurationError,
        DataValidationError,
        TowerValidationError,
        DataLoadError,
        GeometryError
    ]

    for exc_class in exceptions:
        assert issubclass(exc_class, LinkPlannerError)
