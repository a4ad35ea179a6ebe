"""
Custom exception hierarchy for the RF link planner.

All custom exceptions inherit from LinkPlannerError for easy catching.
Graph rule violations (self links, frequency mismatches, duplicates) are
not exceptions; they come back as classified link rejections.
"""


class LinkPlannerError(Exception):
    """Base exception for all RF link planner errors."""
    pass


class ConfigurationError(LinkPlannerError):
    """Configuration-related errors.

    Raised when configuration loading or validation fails.

    Example:
        >>> raise ConfigurationError("Invalid planner config: ellipse_steps must be >= 4")
    """
    pass


class DataValidationError(LinkPlannerError):
    """Data validation errors.

    Raised when input data fails validation checks.

    Attributes:
        invalid_rows: Number of rows that failed validation
        details: Dictionary with validation error details
    """

    def __init__(self, message: str, invalid_rows: int = 0, details: dict = None):
        super().__init__(message)
        self.invalid_rows = invalid_rows
        self.details = details or {}

    def __str__(self):
        base = super().__str__()
        if self.invalid_rows > 0:
            return f"{base} (invalid_rows={self.invalid_rows})"
        return base


class TowerValidationError(DataValidationError):
    """Invalid tower attributes.

    Raised when a tower is added or patched with out-of-range coordinates
    or unknown fields.

    Attributes:
        tower_id: Id of the tower being patched, None when adding
    """

    def __init__(self, message: str, tower_id: int = None, details: dict = None):
        super().__init__(message, details=details)
        self.tower_id = tower_id

    def __str__(self):
        base = super().__str__()
        if self.tower_id is not None:
            return f"{base} (tower_id={self.tower_id})"
        return base


class DataLoadError(LinkPlannerError):
    """Data loading errors.

    Raised when tower or link files cannot be loaded or parsed.

    Example:
        >>> raise DataLoadError("Failed to load towers: file not found")
    """
    pass


class GeometryError(LinkPlannerError):
    """Geometric calculation errors.

    Raised when geometry operations get unusable parameters.

    Example:
        >>> raise GeometryError("Ellipse needs at least one segment, got steps=0")
    """
    pass
