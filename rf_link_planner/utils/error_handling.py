"""
Error handling utilities for tower and link input data.

Provides checks used when loading tabular input, plus numeric helpers that
degrade to a default instead of raising.
"""
from typing import Set
import pandas as pd
import numpy as np
from rf_link_planner.utils.logging_config import get_logger
from rf_link_planner.utils.exceptions import DataValidationError

logger = get_logger(__name__)


def validate_dataframe_not_empty(
    df: pd.DataFrame,
    name: str = "DataFrame"
) -> None:
    """
    Validate that DataFrame is not empty.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to validate
    name : str
        Name of DataFrame for error message

    Raises
    ------
    DataValidationError
        If DataFrame is empty
    """
    if len(df) == 0:
        raise DataValidationError(f"{name} is empty - no data to process")


def validate_columns_exist(
    df: pd.DataFrame,
    required_columns: Set[str],
    df_name: str = "DataFrame"
) -> None:
    """
    Validate that all required columns exist in DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to validate
    required_columns : Set[str]
        Set of required column names
    df_name : str
        Name of DataFrame for error message

    Raises
    ------
    DataValidationError
        If required columns are missing
    """
    missing_cols = required_columns - set(df.columns)
    if missing_cols:
        raise DataValidationError(
            f"{df_name} missing required columns: {sorted(missing_cols)}. "
            f"Available columns: {sorted(df.columns.tolist())}"
        )


def log_dataframe_summary(df: pd.DataFrame, name: str) -> None:
    """Log row and column counts for a DataFrame at debug level."""
    logger.debug(
        "dataframe_summary",
        dataframe=name,
        rows=len(df),
        columns=df.columns.tolist(),
    )


def safe_division(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default on error.

    Parameters
    ----------
    numerator : float
        Numerator
    denominator : float
        Denominator
    default : float
        Value to return on division by zero or a non-finite result

    Returns
    -------
    float
        Result of division or default value
    """
    if denominator == 0 or pd.isna(denominator) or pd.isna(numerator):
        return default

    result = numerator / denominator
    if not np.isfinite(result):
        return default
    return result
