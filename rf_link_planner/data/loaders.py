"""
Data loading functions with validation.

Loads tower positions and requested links from CSV files for batch
planning runs, validating each row against the Pydantic schemas.
"""
from pathlib import Path
from typing import List, Tuple, Type
import pandas as pd
from pydantic import BaseModel, ValidationError

from rf_link_planner.data.schemas import TowerRecord, LinkRequest
from rf_link_planner.utils.error_handling import (
    validate_columns_exist,
    validate_dataframe_not_empty,
    log_dataframe_summary,
)
from rf_link_planner.utils.exceptions import DataLoadError, DataValidationError
from rf_link_planner.utils.logging_config import get_logger

logger = get_logger(__name__)

TOWER_COLUMNS = {'name', 'lat', 'lon'}
LINK_COLUMNS = {'a', 'b'}


def load_towers(file_path: Path, max_error_rate: float = 0.0) -> pd.DataFrame:
    """
    Load and validate tower definitions from CSV.

    Expected columns are ``name``, ``lat``, ``lon`` and optionally
    ``frequency``. Rows with an empty frequency get the planner default later.

    Args:
        file_path: Path to towers CSV file
        max_error_rate: Share of invalid rows tolerated before failing;
            tolerated invalid rows are dropped

    Returns:
        DataFrame with columns name, lat, lon, frequency

    Raises:
        DataLoadError: If file not found or cannot be read
        DataValidationError: If columns are missing, names repeat, or
            too many rows are invalid

    Example:
        >>> df = load_towers(Path("data/towers.csv"))
        >>> print(f"Loaded {len(df)} towers")
    """
    file_path = Path(file_path)
    df = _read_csv(file_path, dtype={'name': str, 'frequency': str})

    validate_columns_exist(df, TOWER_COLUMNS, df_name=f"Towers file {file_path.name}")
    validate_dataframe_not_empty(df, name=f"Towers file {file_path.name}")
    if 'frequency' not in df.columns:
        df['frequency'] = None

    df = _validate_rows(df, TowerRecord, "towers", max_error_rate)

    duplicated = df.loc[df['name'].duplicated(), 'name'].unique().tolist()
    if duplicated:
        raise DataValidationError(
            f"Tower names must be unique, repeated: {sorted(duplicated)}",
            invalid_rows=int(df['name'].duplicated(keep=False).sum()),
            details={'duplicated_names': duplicated},
        )

    log_dataframe_summary(df, "towers")
    return df[['name', 'lat', 'lon', 'frequency']].reset_index(drop=True)


def load_link_requests(file_path: Path, max_error_rate: float = 0.0) -> pd.DataFrame:
    """
    Load requested tower pairs from CSV.

    Args:
        file_path: Path to links CSV file with columns ``a`` and ``b``
        max_error_rate: Share of invalid rows tolerated before failing

    Returns:
        DataFrame with columns a, b (tower names)

    Raises:
        DataLoadError: If file not found or cannot be read
        DataValidationError: If columns are missing or too many rows are invalid
    """
    file_path = Path(file_path)
    df = _read_csv(file_path, dtype={'a': str, 'b': str})

    validate_columns_exist(df, LINK_COLUMNS, df_name=f"Links file {file_path.name}")
    df = _validate_rows(df, LinkRequest, "links", max_error_rate)

    log_dataframe_summary(df, "link_requests")
    return df[['a', 'b']].reset_index(drop=True)


def _read_csv(file_path: Path, dtype: dict) -> pd.DataFrame:
    if not file_path.exists():
        raise DataLoadError(f"Input file not found: {file_path}")

    logger.info("loading_csv", file=str(file_path))

    try:
        df = pd.read_csv(file_path, dtype=dtype, skipinitialspace=True)
    except Exception as e:
        raise DataLoadError(f"Failed to read CSV {file_path}: {e}") from e

    logger.info("csv_loaded", file=str(file_path), rows=len(df), columns=len(df.columns))
    return df


def _validate_rows(
    df: pd.DataFrame,
    schema_class: Type[BaseModel],
    label: str,
    max_error_rate: float
) -> pd.DataFrame:
    """
    Validate DataFrame rows against a Pydantic schema and drop invalid rows.

    Raises:
        DataValidationError: If the share of invalid rows exceeds max_error_rate
    """
    if len(df) == 0:
        return df

    validated, errors = _validate_dataframe(df, schema_class)
    if not errors:
        return validated

    error_rate = len(errors) / len(df)
    logger.warning(
        f"{label}_validation_errors",
        total_rows=len(df),
        invalid_rows=len(errors),
        error_rate=f"{error_rate:.2%}"
    )

    if error_rate > max_error_rate:
        raise DataValidationError(
            f"{label.capitalize()} validation failed: {len(errors)} invalid rows",
            invalid_rows=len(errors),
            details={
                'total_rows': len(df),
                'error_rate': error_rate,
                'sample_errors': errors[:5]
            }
        )
    return validated


def _validate_dataframe(
    df: pd.DataFrame,
    schema_class: Type[BaseModel]
) -> Tuple[pd.DataFrame, List[dict]]:
    """
    Validate DataFrame rows against Pydantic schema.

    Returns:
        Tuple of (validated_df, list_of_validation_errors). Valid rows carry
        the schema's normalized values (e.g. stripped strings); missing
        values come back as None.
    """
    validation_errors = []
    records = []
    valid_indices = []

    for idx, row in df.iterrows():
        row_dict = {k: (None if pd.isna(v) else v) for k, v in row.to_dict().items()}
        try:
            record = schema_class(**row_dict)
        except ValidationError as e:
            validation_errors.append({
                'row_index': idx,
                'errors': e.errors(include_url=False),
            })
            continue
        records.append(record.model_dump())
        valid_indices.append(idx)

    validated_df = pd.DataFrame(records, index=valid_indices, columns=list(schema_class.model_fields))
    return validated_df, validation_errors
