"""
Catch Record Loader

This module builds validated Catch records from raw rows: API payloads,
database rows or CSV exports. The standings calculator trusts its input,
so this is where measurements are checked and converted to canonical
units (ounces, inches).

Usage:
    from standings.ingestion.catch_loader import load_catches_csv
    catches = load_catches_csv(path, weight_unit="lb")
"""

import math
from collections import Counter
from datetime import datetime
from types import MappingProxyType
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from standings.config import (
    WEIGHT_UNITS,
    LENGTH_UNITS,
    MAX_WEIGHT_OZ,
    MAX_LENGTH_IN,
)
from standings.utils import setup_logging, is_number
from standings.scoring.models import Catch

# --- Module Logger ---
logger = setup_logging(__name__)

# Accepted spellings for each Catch field
FIELD_ALIASES = MappingProxyType({
    "id": ("id", "catch_id", "catchId"),
    "team_id": ("team_id", "teamId", "team"),
    "species_id": ("species_id", "speciesId", "species"),
    "weight": ("weight",),
    "length": ("length",),
    "timestamp": ("timestamp", "caught_at", "caughtAt"),
})


class IngestionError(Exception):
    """Custom exception for ingestion errors"""
    pass


class ValidationError(IngestionError):
    """Validation-specific errors"""
    pass


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _get_field(row: Mapping, field: str):
    for key in FIELD_ALIASES[field]:
        if key in row and not _is_missing(row[key]):
            return row[key]
    return None


def _to_measurement(value, field: str, index: int, factor: float, upper_bound: float) -> float:
    """Convert a weight/length cell to a canonical float, rejecting bad values."""
    if value is None:
        raise ValidationError(f"Row {index}: missing {field}")
    if is_number(value):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(f"Row {index}: {field} '{value}' is not a number")
    else:
        raise ValidationError(f"Row {index}: {field} has unsupported type {type(value).__name__}")

    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"Row {index}: {field} must be a non-negative number, got {value!r}")

    number *= factor
    if number > upper_bound:
        raise ValidationError(f"Row {index}: {field} {number:.1f} exceeds maximum of {upper_bound}")
    return number


def _to_timestamp(value, index: int):
    if value is None or isinstance(value, datetime):
        return value
    try:
        parsed = pd.to_datetime(value)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Row {index}: failed to parse timestamp '{value}': {e}")
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def _unit_factor(unit: str, units: Mapping[str, float], kind: str) -> float:
    try:
        return units[unit.lower()]
    except KeyError:
        raise ValueError(
            f"Invalid {kind} unit: '{unit}'. "
            f"Allowed values: {', '.join(sorted(units))}"
        )


def catches_from_records(
    records: Iterable[Mapping],
    weight_unit: str = "oz",
    length_unit: str = "in",
) -> list[Catch]:
    """
    Build Catch objects from row mappings.

    Args:
        records: Rows with camelCase or snake_case keys
        weight_unit: Unit of the weight column ("oz", "lb", "kg")
        length_unit: Unit of the length column ("in", "cm")

    Returns:
        List of Catch in input order

    Raises:
        ValidationError: If a row is missing identifiers or has a bad measurement
        ValueError: If a unit is not recognised
    """
    weight_factor = _unit_factor(weight_unit, WEIGHT_UNITS, "weight")
    length_factor = _unit_factor(length_unit, LENGTH_UNITS, "length")

    catches = []
    for index, row in enumerate(records):
        team_id = _get_field(row, "team_id")
        species_id = _get_field(row, "species_id")
        if team_id is None:
            raise ValidationError(f"Row {index}: missing team id")
        if species_id is None:
            raise ValidationError(f"Row {index}: missing species id")

        catch_id = _get_field(row, "id")
        catches.append(Catch(
            id=str(catch_id) if catch_id is not None else str(index),
            team_id=str(team_id),
            species_id=str(species_id),
            weight=_to_measurement(_get_field(row, "weight"), "weight", index, weight_factor, MAX_WEIGHT_OZ),
            length=_to_measurement(_get_field(row, "length"), "length", index, length_factor, MAX_LENGTH_IN),
            timestamp=_to_timestamp(_get_field(row, "timestamp"), index),
        ))

    return catches


def catches_from_dataframe(df: pd.DataFrame, weight_unit: str = "oz", length_unit: str = "in") -> list[Catch]:
    """Build Catch objects from a DataFrame with one row per catch."""
    return catches_from_records(df.to_dict("records"), weight_unit=weight_unit, length_unit=length_unit)


def load_catches_csv(path: Path, weight_unit: str = "oz", length_unit: str = "in") -> list[Catch]:
    """
    Load catches from a CSV export.

    Every column is read as text so identifiers like "007" survive intact;
    measurements are converted during validation.
    """
    df = pd.read_csv(path, dtype=str)
    logger.info(f"Loaded {len(df)} catch rows from {path}")
    return catches_from_dataframe(df, weight_unit=weight_unit, length_unit=length_unit)


def run_sanity_checks(catches: list[Catch], label: str = "catches") -> bool:
    """
    Run validation checks on loaded catches.

    Args:
        catches: Catches to check
        label: Label for log messages

    Returns:
        True if all checks pass, False otherwise
    """
    issues = []

    duplicate_ids = [catch_id for catch_id, n in Counter(c.id for c in catches).items() if n > 1]
    if duplicate_ids:
        issues.append(f"Duplicate catch ids: {sorted(duplicate_ids)[:10]}")

    unmeasured = [c.id for c in catches if c.weight == 0 and c.length == 0]
    if unmeasured:
        issues.append(f"Found {len(unmeasured)} catches with zero weight and length")

    if issues:
        logger.warning(f"Sanity Check Warnings ({label}):")
        for issue in issues:
            logger.warning(f"  - {issue}")
        return False

    logger.info(f"Sanity Check Passed ({label})")
    return True
