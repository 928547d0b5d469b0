"""
Scoring Format Resolver

This module turns a stored scoring-format record into ScoringOptions.
Directors save a format as a type ("weight", "length", "count", "custom")
plus a rules JSON blob, e.g.:

    {"fishLimit": 5, "minimumSize": 12, "requirePhoto": false,
     "measurementUnit": "lbs", "scoringMethod": "sum_top_n"}

Malformed values are dropped with a warning rather than passed on,
so the calculator always receives well-formed options.
"""

import json
import math
from typing import Mapping

from standings.config import (
    DEFAULT_FORMAT,
    DEFAULT_TIE_BREAK,
    ALLOWED_TIE_BREAKS,
    RULE_MAX_CATCHES_KEYS,
    RULE_MINIMUM_SIZE,
    RULE_SPECIES_MULTIPLIER,
    RULE_TIE_BREAK,
)
from standings.utils import setup_logging, is_number, validate_format
from standings.scoring.models import ScoringFormat, ScoringOptions, TieBreak

# --- Module Logger ---
logger = setup_logging(__name__)


def parse_rules(rules) -> dict:
    """
    Parse a rules blob into a dict.

    Args:
        rules: JSON string, mapping, or None

    Returns:
        Rules dict (empty if missing or unparseable)
    """
    if rules is None:
        return {}
    if isinstance(rules, (str, bytes)):
        try:
            rules = json.loads(rules)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unparseable scoring rules: {e}")
            return {}
    if not isinstance(rules, Mapping):
        logger.warning(f"Ignoring scoring rules of type {type(rules).__name__}")
        return {}
    return dict(rules)


def resolve_format(format_type) -> ScoringFormat:
    """Map a stored format type to a ScoringFormat, defaulting to weight."""
    if format_type is None:
        return ScoringFormat(DEFAULT_FORMAT)
    name = format_type.strip().lower() if isinstance(format_type, str) else format_type
    try:
        validate_format(name)
    except ValueError as e:
        logger.warning(f"{e}. Falling back to '{DEFAULT_FORMAT}'")
        return ScoringFormat(DEFAULT_FORMAT)
    return ScoringFormat(name)


def coerce_max_catches(value) -> int | None:
    """Accept positive integers (or integral floats), drop anything else."""
    if not is_number(value) or not math.isfinite(value):
        return None
    if value != int(value) or value < 1:
        return None
    return int(value)


def coerce_minimum_size(value) -> float | None:
    """Accept finite non-negative numbers, drop anything else."""
    if not is_number(value) or not math.isfinite(value) or value < 0:
        return None
    return value


def coerce_species_multiplier(value) -> dict[str, float]:
    """Keep only species entries with a finite positive multiplier."""
    if not isinstance(value, Mapping):
        return {}
    multipliers = {}
    for species_id, multiplier in value.items():
        if is_number(multiplier) and math.isfinite(multiplier) and multiplier > 0:
            multipliers[str(species_id)] = multiplier
        else:
            logger.warning(f"Dropping invalid multiplier {multiplier!r} for species {species_id!r}")
    return multipliers


def resolve_scoring_options(format_type, rules=None, species_multiplier=None) -> ScoringOptions:
    """
    Build ScoringOptions from a stored scoring-format record.

    Args:
        format_type: Stored type string; unknown types fall back to weight
        rules: Rules as JSON string or mapping (camelCase keys)
        species_multiplier: Optional multipliers that override any in rules

    Returns:
        ScoringOptions ready for calculate_standings
    """
    fmt = resolve_format(format_type)
    parsed = parse_rules(rules)

    max_catches = None
    for key in RULE_MAX_CATCHES_KEYS:
        if key in parsed:
            max_catches = coerce_max_catches(parsed[key])
            if max_catches is None:
                logger.warning(f"Dropping invalid {key}: {parsed[key]!r}")
            break

    minimum_size = None
    if RULE_MINIMUM_SIZE in parsed:
        minimum_size = coerce_minimum_size(parsed[RULE_MINIMUM_SIZE])
        if minimum_size is None:
            logger.warning(f"Dropping invalid {RULE_MINIMUM_SIZE}: {parsed[RULE_MINIMUM_SIZE]!r}")

    multipliers = coerce_species_multiplier(parsed.get(RULE_SPECIES_MULTIPLIER))
    if species_multiplier is not None:
        multipliers.update(coerce_species_multiplier(species_multiplier))

    tie_break = TieBreak(DEFAULT_TIE_BREAK)
    raw_tie_break = parsed.get(RULE_TIE_BREAK)
    if isinstance(raw_tie_break, str) and raw_tie_break in ALLOWED_TIE_BREAKS:
        tie_break = TieBreak(raw_tie_break)
    elif raw_tie_break is not None:
        logger.warning(f"Unknown {RULE_TIE_BREAK} {raw_tie_break!r}, using '{tie_break.value}'")

    return ScoringOptions(
        format=fmt,
        max_catches=max_catches,
        minimum_size=minimum_size,
        species_multiplier=multipliers,
        tie_break=tie_break,
    )
