"""
Leaderboard presentation helpers.

The standings engine works in opaque team ids and raw scores (ounces,
inches, fish). These helpers attach display names, format scores for
humans and flatten a result into pandas tables for export.
"""

from dataclasses import replace
from typing import Mapping

import pandas as pd

from standings.config import OUNCES_PER_POUND
from standings.scoring.models import LeaderboardEntry, ScoringFormat, ScoringResult

BASE_COLUMNS = ['rank', 'team_id', 'team_name', 'score', 'display_score']


def format_weight(oz: float) -> str:
    """Format ounces as "7 lb 8.0 oz", or just "12.5 oz" under a pound."""
    # Split whole tenths so the ounce part never reads 16.0
    lbs, rem = divmod(round(oz * 10), OUNCES_PER_POUND * 10)
    rem = rem / 10
    return f"{lbs} lb {rem:.1f} oz" if lbs > 0 else f"{rem:.1f} oz"


def format_length(inches: float) -> str:
    return f'{inches:.1f}"'


def format_count(score: float) -> str:
    if float(score).is_integer():
        return f"{int(score)} fish"
    return f"{score:g} fish"


def format_score(score: float, fmt) -> str:
    """Format a raw score for display under the tournament's scoring format."""
    fmt = ScoringFormat(fmt)
    if fmt is ScoringFormat.WEIGHT:
        return format_weight(score)
    if fmt is ScoringFormat.LENGTH:
        return format_length(score)
    return format_count(score)


def resolve_team_names(leaderboard: list[LeaderboardEntry], team_names: Mapping[str, str]) -> list[LeaderboardEntry]:
    """
    Attach display names to leaderboard entries.

    Returns new entries; teams without a known name keep their id as name.
    """
    return [
        replace(entry, team_name=team_names.get(entry.team_id, entry.team_id))
        for entry in leaderboard
    ]


def standings_to_dataframe(result: ScoringResult, fmt: ScoringFormat | None = None) -> pd.DataFrame:
    """
    Flatten a leaderboard into one row per team.

    Per-species score contributions become `score_<species_id>` columns
    (0.0 where a team has no catch of that species). `display_score` is
    filled when a format is given.
    """
    species = sorted({s for entry in result.leaderboard for s in entry.details})
    species_columns = [f"score_{s}" for s in species]

    rows = []
    for entry in result.leaderboard:
        row = {
            'rank': entry.rank,
            'team_id': entry.team_id,
            'team_name': entry.team_name,
            'score': entry.score,
            'display_score': format_score(entry.score, fmt) if fmt is not None else None,
        }
        for s, column in zip(species, species_columns):
            row[column] = entry.details.get(s, 0.0)
        rows.append(row)

    return pd.DataFrame(rows, columns=BASE_COLUMNS + species_columns)


def species_breakdown_to_dataframe(result: ScoringResult) -> pd.DataFrame:
    """Qualifying catch counts per species, most caught first."""
    df = pd.DataFrame(
        list(result.species_breakdown.items()),
        columns=['species_id', 'catches'],
    )
    return df.sort_values(['catches', 'species_id'], ascending=[False, True]).reset_index(drop=True)
