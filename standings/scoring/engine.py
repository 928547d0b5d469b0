"""
Standings Engine for fishing tournaments

This module ranks teams from their recorded catches under a tournament's
scoring format. The calculation is a pure function of its input:
- Minimum-size qualification
- Per-team catch limits (top N by weight/length, first N by count)
- Species multipliers applied per catch
- Deterministic ranking with an explicit tie-break

Usage:
    python -m standings.scoring.engine
    OR
    from standings.scoring import calculate_standings
"""

import json
from collections import defaultdict
from pathlib import Path

from standings.config import (
    ASSETS_FOLDER,
    OUTPUT_FOLDER,
    CATCHES_PATTERN,
    SCORING_FORMAT_FILE,
    STANDINGS_PREFIX,
    LEADERBOARD_PREVIEW_ROWS,
)
from standings.utils import setup_logging, cleanup_old_files, atomic_write_csv
from standings.ingestion.catch_loader import load_catches_csv, run_sanity_checks
from standings.ingestion.format_resolver import resolve_scoring_options
from standings.presentation import standings_to_dataframe
from standings.scoring.formats import catch_attribute, qualifies, select_scoring_catches
from standings.scoring.models import (
    Catch,
    LeaderboardEntry,
    ScoringOptions,
    ScoringResult,
    TieBreak,
)

# --- Module Logger ---
logger = setup_logging(__name__)


def score_team(team_catches: list[Catch], options: ScoringOptions) -> tuple[float, dict[str, float]]:
    """
    Score one team's qualifying catches.

    Args:
        team_catches: The team's qualifying catches in submission order
        options: Tournament scoring options

    Returns:
        Tuple of (total score, species_id -> score contribution)
    """
    fmt = options.format
    score = 0
    details: dict[str, float] = {}

    for c in select_scoring_catches(team_catches, fmt, options.max_catches):
        catch_score = catch_attribute(c, fmt) * options.multiplier_for(c.species_id)
        score += catch_score
        details[c.species_id] = details.get(c.species_id, 0) + catch_score

    return score, details


def rank_teams(team_scores: dict[str, float], first_seen: dict[str, int], tie_break: TieBreak) -> list[tuple[str, float]]:
    """
    Order teams by score, highest first.

    Equal scores are separated by the tie-break: first-encountered order
    in the catch list, or team_id.
    """
    if tie_break is TieBreak.TEAM_ID:
        def secondary(team_id):
            return team_id
    else:
        def secondary(team_id):
            return first_seen[team_id]

    return sorted(team_scores.items(), key=lambda item: (-item[1], secondary(item[0])))


def calculate_standings(catches: list[Catch], options: ScoringOptions) -> ScoringResult:
    """
    Calculate tournament standings.

    Input is trusted: weights and lengths are expected to be non-negative
    and already in ounces/inches.

    Args:
        catches: Every catch recorded for the tournament
        options: Scoring format and optional limits/multipliers

    Returns:
        ScoringResult with the ranked leaderboard, the qualifying catch
        count and the per-species catch counts
    """
    fmt = options.format
    qualified = [c for c in catches if qualifies(c, fmt, options.minimum_size)]

    team_catches: dict[str, list[Catch]] = {}
    first_seen: dict[str, int] = {}
    species_breakdown: dict[str, int] = defaultdict(int)

    for c in qualified:
        if c.team_id not in team_catches:
            team_catches[c.team_id] = []
            first_seen[c.team_id] = len(first_seen)
        team_catches[c.team_id].append(c)
        species_breakdown[c.species_id] += 1

    team_scores = {}
    team_details = {}
    for team_id, team_list in team_catches.items():
        team_scores[team_id], team_details[team_id] = score_team(team_list, options)

    leaderboard = [
        LeaderboardEntry(rank=i + 1, team_id=team_id, score=score, details=team_details[team_id])
        for i, (team_id, score) in enumerate(rank_teams(team_scores, first_seen, options.tie_break))
    ]

    logger.debug(
        f"Scored {len(qualified)}/{len(catches)} qualifying catches "
        f"for {len(leaderboard)} teams ({fmt.value} format)"
    )

    return ScoringResult(
        leaderboard=leaderboard,
        total_catches=len(qualified),
        species_breakdown=dict(species_breakdown),
    )


def load_scoring_options(folder: Path) -> ScoringOptions:
    """Read the stored scoring-format record beside the catch files, if any."""
    format_file = folder / SCORING_FORMAT_FILE
    if not format_file.exists():
        logger.info(f"No {SCORING_FORMAT_FILE} in {folder}, using default weight format")
        return resolve_scoring_options(None, None)

    try:
        with open(format_file, encoding="utf-8") as f:
            record = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring unparseable {format_file}: {e}")
        return resolve_scoring_options(None, None)

    if not isinstance(record, dict):
        logger.warning(f"Ignoring {format_file}: expected a JSON object")
        return resolve_scoring_options(None, None)

    return resolve_scoring_options(
        record.get("type"),
        record.get("rules"),
        species_multiplier=record.get("speciesMultiplier"),
    )


def process_catches(input_folder: Path = ASSETS_FOLDER, output_folder: Path = OUTPUT_FOLDER):
    """
    Score the newest catch export and write the standings CSV.

    Returns:
        Tuple of (ScoringResult, standings DataFrame), or (None, None)
        when no catch file is found
    """
    input_files = sorted(input_folder.glob(CATCHES_PATTERN))
    if not input_files:
        logger.error(f"No files matching {CATCHES_PATTERN} found in {input_folder}")
        return None, None

    input_csv = input_files[-1]
    logger.info("=" * 60)
    logger.info(f"Scoring catches from {input_csv}")
    logger.info("=" * 60)

    catches = load_catches_csv(input_csv)
    run_sanity_checks(catches, label=input_csv.name)
    options = load_scoring_options(input_folder)

    result = calculate_standings(catches, options)
    standings_df = standings_to_dataframe(result, fmt=options.format)

    logger.info(f"Qualifying catches: {result.total_catches} of {len(catches)}")
    logger.info(f"Teams ranked: {len(result.leaderboard)}")
    if not standings_df.empty:
        logger.info(f"Top {LEADERBOARD_PREVIEW_ROWS} teams ({options.format.value} format):")
        logger.info("\n" + standings_df.head(LEADERBOARD_PREVIEW_ROWS).to_string(index=False))

    standings_csv = output_folder / f"{STANDINGS_PREFIX}_{input_csv.stem}.csv"
    atomic_write_csv(standings_df, standings_csv, index=False)
    cleanup_old_files(f"{STANDINGS_PREFIX}_*.csv", keep_file=standings_csv, folder=output_folder)
    logger.info(f"Exported standings: {standings_csv}")

    return result, standings_df


def main():
    return process_catches()


if __name__ == "__main__":
    main()
