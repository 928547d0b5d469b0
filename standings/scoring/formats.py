"""
Scoring Format Functions

Each scoring format maps a catch to the attribute it is scored on:
- weight: catch weight in ounces
- length: catch length in inches
- count: every catch is worth 1

The same attribute drives minimum-size qualification and the top-N
selection used when a team's catches are capped.
"""

from standings.scoring.models import Catch, ScoringFormat


def catch_attribute(catch: Catch, fmt: ScoringFormat) -> float:
    """Return the raw value a catch contributes under the given format."""
    if fmt is ScoringFormat.WEIGHT:
        return catch.weight
    if fmt is ScoringFormat.LENGTH:
        return catch.length
    if fmt is ScoringFormat.COUNT:
        return 1
    raise ValueError(f"Unknown scoring format: {fmt!r}")


def qualifies(catch: Catch, fmt: ScoringFormat, minimum_size=None) -> bool:
    """
    Check whether a catch meets the minimum size.

    Count format has no size to compare, so every catch qualifies.
    A catch exactly at the threshold qualifies.
    """
    if minimum_size is None or fmt is ScoringFormat.COUNT:
        return True
    return catch_attribute(catch, fmt) >= minimum_size


def select_scoring_catches(team_catches: list[Catch], fmt: ScoringFormat, max_catches=None) -> list[Catch]:
    """
    Pick the catches that count toward a team's score.

    With a limit set and exceeded, weight and length keep the N biggest
    catches (stable sort, so equal sizes keep submission order). Count
    keeps the first N submitted.
    """
    if not max_catches or len(team_catches) <= max_catches:
        return list(team_catches)

    if fmt is ScoringFormat.COUNT:
        return team_catches[:max_catches]

    ranked = sorted(team_catches, key=lambda c: catch_attribute(c, fmt), reverse=True)
    return ranked[:max_catches]
