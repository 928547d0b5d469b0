"""Data models for tournament standings calculation."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping

from standings.config import DEFAULT_SPECIES_MULTIPLIER


class ScoringFormat(str, Enum):
    """Rule family used to turn a catch into a numeric score."""
    WEIGHT = "weight"
    LENGTH = "length"
    COUNT = "count"


class TieBreak(str, Enum):
    """Secondary ordering for teams with equal scores."""
    FIRST_SEEN = "first_seen"  # team whose first qualifying catch came earlier in the input
    TEAM_ID = "team_id"        # lexicographic by team identifier


@dataclass(frozen=True)
class Catch:
    """A single recorded fish. Weight in ounces, length in inches."""
    id: str
    team_id: str
    species_id: str
    weight: float
    length: float
    timestamp: datetime | None = None


@dataclass(frozen=True)
class ScoringOptions:
    """Per-tournament scoring configuration."""
    format: ScoringFormat = ScoringFormat.WEIGHT
    max_catches: int | None = None
    minimum_size: float | None = None
    species_multiplier: Mapping[str, float] = field(default_factory=dict)
    tie_break: TieBreak = TieBreak.FIRST_SEEN

    def __post_init__(self):
        # Accept plain strings ("weight", "team_id") for the enum fields
        object.__setattr__(self, "format", ScoringFormat(self.format))
        object.__setattr__(self, "tie_break", TieBreak(self.tie_break))
        object.__setattr__(self, "species_multiplier", dict(self.species_multiplier or {}))

    def multiplier_for(self, species_id: str) -> float:
        return self.species_multiplier.get(species_id, DEFAULT_SPECIES_MULTIPLIER)


@dataclass
class LeaderboardEntry:
    """One team's position on the leaderboard."""
    rank: int
    team_id: str
    score: float
    details: dict[str, float] = field(default_factory=dict)  # species_id -> score contribution
    team_name: str | None = None

    def __post_init__(self):
        if self.team_name is None:
            self.team_name = self.team_id

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "teamId": self.team_id,
            "teamName": self.team_name,
            "score": self.score,
            "details": dict(self.details),
        }


@dataclass
class ScoringResult:
    """Whole-tournament standings output."""
    leaderboard: list[LeaderboardEntry] = field(default_factory=list)
    total_catches: int = 0
    species_breakdown: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys the leaderboard API returns."""
        return {
            "leaderboard": [entry.to_dict() for entry in self.leaderboard],
            "totalCatches": self.total_catches,
            "speciesBreakdown": dict(self.species_breakdown),
        }
