"""
Tests for standings calculation.
"""

import pytest

from standings.scoring.engine import calculate_standings, rank_teams, score_team
from standings.scoring.models import Catch, ScoringOptions, ScoringResult, TieBreak


def make_catch(catch_id, team, weight=0.0, length=0.0, species="bass"):
    return Catch(id=str(catch_id), team_id=team, species_id=species, weight=weight, length=length)


@pytest.fixture
def mixed_catches():
    """Three teams, two species, some catches under 100 oz."""
    return [
        make_catch(1, "team-a", 128, 15, "bass"),
        make_catch(2, "team-b", 40, 9, "trout"),
        make_catch(3, "team-a", 96, 14, "trout"),
        make_catch(4, "team-c", 150, 18, "bass"),
        make_catch(5, "team-b", 112, 14.5, "bass"),
        make_catch(6, "team-a", 64, 12, "bass"),
        make_catch(7, "team-c", 30, 8, "trout"),
    ]


class TestScenarios:
    """Worked scenarios for each scoring option."""

    def test_weight_format_no_options(self):
        catches = [
            make_catch(1, "team-a", 128, 15),
            make_catch(2, "team-a", 96, 14),
            make_catch(3, "team-b", 112, 14.5),
        ]
        result = calculate_standings(catches, ScoringOptions(format="weight"))

        assert [(e.team_id, e.score, e.rank) for e in result.leaderboard] == [
            ("team-a", 224, 1),
            ("team-b", 112, 2),
        ]

    def test_count_format_with_max_catches(self):
        catches = [
            make_catch(1, "team-a", 128, 15),
            make_catch(2, "team-a", 96, 14),
            make_catch(3, "team-a", 64, 12),
            make_catch(4, "team-b", 112, 14.5),
            make_catch(5, "team-b", 80, 13),
        ]
        result = calculate_standings(catches, ScoringOptions(format="count", max_catches=2))

        assert result.leaderboard[0].team_id == "team-a"
        assert result.leaderboard[0].score == 2
        assert result.leaderboard[1].team_id == "team-b"
        assert result.leaderboard[1].score == 2
        # The cap only affects scores, not the qualifying total
        assert result.total_catches == 5

    def test_minimum_size_filters_catches(self):
        catches = [
            make_catch(1, "team-a", 128, 15),
            make_catch(2, "team-a", 48, 8),
            make_catch(3, "team-b", 112, 14.5),
        ]
        result = calculate_standings(catches, ScoringOptions(format="weight", minimum_size=100))

        assert result.total_catches == 2
        assert result.leaderboard[0].team_id == "team-a"
        assert result.leaderboard[0].score == 128

    def test_species_multiplier(self):
        catches = [
            make_catch(1, "team-a", 100, 15, "bass"),
            make_catch(2, "team-b", 100, 15, "trout"),
        ]
        options = ScoringOptions(format="weight", species_multiplier={"trout": 1.5})
        result = calculate_standings(catches, options)

        assert result.leaderboard[0].team_id == "team-b"
        assert result.leaderboard[0].score == 150
        assert result.leaderboard[1].team_id == "team-a"
        assert result.leaderboard[1].score == 100

    def test_species_multiplier_within_team(self):
        catches = [
            make_catch(1, "team-a", 100, 15, "bass"),
            make_catch(2, "team-a", 100, 15, "trout"),
            make_catch(3, "team-b", 100, 15, "bass"),
        ]
        options = ScoringOptions(format="weight", species_multiplier={"trout": 1.5})
        result = calculate_standings(catches, options)

        assert result.leaderboard[0].score == 250
        assert result.leaderboard[0].details == {"bass": 100, "trout": 150}
        assert result.leaderboard[1].score == 100

    def test_empty_input(self):
        result = calculate_standings([], ScoringOptions(format="weight"))

        assert result.leaderboard == []
        assert result.total_catches == 0
        assert result.species_breakdown == {}
        assert result.to_dict() == {"leaderboard": [], "totalCatches": 0, "speciesBreakdown": {}}


class TestFormats:
    """Tests for length/count formats and capping rules."""

    def test_length_format_sums_lengths(self, mixed_catches):
        result = calculate_standings(mixed_catches, ScoringOptions(format="length"))
        scores = {e.team_id: e.score for e in result.leaderboard}

        assert scores == {"team-a": 41, "team-b": 23.5, "team-c": 26}

    def test_length_minimum_size_uses_length(self, mixed_catches):
        result = calculate_standings(mixed_catches, ScoringOptions(format="length", minimum_size=14))

        # Only lengths >= 14: catches 1, 3, 4, 5
        assert result.total_catches == 4
        assert {e.team_id: e.score for e in result.leaderboard} == {
            "team-a": 29, "team-b": 14.5, "team-c": 18,
        }

    def test_count_format_ignores_minimum_size(self, mixed_catches):
        result = calculate_standings(mixed_catches, ScoringOptions(format="count", minimum_size=1000))

        assert result.total_catches == len(mixed_catches)
        assert result.leaderboard[0].team_id == "team-a"
        assert result.leaderboard[0].score == 3

    def test_weight_cap_keeps_heaviest(self, mixed_catches):
        result = calculate_standings(mixed_catches, ScoringOptions(format="weight", max_catches=2))
        team_a = next(e for e in result.leaderboard if e.team_id == "team-a")

        # 128 + 96, the 64 oz fish is dropped
        assert team_a.score == 224
        assert team_a.details == {"bass": 128, "trout": 96}

    def test_length_cap_keeps_longest(self):
        catches = [
            make_catch(1, "team-a", 10, 12),
            make_catch(2, "team-a", 5, 20),
            make_catch(3, "team-a", 50, 16),
        ]
        result = calculate_standings(catches, ScoringOptions(format="length", max_catches=2))

        assert result.leaderboard[0].score == 36

    def test_count_cap_keeps_first_submitted(self):
        catches = [
            make_catch(1, "team-a", species="bass"),
            make_catch(2, "team-a", species="trout"),
            make_catch(3, "team-a", species="trout"),
        ]
        options = ScoringOptions(format="count", max_catches=1, species_multiplier={"trout": 5})
        result = calculate_standings(catches, options)

        # First catch is a bass, so the trout multiplier never applies
        assert result.leaderboard[0].score == 1
        assert result.leaderboard[0].details == {"bass": 1}

    def test_count_format_applies_multiplier(self):
        catches = [make_catch(1, "team-a", species="trout"), make_catch(2, "team-a", species="bass")]
        options = ScoringOptions(format="count", species_multiplier={"trout": 2})
        result = calculate_standings(catches, options)

        assert result.leaderboard[0].score == 3

    def test_details_accumulate_score_not_count(self):
        catches = [make_catch(1, "team-a", 20), make_catch(2, "team-a", 30)]
        result = calculate_standings(catches, ScoringOptions(format="weight"))

        assert result.leaderboard[0].details == {"bass": 50}


class TestTieBreak:
    """Tests for ordering of equal-score teams."""

    def test_first_seen_wins_ties_by_default(self):
        catches = [make_catch(1, "zulu", 50), make_catch(2, "alpha", 50)]
        result = calculate_standings(catches, ScoringOptions())

        assert [e.team_id for e in result.leaderboard] == ["zulu", "alpha"]
        assert [e.rank for e in result.leaderboard] == [1, 2]

    def test_team_id_tie_break(self):
        catches = [make_catch(1, "zulu", 50), make_catch(2, "alpha", 50)]
        result = calculate_standings(catches, ScoringOptions(tie_break="team_id"))

        assert [e.team_id for e in result.leaderboard] == ["alpha", "zulu"]

    def test_tie_break_does_not_override_score(self):
        ranked = rank_teams({"a": 1.0, "b": 2.0}, {"a": 0, "b": 1}, TieBreak.FIRST_SEEN)
        assert ranked == [("b", 2.0), ("a", 1.0)]

    def test_ties_get_distinct_ranks(self):
        catches = [make_catch(i, f"team-{i}", 10) for i in range(4)]
        result = calculate_standings(catches, ScoringOptions())

        assert [e.rank for e in result.leaderboard] == [1, 2, 3, 4]


class TestStandingsProperties:
    """Tests for invariants that hold for any input."""

    @pytest.fixture(params=[
        ScoringOptions(format="weight"),
        ScoringOptions(format="weight", max_catches=2, minimum_size=50),
        ScoringOptions(format="length", minimum_size=10, species_multiplier={"trout": 2}),
        ScoringOptions(format="count", max_catches=1),
    ])
    def options(self, request):
        return request.param

    def test_idempotent(self, mixed_catches, options):
        assert calculate_standings(mixed_catches, options) == calculate_standings(mixed_catches, options)

    def test_rank_density(self, mixed_catches, options):
        result = calculate_standings(mixed_catches, options)
        for i, entry in enumerate(result.leaderboard):
            assert entry.rank == i + 1

    def test_scores_descending(self, mixed_catches, options):
        result = calculate_standings(mixed_catches, options)
        scores = [e.score for e in result.leaderboard]
        assert scores == sorted(scores, reverse=True)

    def test_qualifying_catch_conservation(self, mixed_catches, options):
        result = calculate_standings(mixed_catches, options)
        assert result.total_catches == sum(result.species_breakdown.values())

    def test_one_entry_per_qualifying_team(self, mixed_catches, options):
        result = calculate_standings(mixed_catches, options)
        team_ids = [e.team_id for e in result.leaderboard]
        assert len(team_ids) == len(set(team_ids))

    def test_details_sum_to_score(self, mixed_catches, options):
        result = calculate_standings(mixed_catches, options)
        for entry in result.leaderboard:
            assert sum(entry.details.values()) == pytest.approx(entry.score)

    def test_input_not_mutated(self, mixed_catches, options):
        before = list(mixed_catches)
        calculate_standings(mixed_catches, options)
        assert mixed_catches == before


class TestMinimumSizeExclusion:
    """Tests that sub-minimum catches never count anywhere."""

    def test_team_with_no_qualifying_catch_is_absent(self, mixed_catches):
        result = calculate_standings(mixed_catches, ScoringOptions(format="weight", minimum_size=120))

        assert [e.team_id for e in result.leaderboard] == ["team-c", "team-a"]
        assert "team-b" not in {e.team_id for e in result.leaderboard}

    def test_species_breakdown_counts_only_qualifying(self, mixed_catches):
        result = calculate_standings(mixed_catches, ScoringOptions(format="weight", minimum_size=100))

        assert result.species_breakdown == {"bass": 3}
        assert result.total_catches == 3

    def test_catch_at_threshold_qualifies(self):
        result = calculate_standings([make_catch(1, "team-a", 100)], ScoringOptions(minimum_size=100))
        assert result.total_catches == 1

    def test_species_breakdown_ignores_cap(self, mixed_catches):
        result = calculate_standings(mixed_catches, ScoringOptions(format="count", max_catches=1))

        assert result.species_breakdown == {"bass": 4, "trout": 3}


class TestScoreTeam:
    """Tests for score_team helper."""

    def test_cap_matches_top_n_sum(self):
        weights = [12, 80, 33, 57, 80, 5]
        catches = [make_catch(i, "team-a", w) for i, w in enumerate(weights)]
        score, _ = score_team(catches, ScoringOptions(format="weight", max_catches=3))

        assert score == sum(sorted(weights, reverse=True)[:3])

    def test_result_is_scoring_result(self):
        result = calculate_standings([make_catch(1, "team-a", 10)], ScoringOptions())
        assert isinstance(result, ScoringResult)
        assert result.leaderboard[0].team_name == "team-a"
