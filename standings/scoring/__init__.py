"""
Standings Scoring

Modules:
- models: Catch, options and leaderboard data types
- formats: Per-format catch attribute, qualification and capping
- engine: Standings calculation and CSV batch entry point
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "calculate_standings":
        from standings.scoring.engine import calculate_standings
        return calculate_standings
    if name == "run_standings":
        from standings.scoring.engine import main
        return main
    if name in ("Catch", "ScoringOptions", "ScoringResult", "LeaderboardEntry", "ScoringFormat", "TieBreak"):
        from standings.scoring import models
        return getattr(models, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
