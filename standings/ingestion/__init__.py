"""
Data Ingestion

Modules:
- catch_loader: Build validated catch records from rows or CSV exports
- format_resolver: Turn stored scoring-format records into scoring options
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "load_catches_csv":
        from standings.ingestion.catch_loader import load_catches_csv
        return load_catches_csv
    if name == "catches_from_records":
        from standings.ingestion.catch_loader import catches_from_records
        return catches_from_records
    if name == "resolve_scoring_options":
        from standings.ingestion.format_resolver import resolve_scoring_options
        return resolve_scoring_options
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
