"""
Tournament Standings - Core Package

This package contains the core modules for:
- Standings calculation (standings.scoring)
- Catch and scoring-format ingestion (standings.ingestion)
- Display helpers for leaderboards (standings.presentation)
- Shared configuration and utilities
"""

from standings.config import *
