"""
HabitLoop - Notice your online habits, then rewire them

Philosophy:
    Log what you see and do online, in your own words.
    Simple keyword heuristics surface the loops hiding in those notes.
    A 30-day program swaps each loop for one small, concrete habit.

Components:
    analysis/: Keyword pattern detection and dashboard insights
    program/: 30-day program generation, check-ins, regeneration
    storage/: Local SQLite store for entries, patterns, habits, program
    service.py: User-facing operations returning result dicts
    api/: FastAPI routes over the service layer
    cli.py: `habitloop` command line entry point

Configuration: args/habitloop.yaml
Database: data/habitloop.db
"""

from pathlib import Path

__version__ = "0.1.0"

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"

__all__ = [
    "__version__",
    "PROJECT_ROOT",
    "ARGS_DIR",
]
