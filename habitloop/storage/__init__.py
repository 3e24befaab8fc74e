"""Storage - Local SQLite store for HabitLoop

Components:
    store.py: Entries, patterns, habit library, program and check-ins

The database location comes from storage.db_path in args/habitloop.yaml,
relative to the project root unless absolute.
"""

from habitloop import PROJECT_ROOT
from habitloop.config_models import load_config

DB_PATH = PROJECT_ROOT / load_config().storage.db_path

__all__ = ["DB_PATH"]
