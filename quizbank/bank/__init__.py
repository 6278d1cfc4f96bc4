"""Question bank loading and test partitioning."""

from .catalog import load_tests, start_session
from .loader import ensure_not_empty, load_bank, parse
from .partition import find_test, partition, summarize

__all__ = [
    "parse",
    "load_bank",
    "ensure_not_empty",
    "partition",
    "find_test",
    "summarize",
    "load_tests",
    "start_session",
]
