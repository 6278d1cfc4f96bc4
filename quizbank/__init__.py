"""Multiple-choice question bank and quiz session engine."""

from .bank import load_tests, parse, partition, start_session
from .models import OptionHint, Question, SessionState, Test
from .session import QuizSession, RevealTimer

__version__ = "0.1.0"

__all__ = [
    "parse",
    "partition",
    "load_tests",
    "start_session",
    "Question",
    "Test",
    "OptionHint",
    "SessionState",
    "QuizSession",
    "RevealTimer",
]
