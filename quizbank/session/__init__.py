"""Quiz session state machine and reveal timing."""

from .quiz_session import QuizSession, option_hint, option_letter
from .reveal import RevealTimer

__all__ = [
    "QuizSession",
    "RevealTimer",
    "option_hint",
    "option_letter",
]
