"""Data models for the question bank and quiz sessions."""

from .quiz import (
    OptionHint,
    OptionView,
    Question,
    SessionState,
    Test,
    TestSummary,
)

__all__ = [
    "Question",
    "Test",
    "TestSummary",
    "OptionHint",
    "OptionView",
    "SessionState",
]
