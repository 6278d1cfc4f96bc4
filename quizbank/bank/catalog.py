"""Test catalog - loads the bank, builds the test menu and starts sessions."""

from collections.abc import Sequence
from pathlib import Path

from quizbank.bank.loader import ensure_not_empty, load_bank
from quizbank.bank.partition import (
    DEFAULT_GROUP_SIZE,
    DEFAULT_TITLE_TEMPLATE,
    find_test,
    partition,
)
from quizbank.errors import UnknownTestError
from quizbank.models.quiz import Test
from quizbank.session.quiz_session import QuizSession


def load_tests(
    path: Path | None = None,
    group_size: int = DEFAULT_GROUP_SIZE,
    title_template: str = DEFAULT_TITLE_TEMPLATE,
    strict: bool = False,
) -> list[Test]:
    """
    Load the question bank and split it into tests.

    Args:
        path: Question bank file, or None for the bundled bank
        group_size: Questions per test
        title_template: Test title format
        strict: Drop questions that cannot be answered perfectly

    Returns:
        Tests for the menu

    Raises:
        LoadError: If the bank is unreadable, malformed or empty
    """
    questions = ensure_not_empty(load_bank(path, strict=strict))
    return partition(questions, group_size=group_size, title_template=title_template)


def start_session(tests: Sequence[Test], test_id: int) -> QuizSession:
    """
    Start a session for the test with the given id.

    Raises:
        UnknownTestError: If no such test exists
    """
    test = find_test(tests, test_id)
    if test is None:
        raise UnknownTestError(test_id)
    return QuizSession.from_test(test)
