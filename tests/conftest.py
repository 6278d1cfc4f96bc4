"""Shared test fixtures and configuration for pytest."""

import json
from typing import Any

import pytest

from quizbank.config.settings import get_settings
from quizbank.models.quiz import Question, Test
from quizbank.session.quiz_session import QuizSession


def make_questions(count: int) -> list[Question]:
    """Create numbered single-answer questions."""
    return [
        Question(
            text=f"Question {n}?",
            options=("first", "second", "third"),
            correct_indices=frozenset({n % 3}),
        )
        for n in range(count)
    ]


@pytest.fixture
def question_factory():
    """Factory for numbered single-answer questions."""
    return make_questions


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_question() -> Question:
    """Create a sample single-answer Question for testing."""
    return Question(
        text="What is the capital of France?",
        options=("London", "Paris", "Berlin", "Madrid"),
        correct_indices=frozenset({1}),
    )


@pytest.fixture
def multi_answer_question() -> Question:
    """Create a Question with two correct options."""
    return Question(
        text="Which of these numbers are prime?",
        options=("4", "5", "7", "9"),
        correct_indices=frozenset({1, 2}),
    )


@pytest.fixture
def sample_questions(sample_question: Question, multi_answer_question: Question) -> list[Question]:
    """Create a short list of questions for testing."""
    return [
        sample_question,
        multi_answer_question,
        Question(
            text="Who wrote '1984'?",
            options=("Aldous Huxley", "George Orwell", "Ray Bradbury"),
            correct_indices=frozenset({1}),
        ),
    ]


@pytest.fixture
def sample_test(sample_questions: list[Question]) -> Test:
    """Create a sample Test for testing."""
    return Test(id=1, title="Test 1", questions=tuple(sample_questions))


@pytest.fixture
def session(sample_questions: list[Question]) -> QuizSession:
    """Create a fresh session over the sample questions."""
    return QuizSession(sample_questions)


@pytest.fixture
def bank_entries() -> list[dict[str, Any]]:
    """Raw question bank entries, as found in a JSON file."""
    return [
        {
            "question": "What is 2 + 2?",
            "options": ["3", "4", "5", "6"],
            "correctIndex": 1,
        },
        {
            "question": "Which of these are even?",
            "options": ["1", "2", "3", "4"],
            "correctIndex": [1, 3],
        },
        {
            "question": "Which ocean is the largest?",
            "options": ["Atlantic", "Pacific"],
            "correctIndex": 1,
        },
    ]


@pytest.fixture
def bank_file(tmp_path, bank_entries: list[dict[str, Any]]):
    """Write the raw bank entries to a JSON file."""
    path = tmp_path / "questions.json"
    path.write_text(json.dumps({"questions": bank_entries}), encoding="utf-8")
    return path
