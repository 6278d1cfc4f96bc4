"""Test partitioner - groups the question bank into fixed-size tests."""

from collections.abc import Sequence

from quizbank.models.quiz import Question, Test, TestSummary

DEFAULT_GROUP_SIZE = 10
DEFAULT_TITLE_TEMPLATE = "Test {id}"


def partition(
    questions: Sequence[Question],
    group_size: int = DEFAULT_GROUP_SIZE,
    title_template: str = DEFAULT_TITLE_TEMPLATE,
) -> list[Test]:
    """
    Split questions into contiguous tests of group_size questions.

    The last test holds the remainder when the question count is not an
    exact multiple of group_size.

    Args:
        questions: Questions in bank order
        group_size: Questions per test
        title_template: Title format, receives the test id as {id}

    Returns:
        Tests numbered from 1

    Raises:
        ValueError: If group_size is not positive
    """
    if group_size <= 0:
        raise ValueError(f"group_size must be positive, got {group_size}")

    return [
        Test(
            id=number,
            title=title_template.format(id=number),
            questions=tuple(questions[start : start + group_size]),
        )
        for number, start in enumerate(range(0, len(questions), group_size), start=1)
    ]


def find_test(tests: Sequence[Test], test_id: int) -> Test | None:
    """Find a test by id."""
    return next((t for t in tests if t.id == test_id), None)


def summarize(tests: Sequence[Test]) -> list[TestSummary]:
    """Build menu rows for a list of tests."""
    return [
        TestSummary(id=t.id, title=t.title, question_count=t.question_count)
        for t in tests
    ]
