"""Quiz session state machine for one test attempt."""

import logging
from collections.abc import Sequence

from quizbank.errors import (
    InvalidOptionError,
    NothingSelectedError,
    WrongStateError,
)
from quizbank.models.quiz import OptionHint, OptionView, Question, SessionState, Test

logger = logging.getLogger(__name__)

OPTION_LETTERS = ("А", "Б", "В", "Г", "Д", "Е")


def option_hint(
    index: int, selected: frozenset[int], correct: frozenset[int]
) -> OptionHint:
    """
    Derive the render hint for one option after the answer is revealed.

    Args:
        index: Option position
        selected: Positions the learner selected
        correct: Correct positions

    Returns:
        The option's hint
    """
    is_selected = index in selected
    is_correct = index in correct

    if is_selected and is_correct:
        return OptionHint.CORRECT_AND_SELECTED
    if is_selected:
        return OptionHint.INCORRECT_SELECTED
    if is_correct:
        return OptionHint.CORRECT_NOT_SELECTED
    return OptionHint.NEUTRAL


def option_letter(index: int) -> str:
    """Get the label prefix for an option, cycling after the sixth."""
    return OPTION_LETTERS[index % len(OPTION_LETTERS)]


class QuizSession:
    """
    Walks a learner through the questions of one test.

    States move AWAITING_SELECTION -> REVEALED -> AWAITING_SELECTION ... ->
    COMPLETED. Operations called in the wrong state raise WrongStateError
    and leave the session unchanged. The session never mutates its
    questions and knows nothing about rendering or timing.
    """

    def __init__(self, questions: Sequence[Question]):
        self._questions: tuple[Question, ...] = tuple(questions)
        self._current_index = 0
        self._score = 0
        self._selected: set[int] = set()
        self._state = SessionState.COMPLETED
        self._last_answer_perfect: bool | None = None
        self.restart()

    @classmethod
    def from_test(cls, test: Test) -> "QuizSession":
        """Create a session over a test's questions."""
        return cls(test.questions)

    # State queries

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def score(self) -> int:
        return self._score

    @property
    def selected(self) -> frozenset[int]:
        """Options selected for the current question."""
        return frozenset(self._selected)

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def is_completed(self) -> bool:
        return self._state == SessionState.COMPLETED

    @property
    def last_answer_perfect(self) -> bool | None:
        """Outcome of the latest submit, None while awaiting selection."""
        return self._last_answer_perfect

    def current_question(self) -> Question:
        """
        Get the question being answered.

        Raises:
            WrongStateError: If the session is completed
        """
        self._require_not_completed("read the current question")
        return self._questions[self._current_index]

    def result(self) -> tuple[int, int]:
        """
        Get the final (score, total).

        Raises:
            WrongStateError: If the session is not completed
        """
        self._require(SessionState.COMPLETED, "read the result")
        return self._score, self.total

    # Intents

    def toggle_option(self, index: int) -> frozenset[int]:
        """
        Select or deselect an option of the current question.

        Any number of options may be selected, even for single-answer
        questions.

        Returns:
            The selection after the toggle

        Raises:
            WrongStateError: If not awaiting a selection
            InvalidOptionError: If index is not a valid option position
        """
        self._require(SessionState.AWAITING_SELECTION, "toggle an option")

        option_count = self.current_question().option_count
        if not 0 <= index < option_count:
            raise InvalidOptionError(index, option_count)

        if index in self._selected:
            self._selected.remove(index)
        else:
            self._selected.add(index)
        return self.selected

    def submit(self) -> bool:
        """
        Score the current selection and reveal the answer.

        Only a selection exactly equal to the correct set scores a point.

        Returns:
            True if the answer was perfect

        Raises:
            WrongStateError: If not awaiting a selection
            NothingSelectedError: If no option is selected
        """
        self._require(SessionState.AWAITING_SELECTION, "submit")
        if not self._selected:
            raise NothingSelectedError()

        is_perfect = self._selected == self.current_question().correct_indices
        if is_perfect:
            self._score += 1

        self._last_answer_perfect = is_perfect
        self._transition(SessionState.REVEALED)
        return is_perfect

    def advance(self) -> SessionState:
        """
        Move past a revealed question.

        Returns:
            The new state

        Raises:
            WrongStateError: If the answer has not been revealed
        """
        self._require(SessionState.REVEALED, "advance")

        self._selected.clear()
        self._last_answer_perfect = None
        self._current_index += 1

        if self._current_index == self.total:
            self._transition(SessionState.COMPLETED)
        else:
            self._transition(SessionState.AWAITING_SELECTION)
        return self._state

    def restart(self) -> None:
        """Start the same questions over from the first one."""
        self._current_index = 0
        self._score = 0
        self._selected.clear()
        self._last_answer_perfect = None
        self._transition(
            SessionState.AWAITING_SELECTION if self._questions else SessionState.COMPLETED
        )

    # Derived render state

    def option_hints(self) -> list[OptionHint]:
        """
        Get the render hint of every option of the revealed question.

        Raises:
            WrongStateError: If the answer has not been revealed
        """
        self._require(SessionState.REVEALED, "read option hints")
        question = self.current_question()
        selected = self.selected
        return [
            option_hint(i, selected, question.correct_indices)
            for i in range(question.option_count)
        ]

    def option_views(self) -> list[OptionView]:
        """Get the render state of every option of the current question."""
        question = self.current_question()
        revealed = self._state == SessionState.REVEALED
        hints = self.option_hints() if revealed else None

        return [
            OptionView(
                index=i,
                letter=option_letter(i),
                text=text,
                selected=i in self._selected,
                correct=(i in question.correct_indices) if revealed else None,
                hint=hints[i] if hints else None,
            )
            for i, text in enumerate(question.options)
        ]

    def progress_label(self, template: str = "Question {number} of {total}") -> str:
        """Get the 1-based progress label of the current question."""
        self._require_not_completed("read progress")
        return template.format(number=self._current_index + 1, total=self.total)

    def summary(self, template: str = "{score} of {total}") -> str:
        """Get the completion summary."""
        score, total = self.result()
        return template.format(score=score, total=total)

    # Internals

    def _transition(self, state: SessionState) -> None:
        logger.debug(
            "Session %s -> %s (question %d/%d, score %d)",
            self._state.value,
            state.value,
            self._current_index + 1,
            self.total,
            self._score,
        )
        self._state = state

    def _require(self, state: SessionState, operation: str) -> None:
        if self._state != state:
            raise WrongStateError(operation, self._state)

    def _require_not_completed(self, operation: str) -> None:
        if self._state == SessionState.COMPLETED:
            raise WrongStateError(operation, self._state)

    def __repr__(self) -> str:
        return (
            f"QuizSession(state={self._state.value}, "
            f"question={self._current_index}/{self.total}, score={self._score})"
        )
