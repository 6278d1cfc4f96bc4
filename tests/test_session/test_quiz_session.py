"""Tests for the quiz session state machine."""

import pytest

from quizbank.errors import (
    InvalidOptionError,
    NothingSelectedError,
    SessionError,
    WrongStateError,
)
from quizbank.models.quiz import OptionHint, Question, SessionState, Test
from quizbank.session.quiz_session import QuizSession, option_hint, option_letter


def answer(session: QuizSession, indices) -> bool:
    """Select the given options and submit."""
    for index in indices:
        session.toggle_option(index)
    return session.submit()


class TestInitialState:
    """Test freshly created sessions."""

    def test_starts_awaiting_first_question(self, session: QuizSession):
        assert session.state == SessionState.AWAITING_SELECTION
        assert session.current_index == 0
        assert session.score == 0
        assert session.selected == frozenset()
        assert session.total == 3

    def test_empty_session_is_completed(self):
        session = QuizSession([])

        assert session.state == SessionState.COMPLETED
        assert session.result() == (0, 0)

    def test_from_test(self, sample_test: Test):
        session = QuizSession.from_test(sample_test)

        assert session.questions == sample_test.questions
        assert session.current_question() == sample_test.questions[0]

    def test_session_copies_question_list(self, sample_questions: list[Question]):
        """Test that later changes to the source list do not leak in."""
        session = QuizSession(sample_questions)
        sample_questions.pop()

        assert session.total == 3


class TestToggleOption:
    """Test option selection."""

    def test_toggle_adds_and_removes(self, session: QuizSession):
        assert session.toggle_option(2) == frozenset({2})
        assert session.toggle_option(0) == frozenset({0, 2})
        assert session.toggle_option(2) == frozenset({0})

    def test_toggle_twice_is_a_no_op(self, session: QuizSession):
        session.toggle_option(1)
        before = (session.selected, session.state, session.score)

        session.toggle_option(3)
        session.toggle_option(3)

        assert (session.selected, session.state, session.score) == before

    def test_multi_select_allowed_for_single_answer(self, session: QuizSession):
        assert len(session.current_question().correct_indices) == 1
        session.toggle_option(0)
        session.toggle_option(1)

        assert session.selected == frozenset({0, 1})

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_out_of_range_index(self, session: QuizSession, index):
        session.toggle_option(1)

        with pytest.raises(InvalidOptionError) as exc_info:
            session.toggle_option(index)

        assert exc_info.value.index == index
        assert exc_info.value.option_count == 4
        assert session.selected == frozenset({1})

    def test_toggle_after_reveal_is_wrong_state(self, session: QuizSession):
        answer(session, [1])

        with pytest.raises(WrongStateError):
            session.toggle_option(0)

    def test_selected_is_a_snapshot(self, session: QuizSession):
        selected = session.toggle_option(1)
        session.toggle_option(2)

        assert selected == frozenset({1})


class TestSubmit:
    """Test scoring."""

    def test_nothing_selected(self, session: QuizSession):
        with pytest.raises(NothingSelectedError):
            session.submit()

        assert session.state == SessionState.AWAITING_SELECTION
        assert session.score == 0

    def test_correct_single_answer_scores(self, session: QuizSession):
        assert answer(session, [1]) is True
        assert session.score == 1
        assert session.state == SessionState.REVEALED
        assert session.last_answer_perfect is True

    def test_wrong_answer_does_not_score(self, session: QuizSession):
        assert answer(session, [0]) is False
        assert session.score == 0
        assert session.state == SessionState.REVEALED
        assert session.last_answer_perfect is False

    def test_partial_multi_answer_scores_nothing(self, multi_answer_question: Question):
        session = QuizSession([multi_answer_question])

        assert answer(session, [1]) is False
        assert session.score == 0

    def test_full_multi_answer_scores_one(self, multi_answer_question: Question):
        session = QuizSession([multi_answer_question])

        assert answer(session, [2, 1]) is True
        assert session.score == 1

    def test_extra_selection_scores_nothing(self, multi_answer_question: Question):
        session = QuizSession([multi_answer_question])

        assert answer(session, [0, 1, 2]) is False
        assert session.score == 0

    def test_submit_twice_is_wrong_state(self, session: QuizSession):
        answer(session, [1])

        with pytest.raises(WrongStateError):
            session.submit()
        assert session.score == 1

    def test_empty_correct_set_can_never_score(self):
        """Test that a question without correct options is unanswerable."""
        question = Question(text="Q?", options=("a", "b"), correct_indices=frozenset())

        for selection in ([0], [1], [0, 1]):
            session = QuizSession([question])
            assert answer(session, selection) is False
            assert session.score == 0

    def test_out_of_range_correct_index_never_matches(self):
        question = Question(text="Q?", options=("a", "b"), correct_indices=frozenset({5}))
        session = QuizSession([question])

        assert answer(session, [0, 1]) is False
        assert session.option_hints() == [
            OptionHint.INCORRECT_SELECTED,
            OptionHint.INCORRECT_SELECTED,
        ]


class TestAdvance:
    """Test moving between questions."""

    def test_advance_before_submit_is_wrong_state(self, session: QuizSession):
        session.toggle_option(1)

        with pytest.raises(WrongStateError) as exc_info:
            session.advance()

        assert exc_info.value.state == SessionState.AWAITING_SELECTION
        assert session.current_index == 0

    def test_advance_moves_to_next_question(self, session: QuizSession):
        answer(session, [1])

        assert session.advance() == SessionState.AWAITING_SELECTION
        assert session.current_index == 1
        assert session.selected == frozenset()
        assert session.last_answer_perfect is None

    def test_advance_past_last_question_completes(self, session: QuizSession):
        for _ in range(session.total):
            answer(session, [1])
            session.advance()

        assert session.state == SessionState.COMPLETED
        assert session.is_completed
        assert session.result() == (2, 3)

    def test_advance_twice_is_wrong_state(self, session: QuizSession):
        answer(session, [1])
        session.advance()

        with pytest.raises(WrongStateError):
            session.advance()
        assert session.current_index == 1


class TestCompletedState:
    """Test operations around completion."""

    def test_result_before_completion_is_wrong_state(self, session: QuizSession):
        with pytest.raises(WrongStateError):
            session.result()

    def test_current_question_after_completion_is_wrong_state(self):
        session = QuizSession([])

        with pytest.raises(WrongStateError):
            session.current_question()

    def test_summary(self, session: QuizSession):
        for correct in ([1], [1, 2], [1]):
            answer(session, correct)
            session.advance()

        assert session.summary() == "3 of 3"
        assert session.summary("Result: {score}/{total}") == "Result: 3/3"

    def test_errors_are_session_errors(self):
        session = QuizSession([])

        with pytest.raises(SessionError):
            session.toggle_option(0)
        with pytest.raises(SessionError):
            session.submit()


class TestRestart:
    """Test restarting a session."""

    @pytest.mark.parametrize("answered", [0, 1, 2, 3])
    def test_restart_resets_progress(self, session: QuizSession, answered):
        for _ in range(answered):
            answer(session, [1])
            session.advance()
        if not session.is_completed:
            session.toggle_option(0)

        session.restart()

        assert session.current_index == 0
        assert session.score == 0
        assert session.selected == frozenset()
        assert session.state == SessionState.AWAITING_SELECTION

    def test_restart_from_revealed(self, session: QuizSession):
        answer(session, [1])
        session.restart()

        assert session.state == SessionState.AWAITING_SELECTION
        assert session.score == 0
        assert session.last_answer_perfect is None

    def test_restart_keeps_questions(self, session: QuizSession):
        questions = session.questions
        session.restart()

        assert session.questions == questions

    def test_restart_empty_session(self):
        session = QuizSession([])
        session.restart()

        assert session.state == SessionState.COMPLETED
        assert session.result() == (0, 0)


class TestOptionHints:
    """Test the render hint derivation."""

    @pytest.mark.parametrize(
        "selected,correct,expected",
        [
            (True, True, OptionHint.CORRECT_AND_SELECTED),
            (True, False, OptionHint.INCORRECT_SELECTED),
            (False, True, OptionHint.CORRECT_NOT_SELECTED),
            (False, False, OptionHint.NEUTRAL),
        ],
    )
    def test_option_hint_truth_table(self, selected, correct, expected):
        selected_set = frozenset({0}) if selected else frozenset()
        correct_set = frozenset({0}) if correct else frozenset()

        assert option_hint(0, selected_set, correct_set) == expected

    def test_hints_after_reveal(self, multi_answer_question: Question):
        session = QuizSession([multi_answer_question])
        answer(session, [0, 1])

        assert session.option_hints() == [
            OptionHint.INCORRECT_SELECTED,
            OptionHint.CORRECT_AND_SELECTED,
            OptionHint.CORRECT_NOT_SELECTED,
            OptionHint.NEUTRAL,
        ]

    def test_hints_before_reveal_are_wrong_state(self, session: QuizSession):
        with pytest.raises(WrongStateError):
            session.option_hints()


class TestViewState:
    """Test render state exposed to the view layer."""

    def test_option_views_before_reveal(self, session: QuizSession):
        session.toggle_option(2)
        views = session.option_views()

        assert [v.label for v in views] == [
            "А. London",
            "Б. Paris",
            "В. Berlin",
            "Г. Madrid",
        ]
        assert [v.selected for v in views] == [False, False, True, False]
        assert all(v.correct is None and v.hint is None for v in views)

    def test_option_views_after_reveal(self, session: QuizSession):
        answer(session, [2])
        views = session.option_views()

        assert [v.correct for v in views] == [False, True, False, False]
        assert [v.hint for v in views] == [
            OptionHint.NEUTRAL,
            OptionHint.CORRECT_NOT_SELECTED,
            OptionHint.INCORRECT_SELECTED,
            OptionHint.NEUTRAL,
        ]

    def test_progress_label(self, session: QuizSession):
        assert session.progress_label() == "Question 1 of 3"
        answer(session, [1])
        session.advance()
        assert session.progress_label("Вопрос {number} из {total}") == "Вопрос 2 из 3"

    def test_option_letters_cycle(self):
        assert [option_letter(i) for i in range(8)] == ["А", "Б", "В", "Г", "Д", "Е", "А", "Б"]

    def test_session_does_not_mutate_questions(self, sample_test: Test):
        snapshot = sample_test.model_copy(deep=True)
        session = QuizSession.from_test(sample_test)
        answer(session, [0, 1])
        session.advance()
        session.restart()

        assert sample_test == snapshot
