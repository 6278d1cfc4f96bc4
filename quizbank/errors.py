"""Exception types raised by the question bank and quiz sessions."""


class QuizBankError(Exception):
    """Base class for all quizbank errors."""


# Loading


class LoadError(QuizBankError):
    """The question bank could not be turned into a usable question list."""


class NotJsonError(LoadError):
    """The resource is not readable UTF-8 JSON."""


class StructureInvalidError(LoadError):
    """No array of questions could be located in the document."""


class EmptyBankError(LoadError):
    """No valid questions survived validation."""


class UnknownTestError(QuizBankError, LookupError):
    """No test with the requested id exists."""

    def __init__(self, test_id: int):
        self.test_id = test_id
        super().__init__(f"Test {test_id} not found")


# Sessions


class SessionError(QuizBankError):
    """A session operation was rejected; the session is left unchanged."""


class NothingSelectedError(SessionError):
    """Submit was called without any option selected."""

    def __init__(self):
        super().__init__("Select at least one option.")


class InvalidOptionError(SessionError):
    """An option index outside the current question's options was given."""

    def __init__(self, index: int, option_count: int):
        self.index = index
        self.option_count = option_count
        super().__init__(
            f"Option {index} is out of range (question has {option_count} options)"
        )


class WrongStateError(SessionError):
    """An operation was invoked outside the state it is valid in."""

    def __init__(self, operation: str, state):
        self.operation = operation
        self.state = state
        state_name = getattr(state, "value", state)
        super().__init__(f"Cannot {operation} while session is {state_name}")
