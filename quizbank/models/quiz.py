"""Pydantic models for question bank data structures."""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field


class SessionState(str, Enum):
    """Quiz session states."""

    AWAITING_SELECTION = "awaiting_selection"
    REVEALED = "revealed"
    COMPLETED = "completed"


class OptionHint(str, Enum):
    """Render hint for an option once the answer has been revealed."""

    CORRECT_AND_SELECTED = "correct_and_selected"
    CORRECT_NOT_SELECTED = "correct_not_selected"
    INCORRECT_SELECTED = "incorrect_selected"
    NEUTRAL = "neutral"


class Question(BaseModel):
    """A single multiple-choice question with one or more correct options."""

    text: str = Field(..., description="The question text")
    options: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Answer options, addressed by their position",
    )
    correct_indices: frozenset[int] = Field(
        default_factory=frozenset,
        description="Positions of the correct options",
    )

    @property
    def option_count(self) -> int:
        """Get the number of options."""
        return len(self.options)

    @property
    def is_answerable(self) -> bool:
        """
        Check whether a perfect answer is possible for this question.

        The loader keeps entries with an empty or out-of-range correct set,
        so such questions can exist in a bank but never score.
        """
        return (
            bool(self.options)
            and bool(self.correct_indices)
            and all(0 <= i < len(self.options) for i in self.correct_indices)
        )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "text": "Which of these are prime numbers?",
                "options": ["4", "5", "7", "9"],
                "correct_indices": [1, 2],
            }
        },
    }


class Test(BaseModel):
    """A fixed-size group of questions presented as one quiz attempt."""

    # keep pytest from collecting this model as a test class
    __test__: ClassVar[bool] = False

    id: int = Field(..., ge=1, description="1-based sequence number")
    title: str = Field(..., min_length=1, description="Display title")
    questions: tuple[Question, ...] = Field(
        default_factory=tuple,
        description="Questions in this test",
    )

    @property
    def question_count(self) -> int:
        """Get the number of questions in this test."""
        return len(self.questions)

    model_config = {"frozen": True}


class TestSummary(BaseModel):
    """Menu row describing a test."""

    __test__: ClassVar[bool] = False

    id: int
    title: str
    question_count: int = Field(..., ge=0)


class OptionView(BaseModel):
    """Render state of a single option for the view layer."""

    index: int = Field(..., ge=0)
    letter: str
    text: str
    selected: bool = False
    correct: bool | None = Field(
        None,
        description="Whether the option is correct, known only after reveal",
    )
    hint: OptionHint | None = Field(
        None,
        description="Render hint, known only after reveal",
    )

    @property
    def label(self) -> str:
        """Get the prefixed label, e.g. 'А. Paris'."""
        return f"{self.letter}. {self.text}"
