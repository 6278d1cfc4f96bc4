"""Question bank loader - turns a JSON document into validated questions."""

import json
import logging
import re
from importlib import resources
from pathlib import Path
from typing import Any

from quizbank.errors import EmptyBankError, NotJsonError, StructureInvalidError
from quizbank.models.quiz import Question

logger = logging.getLogger(__name__)

BUNDLED_PACKAGE = "quizbank.data"
BUNDLED_RESOURCE = "questions.json"

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class _SkipEntry(Exception):
    """Raised internally when an entry has to be dropped."""


def parse(raw: str | bytes, strict: bool = False) -> list[Question]:
    """
    Parse a question bank document into a list of questions.

    The question list is either the top-level array or, for a top-level
    object, the first member whose value is an array. Malformed entries
    are skipped; only structural problems raise.

    Args:
        raw: JSON text, or UTF-8 encoded bytes
        strict: If True, also drop questions that cannot be answered
            perfectly (no options, empty or out-of-range correct indices)

    Returns:
        Questions in document order (possibly empty)

    Raises:
        NotJsonError: If the input is not UTF-8 text or not valid JSON
        StructureInvalidError: If no question array can be located
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise NotJsonError(f"Question bank is not UTF-8 text: {e}") from e

    try:
        root = json.loads(raw.strip())
    except json.JSONDecodeError as e:
        raise NotJsonError(f"Question bank is not valid JSON: {e}") from e
    except RecursionError as e:
        raise NotJsonError("Question bank is nested too deeply to parse") from e

    entries = locate_question_array(root)

    questions: list[Question] = []
    skipped = 0
    for position, entry in enumerate(entries):
        try:
            question = parse_entry(entry)
        except _SkipEntry as e:
            logger.debug("Skipping entry %d: %s", position, e)
            skipped += 1
            continue

        if strict and not question.is_answerable:
            logger.debug("Skipping unanswerable entry %d", position)
            skipped += 1
            continue

        questions.append(question)

    if skipped:
        logger.debug("Dropped %d of %d entries", skipped, len(entries))

    return questions


def locate_question_array(root: Any) -> list[Any]:
    """
    Find the array holding the question entries.

    Args:
        root: Decoded JSON document

    Returns:
        The question array

    Raises:
        StructureInvalidError: If the document holds no suitable array
    """
    if isinstance(root, list):
        return root

    if isinstance(root, dict):
        for key, value in root.items():
            if isinstance(value, list):
                logger.debug("Using member %r as question array", key)
                return value
        raise StructureInvalidError("Question array not found")

    raise StructureInvalidError("Invalid question bank format")


def parse_entry(entry: Any) -> Question:
    """
    Validate a single entry and build a Question from it.

    Raises:
        _SkipEntry: If the entry has to be dropped
    """
    if not isinstance(entry, dict):
        raise _SkipEntry("entry is not an object")

    text = entry.get("question")
    if not _is_scalar(text):
        raise _SkipEntry("'question' missing or not a scalar")

    options = entry.get("options")
    if not isinstance(options, list):
        raise _SkipEntry("'options' missing or not an array")

    if "correctIndex" not in entry:
        raise _SkipEntry("'correctIndex' missing")

    return Question(
        text=_scalar_text(text),
        options=tuple(_scalar_text(o) for o in options if _is_scalar(o)),
        correct_indices=normalize_correct_index(entry["correctIndex"]),
    )


def normalize_correct_index(value: Any) -> frozenset[int]:
    """
    Normalize a raw correctIndex value to a set of option positions.

    - integer (or integer string): single-element set
    - array: every convertible element, others dropped (may be empty)
    - object, null, boolean: empty set

    Raises:
        _SkipEntry: For a float or a string that does not hold an integer
    """
    if isinstance(value, list):
        indices = (_to_int(item) for item in value)
        return frozenset(i for i in indices if i is not None)

    if isinstance(value, float):
        raise _SkipEntry(f"'correctIndex' {value!r} is not an integer")

    if isinstance(value, str):
        index = _to_int(value)
        if index is None:
            raise _SkipEntry(f"'correctIndex' {value!r} is not an integer")
        return frozenset({index})

    index = _to_int(value)
    return frozenset() if index is None else frozenset({index})


def load_bank(path: Path | None = None, strict: bool = False) -> list[Question]:
    """
    Read and parse a question bank.

    Args:
        path: JSON file to read; the bundled bank is used when None
        strict: Passed through to parse()

    Returns:
        Parsed questions (possibly empty)

    Raises:
        LoadError: If the bank cannot be read or parsed
    """
    if path is None:
        source = f"{BUNDLED_PACKAGE}/{BUNDLED_RESOURCE}"
        raw = resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_RESOURCE).read_bytes()
    else:
        source = str(path)
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            raise NotJsonError(f"Cannot read question bank {path}: {e}") from e

    questions = parse(raw, strict=strict)
    logger.info("Loaded %d questions from %s", len(questions), source)
    return questions


def ensure_not_empty(questions: list[Question]) -> list[Question]:
    """
    Reject an empty question bank.

    Raises:
        EmptyBankError: If there are no questions
    """
    if not questions:
        raise EmptyBankError("The question bank contains no valid questions")
    return questions


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _scalar_text(value: str | int | float | bool) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _to_int(value: Any) -> int | None:
    # bool is an int subclass but true/false are not indices
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value):
        return int(value)
    return None
