"""Typer CLI application for taking quizzes in the terminal."""

import logging
import re
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt
from rich.table import Table

from quizbank.bank.catalog import load_tests, start_session
from quizbank.bank.partition import summarize
from quizbank.config.settings import get_settings
from quizbank.errors import LoadError, NothingSelectedError, UnknownTestError
from quizbank.logging_setup import setup_console_logging
from quizbank.models.quiz import OptionHint, Test
from quizbank.session.quiz_session import OPTION_LETTERS, QuizSession
from quizbank.session.reveal import RevealTimer

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="quizbank",
    help="Multiple-choice quizzes from a JSON question bank",
    add_completion=False,
)

console = Console()

HINT_STYLES = {
    OptionHint.CORRECT_AND_SELECTED: "bold green",
    OptionHint.CORRECT_NOT_SELECTED: "green",
    OptionHint.INCORRECT_SELECTED: "bold red",
    OptionHint.NEUTRAL: "dim",
}

# Latin look-alikes of the option letters, for keyboards without Cyrillic
LATIN_LETTERS = ("A", "B", "C", "D", "E", "F")

_SEPARATORS = re.compile(r"[\s,;]+")


def parse_choices(text: str, option_count: int) -> List[int]:
    """
    Turn learner input into option indices.

    Accepts option letters (А, Б, ... or A, B, ...) and 1-based numbers,
    separated by spaces or commas.

    Args:
        text: Raw input line
        option_count: Number of options of the current question

    Returns:
        Option indices in input order

    Raises:
        ValueError: If a token is not a valid option
    """
    indices = []
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue

        token = token.upper()
        if token.isdigit():
            index = int(token) - 1
        elif token in OPTION_LETTERS:
            index = OPTION_LETTERS.index(token)
        elif token in LATIN_LETTERS:
            index = LATIN_LETTERS.index(token)
        else:
            raise ValueError(f"Unrecognised option: {token}")

        if not 0 <= index < option_count:
            raise ValueError(f"No such option: {token}")
        indices.append(index)

    return indices


def load_menu(bank: Optional[Path], group_size: Optional[int], strict: bool) -> List[Test]:
    """Load the tests, turning load errors into a single message and exit."""
    settings = get_settings()
    try:
        return load_tests(
            bank or settings.bank_path,
            group_size=group_size or settings.group_size,
            title_template=settings.test_title_template,
            strict=strict or settings.strict_validation,
        )
    except LoadError as e:
        logger.error("Loading tests failed: %s", e)
        console.print(f"[red]Error loading tests:[/red] {escape(str(e))}", style="bold")
        raise typer.Exit(code=1)


@app.command()
def tests(
    bank: Optional[Path] = typer.Option(
        None,
        "--bank",
        "-b",
        help="Question bank JSON file (defaults to the bundled bank)",
    ),
    group_size: Optional[int] = typer.Option(
        None,
        "--group-size",
        "-g",
        help="Number of questions per test",
        min=1,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Drop questions that cannot be answered correctly",
    ),
) -> None:
    """List the available tests."""
    display_menu(load_menu(bank, group_size, strict))


@app.command()
def play(
    test_id: int = typer.Argument(..., help="Number of the test to take"),
    bank: Optional[Path] = typer.Option(None, "--bank", "-b", help="Question bank JSON file"),
    group_size: Optional[int] = typer.Option(
        None, "--group-size", "-g", help="Number of questions per test", min=1
    ),
    delay: Optional[float] = typer.Option(
        None,
        "--delay",
        help="Seconds to show the answer before the next question",
        min=0.0,
    ),
    strict: bool = typer.Option(False, "--strict", help="Drop unanswerable questions"),
) -> None:
    """
    Take a test.

    Example:
        quizbank play 2 --delay 0
    """
    available_tests = load_menu(bank, group_size, strict)

    try:
        session = start_session(available_tests, test_id)
    except UnknownTestError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    timer = RevealTimer(get_settings().reveal_delay_seconds if delay is None else delay)
    run_session(session, timer)


@app.command()
def menu(
    bank: Optional[Path] = typer.Option(None, "--bank", "-b", help="Question bank JSON file"),
    group_size: Optional[int] = typer.Option(
        None, "--group-size", "-g", help="Number of questions per test", min=1
    ),
    delay: Optional[float] = typer.Option(
        None, "--delay", help="Seconds to show the answer", min=0.0
    ),
    strict: bool = typer.Option(False, "--strict", help="Drop unanswerable questions"),
) -> None:
    """Pick tests from the menu until 0 is entered."""
    available_tests = load_menu(bank, group_size, strict)
    reveal_delay = get_settings().reveal_delay_seconds if delay is None else delay

    while True:
        display_menu(available_tests)
        try:
            test_id = IntPrompt.ask("Test number (0 to quit)", console=console, default=0)
        except (EOFError, KeyboardInterrupt):
            break
        if test_id == 0:
            break

        try:
            session = start_session(available_tests, test_id)
        except UnknownTestError as e:
            console.print(f"[yellow]{e}[/yellow]")
            continue
        run_session(session, RevealTimer(reveal_delay))


def run_session(session: QuizSession, timer: RevealTimer) -> None:
    """
    Drive a session from the terminal until it is finished or abandoned.

    The timer is cancelled on the way out so a pending advance never runs
    against a session that is no longer shown.
    """
    try:
        while True:
            if not play_questions(session, timer):
                console.print("[cyan]Returning to menu.[/cyan]")
                return

            score, total = session.result()
            console.print(
                Panel(
                    f"Result: {session.summary()}",
                    title="Test complete",
                    border_style="green" if score == total else "cyan",
                )
            )
            if not Confirm.ask("Restart this test?", console=console, default=False):
                return
            session.restart()
    except (EOFError, KeyboardInterrupt):
        console.print("\n[cyan]Returning to menu.[/cyan]")
    finally:
        timer.cancel()


def play_questions(session: QuizSession, timer: RevealTimer) -> bool:
    """
    Ask questions until the session completes.

    Returns:
        False if the learner quit before the end
    """
    while not session.is_completed:
        display_question(session)
        text = console.input(
            "[cyan]Choose options (e.g. 'А Б' or '1 2'), Enter to submit, q to quit:[/cyan] "
        ).strip()

        if text.lower() == "q":
            return False

        if not text:
            try:
                perfect = session.submit()
            except NothingSelectedError as e:
                console.print(f"[yellow]{e}[/yellow]")
                continue

            display_reveal(session, perfect)
            timer.schedule(session.advance)
            timer.wait()
            continue

        try:
            choices = parse_choices(text, session.current_question().option_count)
        except ValueError as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")
            continue

        for index in choices:
            session.toggle_option(index)

    return True


def display_menu(available_tests: List[Test]) -> None:
    """Display the test menu."""
    table = Table(title="Tests", border_style="cyan")
    table.add_column("Test", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Questions", style="white")

    for row in summarize(available_tests):
        table.add_row(str(row.id), row.title, str(row.question_count))

    console.print()
    console.print(table)


def display_question(session: QuizSession) -> None:
    """Display the current question with the learner's selection."""
    question = session.current_question()

    console.print()
    console.print(f"[bold cyan]{session.progress_label()}[/bold cyan]")
    console.print(question.text, style="bold", markup=False)
    for option in session.option_views():
        mark = "[x]" if option.selected else "[ ]"
        console.print(f"  {mark} {option.label}", highlight=False, markup=False)


def display_reveal(session: QuizSession, perfect: bool) -> None:
    """Display the revealed answer."""
    console.print()
    for option in session.option_views():
        mark = "[x]" if option.selected else "[ ]"
        console.print(
            f"  {mark} {option.label}",
            style=HINT_STYLES[option.hint],
            highlight=False,
            markup=False,
        )

    if perfect:
        console.print("[green]Correct![/green]")
    else:
        console.print("[red]Incorrect.[/red]")


@app.command()
def info() -> None:
    """Display information about the quiz application."""
    info_text = """
[bold cyan]Quiz Bank[/bold cyan]
Version: 0.1.0

[bold]How it works:[/bold]
  • Questions are loaded from a JSON question bank
  • The bank is split into tests of equal size
  • Select one or more options, then submit
  • A point is scored only when exactly the correct options are chosen

[bold]Configuration:[/bold]
  QUIZBANK_BANK_PATH, QUIZBANK_GROUP_SIZE, QUIZBANK_REVEAL_DELAY,
  QUIZBANK_STRICT, QUIZBANK_TEST_TITLE, QUIZBANK_LOG_LEVEL
    """
    console.print(Panel(info_text, title="Quiz Bank Info", border_style="cyan"))


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Quiz Bank - take multiple-choice tests in the terminal.
    """
    setup_console_logging("DEBUG" if verbose else get_settings().log_level)


if __name__ == "__main__":
    app()
