"""Main entry point for quizbank CLI."""

from quizbank.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
