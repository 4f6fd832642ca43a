"""Entry point for the tasksync CLI.

Usage:
    python -m tasksync.interfaces.cli.main

Or via installed entry point:
    tasksync <command>
"""

from tasksync.interfaces.cli import app


def main() -> None:
    """Run the tasksync CLI application."""
    app()


if __name__ == "__main__":
    main()
