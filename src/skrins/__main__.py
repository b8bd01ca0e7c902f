"""Allow running the CLI with ``python -m skrins``."""

from skrins.cli.cli import app

if __name__ == "__main__":
    app()
