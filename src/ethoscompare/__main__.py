"""Entry point for ``python -m ethoscompare``."""

from ethoscompare.cli.typer_app import app

if __name__ == "__main__":
    app()
