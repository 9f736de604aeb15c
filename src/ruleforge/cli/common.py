"""Helpers shared by the CLI commands."""

from typing import NoReturn

import click

from ruleforge.config import ValidationConfig


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with status 1."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(1)


def load_config() -> ValidationConfig:
    """Read configuration from the environment, exiting on bad values."""
    try:
        return ValidationConfig.from_env()
    except ValueError as e:
        fail(str(e))
