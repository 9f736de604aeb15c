"""ruleforge CLI entry point."""

import logging

import click

from ruleforge.config import LOG_LEVELS


@click.group()
@click.option(
    "--log-level",
    default="warning",
    envvar="RULEFORGE_LOG_LEVEL",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (also read from RULEFORGE_LOG_LEVEL).",
)
def cli(log_level: str):
    """ruleforge — declarative record validation CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommand groups
from ruleforge.cli.check_cmd import check  # noqa: E402
from ruleforge.cli.enums_cmd import enums  # noqa: E402
from ruleforge.cli.profiles_cmd import profiles  # noqa: E402

cli.add_command(profiles)
cli.add_command(enums)
cli.add_command(check)
