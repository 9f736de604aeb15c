"""Record check CLI command."""

import json

import click

from ruleforge.bootstrap import create_validation_service
from ruleforge.cli.common import fail, load_config


@click.command("check")
@click.argument("key")
@click.argument("record_file", type=click.File("r"), default="-")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON.",
)
def check(key: str, record_file, as_json: bool):
    """Validate a JSON record (from RECORD_FILE or stdin) against profile KEY."""
    try:
        record = json.load(record_file)
    except ValueError as e:
        fail(f"Invalid JSON: {e}")
    if not isinstance(record, dict):
        fail("Record must be a JSON object")

    try:
        service = create_validation_service(load_config())
    except ValueError as e:
        fail(str(e))

    if not service.profiles.is_registered(key):
        click.echo(
            click.style(f"Warning: no profile '{key}'; the record is accepted", fg="yellow"),
            err=True,
        )

    result = service.validate_record(key, record)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    elif result.valid:
        click.echo(click.style(f"Record is valid for '{key}'.", fg="green"))
    else:
        for error in result.errors:
            click.echo(click.style(f"  ✗ {error}", fg="red"))
        click.echo(click.style(f"\n{len(result.errors)} error(s) found", fg="red", bold=True))

    if not result.valid:
        raise SystemExit(1)
