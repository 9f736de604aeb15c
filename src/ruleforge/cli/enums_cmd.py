"""Enum table CLI commands."""

import click

from ruleforge.cli.common import fail, load_config
from ruleforge.enums import StaticEnumSource


def _load_enums() -> StaticEnumSource:
    config = load_config()
    try:
        return StaticEnumSource.from_yaml(config.enums_path)
    except ValueError as e:
        fail(str(e))


@click.group()
def enums():
    """Enum table commands."""
    pass


@enums.command("list")
def list_cmd():
    """List enum groups with their value counts."""
    source = _load_enums()
    for group in source.list_groups():
        definition = source.get_definition(group)
        click.echo(f"{group} ({len(definition.items)} values)")


@enums.command("show")
@click.argument("group")
def show_cmd(group: str):
    """Show the values of one enum group."""
    source = _load_enums()
    definition = source.get_definition(group)
    if definition is None:
        fail(f"Enum group '{group}' not found")

    click.echo(f"{definition.name}: {definition.display_name}")
    for item in definition.items:
        click.echo(f"  {item.enum_name:<24} {item.code!s:<6} {item.display_name}")
