"""Profile CLI commands — list, show and lint."""

from pathlib import Path

import click
import yaml

from ruleforge.cli.common import fail, load_config
from ruleforge.enums import StaticEnumSource
from ruleforge.profiles import ProfileLoader, lint_profiles
from ruleforge.validation import RuleRegistry, register_builtin_rules


def _load_profiles() -> ProfileLoader:
    config = load_config()
    loader = ProfileLoader(config.profiles_path)
    try:
        loader.load_all()
    except ValueError as e:
        fail(str(e))
    return loader


@click.group()
def profiles():
    """Validation profile commands."""
    pass


@profiles.command("list")
def list_cmd():
    """List profile keys with their field counts."""
    loader = _load_profiles()
    keys = loader.list_profiles()
    if not keys:
        click.echo("No profiles found.")
        return

    for key in keys:
        profile = loader.get_profile(key)
        click.echo(f"{key} ({len(profile.fields)} fields)")


@profiles.command("show")
@click.argument("key")
def show_cmd(key: str):
    """Print one profile as YAML."""
    loader = _load_profiles()
    profile = loader.get_profile(key)
    if profile is None:
        fail(f"Profile '{key}' not found")

    click.echo(
        yaml.safe_dump(
            {key: profile.to_dict()},
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=None,
        ).rstrip()
    )


@profiles.command("lint")
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Lint a single YAML file or directory instead of the configured profiles path.",
)
def lint_cmd(strict: bool, target_path: Path | None):
    """Lint profile YAML files: schema, duplicate keys and unknown rules."""
    config = load_config()
    profiles_path = target_path or config.profiles_path

    try:
        enum_source = StaticEnumSource.from_yaml(config.enums_path)
    except ValueError as e:
        fail(str(e))
    rules = RuleRegistry()
    register_builtin_rules(rules, enum_source)

    issues = lint_profiles(profiles_path, rules.list_registered(), strict=strict)
    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    click.echo(click.style("All profiles are valid.", fg="green", bold=True))
