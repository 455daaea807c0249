"""CLI commands: restyle parse / restyle format -- inspect style strings."""

from __future__ import annotations

import sys

import click

from restyle.coerce import ValueCoercer
from restyle.errors import StyleSyntaxError
from restyle.model.defaults import Defaults
from restyle.parser import format_style, parse_style
from restyle.values import ValueParser


def _parse_or_exit(style: str, coercer: ValueCoercer | None = None) -> dict[str, object] | None:
    try:
        return parse_style(style, coercer)
    except StyleSyntaxError as exc:
        click.echo(f"Syntax error: {exc}", err=True)
        sys.exit(1)


@click.command()
@click.argument("style")
@click.option(
    "--define",
    "-D",
    "defines",
    multiple=True,
    metavar="NAME=VALUE",
    help="Add a named value that $NAME references resolve to (repeatable).",
)
def parse(style: str, defines: tuple[str, ...]) -> None:
    """Parse a style string and print each key with its typed value.

    Exits with code 1 on syntax errors.
    """
    defaults = Defaults()
    for item in defines:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint="--define")
        name = name.strip()
        try:
            defaults.set(name, ValueParser().parse(name, value.strip()))
        except StyleSyntaxError as exc:
            raise click.BadParameter(str(exc), param_hint="--define") from exc

    result = _parse_or_exit(style, ValueCoercer(defaults))
    if result is None:
        click.echo("(no style)")
        return
    for key, value in result.items():
        click.echo(f"{key} = {value!r}")


@click.command(name="format")
@click.argument("style")
def format_cmd(style: str) -> None:
    """Parse a style string and print it in normalized form."""
    result = _parse_or_exit(style)
    if result is None:
        click.echo("(no style)")
        return
    click.echo(format_style(result))
