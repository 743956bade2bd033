"""Click command classes that carry usage examples.

``--help`` stays short; ``--examples`` prints a block of ready-to-paste
invocations and exits before the command body (or any site scan) runs.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def _print(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(textwrap.dedent(examples).strip("\n"), "  "))
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print,
        help="Show usage examples and exit.",
    )


class ExamplesMixin:
    """Accept an ``examples=`` keyword and expose it as ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))  # type: ignore[attr-defined]


class SiteCommand(ExamplesMixin, click.Command):
    """A command with optional ``--examples``."""


class SiteGroup(ExamplesMixin, click.Group):
    """A group with optional ``--examples``; subcommands default to :class:`SiteCommand`."""

    command_class = SiteCommand
