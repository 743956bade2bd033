"""Subcommand modules for sitectl.

Provides register_commands() which uses deferred imports to keep
``sitectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from sitectl.commands.check import check
    from sitectl.commands.list_cmd import list_cmd
    from sitectl.commands.show import show

    cli.add_command(check)
    cli.add_command(show)
    cli.add_command(list_cmd)
