"""Command: look up one document by permalink."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SiteCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  sitectl show /coding/style/enum-vs-boolean
  sitectl show /about --status draft
  sitectl show /about --source""",
)
@click.argument("permalink")
@click.option(
    "--status",
    type=click.Choice(["draft", "published"]),
    default=None,
    help="Only match documents with this status.",
)
@click.option("--source", "include_source", is_flag=True, help="Print the normalized file text.")
@click.pass_obj
def show(app: AppContext, permalink: str, status: str | None, include_source: bool) -> None:
    """Show the document registered under PERMALINK."""
    from sitectl.services.query import QueryService

    app.emit(QueryService(app.site).show(permalink, status=status, include_source=include_source))
