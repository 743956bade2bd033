"""Command: list registered documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SiteCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext


@click.command(
    "list",
    cls=SiteCommand,
    examples="""\
  sitectl list
  sitectl list --status draft
  sitectl -q list --status published""",
)
@click.option(
    "--status",
    type=click.Choice(["draft", "published"]),
    default=None,
    help="Only list documents with this status.",
)
@click.pass_obj
def list_cmd(app: AppContext, status: str | None) -> None:
    """List documents in registration order."""
    from sitectl.services.query import QueryService

    app.emit(QueryService(app.site).list_documents(status=status))
