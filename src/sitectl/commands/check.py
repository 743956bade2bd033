"""Command: validate a site's content registry."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SiteCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  sitectl check
  sitectl check path/to/site
  sitectl check --strict
  sitectl --json check
  sitectl -q check""",
)
@click.argument(
    "root",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--strict",
    is_flag=True,
    help="Also fail on broken links and malformed documents.",
)
@click.pass_obj
def check(app: AppContext, root: Path | None, strict: bool) -> None:
    """Report duplicate permalinks, broken links, and revision conflicts.

    Exits 1 when duplicate permalinks or ambiguous revisions are found.
    """
    from sitectl.services.check import CheckService

    result = CheckService(app.open_site(root)).check(strict=strict)
    app.emit(result, exit_code=0 if result.data.get("healthy", True) else 1)
