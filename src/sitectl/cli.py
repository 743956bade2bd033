"""Root CLI group for sitectl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from sitectl import __version__
from sitectl.commands import register_commands
from sitectl.commands._base import SiteGroup
from sitectl.commands._context import AppContext
from sitectl.config.settings import SiteSettings


_EXAMPLES = """\
  sitectl check
  sitectl --json check --strict
  sitectl -C path/to/site list --status draft
  sitectl show /coding/style/enum-vs-boolean --source"""


@click.group(cls=SiteGroup, invoke_without_command=True, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="sitectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-C",
    "--root",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Site directory; sitectl.toml and _config.yml are discovered from here.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    root: Path | None,
) -> None:
    """sitectl — static content registry and validator."""
    ctx.ensure_object(dict)
    settings = SiteSettings.from_cli(
        config_path=config_path,
        site_root=root.resolve() if root is not None else None,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings, config_path=config_path)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
