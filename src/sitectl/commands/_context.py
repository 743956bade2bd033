"""AppContext — state shared by every sitectl command.

The root group builds one from :class:`SiteSettings` and hands it to
subcommands through ``@click.pass_obj``. It owns logging setup, the
lazily scanned :class:`Site`, and the stdout/stderr/exit-code policy for
results.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sitectl.config.logging import configure_logging
from sitectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from sitectl.config.settings import SiteSettings
    from sitectl.infrastructure.site import Site
    from sitectl.services.result import ServiceResult


class AppContext:
    """Per-invocation context.

    A command argument such as ``check ROOT`` names a site directory:
    settings are rebuilt with config discovery starting there, so that
    site's ``sitectl.toml`` and ``_config.yml`` apply wherever sitectl
    runs from. Nothing is scanned until a command asks for the site, so
    ``--help`` and ``--examples`` stay instant.
    """

    def __init__(self, settings: SiteSettings, *, config_path: str | None = None) -> None:
        self.settings = settings
        self._config_path = config_path
        self._site: Site | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def settings_for(self, root: Path) -> SiteSettings:
        """Settings for the site at *root*, keeping this run's CLI flags."""
        from sitectl.config.settings import SiteSettings

        return SiteSettings.from_cli(
            config_path=self._config_path,
            site_root=root.resolve(),
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            log_json=self.settings.log_json,
        )

    def open_site(self, root: Path | None = None) -> Site:
        """The site at *root*, else at the configured content root."""
        from sitectl.infrastructure.site import Site

        if root is None:
            if self._site is None:
                self._site = Site(self.settings)
            return self._site

        if self._site is None or self._site.settings.site_root != root.resolve():
            self._site = Site(self.settings_for(root))
        return self._site

    @property
    def site(self) -> Site:
        return self.open_site()

    @property
    def output(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult, *, exit_code: int = 0) -> None:
        """Print *result* and end the command with the right status.

        A successful result goes to stdout; its warnings go to stderr
        (they are already inside the payload with ``--json``). A failed
        result goes to stderr and exits 1. A non-zero *exit_code* exits
        with that status after printing a successful result.
        """
        output = self.output
        text = format_result(result, settings=output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if exit_code:
            raise SystemExit(exit_code)
