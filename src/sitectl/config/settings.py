"""SiteSettings — CLI flags, environment, and config files in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs   — CLI flags passed by Click
  2. Env vars      — ``SITECTL_*``, nested sections via ``__``
                     (``SITECTL_LINKS__BASEURL=/blog``)
  3. sitectl.toml  — discovered via walk-up or ``SITECTL_CONFIG``
  4. _config.yml   — the Jekyll site's ``baseurl``
  5. Code defaults — baked into the section models
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from sitectl.config.discovery import (
    find_config,
    find_site_root,
    read_jekyll_config,
    read_toml,
)
from sitectl.config.models import ContentConfig, LinksConfig, ScanConfig


class MappingSettingsSource(PydanticBaseSettingsSource):
    """A settings source backed by an already-parsed mapping."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class TomlSettingsSource(MappingSettingsSource):
    """Sections of a ``sitectl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        data = read_toml(toml_path) if toml_path is not None else {}
        super().__init__(settings_cls, data)


class JekyllSettingsSource(MappingSettingsSource):
    """The subset of Jekyll's ``_config.yml`` that sitectl honours."""

    def __init__(self, settings_cls: type[BaseSettings], site_root: Path | None) -> None:
        data = read_jekyll_config(site_root) if site_root is not None else {}
        super().__init__(settings_cls, data)


# (sitectl.toml, site root) chosen by from_cli for the construction in progress.
_sources: ContextVar[tuple[Path | None, Path | None]] = ContextVar(
    "sitectl_settings_sources", default=(None, None)
)


class SiteSettings(BaseSettings):
    """Everything a sitectl run is configured with.

    Attributes:
        site_root: Base for relative config paths: the directory of
            ``sitectl.toml``, else of Jekyll's ``_config.yml``, else CWD.
        config_path: The ``sitectl.toml`` in effect, if any.
        content: ``[content]``: where documents live and how they are found.
        links: ``[links]``: baseurl and ignore globs for link checking.
        scan: ``[scan]``: parser thread count.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SITECTL_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- config sections ---
    content: ContentConfig = Field(default_factory=ContentConfig)
    links: LinksConfig = Field(default_factory=LinksConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)

    @property
    def content_root(self) -> Path:
        """``[content] root`` resolved against :attr:`site_root`."""
        root = Path(self.content.root)
        return root if root.is_absolute() else self.site_root / root

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path, site_root = _sources.get()
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
            JekyllSettingsSource(settings_cls, site_root),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> SiteSettings:
        """Build settings for one CLI invocation.

        Args:
            config_path: Explicit ``-c`` path; must exist.
            site_root: Use this directory as the site root and start the
                ``sitectl.toml`` walk-up from it.
            **cli_flags: Highest-priority overrides (flags and sections).

        Raises:
            click.ClickException: *config_path* does not exist, or a
                config file does not parse.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
        else:
            toml_path = find_config(site_root)

        if site_root is None:
            if toml_path is not None:
                site_root = toml_path.parent
            else:
                site_root = find_site_root() or Path.cwd()

        token = _sources.set((toml_path, site_root))
        try:
            return cls(site_root=site_root, config_path=toml_path, **cli_flags)
        finally:
            _sources.reset(token)
