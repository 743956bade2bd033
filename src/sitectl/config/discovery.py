"""Locating and reading the files that configure a site.

Two files matter:

- ``sitectl.toml`` holds sitectl's own overrides. It is found by walking
  up from the working directory, the way git finds ``.git/``, unless
  ``SITECTL_CONFIG`` names one explicitly.
- ``_config.yml`` is Jekyll's site config. Its directory marks the site
  root when there is no ``sitectl.toml``, and its ``baseurl`` is used
  for link resolution unless sitectl config says otherwise.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

CONFIG_FILENAME = "sitectl.toml"
CONFIG_ENV_VAR = "SITECTL_CONFIG"
JEKYLL_CONFIG_FILENAME = "_config.yml"


def _ancestors(start: Path | None) -> Iterator[Path]:
    current = (start or Path.cwd()).resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``sitectl.toml`` in effect for *start* (default: cwd), if any.

    A ``SITECTL_CONFIG`` path wins over the walk-up; if it names a file
    that does not exist there is no config.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    for directory in _ancestors(start):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_site_root(start: Path | None = None) -> Path | None:
    """Nearest directory at or above *start* holding a Jekyll ``_config.yml``."""
    for directory in _ancestors(start):
        if (directory / JEKYLL_CONFIG_FILENAME).is_file():
            return directory
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse a ``sitectl.toml``; a syntax error becomes a ClickException."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


def read_jekyll_config(root: Path) -> dict[str, Any]:
    """Settings overlay taken from ``root/_config.yml``.

    Only ``baseurl`` is used; it lands in the ``links`` section. Returns
    an empty mapping when the file is missing or has no baseurl.
    """
    path = root / JEKYLL_CONFIG_FILENAME
    if not path.is_file():
        return {}
    try:
        loaded = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
    except YAMLError as exc:
        raise click.ClickException(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(loaded, dict) or not loaded.get("baseurl"):
        return {}
    return {"links": {"baseurl": str(loaded["baseurl"])}}
