"""Shared pytest fixtures for sitectl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from sitectl.config.settings import SiteSettings
from sitectl.infrastructure.site import Site


def render_page(
    body: str = "",
    *,
    title: str | None = None,
    permalink: str | None = None,
    layout: str | None = None,
    **extra: str,
) -> str:
    """Build file text with a front-matter block from keyword fields."""
    lines = ["---"]
    if layout is not None:
        lines.append(f"layout: {layout}")
    if title is not None:
        lines.append(f"title: {title}")
    if permalink is not None:
        lines.append(f"permalink: {permalink}")
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SITECTL_* environment out of the tests."""
    monkeypatch.delenv("SITECTL_CONFIG", raising=False)
    monkeypatch.delenv("SITECTL_LINKS__BASEURL", raising=False)
    monkeypatch.delenv("SITECTL_SCAN__WORKERS", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo handler changes made by configure_logging() inside CLI tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    site_logger = logging.getLogger("sitectl")
    site_level = site_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    site_logger.setLevel(site_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary Jekyll-style site with empty ``_posts`` and ``_drafts``."""
    root = tmp_path / "site"
    (root / "_posts").mkdir(parents=True)
    (root / "_drafts").mkdir()
    return root


@pytest.fixture
def write_page(site_root: Path) -> Callable[..., Path]:
    """Write a content file under the site root.

    ``write_page("about.md", "Body", title="About")`` renders front-matter
    from keyword fields; ``write_page("raw.md", raw="...")`` writes text as-is.
    """

    def _write(rel: str, body: str = "", *, raw: str | None = None, **fields: Any) -> Path:
        path = site_root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        text = raw if raw is not None else render_page(body, **fields)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_site(site_root: Path) -> Callable[..., Site]:
    """Build a Site over the temp root; keyword args become settings overrides."""

    def _make(**overrides: Any) -> Site:
        settings = SiteSettings.from_cli(site_root=site_root, **overrides)
        return Site(settings)

    return _make


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site so the CLI scans it by default."""
    monkeypatch.chdir(site_root)
