"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, sitectl.toml only contains
overrides. A site that follows Jekyll's layout needs no config file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from sitectl.domain.links import DEFAULT_IGNORE


class ContentConfig(BaseModel):
    """[content] section."""

    model_config = {"frozen": True}

    root: str = "."
    drafts_dir: str = "_drafts"
    posts_dir: str = "_posts"
    suffixes: list[str] = Field(default_factory=lambda: [".md", ".markdown"])
    exclude_dirs: list[str] = Field(
        default_factory=lambda: [
            "_site",
            ".git",
            ".jekyll-cache",
            "node_modules",
            "vendor",
            "_layouts",
            "_includes",
            "_sass",
            "_data",
        ]
    )


class LinksConfig(BaseModel):
    """[links] section."""

    model_config = {"frozen": True}

    baseurl: str = ""
    ignore: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE))


class ScanConfig(BaseModel):
    """[scan] section."""

    model_config = {"frozen": True}

    workers: int = Field(default=1, ge=1)
