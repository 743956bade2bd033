"""Document model, status/layout enums, and identity normalization.

A Document is the parsed form of one content file. ``permalink`` is its
registry key; ``normalize_title`` is the basis of the key revisions are
grouped by. Both normalizers are pure and idempotent.
"""

from __future__ import annotations

import posixpath
import re
import unicodedata
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class Status(StrEnum):
    """Publication status, derived from where a document is sourced."""

    DRAFT = "draft"
    PUBLISHED = "published"


class Layout(StrEnum):
    """Recognized layout tags."""

    POST = "post"
    PAGE = "page"


# Front-matter keys mapped onto Document fields. Everything else is kept
# in ``Document.extra``.
RECOGNIZED_KEYS: tuple[str, ...] = ("layout", "title", "permalink")


class Document(BaseModel):
    """One parsed content file.

    Attributes:
        permalink: Normalized site path; unique among published documents.
        title: Human-readable title.
        layout: ``post`` or ``page``.
        body: Raw markdown after the front-matter block.
        status: ``draft`` or ``published``.
        extra: Unrecognized front-matter keys, stringified.
        source: File the document was read from, if any.
    """

    model_config = {"frozen": True}

    permalink: str
    title: str
    layout: Layout = Layout.PAGE
    body: str = ""
    status: Status = Status.PUBLISHED
    extra: dict[str, str] = Field(default_factory=dict)
    source: Path | None = None

    @property
    def published(self) -> bool:
        return self.status is Status.PUBLISHED

    @property
    def origin(self) -> str:
        """Source path as a string, or the permalink for in-memory documents."""
        return str(self.source) if self.source is not None else self.permalink


_INDEX_NAMES = ("index.html", "index.md")
_PAGE_SUFFIXES = (".html", ".md")


def _strip_page_name(path: str) -> str:
    head, _, name = path.rpartition("/")
    if name in _INDEX_NAMES:
        return head or "/"
    for suffix in _PAGE_SUFFIXES:
        if name.endswith(suffix):
            return path[: -len(suffix)] or "/"
    return path


def normalize_permalink(value: str) -> str:
    """Normalize a site path so equivalent spellings compare equal.

    ``coding/style/enum/``, ``/coding/style/enum.html`` and
    ``/coding//style/enum`` all become ``/coding/style/enum``;
    ``/java/index.html`` becomes ``/java``. The site root is ``/``.
    Normalizing a normalized path returns it unchanged.
    """
    path = value.split("#", 1)[0].split("?", 1)[0]
    while True:
        previous = path
        path = path.strip()
        if not path.startswith("/"):
            path = "/" + path
        path = posixpath.normpath(re.sub(r"/{2,}", "/", path))
        path = _strip_page_name(path)
        if path == previous:
            return path


def normalize_title(title: str) -> str:
    """Normalize a title into a revision-group key.

    Lowercases, applies NFKC normalization, strips punctuation other
    than ``+`` and ``#`` (so ``C++`` and ``C#`` stay apart), and
    collapses whitespace. May return ``""`` for an all-punctuation title.
    """
    text = title.lower()
    text = unicodedata.normalize("NFKC", text)
    text = re.sub(r"[^\w\s+#]", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def title_from_slug(slug: str) -> str:
    """Derive a display title from a file slug (``enum-vs-boolean`` -> ``Enum Vs Boolean``)."""
    words = [w for w in re.split(r"[-_\s]+", slug) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)
