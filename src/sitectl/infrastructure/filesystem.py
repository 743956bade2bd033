"""Filesystem operations for site content.

INVARIANT: Files are truth. The registry is derived from a scan and
never written back.

Pure parsing/rendering lives in :mod:`sitectl.domain.frontmatter`. This
module handles file discovery, reading, and everything derived from a
file's location: draft status, default layout, and fallback permalink.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from sitectl.domain.document import (
    Document,
    Layout,
    Status,
    normalize_permalink,
    title_from_slug,
)
from sitectl.domain.errors import MalformedDocument
from sitectl.domain.frontmatter import parse_document

# Jekyll post file names: 2019-03-01-enum-vs-boolean.md
_DATED_NAME = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")


@dataclass(frozen=True)
class PathContext:
    """Document defaults implied by where a file lives."""

    permalink: str
    title: str
    layout: Layout
    status: Status


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_content_files(
    root: Path,
    *,
    suffixes: Iterable[str] = (".md", ".markdown"),
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """Discover content files under *root*, sorted.

    Skips hidden directories and any directory named in *exclude_dirs*.
    """
    wanted = {s.lower() for s in suffixes}
    skip = set(exclude_dirs)
    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in wanted:
            continue
        dirs = path.relative_to(root).parts[:-1]
        if any(d in skip or d.startswith(".") for d in dirs):
            continue
        results.append(path)
    return sorted(results)


# ---------------------------------------------------------------------------
# Path-derived defaults
# ---------------------------------------------------------------------------


def describe_path(
    path: Path,
    root: Path,
    *,
    drafts_dir: str = "_drafts",
    posts_dir: str = "_posts",
) -> PathContext:
    """Derive status, layout, fallback title, and fallback permalink from *path*.

    - ``_drafts/`` anywhere in the path makes the document a draft.
    - ``_posts/`` and ``_drafts/`` are dropped from the permalink; other
      directories keep their name minus a leading ``_``.
    - ``YYYY-MM-DD-slug`` names map to ``/YYYY/MM/DD/slug``.
    - ``index`` maps to its directory.
    """
    rel = path.relative_to(root)
    dirs = rel.parts[:-1]
    in_drafts = drafts_dir in dirs
    in_posts = posts_dir in dirs

    kept = [d.lstrip("_") for d in dirs if d not in (drafts_dir, posts_dir)]
    stem = rel.stem
    dated = _DATED_NAME.match(stem)

    if dated:
        slug = dated.group("slug")
        parts = [*kept, dated.group("year"), dated.group("month"), dated.group("day"), slug]
    elif stem == "index":
        slug = kept[-1] if kept else "home"
        parts = kept
    else:
        slug = stem
        parts = [*kept, stem]

    return PathContext(
        permalink=normalize_permalink("/".join(parts)),
        title=title_from_slug(slug),
        layout=Layout.POST if in_posts or in_drafts else Layout.PAGE,
        status=Status.DRAFT if in_drafts else Status.PUBLISHED,
    )


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_document(
    path: Path,
    root: Path,
    *,
    drafts_dir: str = "_drafts",
    posts_dir: str = "_posts",
) -> Document:
    """Read and parse one content file.

    The document's ``source`` is recorded relative to *root*.

    Raises:
        MalformedDocument: Unterminated or invalid front-matter, or the
            file is not UTF-8 or cannot be read.
    """
    rel = path.relative_to(root)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDocument("file is not valid UTF-8", path=rel) from exc
    except OSError as exc:
        raise MalformedDocument(f"unreadable: {exc.strerror or exc}", path=rel) from exc

    ctx = describe_path(path, root, drafts_dir=drafts_dir, posts_dir=posts_dir)
    return parse_document(
        text,
        fallback_permalink=ctx.permalink,
        fallback_title=ctx.title,
        default_layout=ctx.layout,
        status=ctx.status,
        source=rel,
    )
