"""Front-matter parsing and rendering.

A content file may open with a YAML block fenced by ``---`` lines::

    ---
    layout: post
    title: Enum vs Booleans
    permalink: /coding/style/enum-vs-boolean
    ---

    Body text...

``layout``, ``title`` and ``permalink`` map onto :class:`Document`
fields; every other key is preserved, stringified, in ``Document.extra``.
:func:`render_document` is the inverse of :func:`parse_document`:
parsing a rendered document with the same path context yields an equal
Document.
"""

from __future__ import annotations

import json
from datetime import date, datetime, time
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from sitectl.domain.document import (
    RECOGNIZED_KEYS,
    Document,
    Layout,
    Status,
    normalize_permalink,
)
from sitectl.domain.errors import MalformedDocument

_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a new instance per call keeps a
    failed dump from leaking into the next operation.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


def split_frontmatter(text: str, *, path: Path | None = None) -> tuple[dict[str, Any], str]:
    """Split *text* into ``(frontmatter, body)``.

    The block must open on the first line. One blank line directly after
    the closing delimiter is treated as a separator and dropped. Text
    without an opening delimiter has an empty front-matter mapping.

    Raises:
        MalformedDocument: The block is opened but never closed, its YAML
            does not parse, or it is not a mapping.
    """
    normalized = text.replace("\r\n", "\n").removeprefix("\ufeff")
    lines = normalized.split("\n")
    if lines[0].rstrip() != _DELIMITER:
        return {}, normalized

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() == _DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        raise MalformedDocument("front-matter block is never closed", path=path)

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]

    try:
        loaded = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        raise MalformedDocument(f"invalid YAML in front-matter: {exc}", path=path) from exc

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        msg = f"front-matter must be a mapping, got {type(loaded).__name__}"
        raise MalformedDocument(msg, path=path)
    return {str(k): v for k, v in loaded.items()}, body


def stringify(value: Any) -> str:
    """Flatten a YAML value into the string form kept in ``Document.extra``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        if value.tzinfo is None and value.time() == time():
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def parse_document(
    text: str,
    *,
    fallback_permalink: str,
    fallback_title: str = "",
    default_layout: Layout = Layout.PAGE,
    status: Status = Status.PUBLISHED,
    source: Path | None = None,
) -> Document:
    """Parse raw file text into a :class:`Document`.

    Args:
        text: Full file contents.
        fallback_permalink: Used when front-matter has no ``permalink``.
        fallback_title: Used when front-matter has no ``title``.
        default_layout: Used when ``layout`` is missing or unrecognized.
        status: Status implied by the file's location. A front-matter
            ``published: false`` downgrades it to draft.
        source: Originating file, recorded on the Document.

    Raises:
        MalformedDocument: See :func:`split_frontmatter`.
    """
    fm, body = split_frontmatter(text, path=source)

    extra: dict[str, str] = {}
    for key, value in fm.items():
        if key not in RECOGNIZED_KEYS:
            extra[key] = stringify(value)

    layout = default_layout
    if "layout" in fm:
        name = stringify(fm["layout"]).strip()
        try:
            layout = Layout(name)
        except ValueError:
            extra["layout"] = name

    title = stringify(fm.get("title")).strip() or fallback_title
    permalink = stringify(fm.get("permalink")).strip() or fallback_permalink

    if extra.get("published", "").lower() == "false":
        status = Status.DRAFT

    return Document(
        permalink=normalize_permalink(permalink),
        title=title,
        layout=layout,
        body=body,
        status=status,
        extra=extra,
        source=source,
    )


def render_document(document: Document) -> str:
    """Render *document* back to file text.

    Keys are emitted as ``layout``, ``title``, ``permalink``, then the
    ``extra`` keys alphabetically. A blank line separates the block from
    the body.
    """
    fm: dict[str, str] = {
        "layout": document.extra.get("layout", document.layout.value),
        "title": document.title,
        "permalink": document.permalink,
    }
    for key in sorted(document.extra):
        if key != "layout":
            fm[key] = document.extra[key]

    buf = StringIO()
    _new_yaml().dump(fm, buf)
    return "".join([_DELIMITER, "\n", buf.getvalue(), _DELIMITER, "\n", "\n", document.body])
