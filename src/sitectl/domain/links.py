"""Internal link extraction and resolution.

Pure functions over a :class:`Registry`. Only site-relative targets
(``/coding/style/enum-vs-boolean``) are considered; external, relative,
and in-page links are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING

from sitectl.domain.document import Status, normalize_permalink

if TYPE_CHECKING:
    from sitectl.domain.registry import Registry

# [text](target) or [text](target "title"); a leading ! marks an image.
_INLINE_LINK = re.compile(
    r"(?P<img>!?)\[(?P<text>[^\[\]]*)\]\(\s*<?(?P<url>[^)\s>]+)>?(?:\s+[\"'(][^)]*)?\)"
)
# [id]: target "optional title"
_REFERENCE_DEF = re.compile(r"^ {0,3}\[[^\]]+\]:\s*<?(?P<url>[^\s>]+)>?", re.MULTILINE)
_HTML_HREF = re.compile(r"""<a\s[^>]*?href\s*=\s*["'](?P<url>[^"']+)["']""", re.IGNORECASE)

_FENCED_CODE = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[^\n]*\n.*?^(?P=fence)\s*$",
    re.MULTILINE | re.DOTALL,
)
_INLINE_CODE = re.compile(r"(?<!`)(`{1,2})(?!`)((?:(?!\1)[^\n])+)\1(?!`)")

_LIQUID_BASEURL = re.compile(r"\{\{\s*site\.baseurl\s*\}\}")
_LIQUID_URL_FILTER = re.compile(
    r"""\{\{\s*["'](?P<path>[^"']+)["']\s*\|\s*(?:relative_url|absolute_url)\s*\}\}"""
)

DEFAULT_IGNORE: tuple[str, ...] = ("/assets/*", "/feed.xml")


@dataclass(frozen=True, order=True)
class CrossReference:
    """A link from one document's permalink to a target permalink."""

    source: str
    target: str


@dataclass(frozen=True, order=True)
class BrokenLink:
    """A cross-reference whose target has no published document."""

    source: str
    target: str


def _code_ranges(markdown: str) -> list[tuple[int, int]]:
    ranges = [(m.start(), m.end()) for m in _FENCED_CODE.finditer(markdown)]
    ranges.extend((m.start(), m.end()) for m in _INLINE_CODE.finditer(markdown))
    return ranges


def _inside(pos: int, ranges: list[tuple[int, int]]) -> bool:
    return any(start <= pos < end for start, end in ranges)


def _site_relative(url: str, baseurl: str) -> str | None:
    """Return the normalized site path for *url*, or None if it is not internal."""
    if not url.startswith("/") or url.startswith("//"):
        return None
    if baseurl:
        base = "/" + baseurl.strip("/")
        if url == base or url.startswith(base + "/"):
            url = url[len(base) :] or "/"
    return normalize_permalink(url)


def extract_link_targets(body: str, *, baseurl: str = "") -> list[str]:
    """Extract internal link targets from markdown *body*, in order.

    Inline links, reference definitions, and HTML anchors are recognized.
    Images and anything inside fenced or inline code are skipped. Liquid
    ``{{ site.baseurl }}`` prefixes and ``relative_url`` filters are
    resolved before matching. Duplicates are kept.
    """
    text = _LIQUID_BASEURL.sub("", body)
    text = _LIQUID_URL_FILTER.sub(lambda m: m.group("path"), text)
    code = _code_ranges(text)

    found: list[tuple[int, str]] = []
    for m in _INLINE_LINK.finditer(text):
        if m.group("img") or _inside(m.start(), code):
            continue
        found.append((m.start(), m.group("url")))
    for pattern in (_REFERENCE_DEF, _HTML_HREF):
        for m in pattern.finditer(text):
            if not _inside(m.start(), code):
                found.append((m.start(), m.group("url")))

    targets: list[str] = []
    for _, url in sorted(found):
        target = _site_relative(url.strip(), baseurl)
        if target is not None:
            targets.append(target)
    return targets


def cross_references(registry: Registry, *, baseurl: str = "") -> Iterator[CrossReference]:
    """Yield each distinct (source, target) pair across every registered document."""
    seen: set[CrossReference] = set()
    for document in registry.all():
        for target in extract_link_targets(document.body, baseurl=baseurl):
            ref = CrossReference(source=document.permalink, target=target)
            if ref not in seen:
                seen.add(ref)
                yield ref


def is_ignored(target: str, patterns: Iterable[str]) -> bool:
    return any(fnmatchcase(target, pattern) for pattern in patterns)


def resolve_links(
    registry: Registry,
    *,
    baseurl: str = "",
    ignore: Iterable[str] = DEFAULT_IGNORE,
) -> dict[str, set[str]]:
    """Map each source permalink to the set of its broken targets.

    A target is broken when no *published* document is registered under
    it. Sources without broken links are omitted. Read-only.
    """
    patterns = tuple(ignore)
    report: dict[str, set[str]] = {}
    for ref in cross_references(registry, baseurl=baseurl):
        if is_ignored(ref.target, patterns):
            continue
        if registry.get(ref.target, status=Status.PUBLISHED) is None:
            report.setdefault(ref.source, set()).add(ref.target)
    return report


def broken_links(report: dict[str, set[str]]) -> list[BrokenLink]:
    """Flatten a :func:`resolve_links` report into a sorted list."""
    return sorted(
        BrokenLink(source=source, target=target)
        for source, targets in report.items()
        for target in targets
    )
