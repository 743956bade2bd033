"""Tests for front-matter splitting, document parsing, and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitectl.domain.document import Document, Layout, Status
from sitectl.domain.errors import MalformedDocument
from sitectl.domain.frontmatter import (
    parse_document,
    render_document,
    split_frontmatter,
    stringify,
)

# ---------------------------------------------------------------------------
# split_frontmatter
# ---------------------------------------------------------------------------


class TestSplitFrontmatter:
    def test_basic(self) -> None:
        fm, body = split_frontmatter("---\ntitle: Hello\n---\nBody\n")
        assert fm == {"title": "Hello"}
        assert body == "Body\n"

    def test_drops_one_separator_line(self) -> None:
        _, body = split_frontmatter("---\ntitle: Hello\n---\n\nBody")
        assert body == "Body"

    def test_keeps_further_blank_lines(self) -> None:
        _, body = split_frontmatter("---\ntitle: Hello\n---\n\n\nBody")
        assert body == "\nBody"

    def test_no_frontmatter(self) -> None:
        fm, body = split_frontmatter("# Just markdown\n")
        assert fm == {}
        assert body == "# Just markdown\n"

    def test_crlf_line_endings(self) -> None:
        fm, body = split_frontmatter("---\r\ntitle: A\r\n---\r\nBody\r\n")
        assert fm == {"title": "A"}
        assert body == "Body\n"

    def test_empty_block(self) -> None:
        fm, body = split_frontmatter("---\n---\nBody")
        assert fm == {}
        assert body == "Body"

    def test_delimiter_must_open_first_line(self) -> None:
        text = "Intro\n---\ntitle: nope\n---\n"
        fm, body = split_frontmatter(text)
        assert fm == {}
        assert body == text

    def test_unclosed_block_is_malformed(self) -> None:
        with pytest.raises(MalformedDocument, match="never closed"):
            split_frontmatter("---\ntitle: Draft\nBody without a closing fence\n")

    def test_malformed_carries_path(self) -> None:
        with pytest.raises(MalformedDocument) as exc_info:
            split_frontmatter("---\ntitle: x\n", path=Path("_drafts/x.md"))
        assert exc_info.value.path == Path("_drafts/x.md")
        assert "_drafts/x.md" in str(exc_info.value)

    def test_invalid_yaml_is_malformed(self) -> None:
        with pytest.raises(MalformedDocument, match="invalid YAML"):
            split_frontmatter("---\ntitle: [unclosed\n---\nBody")

    def test_non_mapping_is_malformed(self) -> None:
        with pytest.raises(MalformedDocument, match="mapping"):
            split_frontmatter("---\n- a\n- b\n---\n")


class TestStringify:
    def test_none(self) -> None:
        assert stringify(None) == ""

    def test_bools(self) -> None:
        assert stringify(True) == "true"
        assert stringify(False) == "false"

    def test_list(self) -> None:
        assert stringify(["java", "style"]) == '["java","style"]'

    def test_number(self) -> None:
        assert stringify(3) == "3"


# ---------------------------------------------------------------------------
# parse_document
# ---------------------------------------------------------------------------


class TestParseDocument:
    def test_recognized_fields(self) -> None:
        text = (
            "---\nlayout: post\ntitle: Enum vs Booleans\n"
            "permalink: /coding/style/enum-vs-boolean/\n---\n\nPrefer enums.\n"
        )
        doc = parse_document(text, fallback_permalink="/fallback")
        assert doc.layout is Layout.POST
        assert doc.title == "Enum vs Booleans"
        assert doc.permalink == "/coding/style/enum-vs-boolean"
        assert doc.body == "Prefer enums.\n"
        assert doc.status is Status.PUBLISHED
        assert doc.extra == {}

    def test_unrecognized_keys_preserved(self) -> None:
        text = "---\ntitle: T\ntags: [java, style]\ndate: 2019-03-01\ncomments: true\n---\n"
        doc = parse_document(text, fallback_permalink="/t")
        assert doc.extra == {
            "tags": '["java","style"]',
            "date": "2019-03-01",
            "comments": "true",
        }

    def test_fallbacks(self) -> None:
        doc = parse_document(
            "No front-matter here.",
            fallback_permalink="/2019/03/01/hello",
            fallback_title="Hello",
            default_layout=Layout.POST,
        )
        assert doc.permalink == "/2019/03/01/hello"
        assert doc.title == "Hello"
        assert doc.layout is Layout.POST
        assert doc.body == "No front-matter here."

    def test_blank_permalink_uses_fallback(self) -> None:
        doc = parse_document("---\npermalink:\n---\n", fallback_permalink="/f")
        assert doc.permalink == "/f"

    def test_unknown_layout_kept_in_extra(self) -> None:
        doc = parse_document(
            "---\nlayout: default\n---\n",
            fallback_permalink="/x",
            default_layout=Layout.PAGE,
        )
        assert doc.layout is Layout.PAGE
        assert doc.extra["layout"] == "default"

    def test_status_from_location(self) -> None:
        doc = parse_document("---\ntitle: D\n---\n", fallback_permalink="/d", status=Status.DRAFT)
        assert doc.status is Status.DRAFT

    def test_published_false_makes_draft(self) -> None:
        doc = parse_document("---\ntitle: D\npublished: false\n---\n", fallback_permalink="/d")
        assert doc.status is Status.DRAFT
        assert doc.extra["published"] == "false"

    def test_source_recorded(self) -> None:
        doc = parse_document("Body", fallback_permalink="/b", source=Path("b.md"))
        assert doc.source == Path("b.md")

    def test_malformed_propagates(self) -> None:
        with pytest.raises(MalformedDocument):
            parse_document("---\ntitle: Oops\n", fallback_permalink="/oops")


# ---------------------------------------------------------------------------
# render_document and the round-trip law
# ---------------------------------------------------------------------------


class TestRenderDocument:
    def test_layout(self) -> None:
        doc = Document(permalink="/a", title="A", layout=Layout.POST, body="Hi\n")
        assert render_document(doc) == "---\nlayout: post\ntitle: A\npermalink: /a\n---\n\nHi\n"

    def test_extra_keys_sorted_after_recognized(self) -> None:
        doc = Document(permalink="/a", title="A", extra={"zeta": "1", "alpha": "2"})
        text = render_document(doc)
        assert text.index("permalink") < text.index("alpha") < text.index("zeta")

    def test_unknown_layout_emitted_verbatim(self) -> None:
        doc = Document(permalink="/a", title="A", extra={"layout": "home"})
        assert "layout: home\n" in render_document(doc)


_ROUND_TRIP_SOURCES = [
    "---\nlayout: post\ntitle: Enum vs Booleans\npermalink: /coding/style/enum-vs-boolean\n---\n"
    "\nPrefer [enums](/coding/style/enums).\n",
    "---\ntitle: 'Useful Java Classes: Part 1'\ntags: [java, util]\ndate: 2020-01-02\n---\nBody",
    "---\nlayout: default\ntitle: Home\npublished: false\n---\n\n\n\nLeading blank lines\n",
    "---\ntitle: \"true\"\npermalink: /yes\nweight: 3\n---\n",
    "Plain markdown\r\nwith CRLF\r\n",
    "---\n---\n",
    "---\ntitle: Foo\npermalink: /notes/foo.md.html\n---\n",
    "---\ntitle: Reindex\npermalink: /blog/reindex.html\n---\n",
]


class TestRoundTrip:
    @pytest.mark.parametrize("text", _ROUND_TRIP_SOURCES)
    def test_render_then_parse_is_identity(self, text: str) -> None:
        context = {
            "fallback_permalink": "/fallback/path",
            "fallback_title": "Fallback Title",
            "default_layout": Layout.POST,
            "status": Status.PUBLISHED,
            "source": Path("_posts/2020-01-02-x.md"),
        }
        doc = parse_document(text, **context)
        again = parse_document(render_document(doc), **context)
        assert again == doc

    def test_stacked_suffix_permalink(self) -> None:
        doc = parse_document(
            "---\ntitle: Foo\npermalink: /notes/foo.md.html\n---\n",
            fallback_permalink="/fallback",
            fallback_title="Fallback",
        )
        assert doc.permalink == "/notes/foo"
