"""Tests for CheckService — the site validation report."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sitectl.infrastructure.site import Site
from sitectl.services.check import CheckService


def _check(site: Site, *, strict: bool = False) -> dict:
    result = CheckService(site).check(strict=strict)
    assert result.ok
    assert result.op == "check"
    return result.data


class TestCheck:
    def test_healthy_site(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("index.md", "[About](/about)\n", title="Home", permalink="/")
        write_page("about.md", "[Home](/)\n", title="About")
        data = _check(make_site())
        assert data["healthy"] is True
        assert data["count"] == 0
        assert data["documents"] == 2
        assert data["published"] == 2
        assert data["drafts"] == 0
        assert data["duplicates"] == []
        assert data["broken_links"] == []

    def test_duplicate_permalink_is_unhealthy(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("one.md", title="One", permalink="/x")
        write_page("two.md", title="Two", permalink="/x")
        data = _check(make_site())
        assert data["healthy"] is False
        assert data["duplicates"] == [{"permalink": "/x", "sources": ["one.md", "two.md"]}]

    def test_broken_link_reported_once(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page(
            "p.md",
            "[x](/nonexistent) and again [y](/nonexistent)\n",
            title="P",
        )
        data = _check(make_site())
        assert data["broken_links"] == [{"source": "/p", "target": "/nonexistent"}]
        assert data["healthy"] is True
        assert data["count"] == 1

    def test_broken_link_fails_strict(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("p.md", "[x](/nonexistent)\n", title="P")
        data = _check(make_site(), strict=True)
        assert data["strict"] is True
        assert data["healthy"] is False

    def test_draft_superseded_by_published(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("_drafts/b.md", title="Foo", permalink="/b")
        write_page("b-final.md", title="Foo", permalink="/b-final")
        data = _check(make_site())
        assert data["healthy"] is True
        assert data["ambiguous"] == []
        assert data["revisions"] == [
            {"key": "foo", "canonical": "/b-final", "superseded": ["/b"]}
        ]

    def test_ambiguous_revision_is_unhealthy(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page(
            "coding/enum.md",
            title="Enum vs Booleans",
            permalink="/coding/style/enum-vs-boolean",
        )
        write_page("old/enum.md", title="Enum vs Booleans", permalink="/old/enum-vs-boolean")
        data = _check(make_site())
        assert data["healthy"] is False
        assert data["ambiguous"] == [
            {
                "key": "enum vs booleans",
                "permalinks": ["/coding/style/enum-vs-boolean", "/old/enum-vs-boolean"],
            }
        ]

    def test_unresolved_drafts_informational(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("_drafts/idea.md", title="Idea")
        data = _check(make_site(), strict=True)
        assert data["healthy"] is True
        assert data["drafts"] == 1
        assert data["unresolved_drafts"] == [{"key": "idea", "permalinks": ["/idea"]}]

    def test_malformed_reported(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("bad.md", raw="---\ntitle: Unclosed\n")
        data = _check(make_site())
        assert data["healthy"] is True
        assert [m["path"] for m in data["malformed"]] == ["bad.md"]
        assert "never closed" in data["malformed"][0]["reason"]
        assert _check(make_site(), strict=True)["healthy"] is False

    def test_baseurl_from_settings(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("a.md", "[b](/blog/b)\n", title="A")
        write_page("b.md", title="B")
        assert _check(make_site(links={"baseurl": "/blog"}))["broken_links"] == []

    def test_ignore_patterns_from_settings(
        self, make_site: Callable[..., Site], write_page: Callable[..., Path]
    ) -> None:
        write_page("a.md", "[api](/api/v1)\n", title="A")
        site = make_site(links={"ignore": ["/api/*"]})
        assert _check(site)["broken_links"] == []

    def test_empty_site(self, make_site: Callable[..., Site]) -> None:
        data = _check(make_site())
        assert data["documents"] == 0
        assert data["healthy"] is True


class TestMissingRoot:
    @pytest.mark.parametrize("strict", [False, True])
    def test_missing_root(
        self, make_site: Callable[..., Site], tmp_path: Path, strict: bool
    ) -> None:
        site = Site(make_site().settings, root=tmp_path / "missing")
        result = CheckService(site).check(strict=strict)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NO_CONTENT_ROOT"
