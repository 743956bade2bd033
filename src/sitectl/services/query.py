"""QueryService — read-only lookups over the registry."""

from __future__ import annotations

from sitectl.domain.document import Status, normalize_permalink
from sitectl.domain.errors import NotFound
from sitectl.domain.frontmatter import render_document
from sitectl.domain.links import extract_link_targets, is_ignored
from sitectl.domain.revisions import revision_key
from sitectl.services._helpers import document_summary
from sitectl.services.base import BaseService
from sitectl.services.result import ServiceResult


class QueryService(BaseService):
    """Lookup and listing of registered documents."""

    def show(
        self,
        permalink: str,
        *,
        status: Status | str | None = None,
        include_source: bool = False,
    ) -> ServiceResult:
        """Look up a single document by permalink.

        The payload carries the document summary, its outgoing internal
        links, which of them are broken, and its revision siblings.
        With *include_source* the re-rendered file text is included.
        """
        missing = self._missing_root("show")
        if missing is not None:
            return missing

        registry = self._site.registry
        try:
            document = registry.lookup(permalink, status=status)
        except NotFound as exc:
            return ServiceResult.failure(
                "show", "NOT_FOUND", str(exc), permalink=normalize_permalink(permalink)
            )

        links_cfg = self._site.settings.links
        found = extract_link_targets(document.body, baseurl=links_cfg.baseurl)
        targets = list(dict.fromkeys(found))
        broken = [
            t
            for t in targets
            if not is_ignored(t, links_cfg.ignore)
            and registry.get(t, status=Status.PUBLISHED) is None
        ]
        key = revision_key(document)
        siblings = [
            d.permalink
            for d in registry.all()
            if d is not document and revision_key(d) == key
        ]

        data = {
            **document_summary(document),
            "extra": dict(document.extra),
            "links": targets,
            "broken_links": broken,
            "revisions": siblings,
        }
        if include_source:
            data["text"] = render_document(document)
        return ServiceResult.success("show", data)

    def list_documents(self, *, status: Status | str | None = None) -> ServiceResult:
        """List registered documents, optionally filtered by status."""
        missing = self._missing_root("list")
        if missing is not None:
            return missing

        items = [document_summary(d) for d in self._site.registry.all(status)]
        return ServiceResult.success("list", {"items": items, "count": len(items)})
