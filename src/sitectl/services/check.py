"""CheckService — the full validation report for a site.

One pass over the frozen registry collects every problem instead of
stopping at the first:

- duplicate permalinks among published documents (failing)
- ambiguous revision groups (failing)
- broken internal links (failing only in strict mode)
- malformed documents (failing only in strict mode)
- unresolved drafts (informational)
"""

from __future__ import annotations

from typing import Any

import structlog

from sitectl.domain.document import Status
from sitectl.domain.links import broken_links, resolve_links
from sitectl.domain.revisions import RevisionState, ambiguities, reconcile
from sitectl.services.base import BaseService
from sitectl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class CheckService(BaseService):
    """Validates a scanned site."""

    def check(self, *, strict: bool = False) -> ServiceResult:
        """Build the validation report.

        ``data["healthy"]`` is False when duplicate permalinks or ambiguous
        revisions exist, and additionally, with *strict*, when broken links
        or malformed documents exist.
        """
        missing = self._missing_root("check")
        if missing is not None:
            return missing

        scan = self._site.scan_result
        registry = scan.registry
        links_cfg = self._site.settings.links

        duplicates = registry.duplicates()
        broken = broken_links(
            resolve_links(registry, baseurl=links_cfg.baseurl, ignore=links_cfg.ignore)
        )
        groups = reconcile(registry)
        ambiguous = ambiguities(groups)
        unresolved = [g for g in groups if g.state is RevisionState.UNRESOLVED_DRAFT]
        superseding = [
            g for g in groups if g.state is RevisionState.CANONICAL and len(g.members) > 1
        ]

        failing = len(duplicates) + len(ambiguous)
        if strict:
            failing += len(broken) + len(scan.malformed)

        data: dict[str, Any] = {
            "root": str(self._site.root),
            "documents": len(registry),
            "published": sum(1 for _ in registry.all(Status.PUBLISHED)),
            "drafts": sum(1 for _ in registry.all(Status.DRAFT)),
            "duplicates": [
                {"permalink": d.permalink, "sources": list(d.sources)} for d in duplicates
            ],
            "broken_links": [{"source": b.source, "target": b.target} for b in broken],
            "ambiguous": [{"key": a.key, "permalinks": list(a.permalinks)} for a in ambiguous],
            "unresolved_drafts": [
                {"key": g.key, "permalinks": [m.permalink for m in g.members]}
                for g in unresolved
            ],
            "revisions": [
                {
                    "key": g.key,
                    "canonical": g.canonical.permalink if g.canonical else None,
                    "superseded": [m.permalink for m in g.superseded],
                }
                for g in superseding
            ],
            "malformed": [
                {"path": str(m.path) if m.path else None, "reason": m.reason}
                for m in scan.malformed
            ],
            "count": len(duplicates)
            + len(broken)
            + len(ambiguous)
            + len(unresolved)
            + len(scan.malformed),
            "strict": strict,
            "healthy": failing == 0,
        }

        log.debug(
            "check.complete",
            duplicates=len(duplicates),
            broken_links=len(broken),
            ambiguous=len(ambiguous),
            unresolved_drafts=len(unresolved),
            malformed=len(scan.malformed),
        )
        return ServiceResult.success("check", data)
