"""Site — the content root plus the registry built from scanning it.

One scan per run: files are discovered, parsed (optionally on a thread
pool, parsing is side-effect free), and registered one at a time in
sorted path order. Malformed files are logged and excluded; the scan
itself never aborts on them.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from sitectl.domain.errors import MalformedDocument
from sitectl.domain.registry import Registry
from sitectl.infrastructure.filesystem import find_content_files, read_document

if TYPE_CHECKING:
    from sitectl.config.settings import SiteSettings
    from sitectl.domain.document import Document

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of one scan pass."""

    registry: Registry
    malformed: tuple[MalformedDocument, ...] = ()


class Site:
    """A content root configured by :class:`SiteSettings`.

    The scan runs lazily on first access to :attr:`scan_result` and is
    reused afterwards; the registry it produces is frozen.
    """

    def __init__(self, settings: SiteSettings, root: Path | None = None) -> None:
        self.settings = settings
        self.root = (root if root is not None else settings.content_root).resolve()
        self._scan: ScanResult | None = None

    @property
    def exists(self) -> bool:
        return self.root.is_dir()

    def find_content(self) -> list[Path]:
        """All content files under the root, sorted."""
        content = self.settings.content
        return find_content_files(
            self.root,
            suffixes=content.suffixes,
            exclude_dirs=content.exclude_dirs,
        )

    def read(self, path: Path) -> Document:
        content = self.settings.content
        return read_document(
            path,
            self.root,
            drafts_dir=content.drafts_dir,
            posts_dir=content.posts_dir,
        )

    def _parse(self, path: Path) -> Document | MalformedDocument:
        try:
            return self.read(path)
        except MalformedDocument as exc:
            return exc

    @property
    def scan_result(self) -> ScanResult:
        if self._scan is None:
            self._scan = self.scan()
        return self._scan

    @property
    def registry(self) -> Registry:
        return self.scan_result.registry

    def scan(self) -> ScanResult:
        """Discover, parse, and register every content file."""
        paths = self.find_content()
        workers = self.settings.scan.workers

        if workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                parsed = list(pool.map(self._parse, paths))
        else:
            parsed = [self._parse(p) for p in paths]

        registry = Registry()
        malformed: list[MalformedDocument] = []
        for outcome in parsed:
            if isinstance(outcome, MalformedDocument):
                log.warning("document.malformed", path=str(outcome.path), reason=outcome.reason)
                malformed.append(outcome)
                continue
            conflict = registry.register(outcome)
            if conflict is not None:
                log.warning(
                    "permalink.duplicate",
                    permalink=conflict.permalink,
                    sources=list(conflict.sources),
                )
            log.debug(
                "document.registered",
                permalink=outcome.permalink,
                status=outcome.status.value,
                source=outcome.origin,
            )
        registry.freeze()

        log.info(
            "scan.complete",
            root=str(self.root),
            documents=len(registry),
            malformed=len(malformed),
        )
        return ScanResult(registry=registry, malformed=tuple(malformed))
