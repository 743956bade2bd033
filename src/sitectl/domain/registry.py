"""Document registry — an arena of documents indexed by permalink.

INVARIANT: The registry never overwrites. Two published documents that
claim the same permalink are both retained and surface as a single
:class:`DuplicatePermalink` for that permalink. Drafts never conflict.

A registry is built once per scan, frozen, and then only read.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from sitectl.domain.document import Document, Status, normalize_permalink
from sitectl.domain.errors import NotFound, RegistryFrozen


@dataclass(frozen=True)
class DuplicatePermalink:
    """Two or more published documents claiming one permalink."""

    permalink: str
    sources: tuple[str, ...]


class Registry:
    """In-memory collection of documents keyed by permalink.

    ``register`` is guarded by a lock so parallel producers observe a
    single total order, which duplicate detection depends on.
    """

    def __init__(self) -> None:
        self._documents: list[Document] = []
        self._index: dict[str, list[int]] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @classmethod
    def build(cls, documents: Iterable[Document]) -> Registry:
        """Register every document in order and return the frozen registry."""
        registry = cls()
        for document in documents:
            registry.register(document)
        registry.freeze()
        return registry

    # ------------------------------------------------------------------
    # Mutation (construction phase only)
    # ------------------------------------------------------------------

    def register(self, document: Document) -> DuplicatePermalink | None:
        """Insert *document*.

        Returns the :class:`DuplicatePermalink` condition when *document*
        is published and another published document already holds its
        permalink, otherwise ``None``.

        Raises:
            RegistryFrozen: The registry was frozen.
        """
        with self._lock:
            if self._frozen:
                msg = f"Cannot register {document.permalink!r}: registry is frozen"
                raise RegistryFrozen(msg)

            self._documents.append(document)
            slots = self._index.setdefault(document.permalink, [])
            slots.append(len(self._documents) - 1)

            if not document.published:
                return None
            return self._conflict_for(document.permalink)

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, permalink: str, *, status: Status | str | None = None) -> Document:
        """Return the most recently registered document under *permalink*.

        Args:
            permalink: Any spelling of the path; it is normalized first.
            status: Restrict the match to ``draft`` or ``published``.

        Raises:
            NotFound: Nothing matches.
        """
        key = normalize_permalink(permalink)
        wanted = Status(status) if status is not None else None
        for slot in reversed(self._index.get(key, [])):
            document = self._documents[slot]
            if wanted is None or document.status is wanted:
                return document
        raise NotFound(key)

    def get(
        self,
        permalink: str,
        default: Document | None = None,
        *,
        status: Status | str | None = None,
    ) -> Document | None:
        """Non-raising variant of :meth:`lookup`."""
        try:
            return self.lookup(permalink, status=status)
        except NotFound:
            return default

    def all(self, status: Status | str | None = None) -> Iterator[Document]:
        """Yield documents in insertion order, optionally filtered by *status*.

        Each call starts a fresh pass over the registry.
        """
        wanted = Status(status) if status is not None else None
        for document in self._documents:
            if wanted is None or document.status is wanted:
                yield document

    def permalinks(self) -> list[str]:
        """Sorted list of every registered permalink."""
        return sorted(self._index)

    def duplicates(self) -> list[DuplicatePermalink]:
        """One condition per permalink held by more than one published document."""
        conflicts: list[DuplicatePermalink] = []
        for permalink in sorted(self._index):
            conflict = self._conflict_for(permalink)
            if conflict is not None:
                conflicts.append(conflict)
        return conflicts

    def _conflict_for(self, permalink: str) -> DuplicatePermalink | None:
        published = [
            self._documents[slot]
            for slot in self._index.get(permalink, [])
            if self._documents[slot].published
        ]
        if len(published) < 2:
            return None
        return DuplicatePermalink(
            permalink=permalink,
            sources=tuple(sorted(d.origin for d in published)),
        )

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, permalink: object) -> bool:
        return isinstance(permalink, str) and normalize_permalink(permalink) in self._index

    def __iter__(self) -> Iterator[Document]:
        return self.all()
