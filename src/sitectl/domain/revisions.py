"""Revision reconciliation — pick the canonical document per title family.

Documents are grouped by :func:`revision_key`. Each group moves from
``collected`` to exactly one terminal state:

- ``canonical``: exactly one published member; it is the canonical revision.
- ``ambiguous``: more than one published member; nothing is chosen.
- ``unresolved-draft``: drafts only; valid, just not yet finalized.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from sitectl.domain.document import Document, normalize_title

if TYPE_CHECKING:
    from sitectl.domain.registry import Registry


class RevisionState(StrEnum):
    """Terminal state of a revision group."""

    CANONICAL = "canonical"
    AMBIGUOUS = "ambiguous"
    UNRESOLVED_DRAFT = "unresolved-draft"


@dataclass(frozen=True)
class RevisionGroup:
    """Documents sharing a normalized title, with the reconciliation outcome."""

    key: str
    state: RevisionState
    members: tuple[Document, ...]
    canonical: Document | None = None

    @property
    def superseded(self) -> tuple[Document, ...]:
        """Members other than the canonical one (empty unless canonical)."""
        if self.canonical is None:
            return ()
        return tuple(m for m in self.members if m is not self.canonical)


@dataclass(frozen=True)
class AmbiguousRevision:
    """More than one published document shares a title-derived identity."""

    key: str
    permalinks: tuple[str, ...]


def revision_key(document: Document) -> str:
    """The revision-group key: the normalized title, or the permalink when
    the title normalizes to nothing (``"???"``).

    A permalink never collides with a title key, which has no ``/``.
    """
    return normalize_title(document.title) or document.permalink


def _settle(key: str, members: list[Document]) -> RevisionGroup:
    published = [m for m in members if m.published]
    if len(published) == 1:
        state, canonical = RevisionState.CANONICAL, published[0]
    elif published:
        state, canonical = RevisionState.AMBIGUOUS, None
    else:
        state, canonical = RevisionState.UNRESOLVED_DRAFT, None
    return RevisionGroup(key=key, state=state, members=tuple(members), canonical=canonical)


def reconcile(registry: Registry) -> list[RevisionGroup]:
    """Group every registered document by :func:`revision_key` and settle each group.

    Groups are sorted by key; members keep registration order.
    """
    collected: dict[str, list[Document]] = {}
    for document in registry.all():
        collected.setdefault(revision_key(document), []).append(document)
    return [_settle(key, collected[key]) for key in sorted(collected)]


def ambiguities(groups: list[RevisionGroup]) -> list[AmbiguousRevision]:
    """The :class:`AmbiguousRevision` conditions among *groups*."""
    return [
        AmbiguousRevision(
            key=g.key,
            permalinks=tuple(sorted(m.permalink for m in g.members if m.published)),
        )
        for g in groups
        if g.state is RevisionState.AMBIGUOUS
    ]
