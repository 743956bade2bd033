"""Serialization helpers shared by services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sitectl.domain.document import Document


def document_summary(document: Document) -> dict[str, Any]:
    """Flat, JSON-safe view of a document without its body."""
    return {
        "permalink": document.permalink,
        "title": document.title,
        "layout": document.extra.get("layout", document.layout.value),
        "status": document.status.value,
        "source": str(document.source) if document.source is not None else None,
    }
