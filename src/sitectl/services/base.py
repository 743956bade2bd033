"""BaseService — shared foundation for sitectl services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sitectl.services.result import ServiceResult

if TYPE_CHECKING:
    from sitectl.infrastructure.site import Site


class BaseService:
    """Holds the :class:`Site` a service reads from.

    Services never trigger a rescan; they read ``site.registry``, which
    is built once and frozen.
    """

    def __init__(self, site: Site) -> None:
        self._site = site

    def _missing_root(self, op: str) -> ServiceResult | None:
        """A ``NO_CONTENT_ROOT`` failure for *op*, or None when the root exists."""
        if self._site.exists:
            return None
        root = str(self._site.root)
        return ServiceResult.failure(
            op, "NO_CONTENT_ROOT", f"Content root not found: {root}", root=root
        )
