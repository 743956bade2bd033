"""Exception types raised by the domain layer."""

from __future__ import annotations

from pathlib import Path


class SiteError(Exception):
    """Base class for all sitectl domain errors."""


class MalformedDocument(SiteError):
    """A content file whose front-matter cannot be read.

    Fatal for the single document only: the scanner reports it and
    excludes the document from the registry.
    """

    def __init__(self, reason: str, *, path: Path | None = None) -> None:
        self.reason = reason
        self.path = path
        where = f"{path}: " if path is not None else ""
        super().__init__(f"{where}{reason}")


class NotFound(SiteError, KeyError):
    """No registered document matches a permalink."""

    def __init__(self, permalink: str) -> None:
        self.permalink = permalink
        super().__init__(permalink)

    def __str__(self) -> str:
        return f"No document registered under {self.permalink!r}"


class RegistryFrozen(SiteError, RuntimeError):
    """Raised when registering into a registry after ``freeze()``."""
