"""Exception hierarchy raised by the mdsite build pipeline.

Every failure that aborts a build derives from :class:`BuildError` so the CLI
can report it uniformly. Data-integrity errors keep both conflicting records
on the instance for diagnosis.

Examples
--------
>>> from mdsite.errors import FormatError, BuildError
>>> issubclass(FormatError, BuildError)
True
"""

from __future__ import annotations

import typing as typ
from pathlib import Path


class BuildError(Exception):
    """Base class for errors that fail a site build."""


class FormatError(BuildError, ValueError):
    """Raised when a document or a feed date does not match its format."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class UnknownCategoryError(BuildError, LookupError):
    """Raised when a document names a category absent from the category list."""

    def __init__(
        self, name: str, known: typ.Iterable[str], *, path: Path | None = None
    ) -> None:
        self.name = name
        self.known = tuple(known)
        self.path = path
        available = ", ".join(self.known) or "<none>"
        message = f"Unknown category '{name}'. Known categories: {available}"
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateCategoryError(BuildError):
    """Raised when one category order is claimed by two category names."""

    def __init__(self, existing: object, current: object) -> None:
        self.existing = existing
        self.current = current
        super().__init__(
            f"Category already exists. Existing item: {existing!r}, "
            f"Current page: {current!r}"
        )


class DuplicatePageOrderError(BuildError):
    """Raised when two pages in one category share the same page order."""

    def __init__(self, existing: object, current: object) -> None:
        self.existing = existing
        self.current = current
        super().__init__(
            f"Page already exists. Existing page: {existing!r}, "
            f"Current page: {current!r}"
        )


class DocumentReadError(BuildError, OSError):
    """Raised when a document or output artifact cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"{path}: {reason}")

    def __str__(self) -> str:
        return str(self.args[0])


class TimeZoneError(BuildError, ValueError):
    """Raised when the configured feed time zone cannot be loaded."""


class FileNameError(BuildError, ValueError):
    """Raised when a discovered document path contains whitespace."""


class BuildCancelledError(BuildError):
    """Raised by tasks that start after the build was cancelled."""


class BuildStateError(BuildError, RuntimeError):
    """Raised when a builder is run outside of its idle state."""


__all__ = [
    "BuildCancelledError",
    "BuildError",
    "BuildStateError",
    "DocumentReadError",
    "DuplicateCategoryError",
    "DuplicatePageOrderError",
    "FileNameError",
    "FormatError",
    "TimeZoneError",
    "UnknownCategoryError",
]
