"""Exceptions raised by the got core.

Filesystem failures are not wrapped: they surface as the ``OSError``
raised by the failing call, which already carries the offending filename.
"""

from typing import Optional


class GotError(Exception):
    """Base class for all got errors."""


class PathError(GotError):
    """Path is outside the repository, missing, or of the wrong type."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class NotARepository(GotError):
    """No repository marker found in the directory or any of its parents."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(
            f"Not a got repository (or any of the parent directories): {self.path}"
        )


class RepositoryExists(GotError):
    """Repository marker already exists."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Repository already exists at {self.path}")


class ObjectNotFound(GotError):
    """No object stored under the requested hash."""

    def __init__(self, object_hash: str, reason: Optional[str] = None):
        self.hash = object_hash
        super().__init__(reason or f"Object {object_hash} not found")


class AmbiguousObjectName(GotError):
    """Abbreviated hash matches more than one stored object."""

    def __init__(self, prefix: str, candidates: list):
        self.prefix = prefix
        self.candidates = sorted(candidates)
        super().__init__(
            f"Short hash {prefix} is ambiguous ({len(self.candidates)} candidates)"
        )


class CorruptObject(GotError):
    """Stored object cannot be decompressed or has a malformed header."""

    def __init__(self, reason: str, object_hash: Optional[str] = None):
        self.hash = object_hash
        self.reason = reason
        if object_hash:
            super().__init__(f"Object {object_hash} is corrupt: {reason}")
        else:
            super().__init__(f"Corrupt object: {reason}")


class WrongObjectType(GotError):
    """Object exists but is not of the type the operation needs."""

    def __init__(self, object_hash: str, expected: str, actual: str):
        self.hash = object_hash
        self.expected = expected
        self.actual = actual
        super().__init__(f"Object {object_hash} is a {actual}, not a {expected}")
