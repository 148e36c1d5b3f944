"""Exceptions raised by Lifecycle Audit."""

from pathlib import Path

from pydantic import ValidationError


class LifecycleAuditError(Exception):
    """Base class for all audit errors."""


class TraversalError(LifecycleAuditError):
    """The root of the dependency tree could not be enumerated."""


class ManifestError(LifecycleAuditError):
    """
    A single package.json could not be read or parsed.

    Attributes:
        path: The manifest that failed
        cause: The underlying I/O, JSON or validation error
    """

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {self.reason}")

    @property
    def reason(self) -> str:
        """One-line description of the cause."""
        if isinstance(self.cause, ValidationError):
            return "; ".join(err["msg"] for err in self.cause.errors())
        return " ".join(str(self.cause).split())
