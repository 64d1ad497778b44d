"""Exceptions raised while extracting documentation."""

from __future__ import annotations


class DocError(Exception):
    """Base exception for nrdoc operations."""


class ModuleReadError(DocError):
    """Raised when a module file cannot be opened or read."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class TokenizeError(DocError):
    """Raised when source text cannot be split into tokens."""

    def __init__(self, message: str, line: int | None = None, path: str | None = None):
        super().__init__(message)
        self.line = line
        self.path = path


class StructuralError(DocError):
    """Raised when scopes are unbalanced or the token stream ends mid-scan."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class ModuleCycleError(DocError):
    """Raised when an external module declares itself, directly or not."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class MalformedDeclaration(DocError):
    """A declaration keyword without a name.

    Only raised and handled inside the tree builder, which skips the keyword.
    """
