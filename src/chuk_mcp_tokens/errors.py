"""
Token pipeline errors.

Store, resolver and expander errors abort pipeline construction; the
stylesheet is produced consistently or not at all.
"""

from __future__ import annotations


class TokenError(Exception):
    """Base class for token pipeline failures."""


class SourceUnavailable(TokenError):
    """A token document is missing or cannot be read."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source


class MalformedDocument(TokenError):
    """A token document is not well-formed structured data."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source


class UnresolvedReference(TokenError):
    """A reference points at a path absent from every visible layer."""

    def __init__(self, missing: str, chain: list[str]):
        self.missing = missing
        self.chain = list(chain)
        trail = " -> ".join([*self.chain, missing])
        super().__init__(f"Unresolved reference '{missing}' (via {trail})")


class CyclicReference(TokenError):
    """Substitution revisited a path already on the resolution chain."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(f"Cyclic reference: {' -> '.join(self.cycle)}")
