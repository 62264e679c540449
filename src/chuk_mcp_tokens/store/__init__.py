"""
Token store - loads layered token documents into typed trees.

Layers are read from the built-in library and an optional project
directory, parsed once, and handed to the compiler as TokenGroup trees.
"""

from chuk_mcp_tokens.store.loader import TokenStore, check_unique_names, parse_document
from chuk_mcp_tokens.store.references import REFERENCE_PATTERN, ParsedValue, parse_value, substitute

__all__ = [
    "REFERENCE_PATTERN",
    "ParsedValue",
    "TokenStore",
    "check_unique_names",
    "parse_document",
    "parse_value",
    "substitute",
]
