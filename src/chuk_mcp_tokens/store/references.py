"""
Reference syntax - the `{path}` mini-language inside token values.

    "{color.blue.500}"              alias: resolves to the target value
    "1px solid {color.border}"      interpolation: targets rendered as text

Curly-brace references are the only accepted notation. References are
parsed and validated here, at the document boundary, so the resolver only
ever sees TokenPath objects.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from chuk_mcp_tokens.constants import ErrorMessages, TokenValue
from chuk_mcp_tokens.errors import MalformedDocument
from chuk_mcp_tokens.models.token import TokenPath, format_value

REFERENCE_PATTERN = re.compile(r"\{([^{}]*)\}")

# "$color.text.primary" - the older notation, rejected with a hint
LEGACY_REFERENCE = re.compile(r"^\$([A-Za-z_][\w-]*(?:\.[\w-]+)+)$")


@dataclass(frozen=True)
class ParsedValue:
    """A literal, or a template with its references extracted."""

    value: TokenValue
    references: tuple[TokenPath, ...] = ()
    alias: bool = False


def parse_value(value: TokenValue, path: str, source: str) -> ParsedValue:
    """
    Extract references from a token value.

    Args:
        value: Normalised scalar from a `$value` field
        path: Dotted path of the token (for error messages)
        source: Document identifier (for error messages)

    Returns:
        ParsedValue with references in order of appearance

    Raises:
        MalformedDocument: On legacy `$` references, empty or nested
            braces, or unbalanced braces
    """
    if not isinstance(value, str):
        return ParsedValue(value)

    legacy = LEGACY_REFERENCE.match(value.strip())
    if legacy:
        raise MalformedDocument(
            source,
            ErrorMessages.LEGACY_REFERENCE.format(
                path=path, source=source, value=value, suggestion=legacy.group(1)
            ),
        )

    references: list[TokenPath] = []
    for match in REFERENCE_PATTERN.finditer(value):
        try:
            references.append(TokenPath.parse(match.group(1)))
        except ValueError:
            raise MalformedDocument(
                source, ErrorMessages.BAD_REFERENCE.format(path=path, source=source, value=value)
            ) from None

    leftover = REFERENCE_PATTERN.sub("", value)
    if "{" in leftover or "}" in leftover:
        raise MalformedDocument(
            source, ErrorMessages.BAD_REFERENCE.format(path=path, source=source, value=value)
        )

    if not references:
        return ParsedValue(value)

    alias = len(references) == 1 and REFERENCE_PATTERN.fullmatch(value.strip()) is not None
    return ParsedValue(value, tuple(references), alias)


def substitute(template: str, lookup: Callable[[TokenPath], TokenValue]) -> str:
    """Replace every `{path}` in `template` with its looked-up value as text."""
    return REFERENCE_PATTERN.sub(
        lambda match: format_value(lookup(TokenPath.parse(match.group(1)))), template
    )
