"""
Pydantic models for the token system.

This module provides:
- TokenLeaf / TokenGroup: the parsed token tree
- TokenPath: address of a token within a layer
- Variant: a theme x density combination
- ResolvedTokenSet: flattened, fully substituted tokens
- ComponentManifestEntry, UsageExample: documentation metadata
"""

from chuk_mcp_tokens.models.manifest import (
    NO_MANIFEST_DATA,
    AccessibilityInfo,
    ColorSwatch,
    ComponentManifestEntry,
    ComponentSummary,
    PropDescriptor,
    PropRow,
    UsageExample,
)
from chuk_mcp_tokens.models.token import (
    ResolvedTokenSet,
    TokenGroup,
    TokenLeaf,
    TokenNode,
    TokenPath,
    Variant,
    all_variants,
    flatten_name,
    format_value,
)

__all__ = [
    "NO_MANIFEST_DATA",
    "AccessibilityInfo",
    "ColorSwatch",
    "ComponentManifestEntry",
    "ComponentSummary",
    "PropDescriptor",
    "PropRow",
    "ResolvedTokenSet",
    "TokenGroup",
    "TokenLeaf",
    "TokenNode",
    "TokenPath",
    "UsageExample",
    "Variant",
    "all_variants",
    "flatten_name",
    "format_value",
]
