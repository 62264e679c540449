"""
CHUK Tokens - design-token resolution and stylesheet generation.

Layered token documents (primitive → semantic → component) are resolved
into literal values, expanded per theme and density, and emitted as
scoped custom-property stylesheets plus derived constants.
"""

from chuk_mcp_tokens.compiler import (
    DensityConfig,
    ReferenceResolver,
    StylesheetEmitter,
    VariantExpander,
)
from chuk_mcp_tokens.constants import DensityLevel, ThemeMode, TokenLayer
from chuk_mcp_tokens.errors import (
    CyclicReference,
    MalformedDocument,
    SourceUnavailable,
    TokenError,
    UnresolvedReference,
)
from chuk_mcp_tokens.manifest import ManifestBridge
from chuk_mcp_tokens.models import ResolvedTokenSet, TokenGroup, TokenLeaf, TokenPath, Variant
from chuk_mcp_tokens.runtime import RuntimeCache, TokenPipeline, get_pipeline
from chuk_mcp_tokens.store import TokenStore

__version__ = "0.1.0"

__all__ = [
    "CyclicReference",
    "DensityConfig",
    "DensityLevel",
    "MalformedDocument",
    "ManifestBridge",
    "ReferenceResolver",
    "ResolvedTokenSet",
    "RuntimeCache",
    "SourceUnavailable",
    "StylesheetEmitter",
    "ThemeMode",
    "TokenError",
    "TokenGroup",
    "TokenLayer",
    "TokenLeaf",
    "TokenPath",
    "TokenPipeline",
    "TokenStore",
    "UnresolvedReference",
    "Variant",
    "VariantExpander",
    "get_pipeline",
]
