"""
Compilation pipeline - turns token trees into stylesheets.

The pipeline:
    Token layers (primitive, semantic, component)
    → ResolvedTokenSet (references substituted)
    → ResolvedTokenSet per Variant (theme x density overrides)
    → Stylesheet text + derived constants
"""

from chuk_mcp_tokens.compiler.emitter import DensityConfig, StylesheetEmitter
from chuk_mcp_tokens.compiler.expander import VariantExpander
from chuk_mcp_tokens.compiler.resolver import ReferenceResolver, resolve_layers

__all__ = [
    "DensityConfig",
    "ReferenceResolver",
    "StylesheetEmitter",
    "VariantExpander",
    "resolve_layers",
]
