"""
MCP tool implementations.

Tools are organized by domain:
- tokens - Stylesheet, resolved tokens and derived constants
- docs - Component manifest, examples and swatches
"""

from chuk_mcp_tokens.tools.docs import register_docs_tools
from chuk_mcp_tokens.tools.tokens import register_token_tools

__all__ = [
    "register_docs_tools",
    "register_token_tools",
]
