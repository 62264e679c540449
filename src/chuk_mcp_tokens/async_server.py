#!/usr/bin/env python3
"""
Async Tokens MCP Server using chuk-mcp-server

This server exposes a design-token pipeline over MCP. Token documents
(primitive, semantic and component layers, plus theme and density
overrides) are resolved once per process into stylesheet text and
derived constants.

The server provides tools for:
- Fetching the generated stylesheet
- Inspecting resolved tokens per theme and density
- Reading density multipliers, theme modes and type declarations
- Looking up component manifest entries, props tables and examples
- Listing colour swatches
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_tokens.manifest import ManifestBridge
from chuk_mcp_tokens.runtime import get_pipeline
from chuk_mcp_tokens.tools import register_docs_tools, register_token_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-tokens")

# Process-wide pipeline (library tokens, ./tokens project overrides)
pipeline = get_pipeline()
bridge = ManifestBridge(pipeline.store, pipeline)

# Register all tools
token_tools = register_token_tools(mcp, pipeline)
docs_tools = register_docs_tools(mcp, bridge)

# Export tool functions for direct access
tokens_get_stylesheet = token_tools["tokens_get_stylesheet"]
tokens_resolve = token_tools["tokens_resolve"]
tokens_lookup = token_tools["tokens_lookup"]
tokens_density_multipliers = token_tools["tokens_density_multipliers"]
tokens_theme_modes = token_tools["tokens_theme_modes"]
tokens_get_types_module = token_tools["tokens_get_types_module"]

docs_list_components = docs_tools["docs_list_components"]
docs_get_component = docs_tools["docs_get_component"]
docs_get_props_table = docs_tools["docs_get_props_table"]
docs_get_examples = docs_tools["docs_get_examples"]
docs_list_swatches = docs_tools["docs_list_swatches"]

logger.info("CHUK Tokens MCP Server initialized")
logger.info(f"  Library path: {pipeline.store.library_path}")
logger.info(f"  Project path: {pipeline.store.project_path}")
