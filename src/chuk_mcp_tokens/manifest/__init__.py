"""
Manifest bridge - documentation-facing, read-only queries.

Component metadata, usage examples and colour swatches for docs pages.
"""

from chuk_mcp_tokens.manifest.bridge import ManifestBridge

__all__ = ["ManifestBridge"]
