"""
Runtime - process-wide caching of pipeline results.

Resolution and emission happen once per process; every later request
reuses the cached value.
"""

from chuk_mcp_tokens.runtime.cache import RuntimeCache
from chuk_mcp_tokens.runtime.pipeline import (
    DEFAULT_PROJECT_DIR,
    TokenPipeline,
    density_multiplier_layer,
    get_pipeline,
)

__all__ = [
    "DEFAULT_PROJECT_DIR",
    "RuntimeCache",
    "TokenPipeline",
    "density_multiplier_layer",
    "get_pipeline",
]
