"""
Token tools - MCP tools for stylesheet and resolved-token queries.

Tools for fetching the generated stylesheet, inspecting the resolved
tokens of a theme/density variant, and reading derived constants.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.models.token import TokenPath, Variant, format_value
from chuk_mcp_tokens.runtime import TokenPipeline

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_token_tools(mcp: ChukMCPServer, pipeline: TokenPipeline) -> dict[str, Any]:
    """
    Register token tools with the MCP server.

    Args:
        mcp: The MCP server instance
        pipeline: The token pipeline

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_get_stylesheet() -> str:
        """
        Get the generated token stylesheet.

        Contains an unscoped :root block with the light/default tokens and
        one [data-theme][data-density] block per variant.

        Returns:
            JSON string with the stylesheet text

        Example:
            tokens_get_stylesheet()
        """
        try:
            css = pipeline.stylesheet()
            return json.dumps(
                {
                    "status": "success",
                    "css": css,
                    "variants": [variant.key for variant in pipeline.variant_sets()],
                }
            )
        except Exception as e:
            logger.exception("Failed to build stylesheet")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_get_stylesheet"] = tokens_get_stylesheet

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_resolve(
        theme: str = "light",
        density: str = "default",
        prefix: str | None = None,
    ) -> str:
        """
        Get the resolved tokens for a theme/density variant.

        Args:
            theme: Theme mode ('light', 'dark', 'high-contrast')
            density: Density level ('compact', 'default', 'comfortable')
            prefix: Optional name prefix filter (e.g. 'color-text')

        Returns:
            JSON string mapping token names to values

        Example:
            tokens_resolve(theme="dark", density="compact", prefix="color")
        """
        try:
            variant = Variant.parse(theme, density)
            token_set = pipeline.resolved(variant)
            tokens = token_set.with_prefix(prefix) if prefix else dict(token_set)
            return json.dumps(
                {
                    "status": "success",
                    "variant": variant.key,
                    "tokens": {name: tokens[name] for name in sorted(tokens)},
                    "count": len(tokens),
                }
            )
        except Exception as e:
            logger.exception("Failed to resolve tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_resolve"] = tokens_resolve

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_lookup(
        path: str,
        theme: str = "light",
        density: str = "default",
    ) -> str:
        """
        Look up one token's resolved value.

        Args:
            path: Token path ('color.text.primary' or 'color/text/primary')
            theme: Theme mode
            density: Density level

        Returns:
            JSON string with the token's value, type and CSS variable

        Example:
            tokens_lookup(path="button.background.default", theme="dark")
        """
        try:
            variant = Variant.parse(theme, density)
            name = TokenPath.parse(path).name
            token_set = pipeline.resolved(variant)
            if name not in token_set:
                return json.dumps({"status": "error", "message": f"Token not found: {path}"})

            return json.dumps(
                {
                    "status": "success",
                    "token": {
                        "name": name,
                        "value": token_set[name],
                        "css_value": format_value(token_set[name]),
                        "type": token_set.type_of(name),
                        "css_variable": f"--{name}",
                    },
                    "variant": variant.key,
                }
            )
        except Exception as e:
            logger.exception("Failed to look up token")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_lookup"] = tokens_lookup

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_density_multipliers() -> str:
        """
        Get the density multiplier table.

        Returns:
            JSON string with level, multiplier and label per density

        Example:
            tokens_density_multipliers()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "densities": [
                        {
                            "level": config.level.value,
                            "multiplier": config.multiplier,
                            "label": config.label,
                        }
                        for config in pipeline.density_table()
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to build density table")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_density_multipliers"] = tokens_density_multipliers

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_theme_modes() -> str:
        """
        List the supported theme modes in order.

        Returns:
            JSON string with theme mode names

        Example:
            tokens_theme_modes()
        """
        try:
            return json.dumps({"status": "success", "themes": list(pipeline.theme_modes())})
        except Exception as e:
            logger.exception("Failed to list theme modes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_theme_modes"] = tokens_theme_modes

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_get_types_module() -> str:
        """
        Get the generated TypeScript declarations.

        Includes DensityLevel/ThemeMode unions, the multiplier table and
        per-type token name unions.

        Returns:
            JSON string with the module source

        Example:
            tokens_get_types_module()
        """
        try:
            return json.dumps({"status": "success", "source": pipeline.types_module()})
        except Exception as e:
            logger.exception("Failed to build types module")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_get_types_module"] = tokens_get_types_module

    return tools
