"""
Docs tools - MCP tools for documentation queries.

Tools for component manifest lookups, props tables, usage examples
and colour swatches. Missing data is a successful, empty answer.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.manifest import ManifestBridge
from chuk_mcp_tokens.models.manifest import NO_MANIFEST_DATA
from chuk_mcp_tokens.models.token import Variant

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_docs_tools(mcp: ChukMCPServer, bridge: ManifestBridge) -> dict[str, Any]:
    """
    Register documentation tools with the MCP server.

    Args:
        mcp: The MCP server instance
        bridge: The manifest bridge

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def docs_list_components() -> str:
        """
        List documented components.

        Returns:
            JSON string with slug and name per component

        Example:
            docs_list_components()
        """
        components = bridge.list_components()
        return json.dumps(
            {
                "status": "success",
                "components": [c.model_dump() for c in components],
                "count": len(components),
            }
        )

    tools["docs_list_components"] = docs_list_components

    @mcp.tool  # type: ignore[arg-type]
    async def docs_get_component(slug: str) -> str:
        """
        Get a component's manifest entry with its usage examples.

        Args:
            slug: Component slug (e.g. 'button')

        Returns:
            JSON string with the entry, or a placeholder message

        Example:
            docs_get_component(slug="button")
        """
        entry = bridge.get_manifest_entry(slug)
        if entry is None:
            return json.dumps({"status": "success", "component": None, "message": NO_MANIFEST_DATA})

        examples = bridge.get_examples_for_component(entry.name)
        return json.dumps(
            {
                "status": "success",
                "component": entry.model_dump(by_alias=True),
                "examples": [example.model_dump() for example in examples],
            }
        )

    tools["docs_get_component"] = docs_get_component

    @mcp.tool  # type: ignore[arg-type]
    async def docs_get_props_table(slug: str) -> str:
        """
        Get the props table for a component.

        Args:
            slug: Component slug

        Returns:
            JSON string with prop rows, or a placeholder message

        Example:
            docs_get_props_table(slug="button")
        """
        rows = bridge.get_props_rows(slug)
        if rows is None:
            return json.dumps({"status": "success", "rows": [], "message": NO_MANIFEST_DATA})
        return json.dumps({"status": "success", "rows": [row.model_dump() for row in rows]})

    tools["docs_get_props_table"] = docs_get_props_table

    @mcp.tool  # type: ignore[arg-type]
    async def docs_get_examples(component: str) -> str:
        """
        Get usage examples for a component.

        Args:
            component: Component name (e.g. 'Button')

        Returns:
            JSON string with matching examples

        Example:
            docs_get_examples(component="Button")
        """
        examples = bridge.get_examples_for_component(component)
        return json.dumps(
            {
                "status": "success",
                "examples": [example.model_dump() for example in examples],
                "count": len(examples),
            }
        )

    tools["docs_get_examples"] = docs_get_examples

    @mcp.tool  # type: ignore[arg-type]
    async def docs_list_swatches(
        theme: str | None = None,
        density: str = "default",
    ) -> str:
        """
        List colour swatches.

        Without a theme, lists the primitive palette. With a theme, lists
        every resolved colour token of that variant.

        Args:
            theme: Optional theme mode ('light', 'dark', 'high-contrast')
            density: Density level used with a theme

        Returns:
            JSON string with name/value swatches

        Example:
            docs_list_swatches(theme="dark")
        """
        try:
            variant = Variant.parse(theme, density) if theme else None
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})

        swatches = bridge.list_color_swatches(variant)
        return json.dumps(
            {
                "status": "success",
                "swatches": [swatch.model_dump() for swatch in swatches],
                "count": len(swatches),
            }
        )

    tools["docs_list_swatches"] = docs_list_swatches

    return tools
