#!/usr/bin/env python3
"""
Example: Building a Themed Stylesheet.

This walks through the token pipeline: load the layered token documents,
resolve references, expand theme x density variants, and emit the
stylesheet and derived constants. A project override is written to a
temporary directory to show how project documents replace library ones.

Usage:
    python examples/build_stylesheet.py
"""

import json
import tempfile
from pathlib import Path

from chuk_mcp_tokens.constants import DensityLevel, ThemeMode
from chuk_mcp_tokens.manifest import ManifestBridge
from chuk_mcp_tokens.models.token import Variant
from chuk_mcp_tokens.runtime import TokenPipeline
from chuk_mcp_tokens.store import TokenStore


def main() -> None:
    """Demonstrate the token pipeline."""
    print("CHUK Tokens Pipeline Demo")
    print("=" * 40)
    print()

    library_path = Path(__file__).parent.parent / "src/chuk_mcp_tokens/library"

    with tempfile.TemporaryDirectory() as tmp:
        project_path = Path(tmp)

        # Rebrand: the project palette replaces the library's blue
        (project_path / "primitive").mkdir()
        brand = json.loads((library_path / "primitive" / "color.json").read_text())
        brand["color"]["blue"]["500"]["$value"] = "#7c3aed"
        (project_path / "primitive" / "color.json").write_text(json.dumps(brand))

        store = TokenStore(library_path=library_path, project_path=project_path)
        pipeline = TokenPipeline(store)

        print("Layers:")
        for layer in store.list_layers():
            count = sum(1 for _ in store.load(layer).iter_leaves())
            print(f"  {layer.value}: {count} tokens")
        print()

        base = pipeline.base_set()
        print(f"Resolved {len(base)} base tokens")
        print(f"  color-text-primary = {base['color-text-primary']}  (from project palette)")
        print(f"  button-padding-y   = {base['button-padding-y']}")
        print()

        print("Variants:")
        for variant in (
            Variant.default(),
            Variant(ThemeMode.DARK, DensityLevel.COMPACT),
            Variant(ThemeMode.HIGH_CONTRAST, DensityLevel.COMFORTABLE),
        ):
            tokens = pipeline.resolved(variant)
            print(
                f"  {variant.key:28} text={tokens['color-text-primary']}"
                f"  density={tokens['density-multiplier']}"
            )
        print()

        print("Density multipliers:")
        for config in pipeline.density_table():
            print(f"  {config.level.value:12} {config.multiplier:<5} {config.label}")
        print(f"Theme modes: {', '.join(pipeline.theme_modes())}")
        print()

        css = pipeline.stylesheet()
        print(f"Stylesheet: {len(css.splitlines())} lines, first block:")
        print(css.split("\n\n")[0].splitlines()[0] + " ...")
        print()

        bridge = ManifestBridge(store, pipeline)
        print("Documented components:")
        for summary in bridge.list_components():
            examples = bridge.get_examples_for_component(summary.name)
            print(f"  {summary.name} ({summary.slug}): {len(examples)} usage example(s)")
        print()

        print("Done! Serve these over MCP with: chuk-mcp-tokens --transport stdio")


if __name__ == "__main__":
    main()
