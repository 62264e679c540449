"""
Stylesheet emitter - the end of the pipeline.

Serializes resolved sets into custom-property rule blocks, and derives
the constant tables (density multipliers, theme modes) and type module
consumed by other build steps. All output is deterministic: same input,
byte-identical text.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from chuk_mcp_tokens.constants import (
    DENSITY_MULTIPLIERS,
    DENSITY_ORDER,
    THEME_ORDER,
    DensityLevel,
    ThemeMode,
)
from chuk_mcp_tokens.models.token import ResolvedTokenSet, Variant, format_value

logger = logging.getLogger(__name__)

ROOT_SELECTOR = ":root"

GENERATED_HEADER = "// Generated by chuk-mcp-tokens - do not edit manually"


@dataclass(frozen=True)
class DensityConfig:
    """Multiplier and display label for one density level."""

    level: DensityLevel
    multiplier: float
    label: str


class StylesheetEmitter:
    """
    Renders variant sets as stylesheet text.

    The light/default variant is emitted twice: once under `:root` so
    pages have styling before any attribute is set, and once under its
    own attribute selector.
    """

    def __init__(self, layer_name: str | None = None, indent: str = "  "):
        """
        Initialize the emitter.

        Args:
            layer_name: Wrap output in `@layer <name> { ... }` when set
            indent: Indentation for declarations
        """
        self.layer_name = layer_name
        self.indent = indent

    def emit(self, variant_sets: Mapping[Variant, ResolvedTokenSet]) -> str:
        """
        Emit one rule block per variant.

        Args:
            variant_sets: Resolved set per variant

        Returns:
            Stylesheet text, blocks separated by blank lines
        """
        blocks: list[str] = []

        default = variant_sets.get(Variant.default())
        if default is not None:
            blocks.append(self.render_block(ROOT_SELECTOR, default))
        else:
            logger.warning("No light/default variant; stylesheet has no unscoped block")

        for variant in sorted(variant_sets, key=lambda v: v.sort_key):
            blocks.append(self.render_block(variant.selector, variant_sets[variant]))

        css = "\n\n".join(blocks) + "\n"
        if self.layer_name:
            body = "".join(f"{self.indent}{line}\n" if line else "\n" for line in css.splitlines())
            css = f"@layer {self.layer_name} {{\n{body}}}\n"
        return css

    def render_block(self, selector: str, token_set: ResolvedTokenSet) -> str:
        """One rule block, declarations sorted by name."""
        lines = [f"{selector} {{"]
        lines.extend(
            f"{self.indent}--{name}: {format_value(value)};"
            for name, value in token_set.sorted_items()
        )
        lines.append("}")
        return "\n".join(lines)

    def emit_density_multipliers(
        self, levels: Iterable[DensityLevel | str] = DENSITY_ORDER
    ) -> list[DensityConfig]:
        """Multiplier table for the given levels, in the given order."""
        table: list[DensityConfig] = []
        for level in levels:
            level = DensityLevel(level)
            multiplier, label = DENSITY_MULTIPLIERS[level]
            table.append(DensityConfig(level=level, multiplier=multiplier, label=label))
        return table

    def emit_theme_enum(self, modes: Iterable[ThemeMode | str] = THEME_ORDER) -> tuple[str, ...]:
        """Theme mode names in the given order, duplicates dropped."""
        names: list[str] = []
        for mode in modes:
            name = ThemeMode(mode).value
            if name not in names:
                names.append(name)
        return tuple(names)

    def render_types_module(
        self,
        density_table: Iterable[DensityConfig],
        theme_modes: Iterable[str],
        token_set: ResolvedTokenSet | None = None,
    ) -> str:
        """
        Render a TypeScript declaration module for downstream builds.

        Contains the DensityLevel/ThemeMode unions and constant tables,
        and, when a token set is given, one path union per token $type
        plus a TokenMap interface.
        """
        density_table = list(density_table)
        theme_modes = list(theme_modes)
        out: list[str] = [GENERATED_HEADER, ""]

        out.append("// Density system types")
        levels = " | ".join(f"'{config.level.value}'" for config in density_table)
        out.append(f"export type DensityLevel = {levels};")
        out.append("")
        out.append("export interface DensityConfig {")
        out.append("  multiplier: number;")
        out.append("  label: string;")
        out.append("}")
        out.append("")
        out.append("export const DENSITY_MULTIPLIERS: Record<DensityLevel, DensityConfig> = {")
        for config in density_table:
            out.append(
                f"  {_ts_key(config.level.value)}: "
                f"{{ multiplier: {float(config.multiplier)!r}, label: '{config.label}' }},"
            )
        out.append("};")
        out.append("")
        out.append("export function getDensityMultiplier(level: DensityLevel): number {")
        out.append("  return DENSITY_MULTIPLIERS[level].multiplier;")
        out.append("}")
        out.append("")

        out.append("// Theme system types")
        modes = " | ".join(f"'{mode}'" for mode in theme_modes)
        out.append(f"export type ThemeMode = {modes};")
        out.append("")
        out.append("export interface ThemeConfig {")
        out.append("  mode: ThemeMode;")
        out.append("  density?: DensityLevel;")
        out.append("}")
        out.append("")
        listed = ", ".join(f"'{mode}'" for mode in theme_modes)
        out.append(f"export const THEME_MODES: readonly ThemeMode[] = [{listed}] as const;")

        if token_set is not None:
            out.append("")
            out.extend(self._render_token_types(token_set))

        return "\n".join(out) + "\n"

    def _render_token_types(self, token_set: ResolvedTokenSet) -> list[str]:
        by_type: dict[str, list[str]] = {}
        for name, _value in token_set.sorted_items():
            by_type.setdefault(token_set.type_of(name) or "unknown", []).append(name)

        out: list[str] = ["// Token types"]
        for token_type in sorted(by_type):
            type_name = token_type[:1].upper() + token_type[1:] + "Token"
            out.append(f"export type {type_name} =")
            out.append("\n".join(f"  | '{name}'" for name in by_type[token_type]) + ";")
            out.append("")

        out.append("export interface TokenMap {")
        for name, value in token_set.sorted_items():
            out.append(f"  '{name}': {json.dumps(value)};")
        out.append("}")
        out.append("")
        out.append("export type TokenValue<T extends keyof TokenMap> = TokenMap[T];")
        out.append("export type TokenKey = keyof TokenMap;")
        return out


def _ts_key(name: str) -> str:
    return name if name.isidentifier() else f"'{name}'"
