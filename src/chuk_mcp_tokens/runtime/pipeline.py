"""
Token pipeline - store, resolver, expander and emitter behind one cache.

Every derived value (base set, variant sets, stylesheet, constants) is
computed once per pipeline and reused. A pipeline error aborts the whole
build: no partial stylesheet is ever cached or returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType

from chuk_mcp_tokens.compiler import (
    DensityConfig,
    ReferenceResolver,
    StylesheetEmitter,
    VariantExpander,
)
from chuk_mcp_tokens.constants import (
    DENSITY_MULTIPLIER_PATH,
    DENSITY_MULTIPLIERS,
    DENSITY_ORDER,
    THEME_ORDER,
    DensityLevel,
)
from chuk_mcp_tokens.models.token import (
    ResolvedTokenSet,
    TokenGroup,
    TokenLeaf,
    TokenPath,
    Variant,
    all_variants,
)
from chuk_mcp_tokens.runtime.cache import RuntimeCache
from chuk_mcp_tokens.store import TokenStore

logger = logging.getLogger(__name__)

# Project token directory, relative to the working directory
DEFAULT_PROJECT_DIR = "tokens"


def density_multiplier_layer(level: DensityLevel) -> TokenGroup:
    """A one-leaf tree setting the density multiplier token."""
    multiplier, _label = DENSITY_MULTIPLIERS[level]
    path = TokenPath.parse(DENSITY_MULTIPLIER_PATH)
    node: TokenGroup | TokenLeaf = TokenLeaf(value=multiplier, type="number")
    for segment in reversed(path.segments):
        node = TokenGroup(children={segment: node})
    return node


class TokenPipeline:
    """
    Wires the token pipeline through a RuntimeCache.

    The first request for any artifact pays for loading and resolution;
    later requests reuse the cached result.
    """

    def __init__(
        self,
        store: TokenStore,
        cache: RuntimeCache | None = None,
        emitter: StylesheetEmitter | None = None,
        variants: Sequence[Variant] | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            store: Source of token documents
            cache: Memoization table (a fresh one by default)
            emitter: Stylesheet emitter
            variants: Variants to build (default: all theme x density)
        """
        self.store = store
        self.cache = cache or RuntimeCache()
        self.resolver = ReferenceResolver()
        self.expander = VariantExpander(self.resolver)
        self.emitter = emitter or StylesheetEmitter()
        self.variants = list(variants) if variants is not None else all_variants()

    def base_set(self) -> ResolvedTokenSet:
        """Primitive, semantic and component layers resolved together."""
        return self.cache.get_or_compute("base", self._build_base)

    def overrides(self) -> Mapping[Variant, TokenGroup]:
        """Override tree for each declared variant."""
        return self.cache.get_or_compute("overrides", self._build_overrides)

    def variant_sets(self) -> Mapping[Variant, ResolvedTokenSet]:
        """Resolved set for each declared variant."""
        return self.cache.get_or_compute("variants", self._build_variants)

    def resolved(self, variant: Variant) -> ResolvedTokenSet:
        """
        Resolved set for one variant.

        Raises:
            KeyError: If the variant is not declared by this pipeline
        """
        sets = self.variant_sets()
        if variant not in sets:
            raise KeyError(f"Variant not declared: {variant.key}")
        return sets[variant]

    def stylesheet(self) -> str:
        """Full stylesheet text."""
        return self.cache.get_or_compute(
            "stylesheet", lambda: self.emitter.emit(self.variant_sets())
        )

    def density_table(self) -> tuple[DensityConfig, ...]:
        return self.cache.get_or_compute(
            "density_table", lambda: tuple(self.emitter.emit_density_multipliers(DENSITY_ORDER))
        )

    def theme_modes(self) -> tuple[str, ...]:
        return self.cache.get_or_compute(
            "theme_modes", lambda: self.emitter.emit_theme_enum(THEME_ORDER)
        )

    def types_module(self) -> str:
        """TypeScript declarations for density, themes and token paths."""
        return self.cache.get_or_compute(
            "types_module",
            lambda: self.emitter.render_types_module(
                self.density_table(),
                self.theme_modes(),
                self.variant_sets().get(Variant.default(), self.base_set()),
            ),
        )

    def _build_base(self) -> ResolvedTokenSet:
        layers = [self.store.load(layer) for layer in self.store.list_layers()]
        base = self.resolver.resolve(layers)
        logger.info(f"Resolved {len(base)} base tokens from {len(layers)} layers")
        return base

    def _build_overrides(self) -> Mapping[Variant, TokenGroup]:
        inline = {mode: self.store.inline_theme_overrides(mode) for mode in THEME_ORDER}
        overrides: dict[Variant, TokenGroup] = {}
        for variant in self.variants:
            theme_tree = self.store.load_theme(variant.theme).overlay(inline[variant.theme])
            density_tree = self.store.load_density(variant.density).overlay(
                density_multiplier_layer(variant.density)
            )
            overrides[variant] = theme_tree.overlay(density_tree)
        return MappingProxyType(overrides)

    def _build_variants(self) -> Mapping[Variant, ResolvedTokenSet]:
        sets = self.expander.expand(self.base_set(), self.overrides(), self.variants)
        logger.info(f"Expanded {len(sets)} variants")
        return MappingProxyType(sets)


# Process-wide table holding the default pipeline
_PROCESS_CACHE = RuntimeCache()


def _default_pipeline() -> TokenPipeline:
    project_path = Path.cwd() / DEFAULT_PROJECT_DIR
    store = TokenStore(project_path=project_path if project_path.is_dir() else None)
    logger.debug(f"Token library: {store.library_path}, project: {store.project_path}")
    return TokenPipeline(store)


def get_pipeline() -> TokenPipeline:
    """The process-wide pipeline, created on first use."""
    return _PROCESS_CACHE.get_or_compute("pipeline", _default_pipeline)
