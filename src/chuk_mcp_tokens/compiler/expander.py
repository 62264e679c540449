"""
Variant expander - one resolved token set per theme x density.

Overrides are applied leaf by leaf on top of the base set. A path the
override does not mention keeps its base value, even when a sibling in
the same group is overridden.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from chuk_mcp_tokens.compiler.resolver import ReferenceResolver
from chuk_mcp_tokens.models.token import ResolvedTokenSet, TokenGroup, Variant, all_variants

logger = logging.getLogger(__name__)


class VariantExpander:
    """Expands a base resolved set into per-variant sets."""

    def __init__(self, resolver: ReferenceResolver | None = None):
        """
        Initialize the expander.

        Args:
            resolver: Resolver used for override layers
        """
        self.resolver = resolver or ReferenceResolver()

    def expand(
        self,
        base: ResolvedTokenSet,
        overrides: Mapping[Variant, TokenGroup],
        variants: Iterable[Variant] | None = None,
    ) -> dict[Variant, ResolvedTokenSet]:
        """
        Produce a resolved set for every declared variant.

        Args:
            base: Fully resolved base tokens
            overrides: Partial token trees keyed by variant; references in
                an override resolve against the override itself, then base
            variants: Variants to produce (default: all theme x density)

        Returns:
            Mapping of variant to resolved set, in declaration order.
            Variants without overrides get the base set unchanged.

        Raises:
            UnresolvedReference, CyclicReference: From override resolution
        """
        declared = list(variants) if variants is not None else all_variants()
        expanded: dict[Variant, ResolvedTokenSet] = {}

        for variant in declared:
            override = overrides.get(variant)
            if override is None or override.is_empty():
                expanded[variant] = base
                continue
            expanded[variant] = self.resolver.resolve_layer(override, base)
            logger.debug(f"Expanded variant {variant.key}")

        return expanded
