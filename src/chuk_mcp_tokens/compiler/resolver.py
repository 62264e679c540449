"""
Reference resolver - substitutes references with literal values.

Layers are resolved in their fixed order. A reference may point at a
token in an earlier layer or at another token of the same layer; it can
never see a later layer. Resolution walks an explicit chain instead of
recursing, so long alias chains cannot exhaust the interpreter stack.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chuk_mcp_tokens.constants import TokenValue
from chuk_mcp_tokens.errors import CyclicReference, UnresolvedReference
from chuk_mcp_tokens.models.token import ResolvedTokenSet, TokenGroup, TokenLeaf
from chuk_mcp_tokens.store.references import substitute

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """
    Resolves layered token trees into a flat ResolvedTokenSet.

    Deterministic: identical layers always give identical sets, or the
    same error.
    """

    def resolve(self, layers: Sequence[TokenGroup]) -> ResolvedTokenSet:
        """
        Resolve layers in order, later layers winning for the same name.

        Args:
            layers: Token trees, lowest layer first

        Returns:
            Resolved set with no remaining references

        Raises:
            UnresolvedReference: A reference targets no visible token
            CyclicReference: A reference chain loops back on itself
        """
        resolved = ResolvedTokenSet()
        for index, layer in enumerate(layers):
            resolved = self.resolve_layer(layer, resolved)
            logger.debug(f"Resolved layer {index}: {len(resolved)} tokens visible")
        return resolved

    def resolve_layer(self, layer: TokenGroup, base: ResolvedTokenSet) -> ResolvedTokenSet:
        """
        Resolve one layer on top of an already resolved set.

        Same-layer references see this layer's own values first; anything
        else falls back to `base`. Names the layer does not define keep
        their base value.
        """
        pending: dict[str, TokenLeaf] = {}
        dotted: dict[str, str] = {}
        for path, leaf in layer.iter_leaves():
            pending[path.name] = leaf
            dotted[path.name] = path.dotted

        values: dict[str, TokenValue] = dict(base)
        types: dict[str, str] = dict(base.types)
        done: set[str] = set()

        for name in pending:
            if name not in done:
                self._resolve_chain(name, pending, dotted, values, types, done)

        return ResolvedTokenSet(values, types)

    def _resolve_chain(
        self,
        start: str,
        pending: dict[str, TokenLeaf],
        dotted: dict[str, str],
        values: dict[str, TokenValue],
        types: dict[str, str],
        done: set[str],
    ) -> None:
        chain = [start]
        on_chain = {start}

        while chain:
            current = chain[-1]
            leaf = pending[current]

            blocker: str | None = None
            for reference in leaf.references:
                target = reference.name
                if target in pending and target not in done:
                    blocker = target
                    break
                if target not in values:
                    raise UnresolvedReference(
                        reference.dotted, [dotted[name] for name in chain]
                    )

            if blocker is None:
                value, token_type = self._substitute(leaf, values, types)
                values[current] = value
                if token_type:
                    types[current] = token_type
                else:
                    types.pop(current, None)
                done.add(current)
                on_chain.discard(chain.pop())
                continue

            if blocker in on_chain:
                cycle = chain[chain.index(blocker) :]
                raise CyclicReference([dotted[name] for name in [*cycle, blocker]])

            chain.append(blocker)
            on_chain.add(blocker)

    def _substitute(
        self,
        leaf: TokenLeaf,
        values: dict[str, TokenValue],
        types: dict[str, str],
    ) -> tuple[TokenValue, str | None]:
        if not leaf.references:
            return leaf.value, leaf.type

        if leaf.alias:
            target = leaf.references[0].name
            return values[target], leaf.type or types.get(target)

        return substitute(str(leaf.value), lambda path: values[path.name]), leaf.type


def resolve_layers(layers: Sequence[TokenGroup]) -> ResolvedTokenSet:
    """Convenience wrapper around ReferenceResolver.resolve."""
    return ReferenceResolver().resolve(layers)
