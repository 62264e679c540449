"""
Token models - the typed tree every pipeline stage works on.

Raw documents are parsed once into TokenGroup/TokenLeaf trees at the
store boundary. After that, nothing downstream touches untyped dicts.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from chuk_mcp_tokens.constants import (
    DENSITY_ATTRIBUTE,
    DENSITY_ORDER,
    THEME_ATTRIBUTE,
    THEME_ORDER,
    DensityLevel,
    ThemeMode,
    TokenValue,
)

_PATH_DELIMITER = re.compile(r"[./]")
_WHITESPACE = re.compile(r"\s+")


def flatten_name(segments: Iterable[str]) -> str:
    """Join path segments into a custom-property style name."""
    return _WHITESPACE.sub("-", "-".join(segments)).lower()


def format_value(value: TokenValue) -> str:
    """Render a scalar the way it appears in stylesheet text."""
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    return str(value)


@dataclass(frozen=True)
class TokenPath:
    """
    Address of one token within a layer.

    Written as dot- or slash-delimited segments: 'color.blue.500'
    or 'color/blue/500'.
    """

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> TokenPath:
        """Parse a delimited path, rejecting empty segments."""
        segments = tuple(part.strip() for part in _PATH_DELIMITER.split(text.strip()))
        if not segments or any(not part for part in segments):
            raise ValueError(f"Invalid token path: {text!r}")
        return cls(segments)

    @property
    def dotted(self) -> str:
        return ".".join(self.segments)

    @property
    def name(self) -> str:
        """Flattened name used as the key of resolved sets."""
        return flatten_name(self.segments)

    def child(self, key: str) -> TokenPath:
        return TokenPath((*self.segments, key))

    def __str__(self) -> str:
        return self.dotted


class TokenLeaf(BaseModel):
    """
    A single design value.

    `value` is a literal, or a string containing `{path}` references
    listed in `references`. When `alias` is set, the value is exactly one
    reference and resolves to the referenced value unchanged.
    """

    kind: Literal["leaf"] = "leaf"
    value: TokenValue
    references: tuple[TokenPath, ...] = ()
    alias: bool = False
    type: str | None = None
    description: str | None = None
    theme_overrides: dict[str, TokenLeaf] = Field(
        default_factory=dict,
        description="Per-theme replacement values from $extensions.theme",
    )

    model_config = {"frozen": True}

    @property
    def is_reference(self) -> bool:
        return bool(self.references)


class TokenGroup(BaseModel):
    """A named collection of child groups and leaves."""

    kind: Literal["group"] = "group"
    children: dict[str, TokenNode] = Field(default_factory=dict)
    type: str | None = None
    description: str | None = None

    model_config = {"frozen": True}

    def is_empty(self) -> bool:
        """True when the tree holds no leaves at all."""
        return next(self.iter_leaves(), None) is None

    def iter_leaves(
        self, prefix: TokenPath | None = None
    ) -> Iterator[tuple[TokenPath, TokenLeaf]]:
        """Yield (path, leaf) pairs depth-first in document order."""
        base = prefix or TokenPath(())
        for key, node in self.children.items():
            path = base.child(key)
            if isinstance(node, TokenLeaf):
                yield path, node
            else:
                yield from node.iter_leaves(path)

    def get(self, path: TokenPath) -> TokenNode | None:
        """Look up a node by path."""
        node: TokenNode = self
        for segment in path.segments:
            if not isinstance(node, TokenGroup) or segment not in node.children:
                return None
            node = node.children[segment]
        return node

    def overlay(self, other: TokenGroup) -> TokenGroup:
        """
        Apply `other` on top of this tree, leaf by leaf.

        Groups present in both trees merge recursively; anything else in
        `other` replaces the node at the same key.
        """
        if other.is_empty():
            return self
        merged: dict[str, TokenNode] = dict(self.children)
        for key, node in other.children.items():
            current = merged.get(key)
            if isinstance(current, TokenGroup) and isinstance(node, TokenGroup):
                merged[key] = current.overlay(node)
            else:
                merged[key] = node
        return TokenGroup(
            children=merged,
            type=other.type or self.type,
            description=other.description or self.description,
        )

    def theme_overrides(self, mode: ThemeMode | str) -> TokenGroup:
        """Collect the leaves that declare an inline override for `mode`."""
        mode_value = mode.value if isinstance(mode, ThemeMode) else mode
        children: dict[str, TokenNode] = {}
        for key, node in self.children.items():
            if isinstance(node, TokenLeaf):
                if mode_value in node.theme_overrides:
                    children[key] = node.theme_overrides[mode_value]
            else:
                sub = node.theme_overrides(mode_value)
                if sub.children:
                    children[key] = sub
        return TokenGroup(children=children)

    @classmethod
    def from_values(
        cls,
        values: Mapping[str, TokenValue],
        types: Mapping[str, str] | None = None,
    ) -> TokenGroup:
        """Build a one-level tree of literal leaves keyed by flattened name."""
        types = types or {}
        return cls(
            children={
                name: TokenLeaf(value=value, type=types.get(name)) for name, value in values.items()
            }
        )


TokenNode = Annotated[TokenLeaf | TokenGroup, Field(discriminator="kind")]

TokenLeaf.model_rebuild()
TokenGroup.model_rebuild()


@dataclass(frozen=True)
class Variant:
    """A (theme, density) pair identifying one resolved token set."""

    theme: ThemeMode = ThemeMode.LIGHT
    density: DensityLevel = DensityLevel.DEFAULT

    @classmethod
    def parse(cls, theme: str | ThemeMode, density: str | DensityLevel) -> Variant:
        return cls(ThemeMode(theme), DensityLevel(density))

    @classmethod
    def default(cls) -> Variant:
        return cls(ThemeMode.LIGHT, DensityLevel.DEFAULT)

    @property
    def is_default(self) -> bool:
        return self == Variant.default()

    @property
    def key(self) -> str:
        return f"{self.theme.value}/{self.density.value}"

    @property
    def selector(self) -> str:
        return (
            f'[{THEME_ATTRIBUTE}="{self.theme.value}"]'
            f'[{DENSITY_ATTRIBUTE}="{self.density.value}"]'
        )

    @property
    def sort_key(self) -> tuple[int, int]:
        return THEME_ORDER.index(self.theme), DENSITY_ORDER.index(self.density)


def all_variants() -> list[Variant]:
    """Every theme x density combination, in declaration order."""
    return [Variant(theme, density) for theme in THEME_ORDER for density in DENSITY_ORDER]


class ResolvedTokenSet(Mapping[str, TokenValue]):
    """
    Flattened name -> literal value, after every reference is substituted.

    Immutable. Also records each token's $type where one is known.
    """

    __slots__ = ("_values", "_types")

    def __init__(
        self,
        values: Mapping[str, TokenValue] | None = None,
        types: Mapping[str, str] | None = None,
    ):
        self._values: dict[str, TokenValue] = dict(values or {})
        self._types: dict[str, str] = {
            name: token_type
            for name, token_type in (types or {}).items()
            if name in self._values and token_type
        }

    def __getitem__(self, name: str) -> TokenValue:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ResolvedTokenSet({len(self._values)} tokens)"

    @property
    def types(self) -> Mapping[str, str]:
        return MappingProxyType(self._types)

    def type_of(self, name: str) -> str | None:
        return self._types.get(name)

    def sorted_items(self) -> list[tuple[str, TokenValue]]:
        return sorted(self._values.items())

    def with_prefix(self, prefix: str) -> dict[str, TokenValue]:
        """Entries whose flattened name starts with `prefix`."""
        return {name: value for name, value in self._values.items() if name.startswith(prefix)}

    def to_layer(self) -> TokenGroup:
        """Turn the set back into a literal layer."""
        return TokenGroup.from_values(self._values, self._types)
