"""
Token store - discovers, reads and parses token documents.

Documents can come from:
1. Built-in library (shipped with package)
2. Project tokens (user's project/tokens directory)

A project document replaces the library document with the same name.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_tokens.constants import (
    DESCRIPTION_KEY,
    DOCUMENT_SUFFIXES,
    EXTENSIONS_KEY,
    LAYER_ORDER,
    METADATA_PREFIX,
    TYPE_KEY,
    VALUE_KEY,
    DensityLevel,
    ErrorMessages,
    ThemeMode,
    TokenLayer,
    TokenValue,
)
from chuk_mcp_tokens.errors import MalformedDocument, SourceUnavailable
from chuk_mcp_tokens.models.token import TokenGroup, TokenLeaf, TokenNode, TokenPath
from chuk_mcp_tokens.store.references import parse_value

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY_PATH = Path(__file__).parent.parent / "library"

THEMES_DIR = "themes"
DENSITY_DIR = "density"
METADATA_DIR = "metadata"

# Keys of a shadow object, in CSS order
SHADOW_KEYS = ("offsetX", "offsetY", "blur", "spread", "color")


class TokenStore:
    """
    Loads token layers, variant overrides and metadata documents.

    Parsed trees are cached per instance. Layers are returned in the
    fixed order primitive -> semantic -> component.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the store.

        Args:
            library_path: Path to the built-in token library
            project_path: Path to project token documents (override library)
        """
        self.library_path = library_path or DEFAULT_LIBRARY_PATH
        self.project_path = project_path
        self._cache: dict[str, TokenGroup] = {}

    def list_layers(self) -> list[TokenLayer]:
        """The fixed layer order. Later layers may reference earlier ones."""
        return list(LAYER_ORDER)

    def load(self, layer: TokenLayer | str) -> TokenGroup:
        """
        Load one token layer.

        All documents in the layer's directory are merged in name order.

        Raises:
            SourceUnavailable: No documents exist, or one cannot be read
            MalformedDocument: A document cannot be parsed
        """
        layer = TokenLayer(layer)
        paths = self.document_paths(layer.value)
        if not paths:
            raise SourceUnavailable(
                layer.value, ErrorMessages.LAYER_MISSING.format(layer=layer.value)
            )
        return self._load_tree(layer.value, paths)

    def load_theme(self, mode: ThemeMode | str) -> TokenGroup:
        """Theme override document for a mode (empty when absent)."""
        mode = ThemeMode(mode)
        return self._load_tree(
            f"{THEMES_DIR}/{mode.value}", self.document_paths(THEMES_DIR, stem=mode.value)
        )

    def load_density(self, level: DensityLevel | str) -> TokenGroup:
        """Density override document for a level (empty when absent)."""
        level = DensityLevel(level)
        return self._load_tree(
            f"{DENSITY_DIR}/{level.value}", self.document_paths(DENSITY_DIR, stem=level.value)
        )

    def inline_theme_overrides(self, mode: ThemeMode | str) -> TokenGroup:
        """Overrides declared via `$extensions.theme` across all layers."""
        mode = ThemeMode(mode)
        overrides = TokenGroup()
        for layer in self.list_layers():
            overrides = overrides.overlay(self.load(layer).theme_overrides(mode))
        return overrides

    def load_metadata(self, name: str) -> dict[str, Any]:
        """
        Load a raw metadata document (component manifest, usage examples).

        Raises:
            SourceUnavailable: The document is missing or unreadable
            MalformedDocument: The document cannot be parsed
        """
        paths = self.document_paths(METADATA_DIR, stem=name)
        if not paths:
            raise SourceUnavailable(
                name, ErrorMessages.UNREADABLE.format(source=name, reason="not found")
            )
        return self._read_document(paths[-1])

    def document_paths(self, directory: str, stem: str | None = None) -> list[Path]:
        """
        Find documents under `directory`, project files replacing library files.

        Args:
            directory: Sub-directory of the library/project roots
            stem: Only documents with this file stem

        Returns:
            Paths sorted by file name

        Raises:
            MalformedDocument: Two documents in one root share a stem
                (e.g. color.json and color.yaml)
        """
        found: dict[str, Path] = {}
        for root in (self.library_path, self.project_path):
            if root is None:
                continue
            base = root / directory
            if not base.is_dir():
                continue
            local: dict[str, Path] = {}
            for path in sorted(base.iterdir()):
                if path.suffix not in DOCUMENT_SUFFIXES or not path.is_file():
                    continue
                if stem is not None and path.stem != stem:
                    continue
                if path.stem in local:
                    raise MalformedDocument(
                        str(path),
                        ErrorMessages.NAME_CLASH.format(
                            first=local[path.stem], second=path, stem=path.stem
                        ),
                    )
                local[path.stem] = path
            found.update(local)
        return [found[key] for key in sorted(found)]

    def clear_cache(self) -> None:
        """Clear parsed trees."""
        self._cache.clear()

    def _load_tree(self, key: str, paths: list[Path]) -> TokenGroup:
        if key in self._cache:
            return self._cache[key]

        tree = TokenGroup()
        for path in paths:
            tree = tree.overlay(parse_document(self._read_document(path), str(path)))
        check_unique_names(tree, key)

        logger.debug(f"Loaded '{key}' from {len(paths)} document(s)")
        self._cache[key] = tree
        return tree

    def _read_document(self, path: Path) -> dict[str, Any]:
        """Read and decode one document."""
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise SourceUnavailable(
                str(path), ErrorMessages.UNREADABLE.format(source=path, reason=e)
            ) from e

        try:
            text = raw.decode("utf-8")
            if path.suffix == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise MalformedDocument(
                str(path), ErrorMessages.NOT_STRUCTURED.format(source=path, reason=e)
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MalformedDocument(
                str(path), ErrorMessages.NOT_A_MAPPING.format(source=path, path="<root>")
            )
        return data


def parse_document(data: dict[str, Any], source: str) -> TokenGroup:
    """
    Parse a raw document into a token tree.

    Mappings with `$value` are leaves; other mappings are groups. Keys
    starting with `$` are metadata and never become children.

    Raises:
        MalformedDocument: If the document violates the tree shape
    """
    return _parse_group(data, TokenPath(()), source, inherited_type=None)


def _parse_group(
    data: dict[str, Any],
    path: TokenPath,
    source: str,
    inherited_type: str | None,
) -> TokenGroup:
    own_type = _metadata_text(data, TYPE_KEY, path, source)
    group_type = own_type or inherited_type
    children: dict[str, TokenNode] = {}

    for key, node in data.items():
        if str(key).startswith(METADATA_PREFIX):
            continue
        child_path = path.child(str(key))
        if not isinstance(node, dict):
            raise MalformedDocument(
                source, ErrorMessages.NOT_A_MAPPING.format(source=source, path=child_path)
            )
        if VALUE_KEY in node:
            children[str(key)] = _parse_leaf(node, child_path, source, group_type)
        else:
            children[str(key)] = _parse_group(node, child_path, source, group_type)

    return TokenGroup(
        children=children,
        type=own_type,
        description=_metadata_text(data, DESCRIPTION_KEY, path, source),
    )


def _parse_leaf(
    data: dict[str, Any],
    path: TokenPath,
    source: str,
    inherited_type: str | None,
) -> TokenLeaf:
    if any(not str(key).startswith(METADATA_PREFIX) for key in data):
        raise MalformedDocument(
            source, ErrorMessages.LEAF_WITH_CHILDREN.format(path=path, source=source)
        )

    token_type = _metadata_text(data, TYPE_KEY, path, source) or inherited_type
    parsed = parse_value(
        normalize_value(data[VALUE_KEY], token_type, path, source), path.dotted, source
    )

    theme_overrides: dict[str, TokenLeaf] = {}
    extensions = data.get(EXTENSIONS_KEY)
    themes = extensions.get("theme") if isinstance(extensions, dict) else None
    for mode, raw in (themes if isinstance(themes, dict) else {}).items():
        try:
            mode_value = ThemeMode(mode).value
        except ValueError:
            raise MalformedDocument(
                source,
                ErrorMessages.BAD_VALUE.format(
                    path=f"{path}.$extensions.theme", source=source, value=mode
                ),
            ) from None
        override = parse_value(normalize_value(raw, token_type, path, source), path.dotted, source)
        theme_overrides[mode_value] = TokenLeaf(
            value=override.value,
            references=override.references,
            alias=override.alias,
            type=token_type,
        )

    return TokenLeaf(
        value=parsed.value,
        references=parsed.references,
        alias=parsed.alias,
        type=token_type,
        description=_metadata_text(data, DESCRIPTION_KEY, path, source),
        theme_overrides=theme_overrides,
    )


def _metadata_text(data: dict[str, Any], key: str, path: TokenPath, source: str) -> str | None:
    """A $type or $description field, which must be a string when present."""
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise MalformedDocument(
        source,
        ErrorMessages.BAD_METADATA.format(
            path=path.dotted or "<root>", source=source, key=key, value=value
        ),
    )


def normalize_value(raw: Any, token_type: str | None, path: TokenPath, source: str) -> TokenValue:
    """
    Reduce a `$value` to a scalar.

    Lists join with commas (items containing whitespace are quoted, as in
    font stacks); `cubicBezier` lists become `cubic-bezier(...)`; `shadow`
    objects become `offsetX offsetY blur spread color`.
    """
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, int | float | str):
        return raw
    if isinstance(raw, list) and raw:
        if token_type == "shadow" and all(isinstance(item, dict) for item in raw):
            return ", ".join(_shadow(item, path, source) for item in raw)
        if all(isinstance(item, int | float | str) and not isinstance(item, bool) for item in raw):
            items = [_list_item(item) for item in raw]
            if token_type == "cubicBezier":
                return f"cubic-bezier({', '.join(items)})"
            return ", ".join(items)
    if isinstance(raw, dict) and token_type == "shadow":
        return _shadow(raw, path, source)
    raise MalformedDocument(
        source, ErrorMessages.BAD_VALUE.format(path=path, source=source, value=raw)
    )


def _list_item(item: TokenValue) -> str:
    text = item if isinstance(item, str) else repr(item)
    return f'"{text}"' if any(ch.isspace() for ch in text) else text


def _shadow(data: dict[str, Any], path: TokenPath, source: str) -> str:
    parts = [data[key] for key in SHADOW_KEYS if key in data]
    if not parts or any(not isinstance(part, int | float | str) for part in parts):
        raise MalformedDocument(
            source, ErrorMessages.BAD_VALUE.format(path=path, source=source, value=data)
        )
    return " ".join(str(part) for part in parts)


def check_unique_names(tree: TokenGroup, source: str) -> None:
    """
    Reject distinct paths that flatten to the same name.

    Raises:
        MalformedDocument: On the first collision
    """
    seen: dict[str, TokenPath] = {}
    for path, _leaf in tree.iter_leaves():
        first = seen.setdefault(path.name, path)
        if first != path:
            raise MalformedDocument(
                source,
                ErrorMessages.DUPLICATE_NAME.format(first=first, second=path, source=source),
            )
