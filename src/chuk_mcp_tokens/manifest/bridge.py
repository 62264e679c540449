"""
Manifest bridge - read-only queries for documentation pages.

Answers component manifest lookups, usage-example filtering and colour
swatch listings. Nothing here raises: missing or malformed data is
logged and reported as None or an empty list, so a documentation page
can show a placeholder instead of failing.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from chuk_mcp_tokens.compiler import ReferenceResolver
from chuk_mcp_tokens.constants import EXAMPLES_DOCUMENT, MANIFEST_DOCUMENT, TokenLayer
from chuk_mcp_tokens.errors import TokenError
from chuk_mcp_tokens.models.manifest import (
    ColorSwatch,
    ComponentManifestEntry,
    ComponentSummary,
    PropRow,
    UsageExample,
)
from chuk_mcp_tokens.models.token import ResolvedTokenSet, Variant, format_value
from chuk_mcp_tokens.runtime import RuntimeCache, TokenPipeline
from chuk_mcp_tokens.store import TokenStore

logger = logging.getLogger(__name__)

COLOR_PREFIX = "color-"


class ManifestBridge:
    """
    Query interface over the component manifest, usage examples and tokens.

    Documents are loaded on first use and kept for the process lifetime.
    """

    def __init__(
        self,
        store: TokenStore,
        pipeline: TokenPipeline | None = None,
        cache: RuntimeCache | None = None,
    ):
        """
        Initialize the bridge.

        Args:
            store: Source of metadata and token documents
            pipeline: Pipeline for per-variant swatches
            cache: Memoization table (a fresh one by default)
        """
        self.store = store
        self.pipeline = pipeline
        self.cache = cache or RuntimeCache()

    def get_manifest_entry(self, slug: str) -> ComponentManifestEntry | None:
        """
        Get a component's manifest entry.

        Args:
            slug: Component slug (e.g. 'date-picker')

        Returns:
            ComponentManifestEntry or None if the component has no entry
        """
        return self._manifest().get(slug)

    def list_components(self) -> list[ComponentSummary]:
        """All manifest components, sorted by display name."""
        summaries = [
            ComponentSummary(slug=entry.slug, name=entry.name)
            for entry in self._manifest().values()
        ]
        return sorted(summaries, key=lambda s: s.name.lower())

    def get_props_rows(self, slug: str) -> list[PropRow] | None:
        """
        Props-table rows for a component.

        Returns:
            Rows in manifest order, or None when there is no props data
        """
        entry = self.get_manifest_entry(slug)
        if entry is None or not entry.props:
            return None
        return [PropRow.from_descriptor(prop) for prop in entry.props]

    def get_examples_for_component(self, name: str) -> list[UsageExample]:
        """
        Usage examples that apply to a component.

        Args:
            name: Component display name (e.g. 'Button')

        Returns:
            Matching examples in document order (empty if none)
        """
        return [example for example in self._examples() if example.mentions(name)]

    def list_color_swatches(self, variant: Variant | None = None) -> list[ColorSwatch]:
        """
        Colour tokens for swatch display.

        Without a variant, the primitive colour layer; with one, every
        resolved `color-*` token of that variant.
        """
        try:
            if variant is None:
                tokens = self._primitive_colors()
            elif self.pipeline is not None:
                tokens = self.pipeline.resolved(variant)
            else:
                logger.warning("No pipeline configured for variant swatches")
                return []
        except (TokenError, KeyError) as e:
            logger.warning(f"Cannot list colour swatches: {e}")
            return []

        return [
            ColorSwatch(name=name[len(COLOR_PREFIX) :], value=format_value(value))
            for name, value in tokens.items()
            if name.startswith(COLOR_PREFIX)
        ]

    def _primitive_colors(self) -> ResolvedTokenSet:
        return self.cache.get_or_compute(
            "primitive_colors",
            lambda: ReferenceResolver().resolve([self.store.load(TokenLayer.PRIMITIVE)]),
        )

    def _manifest(self) -> dict[str, ComponentManifestEntry]:
        return self.cache.get_or_compute("manifest", self._load_manifest)

    def _examples(self) -> list[UsageExample]:
        return self.cache.get_or_compute("examples", self._load_examples)

    def _load_manifest(self) -> dict[str, ComponentManifestEntry]:
        components = self._read_section(MANIFEST_DOCUMENT, "components")
        entries: dict[str, ComponentManifestEntry] = {}
        for slug, data in components.items():
            if not isinstance(data, dict):
                logger.warning(f"Skipping manifest entry '{slug}': not a mapping")
                continue
            try:
                entries[slug] = ComponentManifestEntry.from_document(slug, data)
            except (ValidationError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping manifest entry '{slug}': {e}")
        logger.debug(f"Loaded {len(entries)} manifest entries")
        return entries

    def _load_examples(self) -> list[UsageExample]:
        raw = self._read_section(EXAMPLES_DOCUMENT, "examples")
        examples: list[UsageExample] = []
        for example_id, data in raw.items():
            if not isinstance(data, dict):
                continue
            try:
                examples.append(UsageExample.from_document(example_id, data))
            except (ValidationError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping usage example '{example_id}': {e}")
        return examples

    def _read_section(self, document: str, section: str) -> dict[str, Any]:
        """A top-level mapping from a metadata document, or {} on any failure."""
        try:
            data = self.store.load_metadata(document)
        except TokenError as e:
            logger.warning(f"Metadata '{document}' unavailable: {e}")
            return {}
        value = data.get(section)
        if not isinstance(value, dict):
            logger.warning(f"Metadata '{document}' has no '{section}' mapping")
            return {}
        return value
