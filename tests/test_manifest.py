"""
Tests for the manifest bridge.

Tests cover:
- Manifest entry lookup and component listing
- Props-table rows
- Usage-example matching
- Colour swatches
- Fail-soft behaviour on missing or malformed metadata
"""

from pathlib import Path

import pytest

from chuk_mcp_tokens.constants import DensityLevel, ThemeMode
from chuk_mcp_tokens.manifest import ManifestBridge
from chuk_mcp_tokens.models.manifest import EMPTY_CELL, UsageExample, title_case
from chuk_mcp_tokens.models.token import Variant
from chuk_mcp_tokens.runtime import TokenPipeline
from chuk_mcp_tokens.store import TokenStore


@pytest.fixture
def bridge(library_path: Path) -> ManifestBridge:
    store = TokenStore(library_path=library_path)
    return ManifestBridge(store, TokenPipeline(store))


@pytest.fixture
def empty_bridge(temp_dir: Path) -> ManifestBridge:
    store = TokenStore(library_path=temp_dir)
    return ManifestBridge(store, TokenPipeline(store))


class TestManifestModels:
    """Tests for manifest models."""

    def test_title_case(self):
        assert title_case("date-range-picker") == "Date Range Picker"

    def test_component_field_takes_precedence(self):
        """When a single component is named, the list is ignored."""
        example = UsageExample(component="Card", components=["Button"])
        assert example.mentions("Card")
        assert not example.mentions("Button")

    def test_components_list(self):
        example = UsageExample(components=["TextField", "Button"])
        assert example.mentions("Button")
        assert not example.mentions("Card")


class TestManifestBridge:
    """Tests for ManifestBridge queries."""

    def test_get_entry(self, bridge: ManifestBridge):
        entry = bridge.get_manifest_entry("button")
        assert entry is not None
        assert entry.name == "Button"
        assert entry.accessibility.keyboard_navigation == ["Enter activates", "Space activates"]

    def test_unknown_slug(self, bridge: ManifestBridge):
        """Unknown components have no entry."""
        assert bridge.get_manifest_entry("carousel") is None

    def test_name_defaults_to_title_case(self, bridge: ManifestBridge):
        assert bridge.get_manifest_entry("date-picker").name == "Date Picker"

    def test_list_components_sorted(self, bridge: ManifestBridge):
        names = [summary.name for summary in bridge.list_components()]
        assert names == ["Button", "Date Picker", "TextField"]

    def test_props_rows(self, bridge: ManifestBridge):
        """Rows keep manifest order and render every cell as text."""
        rows = bridge.get_props_rows("button")
        assert [row.name for row in rows] == ["variant", "size", "disabled", "onClick"]
        assert rows[2].default == "false"
        assert rows[3].default == EMPTY_CELL
        assert rows[3].description == EMPTY_CELL

    def test_props_rows_absent(self, bridge: ManifestBridge):
        """No props data means no table."""
        assert bridge.get_props_rows("date-picker") is None
        assert bridge.get_props_rows("carousel") is None

    def test_examples_for_button(self, bridge: ManifestBridge):
        """Examples naming Button by field or by list both match."""
        ids = [example.id for example in bridge.get_examples_for_component("Button")]
        assert ids == ["submit-form", "confirm-delete", "login-form"]

    def test_examples_for_unknown_component(self, bridge: ManifestBridge):
        assert bridge.get_examples_for_component("Carousel") == []

    def test_primitive_swatches(self, bridge: ManifestBridge):
        """Without a variant, swatches list the primitive palette."""
        swatches = {swatch.name: swatch.value for swatch in bridge.list_color_swatches()}
        assert swatches["blue-500"] == "#3b82f6"
        assert "text-primary" not in swatches

    def test_variant_swatches(self, bridge: ManifestBridge):
        """With a variant, swatches list resolved colours of that variant."""
        dark = Variant(ThemeMode.DARK, DensityLevel.DEFAULT)
        swatches = {swatch.name: swatch.value for swatch in bridge.list_color_swatches(dark)}
        assert swatches["text-primary"] == "#60a5fa"


class TestFailSoft:
    """Missing or malformed metadata never raises."""

    def test_missing_manifest(self, empty_bridge: ManifestBridge):
        assert empty_bridge.get_manifest_entry("button") is None
        assert empty_bridge.list_components() == []
        assert empty_bridge.get_props_rows("button") is None

    def test_missing_examples(self, empty_bridge: ManifestBridge):
        assert empty_bridge.get_examples_for_component("Button") == []

    def test_missing_tokens(self, empty_bridge: ManifestBridge):
        assert empty_bridge.list_color_swatches() == []
        assert empty_bridge.list_color_swatches(Variant.default()) == []

    def test_no_pipeline(self, library_path: Path):
        bridge = ManifestBridge(TokenStore(library_path=library_path))
        assert bridge.list_color_swatches(Variant.default()) == []

    def test_malformed_manifest(self, write_document, temp_dir: Path):
        """Broken documents and invalid entries are skipped."""
        (temp_dir / "metadata").mkdir()
        (temp_dir / "metadata" / "usage-examples.json").write_text("{broken")
        write_document(
            "metadata/component-manifest.json",
            {"components": {"good": {"name": "Good"}, "bad": "not a mapping"}},
        )
        bridge = ManifestBridge(TokenStore(library_path=temp_dir))
        assert bridge.get_manifest_entry("good").name == "Good"
        assert bridge.get_manifest_entry("bad") is None
        assert bridge.get_examples_for_component("Good") == []

    def test_non_list_examples_ignored(self, write_document, temp_dir: Path):
        """An entry whose inline examples are not a list still loads."""
        write_document(
            "metadata/component-manifest.json",
            {"components": {"button": {"name": "Button", "examples": 5}}},
        )
        entry = ManifestBridge(TokenStore(library_path=temp_dir)).get_manifest_entry("button")
        assert entry is not None
        assert entry.examples == []

    def test_invalid_entry_fields_skipped(self, write_document, temp_dir: Path):
        """Entries with fields of the wrong shape are skipped, not raised."""
        write_document(
            "metadata/component-manifest.json",
            {"components": {"card": {"name": "Card", "accessibility": "none"}}},
        )
        bridge = ManifestBridge(TokenStore(library_path=temp_dir))
        assert bridge.get_manifest_entry("card") is None
        assert bridge.list_components() == []

    def test_undecodable_documents(self, temp_dir: Path):
        """Metadata that is not UTF-8 reads as missing."""
        (temp_dir / "metadata").mkdir()
        (temp_dir / "metadata" / "component-manifest.json").write_bytes(b"\xff\xfe{}")
        (temp_dir / "metadata" / "usage-examples.json").write_bytes(b"\xff")
        bridge = ManifestBridge(TokenStore(library_path=temp_dir))
        assert bridge.get_manifest_entry("x") is None
        assert bridge.get_examples_for_component("Button") == []
