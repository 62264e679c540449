"""
Tests for the runtime cache and token pipeline.

Tests cover:
- Single-flight memoization under concurrency
- Failed computations are not cached
- Pipeline outputs over test and built-in libraries
"""

import threading
import time
from pathlib import Path

import pytest

from chuk_mcp_tokens.compiler import StylesheetEmitter
from chuk_mcp_tokens.constants import DensityLevel, ThemeMode
from chuk_mcp_tokens.errors import SourceUnavailable
from chuk_mcp_tokens.models.token import TokenPath, Variant
from chuk_mcp_tokens.runtime import RuntimeCache, TokenPipeline, density_multiplier_layer
from chuk_mcp_tokens.store import TokenStore


class TestRuntimeCache:
    """Tests for RuntimeCache."""

    def test_compute_once(self):
        """A second call reuses the stored value."""
        cache = RuntimeCache()
        calls = []

        def compute():
            calls.append(1)
            return "value"

        assert cache.get_or_compute("k", compute) == "value"
        assert cache.get_or_compute("k", compute) == "value"
        assert len(calls) == 1
        assert "k" in cache
        assert len(cache) == 1

    def test_concurrent_callers_compute_once(self):
        """Simultaneous callers for one key share a single computation."""
        cache = RuntimeCache()
        calls = []
        results = []

        def compute():
            calls.append(1)
            time.sleep(0.05)
            return object()

        def worker():
            results.append(cache.get_or_compute("shared", compute))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert all(result is results[0] for result in results)

    def test_keys_independent(self):
        """Different keys compute separately."""
        cache = RuntimeCache()
        assert cache.get_or_compute("a", lambda: 1) == 1
        assert cache.get_or_compute("b", lambda: 2) == 2

    def test_failure_not_cached(self):
        """A compute that raises stores nothing and is retried."""
        cache = RuntimeCache()

        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_compute("k", fail)
        assert "k" not in cache
        assert cache.get_or_compute("k", lambda: "ok") == "ok"


class TestDensityMultiplierLayer:
    """Tests for the generated density multiplier token."""

    def test_layer_shape(self):
        tree = density_multiplier_layer(DensityLevel.COMPACT)
        leaf = tree.get(TokenPath.parse("density.multiplier"))
        assert leaf.value == 0.85
        assert leaf.type == "number"


class TestTokenPipeline:
    """Tests for TokenPipeline."""

    def test_base_set(self, minimal_library: Path):
        """Base layers resolve across the cascade."""
        pipeline = TokenPipeline(TokenStore(library_path=minimal_library))
        base = pipeline.base_set()
        assert base["color-text-primary"] == "#3b82f6"
        assert base["button-text"] == "#3b82f6"
        assert pipeline.base_set() is base

    def test_variant_sets(self, minimal_library: Path):
        """Theme and density overrides land in their variants only."""
        pipeline = TokenPipeline(TokenStore(library_path=minimal_library))
        dark = pipeline.resolved(Variant(ThemeMode.DARK, DensityLevel.DEFAULT))
        compact = pipeline.resolved(Variant(ThemeMode.LIGHT, DensityLevel.COMPACT))
        light = pipeline.resolved(Variant.default())

        assert dark["color-text-primary"] == "#93c5fd"
        assert light["color-text-primary"] == "#3b82f6"
        assert compact["gap"] == "6px"
        assert "gap" not in light
        assert len(pipeline.variant_sets()) == 9

    def test_override_does_not_re_resolve_dependents(self, minimal_library: Path):
        """Tokens derived from an overridden token keep their base value."""
        pipeline = TokenPipeline(TokenStore(library_path=minimal_library))
        dark = pipeline.resolved(Variant(ThemeMode.DARK, DensityLevel.DEFAULT))
        assert dark["button-text"] == "#3b82f6"

    def test_density_multiplier_per_variant(self, minimal_library: Path):
        """Every variant carries its density's multiplier."""
        pipeline = TokenPipeline(TokenStore(library_path=minimal_library))
        for variant, token_set in pipeline.variant_sets().items():
            assert token_set["density-multiplier"] == {
                DensityLevel.COMPACT: 0.85,
                DensityLevel.DEFAULT: 1.0,
                DensityLevel.COMFORTABLE: 1.15,
            }[variant.density]

    def test_undeclared_variant(self, minimal_library: Path):
        """Asking for a variant the pipeline does not build is a KeyError."""
        pipeline = TokenPipeline(
            TokenStore(library_path=minimal_library), variants=[Variant.default()]
        )
        with pytest.raises(KeyError):
            pipeline.resolved(Variant(ThemeMode.DARK, DensityLevel.COMPACT))

    def test_stylesheet(self, minimal_library: Path):
        """The stylesheet holds the root block and one block per variant."""
        pipeline = TokenPipeline(TokenStore(library_path=minimal_library))
        css = pipeline.stylesheet()
        assert css.startswith(":root {")
        assert css.count("[data-theme=") == 9
        assert '[data-theme="dark"][data-density="compact"] {' in css
        assert pipeline.stylesheet() is css

    def test_layered_stylesheet(self, minimal_library: Path):
        pipeline = TokenPipeline(
            TokenStore(library_path=minimal_library), emitter=StylesheetEmitter("tokens")
        )
        assert pipeline.stylesheet().startswith("@layer tokens {")

    def test_missing_layer_aborts(self, temp_dir: Path):
        """A failed build raises and caches nothing."""
        pipeline = TokenPipeline(TokenStore(library_path=temp_dir))
        with pytest.raises(SourceUnavailable):
            pipeline.stylesheet()
        assert "stylesheet" not in pipeline.cache
        assert "base" not in pipeline.cache

    def test_constants(self, minimal_library: Path):
        pipeline = TokenPipeline(TokenStore(library_path=minimal_library))
        assert [c.multiplier for c in pipeline.density_table()] == [0.85, 1.0, 1.15]
        assert pipeline.theme_modes() == ("light", "dark", "high-contrast")

    def test_types_module(self, minimal_library: Path):
        pipeline = TokenPipeline(TokenStore(library_path=minimal_library))
        source = pipeline.types_module()
        assert "export type ThemeMode = 'light' | 'dark' | 'high-contrast';" in source
        assert "  | 'color-text-primary'" in source


class TestBuiltinLibrary:
    """The shipped library builds end to end."""

    @pytest.fixture
    def pipeline(self, library_path: Path) -> TokenPipeline:
        return TokenPipeline(TokenStore(library_path=library_path))

    def test_builds(self, pipeline: TokenPipeline):
        css = pipeline.stylesheet()
        assert "--color-text-primary: #3b82f6;" in css
        assert "{color." not in css
        assert "{spacing." not in css

    def test_inline_theme_override(self, pipeline: TokenPipeline):
        """$extensions.theme values apply to their theme."""
        light = pipeline.resolved(Variant.default())
        dark = pipeline.resolved(Variant(ThemeMode.DARK, DensityLevel.DEFAULT))
        high_contrast = pipeline.resolved(Variant(ThemeMode.HIGH_CONTRAST, DensityLevel.DEFAULT))
        assert light["color-focus-ring"] == "#3b82f6"
        assert dark["color-focus-ring"] == "#60a5fa"
        assert high_contrast["color-focus-ring"] == "#fde047"

    def test_interpolated_values(self, pipeline: TokenPipeline):
        base = pipeline.base_set()
        assert base["space-inset-sm"] == "calc(8px * var(--density-multiplier))"
        assert base["button-transition"] == "background-color 120ms cubic-bezier(0.2, 0, 0, 1)"
        assert base["font-family-sans"] == 'Inter, system-ui, "Segoe UI", sans-serif'

    def test_density_override(self, pipeline: TokenPipeline):
        compact = pipeline.resolved(Variant(ThemeMode.LIGHT, DensityLevel.COMPACT))
        comfortable = pipeline.resolved(Variant(ThemeMode.LIGHT, DensityLevel.COMFORTABLE))
        assert compact["space-stack-md"] == "12px"
        assert comfortable["space-stack-md"] == "24px"
        assert pipeline.resolved(Variant.default())["space-stack-md"] == "16px"
