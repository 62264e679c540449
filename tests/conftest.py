"""
Pytest configuration and shared fixtures.
"""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in token library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_tokens" / "library"


@pytest.fixture
def write_document(temp_dir: Path):
    """Write a JSON document under the temp dir and return its path."""

    def _write(relative: str, data: Any) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def minimal_library(write_document, temp_dir: Path) -> Path:
    """A three-layer library with one theme and one density override."""
    write_document(
        "primitive/color.json",
        {"color": {"$type": "color", "blue": {"500": {"$value": "#3b82f6"}}}},
    )
    write_document(
        "semantic/color.json",
        {"color": {"text": {"primary": {"$value": "{color.blue.500}"}}}},
    )
    write_document(
        "component/button.json",
        {"button": {"text": {"$value": "{color.text.primary}"}}},
    )
    write_document(
        "themes/dark.json",
        {"color": {"text": {"primary": {"$value": "#93c5fd"}}}},
    )
    write_document(
        "density/compact.json",
        {"gap": {"$value": "6px", "$type": "dimension"}},
    )
    return temp_dir
