"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in style document library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_variants" / "styles" / "library"


@pytest.fixture
def card_document() -> dict:
    """A small multi-slot document used across tests."""
    return {
        "name": "card",
        "slots": {
            "base": "flex flex-col rounded-md",
            "header": "px-4 py-2",
            "body": "p-4",
        },
        "variants": {
            "tone": {
                "plain": "bg-white",
                "inverted": {"base": "bg-gray-900", "header": "text-white"},
            },
            "size": {
                "sm": {"header": "text-sm", "body": "p-2"},
                "lg": {"header": "text-lg", "body": "p-6"},
            },
            "bordered": {"true": "border"},
        },
        "compoundVariants": [
            {"tone": "inverted", "bordered": True, "class": "border-gray-700"},
        ],
        "defaultVariants": {"tone": "plain", "size": "sm"},
    }
