"""
chuk-mcp-variants - declarative component style variants.

    from chuk_mcp_variants import create_variants

    button = create_variants(
        {
            "slots": {"base": "font-medium", "icon": "size-4"},
            "variants": {"size": {"sm": "px-2", "lg": {"base": "px-4", "icon": "size-6"}}},
            "defaultVariants": {"size": "sm"},
        }
    )
    button(size="lg")  # {"base": "font-medium px-4", "icon": "size-6"}
"""

from chuk_mcp_variants.classes import ClassClassifier, ClassMerger, classify, dedupe, merge_classes
from chuk_mcp_variants.errors import ConfigError, VariantsError
from chuk_mcp_variants.models import EngineConfig, StyleDocument, parse_document
from chuk_mcp_variants.styles import StyleDocumentLoader
from chuk_mcp_variants.variants import (
    SlotRenderer,
    VariantComponent,
    create_variants,
    match,
    merge,
    render,
    validate_document,
)

__version__ = "0.1.0"

__all__ = [
    "ClassClassifier",
    "ClassMerger",
    "ConfigError",
    "EngineConfig",
    "SlotRenderer",
    "StyleDocument",
    "StyleDocumentLoader",
    "VariantComponent",
    "VariantsError",
    "classify",
    "create_variants",
    "dedupe",
    "match",
    "merge",
    "merge_classes",
    "parse_document",
    "render",
    "validate_document",
]
