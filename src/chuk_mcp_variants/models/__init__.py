"""
Pydantic models for the variant system.

This module provides:
- StyleDocument: Declarative description of a component's styles
- ClassFragment: Class tokens per slot
- CompoundRule: Classes applied when variant values coincide
- EngineConfig: Options for class merging and memoization
- parse_document: Raw data to StyleDocument
"""

from chuk_mcp_variants.models.config import EngineConfig
from chuk_mcp_variants.models.document import (
    ClassFragment,
    CompoundRule,
    DocumentMetadata,
    StyleDocument,
)
from chuk_mcp_variants.models.parser import (
    normalize_value,
    parse_class_spec,
    parse_document,
    split_classes,
)

__all__ = [
    "ClassFragment",
    "CompoundRule",
    "DocumentMetadata",
    "EngineConfig",
    "StyleDocument",
    "normalize_value",
    "parse_class_spec",
    "parse_document",
    "split_classes",
]
