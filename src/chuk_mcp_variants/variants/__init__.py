"""
Variant resolution - merge, match and render style documents.
"""

from chuk_mcp_variants.variants.component import (
    SlotRenderer,
    VariantComponent,
    create_variants,
)
from chuk_mcp_variants.variants.matcher import MatchedFragment, effective_selections, match
from chuk_mcp_variants.variants.merger import merge
from chuk_mcp_variants.variants.renderer import render, render_slot
from chuk_mcp_variants.variants.validator import (
    DocumentValidator,
    ValidationResult,
    ValidationSeverity,
    validate_document,
)

__all__ = [
    "DocumentValidator",
    "MatchedFragment",
    "SlotRenderer",
    "ValidationResult",
    "ValidationSeverity",
    "VariantComponent",
    "create_variants",
    "effective_selections",
    "match",
    "merge",
    "render",
    "render_slot",
    "validate_document",
]
