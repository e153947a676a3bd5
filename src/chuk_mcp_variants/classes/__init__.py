"""
Utility class handling - conflict classification and deduplication.
"""

from chuk_mcp_variants.classes.classifier import (
    ClassClassifier,
    ConflictKey,
    classify,
    conflict_group,
    parse_token,
)
from chuk_mcp_variants.classes.merger import ClassMerger, dedupe, merge_classes

__all__ = [
    "ClassClassifier",
    "ClassMerger",
    "ConflictKey",
    "classify",
    "conflict_group",
    "dedupe",
    "merge_classes",
    "parse_token",
]
