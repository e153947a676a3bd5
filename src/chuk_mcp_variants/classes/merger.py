"""
Class list deduplicator.

Later classes win: for every conflict key only the last-declared token
survives, and survivors keep their relative order. Tokens that can't be
classified are always kept.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from chuk_mcp_variants.classes.classifier import (
    ClassClassifier,
    ConflictKey,
    default_classifier,
)
from chuk_mcp_variants.models.parser import split_classes


class ClassMerger:
    """
    Deduplicates conflicting utility classes.

    The merger scans from the end: a token is dropped if a later token
    already claimed its conflict key, or if a later token of a broader
    group (like "p-4" over an earlier "px-2") covers it.
    """

    def __init__(self, classifier: ClassClassifier | None = None, enabled: bool = True):
        """
        Initialize the merger.

        Args:
            classifier: Classifier to use (built-in table by default)
            enabled: If False only exact duplicates are collapsed
        """
        self.classifier = classifier or default_classifier
        self.enabled = enabled

    def dedupe(self, tokens: Iterable[str]) -> list[str]:
        """
        Remove tokens superseded by later ones.

        Args:
            tokens: Class tokens in declaration order

        Returns:
            Surviving tokens in their original relative order
        """
        ordered = list(tokens)
        seen_tokens: set[str] = set()
        claimed: set[ConflictKey] = set()
        kept: list[str] = []

        for token in reversed(ordered):
            if token in seen_tokens:
                continue
            seen_tokens.add(token)

            if self.enabled:
                key = self.classifier.classify(token)
                if key.is_mergeable:
                    if key in claimed:
                        continue
                    claimed.add(key)
                    for group in self.classifier.superseded_groups(key.group):
                        claimed.add(key.with_group(group))

            kept.append(token)

        kept.reverse()
        return kept

    def merge(self, *classes: Any) -> str:
        """
        Join class strings/lists and deduplicate them.

        Args:
            classes: Class strings, lists of strings, or None/False to skip

        Returns:
            Space-separated class string
        """
        return " ".join(self.dedupe(split_classes(list(classes))))


default_merger = ClassMerger()


def dedupe(tokens: Iterable[str]) -> list[str]:
    """Deduplicate tokens with the built-in conflict table."""
    return default_merger.dedupe(tokens)


def merge_classes(*classes: Any) -> str:
    """Join and deduplicate class strings with the built-in conflict table."""
    return default_merger.merge(*classes)
