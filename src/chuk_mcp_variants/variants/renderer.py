"""
Slot renderer - turns matched fragments into final class strings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from chuk_mcp_variants.classes.merger import ClassMerger, default_merger
from chuk_mcp_variants.models.document import StyleDocument
from chuk_mcp_variants.variants.matcher import MatchedFragment, Selections, flatten, match


def render_fragments(
    matched: Mapping[str, list[MatchedFragment]],
    merger: ClassMerger | None = None,
) -> dict[str, str]:
    """Deduplicate and join matched fragments per slot."""
    merger = merger or default_merger
    return {
        slot: " ".join(merger.dedupe(flatten(fragments))) for slot, fragments in matched.items()
    }


def render(
    document: StyleDocument,
    selections: Selections | None = None,
    per_slot_overrides: Mapping[str, Any] | None = None,
    merger: ClassMerger | None = None,
) -> dict[str, str]:
    """
    Resolve every slot of a document to its final class string.

    Args:
        document: Merged document
        selections: Variant selections ("class"/"className" extend base)
        per_slot_overrides: Extra classes per slot, applied last
        merger: Deduplicator (built-in conflict table by default)

    Returns:
        Slot name to class string; slots with no classes map to ""
    """
    return render_fragments(match(document, selections, per_slot_overrides), merger)


def render_slot(
    document: StyleDocument,
    slot: str,
    selections: Selections | None = None,
    extra: Any = None,
    merger: ClassMerger | None = None,
) -> str:
    """
    Resolve a single slot.

    Args:
        document: Merged document
        slot: Slot name (unknown slots render "" plus extras)
        selections: Variant selections
        extra: Extra classes for this slot, applied last
        merger: Deduplicator

    Returns:
        The slot's class string
    """
    overrides = {slot: extra} if extra is not None else None
    matched = match(document, selections, overrides)
    return render_fragments({slot: matched.get(slot, [])}, merger)[slot]
