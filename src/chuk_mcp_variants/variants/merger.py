"""
Layer merger - composes an extension chain into one effective document.

Merge semantics per field:
- slots: token lists appended, or replaced when marked "$replace"
- variants: value token lists appended (or whole value entry replaced);
  new variants and values are added in first-appearance order
- compoundVariants: concatenated in chain order
- defaultVariants: overwritten key by key
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from chuk_mcp_variants.constants import MergeMode
from chuk_mcp_variants.models.document import (
    ClassFragment,
    CompoundRule,
    StyleDocument,
    detect_boolean_variants,
)
from chuk_mcp_variants.models.parser import parse_document

SlotTokens = dict[str, list[str]]


def _apply_slot_fragment(target: SlotTokens, fragment: ClassFragment) -> None:
    """Append (or replace) a fragment's tokens slot by slot."""
    for slot, tokens in fragment.classes.items():
        if fragment.mode == MergeMode.REPLACE:
            target[slot] = list(tokens)
        else:
            target.setdefault(slot, []).extend(tokens)


def _apply_value_fragment(
    table: dict[str, SlotTokens], value: str, fragment: ClassFragment
) -> None:
    """Append to a variant value entry, or replace the whole entry."""
    if fragment.mode == MergeMode.REPLACE or value not in table:
        table[value] = {}
    entry = table[value]
    for slot, tokens in fragment.classes.items():
        entry.setdefault(slot, []).extend(tokens)


def _freeze(tokens: SlotTokens) -> ClassFragment:
    return ClassFragment(classes={slot: tuple(values) for slot, values in tokens.items()})


def merge(chain: Iterable[StyleDocument | dict[str, Any]]) -> StyleDocument:
    """
    Merge an extension chain, least specific layer first.

    Args:
        chain: Documents or raw document dicts

    Returns:
        A new effective document; the inputs are not modified

    Raises:
        ConfigError: If a raw layer is malformed (names the layer index)
    """
    slots: dict[str, SlotTokens] = {}
    variants: dict[str, dict[str, SlotTokens]] = {}
    compound: list[CompoundRule] = []
    defaults: dict[str, str | None] = {}
    name: str | None = None
    description = ""
    extends: tuple[str, ...] = ()

    for index, layer in enumerate(chain):
        document = parse_document(layer, layer=index)

        for slot, fragment in document.slots.items():
            # Entries are keyed by declared slot so "$replace" on one slot
            # leaves other entries touching it intact
            _apply_slot_fragment(slots.setdefault(slot, {}), fragment)

        for variant, table in document.variants.items():
            merged_table = variants.setdefault(variant, {})
            for value, fragment in table.items():
                _apply_value_fragment(merged_table, value, fragment)

        compound.extend(document.compound_variants)
        defaults.update(document.default_variants)

        if document.name:
            name = document.name
        if document.description:
            description = document.description
        if document.extends:
            extends = document.extends

    merged_variants = {
        variant: {value: _freeze(tokens) for value, tokens in table.items()}
        for variant, table in variants.items()
    }
    return StyleDocument(
        name=name,
        description=description,
        extends=extends,
        slots={slot: _freeze(tokens) for slot, tokens in slots.items()},
        variants=merged_variants,
        compound_variants=compound,
        default_variants=defaults,
        boolean_variants=detect_boolean_variants(merged_variants),
    )
