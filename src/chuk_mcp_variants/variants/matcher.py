"""
Variant matcher - finds the class fragments that apply to a selection.

Per slot, fragments are collected in a fixed order:
1. base classes
2. variant values, in variant declaration order
3. every firing compound rule, in declaration order
4. caller-supplied extra classes

Later fragments win class conflicts once deduplicated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chuk_mcp_variants.constants import BASE_SLOT, CLASS_KEYS, MatchStage
from chuk_mcp_variants.models.document import StyleDocument
from chuk_mcp_variants.models.parser import normalize_value, split_classes

Selections = Mapping[str, Any]


@dataclass(frozen=True)
class MatchedFragment:
    """Tokens one stage contributed to one slot."""

    stage: MatchStage
    source: str  # e.g. "variants.size.md", "compoundVariants[2]"
    tokens: tuple[str, ...]


def effective_selections(
    document: StyleDocument,
    selections: Selections | None,
) -> dict[str, str | None]:
    """
    Fill in defaults and normalize selection values.

    Explicit None means "use the default". Variants not declared by the
    document are kept (compound rules may test them) but never error.
    Boolean variants resolve a falsy or missing selection to "false".

    Args:
        document: Merged document
        selections: Caller selections

    Returns:
        Variant name to normalized value (None when nothing is selected)
    """
    result: dict[str, str | None] = dict(document.default_variants)
    for variant, value in (selections or {}).items():
        if variant in CLASS_KEYS or value is None:
            continue
        if document.is_boolean(variant) and not value:
            result[variant] = "false"
        elif isinstance(value, (str, int, float)):
            result[variant] = normalize_value(value, variant)
        # Other values never name a variant value and are ignored

    for variant in document.boolean_variants:
        if not result.get(variant):
            result[variant] = "false"
    return result


def _extra_classes(selections: Selections | None) -> list[str]:
    tokens: list[str] = []
    for key in CLASS_KEYS:
        if selections and key in selections:
            tokens.extend(split_classes(selections[key], key))
    return tokens


def match(
    document: StyleDocument,
    selections: Selections | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, list[MatchedFragment]]:
    """
    Collect the fragments that apply to each slot.

    Args:
        document: Merged document
        selections: Variant selections; "class"/"className" add classes to base
        overrides: Per-slot extra classes (string or list), applied last

    Returns:
        Slot name to ordered fragments (every slot present, possibly empty)
    """
    effective = effective_selections(document, selections)
    slots = document.slot_names
    matched: dict[str, list[MatchedFragment]] = {slot: [] for slot in slots}

    def add(slot: str, stage: MatchStage, source: str, tokens: tuple[str, ...]) -> None:
        if tokens:
            matched.setdefault(slot, []).append(MatchedFragment(stage, source, tokens))

    # 1. Base
    for slot in slots:
        add(slot, MatchStage.BASE, f"slots.{slot}", document.base_tokens(slot))

    # 2. Variants
    for variant, table in document.variants.items():
        value = effective.get(variant)
        if value is None or value not in table:
            continue
        fragment = table[value]
        for slot, tokens in fragment.classes.items():
            add(slot, MatchStage.VARIANT, f"variants.{variant}.{value}", tokens)

    # 3. Compound rules - all firing rules apply
    for index, rule in enumerate(document.compound_variants):
        if not rule.matches(effective):
            continue
        for slot, tokens in rule.fragment.classes.items():
            add(slot, MatchStage.COMPOUND, f"compoundVariants[{index}]", tokens)

    # 4. Caller extras
    extra = _extra_classes(selections)
    add(BASE_SLOT, MatchStage.OVERRIDE, "class", tuple(extra))
    for slot, classes in (overrides or {}).items():
        add(slot, MatchStage.OVERRIDE, f"overrides.{slot}", tuple(split_classes(classes, slot)))

    return matched


def flatten(fragments: list[MatchedFragment]) -> list[str]:
    """Concatenate fragment tokens in order."""
    return [token for fragment in fragments for token in fragment.tokens]
