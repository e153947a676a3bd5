"""
Style document models - the declarative description of a component.

A document lists base classes per slot, variant tables, compound rules
and default selections. Documents are immutable; merging builds new ones.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_variants.constants import (
    BASE_SLOT,
    BOOLEAN_VALUES,
    REPLACE_MARKER,
    MergeMode,
    SchemaVersion,
)


class ClassFragment(BaseModel):
    """
    A class spec reduced to ordered tokens per slot.

    The mode tells the merger whether the fragment extends or replaces
    what earlier layers declared for the same key.
    """

    classes: dict[str, tuple[str, ...]] = Field(
        default_factory=dict,
        description="Ordered class tokens per slot",
    )
    mode: MergeMode = Field(default=MergeMode.APPEND, description="Append or replace")

    model_config = {"frozen": True}

    @property
    def slot_names(self) -> list[str]:
        """Slots this fragment touches, in declaration order."""
        return list(self.classes)

    @property
    def is_empty(self) -> bool:
        """True if no slot carries any token."""
        return not any(self.classes.values())

    def tokens(self, slot: str) -> tuple[str, ...]:
        """Tokens for a slot (empty if the fragment doesn't touch it)."""
        return self.classes.get(slot, ())

    def to_spec(self) -> Any:
        """Convert back to the raw class spec form."""
        if set(self.classes) <= {BASE_SLOT}:
            spec: Any = " ".join(self.classes.get(BASE_SLOT, ()))
        else:
            spec = {slot: " ".join(tokens) for slot, tokens in self.classes.items()}
        if self.mode == MergeMode.REPLACE:
            return {REPLACE_MARKER: spec}
        return spec


class CompoundRule(BaseModel):
    """
    Classes applied when several variant values coincide.

    Each condition accepts a set of values; the rule fires when every
    condition holds.
    """

    conditions: dict[str, tuple[str, ...]] = Field(
        default_factory=dict,
        description="Accepted values per variant",
    )
    fragment: ClassFragment = Field(default_factory=ClassFragment)

    model_config = {"frozen": True}

    def matches(self, selections: dict[str, str | None]) -> bool:
        """
        Check whether the rule fires for a set of effective selections.

        A missing selection behaves like "false", so conditions on
        boolean states work without explicit selections.
        """
        for variant, accepted in self.conditions.items():
            value = selections.get(variant)
            if value is None:
                value = "false"
            if value not in accepted:
                return False
        return True

    def to_spec(self) -> dict[str, Any]:
        """Convert back to the raw compoundVariants entry."""
        spec: dict[str, Any] = {
            variant: accepted[0] if len(accepted) == 1 else list(accepted)
            for variant, accepted in self.conditions.items()
        }
        spec["class"] = self.fragment.to_spec()
        return spec


class StyleDocument(BaseModel):
    """
    A style document.

    Documents are plain data: they're produced by a generator or
    written by hand, then merged into an effective document and
    resolved against variant selections.
    """

    # Metadata
    schema_version: SchemaVersion = Field("variants/v1", alias="schema")
    name: str | None = Field(default=None, description="Document name")
    description: str = Field("", description="Document description")
    extends: tuple[str, ...] = Field(
        default=(),
        description="Names of documents this one extends (loader only)",
    )

    # Content
    slots: dict[str, ClassFragment] = Field(default_factory=dict)
    variants: dict[str, dict[str, ClassFragment]] = Field(default_factory=dict)
    compound_variants: list[CompoundRule] = Field(default_factory=list)
    default_variants: dict[str, str | None] = Field(default_factory=dict)

    # Derived once at parse/merge time
    boolean_variants: frozenset[str] = Field(default_factory=frozenset)

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def slot_names(self) -> list[str]:
        """
        All slots of the document.

        The base slot comes first, then declared slots, then slots only
        referenced from variants or compound rules.
        """
        names: dict[str, None] = {BASE_SLOT: None}
        for slot, fragment in self.slots.items():
            names[slot] = None
            names.update(dict.fromkeys(fragment.slot_names))
        for table in self.variants.values():
            for fragment in table.values():
                names.update(dict.fromkeys(fragment.slot_names))
        for rule in self.compound_variants:
            names.update(dict.fromkeys(rule.fragment.slot_names))
        return list(names)

    @property
    def variant_keys(self) -> list[str]:
        """Variant names in declaration order."""
        return list(self.variants)

    def is_boolean(self, variant: str) -> bool:
        """Check if a variant only declares "true"/"false" values."""
        return variant in self.boolean_variants

    def base_tokens(self, slot: str) -> tuple[str, ...]:
        """Base tokens for a slot, across every slots entry touching it."""
        tokens: list[str] = []
        for fragment in self.slots.values():
            tokens.extend(fragment.tokens(slot))
        return tuple(tokens)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a YAML-serializable dictionary."""
        data: dict[str, Any] = {"schema": self.schema_version}
        if self.name:
            data["name"] = self.name
        if self.description:
            data["description"] = self.description
        if self.extends:
            data["extends"] = list(self.extends)
        data["slots"] = {slot: _slot_spec(fragment, slot) for slot, fragment in self.slots.items()}
        data["variants"] = {
            variant: {value: fragment.to_spec() for value, fragment in table.items()}
            for variant, table in self.variants.items()
        }
        data["compoundVariants"] = [rule.to_spec() for rule in self.compound_variants]
        data["defaultVariants"] = dict(self.default_variants)
        return data


def _slot_spec(fragment: ClassFragment, slot: str) -> Any:
    spec: Any
    if fragment.slot_names in ([], [slot]):
        spec = " ".join(fragment.tokens(slot))
    else:
        spec = {name: " ".join(tokens) for name, tokens in fragment.classes.items()}
    if fragment.mode == MergeMode.REPLACE:
        return {REPLACE_MARKER: spec}
    return spec


def detect_boolean_variants(variants: dict[str, dict[str, ClassFragment]]) -> frozenset[str]:
    """Variants whose only values are "true" and/or "false"."""
    return frozenset(
        name for name, table in variants.items() if table and set(table) <= BOOLEAN_VALUES
    )


class DocumentMetadata(BaseModel):
    """Lightweight metadata for listing documents."""

    name: str
    description: str
    slots: list[str]
    variants: dict[str, list[str]]
    extends: list[str]

    model_config = {"frozen": True}

    @classmethod
    def from_document(cls, document: StyleDocument, name: str | None = None) -> DocumentMetadata:
        """Create metadata from a document."""
        return cls(
            name=name or document.name or "unknown",
            description=document.description,
            slots=document.slot_names,
            variants={variant: list(table) for variant, table in document.variants.items()},
            extends=list(document.extends),
        )
