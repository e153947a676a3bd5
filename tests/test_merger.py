"""
Tests for extension chain merging.

Tests cover:
- Append semantics for slots and variant values
- The explicit $replace marker
- Compound rule concatenation and default overrides
- Input immutability and error attribution
"""

import copy

import pytest

from chuk_mcp_variants.errors import ConfigError
from chuk_mcp_variants.models import parse_document
from chuk_mcp_variants.variants import merge


class TestMergeAppend:
    """Tests for the default append semantics."""

    def test_single_layer(self, card_document: dict):
        """Merging one layer gives the parsed layer's content."""
        merged = merge([card_document])
        parsed = parse_document(card_document)
        assert merged.slot_names == parsed.slot_names
        assert merged.variants == parsed.variants
        assert merged.default_variants == parsed.default_variants

    def test_empty_chain(self):
        """An empty chain merges to an empty document."""
        merged = merge([])
        assert merged.slot_names == ["base"]
        assert merged.variants == {}

    def test_slots_append(self):
        """Later slot classes are appended."""
        merged = merge([{"slots": {"base": "a b"}}, {"slots": {"base": "c", "icon": "d"}}])
        assert merged.base_tokens("base") == ("a", "b", "c")
        assert merged.base_tokens("icon") == ("d",)

    def test_variant_values_append(self):
        """Values present in both layers append; new values are added."""
        merged = merge(
            [
                {"variants": {"size": {"sm": "a", "md": "b"}}},
                {"variants": {"size": {"md": {"base": "c", "icon": "d"}, "lg": "e"}}},
            ]
        )
        size = merged.variants["size"]
        assert list(size) == ["sm", "md", "lg"]
        assert size["md"].classes == {"base": ("b", "c"), "icon": ("d",)}
        assert size["lg"].classes == {"base": ("e",)}

    def test_new_variants_added(self):
        """Variants from later layers are added after earlier ones."""
        merged = merge([{"variants": {"size": {"sm": "a"}}}, {"variants": {"tone": {"x": "b"}}}])
        assert merged.variant_keys == ["size", "tone"]

    def test_compound_rules_concatenate(self):
        """Compound rules keep chain order."""
        merged = merge(
            [
                {"compoundVariants": [{"size": "sm", "class": "a"}]},
                {"compoundVariants": [{"size": "md", "class": "b"}]},
            ]
        )
        assert [rule.fragment.tokens("base") for rule in merged.compound_variants] == [
            ("a",),
            ("b",),
        ]

    def test_defaults_override_per_key(self):
        """Later defaults win key by key."""
        merged = merge(
            [
                {"defaultVariants": {"size": "sm", "tone": "plain"}},
                {"defaultVariants": {"size": "lg"}},
            ]
        )
        assert merged.default_variants == {"size": "lg", "tone": "plain"}

    def test_metadata_from_last_layer(self):
        """Name and description come from the most specific layer that sets them."""
        merged = merge([{"name": "button", "description": "A"}, {"name": "icon-button"}])
        assert merged.name == "icon-button"
        assert merged.description == "A"

    def test_boolean_variants_recomputed(self):
        """A later value can turn a boolean variant into a regular one."""
        first = merge([{"variants": {"block": {"true": "w-full"}}}])
        assert first.is_boolean("block")
        second = merge(
            [
                {"variants": {"block": {"true": "w-full"}}},
                {"variants": {"block": {"auto": "w-auto"}}},
            ]
        )
        assert not second.is_boolean("block")

    def test_inputs_not_modified(self, card_document: dict):
        """Merging never mutates the input layers."""
        before = copy.deepcopy(card_document)
        extension = {"slots": {"base": "shadow"}, "variants": {"tone": {"plain": "text-black"}}}
        merge([card_document, extension])
        assert card_document == before
        assert extension == {
            "slots": {"base": "shadow"},
            "variants": {"tone": {"plain": "text-black"}},
        }

    def test_documents_and_dicts_mix(self):
        """Parsed documents and raw dicts can share a chain."""
        merged = merge([parse_document({"slots": {"base": "a"}}), {"slots": {"base": "b"}}])
        assert merged.base_tokens("base") == ("a", "b")


class TestMergeReplace:
    """Tests for the explicit $replace marker."""

    def test_replace_slot(self):
        """$replace on a slot discards earlier classes for that slot."""
        merged = merge(
            [
                {"slots": {"base": "a b", "icon": "c"}},
                {"slots": {"base": {"$replace": "x"}}},
            ]
        )
        assert merged.base_tokens("base") == ("x",)
        assert merged.base_tokens("icon") == ("c",)

    def test_replace_variant_value(self):
        """$replace on a value resets the whole value entry."""
        merged = merge(
            [
                {"variants": {"size": {"md": {"base": "a", "icon": "b"}}}},
                {"variants": {"size": {"md": {"$replace": "x"}}}},
            ]
        )
        assert merged.variants["size"]["md"].classes == {"base": ("x",)}

    def test_append_after_replace(self):
        """Layers after a replace append again."""
        merged = merge(
            [
                {"slots": {"base": "a"}},
                {"slots": {"base": {"$replace": "b"}}},
                {"slots": {"base": "c"}},
            ]
        )
        assert merged.base_tokens("base") == ("b", "c")

    def test_replace_with_empty(self):
        """Replacing with an empty spec clears the slot."""
        merged = merge([{"slots": {"base": "a"}}, {"slots": {"base": {"$replace": ""}}}])
        assert merged.base_tokens("base") == ()


class TestMergeErrors:
    """Tests for error attribution."""

    def test_error_names_layer(self):
        """A malformed layer is reported with its chain index."""
        with pytest.raises(ConfigError) as exc:
            merge([{"slots": {"base": "a"}}, {"variants": {"size": {"md": 3}}}])
        assert exc.value.layer == 1
        assert exc.value.path == "variants.size.md"
        assert "layer 1" in str(exc.value)

    def test_first_layer_index(self):
        """Layer indices start at zero."""
        with pytest.raises(ConfigError) as exc:
            merge([{"slotz": {}}])
        assert exc.value.layer == 0
