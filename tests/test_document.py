"""
Tests for style document models and parsing.

Tests cover:
- Class spec reduction (strings, slot maps, lists, replace marker)
- Document parsing, aliases and the base shorthand
- Boolean variant detection
- Error reporting with layer and key path
"""

import pytest

from chuk_mcp_variants.constants import MergeMode
from chuk_mcp_variants.errors import ConfigError, VariantsError
from chuk_mcp_variants.models import (
    ClassFragment,
    CompoundRule,
    DocumentMetadata,
    StyleDocument,
    normalize_value,
    parse_class_spec,
    parse_document,
    split_classes,
)


class TestNormalizeValue:
    """Tests for selection value normalization."""

    def test_booleans(self):
        """Booleans become 'true'/'false'."""
        assert normalize_value(True) == "true"
        assert normalize_value(False) == "false"

    def test_scalars(self):
        """Strings and numbers become strings."""
        assert normalize_value("md") == "md"
        assert normalize_value(2) == "2"

    def test_rejects_containers(self):
        """Lists can't name a variant value."""
        with pytest.raises(ConfigError):
            normalize_value(["a"])


class TestSplitClasses:
    """Tests for class string splitting."""

    def test_whitespace(self):
        """Any whitespace separates tokens."""
        assert split_classes("  a\tb\n c ") == ["a", "b", "c"]

    def test_nested_lists_and_falsy(self):
        """Lists flatten; None and False are skipped."""
        assert split_classes(["a b", None, ["c", False], "d"]) == ["a", "b", "c", "d"]

    def test_rejects_numbers(self):
        """Non-string tokens are config errors."""
        with pytest.raises(ConfigError):
            split_classes(["a", 3])


class TestParseClassSpec:
    """Tests for class spec reduction."""

    def test_string_targets_default_slot(self):
        """Bare strings apply to the default slot."""
        fragment = parse_class_spec("a b")
        assert fragment.classes == {"base": ("a", "b")}
        assert fragment.mode == MergeMode.APPEND

    def test_slot_mapping(self):
        """Mappings address slots directly."""
        fragment = parse_class_spec({"base": "a", "icon": ["b", "c"]})
        assert fragment.classes == {"base": ("a",), "icon": ("b", "c")}

    def test_list_of_specs(self):
        """Lists mix strings and slot mappings."""
        fragment = parse_class_spec(["a", {"icon": "b"}, "c"], "label")
        assert fragment.classes == {"label": ("a", "c"), "icon": ("b",)}

    def test_several_default_slots(self):
        """Bare strings can target several slots at once."""
        fragment = parse_class_spec("a", ("base", "icon"))
        assert fragment.classes == {"base": ("a",), "icon": ("a",)}

    def test_replace_marker(self):
        """{'$replace': spec} switches to replace mode."""
        fragment = parse_class_spec({"$replace": "x"})
        assert fragment.mode == MergeMode.REPLACE
        assert fragment.classes == {"base": ("x",)}

    def test_replace_mixed_with_slots(self):
        """$replace must stand alone."""
        with pytest.raises(ConfigError) as exc:
            parse_class_spec({"$replace": "x", "icon": "y"}, path="slots.base")
        assert exc.value.path == "slots.base"

    def test_reserved_slot_name(self):
        """Other $ keys are reserved."""
        with pytest.raises(ConfigError) as exc:
            parse_class_spec({"$merge": "x"}, path="variants.size.md")
        assert exc.value.path == "variants.size.md.$merge"

    def test_bad_type(self):
        """Numbers aren't class specs."""
        with pytest.raises(ConfigError):
            parse_class_spec(42)


class TestParseDocument:
    """Tests for whole-document parsing."""

    def test_minimal(self):
        """An empty document has only the base slot."""
        document = parse_document({})
        assert document.slot_names == ["base"]
        assert document.variants == {}

    def test_none_is_empty(self):
        """An empty YAML file parses to an empty document."""
        assert parse_document(None).slot_names == ["base"]

    def test_document_is_returned_unchanged(self):
        """Already-parsed documents pass through."""
        document = parse_document({"slots": {"base": "a"}})
        assert parse_document(document) is document

    def test_slots_and_variants(self, card_document: dict):
        """Slots, variants, compound rules and defaults are parsed."""
        document = parse_document(card_document)
        assert document.name == "card"
        assert document.slot_names == ["base", "header", "body"]
        assert document.variant_keys == ["tone", "size", "bordered"]
        assert document.variants["tone"]["inverted"].classes == {
            "base": ("bg-gray-900",),
            "header": ("text-white",),
        }
        assert document.default_variants == {"tone": "plain", "size": "sm"}
        assert len(document.compound_variants) == 1

    def test_implicit_slots(self):
        """Slots referenced only by variants are added."""
        document = parse_document(
            {
                "slots": {"base": "a"},
                "variants": {"size": {"sm": {"icon": "b"}}},
                "compoundVariants": [{"size": "sm", "class": {"label": "c"}}],
            }
        )
        assert document.slot_names == ["base", "icon", "label"]

    def test_base_shorthand(self):
        """A top-level 'base' is prepended to slots.base."""
        document = parse_document({"base": "a", "slots": {"base": "b", "icon": "c"}})
        assert document.base_tokens("base") == ("a", "b")
        assert document.base_tokens("icon") == ("c",)

    def test_base_shorthand_keeps_slot_mapping(self):
        """Other slots declared inside slots.base survive the shorthand."""
        document = parse_document({"base": "x", "slots": {"base": {"base": "y", "icon": "z"}}})
        assert document.slot_names == ["base", "icon"]
        assert document.base_tokens("base") == ("x", "y")
        assert document.base_tokens("icon") == ("z",)

    def test_base_shorthand_with_replace(self):
        """Both halves may replace together."""
        document = parse_document(
            {"base": {"$replace": "x"}, "slots": {"base": {"$replace": {"icon": "z"}}}}
        )
        fragment = document.slots["base"]
        assert fragment.mode == MergeMode.REPLACE
        assert fragment.classes == {"base": ("x",), "icon": ("z",)}

    def test_snake_case_aliases(self):
        """compound_variants and default_variants are accepted."""
        document = parse_document(
            {
                "variants": {"size": {"sm": "a"}},
                "compound_variants": [{"size": "sm", "class": "b"}],
                "default_variants": {"size": "sm"},
            }
        )
        assert len(document.compound_variants) == 1
        assert document.default_variants == {"size": "sm"}

    def test_boolean_keys_normalize(self):
        """YAML true/false keys become 'true'/'false'."""
        document = parse_document({"variants": {"disabled": {True: "opacity-50", False: ""}}})
        assert set(document.variants["disabled"]) == {"true", "false"}
        assert document.is_boolean("disabled")

    def test_boolean_detection(self):
        """Only true/false tables are boolean."""
        document = parse_document(
            {"variants": {"block": {"true": "w-full"}, "size": {"sm": "a", "true": "b"}}}
        )
        assert document.boolean_variants == frozenset({"block"})

    def test_compound_rule_values(self):
        """Conditions accept one value or a list; class or className."""
        document = parse_document(
            {
                "compoundVariants": [
                    {"size": ["sm", "md"], "disabled": True, "className": "x"},
                ]
            }
        )
        rule = document.compound_variants[0]
        assert rule.conditions == {"size": ("sm", "md"), "disabled": ("true",)}
        assert rule.fragment.classes == {"base": ("x",)}

    def test_compound_rule_slots(self):
        """A rule's 'slots' key retargets bare strings."""
        document = parse_document(
            {"compoundVariants": [{"size": "sm", "slots": ["icon", "label"], "class": "x"}]}
        )
        assert document.compound_variants[0].fragment.classes == {
            "icon": ("x",),
            "label": ("x",),
        }

    def test_compound_slots_section(self):
        """compoundSlots entries are compound rules that name their slots."""
        document = parse_document({"compoundSlots": [{"slots": ["a", "b"], "class": "x"}]})
        rule = document.compound_variants[0]
        assert rule.conditions == {}
        assert rule.fragment.slot_names == ["a", "b"]

    def test_compound_slots_require_slots(self):
        """compoundSlots entries without slots are rejected."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"compoundSlots": [{"class": "x"}]})
        assert exc.value.path == "compoundSlots[0].slots"

    def test_extends(self):
        """extends accepts a name or a list of names."""
        assert parse_document({"extends": "button"}).extends == ("button",)
        assert parse_document({"extends": ["a", "b"]}).extends == ("a", "b")


class TestParseErrors:
    """Tests for malformed documents."""

    def test_not_a_mapping(self):
        """Documents must be mappings."""
        with pytest.raises(ConfigError):
            parse_document(["slots"])

    def test_unknown_key(self):
        """Unknown top-level keys are rejected."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"slot": {}})
        assert exc.value.path == "slot"

    def test_base_shorthand_mode_conflict(self):
        """'base' and 'slots.base' can't disagree on replacing."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"base": {"$replace": "x"}, "slots": {"base": "y"}})
        assert exc.value.path == "slots.base"

    def test_unsupported_schema(self):
        """Unknown schema versions are rejected."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"schema": "variants/v2"})
        assert exc.value.path == "schema"
        assert "variants/v1" in str(exc.value)

    def test_reserved_variant_name(self):
        """'class' can't be a variant."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"variants": {"class": {"a": "b"}}})
        assert exc.value.path == "variants.class"

    def test_compound_without_class(self):
        """Compound rules need classes."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"compoundVariants": [{"size": "sm"}]})
        assert exc.value.path == "compoundVariants[0]"

    def test_compound_with_both_class_keys(self):
        """class and className can't both be given."""
        with pytest.raises(ConfigError):
            parse_document({"compoundVariants": [{"class": "a", "className": "b"}]})

    def test_bad_variant_table(self):
        """Variant tables must be mappings."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"variants": {"size": ["sm", "md"]}})
        assert exc.value.path == "variants.size"

    def test_bad_class_token(self):
        """Numbers inside class lists are rejected with their path."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"variants": {"size": {"md": {"base": ["a", 1]}}}})
        assert exc.value.path == "variants.size.md.base[1]"

    def test_layer_in_message(self):
        """Layer index and path both appear in the message."""
        with pytest.raises(ConfigError) as exc:
            parse_document({"variants": {"size": {"md": 3}}}, layer=2)
        assert exc.value.layer == 2
        assert exc.value.path == "variants.size.md"
        assert str(exc.value).startswith("layer 2, variants.size.md: ")

    def test_error_hierarchy(self):
        """ConfigError is a VariantsError and a ValueError."""
        with pytest.raises(VariantsError):
            parse_document({"nope": 1})
        with pytest.raises(ValueError):
            parse_document({"nope": 1})


class TestDocumentModels:
    """Tests for the document model helpers."""

    def test_fragment_helpers(self):
        """Fragments expose their slots and tokens."""
        fragment = ClassFragment(classes={"base": ("a",), "icon": ()})
        assert fragment.slot_names == ["base", "icon"]
        assert fragment.tokens("icon") == ()
        assert fragment.tokens("label") == ()
        assert not fragment.is_empty
        assert ClassFragment(classes={"icon": ()}).is_empty

    def test_compound_missing_selection_is_false(self):
        """Missing selections satisfy 'false' conditions."""
        rule = CompoundRule(conditions={"disabled": ("false",)})
        assert rule.matches({}) is True
        assert rule.matches({"disabled": "true"}) is False

    def test_frozen(self):
        """Documents are immutable."""
        document = parse_document({"slots": {"base": "a"}})
        with pytest.raises(Exception):
            document.name = "other"  # type: ignore[misc]

    def test_to_dict_round_trip(self, card_document: dict):
        """to_dict output parses back to an equal document."""
        document = parse_document(card_document)
        assert parse_document(document.to_dict()) == document

    def test_to_dict_keeps_replace_marker(self):
        """Replace fragments serialize with the marker."""
        document = parse_document({"slots": {"base": {"$replace": "a"}}})
        assert document.to_dict()["slots"]["base"] == {"$replace": "a"}

    def test_metadata(self, card_document: dict):
        """Metadata summarizes a document."""
        meta = DocumentMetadata.from_document(parse_document(card_document))
        assert meta.name == "card"
        assert meta.slots == ["base", "header", "body"]
        assert meta.variants["size"] == ["sm", "lg"]

    def test_schema_alias(self):
        """The schema field is populated from 'schema'."""
        assert StyleDocument().schema_version == "variants/v1"
        assert parse_document({"schema": "variants/v1"}).schema_version == "variants/v1"
