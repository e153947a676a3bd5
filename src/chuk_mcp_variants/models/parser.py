"""
Document parser - turns raw style data into StyleDocument models.

Raw documents are plain dicts (from YAML, JSON or code):

    slots:            {slot: ClassSpec}
    variants:         {variant: {value: ClassSpec}}
    compoundVariants: [{variant: value | [values], class: ClassSpec}]
    defaultVariants:  {variant: value}

A ClassSpec is a class string, a {slot: classes} mapping or a list of
either. Wrapping a spec in {"$replace": ...} makes it replace what earlier
layers declared instead of extending it.
"""

from __future__ import annotations

from typing import Any, get_args

from chuk_mcp_variants.constants import (
    BASE_SLOT,
    CLASS_KEYS,
    REPLACE_MARKER,
    RESERVED_PREFIX,
    ErrorMessages,
    MergeMode,
    SchemaVersion,
)
from chuk_mcp_variants.errors import ConfigError
from chuk_mcp_variants.models.document import (
    ClassFragment,
    CompoundRule,
    StyleDocument,
    detect_boolean_variants,
)

# Top-level keys and their snake_case spellings
_SECTION_ALIASES = {
    "compound_variants": "compoundVariants",
    "compound_slots": "compoundSlots",
    "default_variants": "defaultVariants",
}
_KNOWN_KEYS = frozenset(
    {
        "schema",
        "name",
        "description",
        "extends",
        "base",
        "slots",
        "variants",
        "compoundVariants",
        "compoundSlots",
        "defaultVariants",
    }
)

# Key of a compound rule that retargets bare class strings to several slots
_RULE_SLOTS_KEY = "slots"


def _kind(value: Any) -> str:
    return type(value).__name__


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def normalize_value(value: Any, path: str = "") -> str:
    """
    Normalize a variant value or selection to its string key.

    Booleans become "true"/"false" so YAML `true:` keys and Python
    `disabled=True` selections meet on the same key.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(ErrorMessages.BAD_VALUE.format(kind=_kind(value)), path=path)


def split_classes(value: Any, path: str = "") -> list[str]:
    """
    Split a class string (or nested list of strings) into tokens.

    None and False are skipped, so conditional lists like
    ["btn", is_active and "active"] work.
    """
    if value is None or value is False:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        tokens: list[str] = []
        for index, item in enumerate(value):
            tokens.extend(split_classes(item, f"{path}[{index}]"))
        return tokens
    raise ConfigError(ErrorMessages.BAD_TOKEN.format(kind=_kind(value)), path=path)


def _check_slot_name(name: Any, path: str) -> str:
    if not isinstance(name, str):
        raise ConfigError(ErrorMessages.BAD_VALUE.format(kind=_kind(name)), path=path)
    if name.startswith(RESERVED_PREFIX):
        raise ConfigError(ErrorMessages.RESERVED_SLOT.format(name=name), path=path)
    return name


def _check_variant_name(name: Any, path: str) -> str:
    if not isinstance(name, str):
        raise ConfigError(ErrorMessages.BAD_VALUE.format(kind=_kind(name)), path=path)
    if name in CLASS_KEYS or name == _RULE_SLOTS_KEY or name.startswith(RESERVED_PREFIX):
        raise ConfigError(ErrorMessages.RESERVED_VARIANT.format(name=name), path=path)
    return name


def _collect(spec: Any, slots: tuple[str, ...], path: str, out: dict[str, list[str]]) -> None:
    """Accumulate a class spec into per-slot token lists."""
    if spec is None:
        for slot in slots:
            out.setdefault(slot, [])
    elif isinstance(spec, str):
        for slot in slots:
            out.setdefault(slot, []).extend(spec.split())
    elif isinstance(spec, (list, tuple)):
        for slot in slots:
            out.setdefault(slot, [])
        for index, item in enumerate(spec):
            _collect(item, slots, f"{path}[{index}]", out)
    elif isinstance(spec, dict):
        for slot, classes in spec.items():
            key_path = _join(path, slot)
            _check_slot_name(slot, key_path)
            if isinstance(classes, dict):
                raise ConfigError(
                    ErrorMessages.BAD_TOKEN.format(kind=_kind(classes)), path=key_path
                )
            out.setdefault(slot, []).extend(split_classes(classes, key_path))
    else:
        raise ConfigError(ErrorMessages.BAD_CLASS_SPEC.format(kind=_kind(spec)), path=path)


def parse_class_spec(
    spec: Any,
    default_slot: str | tuple[str, ...] = BASE_SLOT,
    path: str = "",
) -> ClassFragment:
    """
    Reduce a class spec to a ClassFragment.

    Args:
        spec: Class string, {slot: classes} mapping, list of either, or a
            {"$replace": spec} wrapper
        default_slot: Slot(s) bare strings apply to
        path: Key path used in error messages

    Returns:
        The fragment, in APPEND or REPLACE mode
    """
    slots = (default_slot,) if isinstance(default_slot, str) else default_slot
    mode = MergeMode.APPEND
    if isinstance(spec, dict) and REPLACE_MARKER in spec:
        if len(spec) != 1:
            raise ConfigError(ErrorMessages.MIXED_REPLACE, path=path)
        spec = spec[REPLACE_MARKER]
        path = _join(path, REPLACE_MARKER)
        mode = MergeMode.REPLACE

    out: dict[str, list[str]] = {}
    _collect(spec, slots, path, out)
    return ClassFragment(classes={slot: tuple(tokens) for slot, tokens in out.items()}, mode=mode)


def _parse_slots(data: Any, path: str) -> dict[str, ClassFragment]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(ErrorMessages.NOT_A_MAPPING.format(kind=_kind(data)), path=path)

    slots: dict[str, ClassFragment] = {}
    for name, spec in data.items():
        slot_path = _join(path, name)
        slot = _check_slot_name(name, slot_path)
        fragment = parse_class_spec(spec, slot, slot_path)
        if slot not in fragment.classes:
            # Declared slot with classes only for other slots
            fragment = ClassFragment(
                classes={slot: (), **fragment.classes},
                mode=fragment.mode,
            )
        slots[slot] = fragment
    return slots


def _parse_variants(data: Any, path: str) -> dict[str, dict[str, ClassFragment]]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(ErrorMessages.NOT_A_MAPPING.format(kind=_kind(data)), path=path)

    variants: dict[str, dict[str, ClassFragment]] = {}
    for name, table in data.items():
        variant_path = _join(path, name)
        variant = _check_variant_name(name, variant_path)
        if table is None:
            variants[variant] = {}
            continue
        if not isinstance(table, dict):
            raise ConfigError(
                ErrorMessages.NOT_A_MAPPING.format(kind=_kind(table)), path=variant_path
            )
        values: dict[str, ClassFragment] = {}
        for raw_value, spec in table.items():
            value_path = _join(variant_path, raw_value)
            value = normalize_value(raw_value, value_path)
            values[value] = parse_class_spec(spec, BASE_SLOT, value_path)
        variants[variant] = values
    return variants


def _parse_accepted(value: Any, path: str) -> tuple[str, ...]:
    if isinstance(value, (list, tuple, set, frozenset)):
        accepted = [normalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]
        return tuple(dict.fromkeys(accepted))
    return (normalize_value(value, path),)


def _parse_compound_rule(data: Any, path: str, require_slots: bool = False) -> CompoundRule:
    if not isinstance(data, dict):
        raise ConfigError(ErrorMessages.NOT_A_MAPPING.format(kind=_kind(data)), path=path)

    present = [key for key in CLASS_KEYS if key in data]
    if not present:
        raise ConfigError(ErrorMessages.MISSING_CLASS, path=path)
    if len(present) > 1:
        raise ConfigError(ErrorMessages.BOTH_CLASS_KEYS, path=path)
    class_key = present[0]

    targets: tuple[str, ...] = (BASE_SLOT,)
    if _RULE_SLOTS_KEY in data:
        slots_path = _join(path, _RULE_SLOTS_KEY)
        raw_slots = data[_RULE_SLOTS_KEY]
        if isinstance(raw_slots, str):
            raw_slots = [raw_slots]
        if not isinstance(raw_slots, (list, tuple)) or not raw_slots:
            raise ConfigError(
                ErrorMessages.BAD_CLASS_SPEC.format(kind=_kind(raw_slots)), path=slots_path
            )
        targets = tuple(
            _check_slot_name(slot, f"{slots_path}[{i}]") for i, slot in enumerate(raw_slots)
        )
    elif require_slots:
        raise ConfigError(
            ErrorMessages.BAD_CLASS_SPEC.format(kind="NoneType"),
            path=_join(path, _RULE_SLOTS_KEY),
        )

    conditions: dict[str, tuple[str, ...]] = {}
    for key, value in data.items():
        if key in (class_key, _RULE_SLOTS_KEY):
            continue
        key_path = _join(path, key)
        variant = _check_variant_name(key, key_path)
        conditions[variant] = _parse_accepted(value, key_path)

    fragment = parse_class_spec(data[class_key], targets, _join(path, class_key))
    return CompoundRule(conditions=conditions, fragment=fragment)


def _parse_compound_list(data: Any, path: str, require_slots: bool = False) -> list[CompoundRule]:
    if data is None:
        return []
    if not isinstance(data, (list, tuple)):
        raise ConfigError(ErrorMessages.BAD_CLASS_SPEC.format(kind=_kind(data)), path=path)
    return [
        _parse_compound_rule(rule, f"{path}[{index}]", require_slots)
        for index, rule in enumerate(data)
    ]


def _parse_defaults(data: Any, path: str) -> dict[str, str | None]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(ErrorMessages.NOT_A_MAPPING.format(kind=_kind(data)), path=path)
    defaults: dict[str, str | None] = {}
    for name, value in data.items():
        key_path = _join(path, name)
        variant = _check_variant_name(name, key_path)
        defaults[variant] = None if value is None else normalize_value(value, key_path)
    return defaults


def _parse_extends(data: Any, path: str) -> tuple[str, ...]:
    if data is None:
        return ()
    if isinstance(data, str):
        return (data,)
    if isinstance(data, (list, tuple)) and all(isinstance(item, str) for item in data):
        return tuple(data)
    raise ConfigError(ErrorMessages.BAD_VALUE.format(kind=_kind(data)), path=path)


def _parse_schema(data: Any) -> SchemaVersion:
    supported = get_args(SchemaVersion)
    if data not in supported:
        raise ConfigError(
            ErrorMessages.UNSUPPORTED_SCHEMA.format(schema=data, expected=", ".join(supported)),
            path="schema",
        )
    return data  # type: ignore[no-any-return]


def parse_document(data: Any, layer: int | None = None) -> StyleDocument:
    """
    Parse raw style data into a StyleDocument.

    Args:
        data: Raw document (a StyleDocument is returned unchanged)
        layer: Chain index reported in errors

    Returns:
        The parsed document

    Raises:
        ConfigError: If the data has the wrong shape
    """
    if isinstance(data, StyleDocument):
        return data
    try:
        return _parse_document(data)
    except ConfigError as e:
        if layer is None:
            raise
        raise e.at_layer(layer) from None


def _parse_document(data: Any) -> StyleDocument:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(ErrorMessages.NOT_A_MAPPING.format(kind=_kind(data)))

    sections: dict[str, Any] = {}
    for key, value in data.items():
        canonical = _SECTION_ALIASES.get(key, key)
        if canonical not in _KNOWN_KEYS:
            raise ConfigError(f"unknown key '{key}'", path=str(key))
        sections[canonical] = value

    slots = _parse_slots(sections.get("slots"), "slots")
    if "base" in sections:
        base = parse_class_spec(sections["base"], BASE_SLOT, "base")
        declared = slots.get(BASE_SLOT, ClassFragment(mode=base.mode))
        if declared.mode != base.mode:
            raise ConfigError(
                "'base' and 'slots.base' disagree on '$replace'", path="slots.base"
            )
        # Top-level base first, then slots.base, slot by slot
        classes = {slot: list(tokens) for slot, tokens in base.classes.items()}
        for slot, tokens in declared.classes.items():
            classes.setdefault(slot, []).extend(tokens)
        slots = {
            BASE_SLOT: ClassFragment(
                classes={slot: tuple(tokens) for slot, tokens in classes.items()},
                mode=base.mode,
            ),
            **{slot: fragment for slot, fragment in slots.items() if slot != BASE_SLOT},
        }

    variants = _parse_variants(sections.get("variants"), "variants")
    compound = _parse_compound_list(sections.get("compoundVariants"), "compoundVariants")
    compound += _parse_compound_list(
        sections.get("compoundSlots"), "compoundSlots", require_slots=True
    )

    name = sections.get("name")
    description = sections.get("description") or ""
    if name is not None and not isinstance(name, str):
        raise ConfigError(ErrorMessages.BAD_VALUE.format(kind=_kind(name)), path="name")
    if not isinstance(description, str):
        raise ConfigError(
            ErrorMessages.BAD_VALUE.format(kind=_kind(description)), path="description"
        )

    return StyleDocument(
        schema_version=_parse_schema(sections.get("schema", "variants/v1")),
        name=name,
        description=description,
        extends=_parse_extends(sections.get("extends"), "extends"),
        slots=slots,
        variants=variants,
        compound_variants=compound,
        default_variants=_parse_defaults(sections.get("defaultVariants"), "defaultVariants"),
        boolean_variants=detect_boolean_variants(variants),
    )
