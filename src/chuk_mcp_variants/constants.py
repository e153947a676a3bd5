"""
Constants and enums for the variant system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class MatchStage(str, Enum):
    """
    Stage that contributed a fragment to a slot.

    Stages are applied in declaration order, so later stages win
    class conflicts after deduplication.
    """

    BASE = "base"  # slots.<name>
    VARIANT = "variant"  # variants.<variant>.<value>
    COMPOUND = "compound"  # compoundVariants[i]
    OVERRIDE = "override"  # caller-supplied extras


class MergeMode(str, Enum):
    """How a layer's fragment combines with what earlier layers declared."""

    APPEND = "append"
    REPLACE = "replace"


# Slot every document has, and the target of bare class strings
BASE_SLOT = "base"

# Keys carrying classes inside compound rules and selections
CLASS_KEYS: tuple[str, ...] = ("class", "className")

# Explicit marker selecting MergeMode.REPLACE for a fragment
REPLACE_MARKER = "$replace"

# Prefix reserved for markers; slot names may not start with it
RESERVED_PREFIX = "$"

# Variant value keys making a variant boolean
BOOLEAN_VALUES: frozenset[str] = frozenset({"true", "false"})

# Conflict group for tokens that are never deduplicated
NO_GROUP = "none"

# Separator between modifiers and the utility (hover:bg-red-500)
MODIFIER_SEPARATOR = ":"

IMPORTANT_MARKER = "!"

# Schema versions - frozen for v1
SchemaVersion = Literal["variants/v1"]

DOCUMENT_SUFFIX = ".yaml"

# Environment variable overriding the server's project styles directory
STYLES_DIR_ENV = "CHUK_VARIANTS_STYLES_DIR"


class ErrorMessages:
    """Standardized error messages."""

    DOCUMENT_NOT_FOUND = "Style document '{name}' not found."
    NOT_A_MAPPING = "expected a mapping, got {kind}"
    BAD_CLASS_SPEC = "expected a class string, list or slot mapping, got {kind}"
    BAD_TOKEN = "expected a class string, got {kind}"
    BAD_VALUE = "expected a string or boolean value, got {kind}"
    RESERVED_SLOT = "slot name '{name}' is reserved"
    RESERVED_VARIANT = "variant name '{name}' is reserved"
    MIXED_REPLACE = "'$replace' must be the only key of its mapping"
    MISSING_CLASS = "compound rule needs a 'class' or 'className' entry"
    BOTH_CLASS_KEYS = "compound rule declares both 'class' and 'className'"
    EXTENDS_CYCLE = "extension cycle: {chain}"
    UNSUPPORTED_SCHEMA = "unsupported schema '{schema}', expected one of: {expected}"
