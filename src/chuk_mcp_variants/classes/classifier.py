"""
Utility class classifier - maps a class token to its conflict key.

A token like "md:hover:!-mt-2" is split into modifiers ("md", "hover"),
an important flag and the utility ("mt-2"). The utility decides the
conflict group ("margin-t"); modifiers and the important flag form the
context, so "hover:bg-red-500" only ever conflicts with other
"hover:bg-*" classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from chuk_mcp_variants.classes.groups import EXACT_GROUPS, PREFIX_RULES, SUPERSEDES
from chuk_mcp_variants.constants import IMPORTANT_MARKER, MODIFIER_SEPARATOR, NO_GROUP

# Distinct tokens remembered per classifier
CLASSIFY_CACHE_SIZE = 4096


@dataclass(frozen=True)
class ParsedToken:
    """A class token split into its parts."""

    modifiers: tuple[str, ...]
    utility: str  # Without modifiers, important marker or negative sign
    important: bool


@dataclass(frozen=True)
class ConflictKey:
    """Tokens sharing a key conflict; only the last one is kept."""

    modifiers: tuple[str, ...]
    group: str
    important: bool = False

    @property
    def is_mergeable(self) -> bool:
        """False for tokens that are never deduplicated."""
        return self.group != NO_GROUP

    def with_group(self, group: str) -> ConflictKey:
        """Same context, different group."""
        return ConflictKey(self.modifiers, group, self.important)


def split_modifiers(token: str) -> list[str]:
    """Split on ':' outside of brackets and parentheses."""
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(token):
        if char in "[(":
            depth += 1
        elif char in "])":
            depth = max(0, depth - 1)
        elif char == MODIFIER_SEPARATOR and depth == 0:
            parts.append(token[start:index])
            start = index + 1
    parts.append(token[start:])
    return parts


def sort_modifiers(modifiers: list[str]) -> tuple[str, ...]:
    """
    Normalize modifier order.

    Plain modifiers commute ("hover:focus:" == "focus:hover:"), but
    arbitrary ones like "[&>*]" depend on position, so only runs between
    them are sorted.
    """
    result: list[str] = []
    run: list[str] = []
    for modifier in modifiers:
        if modifier.startswith("["):
            result.extend(sorted(run))
            result.append(modifier)
            run = []
        else:
            run.append(modifier)
    result.extend(sorted(run))
    return tuple(result)


def parse_token(token: str) -> ParsedToken:
    """Split a class token into modifiers, flags and utility."""
    *modifiers, utility = split_modifiers(token)

    important = False
    if utility.startswith(IMPORTANT_MARKER):
        utility = utility[1:]
        important = True
    elif utility.endswith(IMPORTANT_MARKER):
        utility = utility[:-1]
        important = True

    if utility.startswith("-") and len(utility) > 1:
        utility = utility[1:]

    return ParsedToken(
        modifiers=sort_modifiers(modifiers),
        utility=utility,
        important=important,
    )


class ClassClassifier:
    """
    Classifies utility classes into conflict groups.

    Project-specific utilities can be taught with extra groups, checked
    before the built-in table: {"btn-size": ["btn-sm", "btn-lg"]} or
    {"elevation": ["elevation-"]} for a prefix.
    """

    def __init__(
        self,
        extra_groups: dict[str, list[str]] | None = None,
        cache_size: int = CLASSIFY_CACHE_SIZE,
    ):
        """
        Initialize the classifier.

        Args:
            extra_groups: Group name to class names or prefixes (ending in '-')
            cache_size: Most recently classified tokens to remember
        """
        self._extra_exact: dict[str, str] = {}
        self._extra_prefixes: list[tuple[str, str]] = []
        for group, entries in (extra_groups or {}).items():
            for entry in entries:
                if entry.endswith("-"):
                    self._extra_prefixes.append((group, entry))
                else:
                    self._extra_exact[entry] = group
        # Longest prefix first so "btn-icon-" beats "btn-"
        self._extra_prefixes.sort(key=lambda item: len(item[1]), reverse=True)
        self._classify_cached = lru_cache(maxsize=cache_size)(self._classify)

    def group_of(self, utility: str) -> str:
        """
        Get the conflict group of a bare utility (no modifiers).

        Args:
            utility: Utility class, e.g. "bg-red-500"

        Returns:
            Group name, or "none" if unknown
        """
        if utility in self._extra_exact:
            return self._extra_exact[utility]
        for group, prefix in self._extra_prefixes:
            if utility.startswith(prefix) and len(utility) > len(prefix):
                return group

        # Arbitrary property: [mask-type:luminance]
        if utility.startswith("[") and utility.endswith("]") and ":" in utility:
            prop = utility[1:-1].split(":", 1)[0]
            return f"arbitrary..{prop}"

        if utility in EXACT_GROUPS:
            return EXACT_GROUPS[utility]
        for group, prefix, validator in PREFIX_RULES:
            if utility.startswith(prefix) and len(utility) > len(prefix):
                if validator(utility[len(prefix) :]):
                    return group
        return NO_GROUP

    def classify(self, token: str) -> ConflictKey:
        """
        Get the conflict key of a class token.

        Args:
            token: Class token, possibly with modifiers ("hover:bg-red-500")

        Returns:
            ConflictKey of (modifiers, group, important)
        """
        return self._classify_cached(token)

    def cache_info(self) -> Any:
        """Hit/miss statistics of the token cache."""
        return self._classify_cached.cache_info()

    def clear_cache(self) -> None:
        """Forget classified tokens."""
        self._classify_cached.cache_clear()

    def _classify(self, token: str) -> ConflictKey:
        parsed = parse_token(token)
        return ConflictKey(
            modifiers=parsed.modifiers,
            group=self.group_of(parsed.utility),
            important=parsed.important,
        )

    def superseded_groups(self, group: str) -> tuple[str, ...]:
        """Groups a later class of this group removes."""
        return SUPERSEDES.get(group, ())


default_classifier = ClassClassifier()


def classify(token: str) -> ConflictKey:
    """Get the conflict key of a token using the built-in table."""
    return default_classifier.classify(token)


def conflict_group(token: str) -> str:
    """Get the conflict group of a token using the built-in table."""
    return default_classifier.classify(token).group
