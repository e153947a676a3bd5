"""
Variant component - the callable face of a merged extension chain.

    button = create_variants(BUTTON, theme_overrides)
    button(color="primary", size="sm")       # {"base": "...", "icon": "..."}
    slots = button.slots(size="sm")
    slots["icon"](class_="ml-2")            # "... ml-2"
    themed = button.extend({"variants": {...}})
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from chuk_mcp_variants.classes.classifier import ClassClassifier
from chuk_mcp_variants.classes.merger import ClassMerger
from chuk_mcp_variants.constants import CLASS_KEYS
from chuk_mcp_variants.models.config import EngineConfig
from chuk_mcp_variants.models.document import StyleDocument
from chuk_mcp_variants.models.parser import normalize_value, split_classes
from chuk_mcp_variants.variants.matcher import MatchedFragment, match
from chuk_mcp_variants.variants.merger import merge
from chuk_mcp_variants.variants.renderer import render, render_slot

Layer = StyleDocument | dict[str, Any]

# Python keyword-safe spelling of "class"
_CLASS_KWARG = "class_"


def _collect_selections(
    selections: Mapping[str, Any] | None,
    kwargs: Mapping[str, Any],
) -> dict[str, Any]:
    """Combine a selections mapping with keyword selections."""
    combined = dict(selections or {})
    for key, value in kwargs.items():
        combined["class" if key == _CLASS_KWARG else key] = value
    return combined


def _pop_classes(selections: dict[str, Any]) -> list[str]:
    """Remove and return "class"/"className" entries."""
    tokens: list[str] = []
    for key in CLASS_KEYS:
        if key in selections:
            tokens.extend(split_classes(selections.pop(key), key))
    return tokens


def _freeze_classes(value: Any, path: str) -> tuple[str, ...]:
    return tuple(split_classes(value, path))


def _freeze_selection(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (str, int, float)):
        return normalize_value(value)
    # Ignored by the matcher; any stable key will do
    return ("?", repr(value))


class SlotRenderer:
    """
    Renders one slot, accepting ad hoc classes and variant overrides.

    Calling with class_= (or "class"/"className" in a mapping) appends
    classes to this slot; other keywords override the bound selections.
    """

    def __init__(self, component: VariantComponent, slot: str, selections: Mapping[str, Any]):
        self.component = component
        self.slot = slot
        self._selections = dict(selections)

    def __call__(self, selections: Mapping[str, Any] | None = None, /, **kwargs: Any) -> str:
        overrides = _collect_selections(selections, kwargs)
        extra = _pop_classes(overrides)
        merged = {**self._selections, **overrides}
        return self.component.render_slot(self.slot, merged, extra or None)

    def __str__(self) -> str:
        return self()

    def __repr__(self) -> str:
        return f"SlotRenderer(slot={self.slot!r})"


class VariantComponent:
    """
    A merged extension chain ready for resolution.

    The chain is merged once on construction. Resolutions are pure, so
    results are memoized per normalized selection; the memo only grows
    by dict.setdefault, so concurrent callers at worst recompute.
    """

    def __init__(self, chain: Sequence[Layer], config: EngineConfig | None = None):
        """
        Initialize the component.

        Args:
            chain: Documents or raw dicts, least specific first
            config: Engine options

        Raises:
            ConfigError: If a layer is malformed
        """
        self._chain: tuple[Layer, ...] = tuple(chain)
        self.config = config or EngineConfig()
        self.document = merge(self._chain)
        self.merger = ClassMerger(
            ClassClassifier(self.config.extra_groups),
            enabled=self.config.merge_classes,
        )
        self._cache: dict[tuple[Any, ...], dict[str, str]] = {}

    @property
    def chain(self) -> tuple[Layer, ...]:
        """The layers this component was merged from."""
        return self._chain

    @property
    def variant_keys(self) -> list[str]:
        """Variant names in declaration order."""
        return self.document.variant_keys

    @property
    def slot_names(self) -> list[str]:
        """All slot names."""
        return self.document.slot_names

    def __call__(
        self,
        selections: Mapping[str, Any] | None = None,
        /,
        *,
        overrides: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, str]:
        """
        Resolve every slot.

        Args:
            selections: Variant selections mapping
            overrides: Extra classes per slot, applied last
            **kwargs: Variant selections as keywords (class_ adds base classes)

        Returns:
            Slot name to class string
        """
        combined = _collect_selections(selections, kwargs)
        key = self._cache_key(combined, overrides)
        if key is not None and key in self._cache:
            return dict(self._cache[key])

        result = render(self.document, combined, overrides, self.merger)
        if key is not None and len(self._cache) < self.config.cache_size:
            self._cache.setdefault(key, dict(result))
        return result

    def slots(
        self, selections: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> dict[str, SlotRenderer]:
        """
        Get per-slot renderers bound to a selection.

        Args:
            selections: Variant selections mapping
            **kwargs: Variant selections as keywords

        Returns:
            Slot name to SlotRenderer
        """
        combined = _collect_selections(selections, kwargs)
        return {slot: SlotRenderer(self, slot, combined) for slot in self.slot_names}

    def render_slot(self, slot: str, selections: Mapping[str, Any], extra: Any = None) -> str:
        """Resolve one slot with extra classes appended last."""
        return render_slot(self.document, slot, selections, extra, self.merger)

    def explain(
        self,
        selections: Mapping[str, Any] | None = None,
        /,
        *,
        overrides: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, list[MatchedFragment]]:
        """
        Show which fragments each slot collected, before deduplication.

        Returns:
            Slot name to ordered matched fragments
        """
        return match(self.document, _collect_selections(selections, kwargs), overrides)

    def extend(self, *layers: Layer, config: EngineConfig | None = None) -> VariantComponent:
        """
        Create a component whose chain is this one plus more specific layers.

        Args:
            layers: Layers added on top
            config: Engine options (inherited if omitted)

        Returns:
            New component; this one is unchanged
        """
        return VariantComponent((*self._chain, *layers), config or self.config)

    def clear_cache(self) -> None:
        """Clear memoized resolutions."""
        self._cache.clear()

    def _cache_key(
        self,
        selections: Mapping[str, Any],
        overrides: Mapping[str, Any] | None,
    ) -> tuple[Any, ...] | None:
        if self.config.cache_size == 0:
            return None
        items = [
            (name, _freeze_classes(value, name) if name in CLASS_KEYS else _freeze_selection(value))
            for name, value in selections.items()
        ]
        override_items = [
            (slot, _freeze_classes(value, f"overrides.{slot}"))
            for slot, value in (overrides or {}).items()
        ]
        return (tuple(sorted(items, key=repr)), tuple(sorted(override_items, key=repr)))

    def __repr__(self) -> str:
        name = self.document.name or "anonymous"
        return f"VariantComponent(name={name!r}, layers={len(self._chain)})"


def create_variants(
    *layers: Layer,
    extend: VariantComponent | None = None,
    config: EngineConfig | None = None,
) -> VariantComponent:
    """
    Create a component from style layers.

    Args:
        layers: Documents or raw dicts, least specific first
        extend: Parent component whose chain goes first
        config: Engine options

    Returns:
        The merged component
    """
    if extend is not None:
        return extend.extend(*layers, config=config)
    return VariantComponent(layers, config)
