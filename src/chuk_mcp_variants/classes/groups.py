"""
Conflict group table for utility classes.

Each rule maps a class prefix and a value validator to the group of
classes controlling the same visual property. The table follows
Tailwind CSS naming; rules are checked in order, so narrower prefixes
and validators come before the catch-all color rules.
"""

from __future__ import annotations

import re
from collections.abc import Callable

Validator = Callable[[str], bool]

_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")
_TSHIRT_RE = re.compile(r"^(\d*(xs|sm|md|lg|xl)|base)$")
_LENGTH_UNIT_RE = re.compile(
    r"^-?\d*\.?\d+(px|rem|em|%|vh|vw|ch|ex|lh|svh|lvh|dvh|vmin|vmax|cm|mm|in|pt|pc)$"
)


def is_any(value: str) -> bool:
    return True


def is_number(value: str) -> bool:
    return bool(_NUMBER_RE.match(value))


def is_arbitrary(value: str) -> bool:
    """Arbitrary values look like [..] or (--css-variable)."""
    return (value.startswith("[") and value.endswith("]")) or (
        value.startswith("(") and value.endswith(")")
    )


def _arbitrary_inner(value: str) -> str:
    return value[1:-1] if is_arbitrary(value) else ""


def is_arbitrary_length(value: str) -> bool:
    inner = _arbitrary_inner(value)
    return (
        inner == "0"
        or inner.startswith("length:")
        or bool(_LENGTH_UNIT_RE.match(inner))
        or inner.startswith(("calc(", "min(", "max(", "clamp("))
    )


def is_arbitrary_image(value: str) -> bool:
    inner = _arbitrary_inner(value)
    return inner.startswith(("url(", "image:", "linear-gradient(", "radial-gradient("))


def is_tshirt(value: str) -> bool:
    """Size keys like sm, lg, 2xl (optionally with a /line-height suffix)."""
    return bool(_TSHIRT_RE.match(value.split("/", 1)[0]))


def is_width(value: str) -> bool:
    return is_number(value) or is_arbitrary_length(value)


def one_of(*values: str) -> Validator:
    allowed = frozenset(values)

    def check(value: str) -> bool:
        return value in allowed

    return check


def either(*validators: Validator) -> Validator:
    def check(value: str) -> bool:
        return any(validator(value) for validator in validators)

    return check


# Classes matched by their whole name
EXACT_GROUPS: dict[str, str] = {
    **dict.fromkeys(
        [
            "block",
            "inline-block",
            "inline",
            "flex",
            "inline-flex",
            "grid",
            "inline-grid",
            "table",
            "inline-table",
            "table-row",
            "table-cell",
            "contents",
            "flow-root",
            "list-item",
            "hidden",
        ],
        "display",
    ),
    **dict.fromkeys(["static", "fixed", "absolute", "relative", "sticky"], "position"),
    **dict.fromkeys(["visible", "invisible", "collapse"], "visibility"),
    **dict.fromkeys(["uppercase", "lowercase", "capitalize", "normal-case"], "text-transform"),
    **dict.fromkeys(["italic", "not-italic"], "font-style"),
    **dict.fromkeys(
        ["underline", "overline", "line-through", "no-underline"], "text-decoration-line"
    ),
    **dict.fromkeys(["antialiased", "subpixel-antialiased"], "font-smoothing"),
    **dict.fromkeys(["truncate"], "text-overflow"),
    **dict.fromkeys(["sr-only", "not-sr-only"], "sr"),
    **dict.fromkeys(["isolate", "isolation-auto"], "isolation"),
    "border": "border-width",
    "rounded": "rounded",
    "shadow": "shadow",
    "ring": "ring-width",
    "ring-inset": "ring-inset",
    "outline": "outline-style",
    "transition": "transition",
    "grow": "grow",
    "shrink": "shrink",
    "blur": "blur",
    "divide-x": "divide-x",
    "divide-y": "divide-y",
    "container": "container",
    "resize": "resize",
    "grayscale": "grayscale",
    "invert": "invert",
    "sepia": "sepia",
}

_SIDES = ("x", "y", "t", "r", "b", "l", "s", "e")
_CORNERS = ("t", "r", "b", "l", "s", "e", "tl", "tr", "br", "bl", "ss", "se", "es", "ee")

for _side in _SIDES:
    EXACT_GROUPS[f"border-{_side}"] = f"border-width-{_side}"
for _corner in _CORNERS:
    EXACT_GROUPS[f"rounded-{_corner}"] = f"rounded-{_corner}"


def _spacing_rules(short: str, group: str) -> list[tuple[str, str, Validator]]:
    rules = [(f"{group}-{side}", f"{short}{side}-", is_any) for side in _SIDES]
    rules.append((group, f"{short}-", is_any))
    return rules


_ALIGN_TEXT = one_of("left", "center", "right", "justify", "start", "end")
_BG_POSITIONS = one_of(
    "bottom",
    "center",
    "left",
    "left-bottom",
    "left-top",
    "right",
    "right-bottom",
    "right-top",
    "top",
)
_BORDER_STYLES = one_of("solid", "dashed", "dotted", "double", "hidden", "none")
_SHADOW_SIZES = either(is_tshirt, one_of("inner", "none"), is_arbitrary_length)
_FONT_WEIGHTS = either(
    one_of(
        "thin",
        "extralight",
        "light",
        "normal",
        "medium",
        "semibold",
        "bold",
        "extrabold",
        "black",
    ),
    is_number,
)

# (group, prefix, validator) in match order
PREFIX_RULES: list[tuple[str, str, Validator]] = [
    # Spacing
    *_spacing_rules("p", "padding"),
    *_spacing_rules("m", "margin"),
    ("space-x", "space-x-", is_any),
    ("space-y", "space-y-", is_any),
    ("gap-x", "gap-x-", is_any),
    ("gap-y", "gap-y-", is_any),
    ("gap", "gap-", is_any),
    # Sizing
    ("min-width", "min-w-", is_any),
    ("max-width", "max-w-", is_any),
    ("min-height", "min-h-", is_any),
    ("max-height", "max-h-", is_any),
    ("width", "w-", is_any),
    ("height", "h-", is_any),
    ("size", "size-", is_any),
    # Layout
    ("inset-x", "inset-x-", is_any),
    ("inset-y", "inset-y-", is_any),
    ("inset", "inset-", is_any),
    ("top", "top-", is_any),
    ("right", "right-", is_any),
    ("bottom", "bottom-", is_any),
    ("left", "left-", is_any),
    ("start", "start-", is_any),
    ("end", "end-", is_any),
    ("z", "z-", is_any),
    ("overflow-x", "overflow-x-", is_any),
    ("overflow-y", "overflow-y-", is_any),
    ("overflow", "overflow-", is_any),
    ("float", "float-", is_any),
    ("clear", "clear-", is_any),
    ("aspect", "aspect-", is_any),
    ("columns", "columns-", is_any),
    ("object-fit", "object-", one_of("contain", "cover", "fill", "none", "scale-down")),
    ("object-position", "object-", is_any),
    ("table-layout", "table-", one_of("auto", "fixed")),
    # Flexbox and grid
    ("flex-direction", "flex-", one_of("row", "row-reverse", "col", "col-reverse")),
    ("flex-wrap", "flex-", one_of("wrap", "wrap-reverse", "nowrap")),
    ("flex", "flex-", is_any),
    ("basis", "basis-", is_any),
    ("grow", "grow-", is_any),
    ("shrink", "shrink-", is_any),
    ("order", "order-", is_any),
    ("grid-cols", "grid-cols-", is_any),
    ("grid-rows", "grid-rows-", is_any),
    ("grid-flow", "grid-flow-", is_any),
    ("auto-cols", "auto-cols-", is_any),
    ("auto-rows", "auto-rows-", is_any),
    ("col-start", "col-start-", is_any),
    ("col-end", "col-end-", is_any),
    ("col", "col-", is_any),
    ("row-start", "row-start-", is_any),
    ("row-end", "row-end-", is_any),
    ("row", "row-", is_any),
    ("justify-items", "justify-items-", is_any),
    ("justify-self", "justify-self-", is_any),
    ("justify-content", "justify-", is_any),
    ("align-items", "items-", is_any),
    ("align-self", "self-", is_any),
    ("align-content", "content-", is_any),
    ("place-content", "place-content-", is_any),
    ("place-items", "place-items-", is_any),
    ("place-self", "place-self-", is_any),
    # Typography
    ("font-size", "text-", either(is_tshirt, is_arbitrary_length)),
    ("text-align", "text-", _ALIGN_TEXT),
    ("text-overflow", "text-", one_of("ellipsis", "clip")),
    ("text-wrap", "text-", one_of("wrap", "nowrap", "balance", "pretty")),
    ("text-opacity", "text-opacity-", is_any),
    ("text-color", "text-", is_any),
    ("font-weight", "font-", _FONT_WEIGHTS),
    ("font-family", "font-", is_any),
    ("leading", "leading-", is_any),
    ("tracking", "tracking-", is_any),
    ("line-clamp", "line-clamp-", is_any),
    ("list-position", "list-", one_of("inside", "outside")),
    ("list-style-type", "list-", is_any),
    ("vertical-align", "align-", is_any),
    ("whitespace", "whitespace-", is_any),
    ("break", "break-", is_any),
    ("underline-offset", "underline-offset-", is_any),
    ("text-decoration-style", "decoration-", one_of("solid", "double", "dotted", "dashed", "wavy")),
    ("text-decoration-thickness", "decoration-", either(is_number, is_arbitrary_length)),
    ("text-decoration-color", "decoration-", is_any),
    ("indent", "indent-", is_any),
    # Backgrounds
    ("bg-attachment", "bg-", one_of("fixed", "local", "scroll")),
    ("bg-clip", "bg-clip-", is_any),
    ("bg-origin", "bg-origin-", is_any),
    ("bg-opacity", "bg-opacity-", is_any),
    (
        "bg-repeat",
        "bg-",
        one_of("repeat", "no-repeat", "repeat-x", "repeat-y", "repeat-round", "repeat-space"),
    ),
    ("bg-size", "bg-", one_of("auto", "cover", "contain")),
    ("bg-position", "bg-", _BG_POSITIONS),
    ("bg-image", "bg-gradient-", is_any),
    ("bg-image", "bg-linear-", is_any),
    ("bg-image", "bg-", either(one_of("none"), is_arbitrary_image)),
    ("bg-color", "bg-", is_any),
    ("gradient-from-position", "from-", lambda v: v.endswith("%")),
    ("gradient-from", "from-", is_any),
    ("gradient-via-position", "via-", lambda v: v.endswith("%")),
    ("gradient-via", "via-", is_any),
    ("gradient-to-position", "to-", lambda v: v.endswith("%")),
    ("gradient-to", "to-", is_any),
    # Borders
    *[(f"border-width-{side}", f"border-{side}-", is_width) for side in _SIDES],
    *[(f"border-color-{side}", f"border-{side}-", is_any) for side in _SIDES],
    ("border-spacing", "border-spacing-", is_any),
    ("border-style", "border-", _BORDER_STYLES),
    ("border-collapse", "border-", one_of("collapse", "separate")),
    ("border-opacity", "border-opacity-", is_any),
    ("border-width", "border-", is_width),
    ("border-color", "border-", is_any),
    *[(f"rounded-{corner}", f"rounded-{corner}-", is_any) for corner in _CORNERS],
    ("rounded", "rounded-", is_any),
    ("divide-x", "divide-x-", is_any),
    ("divide-y", "divide-y-", is_any),
    ("divide-style", "divide-", _BORDER_STYLES),
    ("divide-color", "divide-", is_any),
    ("outline-offset", "outline-offset-", is_any),
    ("outline-style", "outline-", _BORDER_STYLES),
    ("outline-width", "outline-", is_width),
    ("outline-color", "outline-", is_any),
    ("ring-offset-width", "ring-offset-", is_width),
    ("ring-offset-color", "ring-offset-", is_any),
    ("ring-opacity", "ring-opacity-", is_any),
    ("ring-width", "ring-", is_width),
    ("ring-color", "ring-", is_any),
    # Effects
    ("shadow", "shadow-", _SHADOW_SIZES),
    ("shadow-color", "shadow-", is_any),
    ("drop-shadow", "drop-shadow-", is_any),
    ("opacity", "opacity-", is_any),
    ("mix-blend", "mix-blend-", is_any),
    ("blur", "blur-", is_any),
    ("backdrop-blur", "backdrop-blur-", is_any),
    ("brightness", "brightness-", is_any),
    ("contrast", "contrast-", is_any),
    # Transitions and transforms
    ("transition", "transition-", is_any),
    ("duration", "duration-", is_any),
    ("ease", "ease-", is_any),
    ("delay", "delay-", is_any),
    ("animate", "animate-", is_any),
    ("scale-x", "scale-x-", is_any),
    ("scale-y", "scale-y-", is_any),
    ("scale", "scale-", is_any),
    ("rotate", "rotate-", is_any),
    ("translate-x", "translate-x-", is_any),
    ("translate-y", "translate-y-", is_any),
    ("skew-x", "skew-x-", is_any),
    ("skew-y", "skew-y-", is_any),
    ("transform-origin", "origin-", is_any),
    # Interactivity
    ("cursor", "cursor-", is_any),
    ("pointer-events", "pointer-events-", is_any),
    ("select", "select-", is_any),
    ("resize", "resize-", is_any),
    ("appearance", "appearance-", is_any),
    ("accent", "accent-", is_any),
    ("caret", "caret-", is_any),
    ("scroll-behavior", "scroll-", one_of("auto", "smooth")),
    ("snap-align", "snap-", one_of("start", "end", "center", "align-none")),
    ("snap-type", "snap-", is_any),
    ("will-change", "will-change-", is_any),
    # SVG
    ("stroke-width", "stroke-", is_width),
    ("stroke", "stroke-", is_any),
    ("fill", "fill-", is_any),
]

# A later class of the key group removes earlier classes of these groups
SUPERSEDES: dict[str, tuple[str, ...]] = {
    "padding": tuple(f"padding-{side}" for side in _SIDES),
    "padding-x": ("padding-r", "padding-l", "padding-s", "padding-e"),
    "padding-y": ("padding-t", "padding-b"),
    "margin": tuple(f"margin-{side}" for side in _SIDES),
    "margin-x": ("margin-r", "margin-l", "margin-s", "margin-e"),
    "margin-y": ("margin-t", "margin-b"),
    "gap": ("gap-x", "gap-y"),
    "size": ("width", "height"),
    "inset": ("inset-x", "inset-y", "top", "right", "bottom", "left", "start", "end"),
    "inset-x": ("right", "left"),
    "inset-y": ("top", "bottom"),
    "overflow": ("overflow-x", "overflow-y"),
    "font-size": ("leading",),
    "border-width": tuple(f"border-width-{side}" for side in _SIDES),
    "border-width-x": ("border-width-r", "border-width-l"),
    "border-width-y": ("border-width-t", "border-width-b"),
    "border-color": tuple(f"border-color-{side}" for side in _SIDES),
    "border-color-x": ("border-color-r", "border-color-l"),
    "border-color-y": ("border-color-t", "border-color-b"),
    "rounded": tuple(f"rounded-{corner}" for corner in _CORNERS),
    "rounded-t": ("rounded-tl", "rounded-tr"),
    "rounded-r": ("rounded-tr", "rounded-br"),
    "rounded-b": ("rounded-br", "rounded-bl"),
    "rounded-l": ("rounded-tl", "rounded-bl"),
    "rounded-s": ("rounded-ss", "rounded-es"),
    "rounded-e": ("rounded-se", "rounded-ee"),
    "scale": ("scale-x", "scale-y"),
}
