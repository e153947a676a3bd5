"""
Errors raised by the variant engine.

Unknown variant names or values and unclassifiable class tokens are not
errors. Only malformed documents are.
"""

from __future__ import annotations


class VariantsError(Exception):
    """Base class for variant engine errors."""


class ConfigError(VariantsError, ValueError):
    """
    A style document has the wrong shape or collides with a reserved name.

    Attributes:
        reason: What is wrong
        layer: Index of the offending layer in the chain (None for a lone document)
        path: Dotted key path inside the layer (e.g. "variants.size.md")
    """

    def __init__(self, reason: str, layer: int | None = None, path: str = ""):
        self.reason = reason
        self.layer = layer
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.layer is not None:
            where.append(f"layer {self.layer}")
        if self.path:
            where.append(self.path)
        if not where:
            return self.reason
        return f"{', '.join(where)}: {self.reason}"

    def at_layer(self, layer: int) -> ConfigError:
        """Return a copy of this error attributed to a chain layer."""
        return ConfigError(self.reason, layer=layer, path=self.path)
