"""
Engine configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Options for resolving a component."""

    merge_classes: bool = Field(
        default=True,
        description="Deduplicate conflicting utility classes (exact duplicates always collapse)",
    )
    extra_groups: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Extra conflict groups: group -> class names or prefixes ending in '-'",
    )
    cache_size: int = Field(
        default=256,
        ge=0,
        description="Max memoized selections per component (0 disables memoization)",
    )

    model_config = {"frozen": True}
