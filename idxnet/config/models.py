"""Pydantic configuration models with code-baked defaults."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class GraphOptions(BaseModel):
    """Per-graph construction options, frozen after construction.

    Attributes:
        recycle_indices: Reuse released vertex/edge indices before growing the
            index range. False gives monotonic allocation (stale handles can
            never alias a newer entity).
        history: Record mutating calls in the graph's in-memory history.
        vertex_capacity: Pre-size hint for vertex storage.
        edge_capacity: Pre-size hint for edge storage.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    recycle_indices: bool = True
    history: bool = True
    vertex_capacity: int = Field(default=0, ge=0)
    edge_capacity: int = Field(default=0, ge=0)

    @classmethod
    def resolve(cls, options: GraphOptions | None = None, **overrides: Any) -> GraphOptions:
        """Merge keyword overrides over ``options`` (or the defaults)."""
        if options is None:
            return cls(**overrides)
        if not overrides:
            return options
        return cls(**{**options.model_dump(), **overrides})
