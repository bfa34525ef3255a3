"""Activity definitions and activity errors."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


class ActivityError(Exception):
    """Base class for failures local to production and trade."""


class InsufficientResources(ActivityError):
    """A stockpile cannot cover what an activity requires."""

    def __init__(self, good: str, required: float, available: float) -> None:
        self.good = good
        self.required = required
        self.available = available
        super().__init__(
            f"needs {required:g} {good!r} but only {available:g} available"
        )


class InvalidRelation(ActivityError):
    """The two parties cannot form or use a trust relation."""


class UnknownActivity(ActivityError):
    """The agent has no such activity (or no Acts at all)."""


def _frozen_quantities(kind: str, values: Mapping[str, float]) -> Mapping[str, float]:
    for good, amount in values.items():
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"{kind} for {good!r} must be finite and >= 0, got {amount}")
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class Production:
    """Immutable production definition.

    Attributes:
        id: Activity identifier, unique within one agent's Acts.
        cost_fixed: Cost charged once when scale > 0.
        cost_scale: Cost charged per unit of scale.
        inputs: Goods consumed per unit of scale.
        outputs: Goods produced per unit of scale.
        cost_good: Good the cost is paid in; None leaves the cost unpaid.
    """

    id: str
    cost_fixed: float = 0.0
    cost_scale: float = 0.0
    inputs: Mapping[str, float] = field(default_factory=dict)
    outputs: Mapping[str, float] = field(default_factory=dict)
    cost_good: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Production id must be non-empty")
        if self.cost_fixed < 0 or self.cost_scale < 0:
            raise ValueError("Production costs must be >= 0")
        object.__setattr__(self, "inputs", _frozen_quantities("input", self.inputs))
        object.__setattr__(self, "outputs", _frozen_quantities("output", self.outputs))

    def cost(self, scale: float) -> float:
        if scale <= 0:
            return 0.0
        return self.cost_fixed + self.cost_scale * scale


@dataclass(frozen=True)
class Trade:
    """Immutable trade capability; quantities are negotiated per exchange."""

    cost_fixed: float = 0.0
    cost_scale: float = 0.0
    cost_good: str | None = None

    def __post_init__(self) -> None:
        if self.cost_fixed < 0 or self.cost_scale < 0:
            raise ValueError("Trade costs must be >= 0")

    def cost(self, amount: float) -> float:
        if amount <= 0:
            return 0.0
        return self.cost_fixed + self.cost_scale * amount
