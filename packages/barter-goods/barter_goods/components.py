"""Stockpile, Needs, Fills and Keeps components."""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


class InvalidNeed(ValueError):
    """Raised for a need amount that cannot be rationed against."""

    def __init__(self, good: str, amount: float, message: str) -> None:
        self.good = good
        self.amount = amount
        super().__init__(message)


class ZeroNeedPolicy(enum.Enum):
    """What a zero need amount means.

    REJECT: zero needs are invalid and refused at agent creation.
    SATISFIED: a zero need is always fully met and consumes nothing.
    """

    REJECT = "reject"
    SATISFIED = "satisfied"


def _check_amount(amount: float) -> None:
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"amount must be finite and >= 0, got {amount}")


def _check_quantities(kind: str, values: Mapping[str, float]) -> None:
    for good, amount in values.items():
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(
                f"{kind} quantity for {good!r} must be finite and >= 0, got {amount}"
            )


@dataclass
class Stockpile:
    """Authoritative current holdings (good -> quantity)."""

    goods: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_quantities("Stockpile", self.goods)

    def count(self, good: str) -> float:
        return self.goods.get(good, 0.0)

    def add(self, good: str, amount: float) -> None:
        _check_amount(amount)
        self.goods[good] = self.goods.get(good, 0.0) + amount

    def take(self, good: str, amount: float) -> None:
        """Remove exactly *amount*; raises ValueError if not held."""
        _check_amount(amount)
        held = self.goods.get(good, 0.0)
        if amount > held:
            raise ValueError(f"cannot take {amount} {good!r}, only {held} held")
        self.goods[good] = held - amount


@dataclass(frozen=True)
class Needs:
    """Per-tick demand schedule. Immutable after creation."""

    needs: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for good, amount in self.needs.items():
            if not math.isfinite(amount) or amount < 0:
                raise InvalidNeed(
                    good, amount, f"need for {good!r} must be finite and >= 0, got {amount}"
                )
        object.__setattr__(self, "needs", MappingProxyType(dict(self.needs)))


@dataclass
class Fills:
    """Fraction of each need satisfied on the last run tick, in [0, 1]."""

    fills: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for good, fraction in self.fills.items():
            if not 0.0 <= fraction <= 1.0:
                raise ValueError(f"fill for {good!r} must be in [0, 1], got {fraction}")

    def get(self, good: str) -> float:
        return self.fills.get(good, 0.0)


@dataclass
class Keeps:
    """Quantity banked from past consumption; decays every run tick."""

    keeps: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_quantities("Keeps", self.keeps)

    def get(self, good: str) -> float:
        return self.keeps.get(good, 0.0)


def validate_needs(needs: Needs, policy: ZeroNeedPolicy) -> None:
    """Refuse zero needs when *policy* is REJECT."""
    if policy is not ZeroNeedPolicy.REJECT:
        return
    for good, amount in needs.needs.items():
        if amount == 0:
            raise InvalidNeed(good, amount, f"need for {good!r} must be > 0")
