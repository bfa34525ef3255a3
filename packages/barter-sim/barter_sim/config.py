"""
Simulation configuration.

Every tunable of the tick pipeline lives here; the systems take their
parameters from a SimConfig when the simulation is built.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from barter_goods import ZeroNeedPolicy


@dataclass
class SimConfig:
    """
    Parameters for one simulation.

    Use ``to_dict()`` / ``from_dict()`` (or the JSON variants) to store
    and compare configurations.
    """

    # === Decay ===
    decay_factor: float = 0.5  # multiplier applied to every keep per run tick

    # === Consumption ===
    zero_need: ZeroNeedPolicy = ZeroNeedPolicy.REJECT

    # === Activities ===
    activities: bool = True  # wire the activity system after consumption
    default_trust: float = 0.5  # trust assumed for pairs with no relation yet
    trust_step: float = 0.1  # trust nudge after each trade

    # === Seed data ===
    defines: Path | None = None  # JSON defines file; None uses the built-in seed

    # === Reporting ===
    report: bool = True  # log stockpiles and fills after every run tick

    def __post_init__(self) -> None:
        if isinstance(self.zero_need, str):
            self.zero_need = ZeroNeedPolicy(self.zero_need)
        if isinstance(self.defines, str):
            self.defines = Path(self.defines)
        if not 0.0 <= self.decay_factor <= 1.0:
            raise ValueError(f"decay_factor must be in [0, 1], got {self.decay_factor}")
        if not 0.0 <= self.default_trust <= 1.0:
            raise ValueError(f"default_trust must be in [0, 1], got {self.default_trust}")
        if not 0.0 <= self.trust_step <= 1.0:
            raise ValueError(f"trust_step must be in [0, 1], got {self.trust_step}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = dict(self.__dict__)
        d["zero_need"] = self.zero_need.value
        d["defines"] = str(self.defines) if self.defines is not None else None
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SimConfig:
        return cls(**d)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, s: str) -> SimConfig:
        return cls.from_dict(json.loads(s))
