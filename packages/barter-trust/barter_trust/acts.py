"""Acts component: the activities an agent may execute."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from barter_trust.types import Production, Trade, UnknownActivity

Activity = Union[Production, Trade]


@dataclass
class Acts:
    acts: list[Activity] = field(default_factory=list)

    def __post_init__(self) -> None:
        ids = [a.id for a in self.acts if isinstance(a, Production)]
        if len(ids) != len(set(ids)):
            raise ValueError("Production ids must be unique within Acts")

    def production(self, activity_id: str) -> Production:
        for act in self.acts:
            if isinstance(act, Production) and act.id == activity_id:
                return act
        raise UnknownActivity(f"no production {activity_id!r}")

    def trade(self) -> Trade:
        for act in self.acts:
            if isinstance(act, Trade):
                return act
        raise UnknownActivity("no trade activity")
