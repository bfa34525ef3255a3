"""Beliefs component: pairwise trust relations keyed by unordered pair."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from barter import AgentId
from barter_trust.types import InvalidRelation

PairKey = tuple[AgentId, AgentId]


def pair_key(a: AgentId, b: AgentId) -> PairKey:
    """Canonical key for the unordered pair {a, b}."""
    if a == b:
        raise InvalidRelation(f"agent {a} cannot hold a relation with itself")
    return (a, b) if a < b else (b, a)


@dataclass(frozen=True)
class BeliefEntry:
    """Mutual trust and last exchanged amount between two agents.

    ``agent_a < agent_b`` always holds; construction reorders the pair.
    """

    agent_a: AgentId
    agent_b: AgentId
    trust: float = 0.5
    last_amount: float = 0.0

    def __post_init__(self) -> None:
        a, b = pair_key(self.agent_a, self.agent_b)
        object.__setattr__(self, "agent_a", a)
        object.__setattr__(self, "agent_b", b)
        if not 0.0 <= self.trust <= 1.0:
            raise ValueError(f"trust must be in [0, 1], got {self.trust}")
        if self.last_amount < 0:
            raise ValueError(f"last_amount must be >= 0, got {self.last_amount}")

    @property
    def key(self) -> PairKey:
        return (self.agent_a, self.agent_b)

    def other(self, agent: AgentId) -> AgentId:
        if agent == self.agent_a:
            return self.agent_b
        if agent == self.agent_b:
            return self.agent_a
        raise InvalidRelation(f"agent {agent} is not part of {self.key}")


@dataclass
class Beliefs:
    relations: dict[PairKey, BeliefEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key, entry in self.relations.items():
            if key != entry.key:
                raise InvalidRelation(f"relation {entry.key} stored under {key}")

    @classmethod
    def from_entries(cls, entries: Iterable[BeliefEntry]) -> Beliefs:
        beliefs = cls()
        for entry in entries:
            if entry.key in beliefs.relations:
                raise InvalidRelation(f"duplicate relation for pair {entry.key}")
            beliefs.put(entry)
        return beliefs

    def get(self, a: AgentId, b: AgentId) -> BeliefEntry | None:
        return self.relations.get(pair_key(a, b))

    def lookup_or_default(
        self, a: AgentId, b: AgentId, default_trust: float = 0.5
    ) -> BeliefEntry:
        entry = self.get(a, b)
        if entry is None:
            return BeliefEntry(a, b, trust=default_trust)
        return entry

    def put(self, entry: BeliefEntry) -> None:
        self.relations[entry.key] = entry

    def __len__(self) -> int:
        return len(self.relations)

    def __iter__(self) -> Iterator[BeliefEntry]:
        return iter(self.relations.values())
