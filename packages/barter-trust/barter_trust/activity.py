"""Production and trade execution against agent stockpiles."""
from __future__ import annotations

from dataclasses import dataclass, field, replace

from barter import AgentId
from barter_goods import Stockpile
from barter_trust.beliefs import BeliefEntry, Beliefs, pair_key
from barter_trust.types import InsufficientResources, InvalidRelation, Production, Trade


@dataclass(frozen=True)
class ProductionResult:
    activity: str
    scale: float
    consumed: dict[str, float] = field(default_factory=dict)
    produced: dict[str, float] = field(default_factory=dict)
    cost: float = 0.0


@dataclass
class Party:
    """One side of a trade: who offers what, and from which holdings."""

    agent: AgentId
    stockpile: Stockpile
    beliefs: Beliefs
    act: Trade
    good: str
    quantity: float

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"offered quantity must be > 0, got {self.quantity}")


@dataclass(frozen=True)
class TradeResult:
    left_sent: float
    right_sent: float
    relation: BeliefEntry
    completed: bool


def _require(stockpile: Stockpile, required: dict[str, float]) -> None:
    for good, amount in required.items():
        held = stockpile.count(good)
        if held < amount:
            raise InsufficientResources(good, amount, held)


def attempt_production(
    stockpile: Stockpile, production: Production, scale: float
) -> ProductionResult:
    """Run *production* at *scale*, all or nothing.

    Consumes ``scale * inputs`` and the activity cost (when it has a cost
    good), then adds ``scale * outputs``. Raises InsufficientResources
    without touching the stockpile if anything is short.
    """
    if scale < 0:
        raise ValueError(f"scale must be >= 0, got {scale}")
    if scale == 0:
        return ProductionResult(production.id, 0.0)

    consumed = {g: q * scale for g, q in production.inputs.items()}
    cost = production.cost(scale)
    required = dict(consumed)
    if production.cost_good is not None and cost > 0:
        required[production.cost_good] = required.get(production.cost_good, 0.0) + cost
    _require(stockpile, required)

    for good, amount in required.items():
        stockpile.take(good, amount)
    produced = {g: q * scale for g, q in production.outputs.items()}
    for good, amount in produced.items():
        stockpile.add(good, amount)
    return ProductionResult(production.id, scale, consumed, produced, cost)


def _capacity(party: Party, avail: float) -> float:
    """Most of its offered good *party* can send once its own trade cost is paid."""
    act = party.act
    if act.cost_good != party.good:
        return avail
    return max(0.0, (avail - act.cost_fixed) / (1.0 + act.cost_scale))


def attempt_trade(
    left: Party,
    right: Party,
    *,
    default_trust: float = 0.5,
    trust_step: float = 0.1,
) -> TradeResult:
    """Exchange goods between two parties, scaled by their mutual trust.

    Both offers shrink by the same fraction: the pair's trust times the
    share of each offer its stockpile can actually cover, net of the trade
    cost when that cost is paid in the offered good. Each party pays its
    own trade cost on what it sends. The relation is written back to both
    parties' Beliefs; trust rises when neither stockpile limited the
    exchange and falls otherwise.
    """
    key = pair_key(left.agent, right.agent)
    entry = left.beliefs.get(*key) or right.beliefs.lookup_or_default(*key, default_trust)
    trust = min(1.0, max(0.0, entry.trust))
    if trust == 0.0:
        raise InvalidRelation(f"agents {key[0]} and {key[1]} do not trust each other")

    avail_left = left.stockpile.count(left.good)
    avail_right = right.stockpile.count(right.good)
    cap_left = _capacity(left, avail_left)
    cap_right = _capacity(right, avail_right)
    if cap_left <= 0.0:
        raise InsufficientResources(left.good, left.quantity, avail_left)
    if cap_right <= 0.0:
        raise InsufficientResources(right.good, right.quantity, avail_right)

    cover = min(1.0, cap_left / left.quantity, cap_right / right.quantity)
    fraction = trust * cover
    left_sent = min(left.quantity * fraction, cap_left)
    right_sent = min(right.quantity * fraction, cap_right)

    debits: list[tuple[Party, dict[str, float]]] = []
    for party, sent, held in ((left, left_sent, avail_left), (right, right_sent, avail_right)):
        required = {party.good: sent}
        cost = party.act.cost(sent)
        if party.act.cost_good is not None and cost > 0:
            required[party.act.cost_good] = required.get(party.act.cost_good, 0.0) + cost
        if party.act.cost_good == party.good:
            # sent was capped so that sent + cost fits; absorb rounding.
            required[party.good] = min(required[party.good], held)
        _require(party.stockpile, required)
        debits.append((party, required))

    for party, required in debits:
        for good, amount in required.items():
            party.stockpile.take(good, amount)
    right.stockpile.add(left.good, left_sent)
    left.stockpile.add(right.good, right_sent)

    completed = cover >= 1.0
    step = trust_step if completed else -trust_step
    relation = replace(
        entry,
        trust=min(1.0, max(0.0, trust + step)),
        last_amount=left_sent + right_sent,
    )
    left.beliefs.put(relation)
    right.beliefs.put(relation)
    return TradeResult(left_sent, right_sent, relation, completed)
