"""barter-trust - beliefs, activities and the trust-mediated activity system."""
from barter_trust.activity import (
    Party,
    ProductionResult,
    TradeResult,
    attempt_production,
    attempt_trade,
)
from barter_trust.acts import Activity, Acts
from barter_trust.beliefs import BeliefEntry, Beliefs, pair_key
from barter_trust.queue import ActivityQueue, ProduceRequest, TradeRequest
from barter_trust.systems import ACTIVITY, make_activity_system
from barter_trust.types import (
    ActivityError,
    InsufficientResources,
    InvalidRelation,
    Production,
    Trade,
    UnknownActivity,
)

__all__ = [
    "ACTIVITY",
    "Activity",
    "ActivityError",
    "ActivityQueue",
    "Acts",
    "BeliefEntry",
    "Beliefs",
    "InsufficientResources",
    "InvalidRelation",
    "Party",
    "ProduceRequest",
    "Production",
    "ProductionResult",
    "Trade",
    "TradeRequest",
    "TradeResult",
    "UnknownActivity",
    "attempt_production",
    "attempt_trade",
    "make_activity_system",
]
