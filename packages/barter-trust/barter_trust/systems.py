"""System factory for trust-mediated production and trade."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from barter import Outcome, Phase, SystemSpec
from barter_goods import CONSUMPTION, Stockpile
from barter_trust.activity import Party, attempt_production, attempt_trade
from barter_trust.acts import Acts
from barter_trust.beliefs import Beliefs
from barter_trust.queue import ActivityQueue, ProduceRequest, TradeRequest
from barter_trust.types import ActivityError, InvalidRelation, UnknownActivity

if TYPE_CHECKING:
    from barter import Access, AgentId, ReadHandle, SimulationContext

logger = logging.getLogger(__name__)

ACTIVITY = "activity"


def _need(handle: ReadHandle, agent: AgentId, exc: type[ActivityError]):
    if not handle.has(agent):
        raise exc(f"agent {agent} has no {handle.ctype.__name__}")
    return handle.get(agent)


def make_activity_system(
    queue: ActivityQueue,
    default_trust: float = 0.5,
    trust_step: float = 0.1,
) -> SystemSpec:
    """Return a system that executes queued activity requests each run tick.

    Every request yields one outcome; a failed request never stops the
    rest of the queue. Runs after consumption.
    """

    def activity_system(access: Access, ctx: SimulationContext) -> list[Outcome]:
        outcomes: list[Outcome] = []
        if ctx.phase is not Phase.RUN:
            return outcomes
        stockpiles = access.write(Stockpile)
        beliefs = access.write(Beliefs)
        acts = access.read(Acts)

        for request in queue.drain():
            agent = request.agent if isinstance(request, ProduceRequest) else request.left
            try:
                if isinstance(request, ProduceRequest):
                    detail = _produce(request, stockpiles, acts)
                else:
                    detail = _trade(request, stockpiles, beliefs, acts,
                                    default_trust, trust_step)
            except ActivityError as err:
                outcomes.append(Outcome(ACTIVITY, agent, False, str(err), err))
                continue
            logger.debug("tick %d: agent %d %s", ctx.tick, agent, detail)
            outcomes.append(Outcome(ACTIVITY, agent, True, detail))
        return outcomes

    return SystemSpec(
        ACTIVITY,
        activity_system,
        reads={Acts},
        writes={Stockpile, Beliefs},
        after=(CONSUMPTION,),
    )


def _produce(request: ProduceRequest, stockpiles, acts) -> str:
    production = _need(acts, request.agent, UnknownActivity).production(request.activity)
    stock = _need(stockpiles, request.agent, ActivityError)
    result = attempt_production(stock, production, request.scale)
    return f"produced {result.activity} x{result.scale:g}"


def _trade(request: TradeRequest, stockpiles, beliefs, acts,
           default_trust: float, trust_step: float) -> str:
    if request.left == request.right:
        raise InvalidRelation(f"agent {request.left} cannot trade with itself")
    parties = []
    for agent, good, quantity in (
        (request.left, request.left_good, request.left_quantity),
        (request.right, request.right_good, request.right_quantity),
    ):
        parties.append(Party(
            agent=agent,
            stockpile=_need(stockpiles, agent, InvalidRelation),
            beliefs=_need(beliefs, agent, InvalidRelation),
            act=_need(acts, agent, UnknownActivity).trade(),
            good=good,
            quantity=quantity,
        ))
    result = attempt_trade(*parties, default_trust=default_trust, trust_step=trust_step)
    return (
        f"traded {result.left_sent:g} {request.left_good} for "
        f"{result.right_sent:g} {request.right_good} with agent {request.right} "
        f"(trust {result.relation.trust:.2f})"
    )
