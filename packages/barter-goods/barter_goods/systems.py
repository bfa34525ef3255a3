"""System factories for keep decay and need consumption."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from barter import Outcome, Phase, SystemSpec
from barter_goods.components import (
    Fills,
    InvalidNeed,
    Keeps,
    Needs,
    Stockpile,
    ZeroNeedPolicy,
)

if TYPE_CHECKING:
    from barter import Access, SimulationContext

logger = logging.getLogger(__name__)

DECAY = "decay"
CONSUMPTION = "consumption"


def make_decay_system(factor: float = 0.5) -> SystemSpec:
    """Return a system that scales every banked keep by *factor* each run tick."""
    if not 0.0 <= factor <= 1.0:
        raise ValueError(f"decay factor must be in [0, 1], got {factor}")

    def decay_system(access: Access, ctx: SimulationContext) -> None:
        if ctx.phase is not Phase.RUN:
            return
        for _aid, keep in access.write(Keeps).items():
            for good in keep.keeps:
                keep.keeps[good] *= factor

    return SystemSpec(DECAY, decay_system, writes={Keeps})


def make_consumption_system(
    zero_need: ZeroNeedPolicy = ZeroNeedPolicy.REJECT,
) -> SystemSpec:
    """Return a system that rations each agent's stockpile against its needs.

    A good is fully served when half the stockpile exceeds the need.
    Otherwise the stockpile is halved and the halved amount is both
    banked and measured against the need. Runs after decay.
    """

    def consumption_system(access: Access, ctx: SimulationContext) -> list[Outcome]:
        outcomes: list[Outcome] = []
        if ctx.phase is not Phase.RUN:
            return outcomes
        for aid, (stock, fill, keep, need) in access.join(Stockpile, Fills, Keeps, Needs):
            fill.fills.clear()
            rationed: list[str] = []
            failed = False
            for good, n in need.needs.items():
                if n == 0:
                    if zero_need is ZeroNeedPolicy.SATISFIED:
                        fill.fills[good] = 1.0
                        continue
                    err = InvalidNeed(good, n, f"need for {good!r} is zero")
                    fill.fills[good] = 0.0
                    outcomes.append(Outcome(CONSUMPTION, aid, False, str(err), err))
                    failed = True
                    continue
                if good not in stock.goods:
                    fill.fills[good] = 0.0
                    continue
                s = stock.goods[good]
                if s / 2.0 > n:
                    stock.goods[good] = s - n
                    keep.keeps[good] = keep.keeps.get(good, 0.0) + n
                    fill.fills[good] = 1.0
                else:
                    # Halve first; the halved amount is what gets banked and measured.
                    stock.goods[good] /= 2.0
                    keep.keeps[good] = keep.keeps.get(good, 0.0) + stock.goods[good]
                    fill.fills[good] = stock.goods[good] / n
                    rationed.append(good)
            if rationed:
                logger.debug("tick %d: agent %d rationed %s", ctx.tick, aid, rationed)
            if failed:
                continue
            outcomes.append(Outcome(
                CONSUMPTION, aid, True,
                "rationed: " + ", ".join(rationed) if rationed else "satisfied",
            ))
        return outcomes

    return SystemSpec(
        CONSUMPTION,
        consumption_system,
        reads={Needs},
        writes={Stockpile, Fills, Keeps},
        after=(DECAY,),
    )
