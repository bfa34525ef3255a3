"""Per-tick, human-readable stockpile and fill summaries."""
from __future__ import annotations

from typing import TYPE_CHECKING

from barter_goods import Fills, Keeps, Stockpile

if TYPE_CHECKING:
    from barter_sim.simulation import Simulation


def _fmt(values: dict[str, float], order: list[str]) -> str:
    names = [g for g in order if g in values] + sorted(g for g in values if g not in order)
    return " ".join(f"{g}={values[g]:g}" for g in names)


def report_lines(sim: Simulation) -> list[str]:
    lines = []
    order = sim.goods.names()
    for name, aid in sim.agents.items():
        world = sim.world
        parts = [f"{name}:"]
        if world.has(aid, Stockpile):
            parts.append(f"stock[{_fmt(world.get(aid, Stockpile).goods, order)}]")
        if world.has(aid, Fills):
            parts.append(f"fills[{_fmt(world.get(aid, Fills).fills, order)}]")
        if world.has(aid, Keeps):
            parts.append(f"keeps[{_fmt(world.get(aid, Keeps).keeps, order)}]")
        lines.append(" ".join(parts))
    return lines
