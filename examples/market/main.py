"""Market -- two agents milling and swapping goods, one tick per Enter.

Demonstrates:
- Seeding agents from a JSON defines file
- Driving the Load/Wait/Run state machine with TickAdvance events
- Queueing production and trade requests between ticks
- Reading per-tick reports from the log

Run: python examples/market/main.py [--ticks N] [--defines FILE]
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from barter_goods import Fills, Stockpile
from barter_sim import SimConfig, TickAdvance, build_simulation
from barter_trust import ProduceRequest, TradeRequest

HERE = Path(__file__).resolve().parent


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Market -- barter sandbox demo")
    p.add_argument("--defines", type=Path, default=HERE / "defines" / "define.json",
                   help="JSON defines file (default: bundled market)")
    p.add_argument("--ticks", type=int, default=0,
                   help="Run N ticks and exit (default: interactive, Enter advances)")
    p.add_argument("--verbose", action="store_true", help="Log per-system detail")
    return p.parse_args()


def queue_market_day(sim) -> None:
    """The farmer sells wheat for flour; the miller grinds what it bought."""
    farmer = sim.agent("farmer")
    miller = sim.agent("miller")
    sim.queue.enqueue(TradeRequest(farmer, miller, "wheat", 4.0, "flour", 1.5))
    sim.queue.enqueue(ProduceRequest(miller, "mill", 2.0))


def print_summary(sim) -> None:
    for name, aid in sim.agents.items():
        stock = sim.world.get(aid, Stockpile).goods
        fills = sim.world.get(aid, Fills).fills
        hungry = [g for g, f in fills.items() if f < 1.0]
        print(f"  {name:8s} stock={ {g: round(q, 2) for g, q in stock.items()} }"
              f" short={hungry or '-'}")
    if sim.last_report is not None:
        for failure in sim.last_report.failures:
            print(f"  ! {failure.system}: agent {failure.agent}: {failure.detail}")


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    machine = build_simulation(SimConfig(defines=args.defines))
    sim = machine.sim
    print(f"=== Market ({len(sim.agents)} agents, goods: {', '.join(sim.goods)}) ===\n")

    ticks = 0
    while True:
        if args.ticks:
            if ticks >= args.ticks:
                break
        else:
            try:
                line = input("[Enter] advance, q quit > ")
            except EOFError:
                break
            if line.strip().lower() == "q":
                break
        queue_market_day(sim)
        machine.advance(TickAdvance())
        ticks += 1
        print_summary(sim)


if __name__ == "__main__":
    main()
