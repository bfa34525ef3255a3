"""barter-sim - configuration, seeding and the Load/Wait/Run tick states."""
from __future__ import annotations

from barter_sim.config import SimConfig
from barter_sim.report import report_lines
from barter_sim.seed import (
    DEFAULT_SEED,
    SeedAgent,
    SeedBelief,
    SeedError,
    SeedSet,
    load_defines,
    parse_defines,
)
from barter_sim.simulation import Simulation, build_simulation
from barter_sim.states import (
    LoadState,
    RunState,
    State,
    StateMachine,
    TickAdvance,
    Trans,
    TransKind,
    WaitState,
)

__all__ = [
    "DEFAULT_SEED",
    "LoadState",
    "RunState",
    "SeedAgent",
    "SeedBelief",
    "SeedError",
    "SeedSet",
    "SimConfig",
    "Simulation",
    "State",
    "StateMachine",
    "TickAdvance",
    "Trans",
    "TransKind",
    "WaitState",
    "build_simulation",
    "load_defines",
    "parse_defines",
    "report_lines",
]
