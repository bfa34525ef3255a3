"""Simulation - the world, its pipeline and the shared context, assembled."""
from __future__ import annotations

import logging

from barter import AgentId, PassReport, Phase, Pipeline, SimulationContext, World
from barter_goods import (
    Fills,
    GoodTable,
    Keeps,
    Needs,
    Stockpile,
    make_consumption_system,
    make_decay_system,
    validate_needs,
)
from barter_sim.config import SimConfig
from barter_sim.report import report_lines
from barter_sim.seed import DEFAULT_SEED, SeedError, SeedSet, load_defines
from barter_sim.states import StateMachine
from barter_trust import (
    ActivityQueue,
    Acts,
    BeliefEntry,
    Beliefs,
    make_activity_system,
)

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, config: SimConfig | None = None, seed: SeedSet | None = None) -> None:
        self.config = config or SimConfig()
        self.world = World()
        self.pipeline = Pipeline()
        self.context = SimulationContext()
        self.queue = ActivityQueue()
        self.goods = GoodTable()
        self.agents: dict[str, AgentId] = {}
        self.last_report: PassReport | None = None
        self._seed = seed
        self._loaded = False

        self.pipeline.add(make_decay_system(self.config.decay_factor))
        self.pipeline.add(make_consumption_system(self.config.zero_need))
        if self.config.activities:
            self.pipeline.add(make_activity_system(
                self.queue,
                default_trust=self.config.default_trust,
                trust_step=self.config.trust_step,
            ))

    @property
    def loaded(self) -> bool:
        return self._loaded

    def resolve_seed(self) -> SeedSet:
        """Explicit seed first, then the defines file, then the built-in seed."""
        if self._seed is not None:
            return self._seed
        if self.config.defines is not None:
            return load_defines(self.config.defines)
        return DEFAULT_SEED

    def load(self) -> None:
        """Create every seeded agent. Runs once."""
        if self._loaded:
            raise RuntimeError("simulation already loaded")
        seed = self.resolve_seed()
        self.goods = seed.table()
        self.context.phase = Phase.WAIT

        for agent in seed.agents:
            needs = Needs(needs=agent.needs)
            validate_needs(needs, self.config.zero_need)
            aid = self.world.spawn()
            self.world.attach(aid, Stockpile(goods=dict(agent.stockpile)))
            self.world.attach(aid, needs)
            self.world.attach(aid, Fills())
            self.world.attach(aid, Keeps(keeps=dict(agent.keeps)))
            self.world.attach(aid, Beliefs())
            self.world.attach(aid, Acts(acts=list(agent.acts)))
            self.agents[agent.name] = aid

        for agent in seed.agents:
            aid = self.agents[agent.name]
            for belief in agent.beliefs:
                other = self.agents[belief.other]
                entry = BeliefEntry(aid, other, belief.trust, belief.last_amount)
                for holder in (aid, other):
                    beliefs = self.world.get(holder, Beliefs)
                    existing = beliefs.get(aid, other)
                    if existing is not None and existing != entry:
                        raise SeedError(
                            f"conflicting beliefs for {agent.name!r} and {belief.other!r}"
                        )
                    beliefs.put(entry)

        self._loaded = True
        logger.info(
            "loaded %d agents trading %d goods", len(self.agents), len(self.goods)
        )

    def agent(self, name: str) -> AgentId:
        return self.agents[name]

    def run_pass(self) -> PassReport:
        """Run the pipeline once under the current context."""
        report = self.pipeline.run_pass(self.world, self.context)
        self.last_report = report
        if self.config.report:
            for line in report_lines(self):
                logger.info("%s", line)
        return report


def build_simulation(
    config: SimConfig | None = None, seed: SeedSet | None = None
) -> StateMachine:
    """Assemble a Simulation and start its state machine (Load -> Wait)."""
    machine = StateMachine(Simulation(config, seed))
    machine.start()
    return machine
