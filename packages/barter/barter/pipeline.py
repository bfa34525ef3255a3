"""Pipeline - ordered systems executed once per simulation pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from barter.access import Access, SystemSpec
from barter.types import Outcome, Phase, SimulationContext
from barter.world import World

logger = logging.getLogger(__name__)


@dataclass
class PassReport:
    """Outcomes collected from one pipeline pass."""

    tick: int
    systems: list[str] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)

    @property
    def failures(self) -> list[Outcome]:
        return [o for o in self.outcomes if not o.ok]

    def for_system(self, name: str) -> list[Outcome]:
        return [o for o in self.outcomes if o.system == name]


class Pipeline:
    def __init__(self) -> None:
        self._systems: list[SystemSpec] = []

    @property
    def names(self) -> list[str]:
        return [s.name for s in self._systems]

    def add(self, spec: SystemSpec) -> None:
        """Append *spec*; every ``after`` dependency must already be present."""
        names = self.names
        if spec.name in names:
            raise ValueError(f"System {spec.name!r} already in pipeline")
        missing = [dep for dep in spec.after if dep not in names]
        if missing:
            raise ValueError(
                f"System {spec.name!r} must run after {', '.join(missing)}, "
                "which are not in the pipeline yet"
            )
        self._systems.append(spec)

    def get(self, name: str) -> SystemSpec:
        for spec in self._systems:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def run_pass(self, world: World, ctx: SimulationContext) -> PassReport:
        """Run every system once, in order, and collect their outcomes."""
        report = PassReport(tick=ctx.tick)
        if ctx.phase is not Phase.RUN:
            logger.debug("tick %d: phase is %s, pass skipped", ctx.tick, ctx.phase.value)
            return report
        for spec in self._systems:
            result = spec.run(Access(world, spec), ctx)
            report.systems.append(spec.name)
            if result is not None:
                report.outcomes.extend(result)
            logger.debug("tick %d: %s done", ctx.tick, spec.name)
        for failure in report.failures:
            logger.warning(
                "tick %d: %s failed for agent %s: %s",
                ctx.tick, failure.system, failure.agent, failure.detail,
            )
        return report

    def __len__(self) -> int:
        return len(self._systems)
