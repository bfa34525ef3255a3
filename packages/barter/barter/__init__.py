"""barter - agent store and ordered system pipeline for the economic sandbox."""

from barter.access import Access, ReadHandle, ReadOnlyView, SystemSpec, WriteHandle
from barter.pipeline import PassReport, Pipeline
from barter.types import (
    AccessError,
    AgentId,
    DeadAgentError,
    Outcome,
    Phase,
    SimulationContext,
)
from barter.world import World

__all__ = [
    "Access",
    "AccessError",
    "AgentId",
    "DeadAgentError",
    "Outcome",
    "PassReport",
    "Phase",
    "Pipeline",
    "ReadHandle",
    "ReadOnlyView",
    "SimulationContext",
    "SystemSpec",
    "World",
    "WriteHandle",
]
