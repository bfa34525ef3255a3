"""Shared type aliases, context and errors for the barter core."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable

AgentId = int


class Phase(enum.Enum):
    WAIT = "wait"
    RUN = "run"


@dataclass
class SimulationContext:
    """Phase and tick number threaded through every system call.

    The phase is RUN only for the duration of one pipeline pass.
    """

    phase: Phase = Phase.WAIT
    tick: int = 0

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUN


@dataclass(frozen=True)
class Outcome:
    """Result of one unit of per-tick work (an agent, a good, a request)."""

    system: str
    agent: AgentId | None
    ok: bool
    detail: str = ""
    error: Exception | None = None


class DeadAgentError(KeyError):
    """Raised when operating on an agent that was never spawned."""

    def __init__(self, agent: int, message: str) -> None:
        self.agent = agent
        super().__init__(message)


class AccessError(Exception):
    """Raised when a system touches a component kind it did not declare."""


if TYPE_CHECKING:
    from barter.access import Access

SystemFn = Callable[["Access", SimulationContext], "Iterable[Outcome] | None"]
