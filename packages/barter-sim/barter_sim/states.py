"""Load / Wait / Run states on a push-down stack.

Load seeds the world once and switches to Wait. Wait counts how often it
regains control and, on a TickAdvance event, pushes Run. Run raises the
shared phase to RUN, executes the pipeline once and pops back to the
Wait it came from; the phase is WAIT again as soon as Run stops.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from barter import Phase

if TYPE_CHECKING:
    from barter_sim.simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickAdvance:
    """Advance the simulation by one tick."""


class TransKind(enum.Enum):
    NONE = "none"
    PUSH = "push"
    POP = "pop"
    SWITCH = "switch"


@dataclass(frozen=True)
class Trans:
    kind: TransKind
    state: State | None = None

    @classmethod
    def none(cls) -> Trans:
        return cls(TransKind.NONE)

    @classmethod
    def push(cls, state: State) -> Trans:
        return cls(TransKind.PUSH, state)

    @classmethod
    def pop(cls) -> Trans:
        return cls(TransKind.POP)

    @classmethod
    def switch(cls, state: State) -> Trans:
        return cls(TransKind.SWITCH, state)


class State:
    """Base state; every hook is a no-op by default."""

    name = "state"

    def on_start(self, sim: Simulation) -> None:
        pass

    def on_stop(self, sim: Simulation) -> None:
        pass

    def on_pause(self, sim: Simulation) -> None:
        pass

    def on_resume(self, sim: Simulation) -> None:
        pass

    def handle_event(self, sim: Simulation, event: Any) -> Trans:
        return Trans.none()

    def update(self, sim: Simulation) -> Trans:
        return Trans.none()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LoadState(State):
    name = "load"

    def on_start(self, sim: Simulation) -> None:
        sim.context.phase = Phase.WAIT
        sim.load()

    def update(self, sim: Simulation) -> Trans:
        return Trans.switch(WaitState(iteration=0))


class WaitState(State):
    name = "wait"

    def __init__(self, iteration: int = 0) -> None:
        self.iteration = iteration

    def on_resume(self, sim: Simulation) -> None:
        self.iteration += 1

    def handle_event(self, sim: Simulation, event: Any) -> Trans:
        if isinstance(event, TickAdvance):
            logger.info("Iteration %d Beginning", self.iteration)
            return Trans.push(RunState(iteration=self.iteration))
        return Trans.none()

    def __repr__(self) -> str:
        return f"WaitState(iteration={self.iteration})"


class RunState(State):
    name = "run"

    def __init__(self, iteration: int) -> None:
        self.iteration = iteration

    def on_start(self, sim: Simulation) -> None:
        sim.context.tick = self.iteration
        sim.context.phase = Phase.RUN

    def on_stop(self, sim: Simulation) -> None:
        sim.context.phase = Phase.WAIT

    def update(self, sim: Simulation) -> Trans:
        logger.info("Iteration %d Running", self.iteration)
        sim.run_pass()
        logger.info("Iteration %d Ending", self.iteration)
        return Trans.pop()

    def __repr__(self) -> str:
        return f"RunState(iteration={self.iteration})"


class StateMachine:
    """Push-down automaton driving a Simulation one event at a time."""

    def __init__(self, sim: Simulation, initial: State | None = None) -> None:
        self._sim = sim
        self._initial = initial if initial is not None else LoadState()
        self._stack: list[State] = []
        self._started = False

    @property
    def sim(self) -> Simulation:
        return self._sim

    @property
    def stack(self) -> tuple[State, ...]:
        return tuple(self._stack)

    @property
    def top(self) -> State | None:
        return self._stack[-1] if self._stack else None

    @property
    def running(self) -> bool:
        return bool(self._stack)

    def start(self) -> tuple[State, ...]:
        if self._started:
            raise RuntimeError("state machine already started")
        try:
            self._push(self._initial)
            self._settle()
        except BaseException:
            while self._stack:
                self._pop()
            raise
        self._started = True
        return self.stack

    def advance(self, event: Any) -> tuple[State, ...]:
        """Feed one event to the top state and apply what follows from it."""
        if not self._started:
            raise RuntimeError("state machine not started")
        if not self._stack:
            return self.stack
        self._apply(self._stack[-1].handle_event(self._sim, event))
        self._settle()
        return self.stack

    def _settle(self) -> None:
        while self._stack:
            top = self._stack[-1]
            try:
                trans = top.update(self._sim)
            except BaseException:
                # A failing state is stopped and removed before the error surfaces.
                self._pop()
                raise
            if trans.kind is TransKind.NONE:
                return
            self._apply(trans)

    def _apply(self, trans: Trans) -> None:
        if trans.kind is TransKind.NONE:
            return
        if trans.kind is TransKind.POP:
            self._pop()
            return
        if trans.state is None:
            raise ValueError(f"{trans.kind.value} transition needs a target state")
        if trans.kind is TransKind.PUSH:
            if self._stack:
                self._stack[-1].on_pause(self._sim)
            self._push(trans.state)
        else:
            old = self._stack.pop()
            old.on_stop(self._sim)
            self._push(trans.state)
        logger.debug("states: %s", self._stack)

    def _push(self, state: State) -> None:
        self._stack.append(state)
        try:
            state.on_start(self._sim)
        except BaseException:
            self._stack.pop()
            raise

    def _pop(self) -> None:
        old = self._stack.pop()
        old.on_stop(self._sim)
        if self._stack:
            self._stack[-1].on_resume(self._sim)
