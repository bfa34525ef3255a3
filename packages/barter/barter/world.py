"""World - agent arena and one typed table per component kind."""

from __future__ import annotations

from typing import Any, Generator, TypeVar, cast

from barter.types import AgentId, DeadAgentError

T = TypeVar("T")


class World:
    def __init__(self) -> None:
        self._tables: dict[type, dict[AgentId, Any]] = {}
        self._next_id: int = 0
        self._alive: set[AgentId] = set()

    def spawn(self) -> AgentId:
        aid = self._next_id
        self._next_id += 1
        self._alive.add(aid)
        return aid

    def attach(self, agent: AgentId, component: Any) -> None:
        ctype = type(component)
        if agent not in self._alive:
            raise DeadAgentError(
                agent,
                f"Cannot attach {ctype.__name__} to unknown agent {agent}",
            )
        self._tables.setdefault(ctype, {})[agent] = component

    def get(self, agent: AgentId, ctype: type[T]) -> T:
        if agent not in self._alive:
            raise DeadAgentError(agent, f"Agent {agent} does not exist")
        table = self._tables.get(ctype)
        if table is None or agent not in table:
            raise KeyError(f"Agent {agent} has no {ctype.__name__} component")
        return cast(T, table[agent])

    def has(self, agent: AgentId, ctype: type) -> bool:
        if agent not in self._alive:
            return False
        table = self._tables.get(ctype)
        return table is not None and agent in table

    def table(self, ctype: type) -> dict[AgentId, Any]:
        """Return the live table for *ctype*, creating an empty one if needed."""
        return self._tables.setdefault(ctype, {})

    def query(
        self, *ctypes: type
    ) -> Generator[tuple[AgentId, tuple[Any, ...]], None, None]:
        if not ctypes:
            return

        # Iterate the smallest table, probe the others.
        tables = [self._tables.get(ct) for ct in ctypes]
        if any(t is None for t in tables):
            return
        base = min(tables, key=len)  # type: ignore[arg-type]

        for aid in sorted(base):  # type: ignore[arg-type]
            if aid not in self._alive:
                continue
            components: list[Any] = []
            for table in tables:
                if aid not in table:  # type: ignore[operator]
                    break
                components.append(table[aid])  # type: ignore[index]
            else:
                yield aid, tuple(components)

    def agents(self) -> frozenset[AgentId]:
        return frozenset(self._alive)

    def alive(self, agent: AgentId) -> bool:
        return agent in self._alive
