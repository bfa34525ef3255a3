"""Declared data access: system specs and typed table handles."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType, MethodType
from typing import Any, Generator, Generic, Iterator, TypeVar, cast

from barter.types import AccessError, AgentId, SystemFn
from barter.world import World

T = TypeVar("T")


@dataclass(frozen=True)
class SystemSpec:
    """A system together with the component kinds it reads and writes.

    Attributes:
        name: Unique name within a pipeline.
        run: ``run(access, ctx)``; may return an iterable of outcomes.
        reads: Component kinds the system may only read.
        writes: Component kinds the system may read and write.
        after: Names of systems that must run earlier in the same pass.
    """

    name: str
    run: SystemFn
    reads: frozenset[type] = field(default_factory=frozenset)
    writes: frozenset[type] = field(default_factory=frozenset)
    after: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("SystemSpec name must be non-empty")
        object.__setattr__(self, "reads", frozenset(self.reads))
        object.__setattr__(self, "writes", frozenset(self.writes))
        object.__setattr__(self, "after", tuple(self.after))
        overlap = self.reads & self.writes
        if overlap:
            names = ", ".join(sorted(ct.__name__ for ct in overlap))
            raise AccessError(
                f"System {self.name!r} declares {names} as both read and write"
            )

    @property
    def declared(self) -> frozenset[type]:
        return self.reads | self.writes


class ReadOnlyView(Generic[T]):
    """Read-only proxy over one component.

    Assignment raises AccessError. Dict, list and set fields come back as
    mapping proxies, tuples and frozensets, and the component's own methods
    run against the proxy, so a method that mutates fails instead.
    """

    __slots__ = ("_component",)

    def __init__(self, component: T) -> None:
        object.__setattr__(self, "_component", component)

    def __getattr__(self, name: str) -> Any:
        value = getattr(self._component, name)
        if isinstance(value, dict):
            return MappingProxyType(value)
        if isinstance(value, list):
            return tuple(value)
        if isinstance(value, set):
            return frozenset(value)
        if isinstance(value, MethodType) and value.__self__ is self._component:
            return MethodType(value.__func__, self)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AccessError(
            f"{type(self._component).__name__} is read-only here; cannot set {name!r}"
        )

    def __delattr__(self, name: str) -> None:
        raise AccessError(
            f"{type(self._component).__name__} is read-only here; cannot delete {name!r}"
        )

    def __len__(self) -> int:
        return len(self._component)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._component)  # type: ignore[call-overload]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReadOnlyView):
            other = other._component
        return self._component == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ReadOnlyView({self._component!r})"


class ReadHandle(Generic[T]):
    """Read view over one component table; components come back read-only."""

    __slots__ = ("_ctype", "_table", "_world")

    def __init__(self, world: World, ctype: type[T]) -> None:
        self._world = world
        self._ctype = ctype
        self._table = world.table(ctype)

    @property
    def ctype(self) -> type[T]:
        return self._ctype

    def get(self, agent: AgentId) -> T:
        return cast(T, ReadOnlyView(self._world.get(agent, self._ctype)))

    def has(self, agent: AgentId) -> bool:
        return self._world.has(agent, self._ctype)

    def agents(self) -> list[AgentId]:
        return sorted(a for a in self._table if self._world.alive(a))

    def items(self) -> Iterator[tuple[AgentId, T]]:
        for agent in self.agents():
            yield agent, cast(T, ReadOnlyView(self._table[agent]))

    def __len__(self) -> int:
        return len(self._table)


class WriteHandle(ReadHandle[T]):
    """Read/write view over one component table."""

    __slots__ = ()

    def get(self, agent: AgentId) -> T:
        return self._world.get(agent, self._ctype)

    def items(self) -> Iterator[tuple[AgentId, T]]:
        for agent in self.agents():
            yield agent, cast(T, self._table[agent])

    def set(self, agent: AgentId, component: T) -> None:
        if not isinstance(component, self._ctype):
            raise TypeError(
                f"Expected {self._ctype.__name__}, got {type(component).__name__}"
            )
        self._world.attach(agent, component)


class Access:
    """Handles granted to one system for the duration of its ``run`` call."""

    def __init__(self, world: World, spec: SystemSpec) -> None:
        self._world = world
        self._spec = spec

    @property
    def system(self) -> str:
        return self._spec.name

    def read(self, ctype: type[T]) -> ReadHandle[T]:
        if ctype not in self._spec.declared:
            raise AccessError(
                f"System {self._spec.name!r} did not declare access to {ctype.__name__}"
            )
        return ReadHandle(self._world, ctype)

    def write(self, ctype: type[T]) -> WriteHandle[T]:
        if ctype not in self._spec.writes:
            raise AccessError(
                f"System {self._spec.name!r} did not declare write access to "
                f"{ctype.__name__}"
            )
        return WriteHandle(self._world, ctype)

    def join(
        self, *ctypes: type
    ) -> Generator[tuple[AgentId, tuple[Any, ...]], None, None]:
        """Iterate agents holding every listed kind; all must be declared.

        Kinds the system does not write are yielded as read-only views.
        """
        undeclared = [ct for ct in ctypes if ct not in self._spec.declared]
        if undeclared:
            names = ", ".join(ct.__name__ for ct in undeclared)
            raise AccessError(
                f"System {self._spec.name!r} did not declare access to {names}"
            )
        writable = [ct in self._spec.writes for ct in ctypes]
        for agent, components in self._world.query(*ctypes):
            yield agent, tuple(
                c if w else ReadOnlyView(c) for c, w in zip(components, writable)
            )

