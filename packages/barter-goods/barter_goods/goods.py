"""GoodTable - fixed name/index mapping for goods known at load time."""
from __future__ import annotations

from typing import Iterator, Mapping, Sequence


class GoodTable:
    """Names are canonical; indices are a load-time optimization.

    Index order is the order names were given in.
    """

    def __init__(self, names: Sequence[str] = ()) -> None:
        self._names: list[str] = []
        self._index: dict[str, int] = {}
        for name in names:
            self.define(name)

    def define(self, name: str) -> int:
        """Register a good and return its index."""
        if not name:
            raise ValueError("good name must be non-empty")
        if name in self._index:
            raise ValueError(f"good {name!r} already defined")
        self._index[name] = len(self._names)
        self._names.append(name)
        return self._index[name]

    def index(self, name: str) -> int:
        if name not in self._index:
            raise KeyError(name)
        return self._index[name]

    def name(self, index: int) -> str:
        if not 0 <= index < len(self._names):
            raise KeyError(index)
        return self._names[index]

    def has(self, name: str) -> bool:
        return name in self._index

    def names(self) -> list[str]:
        return list(self._names)

    def to_vector(self, values: Mapping[str, float]) -> list[float]:
        """Dense vector in table order; missing goods are 0."""
        unknown = [n for n in values if n not in self._index]
        if unknown:
            raise KeyError(unknown[0])
        return [values.get(n, 0.0) for n in self._names]

    def from_vector(self, values: Sequence[float]) -> dict[str, float]:
        if len(values) != len(self._names):
            raise ValueError(
                f"expected {len(self._names)} values, got {len(values)}"
            )
        return dict(zip(self._names, values))

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index
