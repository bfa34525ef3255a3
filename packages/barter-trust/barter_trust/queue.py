"""ActivityQueue - activity requests collected between ticks."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Union

from barter import AgentId


@dataclass(frozen=True)
class ProduceRequest:
    agent: AgentId
    activity: str
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.scale < 0:
            raise ValueError(f"scale must be >= 0, got {self.scale}")


@dataclass(frozen=True)
class TradeRequest:
    left: AgentId
    right: AgentId
    left_good: str
    left_quantity: float
    right_good: str
    right_quantity: float

    def __post_init__(self) -> None:
        if self.left_quantity <= 0 or self.right_quantity <= 0:
            raise ValueError("offered quantities must be > 0")


Request = Union[ProduceRequest, TradeRequest]


class ActivityQueue:
    """FIFO of production and trade requests.

    Requests are enqueued by the surrounding application while the
    simulation waits and drained by the activity system on the next run
    tick, in arrival order.
    """

    def __init__(self) -> None:
        self._pending: deque[Request] = deque()

    def enqueue(self, request: Request) -> None:
        if not isinstance(request, (ProduceRequest, TradeRequest)):
            raise TypeError(f"Unsupported request {type(request).__qualname__}")
        self._pending.append(request)

    def pending(self) -> int:
        return len(self._pending)

    def drain(self) -> list[Request]:
        drained = list(self._pending)
        self._pending.clear()
        return drained
