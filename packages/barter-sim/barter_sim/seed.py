"""Seed data: the agents created during Load, and the JSON defines file."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from barter_goods import GoodTable
from barter_trust import Activity, Production, Trade


class SeedError(ValueError):
    """Malformed or missing seed data."""


@dataclass(frozen=True)
class SeedBelief:
    other: str
    trust: float
    last_amount: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.trust <= 1.0:
            raise SeedError(f"trust toward {self.other!r} must be in [0, 1], got {self.trust}")
        if not math.isfinite(self.last_amount) or self.last_amount < 0:
            raise SeedError(
                f"last_amount toward {self.other!r} must be finite and >= 0, "
                f"got {self.last_amount}"
            )


@dataclass(frozen=True)
class SeedAgent:
    """Initial state of one agent, keyed by good name."""

    name: str
    stockpile: dict[str, float] = field(default_factory=dict)
    needs: dict[str, float] = field(default_factory=dict)
    keeps: dict[str, float] = field(default_factory=dict)
    acts: tuple[Activity, ...] = ()
    beliefs: tuple[SeedBelief, ...] = ()


@dataclass(frozen=True)
class SeedSet:
    goods: tuple[str, ...]
    agents: tuple[SeedAgent, ...]

    def __post_init__(self) -> None:
        names = [a.name for a in self.agents]
        if len(names) != len(set(names)):
            raise SeedError("agent names must be unique")
        known = set(names)
        for agent in self.agents:
            for belief in agent.beliefs:
                if belief.other not in known:
                    raise SeedError(
                        f"agent {agent.name!r} has a belief about unknown agent "
                        f"{belief.other!r}"
                    )

    def table(self) -> GoodTable:
        return GoodTable(self.goods)


DEFAULT_SEED = SeedSet(
    goods=("wheat", "meat", "water"),
    agents=(
        SeedAgent(
            name="settler",
            stockpile={"wheat": 10.0, "meat": 5.0, "water": 20.0},
            needs={"wheat": 1.0, "meat": 0.5, "water": 1.0},
            keeps={"wheat": 0.0, "meat": 0.0, "water": 0.0},
        ),
    ),
)


def _quantities(table: GoodTable, raw: Any, where: str) -> dict[str, float]:
    """Accept either a name -> quantity object or a vector in table order."""
    if raw is None:
        return {}
    if not isinstance(raw, (list, dict)):
        raise SeedError(f"{where}: expected an object or a list, got {type(raw).__name__}")
    try:
        if isinstance(raw, list):
            values = table.from_vector([float(v) for v in raw])
        else:
            values = {str(k): float(v) for k, v in raw.items()}
            table.to_vector(values)
    except KeyError as exc:
        raise SeedError(f"{where}: unknown good {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise SeedError(f"{where}: {exc}") from exc
    for good, amount in values.items():
        if not math.isfinite(amount) or amount < 0:
            raise SeedError(
                f"{where}: quantity for {good!r} must be finite and >= 0, got {amount}"
            )
    return values


def _belief(raw: Any) -> SeedBelief:
    if not isinstance(raw, dict):
        raise SeedError(f"expected an object, got {type(raw).__name__}")
    return SeedBelief(
        other=str(raw["other"]),
        trust=float(raw["trust"]),
        last_amount=float(raw.get("last_amount", 0.0)),
    )


def _activity(table: GoodTable, raw: Any, where: str) -> Activity:
    if not isinstance(raw, dict):
        raise SeedError(f"{where}: expected an object")
    kind = raw.get("kind")
    cost_good = raw.get("cost_good")
    if cost_good is not None and cost_good not in table:
        raise SeedError(f"{where}: unknown cost good {cost_good!r}")
    try:
        if kind == "production":
            return Production(
                id=raw["id"],
                cost_fixed=float(raw.get("cost_fixed", 0.0)),
                cost_scale=float(raw.get("cost_scale", 0.0)),
                inputs=_quantities(table, raw.get("inputs"), f"{where}.inputs"),
                outputs=_quantities(table, raw.get("outputs"), f"{where}.outputs"),
                cost_good=cost_good,
            )
        if kind == "trade":
            return Trade(
                cost_fixed=float(raw.get("cost_fixed", 0.0)),
                cost_scale=float(raw.get("cost_scale", 0.0)),
                cost_good=cost_good,
            )
    except KeyError as exc:
        raise SeedError(f"{where}: missing field {exc.args[0]!r}") from exc
    except SeedError:
        raise
    except ValueError as exc:
        raise SeedError(f"{where}: {exc}") from exc
    raise SeedError(f"{where}: unknown activity kind {kind!r}")


def parse_defines(data: dict[str, Any]) -> SeedSet:
    """Build a SeedSet from decoded defines data."""
    if not isinstance(data, dict):
        raise SeedError("defines must be a JSON object")
    goods = data.get("goods")
    if not isinstance(goods, list) or not goods:
        raise SeedError("defines.goods must be a non-empty list of names")
    try:
        table = GoodTable([str(g) for g in goods])
    except ValueError as exc:
        raise SeedError(f"defines.goods: {exc}") from exc

    agents: list[SeedAgent] = []
    for i, raw in enumerate(data.get("agents", [])):
        where = f"agents[{i}]"
        if not isinstance(raw, dict) or "name" not in raw:
            raise SeedError(f"{where}: expected an object with a name")
        try:
            beliefs = tuple(_belief(b) for b in raw.get("beliefs", []))
        except KeyError as exc:
            raise SeedError(f"{where}.beliefs: missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise SeedError(f"{where}.beliefs: {exc}") from exc
        agents.append(SeedAgent(
            name=str(raw["name"]),
            stockpile=_quantities(table, raw.get("stockpile"), f"{where}.stockpile"),
            needs=_quantities(table, raw.get("needs"), f"{where}.needs"),
            keeps=_quantities(table, raw.get("keeps"), f"{where}.keeps"),
            acts=tuple(
                _activity(table, a, f"{where}.acts[{j}]")
                for j, a in enumerate(raw.get("acts", []))
            ),
            beliefs=beliefs,
        ))
    if not agents:
        raise SeedError("defines.agents must list at least one agent")
    return SeedSet(goods=tuple(table.names()), agents=tuple(agents))


def load_defines(path: str | Path) -> SeedSet:
    """Read and validate a JSON defines file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise SeedError(f"cannot read defines file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SeedError(f"defines file {path} is not valid JSON: {exc}") from exc
    return parse_defines(data)
