"""Tests for agent spawning, component attach and queries."""

from dataclasses import dataclass

import pytest

from barter.types import DeadAgentError
from barter.world import World


@dataclass
class Grain:
    amount: float


@dataclass
class Cattle:
    head: int


# --- Agent creation ---

def test_agent_creation():
    world = World()
    aid = world.spawn()
    assert isinstance(aid, int)
    assert world.alive(aid)


def test_agent_ids_are_sequential():
    world = World()
    a0 = world.spawn()
    a1 = world.spawn()
    assert a1 == a0 + 1


def test_agents_returns_alive_set():
    world = World()
    a = world.spawn()
    b = world.spawn()
    assert world.agents() == frozenset({a, b})


# --- Attach / get / has ---

def test_attach_and_get():
    world = World()
    aid = world.spawn()
    world.attach(aid, Grain(3.0))
    assert world.get(aid, Grain).amount == 3.0
    assert world.has(aid, Grain)
    assert not world.has(aid, Cattle)


def test_attach_replaces_existing_component():
    world = World()
    aid = world.spawn()
    world.attach(aid, Grain(1.0))
    world.attach(aid, Grain(2.0))
    assert world.get(aid, Grain).amount == 2.0


def test_attach_to_unknown_agent_raises():
    world = World()
    with pytest.raises(DeadAgentError):
        world.attach(7, Grain(1.0))


def test_get_missing_component_raises_key_error():
    world = World()
    aid = world.spawn()
    with pytest.raises(KeyError, match="no Grain component"):
        world.get(aid, Grain)


def test_get_unknown_agent_raises():
    world = World()
    with pytest.raises(DeadAgentError):
        world.get(3, Grain)


# --- Queries ---

def test_query_joins_tables():
    world = World()
    a = world.spawn()
    b = world.spawn()
    world.attach(a, Grain(1.0))
    world.attach(a, Cattle(2))
    world.attach(b, Grain(5.0))

    rows = list(world.query(Grain, Cattle))
    assert len(rows) == 1
    aid, (grain, cattle) = rows[0]
    assert aid == a
    assert grain.amount == 1.0
    assert cattle.head == 2


def test_query_missing_table_yields_nothing():
    world = World()
    a = world.spawn()
    world.attach(a, Grain(1.0))
    assert list(world.query(Grain, Cattle)) == []


def test_query_without_types_yields_nothing():
    world = World()
    world.spawn()
    assert list(world.query()) == []


def test_query_is_ordered_by_agent_id():
    world = World()
    ids = [world.spawn() for _ in range(5)]
    for aid in reversed(ids):
        world.attach(aid, Grain(float(aid)))
    assert [aid for aid, _ in world.query(Grain)] == ids
