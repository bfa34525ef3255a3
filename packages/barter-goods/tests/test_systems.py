"""Tests for the decay and consumption systems."""
from __future__ import annotations

import pytest
from barter import Access, Phase, Pipeline, SimulationContext, World
from barter_goods import (
    CONSUMPTION,
    Fills,
    InvalidNeed,
    Keeps,
    Needs,
    Stockpile,
    ZeroNeedPolicy,
    make_consumption_system,
    make_decay_system,
)


def _agent(world: World, stock: dict, needs: dict, keeps: dict | None = None) -> int:
    aid = world.spawn()
    world.attach(aid, Stockpile(goods=dict(stock)))
    world.attach(aid, Needs(needs=needs))
    world.attach(aid, Fills())
    world.attach(aid, Keeps(keeps=dict(keeps or {})))
    return aid


def _pipeline(zero_need: ZeroNeedPolicy = ZeroNeedPolicy.REJECT) -> Pipeline:
    pipeline = Pipeline()
    pipeline.add(make_decay_system())
    pipeline.add(make_consumption_system(zero_need))
    return pipeline


def _run(pipeline: Pipeline, world: World, tick: int = 1):
    return pipeline.run_pass(world, SimulationContext(phase=Phase.RUN, tick=tick))


class TestDecaySystem:
    def test_halves_keeps(self) -> None:
        world = World()
        aid = world.spawn()
        world.attach(aid, Keeps(keeps={"wheat": 4.0, "meat": 1.0}))
        pipeline = Pipeline()
        pipeline.add(make_decay_system())
        _run(pipeline, world)
        assert world.get(aid, Keeps).keeps == {"wheat": 2.0, "meat": 0.5}

    def test_no_change_while_waiting(self) -> None:
        world = World()
        aid = world.spawn()
        world.attach(aid, Keeps(keeps={"wheat": 4.0}))
        spec = make_decay_system()
        for _ in range(5):
            spec.run(Access(world, spec), SimulationContext(phase=Phase.WAIT))
        assert world.get(aid, Keeps).keeps == {"wheat": 4.0}

    def test_invalid_factor(self) -> None:
        with pytest.raises(ValueError, match="decay factor"):
            make_decay_system(1.5)

    def test_declares_keeps_write_only(self) -> None:
        spec = make_decay_system()
        assert spec.writes == frozenset({Keeps})
        assert spec.reads == frozenset()


class TestConsumptionSystem:
    def test_ration_branch(self) -> None:
        world = World()
        aid = _agent(world, {"wheat": 4.0}, {"wheat": 3.0})
        _run(_pipeline(), world)
        assert world.get(aid, Stockpile).goods["wheat"] == 2.0
        assert world.get(aid, Keeps).keeps["wheat"] == 2.0
        assert world.get(aid, Fills).fills["wheat"] == pytest.approx(2.0 / 3.0)

    def test_full_satisfaction_branch(self) -> None:
        world = World()
        aid = _agent(world, {"wheat": 10.0}, {"wheat": 1.0})
        _run(_pipeline(), world)
        assert world.get(aid, Stockpile).goods["wheat"] == 9.0
        assert world.get(aid, Keeps).keeps["wheat"] == 1.0
        assert world.get(aid, Fills).fills["wheat"] == 1.0

    def test_half_exactly_equal_to_need_rations(self) -> None:
        world = World()
        aid = _agent(world, {"wheat": 2.0}, {"wheat": 1.0})
        _run(_pipeline(), world)
        assert world.get(aid, Stockpile).goods["wheat"] == 1.0
        assert world.get(aid, Keeps).keeps["wheat"] == 1.0
        assert world.get(aid, Fills).fills["wheat"] == 1.0

    def test_decay_runs_before_consumption(self) -> None:
        world = World()
        aid = _agent(world, {"wheat": 10.0}, {"wheat": 1.0}, keeps={"wheat": 4.0, "salt": 4.0})
        _run(_pipeline(), world)
        keeps = world.get(aid, Keeps).keeps
        assert keeps["salt"] == 2.0
        assert keeps["wheat"] == 3.0  # 4 * 0.5 + 1

    def test_good_missing_from_stockpile(self) -> None:
        world = World()
        aid = _agent(world, {"wheat": 10.0}, {"wheat": 1.0, "meat": 1.0})
        _run(_pipeline(), world)
        assert world.get(aid, Fills).fills["meat"] == 0.0
        assert "meat" not in world.get(aid, Stockpile).goods
        assert "meat" not in world.get(aid, Keeps).keeps

    def test_fills_recomputed_each_tick(self) -> None:
        world = World()
        aid = _agent(world, {"wheat": 10.0}, {"wheat": 1.0})
        world.get(aid, Fills).fills["stale"] = 0.3
        _run(_pipeline(), world)
        assert world.get(aid, Fills).fills == {"wheat": 1.0}

    def test_agents_missing_a_component_are_skipped(self) -> None:
        world = World()
        aid = world.spawn()
        world.attach(aid, Stockpile(goods={"wheat": 10.0}))
        world.attach(aid, Needs(needs={"wheat": 1.0}))
        _run(_pipeline(), world)
        assert world.get(aid, Stockpile).goods["wheat"] == 10.0

    def test_invariants_over_many_ticks(self) -> None:
        world = World()
        aids = [
            _agent(world, {"wheat": 10.0, "meat": 1.0}, {"wheat": 3.0, "meat": 2.0}),
            _agent(world, {"water": 0.0}, {"water": 1.0}),
        ]
        pipeline = _pipeline()
        for tick in range(1, 30):
            _run(pipeline, world, tick)
            for aid in aids:
                assert all(0.0 <= f <= 1.0 for f in world.get(aid, Fills).fills.values())
                assert all(q >= 0.0 for q in world.get(aid, Stockpile).goods.values())
                assert all(k >= 0.0 for k in world.get(aid, Keeps).keeps.values())

    def test_zero_need_reported_without_blocking_others(self) -> None:
        world = World()
        bad = _agent(world, {"wheat": 0.0, "meat": 10.0}, {"wheat": 0.0, "meat": 1.0})
        good = _agent(world, {"wheat": 10.0}, {"wheat": 1.0})
        report = _run(_pipeline(), world)

        failures = report.failures
        assert [f.agent for f in failures] == [bad]
        assert isinstance(failures[0].error, InvalidNeed)
        assert world.get(bad, Fills).fills == {"wheat": 0.0, "meat": 1.0}
        assert world.get(bad, Stockpile).goods["meat"] == 9.0
        assert world.get(good, Stockpile).goods["wheat"] == 9.0

    def test_zero_need_satisfied_policy(self) -> None:
        world = World()
        aid = _agent(world, {"salt": 3.0}, {"salt": 0.0})
        report = _run(_pipeline(ZeroNeedPolicy.SATISFIED), world)
        assert report.failures == []
        assert world.get(aid, Fills).fills["salt"] == 1.0
        assert world.get(aid, Stockpile).goods["salt"] == 3.0
        assert "salt" not in world.get(aid, Keeps).keeps

    def test_outcome_per_agent(self) -> None:
        world = World()
        aid = _agent(world, {"wheat": 4.0}, {"wheat": 3.0})
        report = _run(_pipeline(), world)
        outcomes = report.for_system(CONSUMPTION)
        assert len(outcomes) == 1
        assert outcomes[0].agent == aid
        assert outcomes[0].ok
        assert outcomes[0].detail == "rationed: wheat"

    def test_declared_access(self) -> None:
        spec = make_consumption_system()
        assert spec.writes == frozenset({Stockpile, Fills, Keeps})
        assert spec.reads == frozenset({Needs})
        assert spec.after == ("decay",)
