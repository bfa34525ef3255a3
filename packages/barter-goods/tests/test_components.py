"""Tests for goods components and the good table."""
from __future__ import annotations

import pytest
from barter_goods import (
    Fills,
    GoodTable,
    InvalidNeed,
    Keeps,
    Needs,
    Stockpile,
    ZeroNeedPolicy,
    validate_needs,
)


class TestStockpile:
    def test_empty(self) -> None:
        assert Stockpile().goods == {}

    def test_negative_quantity_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be finite and >= 0"):
            Stockpile(goods={"wheat": -1.0})

    def test_add_and_count(self) -> None:
        stock = Stockpile(goods={"wheat": 2.0})
        stock.add("wheat", 3.0)
        stock.add("salt", 1.0)
        assert stock.count("wheat") == 5.0
        assert stock.count("salt") == 1.0
        assert stock.count("iron") == 0.0

    def test_take_exact(self) -> None:
        stock = Stockpile(goods={"wheat": 2.0})
        stock.take("wheat", 2.0)
        assert stock.count("wheat") == 0.0

    def test_take_more_than_held_raises(self) -> None:
        stock = Stockpile(goods={"wheat": 2.0})
        with pytest.raises(ValueError, match="only 2.0 held"):
            stock.take("wheat", 3.0)
        assert stock.count("wheat") == 2.0

    @pytest.mark.parametrize("amount", [float("nan"), float("inf")])
    def test_non_finite_quantity_rejected(self, amount: float) -> None:
        with pytest.raises(ValueError, match="finite"):
            Stockpile(goods={"wheat": amount})

    def test_add_non_finite_rejected(self) -> None:
        stock = Stockpile(goods={"wheat": 2.0})
        with pytest.raises(ValueError):
            stock.add("wheat", float("nan"))
        assert stock.count("wheat") == 2.0


class TestNeeds:
    def test_needs_are_read_only(self) -> None:
        needs = Needs(needs={"wheat": 1.0})
        with pytest.raises(TypeError):
            needs.needs["wheat"] = 2.0  # type: ignore[index]

    def test_needs_cannot_be_reassigned(self) -> None:
        needs = Needs(needs={"wheat": 1.0})
        with pytest.raises(AttributeError):
            needs.needs = {}  # type: ignore[misc]

    def test_source_dict_is_copied(self) -> None:
        source = {"wheat": 1.0}
        needs = Needs(needs=source)
        source["wheat"] = 5.0
        assert needs.needs["wheat"] == 1.0

    def test_negative_need_rejected(self) -> None:
        with pytest.raises(InvalidNeed) as info:
            Needs(needs={"meat": -0.5})
        assert info.value.good == "meat"

    def test_non_finite_need_rejected(self) -> None:
        with pytest.raises(InvalidNeed):
            Needs(needs={"meat": float("nan")})

    def test_zero_need_rejected_under_reject_policy(self) -> None:
        needs = Needs(needs={"wheat": 1.0, "salt": 0.0})
        with pytest.raises(InvalidNeed, match="salt"):
            validate_needs(needs, ZeroNeedPolicy.REJECT)

    def test_zero_need_allowed_under_satisfied_policy(self) -> None:
        validate_needs(Needs(needs={"salt": 0.0}), ZeroNeedPolicy.SATISFIED)

    def test_invalid_need_is_value_error(self) -> None:
        assert issubclass(InvalidNeed, ValueError)


class TestFillsKeeps:
    def test_fills_default_zero(self) -> None:
        assert Fills().get("wheat") == 0.0

    def test_keeps_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            Keeps(keeps={"wheat": -2.0})

    def test_keeps_nan_rejected(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            Keeps(keeps={"wheat": float("nan")})

    @pytest.mark.parametrize("fraction", [-0.1, 1.5, float("nan")])
    def test_fills_out_of_range_rejected(self, fraction: float) -> None:
        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            Fills(fills={"wheat": fraction})

    def test_fills_bounds_accepted(self) -> None:
        fills = Fills(fills={"wheat": 0.0, "meat": 1.0})
        assert fills.get("meat") == 1.0


class TestGoodTable:
    def test_indices_follow_definition_order(self) -> None:
        table = GoodTable(["wheat", "meat", "water"])
        assert table.index("meat") == 1
        assert table.name(2) == "water"
        assert table.names() == ["wheat", "meat", "water"]
        assert len(table) == 3
        assert "wheat" in table

    def test_duplicate_rejected(self) -> None:
        with pytest.raises(ValueError, match="already defined"):
            GoodTable(["wheat", "wheat"])

    def test_unknown_name_raises(self) -> None:
        table = GoodTable(["wheat"])
        with pytest.raises(KeyError):
            table.index("iron")
        with pytest.raises(KeyError):
            table.name(4)

    def test_vector_conversion(self) -> None:
        table = GoodTable(["wheat", "meat", "water"])
        assert table.to_vector({"water": 20.0, "wheat": 10.0}) == [10.0, 0.0, 20.0]
        assert table.from_vector([10.0, 5.0, 20.0]) == {
            "wheat": 10.0, "meat": 5.0, "water": 20.0,
        }

    def test_vector_length_mismatch(self) -> None:
        table = GoodTable(["wheat", "meat"])
        with pytest.raises(ValueError, match="expected 2 values"):
            table.from_vector([1.0])

    def test_to_vector_unknown_good(self) -> None:
        table = GoodTable(["wheat"])
        with pytest.raises(KeyError):
            table.to_vector({"iron": 1.0})
