"""barter-goods - stockpiles, needs and the decay/consumption systems."""
from barter_goods.components import (
    Fills,
    InvalidNeed,
    Keeps,
    Needs,
    Stockpile,
    ZeroNeedPolicy,
    validate_needs,
)
from barter_goods.goods import GoodTable
from barter_goods.systems import (
    CONSUMPTION,
    DECAY,
    make_consumption_system,
    make_decay_system,
)

__all__ = [
    "CONSUMPTION",
    "DECAY",
    "Fills",
    "GoodTable",
    "InvalidNeed",
    "Keeps",
    "Needs",
    "Stockpile",
    "ZeroNeedPolicy",
    "make_consumption_system",
    "make_decay_system",
    "validate_needs",
]
