"""Lot adjustment strategy implementations."""

from .base import LotAdjustmentStrategy, round_to_lot
from .exact import ExactLotStrategy
from .greedy import GreedyLotStrategy, optimize_trade_quantities
from .rounding import RoundingLotStrategy

__all__ = [
    "LotAdjustmentStrategy",
    "GreedyLotStrategy",
    "RoundingLotStrategy",
    "ExactLotStrategy",
    "optimize_trade_quantities",
    "round_to_lot",
]
