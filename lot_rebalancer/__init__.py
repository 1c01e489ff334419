"""
Lot Rebalancer - rebalancing trades rounded to whole lots.

Exports:
    Asset: Dataclass representing a tracked asset with holding and price
    ComputedAsset: Per-asset ideal and lot-adjusted figures
    RebalanceReport: Aggregate result of a calculation pass
    RebalanceTracker: Holds inputs and runs full calculation passes
    compute_allocations: Ideal fractional trades toward target weights
    optimize_trade_quantities: Round ideal trades to lots (greedy search)
    LotAdjustmentStrategy: Abstract base class for lot adjustment strategies
    GreedyLotStrategy: Greedy single-lot search on cash deviation (default)
    RoundingLotStrategy: Nearest lot per asset
    ExactLotStrategy: Minimize cash deviation via MILP
"""

from .allocation import compute_allocations, finalize_allocations
from .config import DEFAULT_ASSETS, AssetSpec, LotConfig
from .models import Asset, ComputedAsset, RebalanceReport
from .optimizers import (
    ExactLotStrategy,
    GreedyLotStrategy,
    LotAdjustmentStrategy,
    RoundingLotStrategy,
    optimize_trade_quantities,
)
from .stores import HoldingsStore, InMemoryStore, JsonFileStore, StoreError
from .tracker import RebalanceTracker

__all__ = [
    "Asset",
    "AssetSpec",
    "ComputedAsset",
    "RebalanceReport",
    "RebalanceTracker",
    "LotConfig",
    "DEFAULT_ASSETS",
    "compute_allocations",
    "finalize_allocations",
    "optimize_trade_quantities",
    "LotAdjustmentStrategy",
    "GreedyLotStrategy",
    "RoundingLotStrategy",
    "ExactLotStrategy",
    "HoldingsStore",
    "InMemoryStore",
    "JsonFileStore",
    "StoreError",
]
