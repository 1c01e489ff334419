import logging
from dataclasses import replace
from typing import Any, Literal, Optional, Sequence

from .allocation import compute_allocations, compute_totals, finalize_allocations
from .config import DEFAULT_ASSETS, AssetSpec, LotConfig
from .loaders import build_asset, merge_saved_assets, parse_number
from .models import Asset, RebalanceReport
from .optimizers import ExactLotStrategy, GreedyLotStrategy, RoundingLotStrategy
from .stores import HoldingsStore, StoredState, StoreError

logger = logging.getLogger(__name__)

StrategyName = Literal["greedy", "rounding", "exact"]


class RebalanceTracker:
    """A fixed set of tracked assets with holdings, prices and injected cash."""

    STRATEGIES = {
        "greedy": GreedyLotStrategy,
        "rounding": RoundingLotStrategy,
        "exact": ExactLotStrategy,
    }

    def __init__(
        self,
        specs: Sequence[AssetSpec] = DEFAULT_ASSETS,
        config: Optional[LotConfig] = None,
    ) -> None:
        self.config = config or LotConfig()
        self.assets: list[Asset] = [build_asset(spec) for spec in specs]
        self.injected_cash: float = 0.0

    def _index(self, code: str) -> int:
        for i, asset in enumerate(self.assets):
            if asset.code == code:
                return i
        raise KeyError(f"Unknown asset code: {code}")

    def set_holding(self, code: str, quantity: Any = None, price: Any = None) -> Asset:
        """Update held quantity and/or price of an asset; unparseable values become 0."""
        i = self._index(code)
        asset = self.assets[i]
        if quantity is not None:
            asset = replace(asset, held_quantity=parse_number(quantity))
        if price is not None:
            asset = replace(asset, price=parse_number(price))
        self.assets[i] = asset
        return asset

    def set_injected_cash(self, amount: Any) -> None:
        self.injected_cash = parse_number(amount)

    def calculate(self, strategy: StrategyName = "greedy") -> RebalanceReport:
        """Run a full calculation pass over the current inputs.

        Args:
            strategy: Lot adjustment strategy to use:
                - "greedy": Local search on aggregate cash deviation (default)
                - "rounding": Nearest lot per asset, no offsetting
                - "exact": MILP minimum of aggregate cash deviation

        Returns:
            RebalanceReport with per-asset and aggregate figures.
        """
        strategy_cls = self.STRATEGIES.get(strategy)
        if strategy_cls is None:
            raise ValueError(f"Unknown strategy: {strategy}")

        current_total, target_total = compute_totals(self.assets, self.injected_cash)
        computed = compute_allocations(self.assets, self.injected_cash)

        adjusted = strategy_cls(self.config).adjust(
            [c.ideal_trade_quantity for c in computed],
            [c.price for c in computed],
        )

        return RebalanceReport(
            assets=finalize_allocations(computed, adjusted, target_total),
            current_total=current_total,
            target_total=target_total,
            injected_cash=self.injected_cash,
        )

    def to_state(self) -> StoredState:
        return StoredState(
            entries=[
                {"code": a.code, "quantity": a.held_quantity, "price": a.price}
                for a in self.assets
            ],
            injected_cash=self.injected_cash,
        )

    def load(self, store: HoldingsStore) -> bool:
        """Restore figures from a store. Returns False if the store had nothing usable."""
        try:
            state = store.load()
        except StoreError as e:
            logger.warning("Failed to load saved figures: %s", e)
            return False

        if state is None:
            return False

        specs = [AssetSpec(a.code, a.name, a.target) for a in self.assets]
        self.assets = merge_saved_assets(state.entries, specs)
        self.injected_cash = parse_number(state.injected_cash)
        return True

    def save(self, store: HoldingsStore) -> None:
        store.save(self.to_state())

    @classmethod
    def from_store(
        cls,
        store: HoldingsStore,
        specs: Sequence[AssetSpec] = DEFAULT_ASSETS,
        config: Optional[LotConfig] = None,
    ) -> "RebalanceTracker":
        """Create a tracker for the given assets with figures restored from a store."""
        tracker = cls(specs, config)
        tracker.load(store)
        return tracker

    def __repr__(self) -> str:
        return (
            f"RebalanceTracker(assets={[a.code for a in self.assets]}, "
            f"injected_cash={self.injected_cash})"
        )
