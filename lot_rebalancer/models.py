"""Data models for the lot rebalancer."""

from dataclasses import dataclass, field
from typing import Literal, Optional

from .config import DisplayConfig


@dataclass(frozen=True)
class Asset:
    """A tracked asset with its current holding and price."""

    code: str
    name: str
    target: float
    held_quantity: float = 0.0
    price: float = 0.0

    @property
    def market_value(self) -> float:
        return self.held_quantity * self.price


@dataclass(frozen=True)
class ComputedAsset:
    """Per-asset figures derived from one calculation pass.

    The adjusted fields stay at zero until the lot adjustment has run.
    """

    asset: Asset
    market_value: float
    current_weight: float
    delta: float
    target_market_value: float
    ideal_trade_amount: float
    ideal_trade_quantity: float
    adjusted_trade_quantity: int = 0
    adjusted_trade_amount: float = 0.0
    final_weight: float = 0.0
    final_delta: float = 0.0

    @property
    def code(self) -> str:
        return self.asset.code

    @property
    def price(self) -> float:
        return self.asset.price

    @property
    def action(self) -> Optional[Literal["BUY", "SELL"]]:
        if self.adjusted_trade_quantity > 0:
            return "BUY"
        if self.adjusted_trade_quantity < 0:
            return "SELL"
        return None

    def needs_rebalance(
        self, threshold: float = DisplayConfig.DRIFT_ALERT_THRESHOLD
    ) -> bool:
        """True when the current weight drifted beyond the threshold (in percent points)."""
        return abs(self.delta) > threshold

    def __str__(self) -> str:
        return (
            f"{self.action or 'HOLD'} {abs(self.adjusted_trade_quantity)} {self.code} "
            f"({self.adjusted_trade_amount:.2f}, ideal: {self.ideal_trade_amount:.2f}, "
            f"final weight: {self.final_weight:.2f}%)"
        )


@dataclass(frozen=True)
class RebalanceReport:
    """Aggregate result of a full calculation pass."""

    assets: list[ComputedAsset] = field(default_factory=list)
    current_total: float = 0.0
    target_total: float = 0.0
    injected_cash: float = 0.0

    @property
    def ideal_trade_total(self) -> float:
        return sum(a.ideal_trade_amount for a in self.assets)

    @property
    def adjusted_trade_total(self) -> float:
        return sum(a.adjusted_trade_amount for a in self.assets)

    @property
    def deviation(self) -> float:
        return self.adjusted_trade_total - self.ideal_trade_total

    @property
    def mode(self) -> Literal["inject", "rebalance"]:
        return "inject" if self.injected_cash > 0 else "rebalance"

    @property
    def is_balanced(self) -> bool:
        """Whether the ideal trades net out to the injected cash."""
        return (
            abs(self.ideal_trade_total - self.injected_cash)
            < DisplayConfig.BALANCE_TOLERANCE
        )

    def by_code(self) -> dict[str, ComputedAsset]:
        return {a.code: a for a in self.assets}
