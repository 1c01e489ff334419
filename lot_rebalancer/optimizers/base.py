"""Abstract base class for lot adjustment strategies."""

import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from ..config import LotConfig


def round_to_lot(quantities: Sequence[float], lot_size: int) -> list[int]:
    """Round each quantity to the nearest lot multiple, halves away from zero.

    Lots are counted in Python ints so very large quantities do not overflow.
    """
    rounded: list[int] = []
    for quantity in quantities:
        lots = float(quantity) / lot_size
        whole = math.floor(abs(lots) + 0.5)
        rounded.append((whole if lots >= 0 else -whole) * lot_size)
    return rounded


class LotAdjustmentStrategy(ABC):
    """Turns ideal fractional trade quantities into lot multiples."""

    def __init__(self, config: Optional[LotConfig] = None) -> None:
        self.config = config or LotConfig()

    @abstractmethod
    def adjust(
        self,
        ideal_quantities: Sequence[float],
        prices: Sequence[float],
    ) -> list[int]:
        """Calculate lot-constrained trade quantities.

        Args:
            ideal_quantities: Fractional trade quantity per asset (positive buys).
            prices: Price per unit for each asset, same order.

        Returns:
            One trade quantity per asset, each a multiple of the lot size.
        """
        pass

    def _collect_arrays(
        self,
        ideal_quantities: Sequence[float],
        prices: Sequence[float],
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return (ideal, prices) as float arrays; immovable assets get an ideal of 0."""
        if len(ideal_quantities) != len(prices):
            raise ValueError(
                f"Got {len(ideal_quantities)} quantities but {len(prices)} prices"
            )

        ideal = np.asarray(ideal_quantities, dtype=float)
        price_arr = np.asarray(prices, dtype=float)
        ideal = np.where(np.isfinite(ideal) & (price_arr > 0), ideal, 0.0)
        price_arr = np.where(np.isfinite(price_arr), price_arr, 0.0)
        return ideal, price_arr

    def _seed(self, ideal: np.ndarray) -> list[int]:
        return round_to_lot(ideal, self.config.LOT_SIZE)

    @staticmethod
    def _deviation(
        adjusted: Sequence[float], ideal: Sequence[float], prices: Sequence[float]
    ) -> float:
        """Aggregate adjusted trade amount minus aggregate ideal trade amount.

        Summed left to right so results do not depend on BLAS reduction order.
        """
        adjusted_total = sum(float(q) * float(p) for q, p in zip(adjusted, prices))
        ideal_total = sum(float(q) * float(p) for q, p in zip(ideal, prices))
        return adjusted_total - ideal_total
