"""Nearest-lot rounding strategy."""

from typing import Sequence

from .base import LotAdjustmentStrategy


class RoundingLotStrategy(LotAdjustmentStrategy):
    """Round each ideal quantity to its nearest lot independently.

    No attempt is made to offset the aggregate cash deviation, so this is the
    seed the other strategies start from.
    """

    def adjust(
        self,
        ideal_quantities: Sequence[float],
        prices: Sequence[float],
    ) -> list[int]:
        ideal, _ = self._collect_arrays(ideal_quantities, prices)
        return [int(q) for q in self._seed(ideal)]
