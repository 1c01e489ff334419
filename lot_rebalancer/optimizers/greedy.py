"""Greedy lot adjustment.

Starting from the ideal quantities rounded to the nearest lot, repeatedly
applies the single one-lot move that most reduces the aggregate cash
deviation:

    deviation = sum(adjusted[i] * p[i]) - sum(ideal[i] * p[i])

    candidate (i, d), d in (-1, +1), p[i] > 0:
        new_deviation = deviation + d * lot * p[i]
        improvement   = |deviation| - |new_deviation|

The best candidate is the strictly largest positive improvement; ties keep the
first one scanned (ascending asset index, -1 before +1). The search stops when
no move improves, when |deviation| drops to the acceptable residual, or after
the iteration cap. A seed whose deviation is already below the early-exit
threshold is returned untouched.

This is a local search, not an exact solver; see ExactLotStrategy for that.
"""

import logging
from typing import Optional, Sequence

from ..config import LotConfig
from .base import LotAdjustmentStrategy

logger = logging.getLogger(__name__)

DIRECTIONS = (-1, 1)


class GreedyLotStrategy(LotAdjustmentStrategy):
    """Greedy coordinate descent over single-lot moves from the rounded seed."""

    def adjust(
        self,
        ideal_quantities: Sequence[float],
        prices: Sequence[float],
    ) -> list[int]:
        ideal, price_arr = self._collect_arrays(ideal_quantities, prices)
        lot = self.config.LOT_SIZE

        adjusted = [int(q) for q in self._seed(ideal)]
        price_list = [float(p) for p in price_arr]
        deviation = self._deviation(adjusted, ideal, price_list)

        if abs(deviation) < self.config.EARLY_EXIT_DEVIATION:
            logger.debug("Seed deviation %.2f within tolerance, keeping seed", deviation)
            return adjusted

        for iteration in range(self.config.MAX_ITERATIONS):
            best_improvement = 0.0
            best_index = -1
            best_direction = 0

            for i, price in enumerate(price_list):
                if price <= 0:
                    continue
                for direction in DIRECTIONS:
                    new_deviation = deviation + direction * lot * price
                    improvement = abs(deviation) - abs(new_deviation)
                    if improvement > best_improvement:
                        best_improvement = improvement
                        best_index = i
                        best_direction = direction

            if best_index < 0:
                logger.debug("No improving move after %d iterations", iteration)
                break

            adjusted[best_index] += best_direction * lot
            deviation += best_direction * lot * price_list[best_index]
            logger.debug(
                "Iteration %d: moved asset %d by %+d, deviation %.2f",
                iteration,
                best_index,
                best_direction * lot,
                deviation,
            )

            if abs(deviation) <= self.config.ACCEPTABLE_DEVIATION:
                break

        return adjusted


def optimize_trade_quantities(
    ideal_quantities: Sequence[float],
    prices: Sequence[float],
    config: Optional[LotConfig] = None,
) -> list[int]:
    """Round ideal trade quantities to lot multiples, keeping cash deviation small."""
    return GreedyLotStrategy(config).adjust(ideal_quantities, prices)
