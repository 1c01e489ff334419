"""Exact deviation minimization using MILP optimization.

Mathematical Formulation:

    minimize: e_plus + e_minus + eps * sum(m_plus[i] + m_minus[i])

    subject to:
        sum(L * p[i] * k[i]) - e_plus + e_minus = D        (deviation balance)
        k[i] - m_plus[i] + m_minus[i] = s[i]               (distance from seed)
        s[i] - R <= k[i] <= s[i] + R, integer              (search window)
        k[i] = 0                     where p[i] <= 0        (immovable assets)
        e_plus, e_minus, m_plus[i], m_minus[i] >= 0

    where:
        k[i]     = lots traded for asset i (decision variable)
        s[i]     = nearest-lot seed for asset i, in lots
        L        = lot size
        p[i]     = price per unit of asset i
        D        = sum(ideal[i] * p[i]), the ideal aggregate trade amount
        R        = window radius in lots (the greedy iteration cap)
        eps      = tie-break weight favouring solutions close to the seed

The greedy strategy only reaches a local optimum; this one finds the
assignment with the smallest |deviation| inside the same window.
"""

import logging
from typing import Sequence

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp

from .base import LotAdjustmentStrategy

logger = logging.getLogger(__name__)

SEED_DISTANCE_WEIGHT = 1e-3


class ExactLotStrategy(LotAdjustmentStrategy):
    """Minimize aggregate cash deviation exactly using MILP."""

    def adjust(
        self,
        ideal_quantities: Sequence[float],
        prices: Sequence[float],
    ) -> list[int]:
        ideal, price_arr = self._collect_arrays(ideal_quantities, prices)
        lot = self.config.LOT_SIZE
        seed = self._seed(ideal)

        n = len(ideal)
        movable = price_arr > 0
        if not movable.any():
            return [int(q) for q in seed]

        seed_lots = np.array([q // lot for q in seed], dtype=float)
        ideal_total = float(np.dot(ideal, price_arr))
        radius = float(self.config.MAX_ITERATIONS)

        # Variables: [k_1..k_n, m_plus_1..m_plus_n, m_minus_1..m_minus_n, e_plus, e_minus]
        size = 3 * n + 2

        c = np.zeros(size)
        c[n : 3 * n] = SEED_DISTANCE_WEIGHT
        c[3 * n :] = 1.0

        # Constraint 1: Deviation balance
        A_dev = np.zeros((1, size))
        A_dev[0, :n] = lot * price_arr * movable
        A_dev[0, 3 * n] = -1.0
        A_dev[0, 3 * n + 1] = 1.0
        deviation_constraint = LinearConstraint(A_dev, ideal_total, ideal_total)

        # Constraint 2: Distance from seed
        # k[i] - m_plus[i] + m_minus[i] = s[i]
        A_dist = np.zeros((n, size))
        for i in range(n):
            A_dist[i, i] = 1.0
            A_dist[i, n + i] = -1.0
            A_dist[i, 2 * n + i] = 1.0
        distance_constraint = LinearConstraint(A_dist, seed_lots, seed_lots)

        # Bounds: k within the window (pinned to 0 when immovable), slacks >= 0
        lower = np.zeros(size)
        upper = np.full(size, np.inf)
        lower[:n] = np.where(movable, seed_lots - radius, 0.0)
        upper[:n] = np.where(movable, seed_lots + radius, 0.0)
        bounds = Bounds(lower, upper)

        # Integrality: only k is integer
        integrality = np.zeros(size, dtype=int)
        integrality[:n] = 1

        result = milp(
            c=c,
            constraints=[deviation_constraint, distance_constraint],
            integrality=integrality,
            bounds=bounds,
            options={"mip_rel_gap": 0.0},
        )

        if not result.success:
            logger.warning("MILP lot adjustment failed (%s), using greedy search", result.message)
            from .greedy import GreedyLotStrategy

            return GreedyLotStrategy(self.config).adjust(ideal_quantities, prices)

        lots = np.round(result.x[:n]).astype(int)
        return [int(k) * lot for k in lots]
