"""Ideal allocation calculation.

Given the current holdings, prices and target weights (in percent), derives
for every asset the market value, current weight and the fractional trade
that would bring it exactly to its target share of the new total:

    current_total = sum(held_quantity[i] * price[i])
    target_total  = current_total + injected_cash

    target_market_value[i]  = target[i] / 100 * target_total
    ideal_trade_amount[i]   = target_market_value[i] - market_value[i]
    ideal_trade_quantity[i] = ideal_trade_amount[i] / price[i]

Weights are 0 whenever their denominator is not positive, and an asset
without a positive price gets an ideal quantity of 0.
"""

from dataclasses import replace
from typing import Sequence

from .models import Asset, ComputedAsset


def _weight(value: float, total: float) -> float:
    return value / total * 100 if total > 0 else 0.0


def compute_totals(assets: Sequence[Asset], injected_cash: float) -> tuple[float, float]:
    """Return (current_total, target_total) for the given holdings."""
    current_total = sum((a.market_value for a in assets), start=0.0)
    return current_total, current_total + injected_cash


def compute_allocations(
    assets: Sequence[Asset], injected_cash: float = 0.0
) -> list[ComputedAsset]:
    """Compute the ideal (unconstrained) trade for every asset, in input order.

    Args:
        assets: Ordered assets with unique codes.
        injected_cash: Cash added to the current total to form the target total.

    Returns:
        ComputedAsset per input asset, with the adjusted fields left at zero.
    """
    current_total, target_total = compute_totals(assets, injected_cash)

    computed: list[ComputedAsset] = []
    for asset in assets:
        market_value = asset.market_value
        current_weight = _weight(market_value, current_total)
        target_market_value = asset.target / 100 * target_total
        ideal_amount = target_market_value - market_value
        ideal_quantity = ideal_amount / asset.price if asset.price > 0 else 0.0

        computed.append(
            ComputedAsset(
                asset=asset,
                market_value=market_value,
                current_weight=current_weight,
                delta=current_weight - asset.target,
                target_market_value=target_market_value,
                ideal_trade_amount=ideal_amount,
                ideal_trade_quantity=ideal_quantity,
            )
        )

    return computed


def finalize_allocations(
    computed: Sequence[ComputedAsset],
    adjusted_quantities: Sequence[int],
    target_total: float,
) -> list[ComputedAsset]:
    """Attach lot-adjusted quantities and the resulting weights."""
    if len(computed) != len(adjusted_quantities):
        raise ValueError(
            f"Expected {len(computed)} adjusted quantities, got {len(adjusted_quantities)}"
        )

    finalized: list[ComputedAsset] = []
    for item, quantity in zip(computed, adjusted_quantities):
        amount = quantity * item.price
        final_weight = _weight(item.market_value + amount, target_total)
        finalized.append(
            replace(
                item,
                adjusted_trade_quantity=int(quantity),
                adjusted_trade_amount=amount,
                final_weight=final_weight,
                final_delta=final_weight - item.asset.target,
            )
        )

    return finalized
