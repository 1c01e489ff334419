import pytest

from lot_rebalancer.allocation import (
    compute_allocations,
    compute_totals,
    finalize_allocations,
)
from lot_rebalancer.models import Asset


@pytest.fixture
def three_assets():
    return [
        Asset("A", "Alpha", 50, 1000, 10),
        Asset("B", "Beta", 30, 500, 20),
        Asset("C", "Gamma", 20, 0, 5),
    ]


class TestComputeTotals:
    def test_totals(self, three_assets):
        assert compute_totals(three_assets, 0) == (20000, 20000)
        assert compute_totals(three_assets, 5000) == (20000, 25000)

    def test_empty(self):
        assert compute_totals([], 0) == (0, 0)


class TestComputeAllocations:
    def test_worked_example(self, three_assets):
        computed = compute_allocations(three_assets, 0)

        assert [c.code for c in computed] == ["A", "B", "C"]
        assert [c.market_value for c in computed] == [10000, 10000, 0]
        assert [c.current_weight for c in computed] == pytest.approx([50, 50, 0])
        assert [c.delta for c in computed] == pytest.approx([0, 20, -20])
        assert [c.target_market_value for c in computed] == pytest.approx([10000, 6000, 4000])
        assert [c.ideal_trade_amount for c in computed] == pytest.approx([0, -4000, 4000])
        assert [c.ideal_trade_quantity for c in computed] == pytest.approx([0, -200, 800])

    def test_adjusted_fields_start_at_zero(self, three_assets):
        for c in compute_allocations(three_assets, 0):
            assert c.adjusted_trade_quantity == 0
            assert c.adjusted_trade_amount == 0
            assert c.final_weight == 0

    def test_weights_sum_to_hundred(self):
        assets = [
            Asset("A", "", 25, 1234, 3.21),
            Asset("B", "", 25, 77, 98.6),
            Asset("C", "", 50, 4100, 1.07),
        ]
        computed = compute_allocations(assets, 0)
        assert sum(c.current_weight for c in computed) == pytest.approx(100)

    def test_zero_total_gives_zero_weights(self):
        assets = [Asset("A", "", 60, 0, 10), Asset("B", "", 40, 100, 0)]
        computed = compute_allocations(assets, 0)
        assert [c.current_weight for c in computed] == [0, 0]
        assert [c.delta for c in computed] == [-60, -40]

    def test_zero_cash_trades_net_to_zero(self):
        assets = [
            Asset("A", "", 40, 321, 12.5),
            Asset("B", "", 35, 88, 101.3),
            Asset("C", "", 25, 1500, 2.2),
        ]
        computed = compute_allocations(assets, 0)
        assert sum(c.ideal_trade_amount for c in computed) == pytest.approx(0, abs=1e-6)

    @pytest.mark.parametrize("cash", [10000, 2500.5, -3000])
    def test_trades_net_to_injected_cash(self, three_assets, cash):
        computed = compute_allocations(three_assets, cash)
        assert sum(c.ideal_trade_amount for c in computed) == pytest.approx(cash)

    def test_injected_cash_targets(self, three_assets):
        computed = compute_allocations(three_assets, 10000)
        assert [c.ideal_trade_quantity for c in computed] == pytest.approx([500, -50, 1200])
        # current weights use the pre-injection total
        assert [c.current_weight for c in computed] == pytest.approx([50, 50, 0])

    def test_non_positive_price_has_no_ideal_quantity(self):
        assets = [Asset("A", "", 50, 100, 10), Asset("B", "", 50, 100, 0)]
        computed = compute_allocations(assets, 0)
        assert computed[1].ideal_trade_quantity == 0
        assert computed[1].ideal_trade_amount == pytest.approx(500)

    def test_inputs_not_modified(self, three_assets):
        snapshot = list(three_assets)
        compute_allocations(three_assets, 1000)
        assert three_assets == snapshot


class TestFinalizeAllocations:
    def test_final_figures(self, three_assets):
        computed = compute_allocations(three_assets, 0)
        final = finalize_allocations(computed, [0, -200, 800], 20000)

        assert [f.adjusted_trade_amount for f in final] == pytest.approx([0, -4000, 4000])
        assert [f.final_weight for f in final] == pytest.approx([50, 30, 20])
        assert [f.final_delta for f in final] == pytest.approx([0, 0, 0], abs=1e-9)

    def test_partial_results_untouched(self, three_assets):
        computed = compute_allocations(three_assets, 0)
        finalize_allocations(computed, [0, -200, 800], 20000)
        assert computed[1].adjusted_trade_quantity == 0

    def test_non_positive_target_total(self):
        computed = compute_allocations([Asset("A", "", 100, 10, 10)], -100)
        final = finalize_allocations(computed, [0], 0)
        assert final[0].final_weight == 0
        assert final[0].final_delta == -100

    def test_length_mismatch_raises(self, three_assets):
        computed = compute_allocations(three_assets, 0)
        with pytest.raises(ValueError, match="Expected 3"):
            finalize_allocations(computed, [0, 0], 20000)
