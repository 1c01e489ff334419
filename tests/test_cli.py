"""Tests for the terminal front end."""

import cli
from lot_rebalancer.config import AssetSpec
from lot_rebalancer.stores import InMemoryStore
from lot_rebalancer.tracker import RebalanceTracker


def accept_defaults(prompt, default=None, **kwargs):
    return default


class TestPromptInputs:
    def test_accepting_defaults_keeps_figures_exact(self, monkeypatch):
        monkeypatch.setattr(cli.Prompt, "ask", accept_defaults)
        tracker = RebalanceTracker((AssetSpec("A", "Alpha", 100),))
        tracker.set_holding("A", quantity=1234567, price=1.2345678)
        tracker.set_injected_cash(1234567.89)

        cli._prompt_inputs(tracker)

        assert tracker.assets[0].held_quantity == 1234567
        assert tracker.assets[0].price == 1.2345678
        assert tracker.injected_cash == 1234567.89

    def test_saved_figures_survive_a_round(self, monkeypatch):
        monkeypatch.setattr(cli.Prompt, "ask", accept_defaults)
        tracker = RebalanceTracker((AssetSpec("A", "Alpha", 100),))
        tracker.set_holding("A", quantity=98765.4321, price=1e-7)
        store = InMemoryStore()

        cli._prompt_inputs(tracker)
        tracker.save(store)

        restored = RebalanceTracker.from_store(store, (AssetSpec("A", "Alpha", 100),))
        assert restored.assets == tracker.assets
        assert restored.assets[0].price == 1e-7

    def test_as_default(self):
        assert cli._as_default(0.1) == "0.1"
        assert cli._as_default(1234567.89) == "1234567.89"
