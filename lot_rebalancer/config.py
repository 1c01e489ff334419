"""Configuration constants for the lot rebalancer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LotConfig:
    """Configuration for lot-constrained trade adjustment.

    Deviation thresholds are in currency units of the asset prices.
    """

    LOT_SIZE: int = 100
    EARLY_EXIT_DEVIATION: float = 1000.0
    ACCEPTABLE_DEVIATION: float = 100.0
    MAX_ITERATIONS: int = 20


@dataclass(frozen=True)
class DisplayConfig:
    """Thresholds used when presenting a rebalance report."""

    DRIFT_ALERT_THRESHOLD: float = 6.0
    BALANCE_TOLERANCE: float = 0.01


@dataclass(frozen=True)
class StoreConfig:
    """Configuration for persisting user-entered figures."""

    DEFAULT_PATH: str = "~/.lot-rebalancer.json"


@dataclass(frozen=True)
class AssetSpec:
    """A tracked asset with its target weight in percent."""

    code: str
    name: str
    target: float


DEFAULT_ASSETS: tuple[AssetSpec, ...] = (
    AssetSpec("159632", "Nasdaq 100 ETF", 25),
    AssetSpec("510880", "SSE Dividend ETF", 30),
    AssetSpec("511260", "10Y Treasury ETF", 20),
    AssetSpec("511380", "Convertible Bond ETF", 15),
    AssetSpec("518880", "Gold ETF", 10),
)
