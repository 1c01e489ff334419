"""Loaders for turning user-entered figures into assets."""

import math
import re
from typing import Any, Iterable, Mapping, Optional, Sequence

from .config import DEFAULT_ASSETS, AssetSpec
from .models import Asset

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_number(value: Any) -> float:
    """Parse a user-entered number, treating anything unparseable as 0.

    Args:
        value: Raw text (e.g. "1,200.50"), a number, or None.

    Returns:
        The parsed value, or 0.0 for empty, non-numeric, NaN or infinite input.

    Example:
        >>> parse_number("1,200.5")
        1200.5
        >>> parse_number("abc")
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "").replace("_", "")
        if not _NUMBER_RE.match(text):
            return 0.0
        number = float(text)

    return number if math.isfinite(number) else 0.0


def build_asset(
    spec: AssetSpec, quantity: Any = None, price: Any = None
) -> Asset:
    return Asset(
        code=spec.code,
        name=spec.name,
        target=spec.target,
        held_quantity=parse_number(quantity),
        price=parse_number(price),
    )


def merge_saved_assets(
    saved_entries: Optional[Iterable[Mapping[str, Any]]],
    defaults: Sequence[AssetSpec] = DEFAULT_ASSETS,
) -> list[Asset]:
    """Combine saved holdings with the configured asset list.

    The configured list decides which assets exist, their order, names and
    targets. Saved entries are matched by code; entries for unknown codes are
    dropped and assets without a saved entry start at zero.

    Args:
        saved_entries: Mappings with "code", "quantity" and "price" keys.
        defaults: The configured asset list.

    Returns:
        Assets in the order of ``defaults``.
    """
    saved_by_code: dict[str, Mapping[str, Any]] = {}
    for entry in saved_entries or []:
        code = entry.get("code")
        if code is not None:
            saved_by_code[str(code)] = entry

    assets: list[Asset] = []
    for spec in defaults:
        saved = saved_by_code.get(spec.code, {})
        assets.append(build_asset(spec, saved.get("quantity"), saved.get("price")))

    return assets
