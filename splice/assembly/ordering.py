"""
splice.assembly.ordering - Asset ordering strategies.

Produces a total order over the assets of a timeline. Both strategies use a
stable sort, so assets that compare equal keep their input order; grouping
relies on that.

- chronological: by metadata ``timestamp``, falling back to the catalog's
  upload time.
- semantic: by a caller-supplied ranking key. Semantic reasoning lives in the
  content-analysis service; without a ranker the input order is kept as is.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

from splice.exceptions import UnsupportedStrategyError, ValidationError
from splice.logging import logger
from splice.models import Asset

STRATEGIES = ("chronological", "semantic")

Ranker = Callable[[Asset], Any]


def parse_timestamp(value: Any) -> datetime:
    """Normalize a timestamp to an aware UTC datetime.

    Accepts datetimes, ISO 8601 strings and epoch seconds. Naive values are
    read as UTC.

    Raises:
        ValueError: If the value cannot be interpreted as a point in time
    """
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"not a timestamp: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _chronological_key(asset: Asset) -> tuple[int, datetime]:
    value = asset.metadata.get("timestamp")
    if value is None:
        value = asset.upload_time
    if value is None:
        # Undated assets go after every dated one, in input order.
        return (1, datetime.min.replace(tzinfo=timezone.utc))

    try:
        return (0, parse_timestamp(value))
    except (ValueError, OverflowError, OSError) as e:
        raise ValidationError(
            f"Asset {asset.id} has an unreadable timestamp: {value!r}",
            option="timestamp",
            value=value,
        ) from e


def sort_chronological(assets: Sequence[Asset]) -> list[Asset]:
    keys = {id(asset): _chronological_key(asset) for asset in assets}
    return sorted(assets, key=lambda asset: keys[id(asset)])


def sort_semantic(assets: Sequence[Asset], ranker: Ranker | None = None) -> list[Asset]:
    if ranker is None:
        logger.debug("No semantic ranker supplied, keeping input order")
        return list(assets)
    return sorted(assets, key=ranker)


def analysis_hint_ranker(key: str = "sequence") -> Ranker:
    """Build a ranker from ordering hints left by the content-analysis service.

    Assets are ranked by ``metadata["analysis"][key]``. Assets without a hint
    sort after all hinted assets and keep their input order.

    Args:
        key: Name of the hint inside the analysis results

    Returns:
        A sort-key function usable with the semantic strategy
    """

    def rank(asset: Asset) -> tuple[int, Any]:
        analysis = asset.metadata.get("analysis")
        hint = analysis.get(key) if isinstance(analysis, dict) else None
        if hint is None or isinstance(hint, bool) or not isinstance(hint, (int, float)):
            return (1, 0)
        return (0, hint)

    return rank


def order_assets(
    assets: Sequence[Asset],
    strategy: str,
    ranker: Ranker | None = None,
) -> list[Asset]:
    """Order assets with the named strategy.

    Args:
        assets: Assets in catalog order
        strategy: "chronological" or "semantic"
        ranker: Sort-key function for the semantic strategy

    Returns:
        New list of the same assets in timeline order

    Raises:
        UnsupportedStrategyError: If the strategy is not known
        ValidationError: If a timestamp cannot be parsed
    """
    if strategy == "chronological":
        return sort_chronological(assets)
    if strategy == "semantic":
        return sort_semantic(assets, ranker)
    raise UnsupportedStrategyError(strategy)
