"""
splice.assembly.grouping - Stable grouping of ordered assets.

Groups appear in order of first occurrence and keep the relative order of
their members. This is a stable partition, not a re-sort.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from splice.models import Asset

UNKNOWN_GROUP = "unknown"


def _present(value: Any) -> bool:
    return value is not None and value != ""


def resolve_group_key(asset: Asset, group_by: str) -> Any:
    """Look up an asset's group key.

    Lookup order: ``metadata[group_by]``, then
    ``metadata["analysis"][group_by]``, then ``"unknown"``.
    """
    value = asset.metadata.get(group_by)
    if _present(value):
        return value

    analysis = asset.metadata.get("analysis")
    if isinstance(analysis, dict):
        value = analysis.get(group_by)
        if _present(value):
            return value

    return UNKNOWN_GROUP


def _group_identity(key: Any) -> Any:
    """Hashable identity for a group key.

    Scalars are tagged with their kind so that values Python considers equal
    across types stay apart: True, 1 and "1" are three groups. Ints and floats
    share the "number" kind, so 1 and 1.0 are one group.
    """
    if isinstance(key, bool):
        return ("bool", key)
    if isinstance(key, (int, float)):
        return ("number", key)
    if isinstance(key, (list, tuple)):
        return ("list", tuple(_group_identity(item) for item in key))
    if isinstance(key, dict):
        return ("map", tuple(sorted((str(k), _group_identity(v)) for k, v in key.items())))
    return (type(key).__name__, key)


def group_assets(assets: Sequence[Asset], group_by: str | None = None) -> list[list[Asset]]:
    """Partition assets into groups by first occurrence of their key.

    Args:
        assets: Assets in timeline order
        group_by: Metadata key to group on; None puts everything in one group

    Returns:
        List of groups, each a list of assets in input order
    """
    if group_by is None:
        return [list(assets)] if assets else []

    groups: dict[Any, list[Asset]] = {}
    for asset in assets:
        key = _group_identity(resolve_group_key(asset, group_by))
        groups.setdefault(key, []).append(asset)
    return list(groups.values())


def flatten_groups(groups: Sequence[Sequence[Asset]]) -> list[Asset]:
    return [asset for group in groups for asset in group]


def apply_grouping(assets: Sequence[Asset], group_by: str | None = None) -> list[Asset]:
    """Group then flatten; the identity when group_by is None."""
    if group_by is None:
        return list(assets)
    return flatten_groups(group_assets(assets, group_by))
