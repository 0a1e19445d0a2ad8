"""
splice.assembly.engine - Timeline assembly orchestrator.

Composes ordering, grouping and placement into a single pure operation:
assets and options in, a new Timeline value out. Persistence belongs to the
caller; see splice.store for the optimistic-concurrency wrapper.
"""

from __future__ import annotations

from collections.abc import Sequence

from splice.assembly.grouping import apply_grouping
from splice.assembly.ordering import STRATEGIES, Ranker, order_assets
from splice.assembly.placement import place_clips
from splice.exceptions import NoAssetsError, UnsupportedStrategyError
from splice.ids import Clock, IdFactory, SequentialIds, utcnow
from splice.logging import logger
from splice.models import Asset, AssemblyOptions, Timeline


def assemble(
    assets: Sequence[Asset],
    options: AssemblyOptions,
    timeline: Timeline | None = None,
    *,
    ids: IdFactory | None = None,
    now: Clock | None = None,
    ranker: Ranker | None = None,
) -> Timeline:
    """Assemble a timeline from assets.

    The caller's timeline supplies id, name, framerate and resolution; tracks,
    duration and modified are replaced. The input timeline is not modified.

    Args:
        assets: Assets to place, in catalog order
        options: Ordering, grouping and transition options
        timeline: Timeline to assemble into; a new "Untitled" one if None
        ids: Id factory for tracks and clips (fresh SequentialIds if None)
        now: Clock used for the modified timestamp
        ranker: Sort-key function for the semantic strategy

    Returns:
        New Timeline with a single video track

    Raises:
        UnsupportedStrategyError: If options.strategy is not known
        NoAssetsError: If assets is empty
        ValidationError: If an asset carries unreadable timing metadata
    """
    ids = ids or SequentialIds()
    now = now or utcnow
    if timeline is None:
        timeline = Timeline(id=ids("timeline"), name="Untitled", created=now())

    if options.strategy not in STRATEGIES:
        raise UnsupportedStrategyError(options.strategy, timeline_id=timeline.id)
    if not assets:
        raise NoAssetsError(timeline_id=timeline.id)

    logger.debug(
        "Assembling %d assets into %s (strategy=%s, group_by=%s, transitions=%s)",
        len(assets),
        timeline.id,
        options.strategy,
        options.group_by,
        options.add_transitions,
    )

    ordered = order_assets(assets, options.strategy, ranker)
    grouped = apply_grouping(ordered, options.group_by)
    track, duration = place_clips(
        grouped,
        ids,
        add_transitions=options.add_transitions,
        default_duration=options.default_clip_duration,
        max_transition_duration=options.max_transition_duration,
        transition_type=options.transition_type,
    )

    logger.debug("Placed %d clips, duration %.3fs", len(track.clips), duration)

    return timeline.model_copy(
        update={"tracks": [track], "duration": duration, "modified": now()}
    )
