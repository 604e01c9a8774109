"""Batch evaluation of a segment predicate.

Rule filters are read-only during evaluation, so a batch is a plain
map over segments and may run on a thread pool. Input order is kept.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

from core.constants import DEFAULT_FILTER_WORKERS
from core.logging_config import get_logger
from core.segment_types import SegmentMetadataSource

_LOGGER = get_logger(__name__)

SegmentT = TypeVar("SegmentT", bound=SegmentMetadataSource)
SegmentPredicate = Callable[[SegmentT], bool]


def filter_segments(
    segments: Iterable[SegmentT],
    predicate: SegmentPredicate,
    max_workers: int = DEFAULT_FILTER_WORKERS,
) -> list[SegmentT]:
    """Return the segments accepted by a predicate.

    Args:
        segments: Segments to evaluate.
        predicate: Typically ``RuleFilter.matches`` or
            ``RuleConfiguration.is_visible``.
        max_workers: Thread count; 1 evaluates inline.

    Returns:
        Accepted segments in input order.

    Raises:
        ValueError: If max_workers is below 1.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}.")
    segment_rows = list(segments)
    started = time.perf_counter()
    if max_workers == 1 or len(segment_rows) < 2:
        flags = [predicate(segment) for segment in segment_rows]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            flags = list(executor.map(predicate, segment_rows))
    accepted = [segment for segment, flag in zip(segment_rows, flags) if flag]
    _LOGGER.info(
        "segments_filtered",
        segment_count=len(segment_rows),
        accepted_count=len(accepted),
        workers=max_workers,
        duration_seconds=round(time.perf_counter() - started, 6),
    )
    return accepted
