# -*- coding: utf-8 -*-
"""
Parallel Row Dispatch - Fan a per-row callback out across worker lanes.

The local adaptive threshold computes each output row independently from
read-only input, so its rows can run concurrently. ``dispatch`` calls a
per-row function once for every row index. Work is split into
``lane_count(rows)`` lanes, the next power of two at or above the square
root of the row count; lane ``k`` handles rows ``k, k + lanes,
k + 2 * lanes, ...`` (grid-stride order). Lanes run on a
``concurrent.futures.ThreadPoolExecutor``; numpy releases the GIL inside
its vectorized kernels, so row bodies written with numpy overlap.

Rows must write disjoint outputs. The call returns after every lane has
finished; the first exception raised by any row is re-raised to the
caller.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-07

Modified
--------
2026-10-13
"""

# Standard library
import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

# MVIL internal
from mvil.exceptions import ValidationError

logger = logging.getLogger(__name__)


def lane_count(row_count: int) -> int:
    """Number of lanes for ``row_count`` rows.

    Returns the smallest power of two that is >= ``sqrt(row_count)``;
    ``0`` when there are no rows.

    Examples
    --------
    >>> [lane_count(n) for n in (1, 4, 5, 100, 1080)]
    [1, 2, 4, 16, 64]
    """
    if row_count <= 0:
        return 0
    return int(round(2 ** math.ceil(math.log2(math.sqrt(row_count)))))


def dispatch(
    row_count: int,
    per_row: Callable[[int], None],
    max_workers: Optional[int] = None,
) -> None:
    """Execute ``per_row(i)`` for every ``i`` in ``range(row_count)``.

    Parameters
    ----------
    row_count : int
        Number of rows. Must be >= 0.
    per_row : Callable[[int], None]
        Callback invoked once per row index. Results must be written to
        row-disjoint outputs; invocation order is unspecified.
    max_workers : int, optional
        Upper bound on worker threads. Defaults to ``os.cpu_count()``.
        ``1`` runs every lane on the calling thread.

    Raises
    ------
    ValidationError
        If ``row_count`` is negative or ``max_workers`` is < 1.
    """
    if row_count < 0:
        raise ValidationError(f"row_count must be >= 0, got {row_count}")
    if max_workers is not None and max_workers < 1:
        raise ValidationError(f"max_workers must be >= 1, got {max_workers}")

    lanes = lane_count(row_count)
    if lanes == 0:
        return

    def run_lane(lane: int) -> None:
        for row in range(lane, row_count, lanes):
            per_row(row)

    workers = min(lanes, max_workers or os.cpu_count() or 1)
    logger.debug("Dispatching %d rows over %d lanes (%d workers)",
                 row_count, lanes, workers)

    if workers == 1:
        for lane in range(lanes):
            run_lane(lane)
        return

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(run_lane, lane) for lane in range(lanes)]
        for future in futures:
            future.result()
