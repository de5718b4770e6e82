"""
Segmented Query Executor

Drives a one-page fetch function until the service stops returning a
continuation token or an optional row cap is met. Segments are requested
one at a time and handed to the consumer before the next request, so a
caller that stops iterating stops the query.
"""

import logging
from typing import Any, Callable, Iterable, Iterator, Optional

from ..exceptions import ValidationError
from ..models import QuerySegment

logger = logging.getLogger(__name__)

# Largest page the table service will return for a single request
MAX_RESULTS_PER_PAGE = 1000

# fetch(continuation_token, results_per_page) -> QuerySegment
SegmentFetcher = Callable[[Optional[Any], Optional[int]], QuerySegment]


def _batch_size(remaining: Optional[int]) -> Optional[int]:
    if remaining is None:
        return None
    return min(remaining, MAX_RESULTS_PER_PAGE)


def paginate(
    fetch_segment: SegmentFetcher,
    max_rows: Optional[int] = None,
    continuation_token: Optional[Any] = None
) -> Iterator[QuerySegment]:
    """
    Yield segments until the continuation token runs out or max_rows is reached.

    With a cap, each request asks for no more than the rows still owed and
    any surplus the service returns is dropped. Once the cap is met the
    service's token is discarded, so no trailing empty page is fetched.
    Empty segments that still carry a token are yielded and the loop goes on.

    Args:
        fetch_segment: Callable issuing one page request
        max_rows: Maximum total rows across all segments, None for no cap
        continuation_token: Token to resume from, None to start at the beginning

    Yields:
        QuerySegment whose continuation_token is None on the last segment

    Raises:
        ValidationError: If max_rows is not a positive integer
    """
    if max_rows is not None and max_rows < 1:
        raise ValidationError("max_rows must be a positive integer", {'max_rows': max_rows})

    remaining = max_rows
    token = continuation_token
    segment_count = 0
    row_count = 0

    while True:
        segment = fetch_segment(token, _batch_size(remaining))
        items = list(segment.items)
        token = segment.continuation_token
        segment_count += 1

        if remaining is not None:
            items = items[:remaining]
            remaining -= len(items)
            if remaining <= 0:
                token = None

        row_count += len(items)
        logger.debug(
            f"Segment {segment_count}: {len(items)} rows, "
            f"{'more available' if token is not None else 'done'}"
        )

        yield QuerySegment(items=items, continuation_token=token)

        if token is None:
            logger.info(f"Query finished after {segment_count} segment(s), {row_count} row(s)")
            return


def iter_items(segments: Iterable[QuerySegment]) -> Iterator[Any]:
    """Flatten a stream of segments into a stream of their items."""
    for segment in segments:
        yield from segment.items
