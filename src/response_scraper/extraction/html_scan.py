"""
Whole-markup extraction strategy.

Marker text can sit in attributes or structural elements that a DOM text
query never sees, so the raw markup is scanned as one stream and cut into
one segment per question marker.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

from .patterns import iter_question_ids, resolve_chosen_option

logger = logging.getLogger(__name__)


def iter_question_segments(html: str) -> Iterator[Tuple[str, str]]:
    """
    Partition ``html`` into contiguous per-question segments.

    Segment i runs from question marker i up to (not including) marker i+1;
    the last segment runs to the end of the string. Text before the first
    marker belongs to no segment.

    Yields:
        ``(question_id, segment_text)`` pairs in scan order
    """
    occurrences = list(iter_question_ids(html))
    for index, (question_id, start) in enumerate(occurrences):
        end = occurrences[index + 1][1] if index + 1 < len(occurrences) else len(html)
        yield question_id, html[start:end]


def parse_from_html(html: str) -> Dict[str, Optional[str]]:
    """Build the question -> chosen option map from the full markup string."""
    parsed: Dict[str, Optional[str]] = {}
    for question_id, segment in iter_question_segments(html):
        parsed[question_id] = resolve_chosen_option(segment)

    logger.debug(f"Markup scan recognised {len(parsed)} questions")
    return parsed
