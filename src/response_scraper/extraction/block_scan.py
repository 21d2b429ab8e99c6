import logging
from typing import Dict, Iterable, Optional

from .patterns import find_question_id, resolve_chosen_option

logger = logging.getLogger(__name__)


def parse_from_blocks(blocks: Iterable[str]) -> Dict[str, Optional[str]]:
    """
    Build the question -> chosen option map by scanning each text block on its own.

    A block contributes only when it carries a question marker; option and
    chosen markers in a block without one are ignored. The first question
    marker in a block names the entry, and a later block naming the same
    question replaces the earlier entry.

    Args:
        blocks: Visible text fragments, in collection order

    Returns:
        Mapping of question identifier to chosen option identifier (or None)
    """
    parsed: Dict[str, Optional[str]] = {}
    for block in blocks:
        question_id = find_question_id(block)
        if not question_id:
            continue
        parsed[question_id] = resolve_chosen_option(block)

    logger.debug(f"Block scan recognised {len(parsed)} questions")
    return parsed
