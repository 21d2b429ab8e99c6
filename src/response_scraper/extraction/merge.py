from typing import Dict, Optional

ResultMap = Dict[str, Optional[str]]


def merge_results(html_parsed: ResultMap, block_parsed: ResultMap) -> ResultMap:
    """
    Combine the two strategy results into one map.

    The markup scan fills in every question it saw; the block scan then
    overwrites any question it also recognised, null values included.
    """
    merged = dict(html_parsed)
    merged.update(block_parsed)
    return merged
