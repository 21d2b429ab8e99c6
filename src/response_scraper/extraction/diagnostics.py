"""
Debug-mode artifacts for inspecting why a page parsed the way it did.

All payloads are capped so that a huge page never produces a huge response.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ..constants import DIAGNOSTIC_LIMITS


@dataclass
class Diagnostics:
    """Intermediate artifacts of one parse, truncated for transport."""
    candidate_blocks_count: int
    candidate_blocks: List[str] = field(default_factory=list)
    body_text_snippet: str = ""
    html_snippet: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire keys clients of the service expect."""
        return {
            'candidateBlocksCount': self.candidate_blocks_count,
            'candidateBlocks': self.candidate_blocks,
            'bodyTextSnippet': self.body_text_snippet,
            'htmlSnippet': self.html_snippet
        }


def assemble_diagnostics(blocks: Sequence[str], body_text: str, html: str,
                         max_blocks: int = DIAGNOSTIC_LIMITS['max_blocks'],
                         snippet_length: int = DIAGNOSTIC_LIMITS['snippet_length']) -> Diagnostics:
    """
    Package the collected blocks and page text for a debug response.

    Args:
        blocks: Every candidate block collected from the page
        body_text: Visible body text of the page
        html: Full rendered markup
        max_blocks: Maximum number of blocks to include
        snippet_length: Maximum characters kept from body text and markup

    Returns:
        Diagnostics with the true block count and truncated payloads
    """
    return Diagnostics(
        candidate_blocks_count=len(blocks),
        candidate_blocks=list(blocks[:max_blocks]),
        body_text_snippet=(body_text or "")[:snippet_length],
        html_snippet=(html or "")[:snippet_length]
    )
