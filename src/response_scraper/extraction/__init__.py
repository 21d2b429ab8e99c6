"""
Layout-agnostic extraction of chosen options from rendered response sheets.

This package contains:
- Marker patterns for question, option and chosen-option text
- The block-scan and markup-scan extraction strategies
- The merge policy reconciling the two strategies
- Diagnostics assembly for debug responses
"""

from .block_scan import parse_from_blocks
from .diagnostics import Diagnostics, assemble_diagnostics
from .html_scan import parse_from_html
from .merge import merge_results

__all__ = [
    'parse_from_blocks',
    'parse_from_html',
    'merge_results',
    'Diagnostics',
    'assemble_diagnostics'
]
