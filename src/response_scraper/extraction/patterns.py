"""
Marker patterns shared by both extraction strategies.

Compiled patterns carry no scan position, so every call to ``finditer`` or
``search`` starts a fresh, independent scan and the module-level objects can
be shared across concurrent requests.
"""

import re
from typing import Dict, Iterator, Optional, Tuple

# Optional separator between a marker phrase and its value: colon, en-dash or hyphen
_SEPARATOR = r'\s*[:\u2013-]?\s*'
_TOKEN = r'([A-Za-z0-9\-_]+)'

QUESTION_ID_PATTERN = re.compile(r'Question\s*ID' + _SEPARATOR + _TOKEN, re.IGNORECASE)
OPTION_ID_PATTERN = re.compile(r'Option\s*([1-9][0-9]?)\s*ID' + _SEPARATOR + _TOKEN, re.IGNORECASE)
CHOSEN_OPTION_PATTERN = re.compile(r'Chosen\s*Option' + _SEPARATOR + r'([0-9]+)', re.IGNORECASE)

# Bare identifier used when the chosen ordinal cannot be resolved
LONG_NUMERIC_PATTERN = re.compile(r'([0-9]{6,})')

# Pre-filter applied by the block collectors to long blocks
MARKER_KEYWORD_PATTERN = re.compile(r'Question\s*ID|Chosen\s*Option|Option\s*\d+\s*ID', re.IGNORECASE)


def iter_question_ids(text: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(question_id, offset)`` for every question marker in scan order."""
    for match in QUESTION_ID_PATTERN.finditer(text):
        yield match.group(1).strip(), match.start()


def find_question_id(text: str) -> Optional[str]:
    """Return the first question identifier in ``text``, if any."""
    match = QUESTION_ID_PATTERN.search(text)
    return match.group(1).strip() if match else None


def collect_option_table(text: str) -> Dict[str, str]:
    """Map option ordinal text to option identifier; later duplicates overwrite earlier ones."""
    return {
        match.group(1): match.group(2).strip()
        for match in OPTION_ID_PATTERN.finditer(text)
    }


def find_chosen_ordinal(text: str) -> Optional[str]:
    """Return the ordinal digits of the first "Chosen Option" marker, as written."""
    match = CHOSEN_OPTION_PATTERN.search(text)
    return match.group(1) if match else None


def find_long_numeric(text: str) -> Optional[str]:
    match = LONG_NUMERIC_PATTERN.search(text)
    return match.group(1) if match else None


def resolve_chosen_option(text: str) -> Optional[str]:
    """
    Resolve the chosen option identifier within one question's text span.

    The "Chosen Option" digits are looked up verbatim in the option table
    built from the same span, so "02" does not match option "2". When that
    yields nothing, the first bare numeric token of six or more digits is
    used verbatim.

    Args:
        text: Text scoped to a single question

    Returns:
        The chosen option identifier, or None when nothing resolves
    """
    options = collect_option_table(text)
    ordinal = find_chosen_ordinal(text)
    return options.get(ordinal) or find_long_numeric(text)
