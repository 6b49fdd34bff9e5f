"""
Consensus Merging

Combines several decoded readings of the same barcode into one string.

Longer readings are trusted more: only candidates of the greatest length
are consulted. Among those, the first to put a definite character at a
position keeps it; later candidates only fill positions still marked with
the wildcard.
"""

import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# Placeholder for a character that couldn't be decoded
WILDCARD = "?"


def combine_candidates(candidates: Iterable[Optional[str]]) -> str:
    """
    Merge candidate readings into the most probable result.

    Args:
        candidates: Decoded strings, possibly containing WILDCARD.
            None entries (failed decodes) are skipped.

    Returns:
        Merged string with the length of the longest candidate. Positions
        none of the longest candidates could resolve keep WILDCARD.
        An empty input gives "".
    """
    # sorted() is stable, so ties keep their original order
    ordered = sorted(
        (c for c in candidates if c is not None),
        key=len,
        reverse=True,
    )

    merged: List[Optional[str]] = []
    max_length = 0

    for candidate in ordered:
        length = len(candidate)
        if max_length and length != max_length:
            # Everything after this is shorter
            break
        max_length = length

        if len(merged) < length:
            merged.extend([None] * (length - len(merged)))

        for index, char in enumerate(candidate):
            if merged[index] is None or merged[index] == WILDCARD:
                merged[index] = char

    logger.debug(f"Merged {len(ordered)} candidates into {max_length} chars")
    return "".join(WILDCARD if char is None else char for char in merged)
