"""Structural marker vocabulary shared by the normalizer and the aligner.

Statute paragraphs open with a subsection marker such as ``(1)``, ``(1.3)``
or a lettered sub-item such as ``(a)``. The same patterns decide where the
normalizer breaks paragraphs and which paragraphs the aligner treats as
anchors, so they live in one place.
"""
from __future__ import annotations

import re
from typing import Optional


NUMBERED_MARKER = r"\(\d+(?:\.\d+)*\)"
LETTERED_MARKER = r"\([a-z]\)"
SECTION_MARKER = r"SECTION\s+\d+\."

_PREFIX_RE = re.compile(rf"^(?:{NUMBERED_MARKER}|{LETTERED_MARKER})", re.IGNORECASE)


def extract_prefix(paragraph: str) -> Optional[str]:
    """
    Return the structural prefix a paragraph starts with, if any.

    Only the start of the string is inspected. The marker is returned exactly
    as written, so ``(a)`` and ``(A)`` stay distinct anchors.

    Examples:
        >>> extract_prefix("(1.5) The secretary shall ...")
        '(1.5)'
        >>> extract_prefix("(b) any elector")
        '(b)'
        >>> extract_prefix("History: L. 92") is None
        True
    """
    if not paragraph:
        return None
    match = _PREFIX_RE.match(paragraph)
    return match.group(0) if match else None


def is_numbered(prefix: Optional[str]) -> bool:
    return bool(prefix) and re.fullmatch(NUMBERED_MARKER, prefix) is not None
