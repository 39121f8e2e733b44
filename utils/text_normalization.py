"""Text normalization utilities for comparison."""
from __future__ import annotations

import re
import unicodedata


# =============================================================================
# Typographic variant tables (comparison only, never applied to output text)
# =============================================================================

SINGLE_QUOTE_VARIANTS = {
    "\u2018": "'",  # LEFT SINGLE QUOTATION MARK
    "\u2019": "'",  # RIGHT SINGLE QUOTATION MARK
    "\u201A": "'",  # SINGLE LOW-9 QUOTATION MARK
    "\u201B": "'",  # SINGLE HIGH-REVERSED-9 QUOTATION MARK
    "\u2032": "'",  # PRIME
    "\u2035": "'",  # REVERSED PRIME
}

DOUBLE_QUOTE_VARIANTS = {
    "\u201C": '"',  # LEFT DOUBLE QUOTATION MARK
    "\u201D": '"',  # RIGHT DOUBLE QUOTATION MARK
    "\u201E": '"',  # DOUBLE LOW-9 QUOTATION MARK
    "\u201F": '"',  # DOUBLE HIGH-REVERSED-9 QUOTATION MARK
    "\u2033": '"',  # DOUBLE PRIME
    "\u2036": '"',  # REVERSED DOUBLE PRIME
}

SEMICOLON_VARIANTS = {
    "\u037E": ";",  # GREEK QUESTION MARK
    "\u061B": ";",  # ARABIC SEMICOLON
    "\u204F": ";",  # REVERSED SEMICOLON
    "\u2E35": ";",  # TURNED SEMICOLON
}

DASH_VARIANTS = {
    "\u2010": "-",  # HYPHEN
    "\u2011": "-",  # NON-BREAKING HYPHEN
    "\u2012": "-",  # FIGURE DASH
    "\u2013": "-",  # EN DASH
    "\u2014": "-",  # EM DASH
    "\u2015": "-",  # HORIZONTAL BAR
}

SPECIAL_SPACES = {
    "\u00A0": " ",  # NO-BREAK SPACE
}

_TYPOGRAPHY_TABLE = str.maketrans({
    **SINGLE_QUOTE_VARIANTS,
    **DOUBLE_QUOTE_VARIANTS,
    **SEMICOLON_VARIANTS,
    **DASH_VARIANTS,
    **SPECIAL_SPACES,
})

_WHITESPACE_RE = re.compile(r"\s+")


def canonicalize_typography(text: str) -> str:
    """
    Map typographic look-alikes onto their plain ASCII equivalents.

    Used as the comparison key for word diffing so that two independently
    produced documents do not disagree on cosmetic code points. The mapping is
    one character to one character, so token boundaries never move.

    Examples:
        >>> canonicalize_typography("residence\\u201D")
        'residence"'
        >>> canonicalize_typography("10\\u201312")
        '10-12'
    """
    if not text:
        return ""
    return text.translate(_TYPOGRAPHY_TABLE)


def normalize_text(text: str) -> str:
    """
    Normalize text for similarity scoring and fingerprinting.

    This function:
    - Canonicalizes typographic variants (quotes, dashes, semicolons, NBSP)
    - Converts text to lowercase
    - Normalizes Unicode to NFC
    - Collapses whitespace and strips the ends

    Examples:
        >>> normalize_text("  Eligible   Electors ")
        'eligible electors'
        >>> normalize_text("\\u201CAssisted\\u201D")
        '"assisted"'
    """
    if not text:
        return ""

    normalized = canonicalize_typography(text).lower()
    normalized = unicodedata.normalize("NFC", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()
