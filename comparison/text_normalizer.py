"""
Statute Text Normalizer

Turns a raw statute dump (PDF extraction or generated text) into canonical
paragraphs so both versions of a statute share the same paragraph structure:

1. Strip boilerplate lines (vLex headers, copyright, metadata, page headers)
2. Unwrap hard line breaks into one string
3. Repair typographic artifacts (quotes, section marks, dashes, bill refs)
4. Re-split into paragraphs before structural markers
5. Collapse whitespace inside each paragraph

Output paragraphs are separated by a blank line. Normalization is
idempotent: feeding the output back in returns it unchanged.
"""
from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from comparison.markers import LETTERED_MARKER, NUMBERED_MARKER, SECTION_MARKER
from utils.logging import logger
from utils.validation import coerce_text


PARAGRAPH_SEPARATOR = "\n\n"

# =============================================================================
# Boilerplate vocabulary
# =============================================================================

BOILERPLATE_PREFIXES: Tuple[str, ...] = (
    "Downloaded from vLex",
    "\u00a9 Copyright",
    "Copy for use in the context",
    "Otherwise, distribution",
    "Library:",
    "Edition:",
    "Currency:",
    "Citation:",
    "Year:",
    "vLex Document Id:",
    "Link:",
    "C.R.S. \u00a7",  # citation/title line, not part of the statute body
)

SECTION_LABELS: Tuple[str, ...] = ("History", "Cross Reference", "Note", "Source")

_MONTHS = (
    "January|February|March|April|May|June|July|"
    "August|September|October|November|December"
)
# "February 25, 2026 21:39 1/4"
PAGE_HEADER_RE = re.compile(rf"^(?:{_MONTHS})\s+\d{{1,2}},\s+\d{{4}}\s+\d{{1,2}}:\d{{2}}\s+\d+/\d+$")

# =============================================================================
# Typographic repair patterns
# =============================================================================

_WHITESPACE_RE = re.compile(r"\s+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_CURLY_DOUBLE_QUOTES_RE = re.compile("[\u201C\u201D\u201E\u201F\u2033]")
_QUOTE_RE = re.compile(r'"')
_GAP_AFTER_OPENING_QUOTE_RE = re.compile(r"\s+(?=\w)")
_GAP_BEFORE_CLOSING_QUOTE_RE = re.compile(r"(?<=\w)\s+\Z")
_PAREN_SPACE_PERIOD_RE = re.compile(r"\)\s+\.")
_PAREN_SPACE_COMMA_RE = re.compile(r"\)\s+,")
_COMMA_SECTION_MARK_RE = re.compile(",\u00a7")
_GLUED_SECTION_MARK_RE = re.compile("([^\\s\u00a7])\u00a7")
_LONG_DASH_RE = re.compile("[\u2013\u2014]")
# Lookarounds so "1 - 2 - 3" is fully repaired in a single pass.
_BILL_REF_SPACED_HYPHEN_RE = re.compile(r"(?<=\w)\s+-\s*(?=\d)")
_BILL_REF_TRAILING_SPACE_RE = re.compile(r"(?<=\w)-\s+(?=\d)")

# =============================================================================
# Re-segmentation patterns
# =============================================================================

# "(2)" only after sentence-ending punctuation or a closing quote, so inline
# references like "section 1-1-104 (2)" stay put.
_NUMBERED_BREAK_RE = re.compile(rf'([.:;"])\s+(?={NUMBERED_MARKER}\s)')
_LETTERED_BREAK_RE = re.compile(rf"\s+(?={LETTERED_MARKER}\s)", re.IGNORECASE)
_SECTION_BREAK_RE = re.compile(rf"\s+(?={SECTION_MARKER})")


@dataclass
class NormalizationConfig:
    """Vocabulary used by the statute normalizer."""
    boilerplate_prefixes: Tuple[str, ...] = field(default=BOILERPLATE_PREFIXES)
    section_labels: Tuple[str, ...] = field(default=SECTION_LABELS)

    def __post_init__(self) -> None:
        self.boilerplate_prefixes = tuple(self.boilerplate_prefixes)
        self.section_labels = tuple(self.section_labels)

    def to_dict(self) -> dict:
        """Export config to JSON-serializable dict."""
        return {
            "boilerplate_prefixes": list(self.boilerplate_prefixes),
            "section_labels": list(self.section_labels),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NormalizationConfig":
        """Create config from dict."""
        return cls(**{k: tuple(v) for k, v in data.items() if k in ("boilerplate_prefixes", "section_labels")})

    @classmethod
    def default_statute(cls) -> "NormalizationConfig":
        return cls()

    def label_break_pattern(self) -> Optional[re.Pattern]:
        if not self.section_labels:
            return None
        labels = "|".join(re.escape(label) for label in self.section_labels)
        return re.compile(rf"([.:;])\s+(?=(?:{labels}):)")


def is_boilerplate(line: str, config: Optional[NormalizationConfig] = None) -> bool:
    """True if a trimmed line is a known header/footer/metadata line."""
    if config is None:
        config = NormalizationConfig.default_statute()
    if any(line.startswith(prefix) for prefix in config.boilerplate_prefixes):
        return True
    return PAGE_HEADER_RE.match(line) is not None


def strip_boilerplate(text: str, config: Optional[NormalizationConfig] = None) -> List[str]:
    """Split into trimmed lines and drop the boilerplate ones."""
    kept: List[str] = []
    dropped = 0
    for line in text.split("\n"):
        trimmed = line.strip()
        if is_boilerplate(trimmed, config):
            dropped += 1
            continue
        kept.append(trimmed)
    if dropped:
        logger.debug("Stripped %d boilerplate lines", dropped)
    return kept


def unwrap_lines(lines: Iterable[str]) -> str:
    """Join lines into one string, removing hard wraps."""
    return _WHITESPACE_RE.sub(" ", " ".join(lines)).strip()


def _strip_space_inside_quotes(text: str) -> str:
    # Quotes alternate opening/closing, so ``"residence" or "facility"``
    # keeps the space between the two quoted terms.
    pieces: List[str] = []
    last = 0
    for ordinal, match in enumerate(_QUOTE_RE.finditer(text)):
        start, end = match.span()
        before = text[last:start]
        if ordinal % 2 == 1:
            before = _GAP_BEFORE_CLOSING_QUOTE_RE.sub("", before)
        pieces.append(before)
        pieces.append('"')
        last = end
        if ordinal % 2 == 0:
            gap = _GAP_AFTER_OPENING_QUOTE_RE.match(text, end)
            if gap is not None:
                last = gap.end()
    pieces.append(text[last:])
    return "".join(pieces)


def repair_typography(text: str) -> str:
    """
    Normalise common PDF-vs-generated formatting discrepancies.

    Each step is a global replacement and re-applying the whole function is a
    no-op.
    """
    if not text:
        return ""
    text = _CURLY_DOUBLE_QUOTES_RE.sub('"', text)
    text = _strip_space_inside_quotes(text)

    # ") ." and ") ," from PDF extraction
    text = _PAREN_SPACE_PERIOD_RE.sub(").", text)
    text = _PAREN_SPACE_COMMA_RE.sub("),", text)

    # "447,\u00a7" -> "447, \u00a7"
    text = _COMMA_SECTION_MARK_RE.sub(", \u00a7", text)
    text = _GLUED_SECTION_MARK_RE.sub("\\1 \u00a7", text)

    text = _LONG_DASH_RE.sub("-", text)

    # "HB 10 -1422" / "HB 10- 1422" -> "HB 10-1422"
    text = _BILL_REF_SPACED_HYPHEN_RE.sub("-", text)
    text = _BILL_REF_TRAILING_SPACE_RE.sub("-", text)
    return text


def segment_paragraphs(text: str, config: Optional[NormalizationConfig] = None) -> str:
    """Insert paragraph breaks before subsection and structural markers."""
    if config is None:
        config = NormalizationConfig.default_statute()
    text = _NUMBERED_BREAK_RE.sub(r"\1" + PARAGRAPH_SEPARATOR, text)
    # Lettered sub-items almost never appear as inline references.
    text = _LETTERED_BREAK_RE.sub(PARAGRAPH_SEPARATOR, text)
    text = _SECTION_BREAK_RE.sub(PARAGRAPH_SEPARATOR, text)
    label_re = config.label_break_pattern()
    if label_re is not None:
        text = label_re.sub(r"\1" + PARAGRAPH_SEPARATOR, text)
    return text


def split_paragraphs(text: str) -> List[str]:
    """Split canonical text on blank lines, dropping empty paragraphs."""
    if not text:
        return []
    return [p.strip() for p in _PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def join_paragraphs(paragraphs: Iterable[str]) -> str:
    return PARAGRAPH_SEPARATOR.join(paragraphs)


def normalize_statute(raw: str, config: Optional[NormalizationConfig] = None) -> str:
    """
    Normalise a raw statute dump into canonical paragraph text.

    Args:
        raw: Raw text, possibly with boilerplate lines and hard wraps
        config: Boilerplate/label vocabulary (defaults to the statute set)

    Returns:
        Paragraphs separated by a blank line; empty string for empty input
    """
    raw = coerce_text(raw, what="raw statute text")
    if not raw.strip():
        return ""
    if config is None:
        config = NormalizationConfig.default_statute()

    text, dropped = _normalize_once(raw, config)
    # Dropping a paragraph changes its neighbours' context (quote parity,
    # break punctuation), so run again until nothing more is dropped.
    while dropped:
        text, dropped = _normalize_once(text, config)
    return text


def _normalize_once(raw: str, config: NormalizationConfig) -> Tuple[str, int]:
    text = unwrap_lines(strip_boilerplate(raw, config))
    text = repair_typography(text)
    text = segment_paragraphs(text, config)

    paragraphs = []
    dropped = 0
    for chunk in split_paragraphs(text):
        paragraph = _WHITESPACE_RE.sub(" ", chunk).strip()
        # A paragraph rebuilt from wrapped lines can itself read as
        # boilerplate once it is a line of its own.
        if is_boilerplate(paragraph, config):
            logger.debug("Dropping boilerplate paragraph: %.40s", paragraph)
            dropped += 1
            continue
        paragraphs.append(paragraph)
    return join_paragraphs(paragraphs), dropped


normalize = normalize_statute


def normalize_paragraphs(raw: str, config: Optional[NormalizationConfig] = None) -> List[str]:
    """Normalize raw text and return its paragraph sequence."""
    return split_paragraphs(normalize_statute(raw, config))


def compute_text_fingerprint(text: str) -> str:
    """Compute SHA-1 fingerprint of (already normalized) text."""
    return hashlib.sha1(text.encode("utf-8")).hexdigest()
