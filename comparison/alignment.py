"""Paragraph alignment between two versions of a statute.

Greedy two-pointer matching anchored on subsection prefixes, with a bounded
lookahead to re-sync after runs of inserted or deleted paragraphs. This is
not an optimal sequence aligner: repeated prefixes or paragraphs moved
further than the lookahead window can be misaligned.
"""
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

from rapidfuzz import fuzz

from comparison.markers import extract_prefix
from comparison.models import AlignedPair, PairKind
from config.settings import settings
from utils.logging import logger
from utils.text_normalization import normalize_text


def _find_prefix(
    paragraphs: Sequence[str],
    prefixes: Sequence[Optional[str]],
    start: int,
    window: int,
    target: Optional[str],
) -> int:
    """Offset of the first paragraph in ``[start, start + window)`` with ``target`` prefix, or -1."""
    if target is None:
        return -1
    end = min(start + window, len(paragraphs))
    for idx in range(start, end):
        if prefixes[idx] == target:
            return idx - start
    return -1


def align_paragraphs(
    original: Sequence[str],
    updated: Sequence[str],
    window: Optional[int] = None,
) -> List[AlignedPair]:
    """
    Align two paragraph sequences into an ordered list of pairs.

    Args:
        original: Normalized paragraphs of the original text
        updated: Normalized paragraphs of the updated text
        window: Lookahead size (defaults to ``settings.lookahead_window``)

    Returns:
        Pairs in reading order: matched pairs interleaved with runs of added
        (original absent) and removed (updated absent) paragraphs.
    """
    if window is None:
        window = settings.lookahead_window
    if window < 1:
        raise ValueError("Lookahead window must be at least 1")

    logger.info("Aligning %d paragraphs -> %d paragraphs", len(original), len(updated))

    orig_prefixes = [extract_prefix(p) for p in original]
    upd_prefixes = [extract_prefix(p) for p in updated]

    pairs: List[AlignedPair] = []
    i = 0
    j = 0

    while i < len(original) and j < len(updated):
        orig = original[i]
        upd = updated[j]
        orig_prefix = orig_prefixes[i]
        upd_prefix = upd_prefixes[j]

        if orig_prefix is not None and orig_prefix == upd_prefix:
            pairs.append(AlignedPair(orig, upd, "prefix"))
            i += 1
            j += 1
            continue
        if orig == upd:
            pairs.append(AlignedPair(orig, upd, "identical"))
            i += 1
            j += 1
            continue

        # Does the original's anchor appear a little later in the update?
        ahead_upd = _find_prefix(updated, upd_prefixes, j + 1, window, orig_prefix)
        if ahead_upd != -1:
            logger.debug("Re-sync at %s: %d inserted paragraph(s)", orig_prefix, ahead_upd + 1)
            for k in range(ahead_upd + 1):
                pairs.append(AlignedPair(None, updated[j + k], "lookahead_insert"))
            j += ahead_upd + 1
            continue

        ahead_orig = _find_prefix(original, orig_prefixes, i + 1, window, upd_prefix)
        if ahead_orig != -1:
            logger.debug("Re-sync at %s: %d deleted paragraph(s)", upd_prefix, ahead_orig + 1)
            for k in range(ahead_orig + 1):
                pairs.append(AlignedPair(original[i + k], None, "lookahead_delete"))
            i += ahead_orig + 1
            continue

        pair = AlignedPair(orig, upd, "positional")
        similarity = pair_similarity(pair)
        if similarity < settings.low_similarity_warning_threshold:
            logger.warning(
                "Positional match with low similarity %.2f (%s vs %s)",
                similarity,
                orig_prefix,
                upd_prefix,
            )
        pairs.append(pair)
        i += 1
        j += 1

    while i < len(original):
        pairs.append(AlignedPair(original[i], None, "trailing_delete"))
        i += 1
    while j < len(updated):
        pairs.append(AlignedPair(None, updated[j], "trailing_insert"))
        j += 1

    logger.debug("Alignment complete: %d pairs", len(pairs))
    return pairs


align = align_paragraphs


def pair_similarity(pair: AlignedPair) -> float:
    """Similarity of the two sides (0.0-1.0); one-sided pairs score 0.0."""
    if pair.original is None or pair.updated is None:
        return 0.0
    if pair.original == pair.updated:
        return 1.0
    norm_a = normalize_text(pair.original)
    norm_b = normalize_text(pair.updated)
    if not norm_a and not norm_b:
        return 1.0
    return fuzz.ratio(norm_a, norm_b) / 100.0


def original_paragraphs(pairs: Sequence[AlignedPair]) -> List[str]:
    """Original-side content in pair order (rebuilds the original document)."""
    return [p.original for p in pairs if p.original is not None]


def updated_paragraphs(pairs: Sequence[AlignedPair]) -> List[str]:
    """Updated-side content in pair order (rebuilds the updated document)."""
    return [p.updated for p in pairs if p.updated is not None]


def summarize_alignment(pairs: Sequence[AlignedPair]) -> Dict:
    """Counts of pairs by kind and by alignment reason."""
    by_kind = Counter(p.kind.value for p in pairs)
    return {
        "total": len(pairs),
        "by_kind": {kind.value: by_kind.get(kind.value, 0) for kind in PairKind},
        "by_reason": dict(Counter(p.reason for p in pairs)),
        "changed": sum(1 for p in pairs if p.has_change),
    }
