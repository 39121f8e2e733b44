"""Word-level text comparison utilities for inline change highlighting."""
from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from comparison.models import DiffSegment, SegmentKind
from utils.text_normalization import canonicalize_typography


_TOKEN_SPLIT_RE = re.compile(r"(\s+)")


def tokenize(text: str) -> List[str]:
    """Split on whitespace, keeping the whitespace runs as their own tokens."""
    return _TOKEN_SPLIT_RE.split(text)


def compute_word_diff(old_text: str, new_text: str) -> List[DiffSegment]:
    """
    Compute a word-level diff between two strings.

    Uses a longest-common-subsequence table over whitespace-preserving word
    tokens. Tokens are compared after typographic canonicalization (curly vs
    straight quotes, dash variants, NBSP, ...) but segments carry the original
    token text, so cosmetic differences never show up as edits while the
    rendered output keeps the source formatting.

    Args:
        old_text: Original text
        new_text: Updated text

    Returns:
        Ordered segments; ``equal`` + ``removed`` rebuild ``old_text`` and
        ``equal`` + ``added`` rebuild ``new_text``.

    Examples:
        >>> [s.kind for s in compute_word_diff("residence\\u201D", 'residence"')]
        ['equal']
        >>> [s.kind for s in compute_word_diff("may vote.", "shall vote.")]
        ['removed', 'added', 'equal']
    """
    old_text = old_text or ""
    new_text = new_text or ""

    if canonicalize_typography(old_text) == canonicalize_typography(new_text):
        return [DiffSegment("equal", old_text)]
    if not old_text:
        return [DiffSegment("added", new_text)]
    if not new_text:
        return [DiffSegment("removed", old_text)]

    old_tokens = tokenize(old_text)
    new_tokens = tokenize(new_text)
    old_keys = [canonicalize_typography(t) for t in old_tokens]
    new_keys = [canonicalize_typography(t) for t in new_tokens]

    table = _lcs_table(old_keys, new_keys)
    raw = _backtrack(table, old_tokens, new_tokens, old_keys, new_keys)
    return _merge(raw)


diff = compute_word_diff


def _lcs_table(old_keys: List[str], new_keys: List[str]) -> List[List[int]]:
    m, n = len(old_keys), len(new_keys)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row, prev = dp[i], dp[i - 1]
        old_key = old_keys[i - 1]
        for j in range(1, n + 1):
            if old_key == new_keys[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])
    return dp


def _backtrack(
    dp: List[List[int]],
    old_tokens: List[str],
    new_tokens: List[str],
    old_keys: List[str],
    new_keys: List[str],
) -> List[Tuple[SegmentKind, str]]:
    segments: List[Tuple[SegmentKind, str]] = []
    i, j = len(old_tokens), len(new_tokens)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old_keys[i - 1] == new_keys[j - 1]:
            segments.append(("equal", old_tokens[i - 1]))
            i -= 1
            j -= 1
        # On a tie the insertion is taken first; since the list is built
        # back-to-front, removals end up ahead of additions in the output.
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            segments.append(("added", new_tokens[j - 1]))
            j -= 1
        else:
            segments.append(("removed", old_tokens[i - 1]))
            i -= 1
    segments.reverse()
    return segments


def _merge(raw: Iterable[Tuple[SegmentKind, str]]) -> List[DiffSegment]:
    merged: List[List] = []
    for kind, text in raw:
        if not text:
            continue
        if merged and merged[-1][0] == kind:
            merged[-1][1] += text
        else:
            merged.append([kind, text])
    return [DiffSegment(kind, text) for kind, text in merged]


def original_side(segments: Iterable[DiffSegment]) -> List[DiffSegment]:
    """Segments shown in a "before" pane: everything except additions."""
    return [s for s in segments if s.kind != "added"]


def updated_side(segments: Iterable[DiffSegment]) -> List[DiffSegment]:
    """Segments shown in an "after" pane: everything except removals."""
    return [s for s in segments if s.kind != "removed"]


def reconstruct_original(segments: Iterable[DiffSegment]) -> str:
    return "".join(s.text for s in original_side(segments))


def reconstruct_updated(segments: Iterable[DiffSegment]) -> str:
    return "".join(s.text for s in updated_side(segments))


def has_changes(segments: Iterable[DiffSegment]) -> bool:
    return any(s.kind != "equal" for s in segments)
