"""
Reviewer decision store keyed by pair content instead of list position.

Pair indices are recomputed whenever either source text changes, so a
decision stored under "index 3" can silently land on a different paragraph.
``ReviewSession`` keys decisions and edits by a fingerprint of the pair's
prefix and content; after re-alignment, entries whose fingerprint still
exists carry over and everything else falls back to pending.
"""
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence, Union

from comparison.models import AlignedPair, Decision, HighlightMode, ResolutionResult
from comparison.resolution import resolve
from comparison.text_normalizer import compute_text_fingerprint
from utils.logging import logger
from utils.text_normalization import canonicalize_typography
from utils.validation import coerce_decision, coerce_text


def pair_fingerprint(pair: AlignedPair) -> str:
    """``"<prefix or ->:<sha1 of both sides>"``, tolerant of typographic variants."""
    original = canonicalize_typography(pair.original) if pair.original is not None else "\x00"
    updated = canonicalize_typography(pair.updated) if pair.updated is not None else "\x00"
    digest = compute_text_fingerprint(f"{original}\x1e{updated}")
    return f"{pair.prefix or '-'}:{digest}"


def fingerprint_pairs(pairs: Sequence[AlignedPair]) -> List[str]:
    """Fingerprints for a pair list; repeats get an occurrence suffix (``#2``, ...)."""
    seen: Counter = Counter()
    keys: List[str] = []
    for pair in pairs:
        base = pair_fingerprint(pair)
        seen[base] += 1
        keys.append(base if seen[base] == 1 else f"{base}#{seen[base]}")
    return keys


class ReviewSession:
    """Decisions and edits for one review, stable across re-alignment."""

    def __init__(self, pairs: Sequence[AlignedPair]):
        self._pairs: List[AlignedPair] = list(pairs)
        self._keys: List[str] = fingerprint_pairs(self._pairs)
        self._decisions: Dict[str, Decision] = {}
        self._edits: Dict[str, str] = {}

    @property
    def pairs(self) -> List[AlignedPair]:
        return list(self._pairs)

    def _key(self, index: int) -> Optional[str]:
        if not 0 <= index < len(self._keys):
            logger.warning("Ignoring review action on out-of-range pair index %d", index)
            return None
        return self._keys[index]

    def decide(self, index: int, decision: Union[Decision, str, None]) -> None:
        key = self._key(index)
        if key is None:
            return
        decision = coerce_decision(decision)
        if decision is Decision.PENDING:
            self._decisions.pop(key, None)
        else:
            self._decisions[key] = decision

    def undo(self, index: int) -> None:
        """Return a pair to pending; any edit is kept."""
        self.decide(index, Decision.PENDING)

    def edit(self, index: int, text: str) -> None:
        key = self._key(index)
        if key is None:
            return
        self._edits[key] = coerce_text(text, what="edit override")

    def revert_edit(self, index: int) -> None:
        """Drop the edit override; the decision is kept."""
        key = self._key(index)
        if key is not None:
            self._edits.pop(key, None)

    def decision_at(self, index: int) -> Decision:
        if not 0 <= index < len(self._keys):
            return Decision.PENDING
        return self._decisions.get(self._keys[index], Decision.PENDING)

    def edit_at(self, index: int) -> Optional[str]:
        if not 0 <= index < len(self._keys):
            return None
        return self._edits.get(self._keys[index])

    def decisions_by_index(self) -> Dict[int, Decision]:
        return {
            idx: self._decisions[key]
            for idx, key in enumerate(self._keys)
            if key in self._decisions
        }

    def edits_by_index(self) -> Dict[int, str]:
        return {idx: self._edits[key] for idx, key in enumerate(self._keys) if key in self._edits}

    def rebase(self, pairs: Sequence[AlignedPair]) -> int:
        """
        Switch to a new alignment, keeping entries whose pair still exists.

        Returns:
            Number of decisions that still apply to the new pair list
        """
        self._pairs = list(pairs)
        self._keys = fingerprint_pairs(self._pairs)
        live = set(self._keys)
        dropped_decisions = [k for k in self._decisions if k not in live]
        dropped_edits = [k for k in self._edits if k not in live]
        for key in dropped_decisions:
            del self._decisions[key]
        for key in dropped_edits:
            del self._edits[key]
        if dropped_decisions or dropped_edits:
            logger.info(
                "Re-alignment dropped %d decision(s) and %d edit(s)",
                len(dropped_decisions),
                len(dropped_edits),
            )
        return len(self._decisions)

    def resolve(self, mode: Union[HighlightMode, str] = HighlightMode.PLAIN) -> ResolutionResult:
        return resolve(self._pairs, self.decisions_by_index(), self.edits_by_index(), mode)
