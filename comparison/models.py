"""Shared data models for paragraph alignment, diffing, and resolution."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional

from comparison.markers import extract_prefix


SegmentKind = Literal["equal", "added", "removed"]


class PairKind(str, Enum):
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    ADDED = "added"
    REMOVED = "removed"


class Decision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
    PENDING = "pending"


class HighlightMode(str, Enum):
    """How much diff detail the view model carries."""
    PLAIN = "plain"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True)
class DiffSegment:
    kind: SegmentKind
    text: str

    def to_dict(self) -> dict:
        return {"kind": self.kind, "text": self.text}


@dataclass(frozen=True)
class AlignedPair:
    """One unit of comparison: an original paragraph, an updated one, or both.

    ``reason`` records how the aligner produced the pair (``prefix``,
    ``identical``, ``lookahead_insert``, ``lookahead_delete``, ``positional``,
    ``trailing_insert``, ``trailing_delete``).
    """
    original: Optional[str]
    updated: Optional[str]
    reason: str = "positional"

    def __post_init__(self) -> None:
        if self.original is None and self.updated is None:
            raise ValueError("An aligned pair needs at least one paragraph")

    @property
    def kind(self) -> PairKind:
        if self.original is None:
            return PairKind.ADDED
        if self.updated is None:
            return PairKind.REMOVED
        if self.original == self.updated:
            return PairKind.UNCHANGED
        return PairKind.MODIFIED

    @property
    def prefix(self) -> Optional[str]:
        """Structural prefix of the pair, preferring the original side."""
        if self.original is not None:
            found = extract_prefix(self.original)
            if found is not None or self.updated is None:
                return found
        return extract_prefix(self.updated or "")

    @property
    def has_change(self) -> bool:
        return self.kind is not PairKind.UNCHANGED

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "updated": self.updated,
            "kind": self.kind.value,
            "reason": self.reason,
            "prefix": self.prefix,
        }


@dataclass
class ParagraphView:
    """Renderable record for one aligned pair after resolution."""
    index: int
    kind: PairKind
    decision: Decision
    original: Optional[str]
    updated: Optional[str]
    resolved: Optional[str]
    included: bool
    edited: bool = False
    similarity: float = 0.0
    segments: Optional[List[DiffSegment]] = None
    proposed_segments: Optional[List[DiffSegment]] = None

    @property
    def prefix(self) -> Optional[str]:
        return extract_prefix(self.original or self.updated or "")

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "kind": self.kind.value,
            "decision": self.decision.value,
            "prefix": self.prefix,
            "original": self.original,
            "updated": self.updated,
            "resolved": self.resolved,
            "included": self.included,
            "edited": self.edited,
            "similarity": round(self.similarity, 4),
            "segments": [s.to_dict() for s in self.segments] if self.segments is not None else None,
            "proposed_segments": (
                [s.to_dict() for s in self.proposed_segments]
                if self.proposed_segments is not None
                else None
            ),
        }


@dataclass
class ReviewTally:
    """Decision counts over the pairs that actually carry a change."""
    total: int = 0
    approved: int = 0
    rejected: int = 0

    @property
    def pending(self) -> int:
        return self.total - self.approved - self.rejected

    @property
    def all_reviewed(self) -> bool:
        return self.pending == 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "approved": self.approved,
            "rejected": self.rejected,
            "pending": self.pending,
            "all_reviewed": self.all_reviewed,
        }


@dataclass
class ResolutionResult:
    final_text: str
    views: List[ParagraphView] = field(default_factory=list)
    tally: ReviewTally = field(default_factory=ReviewTally)

    @property
    def paragraphs(self) -> List[str]:
        return [view.resolved for view in self.views if view.included and view.resolved]

    def to_dict(self) -> dict:
        return {
            "final_text": self.final_text,
            "tally": self.tally.to_dict(),
            "views": [view.to_dict() for view in self.views],
        }
