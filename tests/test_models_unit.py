from __future__ import annotations

import pytest

from comparison.models import (
    AlignedPair,
    Decision,
    DiffSegment,
    PairKind,
    ParagraphView,
    ResolutionResult,
    ReviewTally,
)


def test_aligned_pair_requires_one_side():
    with pytest.raises(ValueError):
        AlignedPair(None, None)


@pytest.mark.parametrize(
    "original,updated,kind",
    [
        ("(1) A.", "(1) A.", PairKind.UNCHANGED),
        ("(1) A.", "(1) A!", PairKind.MODIFIED),
        (None, "(2) B.", PairKind.ADDED),
        ("(2) B.", None, PairKind.REMOVED),
    ],
)
def test_pair_kind(original, updated, kind):
    pair = AlignedPair(original, updated)
    assert pair.kind is kind
    assert pair.has_change is (kind is not PairKind.UNCHANGED)


def test_unchanged_requires_exact_equality():
    assert AlignedPair("(1) A.", "(1) A. ").kind is PairKind.MODIFIED


def test_pair_prefix_prefers_original_side():
    assert AlignedPair("(1) A.", "(2) A.").prefix == "(1)"
    assert AlignedPair("Intro.", "(2) A.").prefix == "(2)"
    assert AlignedPair(None, "(a) item").prefix == "(a)"
    assert AlignedPair("Intro.", None).prefix is None


def test_pair_to_dict():
    data = AlignedPair(None, "(3) C.", "trailing_insert").to_dict()
    assert data == {
        "original": None,
        "updated": "(3) C.",
        "kind": "added",
        "reason": "trailing_insert",
        "prefix": "(3)",
    }


def test_review_tally():
    tally = ReviewTally(total=3, approved=1, rejected=1)
    assert tally.pending == 1
    assert not tally.all_reviewed
    assert ReviewTally().all_reviewed
    assert tally.to_dict()["pending"] == 1


def test_resolution_result_serializes_views():
    view = ParagraphView(
        index=0,
        kind=PairKind.MODIFIED,
        decision=Decision.APPROVED,
        original="(1) may vote.",
        updated="(1) shall vote.",
        resolved="(1) shall vote.",
        included=True,
        similarity=0.87654,
        segments=[DiffSegment("equal", "(1) "), DiffSegment("removed", "may")],
    )
    result = ResolutionResult(final_text="(1) shall vote.", views=[view])
    data = result.to_dict()

    assert result.paragraphs == ["(1) shall vote."]
    assert data["views"][0]["prefix"] == "(1)"
    assert data["views"][0]["similarity"] == 0.8765
    assert data["views"][0]["segments"][1] == {"kind": "removed", "text": "may"}
    assert data["views"][0]["proposed_segments"] is None
