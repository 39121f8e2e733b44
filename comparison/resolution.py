"""Fold reviewer decisions and edits into a resolved statute."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from comparison.alignment import pair_similarity
from comparison.models import (
    AlignedPair,
    Decision,
    HighlightMode,
    PairKind,
    ParagraphView,
    ResolutionResult,
    ReviewTally,
)
from comparison.text_normalizer import join_paragraphs
from utils.logging import logger
from utils.text_diff import compute_word_diff
from utils.validation import validate_decisions, validate_edits


def resolve_pair(
    pair: AlignedPair,
    decision: Decision = Decision.PENDING,
    edit: Optional[str] = None,
) -> Optional[str]:
    """
    Return the text a pair contributes to the final document, or None.

    | shape     | pending  | approved          | rejected |
    |-----------|----------|-------------------|----------|
    | unchanged | original | original          | original |
    | modified  | original | edit or updated   | original |
    | added     | -        | edit or updated   | -        |
    | removed   | original | -                 | original |
    """
    kind = pair.kind
    if kind is PairKind.UNCHANGED:
        return pair.original
    if kind is PairKind.MODIFIED:
        if decision is Decision.APPROVED:
            return edit if edit is not None else pair.updated
        return pair.original
    if kind is PairKind.ADDED:
        if decision is Decision.APPROVED:
            return edit if edit is not None else pair.updated
        return None
    # removed
    if decision is Decision.APPROVED:
        return None
    return pair.original


def _applicable_edit(pair: AlignedPair, decision: Decision, edit: Optional[str]) -> Optional[str]:
    if edit is None or decision is not Decision.APPROVED:
        return None
    if pair.kind not in (PairKind.MODIFIED, PairKind.ADDED):
        return None
    return edit.strip()


def _in_range(mapping: Dict[int, Any], count: int, what: str) -> Dict[int, Any]:
    stale = [idx for idx in mapping if not 0 <= idx < count]
    if stale:
        logger.debug("Ignoring %d stale %s index(es): %s", len(stale), what, sorted(stale))
        return {idx: value for idx, value in mapping.items() if 0 <= idx < count}
    return mapping


def resolve(
    pairs: Sequence[AlignedPair],
    decisions: Optional[Mapping[Any, Any]] = None,
    edits: Optional[Mapping[Any, Any]] = None,
    mode: Union[HighlightMode, str] = HighlightMode.PLAIN,
) -> ResolutionResult:
    """
    Resolve aligned pairs into a final document and a per-paragraph view model.

    Args:
        pairs: Aligned pairs in reading order
        decisions: Sparse pair index -> decision map; absent means pending
        edits: Sparse pair index -> override text, applied only to approved
            modified/added pairs
        mode: ``plain`` carries resolved text only; ``highlight`` also carries
            word diffs for approved changes and for every proposed modification

    Returns:
        ResolutionResult with the final text, views, and decision tally.
        Indices outside ``pairs`` are ignored. Neither map is mutated.
    """
    mode = HighlightMode(mode)
    decision_map = _in_range(validate_decisions(decisions), len(pairs), "decision")
    edit_map = _in_range(validate_edits(edits), len(pairs), "edit")

    views: List[ParagraphView] = []
    included: List[str] = []

    for index, pair in enumerate(pairs):
        decision = decision_map.get(index, Decision.PENDING)
        edit = _applicable_edit(pair, decision, edit_map.get(index))
        resolved = resolve_pair(pair, decision, edit)
        # A blank paragraph cannot exist in a document.
        is_included = bool(resolved and resolved.strip())

        view = ParagraphView(
            index=index,
            kind=pair.kind,
            decision=decision,
            original=pair.original,
            updated=pair.updated,
            resolved=resolved if is_included else None,
            included=is_included,
            edited=edit is not None,
            similarity=pair_similarity(pair),
        )
        if mode is HighlightMode.HIGHLIGHT:
            _attach_segments(view, pair)
        views.append(view)
        if is_included:
            included.append(resolved)

    tally = tally_decisions(pairs, decision_map)
    logger.debug(
        "Resolved %d pairs: %d paragraphs kept, %d pending change(s)",
        len(pairs),
        len(included),
        tally.pending,
    )
    return ResolutionResult(final_text=join_paragraphs(included), views=views, tally=tally)


def _attach_segments(view: ParagraphView, pair: AlignedPair) -> None:
    if view.kind is PairKind.MODIFIED:
        view.proposed_segments = compute_word_diff(pair.original or "", pair.updated or "")
    if view.decision is Decision.APPROVED and view.kind in (PairKind.MODIFIED, PairKind.ADDED):
        view.segments = compute_word_diff(pair.original or "", view.resolved or "")


def tally_decisions(
    pairs: Sequence[AlignedPair],
    decisions: Optional[Mapping[Any, Any]] = None,
) -> ReviewTally:
    """Count approved/rejected/pending decisions over pairs that carry a change."""
    decision_map = validate_decisions(decisions)
    tally = ReviewTally()
    for index, pair in enumerate(pairs):
        if not pair.has_change:
            continue
        tally.total += 1
        decision = decision_map.get(index, Decision.PENDING)
        if decision is Decision.APPROVED:
            tally.approved += 1
        elif decision is Decision.REJECTED:
            tally.rejected += 1
    return tally


def summarize_changes(views: Sequence[ParagraphView]) -> Dict[str, List[str]]:
    """
    Prefixes of approved changes grouped as amended / added / repealed.

    Paragraphs without a structural prefix are listed by their pair index.
    """
    summary: Dict[str, List[str]] = {"amended": [], "added": [], "repealed": []}
    bucket = {
        PairKind.MODIFIED: "amended",
        PairKind.ADDED: "added",
        PairKind.REMOVED: "repealed",
    }
    for view in views:
        if view.decision is not Decision.APPROVED or view.kind not in bucket:
            continue
        summary[bucket[view.kind]].append(view.prefix or f"#{view.index}")
    return summary


def describe_changes(views: Sequence[ParagraphView], bill: Optional[str] = None) -> str:
    """
    One-line note for the applied changes, e.g.
    ``"(1) amended and (4) added, HB25-1001"``. Empty when nothing was applied.
    See ``history_entry`` for the session-prefixed form.
    """
    summary = summarize_changes(views)
    parts = [f"{', '.join(items)} {label}" for label, items in summary.items() if items]
    if not parts:
        return ""
    note = " and ".join(parts)
    return f"{note}, {bill}" if bill else note


def history_entry(
    views: Sequence[ParagraphView],
    bill: Optional[str] = None,
    session: str = "L. 25",
    previous: str = "",
) -> str:
    """
    Legislative history entry for the applied changes, appended to ``previous``.

    ``"L. 25: (1) amended and (4) added, HB25-1001, effective upon signature."``
    Returns ``previous`` unchanged when nothing was applied.
    """
    note = describe_changes(views, bill)
    if not note:
        return previous
    entry = f"{session}: {note}, effective upon signature."
    return f"{previous} {entry}" if previous else entry
