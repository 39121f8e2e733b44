from __future__ import annotations

import logging

from comparison.models import PairKind
from pipeline import ComparisonPipeline, ReviewCache, compare_statutes


ORIGINAL_RAW = """Downloaded from vLex on February 25, 2026
Link: https://example.invalid/doc
(1) Every eligible elector
may vote. (2) Each county clerk shall keep
records.
"""

UPDATED_RAW = """(1) Every eligible elector
may vote. Accessibility is required. (2) Each county clerk shall keep
records. (3) The secretary of state shall
publish guidance.
"""


def test_compare_statutes_end_to_end():
    comparison = compare_statutes(ORIGINAL_RAW, UPDATED_RAW)

    assert comparison.original_paragraphs == [
        "(1) Every eligible elector may vote.",
        "(2) Each county clerk shall keep records.",
    ]
    assert [p.kind for p in comparison.pairs] == [
        PairKind.MODIFIED,
        PairKind.UNCHANGED,
        PairKind.ADDED,
    ]
    assert comparison.has_changes
    assert comparison.summary["changed"] == 2

    metrics = comparison.metrics
    assert metrics.pairs == 3
    assert metrics.changed_pairs == 2
    assert set(metrics.timing_breakdown) == {"normalize_original", "normalize_updated", "align"}
    assert metrics.to_dict()["original_paragraphs"] == 2


def test_compare_identical_texts_has_no_changes():
    comparison = compare_statutes(ORIGINAL_RAW, ORIGINAL_RAW)
    assert not comparison.has_changes
    assert all(p.kind is PairKind.UNCHANGED for p in comparison.pairs)


def test_compare_against_empty_text():
    comparison = compare_statutes("", UPDATED_RAW)
    assert comparison.original_text == ""
    assert all(p.kind is PairKind.ADDED for p in comparison.pairs)


def test_pipeline_memoizes_by_key():
    pipeline = ComparisonPipeline(cache=ReviewCache(max_entries=4))
    first = pipeline.run("hb25-1001", ORIGINAL_RAW, UPDATED_RAW)
    second = pipeline.run(" HB25-1001 ", ORIGINAL_RAW, UPDATED_RAW)
    assert first is second


def test_pipeline_recomputes_when_inputs_change():
    pipeline = ComparisonPipeline(cache=ReviewCache(max_entries=4))
    first = pipeline.run("HB25-1001", ORIGINAL_RAW, UPDATED_RAW)
    second = pipeline.run("HB25-1001", ORIGINAL_RAW, ORIGINAL_RAW)
    assert first is not second
    assert not second.has_changes

    pipeline.invalidate("HB25-1001")
    assert "HB25-1001" not in pipeline.cache


def test_pipeline_review():
    pipeline = ComparisonPipeline(cache=ReviewCache(max_entries=4))
    comparison = pipeline.run("HB25-1001", ORIGINAL_RAW, UPDATED_RAW)

    pending = pipeline.review(comparison)
    assert pending.final_text == (
        "(1) Every eligible elector may vote.\n\n(2) Each county clerk shall keep records."
    )
    assert pending.tally.pending == 2
    assert pending.views[0].proposed_segments is None

    approved = pipeline.review(comparison, {"0": "approved", "2": "approved"}, mode="highlight")
    assert approved.final_text.endswith("(3) The secretary of state shall publish guidance.")
    assert "Accessibility is required." in approved.final_text
    assert approved.tally.all_reviewed
    assert approved.views[0].segments is not None


def test_compare_statutes_logs_stage_summary(caplog):
    caplog.set_level(logging.DEBUG, logger="statute_diff")
    compare_statutes(ORIGINAL_RAW, UPDATED_RAW)

    messages = [record.getMessage() for record in caplog.records]
    assert "Performance summary:" in messages
    assert any(m.strip().startswith("align:") for m in messages)
    assert any(m.strip().startswith("Total:") for m in messages)
