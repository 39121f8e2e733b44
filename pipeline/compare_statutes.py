"""
Statute comparison pipeline.

Normalize both versions, split into paragraphs, align, and resolve reviewer
decisions into a final document. Each stage is timed so callers can see
where time goes on long statutes.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from comparison.alignment import align_paragraphs, summarize_alignment
from comparison.models import AlignedPair, HighlightMode, ResolutionResult
from comparison.resolution import resolve
from comparison.text_normalizer import (
    NormalizationConfig,
    compute_text_fingerprint,
    normalize_statute,
    split_paragraphs,
)
from config.settings import settings
from pipeline.cache import ReviewCache
from utils.logging import logger
from utils.performance import Timing, log_performance_summary, track_time


@dataclass
class PipelineMetrics:
    """Performance metrics from one comparison run."""
    total_time: float = 0.0
    normalization_time: float = 0.0
    alignment_time: float = 0.0
    timing_breakdown: Dict[str, float] = field(default_factory=dict)

    original_paragraphs: int = 0
    updated_paragraphs: int = 0
    pairs: int = 0
    changed_pairs: int = 0

    @classmethod
    def from_timings(cls, timings: List[Timing]) -> "PipelineMetrics":
        metrics = cls()
        for timing in timings:
            metrics.timing_breakdown[timing.name] = timing.duration
            if timing.name.startswith("normalize"):
                metrics.normalization_time += timing.duration
            elif timing.name == "align":
                metrics.alignment_time += timing.duration
        return metrics

    def to_dict(self) -> dict:
        """Export to JSON-serializable dict."""
        return {
            "total_time": self.total_time,
            "normalization_time": self.normalization_time,
            "alignment_time": self.alignment_time,
            "timing_breakdown": self.timing_breakdown,
            "original_paragraphs": self.original_paragraphs,
            "updated_paragraphs": self.updated_paragraphs,
            "pairs": self.pairs,
            "changed_pairs": self.changed_pairs,
        }


@dataclass
class StatuteComparison:
    """Normalized inputs and their alignment, ready for review."""
    original_text: str
    updated_text: str
    original_paragraphs: List[str]
    updated_paragraphs: List[str]
    pairs: List[AlignedPair]
    summary: Dict[str, Any] = field(default_factory=dict)
    metrics: PipelineMetrics = field(default_factory=PipelineMetrics)

    @property
    def has_changes(self) -> bool:
        return any(pair.has_change for pair in self.pairs)

    @property
    def fingerprint(self) -> str:
        return compute_text_fingerprint(f"{self.original_text}\x1e{self.updated_text}")

    def to_dict(self) -> dict:
        return {
            "fingerprint": self.fingerprint,
            "summary": self.summary,
            "metrics": self.metrics.to_dict(),
            "pairs": [pair.to_dict() for pair in self.pairs],
        }


def compare_statutes(
    original_raw: str,
    updated_raw: str,
    window: Optional[int] = None,
    config: Optional[NormalizationConfig] = None,
) -> StatuteComparison:
    """
    Normalize and align two raw statute texts.

    Args:
        original_raw: Statute text as currently in force (raw paste or export)
        updated_raw: Statute text as proposed by the bill
        window: Aligner lookahead (defaults to ``settings.lookahead_window``)
        config: Normalization config (defaults to the statute profile)

    Returns:
        StatuteComparison with pairs in reading order
    """
    start_time = time.time()
    timings: List[Timing] = []

    with track_time("normalize_original", sink=timings):
        original_text = normalize_statute(original_raw, config)
    with track_time("normalize_updated", sink=timings):
        updated_text = normalize_statute(updated_raw, config)

    original_paragraphs = split_paragraphs(original_text)
    updated_paragraphs = split_paragraphs(updated_text)

    with track_time("align", sink=timings):
        pairs = align_paragraphs(original_paragraphs, updated_paragraphs, window)

    summary = summarize_alignment(pairs)
    metrics = PipelineMetrics.from_timings(timings)
    metrics.total_time = time.time() - start_time
    metrics.original_paragraphs = len(original_paragraphs)
    metrics.updated_paragraphs = len(updated_paragraphs)
    metrics.pairs = len(pairs)
    metrics.changed_pairs = summary["changed"]
    log_performance_summary(timings)

    logger.info(
        "Comparison complete: %d pairs, %d with changes (%.3fs)",
        metrics.pairs,
        metrics.changed_pairs,
        metrics.total_time,
    )
    return StatuteComparison(
        original_text=original_text,
        updated_text=updated_text,
        original_paragraphs=original_paragraphs,
        updated_paragraphs=updated_paragraphs,
        pairs=pairs,
        summary=summary,
        metrics=metrics,
    )


class ComparisonPipeline:
    """
    End-to-end statute review pipeline.

    Usage:
        pipeline = ComparisonPipeline()
        comparison = pipeline.run("HB25-1001", original_raw, updated_raw)
        result = pipeline.review(comparison, {2: "approved"})
    """

    def __init__(
        self,
        cache: Optional[ReviewCache[Tuple[str, StatuteComparison]]] = None,
        window: Optional[int] = None,
        config: Optional[NormalizationConfig] = None,
    ):
        self.cache = cache if cache is not None else ReviewCache()
        self.window = window
        self.config = config

    def run(self, key: str, original_raw: str, updated_raw: str) -> StatuteComparison:
        """
        Compare two texts, memoized under ``key`` (usually a bill number).

        A cached entry is reused only when both raw inputs match the ones it
        was computed from; otherwise it is recomputed and replaced.
        """
        input_digest = compute_text_fingerprint(f"{original_raw}\x1e{updated_raw}")
        cached = self.cache.get(key)
        if cached is not None and cached[0] == input_digest:
            logger.debug("Review cache hit for %s", key)
            return cached[1]

        comparison = compare_statutes(original_raw, updated_raw, self.window, self.config)
        self.cache.put(key, (input_digest, comparison))
        return comparison

    def invalidate(self, key: Optional[str] = None) -> None:
        self.cache.clear(key)

    def review(
        self,
        comparison: StatuteComparison,
        decisions: Optional[Mapping[Any, Any]] = None,
        edits: Optional[Mapping[Any, Any]] = None,
        mode: Union[HighlightMode, str, None] = None,
    ) -> ResolutionResult:
        """Resolve a comparison against reviewer decisions and edits."""
        if mode is None:
            mode = settings.default_highlight_mode
        with track_time("resolve") as timing:
            result = resolve(comparison.pairs, decisions, edits, mode)
        logger.info(
            "Review resolved in %.3fs: %d approved, %d rejected, %d pending",
            timing.duration,
            result.tally.approved,
            result.tally.rejected,
            result.tally.pending,
        )
        return result
