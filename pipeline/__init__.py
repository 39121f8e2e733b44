"""Pipeline module - orchestrates end-to-end statute comparison."""
from pipeline.cache import ReviewCache, cache_key
from pipeline.compare_statutes import (
    compare_statutes,
    ComparisonPipeline,
    PipelineMetrics,
    StatuteComparison,
)

__all__ = [
    "compare_statutes",
    "cache_key",
    "ComparisonPipeline",
    "PipelineMetrics",
    "ReviewCache",
    "StatuteComparison",
]
