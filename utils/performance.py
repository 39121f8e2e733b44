"""Performance profiling utilities."""
from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator, List, Optional

from utils.logging import logger


@dataclass
class Timing:
    name: str
    duration: float
    metadata: dict = field(default_factory=dict)


@contextmanager
def track_time(name: str, sink: Optional[List[Timing]] = None, **metadata) -> Generator[Timing, None, None]:
    """Context manager to track execution time, optionally collecting into ``sink``."""
    timing = Timing(name=name, duration=0, metadata=metadata)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.duration = time.perf_counter() - start
        if sink is not None:
            sink.append(timing)
        logger.debug("Timing: %s took %.3f seconds", name, timing.duration)


def log_performance_summary(timings: List[Timing]) -> None:
    """Log a summary of the given timings."""
    if not timings:
        logger.debug("No timings recorded")
        return

    logger.debug("Performance summary:")
    total = sum(t.duration for t in timings)
    for timing in timings:
        percentage = (timing.duration / total * 100) if total > 0 else 0
        logger.debug(
            "  %s: %.3fs (%.1f%%)",
            timing.name,
            timing.duration,
            percentage,
        )
    logger.debug("  Total: %.3fs", total)
