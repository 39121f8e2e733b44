"""Export a statute review as JSON."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from comparison.models import ResolutionResult
from comparison.resolution import describe_changes, history_entry, summarize_changes
from pipeline.compare_statutes import StatuteComparison
from utils.logging import logger


def build_payload(
    comparison: StatuteComparison,
    result: ResolutionResult,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """JSON-serializable record of a comparison and its resolution."""
    bill = (metadata or {}).get("bill")
    return {
        "metadata": dict(metadata or {}),
        "fingerprint": comparison.fingerprint,
        "alignment": comparison.summary,
        "metrics": comparison.metrics.to_dict(),
        "review": result.tally.to_dict(),
        "changes": summarize_changes(result.views),
        "history": describe_changes(result.views, bill),
        "history_entry": history_entry(result.views, bill),
        "paragraphs": [view.to_dict() for view in result.views],
        "final_text": result.final_text,
    }


def export_json(
    comparison: StatuteComparison,
    result: ResolutionResult,
    output_path: str | Path,
    metadata: Optional[Dict[str, Any]] = None,
) -> Path:
    output = Path(output_path)
    logger.info("Writing JSON review to %s", output)
    payload = build_payload(comparison, result, metadata)
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return output
