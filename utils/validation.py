"""Input validation helpers."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from comparison.models import Decision
from utils.logging import logger


def coerce_text(value: Any, *, what: str = "text") -> str:
    """Return ``value`` if it is a string; anything else is treated as empty."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    logger.warning("Expected %s to be str, got %s; treating as empty", what, type(value).__name__)
    return ""


def coerce_decision(value: Any) -> Decision:
    """Map a decision value (enum, string, or None) onto a Decision."""
    if value is None:
        return Decision.PENDING
    if isinstance(value, Decision):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if not key:
            return Decision.PENDING
        try:
            return Decision(key)
        except ValueError:
            raise ValueError(f"Unknown decision: {value!r}") from None
    raise ValueError(f"Unknown decision: {value!r}")


def coerce_index(key: Any) -> int:
    """Accept ints and integer strings (e.g. JSON object keys) as pair indices."""
    if isinstance(key, bool):
        raise ValueError(f"Invalid pair index: {key!r}")
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.strip().lstrip("-").isdigit():
        return int(key.strip())
    raise ValueError(f"Invalid pair index: {key!r}")


def validate_decisions(decisions: Optional[Mapping[Any, Any]]) -> Dict[int, Decision]:
    if not decisions:
        return {}
    return {coerce_index(k): coerce_decision(v) for k, v in decisions.items()}


def validate_edits(edits: Optional[Mapping[Any, Any]]) -> Dict[int, str]:
    if not edits:
        return {}
    cleaned: Dict[int, str] = {}
    for key, text in edits.items():
        if text is None:
            continue
        cleaned[coerce_index(key)] = coerce_text(text, what="edit override")
    return cleaned
