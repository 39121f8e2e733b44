from __future__ import annotations

import pytest

from comparison.models import Decision
from utils.validation import (
    coerce_decision,
    coerce_index,
    coerce_text,
    validate_decisions,
    validate_edits,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, Decision.PENDING),
        ("", Decision.PENDING),
        ("Approved", Decision.APPROVED),
        (" rejected ", Decision.REJECTED),
        (Decision.PENDING, Decision.PENDING),
    ],
)
def test_coerce_decision(value, expected):
    assert coerce_decision(value) is expected


@pytest.mark.parametrize("value", ["accept", 1, True])
def test_coerce_decision_rejects_unknown(value):
    with pytest.raises(ValueError):
        coerce_decision(value)


def test_coerce_index():
    assert coerce_index(3) == 3
    assert coerce_index(" 4 ") == 4
    assert coerce_index("-1") == -1
    for bad in (True, "x", 1.5, None):
        with pytest.raises(ValueError):
            coerce_index(bad)


def test_coerce_text():
    assert coerce_text("abc") == "abc"
    assert coerce_text(None) == ""
    assert coerce_text(b"bytes") == ""


def test_validate_maps():
    assert validate_decisions({"0": "approved", 2: None}) == {0: Decision.APPROVED, 2: Decision.PENDING}
    assert validate_decisions(None) == {}
    assert validate_edits({"1": "text", 2: None}) == {1: "text"}
