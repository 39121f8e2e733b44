from __future__ import annotations

import pytest

from comparison.markers import extract_prefix, is_numbered


@pytest.mark.parametrize(
    "paragraph,expected",
    [
        ("(1) The secretary shall act.", "(1)"),
        ("(1.5) Added subsection.", "(1.5)"),
        ("(12.3.4) Deeply nested.", "(12.3.4)"),
        ("(a) First item;", "(a)"),
        ("(A) Capitalized item;", "(A)"),
        ("History: L. 92, p. 1.", None),
        ("SECTION 2. Effective date.", None),
        ("See subsection (2) of this section.", None),
        ("(ab) Not a marker.", None),
        ("", None),
    ],
)
def test_extract_prefix(paragraph, expected):
    assert extract_prefix(paragraph) == expected


def test_lettered_prefix_case_is_preserved():
    assert extract_prefix("(a) x") != extract_prefix("(A) x")


def test_is_numbered():
    assert is_numbered("(2)")
    assert is_numbered("(2.1)")
    assert not is_numbered("(b)")
    assert not is_numbered(None)
