from __future__ import annotations

import pytest

from comparison.text_normalizer import (
    NormalizationConfig,
    compute_text_fingerprint,
    is_boilerplate,
    normalize,
    normalize_paragraphs,
    normalize_statute,
    repair_typography,
    split_paragraphs,
    strip_boilerplate,
)


VLEX_DUMP = """Downloaded from vLex on February 25, 2026
\u00a9 Copyright 2026, vLex. All Rights Reserved.
C.R.S. \u00a7 1-2-101 Qualifications for registration
Library: Colorado Revised Statutes
Edition: 2025
(1) Every citizen of the United States
who has attained eighteen years of age
may register to vote.
February 25, 2026 21:39 1/4
(2) Each county clerk shall keep
records of registration.
vLex Document Id: 123456
Link: https://example.invalid/doc
"""


def test_vlex_boilerplate_is_stripped():
    out = normalize_statute(VLEX_DUMP)

    assert "vLex" not in out
    assert "Copyright" not in out
    assert "Library:" not in out
    assert "21:39" not in out
    assert split_paragraphs(out) == [
        "(1) Every citizen of the United States who has attained eighteen years of age may register to vote.",
        "(2) Each county clerk shall keep records of registration.",
    ]


def test_is_boilerplate_matches_page_headers_and_prefixes():
    assert is_boilerplate("December 1, 2025 9:05 12/30")
    assert is_boilerplate("Currency: current through 2025")
    assert not is_boilerplate("(1) December 1, 2025 is the deadline.")


def test_strip_boilerplate_trims_lines():
    assert strip_boilerplate("  (1) text  \nYear: 2025\n") == ["(1) text", ""]


@pytest.mark.parametrize("raw", ["", "   ", "\n\n\t\n", None, 42])
def test_empty_or_non_text_input_normalizes_to_empty(raw):
    assert normalize_statute(raw) == ""
    assert normalize_paragraphs(raw) == []


def test_only_boilerplate_normalizes_to_empty():
    assert normalize("Downloaded from vLex\nLink: https://example.invalid\n") == ""


@pytest.mark.parametrize(
    "raw",
    [
        VLEX_DUMP,
        "(1) As used in this section: (a) \u201C Elector \u201D means a person; (b) \u201CClerk\u201D means the clerk.",
        'The terms " residence " and "facility" are defined. History: L. 92, p. 1.',
        "(1) Text.\n\n\n(2) More text.   SECTION 2. Effective date. This act takes effect.",
        "HB 10 -1422 and SB 11- 7 and 1 - 2 - 3 \u2014 see 447,\u00a7 3",
        'Odd "quote count here. (3) Next "item" ends.',
        "",
    ],
)
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once


def test_numbered_markers_start_paragraphs_after_sentence_end():
    out = normalize_paragraphs("(1) The secretary shall act. (2) The clerk shall assist.")
    assert out == ["(1) The secretary shall act.", "(2) The clerk shall assist."]


def test_inline_numbered_reference_is_not_split():
    out = normalize_paragraphs("(1) As required by section 1-1-104 (2) of this title, the clerk shall act.")
    assert out == ["(1) As required by section 1-1-104 (2) of this title, the clerk shall act."]


def test_lettered_markers_and_quote_spacing():
    raw = (
        "(1) As used in this section: (a) \u201C Elector \u201D means a person; "
        "(b) \u201CClerk\u201D means the clerk."
    )
    assert normalize_paragraphs(raw) == [
        "(1) As used in this section:",
        '(a) "Elector" means a person;',
        '(b) "Clerk" means the clerk.',
    ]


def test_adjacent_quoted_terms_keep_their_separating_space():
    assert repair_typography('"residence" or "facility"') == '"residence" or "facility"'


def test_section_and_label_breaks():
    raw = "(1) Text here. History: L. 92, p. 1. SECTION 2. Effective date."
    assert normalize_paragraphs(raw) == [
        "(1) Text here.",
        "History: L. 92, p. 1.",
        "SECTION 2. Effective date.",
    ]


def test_custom_config_without_labels_keeps_history_inline():
    cfg = NormalizationConfig(section_labels=())
    assert normalize_paragraphs("(1) Text here. History: L. 92.", cfg) == [
        "(1) Text here. History: L. 92."
    ]


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("HB 10 -1422", "HB 10-1422"),
        ("HB 10- 1422", "HB 10-1422"),
        ("1 - 2 - 3", "1-2-3"),
        ("2019\u20142020", "2019-2020"),
        ("pages 4\u20136", "pages 4-6"),
        ("C.R.S. 447,\u00a7 3", "C.R.S. 447, \u00a7 3"),
        ("42 U.S.C.\u00a7 15483", "42 U.S.C. \u00a7 15483"),
        ("\u00a7\u00a7 1-2", "\u00a7\u00a7 1-2"),
        ("subsection (2) .", "subsection (2)."),
        ("subsection (2) , and", "subsection (2), and"),
        ("", ""),
    ],
)
def test_repair_typography(raw, expected):
    assert repair_typography(raw) == expected


def test_paragraphs_have_collapsed_whitespace_and_are_non_empty():
    out = normalize_paragraphs("(1)   Wrapped\n   text\twith   gaps.\n\n\n\n(2) Next.")
    assert out == ["(1) Wrapped text with gaps.", "(2) Next."]
    assert all(p.strip() == p and p for p in out)


def test_config_roundtrip_and_fingerprint():
    cfg = NormalizationConfig(boilerplate_prefixes=["Header:"], section_labels=["Note"])
    restored = NormalizationConfig.from_dict(cfg.to_dict())
    assert restored == cfg
    assert is_boilerplate("Header: x", restored)
    assert not is_boilerplate("Library: x", restored)

    assert compute_text_fingerprint("abc") == compute_text_fingerprint("abc")
    assert len(compute_text_fingerprint("abc")) == 40
