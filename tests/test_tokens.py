# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

"""Tests for interview_scoring.tokens."""

from __future__ import annotations

import pytest

from interview_scoring.categories import default_categories
from interview_scoring.tokens import (
    MalformedChainError,
    Paragraph,
    PreconditionViolation,
    Token,
    is_well_formed,
    paragraphs_from_text,
    parse_runs,
    render_paragraph,
    split_paragraphs,
)

_MODEL = default_categories()
INT1 = _MODEL.get("Int1")
INT2 = _MODEL.get("Int2")


def _make_paragraph(*states: tuple[str, str | None, bool, bool]) -> Paragraph:
    return Paragraph(
        Token(text=text, category=_MODEL.get(code) if code else None, is_first=first, is_last=last)
        for text, code, first, last in states
    )


class TestSplitParagraphs:
    """Tests for split_paragraphs."""

    def test_blank_lines_separate_paragraphs(self) -> None:
        """Whitespace-only lines count as blank."""
        text = "one two\nthree\n \t\nfour\n\n\n"
        assert split_paragraphs(text) == [["one", "two", "three"], ["four"]]

    def test_windows_line_endings(self) -> None:
        """CRLF and CR are treated like LF."""
        assert split_paragraphs("a b\r\n\r\nc\rd") == [["a", "b"], ["c", "d"]]

    def test_unicode_whitespace(self) -> None:
        """No-break spaces separate words."""
        assert split_paragraphs("a\u00a0b\u2003c") == [["a", "b", "c"]]

    def test_empty_text(self) -> None:
        """Empty text has no paragraphs."""
        assert split_paragraphs("  \n\n ") == []
        assert paragraphs_from_text("") == []


class TestParagraph:
    """Tests for the Paragraph arena."""

    def test_from_words_is_one_uncategorized_run(self) -> None:
        """All tokens share one stretch flagged at its ends."""
        paragraph = Paragraph.from_words(["a", "b", "c"])
        assert [(t.is_first, t.is_last) for t in paragraph] == [(True, False), (False, False), (False, True)]
        assert is_well_formed(paragraph)

    def test_handles_are_linked(self) -> None:
        """Handles follow the chain order."""
        paragraph = Paragraph.from_words(["a", "b", "c"])
        assert list(paragraph.handles()) == [0, 1, 2]
        assert paragraph.next(0) == 1
        assert paragraph.prev(0) is None
        assert paragraph.next(2) is None

    def test_foreign_handle(self) -> None:
        """Unknown handles are refused."""
        paragraph = Paragraph.from_words(["a"])
        with pytest.raises(PreconditionViolation):
            paragraph.token(1)

    def test_empty_paragraph(self) -> None:
        """A paragraph needs tokens."""
        with pytest.raises(PreconditionViolation):
            Paragraph([])

    def test_copy_is_independent(self) -> None:
        """Changing a copy leaves the original untouched."""
        paragraph = Paragraph.from_words(["a", "b"])
        clone = paragraph.copy()
        clone.token(0).category = INT1
        assert paragraph.token(0).category is None


class TestParseRuns:
    """Tests for parse_runs."""

    def test_nested_runs(self) -> None:
        """Inner runs record their parent."""
        paragraph = _make_paragraph(
            ("we", "Int1", True, False),
            ("went", "Int2", True, True),
            ("home", "Int1", False, True),
            ("and", None, True, False),
            ("slept", None, False, True),
        )
        layout = parse_runs(paragraph)

        assert [(r.category.code if r.category else None, r.start, r.end, r.parent) for r in layout.runs] == [
            ("Int1", 0, 2, None),
            ("Int2", 1, 1, 0),
            (None, 3, 4, None),
        ]
        assert layout.owner == [0, 1, 0, 2, 2]

    def test_uncategorized_run_inside_categorized_run(self) -> None:
        """A gap of an interrupted run is its own stretch."""
        paragraph = _make_paragraph(
            ("a", "Int1", True, False),
            ("b", None, True, True),
            ("c", "Int1", False, True),
        )
        assert parse_runs(paragraph).runs[1].parent == 0

    @pytest.mark.parametrize(
        "states",
        [
            pytest.param([("a", "Int1", True, False)], id="never-closed"),
            pytest.param([("a", "Int1", False, True)], id="never-opened"),
            pytest.param([("a", None, True, False), ("b", "Int1", True, True)], id="stretch-not-closed"),
            pytest.param([("a", None, True, True), ("b", None, True, True)], id="stretch-split"),
            pytest.param([("a", None, False, True)], id="stretch-not-opened"),
            pytest.param(
                [("a", "Int1", True, False), ("b", "Int2", True, False), ("c", "Int1", False, True), ("d", "Int2", False, True)],
                id="interleaved",
            ),
        ],
    )
    def test_malformed(self, states) -> None:
        """Broken flags raise MalformedChainError."""
        with pytest.raises(MalformedChainError):
            parse_runs(_make_paragraph(*states))
        assert not is_well_formed(_make_paragraph(*states))


class TestRenderParagraph:
    """Tests for render_paragraph."""

    def test_brackets_mark_runs(self) -> None:
        """Runs are wrapped in brackets with their code."""
        paragraph = _make_paragraph(
            ("we", "Int1", True, False),
            ("went", "Int2", True, True),
            ("home", "Int1", False, True),
            ("and", None, True, False),
            ("slept", None, False, True),
        )
        assert render_paragraph(paragraph) == "[Int1 we [Int2 went] home] and slept"

    def test_plain_text(self) -> None:
        """Uncategorized text is rendered as is."""
        assert render_paragraph(Paragraph.from_words(["just", "text"])) == "just text"
