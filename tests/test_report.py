# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

"""Tests for interview_scoring.report."""

from __future__ import annotations

from odfdo import Document

from interview_scoring.report import (
    _col_letters,
    build_report,
    occurrence_rows,
    pattern_rows,
    sequence_rows,
    write_report,
)


def _score(project, interview, selectables) -> None:
    project.assign_category(interview, 0, [1, 2], selectables[0])
    project.assign_category(interview, 0, [4], selectables[5])
    project.assign_category(interview, 0, [6, 7], selectables[0])


class TestRows:
    """Sheet contents."""

    def test_occurrences(self, project, interview, selectables) -> None:
        """One row per interview, one column per category."""
        _score(project, interview, selectables)
        header, rows = occurrence_rows(project)

        assert header[:5] == ["Participant", "Index", "Tokens with category", "Int", "Int1"]
        assert len(header) == 3 + len(project.categories)
        row = dict(zip(header, rows[0]))
        assert (row["Participant"], row["Index"], row["Tokens with category"]) == ("Subj123", 1, 5)
        assert (row["Int"], row["Int1"], row["Ext"], row["Ext1"], row["Ext2"]) == (2, 2, 1, 1, 0)

    def test_patterns_sorted_by_count(self, project, interview, selectables) -> None:
        """The most frequent pattern comes first."""
        _score(project, interview, selectables)
        header, rows = pattern_rows(project, 1, 2)

        assert header == ["Participant", "Index", "Pattern", "Length", "Count"]
        assert rows[0] == ["Subj123", 1, "Int1", 1, 2]
        assert {tuple(r[2:]) for r in rows[1:]} == {("Ext1", 1, 1), ("Int1 Ext1", 2, 1), ("Ext1 Int1", 2, 1)}

    def test_sequence(self, project, interview, selectables) -> None:
        """Runs are listed in text order with a 1-based position."""
        _score(project, interview, selectables)
        header, rows = sequence_rows(project)

        assert header == ["Participant", "Index", "Position", "Category", "Name"]
        assert [r[2:4] for r in rows] == [[1, "Int1"], [2, "Ext1"], [3, "Int1"]]
        assert rows[1][4] == "External: Semantic details"


class TestDocument:
    """The written spreadsheet."""

    def test_sheets(self, project, interview, selectables) -> None:
        """The report holds exactly the three sheets."""
        _score(project, interview, selectables)
        doc = build_report(project, min_length=1, max_length=3)
        assert [t.name for t in doc.body.tables] == ["Occurrences", "Patterns", "Sequence"]

    def test_write_and_reopen(self, tmp_path, project) -> None:
        """The saved file is a readable ODS document."""
        path = tmp_path / "out" / "report.ods"
        write_report(project, path, min_length=1, max_length=3)

        assert path.is_file()
        assert [t.name for t in Document(path).body.tables] == ["Occurrences", "Patterns", "Sequence"]

    def test_column_letters(self) -> None:
        """Spreadsheet column names continue after Z."""
        assert [_col_letters(n) for n in (1, 26, 27, 52, 53)] == ["A", "Z", "AA", "AZ", "BA"]
