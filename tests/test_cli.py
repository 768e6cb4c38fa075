# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

"""End-to-end tests of the command line interface.

Each test works in a fresh directory with a template config and two text
transcripts.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from interview_scoring import cli_io
from interview_scoring.actions.assign import parse_token_spec
from interview_scoring.actions.base import parse_interview_ref
from interview_scoring.app import main
from interview_scoring.config import ConfigError
from interview_scoring.storage import load_project


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Directory with scoring.yaml and two transcripts, used as cwd."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli_io, "is_interactive_tty", lambda: False)

    assert main(["template"]) == 0

    transcripts = tmp_path / "transcripts"
    transcripts.mkdir()
    (transcripts / "p01.txt").write_text(
        "participant = P01\n\nWe went home in the rain.\n\nThen we slept.\n",
        encoding="utf-8",
    )
    (transcripts / "p02.txt").write_text("It was a sunny day.\n", encoding="utf-8")
    drafts = transcripts / "drafts"
    drafts.mkdir()
    (drafts / "p03.txt").write_text("Not ready yet.\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def imported(workspace: Path, capsys: pytest.CaptureFixture[str]) -> Path:
    """Workspace after a first import."""
    assert main(["import"]) == 0
    capsys.readouterr()
    return workspace


class TestTemplate:
    """`template` command."""

    def test_refuses_to_overwrite(self, workspace, capsys) -> None:
        """Without a terminal an existing config is kept."""
        capsys.readouterr()
        assert main(["template"]) == 2
        assert "Refusing to overwrite" in capsys.readouterr().err

    def test_force_overwrites(self, workspace) -> None:
        """--force replaces the file."""
        (workspace / "scoring.yaml").write_text("project: x.yaml\n", encoding="utf-8")
        assert main(["template", "--force"]) == 0
        assert "transcripts/**/*.txt" in (workspace / "scoring.yaml").read_text(encoding="utf-8")


class TestImport:
    """`import` command."""

    def test_first_import(self, workspace, capsys) -> None:
        """Transcripts become interviews, drafts are excluded."""
        assert main(["import"]) == 0
        assert "added 2, updated 0, skipped 0, failed 0" in capsys.readouterr().out

        project = load_project(workspace / "project.yaml")
        assert [str(i) for i in project.sorted_interviews()] == ["Interview P01 (1)", "Interview p02 (1)"]
        p01 = project.find_interview("P01", 1)
        assert p01.source.path == "transcripts/p01.txt"
        assert [p.texts() for p in p01.paragraphs] == [
            ["We", "went", "home", "in", "the", "rain."],
            ["Then", "we", "slept."],
        ]

    def test_unchanged_transcripts_are_skipped(self, imported, capsys) -> None:
        """A second run does not touch the project."""
        assert main(["import"]) == 0
        assert "added 0, updated 0, skipped 2, failed 0" in capsys.readouterr().out

    def test_changed_transcript_is_updated(self, imported, capsys) -> None:
        """New text replaces the interview and its assignments."""
        assert main(["assign", "-i", "p02", "-p", "1", "-t", "1-2", "--category", "Int1"]) == 0
        (imported / "transcripts" / "p02.txt").write_text("It rained.\n", encoding="utf-8")
        capsys.readouterr()

        assert main(["import"]) == 0
        assert "added 0, updated 1, skipped 1, failed 0" in capsys.readouterr().out

        p02 = load_project(imported / "project.yaml").find_interview("p02", 1)
        assert p02.paragraphs[0].texts() == ["It", "rained."]
        assert all(t.category is None for t in p02.paragraphs[0])


class TestAssign:
    """`assign` command."""

    def test_assign_and_show(self, imported, capsys) -> None:
        """Assignments are saved and rendered with brackets."""
        assert main(["assign", "-i", "P01:1", "-p", "1", "-t", "2-4", "--category", "Int1"]) == 0
        assert "We [Int1 went home in] the rain." in capsys.readouterr().out

        assert main(["show", "-i", "P01"]) == 0
        out = capsys.readouterr().out
        assert "Interview P01 (1) from transcripts/p01.txt" in out
        assert "[1] We [Int1 went home in] the rain." in out

    def test_clear(self, imported, capsys) -> None:
        """--clear removes categories inside a run without splitting it."""
        assert main(["assign", "-i", "P01", "-p", "1", "-t", "1-6", "--category", "Ext2"]) == 0
        assert main(["assign", "-i", "P01", "-p", "1", "-t", "3", "--clear"]) == 0

        paragraph = load_project(imported / "project.yaml").find_interview("P01", 1).paragraphs[0]
        assert [t.category.code if t.category else None for t in paragraph] == ["Ext2", "Ext2", None, "Ext2", "Ext2", "Ext2"]
        assert (paragraph.token(0).is_first, paragraph.token(5).is_last) == (True, True)
        assert not paragraph.token(1).is_last

    def test_interleaving_selection(self, imported, capsys) -> None:
        """A rejected interrupted selection exits with 4 and changes nothing."""
        assert main(["assign", "-i", "P01", "-p", "1", "-t", "2-4", "--category", "Int1"]) == 0
        capsys.readouterr()

        assert main(["assign", "-i", "P01", "-p", "1", "-t", "1,3", "--category", "Int2"]) == 4
        assert "invalid selection" in capsys.readouterr().err

        paragraph = load_project(imported / "project.yaml").find_interview("P01", 1).paragraphs[0]
        assert [t.category.code if t.category else None for t in paragraph] == [
            None,
            "Int1",
            "Int1",
            "Int1",
            None,
            None,
        ]

    @pytest.mark.parametrize(
        "argv",
        [
            pytest.param(["-i", "P01", "-p", "1", "-t", "1", "--category", "Int"], id="group-category"),
            pytest.param(["-i", "P01", "-p", "1", "-t", "1", "--category", "Nope"], id="unknown-category"),
            pytest.param(["-i", "P01", "-p", "3", "-t", "1", "--category", "Int1"], id="missing-paragraph"),
            pytest.param(["-i", "P01", "-p", "1", "-t", "7", "--category", "Int1"], id="missing-token"),
            pytest.param(["-i", "P09", "-p", "1", "-t", "1", "--category", "Int1"], id="missing-interview"),
        ],
    )
    def test_usage_errors(self, imported, capsys, argv) -> None:
        """Invalid references exit with 2."""
        assert main(["assign", *argv]) == 2
        assert capsys.readouterr().err.startswith("error:")


class TestShow:
    """`show` command."""

    def test_categories(self, imported, capsys) -> None:
        """The category tree is indented by depth."""
        assert main(["show", "--categories"]) == 0
        out = capsys.readouterr().out
        assert "Int: Internal (group)" in out
        assert "  Int1: Internal: Event details" in out
        assert "Interview p02 (1)" in out

    def test_without_project_file(self, workspace, capsys) -> None:
        """The import command has to run first."""
        assert main(["show"]) == 2
        assert "import" in capsys.readouterr().err


class TestValidateAndReport:
    """`validate` and `report` commands."""

    def test_validate(self, imported, capsys) -> None:
        """A saved project survives a round trip."""
        assert main(["assign", "-i", "P01", "-p", "1", "-t", "1,3", "--category", "Int3"]) == 0
        assert main(["validate"]) == 0
        assert "Project file is valid." in capsys.readouterr().out

    def test_corrupt_project_file(self, imported, capsys) -> None:
        """Broken project files exit with 2."""
        (imported / "project.yaml").write_text("schema_version: 99\n", encoding="utf-8")
        assert main(["validate"]) == 2
        assert "schema version" in capsys.readouterr().err

    def test_report(self, imported) -> None:
        """The report is written once, and again only with --force."""
        assert main(["report"]) == 0
        assert (imported / "report.ods").is_file()
        assert main(["report"]) == 2
        assert main(["report", "--force"]) == 0

    def test_missing_config(self, tmp_path, monkeypatch, capsys) -> None:
        """Commands needing a config fail without one."""
        monkeypatch.chdir(tmp_path)
        assert main(["report"]) == 2
        assert "template" in capsys.readouterr().err

    def test_explicit_config_path(self, imported, tmp_path_factory, monkeypatch, capsys) -> None:
        """--config works from another directory."""
        monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
        assert main(["show", "--config", str(imported / "scoring.yaml")]) == 0
        assert "Interview P01 (1)" in capsys.readouterr().out


class TestArgumentParsing:
    """Helpers parsing command line values."""

    def test_token_spec(self) -> None:
        """Ranges and single positions are merged and sorted."""
        assert parse_token_spec("8, 3-5,4") == [3, 4, 5, 8]

    @pytest.mark.parametrize("spec", ["", "0", "5-3", "a", "1-x"])
    def test_invalid_token_spec(self, spec) -> None:
        """Malformed selections raise ConfigError."""
        with pytest.raises(ConfigError):
            parse_token_spec(spec)

    def test_interview_ref(self) -> None:
        """The index defaults to 1."""
        assert parse_interview_ref("P01:2") == ("P01", 2)
        assert parse_interview_ref("P01") == ("P01", 1)
        assert parse_interview_ref("A:B:3") == ("A:B", 3)

    @pytest.mark.parametrize("ref", [":2", "P01:x"])
    def test_invalid_interview_ref(self, ref) -> None:
        """Malformed references raise ConfigError."""
        with pytest.raises(ConfigError):
            parse_interview_ref(ref)
