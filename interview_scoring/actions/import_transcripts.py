# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Transcript import action.

This action reads the transcript files matched by the configured glob patterns
and stores their text as interviews in the project file. Each interview
remembers the relative path and MD5 of its transcript, so unchanged files are
skipped on the next run. A changed transcript replaces the interview text and
discards the category assignments made on it.
"""

import argparse
import fnmatch
import glob
import logging
from dataclasses import dataclass
from pathlib import Path

from interview_scoring.actions.base import open_project
from interview_scoring.config import ConfigError, ScoringConfig
from interview_scoring.hash_utils import md5_file
from interview_scoring.model import Interview, Project, TranscriptSource
from interview_scoring.storage import save_project
from interview_scoring.transcripts import read_transcript

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportAction:
    """
    `import` subcommand.

    Creates the project file on first use.
    """

    name: str = "import"
    help: str = "Import transcripts into the project file"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Re-import transcripts even if they did not change (discards their assignments)",
        )

    def run(self, args: argparse.Namespace, config: ScoringConfig | None) -> None:
        """
        Execute the import.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Raises:
            ConfigError:
                If no include pattern is configured.
            PersistenceError:
                If the existing project file cannot be loaded or the result
                cannot be saved.
        """

        if config is None:
            raise RuntimeError("ImportAction requires a config, but none was provided")

        if not config.include:
            raise ConfigError("'include' must name at least one glob pattern to import transcripts")

        is_new = not config.project.exists()
        project = open_project(config, create=True)

        input_files = self._discover_input_files(config)
        if not input_files:
            print("No input transcript files found.")

        added = 0
        updated = 0
        skipped = 0
        failed = 0
        for input_path in input_files:
            status = self._import_one_file(
                project,
                config=config,
                input_path=input_path,
                force=bool(getattr(args, "force", False)),
            )
            if status == "added":
                added += 1
            elif status == "updated":
                updated += 1
            elif status == "failed":
                failed += 1
            else:
                skipped += 1

        if is_new or added or updated:
            save_project(project, config.project)
            print(f"Wrote project file: {config.project}")

        print(
            f"Processed {len(input_files)} transcript(s): added {added}, updated {updated}, "
            f"skipped {skipped}, failed {failed}."
        )

    def _discover_input_files(self, config: ScoringConfig) -> list[Path]:
        """
        Find transcript files based on include/exclude patterns.

        Patterns are resolved relative to the directory containing the YAML
        configuration.

        Returns:
            Sorted list of paths to transcript files.
        """

        base_dir = config.base_dir

        paths: list[Path] = []
        for pattern in config.include:
            include_glob = str((base_dir / self._normalize_glob_pattern(pattern)).as_posix())
            paths.extend(Path(p) for p in glob.glob(include_glob, recursive=True))

        if config.exclude:
            exclude_norms = [self._normalize_glob_pattern(p) for p in config.exclude]
            paths = [
                p
                for p in paths
                if not any(fnmatch.fnmatch(self._rel_posix(base_dir, p), ex) for ex in exclude_norms)
            ]

        paths = [p for p in paths if p.is_file()]
        return sorted({p.resolve() for p in paths})

    def _import_one_file(
        self,
        project: Project,
        *,
        config: ScoringConfig,
        input_path: Path,
        force: bool,
    ) -> str:
        """
        Import one transcript file into the project.

        Returns:
            One of `added`, `updated`, `skipped` or `failed`.
        """

        rel_path = self._rel_posix(config.base_dir, input_path)
        transcript_md5 = md5_file(input_path)

        existing = self._find_by_source(project, rel_path)
        if existing is not None and existing.source is not None and existing.source.md5 == transcript_md5 and not force:
            print(f"Skipping unchanged transcript: {rel_path}")
            return "skipped"

        try:
            transcript = read_transcript(input_path)
        except ConfigError as exc:
            print(f"WARNING: Skipping transcript due to parse error: {rel_path}\n{exc}")
            return "failed"

        if not transcript.paragraphs:
            print(f"WARNING: Skipping transcript without text: {rel_path}")
            return "failed"

        participant = (transcript.metadata.get("participant") or "").strip() or input_path.stem
        source = TranscriptSource(path=rel_path, md5=transcript_md5)

        if existing is None:
            interview = project.create_interview(participant)
            status = "added"
        else:
            interview = existing
            if interview.participant_id != participant:
                project.set_participant_id(interview, participant)
            status = "updated"

        project.set_interview_text(interview, transcript.text)
        interview.source = source

        print(
            f"Imported: {rel_path} as {interview} "
            f"({len(interview.paragraphs)} paragraph(s), {interview.token_count()} token(s))"
        )
        logger.info("%s %s from %s (md5 %s)", status.capitalize(), interview, rel_path, transcript_md5)
        return status

    def _find_by_source(self, project: Project, rel_path: str) -> Interview | None:
        for interview in project.interviews:
            if interview.source is not None and interview.source.path == rel_path:
                return interview
        return None

    def _normalize_glob_pattern(self, pattern: str) -> str:
        """Strip a leading `./` so patterns match relative POSIX paths."""

        normalized = pattern.replace("\\", "/").strip()
        while normalized.startswith("./"):
            normalized = normalized[2:]
        return normalized

    def _rel_posix(self, base_dir: Path, path: Path) -> str:
        """Return `path` relative to `base_dir` as POSIX string, if possible."""

        try:
            return path.resolve().relative_to(base_dir).as_posix()
        except ValueError:
            return path.resolve().as_posix()
