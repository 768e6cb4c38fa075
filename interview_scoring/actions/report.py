# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Report writer action.

Writes the `.ods` report with category occurrences, patterns and sequences of
all interviews in the project.
"""

import argparse
from dataclasses import dataclass

from interview_scoring.actions.base import open_project
from interview_scoring.cli_io import ensure_writable
from interview_scoring.config import ScoringConfig
from interview_scoring.report import write_report


@dataclass(frozen=True)
class ReportAction:
    """`report` subcommand."""

    name: str = "report"
    help: str = "Write the report file (.ods)"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Overwrite the report file if it already exists",
        )

    def run(self, args: argparse.Namespace, config: ScoringConfig | None) -> None:
        if config is None:
            raise RuntimeError("ReportAction requires a config, but none was provided")

        outfile = config.outfile
        if not ensure_writable(outfile, force=bool(getattr(args, "force", False))):
            print(f"Keeping existing file: {outfile}")
            return

        project = open_project(config)
        if not project.interviews:
            print("Project contains no interviews. Writing an empty report.")

        print(f"Building ODS report: {outfile}")
        write_report(
            project,
            outfile,
            min_length=config.patterns.min_length,
            max_length=config.patterns.max_length,
        )
        print(f"Wrote ODS report: {outfile}")
