# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Print interviews with their category runs as bracket markup."""

import argparse
from dataclasses import dataclass

from interview_scoring.actions.base import open_project, require_interview
from interview_scoring.config import ScoringConfig
from interview_scoring.model import Interview
from interview_scoring.tokens import render_paragraph


@dataclass(frozen=True)
class ShowAction:
    """`show` subcommand."""

    name: str = "show"
    help: str = "Print interviews with their category assignments"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--interview",
            "-i",
            metavar="P:N",
            help="Only show this interview (PARTICIPANT:INDEX)",
        )
        parser.add_argument(
            "--categories",
            action="store_true",
            help="Print the category model before the interviews",
        )

    def run(self, args: argparse.Namespace, config: ScoringConfig | None) -> None:
        if config is None:
            raise RuntimeError("ShowAction requires a config, but none was provided")

        project = open_project(config)

        if getattr(args, "categories", False):
            for category in project.categories:
                depth = len(project.categories.ancestors(category))
                marker = "" if category.selectable else " (group)"
                print(f"{'  ' * depth}{category.code}: {category.name}{marker}")
            print()

        if args.interview:
            interviews = [require_interview(project, args.interview)]
        else:
            interviews = project.sorted_interviews()

        if not interviews:
            print("Project contains no interviews.")
            return

        for interview in interviews:
            self._print_interview(interview)

    def _print_interview(self, interview: Interview) -> None:
        source = f" from {interview.source.path}" if interview.source is not None else ""
        print(f"{interview}{source}")
        for number, paragraph in enumerate(interview.paragraphs, start=1):
            print(f"  [{number}] {render_paragraph(paragraph)}")
        print()
