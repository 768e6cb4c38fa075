# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Category assignment action.

Assigns a detail category to (or clears it from) a selection of tokens in one
paragraph of an interview and saves the project file. Token positions are
1-based and may be given as single numbers and ranges, e.g. `3-5,8`. A
selection with gaps is an interrupted selection: the skipped tokens keep their
categories and end up nested inside the new run.
"""

import argparse
from dataclasses import dataclass

from interview_scoring.actions.base import open_project, require_interview
from interview_scoring.categories import CategoryError
from interview_scoring.config import ConfigError, ScoringConfig
from interview_scoring.storage import save_project
from interview_scoring.tokens import render_paragraph


def parse_token_spec(spec: str) -> list[int]:
    """
    Parse a token selection like `3-5,8` into sorted 1-based positions.

    Raises:
        ConfigError:
            If the selection is empty or malformed.
    """

    positions: set[int] = set()
    for part in (spec or "").split(","):
        part = part.strip()
        if not part:
            continue

        start_text, sep, end_text = part.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError:
            raise ConfigError(f"Invalid token selection: {part!r}") from None

        if start < 1 or end < start:
            raise ConfigError(f"Invalid token range: {part!r}")
        positions.update(range(start, end + 1))

    if not positions:
        raise ConfigError("Token selection must not be empty")
    return sorted(positions)


@dataclass(frozen=True)
class AssignAction:
    """`assign` subcommand."""

    name: str = "assign"
    help: str = "Assign a detail category to tokens of a paragraph"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--interview",
            "-i",
            required=True,
            metavar="P:N",
            help="Interview as PARTICIPANT:INDEX (index defaults to 1)",
        )
        parser.add_argument(
            "--paragraph",
            "-p",
            type=int,
            required=True,
            metavar="K",
            help="1-based paragraph number",
        )
        parser.add_argument(
            "--tokens",
            "-t",
            required=True,
            metavar="SPEC",
            help="1-based token positions within the paragraph, e.g. 3-5,8",
        )
        target = parser.add_mutually_exclusive_group(required=True)
        target.add_argument("--category", metavar="CODE", help="Selectable category code to assign")
        target.add_argument("--clear", action="store_true", help="Remove the category from the tokens")

    def run(self, args: argparse.Namespace, config: ScoringConfig | None) -> None:
        """
        Execute the assignment.

        Raises:
            ConfigError:
                If the interview, paragraph, token positions or category
                cannot be resolved.
            InvalidSelectionError:
                If an interrupted selection would interleave category runs.
        """

        if config is None:
            raise RuntimeError("AssignAction requires a config, but none was provided")

        project = open_project(config)
        interview = require_interview(project, args.interview)

        paragraph_index = int(args.paragraph) - 1
        if not 0 <= paragraph_index < len(interview.paragraphs):
            raise ConfigError(
                f"{interview} has no paragraph {args.paragraph} (1..{len(interview.paragraphs)})"
            )
        paragraph = interview.paragraphs[paragraph_index]

        handles = list(paragraph.handles())
        positions = parse_token_spec(args.tokens)
        if positions[-1] > len(handles):
            raise ConfigError(f"Paragraph {args.paragraph} has only {len(handles)} token(s)")

        category = None
        if not args.clear:
            try:
                category = project.categories.get(args.category)
            except CategoryError as exc:
                raise ConfigError(str(exc)) from exc
            if not category.selectable:
                raise ConfigError(
                    f"Category '{category.code}' has subcategories and cannot be assigned to tokens"
                )

        project.assign_category(interview, paragraph_index, [handles[p - 1] for p in positions], category)
        save_project(project, config.project)

        print(f"{interview}, paragraph {args.paragraph}:")
        print(render_paragraph(paragraph))
