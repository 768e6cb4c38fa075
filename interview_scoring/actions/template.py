# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Template configuration generator.

This action writes a ready-to-edit `scoring.yaml` file into the current
directory (or a user-specified path).
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from interview_scoring.cli_io import ensure_writable
from interview_scoring.config import DEFAULT_CONFIG_NAME, ScoringConfig


@dataclass(frozen=True)
class TemplateAction:
    """
    `template` subcommand.

    This action does not require a YAML config because it produces one.
    """

    name: str = "template"
    help: str = f"Write a template {DEFAULT_CONFIG_NAME} config"
    requires_config: bool = False

    _TEMPLATE_YAML: str = "\n".join(
        [
            "# Project file holding the interviews and all category assignments.",
            "# It is created by the 'import' command.",
            "project: project.yaml",
            "",
            "# Free-text label stored in new project files (optional)",
            'label: "Autobiographical interview study"',
            "",
            "# Recursive glob patterns for transcript files to import/skip",
            "# Supported transcript formats: .odt, .txt, .md",
            "# Both keys can be a string or a list of strings.",
            "# A transcript may name its participant in a separate paragraph:",
            "#   participant = P01",
            "# Otherwise the file name (without suffix) is used.",
            'include: ["transcripts/**/*.odt", "transcripts/**/*.txt", "transcripts/**/*.md"]',
            'exclude: "transcripts/drafts/**"',
            "",
            "# Report file written by the 'report' command",
            "outfile: report.ods",
            "",
            "# Pattern lengths counted in the report (optional; defaults shown)",
            "# patterns:",
            "#   min_length: 1",
            "#   max_length: 3",
            "",
            "# Detail categories. Only used when a new project file is created;",
            "# without this key the standard Internal/External model is used.",
            "# Leaves can be assigned to tokens, parents add up their children.",
            "#",
            "# Supported formats for each entry:",
            "#   1) Leaf shorthand:  - Int1: \"Event details\"",
            "#   2) Expanded:",
            "#        - code: Int",
            "#          name: Internal",
            "#          children: [ ... ]",
            "categories:",
            "  - code: Int",
            "    name: Internal",
            "    children:",
            "      - Int1: \"Internal: Event details\"",
            "      - Int2: \"Internal: Place details\"",
            "      - Int3: \"Internal: Time details\"",
            "      - Int4: \"Internal: Perceptual details\"",
            "      - Int5: \"Internal: Emotion/Thought details\"",
            "  - code: Ext",
            "    name: External",
            "    children:",
            "      - Ext1: \"External: Semantic details\"",
            "      - Ext2: \"External: Repetitions\"",
            "      - Ext3: \"External: Other details\"",
            "      - Ext4: \"External: Episodic details\"",
            "      - Ext5: \"External: Generic events/routines\"",
            "",
        ]
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "path",
            nargs="?",
            default=DEFAULT_CONFIG_NAME,
            help=f"Destination path for the template (default: ./{DEFAULT_CONFIG_NAME})",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Allow overwriting an existing file",
        )

    def run(self, args: argparse.Namespace, config: ScoringConfig | None) -> None:
        """
        Write the template file.

        Raises:
            ConfigError:
                If the destination exists, `--force` is not set and there is
                no terminal to confirm on.
        """

        _ = config
        dest = Path(args.path)
        if not ensure_writable(dest, force=bool(args.force)):
            print(f"Keeping existing file: {dest}")
            return

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(self._TEMPLATE_YAML, encoding="utf-8")
        print(f"Wrote template config to: {dest}")
