# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Project file check.

Loads the project (which verifies every paragraph), writes it to a temporary
file, reads it back and compares both copies.
"""

import argparse
import tempfile
from dataclasses import dataclass
from pathlib import Path

from interview_scoring.actions.base import open_project
from interview_scoring.config import ConfigError, ScoringConfig
from interview_scoring.equality import validate_equality
from interview_scoring.storage import load_project, save_project


@dataclass(frozen=True)
class ValidateAction:
    """`validate` subcommand."""

    name: str = "validate"
    help: str = "Check that the project file survives a save/load round trip"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        _ = parser

    def run(self, args: argparse.Namespace, config: ScoringConfig | None) -> None:
        """
        Execute the check.

        Raises:
            ConfigError:
                If the reloaded project differs from the original.
            PersistenceError:
                If the project file cannot be loaded.
        """

        if config is None:
            raise RuntimeError("ValidateAction requires a config, but none was provided")

        _ = args
        project = open_project(config)
        print(f"Loaded {config.project}: {len(project.interviews)} interview(s), {len(project.categories)} category(ies)")

        with tempfile.TemporaryDirectory() as tmp:
            copy_path = Path(tmp) / config.project.name
            save_project(project, copy_path)
            reloaded = load_project(copy_path)

        difference = validate_equality(project, reloaded)
        if difference is not None:
            raise ConfigError(f"Project changed after save and reload:\n{difference}")

        print("Project file is valid.")
