# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Shared action interface.

Actions implement a small protocol so the CLI can dynamically register arguments
and dispatch execution based on the selected subcommand.
"""

import argparse
from typing import Protocol

from interview_scoring.config import ConfigError, ScoringConfig
from interview_scoring.model import Interview, Project
from interview_scoring.storage import load_project


class Action(Protocol):
    """
    Interface for a CLI action (subcommand).

    Implementations are expected to:
    - Provide a `name` used as the subcommand.
    - Provide a short `help` string for `--help`.
    - Declare whether they require a valid YAML config.
    """

    name: str
    help: str
    requires_config: bool

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register action-specific CLI arguments on the action's subparser."""

    def run(self, args: argparse.Namespace, config: ScoringConfig | None) -> None:
        """
        Execute the action.

        Args:
            args:
                Parsed arguments for this subcommand.
            config:
                Loaded configuration, if `requires_config` is True.
        """


def open_project(config: ScoringConfig, *, create: bool = False) -> Project:
    """
    Load the configured project file.

    Args:
        config:
            Loaded configuration.
        create:
            Return a new, empty project using the configured label and
            categories if the file does not exist yet.

    Raises:
        ConfigError:
            If the file does not exist and `create` is False.
        PersistenceError:
            If the file exists but cannot be loaded.
    """

    if not config.project.exists():
        if create:
            return Project(label=config.label, categories=config.categories)
        raise ConfigError(
            f"Project file not found: {config.project}. Run the 'import' command first."
        )

    return load_project(config.project)


def parse_interview_ref(value: str) -> tuple[str, int]:
    """
    Parse an interview reference of the form `PARTICIPANT:INDEX`.

    The index may be omitted and defaults to 1.

    Raises:
        ConfigError:
            If the reference cannot be parsed.
    """

    participant, sep, index_text = (value or "").rpartition(":")
    if not sep:
        participant, index_text = value, "1"

    participant = participant.strip()
    if not participant:
        raise ConfigError(f"Invalid interview reference: {value!r} (expected PARTICIPANT:INDEX)")

    try:
        index = int(index_text)
    except ValueError:
        raise ConfigError(f"Invalid interview index in {value!r}") from None

    return participant, index


def require_interview(project: Project, ref: str) -> Interview:
    """Resolve an interview reference or raise ConfigError."""

    participant, index = parse_interview_ref(ref)
    interview = project.find_interview(participant, index)
    if interview is None:
        raise ConfigError(f"No such interview: {participant} ({index})")
    return interview
