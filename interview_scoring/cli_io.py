# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Terminal interaction helpers.

Actions that replace existing files ask for confirmation in interactive
terminals. Without a terminal (CI, pipes) they refuse unless `--force` is
given.
"""

import sys
from pathlib import Path

from interview_scoring.config import ConfigError


def is_interactive_tty() -> bool:
    """Return True if both stdin and stdout are connected to a TTY."""

    try:
        return sys.stdin.isatty() and sys.stdout.isatty()
    except Exception:  # noqa: BLE001
        return False


def prompt_yes_no(question: str, *, default_no: bool = True) -> bool:
    """
    Ask the user a yes/no question until a valid answer is given.

    Args:
        question:
            Prompt text without the trailing choice suffix.
        default_no:
            If true, empty input is treated as "no".

    Returns:
        True if the user answered yes.
    """

    suffix = "[y/N]" if default_no else "[Y/n]"
    while True:
        answer = input(f"{question} {suffix} ").strip().lower()
        if not answer:
            return not default_no
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False


def ensure_writable(path: Path, *, force: bool) -> bool:
    """
    Decide whether an output file may be (over)written.

    Args:
        path:
            Destination file.
        force:
            Overwrite without asking.

    Returns:
        True if the file may be written, False if the user declined.

    Raises:
        ConfigError:
            If the file exists, `force` is not set and there is no terminal to
            ask on.
    """

    if force or not path.exists():
        return True

    if not is_interactive_tty():
        raise ConfigError(f"Refusing to overwrite existing file: {path} (use --force)")

    return prompt_yes_no(f"Output file already exists: {path}. Overwrite?")
