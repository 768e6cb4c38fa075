# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Configuration loading and validation.

This module handles reading `scoring.yaml`, validating its keys, and
normalizing paths so that actions can rely on a typed config object.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from interview_scoring.categories import CategoryError, CategoryHierarchy, default_categories


DEFAULT_CONFIG_NAME = "scoring.yaml"


@dataclass(frozen=True)
class PatternConfig:
    """
    Settings for pattern extraction in the report.

    Attributes:
        min_length:
            Shortest pattern length to count.
        max_length:
            Longest pattern length to count.
    """

    min_length: int = 1
    max_length: int = 3


@dataclass(frozen=True)
class ScoringConfig:
    """
    Parsed configuration of a scoring project.

    Attributes:
        config_path:
            Path to the YAML config file.
        base_dir:
            Directory that relative paths and glob patterns are resolved against.
        project:
            Project file holding interviews and category assignments.
        label:
            Free-text project label, used when a new project file is created.
        include:
            Glob patterns for transcript files to import.
        exclude:
            Glob patterns for transcript files to skip.
        outfile:
            Target ODS path for the report.
        categories:
            Category model used when a new project file is created.
        patterns:
            Settings for pattern extraction.
    """

    config_path: Path
    base_dir: Path
    project: Path
    label: str
    include: list[str]
    exclude: list[str]
    outfile: Path
    categories: CategoryHierarchy
    patterns: PatternConfig


class ConfigError(RuntimeError):
    """
    Raised when the YAML configuration is missing, invalid, or cannot be parsed.
    """

    pass


def find_config_path(cli_path: str | None) -> Path:
    """
    Determine which YAML config file to use.

    Args:
        cli_path:
            Optional config path provided on the command line.

    Returns:
        The resolved Path object (not necessarily existing).
    """

    if cli_path:
        return Path(cli_path)

    return Path.cwd() / DEFAULT_CONFIG_NAME


def _parse_pattern_list(value: Any, key: str) -> list[str]:
    """Accept a single glob pattern or a list of them."""

    if value is None:
        return []

    items = [value] if isinstance(value, str) else value
    if not isinstance(items, list):
        raise ConfigError(f"'{key}' must be a string or a list of strings")

    out: list[str] = []
    for idx, item in enumerate(items, start=1):
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"'{key}' entries must be non-empty strings (problem at index {idx})")
        out.append(item.strip())
    return out


def _parse_categories(value: Any) -> CategoryHierarchy:
    """
    Parse the optional `categories` tree.

    Supported entry formats:

    1) Shorthand leaf:
        - Int1: Event details

    2) Expanded node with optional children:
        - code: Int
          name: Internal
          children: [ ... ]

    Args:
        value:
            Raw YAML value.

    Returns:
        The category hierarchy. Without a `categories` key the default
        scoring model is used.

    Raises:
        ConfigError:
            If the structure does not match the expected schema.
    """

    if value is None:
        return default_categories()

    if not isinstance(value, list) or not value:
        raise ConfigError("'categories' must be a non-empty list")

    entries: list[tuple[str, str, str | None]] = []

    def _walk(items: Any, parent: str | None, context: str) -> None:
        if not isinstance(items, list):
            raise ConfigError(f"{context} must be a list")

        for idx, item in enumerate(items, start=1):
            where = f"{context}[{idx}]"
            if not isinstance(item, dict):
                raise ConfigError(f"Each category must be a mapping ({where})")

            if "code" in item:
                code = item.get("code")
                name = item.get("name", code)
                children = item.get("children")
            elif len(item) == 1:
                (code, name) = next(iter(item.items()))
                children = None
            else:
                raise ConfigError(f"Category mapping must have a 'code' field or a single 'Code: Name' pair ({where})")

            if not isinstance(code, str) or not code.strip():
                raise ConfigError(f"Category code must be a non-empty string ({where})")
            if not isinstance(name, str) or not name.strip():
                raise ConfigError(f"Name of category '{code}' must be a non-empty string ({where})")

            entries.append((code.strip(), name.strip(), parent))
            if children is not None:
                _walk(children, code.strip(), f"{where}.children")

    _walk(value, None, "categories")

    try:
        return CategoryHierarchy.build(entries)
    except CategoryError as exc:
        raise ConfigError(f"Invalid category model: {exc}") from exc


def _parse_patterns(value: Any) -> PatternConfig:
    """
    Parse and validate the optional `patterns` section.

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return PatternConfig()

    if not isinstance(value, dict):
        raise ConfigError("'patterns' must be a mapping if provided")

    min_length = value.get("min_length", PatternConfig.min_length)
    max_length = value.get("max_length", PatternConfig.max_length)

    if not isinstance(min_length, int) or isinstance(min_length, bool):
        raise ConfigError("patterns.min_length must be an integer")
    if not isinstance(max_length, int) or isinstance(max_length, bool):
        raise ConfigError("patterns.max_length must be an integer")

    if min_length < 1:
        raise ConfigError("patterns.min_length must be >= 1")
    if max_length < min_length:
        raise ConfigError("patterns.max_length must be >= patterns.min_length")

    return PatternConfig(min_length=min_length, max_length=max_length)


def load_config(path: Path) -> ScoringConfig:
    """
    Load and validate a `scoring.yaml` configuration file.

    Args:
        path:
            Path to the YAML config file.

    Returns:
        A validated ScoringConfig instance.

    Raises:
        ConfigError:
            If the file is missing, unreadable, cannot be parsed as YAML, or is
            missing required keys.
    """

    if not path.exists():
        raise ConfigError(
            f"No {DEFAULT_CONFIG_NAME} found in current directory and no --config provided. "
            "Use the 'template' command to create one or pass --config PATH."
        )
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML config: {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must contain a mapping at the top level")

    project = raw.get("project")
    if not isinstance(project, str) or not project.strip():
        raise ConfigError("'project' must be a non-empty string")

    label = raw.get("label", "")
    if label is None:
        label = ""
    if not isinstance(label, str):
        raise ConfigError("'label' must be a string if provided")

    include = _parse_pattern_list(raw.get("include"), "include")
    exclude = _parse_pattern_list(raw.get("exclude"), "exclude")

    outfile = raw.get("outfile", "report.ods")
    if not isinstance(outfile, str) or not outfile.strip():
        raise ConfigError("'outfile' must be a non-empty string")

    categories = _parse_categories(raw.get("categories"))
    patterns = _parse_patterns(raw.get("patterns"))

    # Paths and glob patterns are relative to the config file location.
    base_dir = path.parent.resolve()

    return ScoringConfig(
        config_path=path.resolve(),
        base_dir=base_dir,
        project=(base_dir / project.strip()).resolve(),
        label=label.strip(),
        include=include,
        exclude=exclude,
        outfile=(base_dir / outfile.strip()).resolve(),
        categories=categories,
        patterns=patterns,
    )
