# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Project files.

A project is stored as a single YAML document:

    schema_version: 1
    label: Pilot study
    categories:
      - {code: Int, name: Internal, parent: null}
      - {code: Int1, name: 'Internal: Event details', parent: Int}
    interviews:
      - participant: P01
        index: 1
        source: {path: transcripts/p01.txt, md5: ...}
        paragraphs:
          - - [We, Int1, true, false]
            - [went, Int1, false, true]

Every token is written as `[text, category code or null, first, last]`.
"""

from pathlib import Path
from typing import Any

import yaml

from interview_scoring.categories import CategoryError, CategoryHierarchy
from interview_scoring.model import Interview, Project, TranscriptSource
from interview_scoring.tokens import MalformedChainError, Paragraph, Token, parse_runs

SCHEMA_VERSION = 1


class PersistenceError(RuntimeError):
    """
    Raised when a project file cannot be read, parsed, or interpreted.
    """

    pass


def project_to_dict(project: Project) -> dict[str, Any]:
    """Convert a project into plain YAML-serializable data."""

    interviews: list[dict[str, Any]] = []
    for interview in project.sorted_interviews():
        record: dict[str, Any] = {
            "participant": interview.participant_id,
            "index": interview.index,
        }
        if interview.source is not None:
            record["source"] = {"path": interview.source.path, "md5": interview.source.md5}
        record["paragraphs"] = [
            [
                [
                    token.text,
                    token.category.code if token.category is not None else None,
                    token.is_first,
                    token.is_last,
                ]
                for token in paragraph
            ]
            for paragraph in interview.paragraphs
        ]
        interviews.append(record)

    return {
        "schema_version": SCHEMA_VERSION,
        "label": project.label,
        "categories": [
            {"code": code, "name": name, "parent": parent}
            for code, name, parent in project.categories.entries()
        ],
        "interviews": interviews,
    }


def save_project(project: Project, path: Path) -> None:
    """
    Write a project file.

    Raises:
        PersistenceError:
            If the file cannot be written.
    """

    data = project_to_dict(project)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=None, width=4096),
            encoding="utf-8",
        )
    except OSError as exc:
        raise PersistenceError(f"Failed to write project file '{path}': {exc}") from exc


def _parse_categories(value: Any) -> CategoryHierarchy:
    if not isinstance(value, list):
        raise PersistenceError("'categories' must be a list")

    entries: list[tuple[str, str, str | None]] = []
    for idx, item in enumerate(value, start=1):
        if not isinstance(item, dict):
            raise PersistenceError(f"Category entry {idx} must be a mapping")
        code = item.get("code")
        name = item.get("name", "")
        parent = item.get("parent")
        if not isinstance(code, str) or not code.strip():
            raise PersistenceError(f"Category entry {idx} needs a non-empty 'code'")
        if not isinstance(name, str):
            raise PersistenceError(f"Name of category '{code}' must be a string")
        if parent is not None and not isinstance(parent, str):
            raise PersistenceError(f"Parent of category '{code}' must be a category code")
        entries.append((code, name, parent))

    try:
        return CategoryHierarchy.build(entries)
    except CategoryError as exc:
        raise PersistenceError(f"Invalid category model: {exc}") from exc


def _parse_token(value: Any, categories: CategoryHierarchy, where: str) -> Token:
    if not isinstance(value, list) or len(value) != 4:
        raise PersistenceError(f"{where}: token must be a list of [text, code, first, last]")

    text, code, is_first, is_last = value
    if not isinstance(text, str) or not text:
        raise PersistenceError(f"{where}: token text must be a non-empty string")
    if not isinstance(is_first, bool) or not isinstance(is_last, bool):
        raise PersistenceError(f"{where}: token flags must be booleans")

    category = None
    if code is not None:
        if not isinstance(code, str) or code not in categories:
            raise PersistenceError(f"{where}: unknown category code {code!r}")
        category = categories.get(code)

    return Token(text=text, category=category, is_first=is_first, is_last=is_last)


def _parse_interview(value: Any, categories: CategoryHierarchy, position: int) -> Interview:
    if not isinstance(value, dict):
        raise PersistenceError(f"Interview entry {position} must be a mapping")

    participant = value.get("participant")
    index = value.get("index")
    if not isinstance(participant, str) or not participant.strip():
        raise PersistenceError(f"Interview entry {position} needs a non-empty 'participant'")
    if not isinstance(index, int) or isinstance(index, bool) or index < 1:
        raise PersistenceError(f"Interview entry {position} needs a positive integer 'index'")

    source = None
    raw_source = value.get("source")
    if raw_source is not None:
        if (
            not isinstance(raw_source, dict)
            or not isinstance(raw_source.get("path"), str)
            or not isinstance(raw_source.get("md5"), str)
        ):
            raise PersistenceError(f"Interview entry {position}: 'source' needs 'path' and 'md5'")
        source = TranscriptSource(path=raw_source["path"], md5=raw_source["md5"])

    interview = Interview(participant_id=participant, index=index, source=source)

    raw_paragraphs = value.get("paragraphs") or []
    if not isinstance(raw_paragraphs, list):
        raise PersistenceError(f"{interview}: 'paragraphs' must be a list")

    for p_idx, raw_tokens in enumerate(raw_paragraphs, start=1):
        where = f"{interview}, paragraph {p_idx}"
        if not isinstance(raw_tokens, list) or not raw_tokens:
            raise PersistenceError(f"{where}: must be a non-empty list of tokens")

        paragraph = Paragraph(_parse_token(t, categories, where) for t in raw_tokens)
        try:
            parse_runs(paragraph)
        except MalformedChainError as exc:
            raise PersistenceError(f"{where}: {exc}") from exc
        interview.paragraphs.append(paragraph)

    return interview


def project_from_dict(raw: Any) -> Project:
    """
    Build a project from data produced by `project_to_dict`.

    Raises:
        PersistenceError:
            If the data does not describe a valid project.
    """

    if not isinstance(raw, dict):
        raise PersistenceError("Project file must contain a mapping at the top level")

    version = raw.get("schema_version")
    if version != SCHEMA_VERSION:
        raise PersistenceError(f"Unsupported project schema version: {version!r}")

    label = raw.get("label") or ""
    if not isinstance(label, str):
        raise PersistenceError("'label' must be a string")

    categories = _parse_categories(raw.get("categories"))

    raw_interviews = raw.get("interviews") or []
    if not isinstance(raw_interviews, list):
        raise PersistenceError("'interviews' must be a list")

    interviews = [
        _parse_interview(item, categories, position)
        for position, item in enumerate(raw_interviews, start=1)
    ]

    seen: set[tuple[str, int]] = set()
    for interview in interviews:
        key = interview.sort_key()
        if key in seen:
            raise PersistenceError(f"Duplicate interview: {interview}")
        seen.add(key)

    return Project(label=label, categories=categories, interviews=interviews)


def load_project(path: Path) -> Project:
    """
    Read a project file.

    Raises:
        PersistenceError:
            If the file is missing, unreadable, not valid YAML, or does not
            describe a valid project.
    """

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PersistenceError(f"Project file not found: {path}") from exc
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise PersistenceError(f"Failed to read project file '{path}': {exc}") from exc

    try:
        return project_from_dict(raw)
    except PersistenceError as exc:
        raise PersistenceError(f"{path}: {exc}") from exc
