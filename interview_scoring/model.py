# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Project and interview model.

A project owns a category hierarchy and a list of interviews. Interviews are
grouped by participant; within a group the 1-based indices are contiguous.
All mutating operations run under the project's lock, so a project can be
shared between threads as long as readers do not run concurrently with a
mutation of the same interview.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from interview_scoring.assignment import assign
from interview_scoring.categories import Category, CategoryError, CategoryHierarchy, default_categories
from interview_scoring.tokens import Paragraph, PreconditionViolation, paragraphs_from_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptSource:
    """
    Origin of an imported interview.

    Attributes:
        path:
            POSIX path of the transcript, relative to the configuration file.
        md5:
            MD5 digest of the transcript file at import time.
    """

    path: str
    md5: str


@dataclass(eq=False)
class Interview:
    """
    A single interview of one participant.

    Attributes:
        participant_id:
            Identifier of the interviewed participant.
        index:
            1-based position among the interviews of the same participant.
        paragraphs:
            The interview text as token chains.
        source:
            Transcript the interview was imported from, if any.
    """

    participant_id: str
    index: int
    paragraphs: list[Paragraph] = field(default_factory=list)
    source: TranscriptSource | None = None

    def __str__(self) -> str:
        return f"Interview {self.participant_id} ({self.index})"

    def sort_key(self) -> tuple[str, int]:
        return (self.participant_id, self.index)

    def token_count(self) -> int:
        return sum(len(p) for p in self.paragraphs)

    def copy(self) -> Interview:
        return Interview(
            participant_id=self.participant_id,
            index=self.index,
            paragraphs=[p.copy() for p in self.paragraphs],
            source=self.source,
        )


class Project:
    """An interview scoring project."""

    def __init__(
        self,
        label: str = "",
        categories: CategoryHierarchy | None = None,
        interviews: Sequence[Interview] = (),
    ) -> None:
        self.label = label
        self.categories = categories if categories is not None else default_categories()
        self.interviews: list[Interview] = list(interviews)
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Project(label={self.label!r}, interviews={len(self.interviews)})"

    def copy(self) -> Project:
        """Return a deep snapshot of the project."""

        with self._lock:
            return Project(
                label=self.label,
                categories=self.categories,
                interviews=[i.copy() for i in self.interviews],
            )

    def sorted_interviews(self) -> list[Interview]:
        return sorted(self.interviews, key=Interview.sort_key)

    def interviews_by_participant(self) -> dict[str, list[Interview]]:
        """Group interviews by participant id, each group sorted by index."""

        groups: dict[str, list[Interview]] = {}
        for interview in self.sorted_interviews():
            groups.setdefault(interview.participant_id, []).append(interview)
        return groups

    def find_interview(self, participant_id: str, index: int) -> Interview | None:
        for interview in self.interviews:
            if interview.participant_id == participant_id and interview.index == index:
                return interview
        return None

    def _group(self, participant_id: str) -> list[Interview]:
        return sorted(
            (i for i in self.interviews if i.participant_id == participant_id),
            key=lambda i: i.index,
        )

    def _require_member(self, interview: Interview) -> None:
        if not any(i is interview for i in self.interviews):
            raise ValueError(f"{interview} is not part of this project")

    def create_interview(self, participant_id: str) -> Interview:
        """
        Add a new, empty interview for a participant.

        The index is one higher than the highest index already used by the
        participant.
        """

        clean_id = (participant_id or "").strip()
        if not clean_id:
            raise ValueError("Participant id must be a non-empty string")

        with self._lock:
            max_used = max((i.index for i in self.interviews if i.participant_id == clean_id), default=0)
            interview = Interview(participant_id=clean_id, index=max_used + 1)
            self.interviews.append(interview)

        logger.info("Created %s", interview)
        return interview

    def set_interview_text(self, interview: Interview, text: str) -> None:
        """Replace an interview's text, discarding all category assignments."""

        with self._lock:
            self._require_member(interview)
            interview.paragraphs = paragraphs_from_text(text)

        logger.debug("Set text of %s: %d paragraph(s)", interview, len(interview.paragraphs))

    def delete_interview(self, interview: Interview) -> None:
        """
        Remove an interview.

        Later interviews of the same participant move up by one index so the
        indices stay contiguous.
        """

        with self._lock:
            self._require_member(interview)
            self.interviews = [i for i in self.interviews if i is not interview]
            for other in self.interviews:
                if other.participant_id == interview.participant_id and other.index > interview.index:
                    other.index -= 1

        logger.info("Deleted %s", interview)

    def set_participant_id(self, interview: Interview, participant_id: str) -> None:
        """
        Move an interview to another participant.

        The interview becomes the last one of its new participant. The gap in
        the old participant's indices is closed.
        """

        clean_id = (participant_id or "").strip()
        if not clean_id:
            raise ValueError("Participant id must be a non-empty string")

        with self._lock:
            self._require_member(interview)
            if clean_id == interview.participant_id:
                return

            for other in self._group(interview.participant_id):
                if other.index > interview.index:
                    other.index -= 1

            interview.index = len(self._group(clean_id)) + 1
            interview.participant_id = clean_id

        logger.info("Moved interview to participant %s as index %d", clean_id, interview.index)

    def rename_participant(self, old_id: str, new_id: str) -> None:
        """
        Rename a participant.

        If the new id is already in use, the renamed interviews are appended
        after the existing ones, keeping their relative order.
        """

        clean_id = (new_id or "").strip()
        if not clean_id:
            raise ValueError("Participant id must be a non-empty string")

        with self._lock:
            if clean_id == old_id:
                return

            moved = self._group(old_id)
            next_index = len(self._group(clean_id)) + 1
            for interview in moved:
                interview.participant_id = clean_id
                interview.index = next_index
                next_index += 1

        logger.info("Renamed participant %s to %s (%d interview(s))", old_id, clean_id, len(moved))

    def set_index(self, interview: Interview, index: int) -> None:
        """
        Move an interview within its participant's group.

        Interviews between the old and the new position shift by one to make
        room.
        """

        with self._lock:
            self._require_member(interview)
            group = self._group(interview.participant_id)
            if not 1 <= index <= len(group):
                raise ValueError(
                    f"Index {index} is out of range for participant {interview.participant_id} (1..{len(group)})"
                )

            old_index = interview.index
            if index == old_index:
                return

            offset = 1 if index < old_index else -1
            low, high = min(index, old_index), max(index, old_index)
            for other in group:
                if other is not interview and low <= other.index <= high:
                    other.index += offset
            interview.index = index

    def assign_category(
        self,
        interview: Interview,
        paragraph_index: int,
        handles: Sequence[int],
        category: Category | None,
    ) -> None:
        """
        Assign a category to tokens of one paragraph of an interview.

        Args:
            interview:
                Interview holding the paragraph.
            paragraph_index:
                0-based paragraph number.
            handles:
                Token handles in chain order.
            category:
                Selectable category of this project, or None to clear.

        Raises:
            CategoryError:
                If the category is not a selectable category of the project.
            PreconditionViolation:
                If the paragraph does not exist or the selection is invalid.
            InvalidSelectionError:
                If an interrupted selection would interleave runs.
        """

        if category is not None:
            if category not in self.categories:
                raise CategoryError(f"Category is not part of this project: {category.code}")
            if not category.selectable:
                raise CategoryError(f"Category cannot be assigned to tokens: {category.code}")

        with self._lock:
            self._require_member(interview)
            if not 0 <= paragraph_index < len(interview.paragraphs):
                raise PreconditionViolation(
                    f"{interview} has no paragraph {paragraph_index + 1}"
                )
            assign(interview.paragraphs[paragraph_index], handles, category)

    def replace_categories(
        self,
        categories: CategoryHierarchy,
        mapping: Mapping[Category, Category],
    ) -> None:
        """
        Replace the category hierarchy.

        Tokens whose category is mapped take the new category. All other
        assignments are cleared through `assign`, which keeps the remaining
        runs well-formed.

        Args:
            categories:
                The new hierarchy.
            mapping:
                Old category to new category.

        Raises:
            CategoryError:
                If a mapping target is not a selectable category of the new
                hierarchy.
        """

        for old, new in mapping.items():
            if new not in categories or not new.selectable:
                raise CategoryError(
                    f"Category '{old.code}' is mapped to '{new.code}', which is not selectable in the new model"
                )

        cleared = 0
        with self._lock:
            for interview in self.interviews:
                for paragraph in interview.paragraphs:
                    for handle in list(paragraph.handles()):
                        current = paragraph.token(handle).category
                        if current is not None and current not in mapping:
                            assign(paragraph, [handle], None)
                            cleared += 1
                    for token in paragraph:
                        if token.category is not None:
                            token.category = mapping[token.category]
            self.categories = categories

        logger.info("Replaced category model: %d category(ies), %d token(s) cleared", len(categories), cleared)
