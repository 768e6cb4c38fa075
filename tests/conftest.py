# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

"""Shared fixtures for the interview scoring tests."""

from __future__ import annotations

import pytest

from interview_scoring.categories import Category
from interview_scoring.model import Interview, Project
from interview_scoring.tokens import Paragraph

TWENTY_TOKENS = " ".join(str(n) for n in range(1, 21))


@pytest.fixture
def project() -> Project:
    """Project with the default categories and one interview of 20 tokens."""
    project = Project("test")
    interview = project.create_interview("Subj123")
    project.set_interview_text(interview, TWENTY_TOKENS + "\n  ")
    return project


@pytest.fixture
def interview(project: Project) -> Interview:
    """The single interview of the `project` fixture."""
    return project.interviews[0]


@pytest.fixture
def paragraph(interview: Interview) -> Paragraph:
    """The single paragraph of the `interview` fixture."""
    return interview.paragraphs[0]


@pytest.fixture
def selectables(project: Project) -> list[Category]:
    """Assignable categories: Int1..Int5 followed by Ext1..Ext5."""
    return project.categories.selectables()
