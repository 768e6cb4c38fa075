# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Structural comparison of projects.

Used to confirm that a project read back from disk matches the one that was
written. Categories are compared by code so that rebuilt hierarchies compare
equal to the original.
"""

from interview_scoring.model import Interview, Project
from interview_scoring.tokens import Paragraph, Token


def _category_signature(project: Project) -> list[tuple[str, str | None, bool]]:
    return [
        (code, parent_code, category.selectable)
        for (code, _name, parent_code), category in zip(project.categories.entries(), project.categories)
    ]


def _describe_assignment(token: Token) -> str:
    text = "|" if token.is_first else ""
    text += " --- " if token.category is None else f" {token.category.code} "
    text += "|" if token.is_last else ""
    return text


def _compare_paragraphs(one: Paragraph, other: Paragraph) -> str | None:
    for one_token, other_token in zip(one, other):
        if one_token.text != other_token.text:
            return f"A Token's text does not match:    '{one_token.text}' != '{other_token.text}'"

        one_code = one_token.category.code if one_token.category is not None else None
        other_code = other_token.category.code if other_token.category is not None else None
        if (
            one_token.is_first != other_token.is_first
            or one_token.is_last != other_token.is_last
            or one_code != other_code
        ):
            return (
                f"A Token's Detail Category assignment does not match: '{one_token.text}'    "
                f"{_describe_assignment(one_token)} != {_describe_assignment(other_token)}"
            )

    if len(one) != len(other):
        return "A Paragraph's Token count does not match"
    return None


def _compare_interviews(one: Interview, other: Interview) -> str | None:
    if one.index != other.index or one.participant_id != other.participant_id:
        return f"Participant/Index does not match:    {other.participant_id} ({other.index})"

    if len(one.paragraphs) != len(other.paragraphs):
        return f"Number of paragraphs differ    {len(one.paragraphs)} != {len(other.paragraphs)}"

    for one_paragraph, other_paragraph in zip(one.paragraphs, other.paragraphs):
        error = _compare_paragraphs(one_paragraph, other_paragraph)
        if error is not None:
            return error
    return None


def validate_equality(one: Project, other: Project) -> str | None:
    """
    Compare two projects structurally.

    The checks run in this order and stop at the first difference: category
    codes, parents and selectability; number of interviews; then for every
    pair of interviews (sorted by participant and index) participant and
    index, number of paragraphs, and every token's text and assignment.

    Args:
        one:
            The reference project.
        other:
            The project to compare against.

    Returns:
        None if both projects match, otherwise a description of the first
        difference found.
    """

    if _category_signature(one) != _category_signature(other):
        return "Detail Categories do not match"

    if len(one.interviews) != len(other.interviews):
        return f"Number of Interviews does not match:    {len(one.interviews)} != {len(other.interviews)}"

    for one_interview, other_interview in zip(one.sorted_interviews(), other.sorted_interviews()):
        error = _compare_interviews(one_interview, other_interview)
        if error is not None:
            return f"{one_interview}\n{error}"

    return None
