# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Statistics over scored interviews.

All functions are read-only. Results are keyed by interview in the order the
interviews were passed in.
"""

from collections import Counter
from typing import Iterable

from interview_scoring.categories import Category, CategoryHierarchy
from interview_scoring.model import Interview


def extract_sequence(interview: Interview) -> list[Category]:
    """
    Return the categories of an interview in the order their runs start.

    A nested run counts at the position of its first token, even though it
    starts inside another run.
    """

    return [
        token.category
        for paragraph in interview.paragraphs
        for token in paragraph
        if token.is_first and token.category is not None
    ]


def count_occurrences(
    interviews: Iterable[Interview],
    categories: CategoryHierarchy,
) -> dict[Interview, dict[Category, int]]:
    """
    Count category runs per interview.

    Every run also counts for all ancestors of its category. Each category of
    the hierarchy is present in the result, unused ones with a count of 0.

    Args:
        interviews:
            Interviews to evaluate.
        categories:
            Hierarchy used to resolve ancestors and to seed the counts.

    Returns:
        Per interview, category to number of runs (in hierarchy order).
    """

    result: dict[Interview, dict[Category, int]] = {}
    for interview in interviews:
        counts = {category: 0 for category in categories}
        for category in extract_sequence(interview):
            for counted in (category, *categories.ancestors(category)):
                counts[counted] += 1
        result[interview] = counts
    return result


def count_tokens_with_category(interviews: Iterable[Interview]) -> dict[Interview, int]:
    """Count the tokens that carry any category, per interview."""

    return {
        interview: sum(
            1
            for paragraph in interview.paragraphs
            for token in paragraph
            if token.category is not None
        )
        for interview in interviews
    }


def extract_patterns(
    interviews: Iterable[Interview],
    min_length: int,
    max_length: int,
) -> dict[Interview, Counter[tuple[Category, ...]]]:
    """
    Count category patterns per interview.

    A pattern is any contiguous slice of `extract_sequence` with a length
    between `min_length` and `max_length`. Overlapping slices are counted
    independently, so `[A, B, C]` with lengths 2..3 yields `(A, B)`,
    `(B, C)` and `(A, B, C)` once each.

    Raises:
        ValueError:
            If `min_length` is below 1 or greater than `max_length`.
    """

    if min_length < 1:
        raise ValueError("min_length must be >= 1")
    if max_length < min_length:
        raise ValueError("max_length must be >= min_length")

    result: dict[Interview, Counter[tuple[Category, ...]]] = {}
    for interview in interviews:
        sequence = extract_sequence(interview)
        patterns: Counter[tuple[Category, ...]] = Counter()
        for start in range(len(sequence)):
            for length in range(min_length, max_length + 1):
                if start + length > len(sequence):
                    break
                patterns[tuple(sequence[start : start + length])] += 1
        result[interview] = patterns
    return result
