# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Category assignment on token chains.

`assign` labels a selection of tokens in one paragraph with a category (or
clears it) and repairs the boundaries of every run the selection cuts
through, so that the paragraph stays well-formed:

- A run that loses tokens to the selection shrinks to its remaining tokens:
  a start inside the selection moves right, an end inside the selection moves
  left. A run that loses all of its own tokens disappears and the runs nested
  in it move up one level.
- A categorized selection becomes a single run from its first to its last
  token. Tokens skipped by an interrupted selection keep their labels and end
  up nested inside the new run.
- Cleared tokens merge with neighbouring uncategorized tokens.

An interrupted selection is checked part by part before anything changes.
Every run reaching into a skipped part must be resolved by the selected
parts right next to it: a run closing in the skipped part must open in the
selected part before it, a run opening there must close in the selected part
after it, and a run passing through needs both. Otherwise, or if the result
could not be expressed as properly nested runs, the selection is rejected as
a whole and nothing is changed.
"""

import logging
from bisect import bisect_left, bisect_right
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from interview_scoring.categories import Category
from interview_scoring.tokens import ChainLayout, Paragraph, PreconditionViolation, Token, parse_runs

logger = logging.getLogger(__name__)


class InvalidSelectionError(RuntimeError):
    """
    Raised when an interrupted selection would interleave category runs.
    """

    pass


@dataclass(frozen=True)
class Boundaries:
    """
    Unresolved run boundaries of one category within a token range.

    Attributes:
        opens:
            Runs starting inside the range and ending after it.
        closes:
            Runs ending inside the range that started before it.
    """

    opens: int = 0
    closes: int = 0


def unresolved_boundaries(
    paragraph: Paragraph, start: int, end: int
) -> dict[Category, Boundaries]:
    """
    Count the run boundaries inside a range that have no partner inside it.

    Scanning left to right, a run start increments the balance of its
    category and a run end consumes one pending start of the same category.
    An end without a pending start is an unresolved close.

    Args:
        paragraph:
            The paragraph to inspect.
        start:
            First position of the range (inclusive).
        end:
            Last position of the range (inclusive).

    Returns:
        Categories with at least one unresolved boundary.
    """

    handles = list(paragraph.handles())
    opens: dict[Category, int] = {}
    closes: dict[Category, int] = {}

    for handle in handles[start : end + 1]:
        token = paragraph.token(handle)
        category = token.category
        if category is None:
            continue
        if token.is_first:
            opens[category] = opens.get(category, 0) + 1
        if token.is_last:
            if opens.get(category, 0) > 0:
                opens[category] -= 1
            else:
                closes[category] = closes.get(category, 0) + 1

    out: dict[Category, Boundaries] = {}
    for category in {*opens, *closes}:
        result = Boundaries(opens=opens.get(category, 0), closes=closes.get(category, 0))
        if result.opens or result.closes:
            out[category] = result
    return out


def selection_parts(positions: Sequence[int]) -> list[tuple[int, int]]:
    """
    Split sorted positions into maximal contiguous parts.

    Returns:
        `(first, last)` position pairs. The gaps between consecutive pairs are
        the enclosed parts of an interrupted selection.
    """

    parts: list[tuple[int, int]] = []
    for pos in positions:
        if parts and parts[-1][1] + 1 == pos:
            parts[-1] = (parts[-1][0], pos)
        else:
            parts.append((pos, pos))
    return parts


def _selected_positions(layout: ChainLayout, handles: Sequence[int]) -> list[int]:
    if not handles:
        raise PreconditionViolation("Cannot assign a category to an empty selection")

    position_of = layout.position_of()
    positions: list[int] = []
    for handle in handles:
        if not isinstance(handle, int) or handle not in position_of:
            raise PreconditionViolation(f"Token handle {handle!r} does not belong to the paragraph")
        positions.append(position_of[handle])

    if len(set(positions)) != len(positions):
        raise PreconditionViolation("Selection contains the same token more than once")
    if any(later <= earlier for earlier, later in zip(positions, positions[1:])):
        raise PreconditionViolation("Selected tokens must be given in chain order")

    return positions


def _remaining_spans(
    layout: ChainLayout, selected: set[int]
) -> dict[int, list[int]]:
    """Map every surviving categorized run to its unselected own positions."""

    remaining: dict[int, list[int]] = {}
    for pos, run_idx in enumerate(layout.owner):
        if pos in selected or layout.runs[run_idx].category is None:
            continue
        remaining.setdefault(run_idx, []).append(pos)
    return remaining


def _passing_runs(layout: ChainLayout, start: int, end: int) -> Counter[Category]:
    """Count categorized runs with own tokens in a range but no boundary in it."""

    passing: Counter[Category] = Counter()
    for run_idx in {layout.owner[pos] for pos in range(start, end + 1)}:
        run = layout.runs[run_idx]
        if run.category is not None and run.start < start and run.end > end:
            passing[run.category] += 1
    return passing


def _check_enclosed_parts(
    paragraph: Paragraph,
    layout: ChainLayout,
    parts: list[tuple[int, int]],
) -> None:
    """
    Verify that every skipped part is resolved by its neighbouring parts.

    For each skipped part, runs closing in it need as many unresolved opens
    of their category in the selected part before it, runs opening in it as
    many unresolved closes in the selected part after it. Runs passing
    through the skipped part need both. Every category is checked on its own.
    """

    for (lead_start, lead_end), (trail_start, trail_end) in zip(parts, parts[1:]):
        gap_start, gap_end = lead_end + 1, trail_start - 1
        leading = unresolved_boundaries(paragraph, lead_start, lead_end)
        trailing = unresolved_boundaries(paragraph, trail_start, trail_end)
        enclosed = unresolved_boundaries(paragraph, gap_start, gap_end)
        passing = _passing_runs(layout, gap_start, gap_end)

        for category in {*enclosed, *passing}:
            inner = enclosed.get(category, Boundaries())
            needed_opens = inner.closes + passing[category]
            needed_closes = inner.opens + passing[category]
            opens = leading.get(category, Boundaries()).opens
            closes = trailing.get(category, Boundaries()).closes

            logger.debug(
                "Skipped part %d-%d needs %d open(s) and %d close(s) of %s, found %d and %d",
                gap_start,
                gap_end,
                needed_opens,
                needed_closes,
                category.code,
                opens,
                closes,
            )

            if opens < needed_opens:
                raise InvalidSelectionError(
                    f"The '{category.code}' run reaching into positions {gap_start}-{gap_end} "
                    f"does not open in the selected tokens {lead_start}-{lead_end}"
                )
            if closes < needed_closes:
                raise InvalidSelectionError(
                    f"The '{category.code}' run reaching into positions {gap_start}-{gap_end} "
                    f"does not close in the selected tokens {trail_start}-{trail_end}"
                )


def _check_nesting(
    layout: ChainLayout,
    positions: list[int],
    remaining: dict[int, list[int]],
) -> None:
    """
    Verify that every surviving run nests with the span of the selection.

    A run may lie completely outside the span, completely inside one of the
    enclosed parts, or around the whole span. Everything else would cross
    the boundary of the new run.
    """

    first, last = positions[0], positions[-1]

    for run_idx, own in remaining.items():
        start, end = own[0], own[-1]
        run = layout.runs[run_idx]
        code = run.category.code if run.category is not None else None

        if end < first or start > last:
            continue

        if first < start and end < last:
            # Nested: no selected token may fall between start and end.
            if bisect_right(positions, end) - bisect_left(positions, start) > 0:
                raise InvalidSelectionError(
                    f"Selection would split the '{code}' run at positions {start}-{end}"
                )
            continue

        if start < first and last < end:
            # Enclosing: the run must not keep tokens inside the span.
            if bisect_right(own, last) - bisect_left(own, first) > 0:
                raise InvalidSelectionError(
                    f"Selection would interleave with the '{code}' run at positions {start}-{end}"
                )
            continue

        raise InvalidSelectionError(
            f"Selection would partially overlap the '{code}' run at positions {start}-{end}"
        )


def assign(paragraph: Paragraph, handles: Sequence[int], category: Category | None) -> None:
    """
    Assign a category to a selection of tokens within one paragraph.

    Args:
        paragraph:
            The paragraph holding all selected tokens.
        handles:
            Token handles in strictly increasing chain order.
        category:
            Category to assign, or None to clear the selection.

    Raises:
        PreconditionViolation:
            If the selection is empty, contains duplicates or foreign handles,
            is out of order, or the paragraph itself is malformed.
        InvalidSelectionError:
            If an interrupted selection would interleave category runs. The
            paragraph is left untouched.
    """

    layout = parse_runs(paragraph)
    positions = _selected_positions(layout, handles)
    selected = set(positions)
    first, last = positions[0], positions[-1]
    parts = selection_parts(positions)

    remaining = _remaining_spans(layout, selected)

    if len(parts) > 1:
        _check_enclosed_parts(paragraph, layout, parts)
        _check_nesting(layout, positions, remaining)

    tokens = [paragraph.token(h) for h in layout.handles]

    for pos in positions:
        tokens[pos].category = category

    for token in tokens:
        token.is_first = False
        token.is_last = False

    for run_idx, own in remaining.items():
        run = layout.runs[run_idx]
        if (own[0], own[-1]) != (run.start, run.end):
            logger.debug(
                "Run %s moved from %d-%d to %d-%d",
                run.category.code if run.category else None,
                run.start,
                run.end,
                own[0],
                own[-1],
            )
        tokens[own[0]].is_first = True
        tokens[own[-1]].is_last = True

    dissolved = [
        run for idx, run in enumerate(layout.runs)
        if run.category is not None and idx not in remaining
    ]
    for run in dissolved:
        logger.debug("Run %s at %d-%d dissolved", run.category.code if run.category else None, run.start, run.end)

    if category is not None:
        tokens[first].is_first = True
        tokens[last].is_last = True

    _flag_uncategorized_stretches(tokens)

    logger.debug(
        "Assigned %s to %d token(s) in %d part(s) at positions %d-%d",
        category.code if category is not None else "no category",
        len(positions),
        len(parts),
        first,
        last,
    )


def _flag_uncategorized_stretches(tokens: list[Token]) -> None:
    pos = 0
    while pos < len(tokens):
        if tokens[pos].category is not None:
            pos += 1
            continue
        start = pos
        while pos + 1 < len(tokens) and tokens[pos + 1].category is None:
            pos += 1
        tokens[start].is_first = True
        tokens[pos].is_last = True
        pos += 1
