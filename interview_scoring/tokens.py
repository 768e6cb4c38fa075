# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Token chains.

A paragraph is an arena of tokens. Tokens refer to their neighbours through
integer handles (`prev`/`next`), the paragraph owns all of them, and the
first token is the entry point of the chain.

Each token may carry a detail category plus the two boundary flags `is_first`
and `is_last`. Runs of categorized tokens nest like brackets: a flagged first
token opens a run, a flagged last token closes the innermost open run. Every
maximal stretch of uncategorized tokens forms a run of its own.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator

from interview_scoring.categories import Category


class PreconditionViolation(ValueError):
    """
    Raised when a caller breaks the contract of a chain operation.

    Examples are an empty selection, handles out of order, or handles that do
    not belong to the paragraph.
    """

    pass


class MalformedChainError(PreconditionViolation):
    """Raised when a paragraph's boundary flags do not describe nested runs."""

    pass


@dataclass
class Token:
    """
    A single word of an interview transcript.

    Attributes:
        text:
            The word itself.
        category:
            Assigned detail category, or None.
        is_first:
            True if the token opens a run.
        is_last:
            True if the token closes a run.
        prev:
            Handle of the preceding token in the paragraph, None for the first.
        next:
            Handle of the following token in the paragraph, None for the last.
    """

    text: str
    category: Category | None = None
    is_first: bool = False
    is_last: bool = False
    prev: int | None = field(default=None, compare=False)
    next: int | None = field(default=None, compare=False)


class Paragraph:
    """Arena of linked tokens forming one paragraph."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: list[Token] = list(tokens)
        if not self._tokens:
            raise PreconditionViolation("A paragraph needs at least one token")

        for handle, token in enumerate(self._tokens):
            token.prev = handle - 1 if handle > 0 else None
            token.next = handle + 1 if handle + 1 < len(self._tokens) else None

        self.head: int = 0

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Paragraph:
        """Create an uncategorized paragraph, flagged as one single run."""

        tokens = [Token(text=w) for w in words]
        if tokens:
            tokens[0].is_first = True
            tokens[-1].is_last = True
        return cls(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        for handle in self.handles():
            yield self._tokens[handle]

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, int) and not isinstance(handle, bool) and 0 <= handle < len(self._tokens)

    def __repr__(self) -> str:
        return f"Paragraph({render_paragraph(self)!r})"

    def handles(self) -> Iterator[int]:
        """Yield the token handles in chain order."""

        handle: int | None = self.head
        while handle is not None:
            yield handle
            handle = self._tokens[handle].next

    def token(self, handle: int) -> Token:
        if handle not in self:
            raise PreconditionViolation(f"Token handle {handle!r} does not belong to this paragraph")
        return self._tokens[handle]

    def next(self, handle: int) -> int | None:
        return self.token(handle).next

    def prev(self, handle: int) -> int | None:
        return self.token(handle).prev

    def texts(self) -> list[str]:
        return [t.text for t in self]

    def copy(self) -> Paragraph:
        return Paragraph(replace(t) for t in self)


def split_paragraphs(text: str) -> list[list[str]]:
    """
    Split free text into paragraphs of words.

    Paragraphs are separated by at least one blank line (lines containing
    only whitespace count as blank). Words are separated by runs of
    whitespace, including Unicode spaces. Empty paragraphs are dropped.
    """

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")

    paragraphs: list[list[str]] = []
    current: list[str] = []

    for line in normalized.split("\n"):
        if not line.strip():
            if current:
                paragraphs.append(current)
                current = []
            continue
        current.extend(line.split())

    if current:
        paragraphs.append(current)

    return paragraphs


def paragraphs_from_text(text: str) -> list[Paragraph]:
    return [Paragraph.from_words(words) for words in split_paragraphs(text)]


@dataclass
class Run:
    """
    A run of tokens as found by `parse_runs`.

    Positions are ordinal positions in chain order, not handles.

    Attributes:
        category:
            Category of the run, None for a stretch of uncategorized tokens.
        start:
            Position of the token that opens the run.
        end:
            Position of the token that closes the run.
        parent:
            Index of the innermost enclosing categorized run, or None.
    """

    category: Category | None
    start: int
    end: int
    parent: int | None = None


@dataclass
class ChainLayout:
    """
    Parsed structure of a paragraph.

    Attributes:
        handles:
            Token handles in chain order.
        runs:
            All runs, ordered by start position.
        owner:
            For every position, the index of the innermost run containing the
            token.
    """

    handles: list[int]
    runs: list[Run]
    owner: list[int]

    def position_of(self) -> dict[int, int]:
        return {h: pos for pos, h in enumerate(self.handles)}


def parse_runs(paragraph: Paragraph) -> ChainLayout:
    """
    Parse a paragraph's boundary flags into nested runs.

    Raises:
        MalformedChainError:
            If the flags do not describe properly nested runs, or an
            uncategorized stretch is not flagged at exactly its ends.
    """

    handles = list(paragraph.handles())
    runs: list[Run] = []
    owner: list[int] = [-1] * len(handles)
    stack: list[int] = []
    none_run: int | None = None

    for pos, handle in enumerate(handles):
        token = paragraph.token(handle)

        if token.category is None:
            if none_run is None:
                if not token.is_first:
                    raise MalformedChainError(
                        f"Uncategorized token '{token.text}' at position {pos} starts a run without being flagged as first"
                    )
                none_run = len(runs)
                runs.append(Run(None, pos, pos, stack[-1] if stack else None))
            elif token.is_first:
                raise MalformedChainError(
                    f"Uncategorized token '{token.text}' at position {pos} is flagged as first inside a run"
                )
            runs[none_run].end = pos
            owner[pos] = none_run

            following = handles[pos + 1] if pos + 1 < len(handles) else None
            ends_here = following is None or paragraph.token(following).category is not None
            if token.is_last != ends_here:
                raise MalformedChainError(
                    f"Uncategorized token '{token.text}' at position {pos} has a misplaced last flag"
                )
            if ends_here:
                none_run = None
            continue

        if token.is_first:
            stack.append(len(runs))
            runs.append(Run(token.category, pos, pos, stack[-2] if len(stack) > 1 else None))
        elif not stack or runs[stack[-1]].category != token.category:
            raise MalformedChainError(
                f"Token '{token.text}' at position {pos} continues a '{token.category.code}' run that is not open"
            )

        current = stack[-1]
        runs[current].end = pos
        owner[pos] = current

        if token.is_last:
            stack.pop()

    if stack:
        dangling = runs[stack[-1]]
        raise MalformedChainError(
            f"Run of '{dangling.category.code if dangling.category else None}' opened at position {dangling.start} is never closed"
        )

    return ChainLayout(handles=handles, runs=runs, owner=owner)


def is_well_formed(paragraph: Paragraph) -> bool:
    try:
        parse_runs(paragraph)
    except MalformedChainError:
        return False
    return True


def render_paragraph(paragraph: Paragraph) -> str:
    """
    Render a paragraph as plain text with bracketed category runs.

    Example: `[Int1 we [Int2 went] home] and slept`
    """

    parts: list[str] = []
    for token in paragraph:
        text = token.text
        if token.category is not None:
            if token.is_first:
                text = f"[{token.category.code} {text}"
            if token.is_last:
                text = f"{text}]"
        parts.append(text)
    return " ".join(parts)
