# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript reader interface and shared helpers."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Protocol


# `key = value` blocks carry metadata instead of interview text. Markdown
# quote and list prefixes are accepted.
_META_RE = re.compile(
    r"^\s*(?:>\s*)*(?:[-+*]\s+)?(?P<key>[A-Za-z][A-Za-z0-9_\-]{0,63})\s*=\s*(?P<value>.*?)\s*$",
)


class TranscriptReader(Protocol):
    """Interface for transcript file readers.

    Readers only extract raw text blocks (one per source paragraph). Metadata
    detection happens in `split_metadata`.
    """

    def can_read(self, path: Path) -> bool:
        """Return True if this reader supports the given file."""

        raise NotImplementedError

    def read_blocks(self, path: Path) -> list[str]:
        """Return the whitespace-normalized text blocks of the file."""

        raise NotImplementedError


@dataclass(frozen=True)
class ParserError(RuntimeError):
    """Raised for transcript reading errors."""

    message: str
    path: Path | None = None
    line: int | None = None

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        if self.line is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line}: {self.message}"


@dataclass
class Transcript:
    """
    Content of a transcript file.

    Attributes:
        metadata:
            Values of `key = value` blocks, keys lower-cased. The first
            occurrence of a key wins.
        paragraphs:
            The remaining blocks, in file order.
    """

    metadata: dict[str, str] = field(default_factory=dict)
    paragraphs: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Interview text with paragraphs separated by blank lines."""

        return "\n\n".join(self.paragraphs)


def normalize_block(text: str) -> str:
    return " ".join(str(text).split())


def split_metadata(blocks: Iterable[str]) -> Transcript:
    """
    Separate metadata blocks from interview text.

    Args:
        blocks:
            Raw text blocks. Empty blocks are dropped.

    Returns:
        The transcript with metadata and text paragraphs.
    """

    transcript = Transcript()
    for block in blocks:
        cleaned = normalize_block(block)
        if not cleaned:
            continue

        match = _META_RE.match(cleaned)
        if match is None:
            transcript.paragraphs.append(cleaned)
            continue

        key = match.group("key").lower()
        value = match.group("value").strip()
        if value and key not in transcript.metadata:
            transcript.metadata[key] = value

    return transcript
