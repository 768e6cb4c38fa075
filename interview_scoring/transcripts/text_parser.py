# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""TXT/Markdown transcript reader.

Paragraphs are separated by at least one empty (or whitespace-only) line.
Line breaks inside a paragraph are treated as ordinary whitespace.
"""

from pathlib import Path

from interview_scoring.transcripts.base import ParserError, normalize_block


class TextTranscriptReader:
    """Read .txt and .md transcripts."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() in {".txt", ".md"}

    def read_blocks(self, path: Path) -> list[str]:
        try:
            raw = path.read_text(encoding="utf-8")
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to read text file: {exc}", path=path) from exc

        text = raw.replace("\r\n", "\n").replace("\r", "\n")

        blocks: list[str] = []
        current: list[str] = []

        for line in text.split("\n"):
            if not line.strip():
                if current:
                    blocks.append(normalize_block(" ".join(current)))
                    current = []
                continue
            current.append(line)

        if current:
            blocks.append(normalize_block(" ".join(current)))

        return blocks
