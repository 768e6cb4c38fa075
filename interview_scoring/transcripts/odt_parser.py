# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""ODT transcript reader."""

from pathlib import Path

from odfdo import Document

from interview_scoring.transcripts.base import ParserError, normalize_block


def _node_text(node: object) -> str:
    # odfdo paragraphs expose nested spans only through `inner_text` or
    # `text_recursive`; `.text` holds the leading text node.
    for attr in ("inner_text", "text_recursive", "text"):
        value = getattr(node, attr, None)
        if callable(value):
            value = value()
        if value is not None:
            return str(value)
    return str(node)


class OdtTranscriptReader:
    """Read paragraphs and headings of ODT documents."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() == ".odt"

    def read_blocks(self, path: Path) -> list[str]:
        """Extract one block per ODT paragraph or heading.

        Empty paragraphs are dropped. Whitespace is normalized to single
        spaces.
        """

        try:
            body = Document(path).body
            # XPath also finds paragraphs inside lists, tables and frames.
            nodes = list(body.xpath(".//text:p | .//text:h"))
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to parse ODT file: {exc}", path=path) from exc

        blocks = [normalize_block(_node_text(n)) for n in nodes]
        return [b for b in blocks if b]
