# Interview Scoring
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript reader registry."""

from pathlib import Path

from interview_scoring.config import ConfigError
from interview_scoring.transcripts.base import ParserError, Transcript, TranscriptReader, split_metadata
from interview_scoring.transcripts.odt_parser import OdtTranscriptReader
from interview_scoring.transcripts.text_parser import TextTranscriptReader


_READERS: list[TranscriptReader] = [
    OdtTranscriptReader(),
    TextTranscriptReader(),
]

SUPPORTED_SUFFIXES = (".md", ".odt", ".txt")


def get_transcript_reader(path: Path) -> TranscriptReader:
    """Select a transcript reader based on the file suffix.

    Raises:
        ConfigError:
            If no reader supports the file.
    """

    for reader in _READERS:
        if reader.can_read(path):
            return reader

    raise ConfigError(f"Unsupported transcript format: {path} (supported: {', '.join(SUPPORTED_SUFFIXES)})")


def read_transcript(path: Path) -> Transcript:
    """Read a transcript and normalize errors to ConfigError.

    Args:
        path:
            Transcript file.

    Returns:
        Metadata and text paragraphs of the transcript.

    Raises:
        ConfigError:
            If the format is unsupported or the file cannot be read.
    """

    reader = get_transcript_reader(path)
    try:
        blocks = reader.read_blocks(path)
    except ParserError as exc:
        raise ConfigError(str(exc)) from exc
    return split_metadata(blocks)
