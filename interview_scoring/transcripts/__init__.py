"""Transcript reading.

Interviews can be imported from different source formats. Each reader turns a
file into a list of whitespace-normalized text blocks, one per paragraph.
Blocks of the form `key = value` (for example `participant = P01`) are
metadata and are split off by `split_metadata`.
"""

from interview_scoring.transcripts.base import ParserError, Transcript, TranscriptReader, split_metadata
from interview_scoring.transcripts.registry import get_transcript_reader, read_transcript

__all__ = [
    "ParserError",
    "Transcript",
    "TranscriptReader",
    "get_transcript_reader",
    "read_transcript",
    "split_metadata",
]
