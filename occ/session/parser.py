"""JSONL parsing and serialization for session transcripts."""

import json
from dataclasses import dataclass, field
from typing import Iterable

from occ.errors import MissingHeaderError, SessionParseError
from occ.session.models import (
    Entry,
    MessageEntry,
    SessionHeader,
    ToolCallBlock,
    compact_json,
    entry_from_dict,
)

# Longest excerpt of a bad line kept in a ParseError
MAX_ERROR_EXCERPT = 100


@dataclass
class ParseError:
    """A line that could not be decoded."""
    line_number: int
    line: str
    error: str


@dataclass
class ParseResult:
    """Result of lenient parsing: every decodable entry plus per-line errors."""
    entries: list[Entry] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)


@dataclass
class ParsedSession:
    """A session split into its header and message entries."""
    header: SessionHeader
    messages: list[MessageEntry]
    file_path: str


def _decode_line(line: str) -> Entry:
    data = json.loads(line)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return entry_from_dict(data)


def _excerpt(line: str) -> str:
    if len(line) > MAX_ERROR_EXCERPT:
        return f"{line[:MAX_ERROR_EXCERPT]}..."
    return line


def parse_jsonl_safe(text: str) -> ParseResult:
    """
    Parse JSONL, skipping malformed lines.

    Args:
        text: Raw JSONL content.

    Returns:
        ParseResult with decoded entries and one ParseError per bad line.
        Line numbers are 1-based and count blank lines.
    """
    result = ParseResult()

    for line_number, raw in enumerate(text.split("\n"), 1):
        line = raw.strip()
        if not line:
            continue

        try:
            result.entries.append(_decode_line(line))
        except ValueError as e:
            result.errors.append(ParseError(
                line_number=line_number,
                line=_excerpt(line),
                error=str(e),
            ))

    return result


def parse_jsonl(text: str) -> list[Entry]:
    """
    Parse JSONL, failing on the first malformed line.

    Raises:
        SessionParseError: naming the offending 1-based line number.
    """
    entries: list[Entry] = []

    for line_number, raw in enumerate(text.split("\n"), 1):
        line = raw.strip()
        if not line:
            continue

        try:
            entries.append(_decode_line(line))
        except ValueError as e:
            raise SessionParseError(line_number, str(e)) from e

    return entries


def serialize_jsonl(entries: Iterable[Entry]) -> str:
    """Serialize entries to JSONL, one compact object per line, trailing newline."""
    return "\n".join(compact_json(entry.to_dict()) for entry in entries) + "\n"


def is_session_header(entry: Entry) -> bool:
    return isinstance(entry, SessionHeader)


def is_message_entry(entry: Entry) -> bool:
    return isinstance(entry, MessageEntry)


def separate_header_and_messages(entries: list[Entry], file_path: str) -> ParsedSession:
    """Split entries into header and messages. Raises MissingHeaderError."""
    header = next((e for e in entries if isinstance(e, SessionHeader)), None)
    if header is None:
        raise MissingHeaderError(file_path)

    messages = [e for e in entries if isinstance(e, MessageEntry)]
    return ParsedSession(header=header, messages=messages, file_path=file_path)


def count_tool_calls(entries: Iterable[Entry]) -> int:
    """Count tool-call blocks across all message entries."""
    count = 0
    for entry in entries:
        if isinstance(entry, MessageEntry) and isinstance(entry.content, tuple):
            count += sum(1 for block in entry.content if isinstance(block, ToolCallBlock))
    return count
