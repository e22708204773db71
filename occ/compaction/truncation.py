"""Bounded previews for tool-call arguments and tool-result bodies."""

from typing import Any

from occ.compaction.types import ARGUMENT_MARKER, CONTENT_MARKER, MAX_CHARS, MAX_LINES
from occ.session.models import Content, TextBlock, compact_json


def exceeds_limits(text: str, max_chars: int = MAX_CHARS, max_lines: int = MAX_LINES) -> bool:
    """True if the text is longer than max_chars or spans more than max_lines."""
    return len(text) > max_chars or text.count("\n") >= max_lines


def truncate_string(text: str, max_chars: int = MAX_CHARS, max_lines: int = MAX_LINES) -> str:
    """
    Clip text to the first max_lines lines, then to max_chars characters.

    No marker is appended.
    """
    clipped = "\n".join(text.split("\n")[:max_lines])
    return clipped[:max_chars]


def truncate_arguments(arguments: Any) -> str:
    """
    Preview of tool-call arguments as compact JSON.

    Returns the JSON text unchanged when it fits, otherwise the clipped text
    followed by "...". Arguments that are already a string preview are
    measured as-is rather than re-encoded.
    """
    text = arguments if isinstance(arguments, str) else compact_json(arguments)
    if not exceeds_limits(text):
        return text
    return truncate_string(text) + ARGUMENT_MARKER


def tool_result_text(content: Content) -> str:
    """Text of a tool result: string content, or text blocks joined by newlines."""
    if isinstance(content, str):
        return content
    return "\n".join(block.text for block in content if isinstance(block, TextBlock))


def truncate_tool_result(content: Content) -> str:
    """
    Preview of a tool-result body.

    Non-text blocks are ignored. Returns the text unchanged when it fits,
    otherwise the clipped text followed by "[truncated]".
    """
    text = tool_result_text(content)
    if not exceeds_limits(text):
        return text
    return truncate_string(text) + CONTENT_MARKER
