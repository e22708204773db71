"""Token estimation for session messages."""

from typing import Iterable

import tiktoken

from occ.session.models import MessageEntry, TextBlock, ThinkingBlock, ToolCallBlock, compact_json

# Cache the encoder
_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    """Get or create the tiktoken encoder."""
    global _encoder
    if _encoder is None:
        # cl100k_base is close enough for Claude-family transcripts
        _encoder = tiktoken.get_encoding("cl100k_base")
    return _encoder


def estimate_tokens(text: str) -> int:
    """
    Estimate the number of tokens in a text string.

    Args:
        text: The text to estimate tokens for.

    Returns:
        Estimated token count.
    """
    if not text:
        return 0

    encoder = _get_encoder()
    return len(encoder.encode(text, disallowed_special=()))


def estimate_message_tokens(message: MessageEntry) -> int:
    """
    Estimate tokens for a single message entry.

    Counts text, thinking and tool-call arguments. Other blocks are ignored.
    """
    # Role overhead
    tokens = 4

    content = message.content
    if isinstance(content, str):
        return tokens + estimate_tokens(content)

    for block in content:
        if isinstance(block, TextBlock):
            tokens += estimate_tokens(block.text)
        elif isinstance(block, ThinkingBlock):
            tokens += estimate_tokens(block.thinking)
        elif isinstance(block, ToolCallBlock):
            arguments = block.arguments if isinstance(block.arguments, str) else compact_json(block.arguments)
            tokens += estimate_tokens(block.name) + estimate_tokens(arguments)
            tokens += 10  # Overhead

    return tokens


def estimate_messages_tokens(messages: Iterable[MessageEntry]) -> int:
    """Total estimated tokens for a list of message entries."""
    return sum(estimate_message_tokens(m) for m in messages)
