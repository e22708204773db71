"""Transcript builders shared by the tests."""

from pathlib import Path
from typing import Any

from occ.session.models import (
    ConversationMessage,
    Entry,
    MessageEntry,
    SessionHeader,
    TextBlock,
    ThinkingBlock,
    ToolCallBlock,
)
from occ.session.parser import serialize_jsonl
from occ.session.paths import get_session_path


def header(session_id: str = "sess-1", **extra: Any) -> SessionHeader:
    return SessionHeader(id=session_id, version=1, timestamp="2026-01-01T00:00:00.000Z", cwd="/work", extra=extra)


def user(text: str = "hello") -> MessageEntry:
    return MessageEntry(message=ConversationMessage(role="user", content=text))


def assistant(*blocks, text: str | None = None) -> MessageEntry:
    """Assistant message with the given blocks, or plain string content."""
    if text is not None:
        return MessageEntry(message=ConversationMessage(role="assistant", content=text))
    return MessageEntry(message=ConversationMessage(role="assistant", content=tuple(blocks)))


def text(value: str) -> TextBlock:
    return TextBlock(text=value)


def thinking(value: str = "pondering") -> ThinkingBlock:
    return ThinkingBlock(thinking=value, signature="sig")


def tool_call(call_id: str, name: str = "read_file", arguments: Any = None) -> ToolCallBlock:
    return ToolCallBlock(id=call_id, name=name, arguments={"path": "a.txt"} if arguments is None else arguments)


def tool_result(call_id: str | None, content: Any = "ok") -> MessageEntry:
    if isinstance(content, list):
        content = tuple(content)
    return MessageEntry(message=ConversationMessage(role="toolResult", content=content, tool_call_id=call_id))


def tool_turn(n: int, arguments: Any = None, result: Any = "ok") -> list[MessageEntry]:
    """user -> assistant(call) -> toolResult -> assistant(text)."""
    call_id = f"call-{n}"
    return [
        user(f"question {n}"),
        assistant(text(f"checking {n}"), tool_call(call_id, arguments=arguments)),
        tool_result(call_id, result),
        assistant(text=f"answer {n}"),
    ]


def plain_turn(n: int) -> list[MessageEntry]:
    return [user(f"chat {n}"), assistant(text=f"reply {n}")]


def tool_transcript(turns: int, **kwargs: Any) -> list[MessageEntry]:
    messages: list[MessageEntry] = []
    for n in range(turns):
        messages.extend(tool_turn(n, **kwargs))
    return messages


def all_call_ids(messages: list[MessageEntry]) -> list[str]:
    return [
        block.id
        for m in messages
        if isinstance(m.content, tuple)
        for block in m.content
        if isinstance(block, ToolCallBlock)
    ]


def all_result_ids(messages: list[MessageEntry]) -> list[str]:
    return [m.tool_call_id for m in messages if m.role == "toolResult"]


def write_session(
    state_dir: Path,
    session_id: str,
    entries: list[Entry] | None = None,
    agent_id: str = "main",
) -> Path:
    """Write a transcript where the CLI expects it. Defaults to a small tool session."""
    if entries is None:
        entries = [header(session_id), *tool_transcript(3)]
    path = get_session_path(state_dir, session_id, agent_id)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_jsonl(entries), encoding="utf-8")
    return path
