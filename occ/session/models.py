"""Typed records for session transcript lines.

A transcript is newline-delimited JSON. The first line is a session header,
the rest are message entries (plus the occasional line of some other type,
kept verbatim). Keys that the records do not model are stored in ``extra``.
Parsed records remember the keys they were read with, so writing one back
produces the same keys in the same order, explicit nulls included, and never
adds a modelled key that was absent.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Literal

MessageRole = Literal["user", "assistant", "toolResult"]

KeyOrder = tuple[str, ...] | None


def compact_json(value: Any) -> str:
    """Serialize to single-line JSON with no padding, non-ASCII kept as-is."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _split(data: dict[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    """Return the keys of ``data`` not in ``known``."""
    return {k: v for k, v in data.items() if k not in known}


def _typed(data: dict[str, Any], key: str, expected: type, default: Any, extra: dict[str, Any]) -> Any:
    """
    Read ``key`` if it holds an ``expected`` value, else ``default``.

    A present value of any other type is parked in ``extra``, which wins over
    modelled values on write.
    """
    value = data.get(key, default)
    if isinstance(value, expected):
        return value
    if key in data:
        extra[key] = value
    return default


def _layout(key_order: KeyOrder, values: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    """
    Merge modelled values and extra keys into one JSON object.

    With a key order (parsed records) exactly those keys are written, in that
    order, followed by extra keys added since. Without one (records built in
    code) every modelled value that is not None is written, then ``extra``.
    """
    merged = {**values, **extra}
    if key_order is None:
        return {k: v for k, v in merged.items() if v is not None or k in extra}

    data = {k: merged[k] for k in key_order if k in merged}
    for k, v in extra.items():
        if k not in data:
            data[k] = v
    return data


def _with_key(key_order: KeyOrder, key: str) -> KeyOrder:
    if key_order is None or key in key_order:
        return key_order
    return (*key_order, key)


def _key_order_field() -> Any:
    return field(default=None, compare=False, repr=False)


# ── Content blocks ──────────────────────────────────────────────────


@dataclass(frozen=True)
class TextBlock:
    """Plain text content."""

    text: str
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: KeyOrder = _key_order_field()

    def to_dict(self) -> dict[str, Any]:
        return _layout(self.key_order, {"type": "text", "text": self.text}, self.extra)


@dataclass(frozen=True)
class ToolCallBlock:
    """A tool invocation inside an assistant message.

    ``arguments`` is an object as written by the agent, or a string preview
    once the call has been truncated.
    """

    id: str
    name: str
    arguments: Any = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: KeyOrder = _key_order_field()

    def to_dict(self) -> dict[str, Any]:
        values = {"type": "toolCall", "id": self.id, "name": self.name, "arguments": self.arguments}
        return _layout(self.key_order, values, self.extra)


@dataclass(frozen=True)
class ThinkingBlock:
    """Extended-thinking content."""

    thinking: str
    signature: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: KeyOrder = _key_order_field()

    def to_dict(self) -> dict[str, Any]:
        values = {"type": "thinking", "thinking": self.thinking, "signature": self.signature}
        return _layout(self.key_order, values, self.extra)


@dataclass(frozen=True)
class UnknownBlock:
    """Any other block (images, future types). Carried through untouched."""

    data: Any

    @property
    def type(self) -> str | None:
        return self.data.get("type") if isinstance(self.data, dict) else None

    def to_dict(self) -> Any:
        return self.data


ContentBlock = TextBlock | ToolCallBlock | ThinkingBlock | UnknownBlock
Content = str | tuple[ContentBlock, ...]


def block_from_dict(data: Any) -> ContentBlock:
    """Build a content block, falling back to ``UnknownBlock`` for anything
    that does not have the shape of a known block type."""
    if not isinstance(data, dict):
        return UnknownBlock(data)

    block_type = data.get("type")
    key_order = tuple(data)

    if block_type == "text" and isinstance(data.get("text"), str):
        return TextBlock(text=data["text"], extra=_split(data, ("type", "text")), key_order=key_order)

    if block_type == "toolCall" and isinstance(data.get("id"), str):
        extra = _split(data, ("type", "id", "name", "arguments"))
        return ToolCallBlock(
            id=data["id"],
            name=_typed(data, "name", str, "", extra),
            arguments=data.get("arguments", {}),
            extra=extra,
            key_order=key_order,
        )

    if block_type == "thinking" and isinstance(data.get("thinking"), str):
        return ThinkingBlock(
            thinking=data["thinking"],
            signature=data.get("signature"),
            extra=_split(data, ("type", "thinking", "signature")),
            key_order=key_order,
        )

    return UnknownBlock(data)


# ── Messages ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ConversationMessage:
    """The ``message`` payload of a message entry.

    ``toolResult`` is a role: a message either is a tool result or contains
    tool calls, never both. Content that is neither a string nor a block list
    reads as empty text and is written back as it was.
    """

    role: str
    content: Content = ""
    tool_call_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: KeyOrder = _key_order_field()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversationMessage":
        extra = _split(data, ("role", "content", "toolCallId"))
        raw_content = data.get("content", "")
        if isinstance(raw_content, list):
            content: Content = tuple(block_from_dict(b) for b in raw_content)
        else:
            content = _typed(data, "content", str, "", extra)
        return cls(
            role=_typed(data, "role", str, "", extra),
            content=content,
            tool_call_id=_typed(data, "toolCallId", str, None, extra),
            extra=extra,
            key_order=tuple(data),
        )

    def with_content(self, content: Content) -> "ConversationMessage":
        extra = {k: v for k, v in self.extra.items() if k != "content"}
        return replace(self, content=content, extra=extra, key_order=_with_key(self.key_order, "content"))

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.content, tuple):
            content: Any = [block.to_dict() for block in self.content]
        else:
            content = self.content
        values = {"role": self.role, "content": content, "toolCallId": self.tool_call_id}
        return _layout(self.key_order, values, self.extra)


# ── Entries ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionHeader:
    """First line of a session file."""

    id: str
    version: Any = None
    timestamp: Any = None
    cwd: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: KeyOrder = _key_order_field()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionHeader":
        return cls(
            id=data.get("id", ""),
            version=data.get("version"),
            timestamp=data.get("timestamp"),
            cwd=data.get("cwd"),
            extra=_split(data, ("type", "id", "version", "timestamp", "cwd")),
            key_order=tuple(data),
        )

    def with_id(self, session_id: str, **extra: Any) -> "SessionHeader":
        """Copy under a new id, with ``extra`` keys added."""
        return replace(
            self,
            id=session_id,
            extra={**self.extra, **extra},
            key_order=_with_key(self.key_order, "id"),
        )

    def to_dict(self) -> dict[str, Any]:
        values = {
            "type": "session",
            "version": self.version,
            "id": self.id,
            "timestamp": self.timestamp,
            "cwd": self.cwd,
        }
        return _layout(self.key_order, values, self.extra)


@dataclass(frozen=True)
class MessageEntry:
    """One conversational message line."""

    message: ConversationMessage
    timestamp: Any = None
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: KeyOrder = _key_order_field()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageEntry":
        payload = data.get("message")
        return cls(
            message=ConversationMessage.from_dict(payload if isinstance(payload, dict) else {}),
            timestamp=data.get("timestamp"),
            extra=_split(data, ("type", "timestamp", "message")),
            key_order=tuple(data),
        )

    @property
    def role(self) -> str:
        return self.message.role

    @property
    def content(self) -> Content:
        return self.message.content

    @property
    def tool_call_id(self) -> str | None:
        return self.message.tool_call_id

    def with_content(self, content: Content) -> "MessageEntry":
        """Return a copy of this entry with its message content replaced."""
        return replace(self, message=self.message.with_content(content))

    def to_dict(self) -> dict[str, Any]:
        values = {"type": "message", "timestamp": self.timestamp, "message": self.message.to_dict()}
        return _layout(self.key_order, values, self.extra)


@dataclass(frozen=True)
class RawEntry:
    """A line of any other type. Never inspected, written back verbatim."""

    data: dict[str, Any]

    @property
    def type(self) -> Any:
        return self.data.get("type")

    def to_dict(self) -> dict[str, Any]:
        return self.data


Entry = SessionHeader | MessageEntry | RawEntry


def entry_from_dict(data: dict[str, Any]) -> Entry:
    """Build the entry variant matching the ``type`` tag."""
    entry_type = data.get("type")
    if entry_type == "session":
        return SessionHeader.from_dict(data)
    if entry_type == "message" and isinstance(data.get("message"), dict):
        return MessageEntry.from_dict(data)
    return RawEntry(data)
