"""Session transcripts: entry model, JSONL codec and on-disk storage."""

from occ.session.backup import create_backup, find_latest_backup, restore_from_backup
from occ.session.manager import SessionStore
from occ.session.models import (
    ConversationMessage,
    MessageEntry,
    RawEntry,
    SessionHeader,
    TextBlock,
    ThinkingBlock,
    ToolCallBlock,
    UnknownBlock,
)
from occ.session.parser import (
    ParsedSession,
    parse_jsonl,
    parse_jsonl_safe,
    serialize_jsonl,
)

__all__ = [
    # Model
    "ConversationMessage",
    "MessageEntry",
    "RawEntry",
    "SessionHeader",
    "TextBlock",
    "ThinkingBlock",
    "ToolCallBlock",
    "UnknownBlock",
    # Codec
    "ParsedSession",
    "parse_jsonl",
    "parse_jsonl_safe",
    "serialize_jsonl",
    # Storage
    "SessionStore",
    "create_backup",
    "find_latest_backup",
    "restore_from_backup",
]
