"""Campus message board with replies, search and per-author deletion."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

SEPARATOR = "─────────────────────────"
REPLY = "reply"
ORIGINAL = "original"

_KNOWN_KEYS = frozenset(
    {"id", "author", "content", "time", "type", "replyToId", "replyToUser", "replyType"}
)


class SocialError(Exception):
    """Raised when a message board operation cannot be carried out."""


def _new_id() -> str:
    return uuid.uuid4().hex


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _display_time(value: str) -> str:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return ""
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.strftime("%Y-%m-%d %H:%M")


def parse_reply(text: str) -> tuple[str | None, str]:
    """Split ``"@user body"`` into the addressed user and the body.

    Returns ``(None, text)`` with the text stripped when it is not a reply.
    """
    content = text.strip()
    if content.startswith("@"):
        space = content.find(" ")
        if space > 0:
            return content[1:space], content[space + 1 :].strip()
    return None, content


@dataclass
class Message:
    """One posted message; replies name the user and message they answer."""

    id: str
    author: str
    content: str
    time: str
    type: str = "normal"
    reply_to_id: str = ""
    reply_to_user: str = ""
    reply_type: str = ORIGINAL
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_reply(self) -> bool:
        return self.reply_type == REPLY

    def _to_dict(self) -> dict[str, Any]:
        record = dict(self.extra)
        record.update(
            {
                "id": self.id,
                "author": self.author,
                "content": self.content,
                "time": self.time,
                "type": self.type,
                "replyToId": self.reply_to_id,
                "replyToUser": self.reply_to_user,
                "replyType": self.reply_type,
            }
        )
        return record

    @classmethod
    def _from_dict(cls, data: Any) -> Message:
        record = data if isinstance(data, dict) else {}
        return cls(
            id=_as_str(record.get("id")),
            author=_as_str(record.get("author")),
            content=_as_str(record.get("content")),
            time=_as_str(record.get("time")),
            type=_as_str(record.get("type")),
            reply_to_id=_as_str(record.get("replyToId")),
            reply_to_user=_as_str(record.get("replyToUser")),
            reply_type=_as_str(record.get("replyType")),
            extra={k: v for k, v in record.items() if k not in _KNOWN_KEYS},
        )


class MessageBoard:
    """Messages shared by all users, newest first, kept in a JSON array file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.messages: list[Message] = []
        self.load()

    def load(self) -> None:
        """Read the messages; give an id to any message that lacks one."""
        try:
            raw = self.path.read_bytes()
        except OSError:
            return
        try:
            document = json.loads(raw)
        except ValueError:
            document = []
        if not isinstance(document, list):
            document = []
        self.messages = [Message._from_dict(item) for item in document]
        for message in self.messages:
            if not message.id:
                message.id = _new_id()

    def save(self) -> None:
        """Write all messages to the file."""
        payload = [message._to_dict() for message in self.messages]
        self.path.write_text(
            json.dumps(payload, indent=4, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    def post(
        self,
        author: str,
        text: str,
        selected_id: str | None,
        now: datetime,
    ) -> Message:
        """Publish a message at the top of the board and save.

        Text of the form ``"@user body"`` becomes a reply to ``user``; the
        message with ``selected_id``, if it exists, is recorded as the one
        answered. Raise ``SocialError`` when the body is empty.
        """
        reply_user, content = parse_reply(text)
        if not content:
            raise SocialError("message content must not be empty")
        reply_id = ""
        if reply_user is not None and selected_id:
            original = self.find(selected_id)
            if original is not None:
                reply_id = original.id
        message = Message(
            id=_new_id(),
            author=author,
            content=content,
            time=now.isoformat(timespec="seconds"),
            type="normal",
            reply_to_id=reply_id,
            reply_to_user=reply_user or "",
            reply_type=REPLY if reply_user is not None else ORIGINAL,
        )
        self.messages.insert(0, message)
        self.save()
        return message

    def delete(self, message_id: str, user: str) -> None:
        """Remove a message posted by ``user`` and save."""
        message = self.find(message_id)
        if message is None:
            raise SocialError(f"no message with id {message_id!r}")
        if message.author != user:
            raise SocialError("only the author may delete a message")
        self.messages.remove(message)
        self.save()

    def find(self, message_id: str) -> Message | None:
        """Return the message with ``message_id``, or ``None``."""
        if not message_id:
            return None
        return next((m for m in self.messages if m.id == message_id), None)

    def search(self, keyword: str) -> list[Message]:
        """Return messages whose content, author or addressee holds ``keyword``."""
        needle = keyword.strip().lower()
        if not needle:
            return list(self.messages)
        return [
            m
            for m in self.messages
            if needle in m.content.lower()
            or needle in m.author.lower()
            or needle in m.reply_to_user.lower()
        ]

    def render(self, message: Message) -> str:
        """Return the text shown for a message in the list."""
        stamp = _display_time(message.time)
        if not message.is_reply:
            return f"[{message.author}] {stamp}\n{message.content}\n{SEPARATOR}"
        head = f"[{message.author} 回复 {message.reply_to_user}] {stamp}\n{SEPARATOR}\n"
        original = self.find(message.reply_to_id)
        if original is not None and original.content:
            head += f"原留言: {original.content}\n{SEPARATOR}\n"
        return f"{head}回复内容: {message.content}\n{SEPARATOR}"

    def reply_prefix(self, message_id: str) -> str:
        """Return the ``"@author "`` text that starts a reply to a message."""
        message = self.find(message_id)
        if message is None:
            raise SocialError(f"no message with id {message_id!r}")
        return f"@{message.author} "