"""In-memory state of the open conversation."""
from __future__ import annotations

import time
from typing import List, Optional

from client.features.conversation.dtos import BotContent, Conversation, Message


_last_id = 0


def new_conversation_id() -> str:
    """Conversation ids are the creation time in epoch milliseconds.

    Ids handed out by one process are strictly increasing, so two chats
    created within the same millisecond still get distinct ids.
    """
    global _last_id
    _last_id = max(int(time.time() * 1000), _last_id + 1)
    return str(_last_id)


def first_user_text(messages: List[Message]) -> Optional[str]:
    for m in messages:
        if m.role == "user":
            return m.text
    return None


def first_bot_answer(messages: List[Message]) -> Optional[str]:
    for m in messages:
        if m.role == "bot":
            return m.content.openai if isinstance(m.content, BotContent) else None
    return None


class ConversationState:
    """Ordered, append-only message list of the active conversation."""

    def __init__(
        self,
        conversation_id: Optional[str] = None,
        messages: Optional[List[Message]] = None,
    ) -> None:
        self.conversation_id = conversation_id
        self._messages: List[Message] = list(messages or [])

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def is_empty(self) -> bool:
        return not self._messages

    def __len__(self) -> int:
        return len(self._messages)

    def snapshot(self) -> List[Message]:
        return list(self._messages)

    def ensure_id(self) -> str:
        if not self.conversation_id:
            self.conversation_id = new_conversation_id()
        return self.conversation_id

    def append_user_message(self, text: str) -> Message:
        message = Message.user(text)
        self._messages.append(message)
        return message

    def append_bot_message(self, reply: Message) -> Message:
        if reply.role != "bot":
            raise ValueError(f"Expected a bot message, got role={reply.role!r}")
        self._messages.append(reply)
        return reply

    def reset(self, conversation_id: Optional[str] = None) -> None:
        self.conversation_id = conversation_id
        self._messages = []

    def load_from(self, conversation: Conversation) -> None:
        self.conversation_id = conversation.id
        self._messages = list(conversation.messages)
