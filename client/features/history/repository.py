"""Repository for the local chat archive.

The archive is one JSON list of conversation records stored under a single
storage key. This module is the only reader and writer of that key.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Iterable, List

import structlog
from pydantic import ValidationError as PydanticValidationError

from client.features.conversation.dtos import Conversation, Message
from client.shared.exceptions import StorageError
from infra.storage import LocalStorage

logger = structlog.get_logger("stacbot.history.repository")

DEFAULT_ARCHIVE_KEY = "chatHistory"
DEFAULT_TITLE_LENGTH = 20


def derive_title(conversation_id: str, messages: List[Message], length: int) -> str:
    if messages and isinstance(messages[0].content, str):
        return messages[0].content[:length]
    return f"Chat {conversation_id}"


def _sort_key(conversation: Conversation) -> datetime:
    try:
        ts = datetime.fromisoformat(conversation.timestamp.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return datetime.min.replace(tzinfo=timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def sort_by_recency(conversations: Iterable[Conversation]) -> List[Conversation]:
    """Most recently saved first; unparsable timestamps go last."""
    return sorted(conversations, key=_sort_key, reverse=True)


class ChatArchive:
    """Chat history persisted as one serialized list."""

    def __init__(
        self,
        storage: LocalStorage,
        key: str = DEFAULT_ARCHIVE_KEY,
        title_length: int = DEFAULT_TITLE_LENGTH,
    ) -> None:
        self.storage = storage
        self.key = key
        self.title_length = title_length

    def load_all(self) -> List[Conversation]:
        """Return the archived conversations in stored order.

        Missing, unreadable or unparsable content yields an empty archive.
        Individual records that fail validation are skipped.
        """
        try:
            raw = self.storage.get_item(self.key)
        except OSError as e:
            logger.warning("archive_unreadable", key=self.key, error=str(e))
            return []
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.warning("archive_unparsable", key=self.key, error=str(e))
            return []
        if not isinstance(records, list):
            logger.warning("archive_not_a_list", key=self.key)
            return []

        conversations: List[Conversation] = []
        for i, record in enumerate(records):
            try:
                conversations.append(Conversation.model_validate(record))
            except PydanticValidationError as e:
                logger.warning(
                    "archive_record_skipped", key=self.key, index=i, errors=e.error_count()
                )
        return conversations

    def _persist(self, conversations: List[Conversation]) -> None:
        payload = json.dumps(
            [c.to_record() for c in conversations], ensure_ascii=False
        )
        try:
            self.storage.set_item(self.key, payload)
        except OSError as e:
            raise StorageError(
                f"Failed to write chat archive: {e}", {"key": self.key}
            ) from e

    def upsert(self, conversation: Conversation) -> List[Conversation]:
        """Replace any record with the same id and append this one."""
        conversations = [c for c in self.load_all() if c.id != conversation.id]
        conversations.append(conversation)
        self._persist(conversations)
        logger.info("archive_upsert", conversation_id=conversation.id, total=len(conversations))
        return conversations

    def save(self, conversation_id: str, messages: List[Message]) -> Conversation:
        """Derive title and timestamp for ``messages`` and upsert them."""
        conversation = Conversation(
            id=conversation_id,
            title=derive_title(conversation_id, messages, self.title_length),
            messages=list(messages),
            timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        )
        self.upsert(conversation)
        return conversation

    def delete(self, conversation_id: str) -> List[Conversation]:
        conversations = [c for c in self.load_all() if c.id != conversation_id]
        self._persist(conversations)
        logger.info("archive_delete", conversation_id=conversation_id, total=len(conversations))
        return conversations

    def list_recent(self) -> List[Conversation]:
        return sort_by_recency(self.load_all())
