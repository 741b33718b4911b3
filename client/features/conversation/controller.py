"""Controller for the chat view: send, new chat, load and delete."""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

import structlog

from client.features.conversation.dtos import Conversation, Message
from client.features.conversation.service import AnswerRequestClient
from client.features.conversation.state import ConversationState, new_conversation_id
from client.features.history.repository import ChatArchive
from client.shared.exceptions import (
    RequestInFlightError,
    StacBotClientException,
    StorageError,
)

logger = structlog.get_logger("stacbot.conversation.controller")


class ViewStatus(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class ConversationController:
    """Drives the active conversation and keeps the archive in step with it.

    Only one request may be pending at a time. Switching conversations bumps
    ``generation``; a reply produced for an older generation is discarded.
    """

    def __init__(
        self,
        client: AnswerRequestClient,
        archive: ChatArchive,
        state: Optional[ConversationState] = None,
    ) -> None:
        self.client = client
        self.archive = archive
        self.state = state or ConversationState()
        self.status = ViewStatus.IDLE
        self.generation = 0

    @property
    def conversation_id(self) -> Optional[str]:
        return self.state.conversation_id

    @property
    def messages(self) -> List[Message]:
        return self.state.messages

    @property
    def is_busy(self) -> bool:
        return self.status is ViewStatus.AWAITING_RESPONSE

    def history(self) -> List[Conversation]:
        return self.archive.list_recent()

    def _switch(self) -> None:
        self.generation += 1

    def _save_current(self) -> None:
        try:
            self.archive.save(self.state.conversation_id, self.state.messages)
        except StorageError:
            logger.exception(
                "archive_save_failed", conversation_id=self.state.conversation_id
            )

    def new_chat(self) -> str:
        if not self.state.is_empty and self.state.conversation_id:
            self._save_current()
        self._switch()
        self.state.reset(new_conversation_id())
        logger.info("new_chat", conversation_id=self.state.conversation_id)
        return self.state.conversation_id

    def load_chat(self, conversation: Conversation) -> None:
        self._switch()
        self.state.load_from(conversation)
        logger.info("load_chat", conversation_id=conversation.id)

    def delete_chat(self, conversation_id: str) -> None:
        try:
            self.archive.delete(conversation_id)
        except StorageError:
            logger.exception("archive_delete_failed", conversation_id=conversation_id)
        if conversation_id == self.state.conversation_id:
            self._switch()
            self.state.reset(new_conversation_id())
            logger.info(
                "active_chat_deleted",
                deleted_id=conversation_id,
                conversation_id=self.state.conversation_id,
            )

    def send(self, text: str) -> Optional[Message]:
        """Send ``text`` and return the bot reply.

        Returns None when the input is blank, another request is pending, the
        request fails, or the conversation was switched while waiting.
        """
        if not text or not text.strip():
            return None
        if self.is_busy:
            err = RequestInFlightError(self.state.conversation_id)
            logger.warning("send_rejected", error_code=err.error_code, **err.details)
            return None

        conversation_id = self.state.ensure_id()
        history = self.state.snapshot()
        self.state.append_user_message(text)
        generation = self.generation
        self.status = ViewStatus.AWAITING_RESPONSE
        try:
            reply = self.client.ask(history, text)
            if generation != self.generation:
                logger.warning(
                    "stale_response_dropped",
                    conversation_id=conversation_id,
                    active_id=self.state.conversation_id,
                )
                return None
            self.state.append_bot_message(reply)
            try:
                self.archive.save(conversation_id, self.state.messages)
            except StorageError:
                logger.exception("archive_save_failed", conversation_id=conversation_id)
            return reply
        except StacBotClientException as e:
            logger.exception(
                "ask_failed",
                conversation_id=conversation_id,
                error_code=e.error_code,
            )
            return None
        finally:
            self.status = ViewStatus.IDLE
