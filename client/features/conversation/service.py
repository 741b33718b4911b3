"""Client for the STACBot answer endpoints.

A fresh conversation asks the question endpoint; once a conversation has
history every further message goes to the feedback endpoint, which answers
with an updated answer plus matched offline feedbacks.
"""
from typing import Any, Dict, List, Optional

import requests
import structlog
from pydantic import ValidationError as PydanticValidationError

from client.features.conversation.dtos import (
    BackendAnswer,
    ChatAnswer,
    ChatFeedbackRequest,
    ChatQueryRequest,
    FeedbackAnswer,
    Message,
)
from client.features.conversation.sanitizer import clean
from client.features.conversation.state import first_bot_answer, first_user_text
from client.shared.exceptions import MalformedResponseError
from client.shared.http import SERVICE_NAME, post_json

logger = structlog.get_logger("stacbot.conversation.service")


def build_feedback_request(
    conversation_so_far: List[Message], user_text: str
) -> ChatFeedbackRequest:
    """Follow-up payload; context is the conversation's first exchange."""
    return ChatFeedbackRequest(
        user_feedback=user_text,
        previous_question=first_user_text(conversation_so_far) or None,
        previous_answer=first_bot_answer(conversation_so_far) or None,
    )


def parse_answer(data: Dict[str, Any], follow_up: bool) -> BackendAnswer:
    model = FeedbackAnswer if follow_up else ChatAnswer
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise MalformedResponseError(
            SERVICE_NAME,
            f"Unexpected {model.__name__} payload",
            {"errors": e.errors(include_url=False)},
        ) from e


def to_message(answer: BackendAnswer) -> Message:
    return Message.bot(
        answer=clean(answer.answer),
        sources=answer.sources,
        feedbacks=answer.feedbacks,
    )


class AnswerRequestClient:
    """Issues the question / follow-up requests and normalizes the replies."""

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        chat_endpoint: str = "/chat",
        feedback_endpoint: str = "/chat_feedback",
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.chat_endpoint = chat_endpoint
        self.feedback_endpoint = feedback_endpoint
        self.timeout = timeout

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}{self.chat_endpoint}"

    @property
    def feedback_url(self) -> str:
        return f"{self.base_url}{self.feedback_endpoint}"

    def ask(self, conversation_so_far: List[Message], user_text: str) -> Message:
        """Send ``user_text`` and return the normalized bot reply."""
        follow_up = bool(conversation_so_far)
        if follow_up:
            url = self.feedback_url
            body = build_feedback_request(conversation_so_far, user_text)
        else:
            url = self.chat_url
            body = ChatQueryRequest(query=user_text)

        logger.info(
            "ask_backend",
            url=url,
            follow_up=follow_up,
            history_length=len(conversation_so_far),
        )
        data = post_json(self.session, url, body.model_dump(), timeout=self.timeout)
        answer = parse_answer(data, follow_up)
        reply = to_message(answer)
        logger.info(
            "ask_backend_done",
            follow_up=follow_up,
            sources=len(answer.sources),
            feedbacks=len(answer.feedbacks),
        )
        return reply
