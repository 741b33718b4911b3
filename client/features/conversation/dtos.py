"""DTOs for the Conversation feature.

Message and Conversation mirror the records kept in the chat archive. The
``*Answer`` models describe the two backend response shapes; both normalize
into a bot :class:`Message`.
"""
from typing import Any, List, Literal, Optional, Union

from pydantic import Field, field_validator

from client.shared.dtos import BaseDTO, PassthroughDTO


def _none_to_list(v: Any) -> Any:
    return [] if v is None else v


def _text_or_none(v: Any) -> Optional[str]:
    # Non-textual answers are treated as missing and later cleaned to "".
    return v if isinstance(v, str) else None


class SourceExcerpt(PassthroughDTO):
    """Supporting excerpt returned by the backend."""

    source: Any = Field(default=None, description="Source identifier")
    content_excerpt: Any = Field(default=None, description="Excerpt text")


class FeedbackPayload(PassthroughDTO):
    """Stored offline feedback that matched the question."""

    question_asked: Any = Field(default=None)
    helpful_feedback: Any = Field(default=None)


class MatchedFeedback(PassthroughDTO):
    """Historical feedback entry matched by the backend."""

    score: Any = Field(default=None, description="Similarity score")
    payload: FeedbackPayload = Field(default_factory=FeedbackPayload)


class BotContent(BaseDTO):
    openai: str = Field(default="", description="Answer text")


class BotSources(BaseDTO):
    openai: List[SourceExcerpt] = Field(default_factory=list)

    @field_validator("openai", mode="before")
    @classmethod
    def coerce_missing(cls, v):
        return _none_to_list(v)


class Message(BaseDTO):
    """One chat message; user content is a string, bot content is structured."""

    role: Literal["user", "bot"]
    content: Union[str, BotContent]
    sources: Optional[BotSources] = None
    feedbacks: Optional[List[MatchedFeedback]] = None

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role="user", content=text)

    @classmethod
    def bot(
        cls,
        answer: str,
        sources: Optional[List[SourceExcerpt]] = None,
        feedbacks: Optional[List[MatchedFeedback]] = None,
    ) -> "Message":
        return cls(
            role="bot",
            content=BotContent(openai=answer),
            sources=BotSources(openai=sources or []),
            feedbacks=feedbacks or [],
        )

    @property
    def text(self) -> str:
        """Plain text of the message regardless of role."""
        if isinstance(self.content, str):
            return self.content
        return self.content.openai

    def to_record(self) -> dict:
        """Archive form; backend passthrough keys are kept as received."""
        record = self.model_dump(mode="json", exclude_unset=True)
        for field in ("sources", "feedbacks"):
            if record.get(field) is None:
                record.pop(field, None)
        return record


class Conversation(BaseDTO):
    """Archived conversation."""

    id: str = Field(description="Conversation identifier (epoch milliseconds)")
    title: str = Field(default="", description="Derived from the first message")
    messages: List[Message] = Field(default_factory=list)
    timestamp: str = Field(default="", description="ISO-8601 time of last save")

    def to_record(self) -> dict:
        record = self.model_dump(mode="json", exclude={"messages"})
        record["messages"] = [m.to_record() for m in self.messages]
        return record


class ChatQueryRequest(BaseDTO):
    """Body of the initial question request."""

    query: str


class ChatFeedbackRequest(BaseDTO):
    """Body of the follow-up request."""

    user_feedback: str
    previous_question: Optional[str] = None
    previous_answer: Optional[str] = None


class ChatAnswer(BaseDTO):
    """Response of the initial question endpoint."""

    kind: Literal["answer"] = "answer"
    openai_answer: Optional[str] = None
    openai_sources: List[SourceExcerpt] = Field(default_factory=list)

    @field_validator("openai_answer", mode="before")
    @classmethod
    def coerce_answer(cls, v):
        return _text_or_none(v)

    @field_validator("openai_sources", mode="before")
    @classmethod
    def coerce_sources(cls, v):
        return _none_to_list(v)

    @property
    def answer(self) -> Optional[str]:
        return self.openai_answer

    @property
    def sources(self) -> List[SourceExcerpt]:
        return self.openai_sources

    @property
    def feedbacks(self) -> List[MatchedFeedback]:
        return []


class FeedbackAnswer(BaseDTO):
    """Response of the follow-up endpoint."""

    kind: Literal["feedback"] = "feedback"
    updated_answer: Optional[str] = None
    feedback_context_sources: List[SourceExcerpt] = Field(default_factory=list)
    matched_feedbacks: List[MatchedFeedback] = Field(default_factory=list)

    @field_validator("updated_answer", mode="before")
    @classmethod
    def coerce_answer(cls, v):
        return _text_or_none(v)

    @field_validator("feedback_context_sources", "matched_feedbacks", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return _none_to_list(v)

    @property
    def answer(self) -> Optional[str]:
        return self.updated_answer

    @property
    def sources(self) -> List[SourceExcerpt]:
        return self.feedback_context_sources

    @property
    def feedbacks(self) -> List[MatchedFeedback]:
        return self.matched_feedbacks


BackendAnswer = Union[ChatAnswer, FeedbackAnswer]
