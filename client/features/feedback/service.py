"""Offline feedback: form state and submission to the backend."""
from __future__ import annotations

from typing import Optional

import requests
import structlog
from pydantic import ValidationError as PydanticValidationError

from client.features.feedback.dtos import OfflineFeedbackRequest, SaveFeedbackResult
from client.shared.exceptions import (
    MalformedResponseError,
    StacBotClientException,
    ValidationError,
)
from client.shared.http import SERVICE_NAME, post_json

logger = structlog.get_logger("stacbot.feedback.service")

STATUS_MISSING_FIELDS = "Please fill all required fields"
STATUS_SAVED = "Feedback saved successfully!"
STATUS_REJECTED = "Failed to save feedback"
STATUS_ERROR = "Error saving feedback"


class OfflineFeedbackClient:
    """Posts offline feedback records."""

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        endpoint: str = "/save_offline_feedback",
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session
        self.url = f"{base_url.rstrip('/')}{endpoint}"
        self.timeout = timeout

    def save(self, request: OfflineFeedbackRequest) -> SaveFeedbackResult:
        data = post_json(
            self.session,
            self.url,
            request.model_dump(),
            timeout=self.timeout,
            check_status=False,
        )
        try:
            return SaveFeedbackResult.model_validate(data)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                SERVICE_NAME, "Unexpected SaveFeedbackResult payload"
            ) from e


def validate_feedback(question: str, feedback: str) -> None:
    if not question.strip() or not feedback.strip():
        raise ValidationError(
            STATUS_MISSING_FIELDS,
            {"question": bool(question.strip()), "feedback": bool(feedback.strip())},
        )


class OfflineFeedbackForm:
    """Question, answer and feedback fields plus a status line."""

    def __init__(self, client: OfflineFeedbackClient) -> None:
        self.client = client
        self.question = ""
        self.answer = ""
        self.feedback = ""
        self.status = ""

    def clear(self) -> None:
        self.question = ""
        self.answer = ""
        self.feedback = ""

    def submit(self) -> str:
        """Validate and post the form; returns the resulting status line."""
        try:
            validate_feedback(self.question, self.feedback)
        except ValidationError as e:
            self.status = e.message
            return self.status

        request = OfflineFeedbackRequest(
            question_asked=self.question,
            answer_received=self.answer,
            helpful_feedback=self.feedback,
        )
        try:
            result = self.client.save(request)
        except StacBotClientException as e:
            logger.exception("offline_feedback_error", error_code=e.error_code)
            self.status = STATUS_ERROR
            return self.status

        if result.succeeded:
            logger.info("offline_feedback_saved")
            self.status = STATUS_SAVED
            self.clear()
        else:
            logger.warning("offline_feedback_rejected", backend_status=result.status)
            self.status = STATUS_REJECTED
        return self.status
