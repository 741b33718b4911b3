"""DTOs for the Offline Feedback feature."""
from typing import Optional

from pydantic import Field

from client.shared.dtos import BaseDTO, PassthroughDTO


class OfflineFeedbackRequest(BaseDTO):
    """Body posted to the offline feedback endpoint."""

    question_asked: str = Field(description="Question the feedback is about")
    answer_received: str = Field(default="", description="Answer given, optional")
    helpful_feedback: str = Field(description="What would have helped")


class SaveFeedbackResult(PassthroughDTO):
    status: Optional[str] = Field(default=None, description="'success' when stored")

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
