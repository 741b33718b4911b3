"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest
import requests

from client.features.conversation.service import AnswerRequestClient
from client.features.feedback.service import OfflineFeedbackClient, OfflineFeedbackForm
from client.features.history.repository import ChatArchive
from infra.storage import LocalStorage

BASE_URL = "https://backend.test"


def make_response(json_data=None, status_code=200, text=""):
    """Stand-in for requests.Response; json() raises when no body is given."""
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage")


@pytest.fixture
def archive(storage):
    return ChatArchive(storage)


@pytest.fixture
def session():
    """requests.Session double; set session.post.return_value per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def answer_client(session):
    return AnswerRequestClient(session, BASE_URL)


@pytest.fixture
def feedback_form(session):
    return OfflineFeedbackForm(OfflineFeedbackClient(session, BASE_URL))
