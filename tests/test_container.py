"""Tests for dependency wiring."""

from dependency_injector import providers

from client.features.conversation.controller import ConversationController
from client.features.feedback.service import OfflineFeedbackForm
from core.settings import SETTINGS
from di.container import ApplicationContainer
from infra.storage import LocalStorage


def _container(session, tmp_path):
    container = ApplicationContainer()
    container.infrastructure.http_session.override(providers.Object(session))
    container.infrastructure.storage.override(providers.Object(LocalStorage(tmp_path)))
    return container


def test_conversation_controller_wiring(session, tmp_path):
    controller = _container(session, tmp_path).controllers.conversation_controller()

    assert isinstance(controller, ConversationController)
    assert controller.client.session is session
    assert controller.client.chat_url == (
        f"{SETTINGS.UI.API_BASE_URL}{SETTINGS.UI.ENDPOINT_CHAT}"
    )
    assert controller.archive.storage.directory == tmp_path
    assert controller.archive.key == SETTINGS.ARCHIVE.ARCHIVE_KEY


def test_controllers_share_one_archive(session, tmp_path):
    container = _container(session, tmp_path)
    first = container.controllers.conversation_controller()
    second = container.controllers.conversation_controller()

    assert first is not second
    assert first.archive is second.archive


def test_feedback_form_wiring(session, tmp_path):
    form = _container(session, tmp_path).controllers.feedback_form()

    assert isinstance(form, OfflineFeedbackForm)
    assert form.client.url.endswith(SETTINGS.UI.ENDPOINT_SAVE_OFFLINE_FEEDBACK)
