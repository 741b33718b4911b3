from __future__ import annotations

import structlog
from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import http_session_resource, local_storage_resource


logger = structlog.get_logger("stacbot")


class InfrastructureContainer(containers.DeclarativeContainer):
    settings = providers.Object(SETTINGS)
    logger = providers.Object(logger)

    http_session = providers.Resource(http_session_resource)

    storage = providers.Singleton(
        local_storage_resource,
        directory=SETTINGS.ARCHIVE.ARCHIVE_DIR,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    chat_archive = providers.Singleton(
        "client.features.history.repository.ChatArchive",
        storage=infrastructure.storage,
        key=SETTINGS.ARCHIVE.ARCHIVE_KEY,
        title_length=SETTINGS.UI.TITLE_LENGTH,
    )

    answer_client = providers.Factory(
        "client.features.conversation.service.AnswerRequestClient",
        session=infrastructure.http_session,
        base_url=SETTINGS.UI.API_BASE_URL,
        chat_endpoint=SETTINGS.UI.ENDPOINT_CHAT,
        feedback_endpoint=SETTINGS.UI.ENDPOINT_CHAT_FEEDBACK,
        timeout=SETTINGS.UI.REQUEST_TIMEOUT,
    )

    feedback_client = providers.Factory(
        "client.features.feedback.service.OfflineFeedbackClient",
        session=infrastructure.http_session,
        base_url=SETTINGS.UI.API_BASE_URL,
        endpoint=SETTINGS.UI.ENDPOINT_SAVE_OFFLINE_FEEDBACK,
        timeout=SETTINGS.UI.REQUEST_TIMEOUT,
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Per-session controllers."""

    services = providers.DependenciesContainer()

    conversation_controller = providers.Factory(
        "client.features.conversation.controller.ConversationController",
        client=services.answer_client,
        archive=services.chat_archive,
    )

    feedback_form = providers.Factory(
        "client.features.feedback.service.OfflineFeedbackForm",
        client=services.feedback_client,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
