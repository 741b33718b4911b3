"""Per-process container and per-session controllers for the Streamlit pages."""
import streamlit as st

from client.features.conversation.controller import ConversationController
from client.features.feedback.service import OfflineFeedbackForm
from core.logging_config import configure_logging
from di.container import ApplicationContainer


@st.cache_resource
def get_container() -> ApplicationContainer:
    configure_logging()
    container = ApplicationContainer()
    container.init_resources()
    return container


def get_conversation_controller() -> ConversationController:
    if "controller" not in st.session_state:
        st.session_state.controller = (
            get_container().controllers.conversation_controller()
        )
    return st.session_state.controller


def get_feedback_form() -> OfflineFeedbackForm:
    if "feedback_form" not in st.session_state:
        st.session_state.feedback_form = get_container().controllers.feedback_form()
    return st.session_state.feedback_form
