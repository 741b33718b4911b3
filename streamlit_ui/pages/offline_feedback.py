import sys
from pathlib import Path

import streamlit as st

try:
    from core.settings import SETTINGS
except ModuleNotFoundError:
    ROOT = Path(__file__).resolve().parents[2]
    if str(ROOT) not in sys.path:
        sys.path.insert(0, str(ROOT))
    from core.settings import SETTINGS

from client.features.feedback.service import STATUS_SAVED
from streamlit_ui.app_state import get_feedback_form

st.set_page_config(page_title="Offline Feedback", layout="centered")
st.title("Offline Feedback")

API_BASE_URL = SETTINGS.UI.API_BASE_URL
ENDPOINT_SAVE_OFFLINE_FEEDBACK = SETTINGS.UI.ENDPOINT_SAVE_OFFLINE_FEEDBACK

with st.sidebar:
    st.subheader("Configuration")
    st.text(f"API_BASE_URL = {API_BASE_URL}")
    st.text(f"ENDPOINT_SAVE_OFFLINE_FEEDBACK = {ENDPOINT_SAVE_OFFLINE_FEEDBACK}")
    st.caption(
        "Values are loaded from environment (.env). Override by setting env vars."
    )

form = get_feedback_form()


def save_feedback():
    form.question = st.session_state.get("fb_question", "")
    form.answer = st.session_state.get("fb_answer", "")
    form.feedback = st.session_state.get("fb_feedback", "")
    with st.spinner("Saving feedback..."):
        status = form.submit()
    if status == STATUS_SAVED:
        # Widget values may only be reset from a callback
        st.session_state.fb_question = form.question
        st.session_state.fb_answer = form.answer
        st.session_state.fb_feedback = form.feedback


st.text_area("Question", key="fb_question", height=80, placeholder="Question")
st.text_area(
    "Helpful Feedback", key="fb_feedback", height=120, placeholder="Helpful Feedback"
)
st.text_area(
    "Answer Received (Optional)",
    key="fb_answer",
    height=120,
    placeholder="Answer Received (Optional)",
)
st.button("Save Feedback", on_click=save_feedback)

if form.status == STATUS_SAVED:
    st.success(form.status)
elif form.status:
    st.warning(form.status)
