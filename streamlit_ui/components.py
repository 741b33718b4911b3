"""Rendering helpers for chat messages and their supporting panels."""
from typing import Any, List, Tuple

import streamlit as st

from client.features.conversation.dtos import MatchedFeedback, Message, SourceExcerpt

DEFAULT_PREVIEW_LENGTH = 300

USER_AVATAR = "🧑"
BOT_AVATAR = "🤖"


def display_text(value: Any) -> str:
    return "" if value is None else str(value)


def format_sources(sources: List[SourceExcerpt]) -> str:
    return "\n\n".join(
        f"{display_text(src.source)}: {display_text(src.content_excerpt)}"
        for src in sources
    )


def format_score(score: Any) -> str:
    if isinstance(score, (int, float)) and not isinstance(score, bool):
        return f"{score:.2f}"
    return "N/A"


def format_feedbacks(feedbacks: List[MatchedFeedback]) -> str:
    blocks = []
    for i, fb in enumerate(feedbacks, start=1):
        blocks.append(
            f"Feedback # {i} (Score: {format_score(fb.score)})\n"
            f"Question: {display_text(fb.payload.question_asked)}\n"
            f"Feedback: {display_text(fb.payload.helpful_feedback)}"
        )
    return "\n\n".join(blocks)


def preview(text: str, length: int = DEFAULT_PREVIEW_LENGTH) -> Tuple[str, bool]:
    """First ``length`` characters, with "..." when the text was cut."""
    if len(text) <= length:
        return text, False
    return text[:length] + "...", True


def panel_key(prefix: str, kind: str, index: int) -> str:
    return f"{prefix}_{kind}_{index}"


def _toggle(state_key: str) -> None:
    st.session_state[state_key] = not st.session_state.get(state_key, False)


def render_panel(
    title: str,
    body: str,
    total_label: str,
    key: str,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> None:
    """Collapsible text panel with a Show More / Show Less toggle."""
    state_key = f"{key}_show_all"
    show_all = st.session_state.get(state_key, False)
    short, truncated = preview(body, preview_length)

    head, toggle = st.columns([4, 1])
    head.markdown(f"**{title}:**")
    if truncated:
        toggle.button(
            "Show Less" if show_all else "Show More",
            key=f"{key}_toggle",
            on_click=_toggle,
            args=(state_key,),
        )
    st.caption(total_label)
    st.text(body if show_all else short)


def render_message(
    message: Message,
    index: int,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    key_prefix: str = "",
) -> None:
    """Render one message; ``key_prefix`` scopes panel toggles to a conversation."""
    if message.role == "user":
        with st.chat_message("user", avatar=USER_AVATAR):
            st.markdown(message.text)
        return

    with st.chat_message("assistant", avatar=BOT_AVATAR):
        st.markdown("**🟢 OpenAI**")
        st.markdown(message.text)
        sources = message.sources.openai if message.sources else []
        if sources:
            render_panel(
                "Sources",
                format_sources(sources),
                f"Total sources: {len(sources)}",
                key=panel_key(key_prefix, "sources", index),
                preview_length=preview_length,
            )
        if message.feedbacks:
            render_panel(
                "Matched Offline Feedbacks",
                format_feedbacks(message.feedbacks),
                f"Total feedbacks: {len(message.feedbacks)}",
                key=panel_key(key_prefix, "feedbacks", index),
                preview_length=preview_length,
            )
