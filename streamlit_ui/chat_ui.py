import sys
from pathlib import Path

import streamlit as st

try:
    from core.settings import SETTINGS
except ModuleNotFoundError:
    ROOT = Path(__file__).resolve().parents[1]
    if str(ROOT) not in sys.path:
        sys.path.insert(0, str(ROOT))
    from core.settings import SETTINGS

from streamlit_ui.app_state import get_conversation_controller
from streamlit_ui.components import BOT_AVATAR, USER_AVATAR, render_message


st.set_page_config(page_title=SETTINGS.UI.PAGE_TITLE, layout="centered")
st.title("Chat with STACBot")

controller = get_conversation_controller()

# Sidebar: new chat and chat history
with st.sidebar:
    st.subheader(f"{BOT_AVATAR} ChatBot")
    st.button("＋ New chat", on_click=controller.new_chat, use_container_width=True)

    st.markdown("##### 🕘 Chat History")
    for chat in controller.history():
        is_active = chat.id == controller.conversation_id
        load_col, delete_col = st.columns([5, 1])
        load_col.button(
            f"🗂 {chat.title}",
            key=f"load_{chat.id}",
            type="primary" if is_active else "secondary",
            on_click=controller.load_chat,
            args=(chat,),
            use_container_width=True,
        )
        delete_col.button(
            "🗑️",
            key=f"delete_{chat.id}",
            help="Delete chat",
            on_click=controller.delete_chat,
            args=(chat.id,),
        )

    with st.expander("Configuration"):
        st.text(f"API_BASE_URL = {SETTINGS.UI.API_BASE_URL}")
        st.text(f"ENDPOINT_CHAT = {SETTINGS.UI.ENDPOINT_CHAT}")
        st.text(f"ENDPOINT_CHAT_FEEDBACK = {SETTINGS.UI.ENDPOINT_CHAT_FEEDBACK}")
        st.caption(
            "Values are loaded from environment (.env). Override by setting env vars."
        )

# Display the active conversation
for idx, msg in enumerate(controller.messages):
    render_message(
        msg,
        idx,
        preview_length=SETTINGS.UI.PREVIEW_LENGTH,
        key_prefix=controller.conversation_id or "new",
    )

# User input
if prompt := st.chat_input("Ask something...", disabled=controller.is_busy):
    with st.chat_message("user", avatar=USER_AVATAR):
        st.markdown(prompt)

    with st.chat_message("assistant", avatar=BOT_AVATAR):
        with st.spinner("STACBot is thinking, Please wait ..."):
            controller.send(prompt)

    # Re-render from state so the reply and the history list are in sync
    st.rerun()
