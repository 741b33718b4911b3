"""Tests for the conversation controller state machine."""

from unittest.mock import MagicMock

import pytest

from client.features.conversation.controller import ConversationController, ViewStatus
from client.features.conversation.dtos import Message
from client.features.conversation.sanitizer import APOLOGY_MESSAGE
from client.shared.exceptions import ExternalServiceError, StorageError
from tests.conftest import make_response


@pytest.fixture
def client():
    client = MagicMock()
    client.ask.side_effect = lambda history, text: Message.bot(f"answer to {text}")
    return client


@pytest.fixture
def controller(client, archive):
    return ConversationController(client, archive)


def test_blank_input_is_ignored(controller, client):
    assert controller.send("   ") is None
    assert controller.messages == []
    client.ask.assert_not_called()


def test_send_appends_exchange_and_archives(controller, client, archive):
    reply = controller.send("What is STAC?")

    assert reply.text == "answer to What is STAC?"
    assert [m.role for m in controller.messages] == ["user", "bot"]
    assert controller.status is ViewStatus.IDLE
    client.ask.assert_called_once_with([], "What is STAC?")

    [saved] = archive.load_all()
    assert saved.id == controller.conversation_id
    assert saved.title == "What is STAC?"
    assert len(saved.messages) == 2


def test_second_send_passes_history_before_new_message(controller, client):
    controller.send("first")
    controller.send("second")

    history, text = client.ask.call_args.args
    assert text == "second"
    assert [m.text for m in history] == ["first", "answer to first"]


def test_active_conversation_stays_single_archive_entry(controller, archive):
    controller.send("one")
    controller.send("two")
    controller.send("three")

    [saved] = archive.load_all()
    assert len(saved.messages) == 6


def test_failure_drops_exchange_and_returns_to_idle(controller, client, archive):
    client.ask.side_effect = ExternalServiceError("STACBot backend", "down")

    assert controller.send("hello") is None

    assert controller.status is ViewStatus.IDLE
    assert [m.role for m in controller.messages] == ["user"]
    assert archive.load_all() == []


def test_unexpected_error_still_clears_awaiting_state(controller, client):
    client.ask.side_effect = RuntimeError("bug")
    with pytest.raises(RuntimeError):
        controller.send("hello")
    assert controller.status is ViewStatus.IDLE


def test_status_is_awaiting_while_request_pending(controller, client):
    seen = []

    def ask(history, text):
        seen.append(controller.status)
        return Message.bot("ok")

    client.ask.side_effect = ask
    controller.send("hello")
    assert seen == [ViewStatus.AWAITING_RESPONSE]


def test_second_send_while_pending_is_rejected(controller, client):
    nested = []

    def ask(history, text):
        nested.append(controller.send("double send"))
        return Message.bot("ok")

    client.ask.side_effect = ask
    controller.send("hello")

    assert nested == [None]
    assert client.ask.call_count == 1
    assert [m.text for m in controller.messages] == ["hello", "ok"]


def test_reply_for_switched_conversation_is_dropped(controller, client, archive):
    def ask(history, text):
        controller.new_chat()
        return Message.bot("late")

    client.ask.side_effect = ask
    assert controller.send("hello") is None

    assert controller.messages == []
    assert controller.status is ViewStatus.IDLE
    assert all(
        m.text != "late" for conv in archive.load_all() for m in conv.messages
    )


def test_new_chat_saves_current_and_starts_fresh(controller, archive):
    controller.send("hello")
    old_id = controller.conversation_id

    new_id = controller.new_chat()

    assert new_id != old_id
    assert controller.messages == []
    assert controller.conversation_id == new_id
    assert [c.id for c in archive.load_all()] == [old_id]


def test_new_chat_on_empty_conversation_saves_nothing(controller, archive):
    controller.new_chat()
    assert archive.load_all() == []


def test_load_chat_replaces_state(controller, archive):
    controller.send("first chat")
    first = archive.load_all()[0]
    controller.new_chat()
    controller.send("second chat")

    controller.load_chat(first)

    assert controller.conversation_id == first.id
    assert [m.text for m in controller.messages] == [
        "first chat",
        "answer to first chat",
    ]


def test_deleting_active_conversation_activates_fresh_one(controller, archive):
    controller.send("hello")
    active = controller.conversation_id

    controller.delete_chat(active)

    assert controller.messages == []
    assert controller.conversation_id is not None
    assert archive.load_all() == []


def test_deleting_other_conversation_keeps_active(controller, archive):
    archive.save("other", [Message.user("x")])
    controller.send("hello")
    active = controller.conversation_id

    controller.delete_chat("other")

    assert controller.conversation_id == active
    assert len(controller.messages) == 2
    assert [c.id for c in archive.load_all()] == [active]


def test_history_sorted_newest_first(controller, archive):
    stamps = {
        "a": "2024-01-01T00:00:00Z",
        "b": "2024-03-01T00:00:00Z",
        "c": "2024-02-01T00:00:00Z",
    }
    for cid, ts in stamps.items():
        conv = archive.save(cid, [Message.user(cid)])
        archive.upsert(conv.model_copy(update={"timestamp": ts}))
    assert [c.id for c in controller.history()] == ["b", "c", "a"]


def test_archive_write_failure_keeps_reply(client):
    archive = MagicMock()
    archive.save.side_effect = StorageError("disk full")
    controller = ConversationController(client, archive)

    reply = controller.send("hello")

    assert reply is not None
    assert len(controller.messages) == 2
    assert controller.status is ViewStatus.IDLE


def test_scenario_unknown_answer_becomes_apology(session, answer_client, archive):
    session.post.return_value = make_response(
        {"openai_answer": "I don't know", "openai_sources": []}
    )
    controller = ConversationController(answer_client, archive)

    controller.send("What is STAC?")

    assert session.post.call_args.kwargs["json"] == {"query": "What is STAC?"}
    assert controller.messages[-1].text == APOLOGY_MESSAGE


def test_answer_with_numeric_source_is_kept(session, answer_client, archive):
    session.post.return_value = make_response(
        {
            "openai_answer": "STAC is a spec.",
            "openai_sources": [{"source": 12, "content_excerpt": "x"}],
        }
    )
    controller = ConversationController(answer_client, archive)

    reply = controller.send("What is STAC?")

    assert reply is not None
    assert [m.role for m in controller.messages] == ["user", "bot"]
    [saved] = archive.load_all()
    assert saved.messages[1].sources.openai[0].source == 12


def test_deleting_active_conversation_resets_even_if_write_fails(client):
    archive = MagicMock()
    archive.delete.side_effect = StorageError("disk full")
    controller = ConversationController(client, archive)
    controller.send("hello")
    active = controller.conversation_id

    controller.delete_chat(active)

    assert controller.messages == []
    assert controller.conversation_id != active
