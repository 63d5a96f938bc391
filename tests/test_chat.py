# tests for chat sessions with the scripted companion

import asyncio
from datetime import datetime

import pytest

from hopeocd.services.backend import AI
from hopeocd.services.chat_service import ChatService, greeting_for, reply_emotion
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.responder import TECHNICAL_DIFFICULTY_RESPONSE, Reply
from tests.conftest import USER_ID


class TestGreeting:
    @pytest.mark.parametrize("hour,greeting", [(8, "Good morning"), (13, "Good afternoon"), (20, "Good evening")])
    def test_time_of_day(self, hour, greeting):
        assert greeting_for(datetime(2025, 6, 12, hour)) == greeting

    def test_reply_emotion(self):
        assert reply_emotion("I'm in crisis", Reply("x")) == "concerned"
        assert reply_emotion("anything", Reply("x", severity="crisis")) == "concerned"
        assert reply_emotion("doing better", Reply("x")) == "celebratory"
        assert reply_emotion("hello", Reply("x")) == "empathetic"


class TestChatSessions:
    async def test_starters_are_public(self, client):
        resp = await client.get("/chat/starters")
        assert resp.status_code == 200
        assert len(resp.json()) == 6

    async def test_list_sessions(self, user_client):
        resp = await user_client.get("/chat/sessions")
        assert resp.status_code == 200
        assert [s["id"] for s in resp.json()] == ["chat-0001"]

    async def test_start_session(self, user_client, mock_db):
        resp = await user_client.post("/chat/sessions", json={"sessionType": "chat"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["sessionType"] == "chat"
        assert data["sessionSummary"] == "Initial warm greeting and rapport building"
        assert len(data["messages"]) == 1
        welcome = data["messages"][0]
        assert welcome["role"] == "ai"
        assert "Dr. Sage" in welcome["content"]
        assert len(mock_db.ai_sessions.inserted) == 1

    async def test_get_unknown_session(self, user_client):
        resp = await user_client.get("/chat/sessions/nope")
        assert resp.status_code == 404


class TestSendMessage:
    async def test_reply_appended_and_saved(self, user_client, mock_db):
        resp = await user_client.post(
            "/chat/sessions/chat-0001/messages",
            json={"content": "I keep checking the stove, did I turn it off?"},
        )
        assert resp.status_code == 200
        messages = resp.json()["messages"]
        assert [m["role"] for m in messages] == ["ai", "user", "ai"]
        assert messages[2]["category"] == "erp"
        assert "checking" in messages[2]["content"].lower()
        assert resp.json()["sessionSummary"].startswith("Therapeutic conversation - 3 exchanges")

        stored = next(d for d in mock_db.ai_sessions._data if d["id"] == "chat-0001")
        assert len(stored["messages"]) == 3

    async def test_crisis_reply(self, user_client):
        resp = await user_client.post(
            "/chat/sessions/chat-0001/messages",
            json={"content": "I don't see the point, I want to end it"},
        )
        reply = resp.json()["messages"][-1]
        assert reply["severity"] == "crisis"
        assert reply["emotion"] == "concerned"
        assert "988" in reply["content"]

    async def test_mood_tracked_in_summary(self, user_client):
        resp = await user_client.post(
            "/chat/sessions/chat-0001/messages",
            json={"content": "Today was awful"},
        )
        assert resp.json()["sessionSummary"].endswith("Mood: 2/10")

    async def test_blank_message(self, user_client):
        resp = await user_client.post("/chat/sessions/chat-0001/messages", json={"content": "   "})
        assert resp.status_code == 422

    async def test_unknown_session(self, user_client):
        resp = await user_client.post("/chat/sessions/nope/messages", json={"content": "hello"})
        assert resp.status_code == 404

    async def test_responder_failure_gives_fallback_message(self, user_client, chat_service, monkeypatch):
        responder = chat_service.responder_for("chat-0001")

        async def broken(message):
            raise RuntimeError("responder exploded")

        monkeypatch.setattr(responder, "respond", broken)
        resp = await user_client.post("/chat/sessions/chat-0001/messages", json={"content": "hello"})
        assert resp.status_code == 200
        reply = resp.json()["messages"][-1]
        assert reply["content"] == TECHNICAL_DIFFICULTY_RESPONSE
        assert reply["emotion"] == "concerned"

    async def test_save_failure_is_502(self, user_client, mock_db):
        await user_client.get("/chat/sessions")
        mock_db.ai_sessions.fail = True
        resp = await user_client.post("/chat/sessions/chat-0001/messages", json={"content": "hello"})
        assert resp.status_code == 502


class TestConcurrentSends:
    async def test_overlapping_sends_keep_both_exchanges(self, chat_service, mock_db):
        store = EntityStore(mock_db)
        await store.switch_identity(USER_ID)
        mock_db.ai_sessions.latency = 0.01

        await asyncio.gather(
            chat_service.send_message(store, "chat-0001", "first message"),
            chat_service.send_message(store, "chat-0001", "second message"),
        )

        stored = next(d for d in mock_db.ai_sessions._data if d["id"] == "chat-0001")
        assert len(stored["messages"]) == 5
        assert [m["content"] for m in stored["messages"] if m["role"] == "user"] == [
            "first message",
            "second message",
        ]
        assert len(store.find(AI, "chat-0001")["messages"]) == 5


class TestSessionCache:
    def test_least_recently_used_session_is_evicted(self):
        service = ChatService(max_sessions=2)
        service.responder_for("a")
        service.responder_for("b")
        service.responder_for("a")
        service.responder_for("c")
        assert "a" in service
        assert "c" in service
        assert "b" not in service

    def test_responder_kept_while_cached(self):
        service = ChatService(max_sessions=2)
        assert service.responder_for("a") is service.responder_for("a")

    async def test_busy_session_is_not_evicted(self):
        service = ChatService(max_sessions=1)
        state = service._state("a")
        async with state.lock:
            service.responder_for("b")
            assert "a" in service
