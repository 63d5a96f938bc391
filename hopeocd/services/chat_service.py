# chat sessions: greeting, message exchange, transcript persistence
# replies come from the canned responder; the transcript lives in the ai_sessions collection

import asyncio
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from hopeocd.config import settings
from hopeocd.services.backend import AI
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.responder import TECHNICAL_DIFFICULTY_RESPONSE, Reply, Responder

logger = logging.getLogger(__name__)


CONVERSATION_STARTERS = [
    {"text": "I'm having a really hard time with intrusive thoughts today", "category": "cbt", "emotion": "concerned"},
    {"text": "Can you help me understand why I keep checking things?", "category": "general", "emotion": "curious"},
    {"text": "I'm feeling overwhelmed and don't know where to start", "category": "crisis", "emotion": "supportive"},
    {"text": "I think I made some progress this week", "category": "general", "emotion": "celebratory"},
    {"text": "My family doesn't understand what I'm going through", "category": "general", "emotion": "empathetic"},
    {"text": "I'm ready to try some exposure exercises", "category": "erp", "emotion": "encouraging"},
]

WELCOME_TEMPLATE = """{greeting}! I'm Dr. Sage, and I'm really glad you're here today.

This is your space - confidential and judgment-free. I'm here to listen, understand, and walk alongside you in whatever you're experiencing.

I focus on OCD, anxiety, and the thoughts and feelings that can feel so overwhelming sometimes. I draw on approaches like CBT, ERP and mindfulness, but more than anything I want to meet you exactly where you are.

How are you feeling right now, in this moment? And what brought you here today?

Take your time. There's no rush. ☕"""


def greeting_for(now: datetime) -> str:
    if now.hour < 12:
        return "Good morning"
    if now.hour < 17:
        return "Good afternoon"
    return "Good evening"


def make_message(role: str, content: str, now: datetime, **tags) -> dict:
    message = {
        "id": uuid.uuid4().hex,
        "role": role,
        "content": content,
        "timestamp": now.isoformat(),
    }
    message.update({k: v for k, v in tags.items() if v is not None})
    return message


def reply_emotion(content: str, reply: Reply) -> str:
    text = content.lower()
    if "crisis" in text or reply.severity == "crisis":
        return "concerned"
    if "better" in text:
        return "celebratory"
    return "empathetic"


def _elapsed_minutes(created_at: str, now: datetime) -> int:
    try:
        started = datetime.fromisoformat(created_at)
    except (TypeError, ValueError):
        return 0
    if started.tzinfo is None:
        started = started.replace(tzinfo=timezone.utc)
    return max(0, int((now - started).total_seconds() // 60))


@dataclass
class _SessionState:
    responder: Responder
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class ChatService:
    """owns one responder (and its user context) per chat session.
    only the most recently used `max_sessions` sessions are kept; an evicted
    session starts over with a fresh context."""

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions or settings.MAX_CHAT_SESSIONS
        self._sessions: OrderedDict[str, _SessionState] = OrderedDict()

    def _state(self, session_id: str) -> _SessionState:
        state = self._sessions.get(session_id)
        if state is None:
            state = _SessionState(Responder(
                min_delay=settings.CHAT_THINKING_MIN_SECONDS,
                max_delay=settings.CHAT_THINKING_MAX_SECONDS,
            ))
            self._sessions[session_id] = state
        self._sessions.move_to_end(session_id)
        self._evict()
        return state

    def _evict(self):
        while len(self._sessions) > self.max_sessions:
            session_id, state = next(iter(self._sessions.items()))
            if state.lock.locked():
                break
            del self._sessions[session_id]

    def responder_for(self, session_id: str) -> Responder:
        return self._state(session_id).responder

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    async def start_session(self, store: EntityStore, mode: str = "chat", now: Optional[datetime] = None) -> Optional[dict]:
        now = now or datetime.now()
        welcome = make_message(
            "ai",
            WELCOME_TEMPLATE.format(greeting=greeting_for(now)),
            now,
            category="general",
            emotion="supportive",
        )
        return await store.add_chat_session({
            "session_type": mode,
            "messages": [welcome],
            "session_summary": "Initial warm greeting and rapport building",
            "duration": 0,
        })

    async def send_message(
        self,
        store: EntityStore,
        session_id: str,
        content: str,
        category: Optional[str] = None,
    ) -> Optional[dict]:
        """append the user's message and the reply, then persist the transcript.
        returns the updated session, or None when the session is unknown or the save failed.
        sends to one session are handled one at a time, so overlapping sends each keep their exchange."""
        content = content.strip()
        if not content:
            raise ValueError("message is empty")

        if store.find(AI, session_id) is None:
            return None

        state = self._state(session_id)
        async with state.lock:
            now = datetime.now(timezone.utc)
            user_message = make_message("user", content, now, category=category)
            responder = state.responder

            try:
                reply = await responder.respond(content)
                ai_message = make_message(
                    "ai",
                    reply.content,
                    datetime.now(timezone.utc),
                    category=category or reply.category,
                    severity=reply.severity,
                    emotion=reply_emotion(content, reply),
                )
            except Exception as e:
                logger.error(f"Error generating AI response: {e}")
                ai_message = make_message(
                    "ai",
                    TECHNICAL_DIFFICULTY_RESPONSE,
                    datetime.now(timezone.utc),
                    emotion="concerned",
                )

            # re-read after the reply: the cached row reflects any send that finished meanwhile
            session = store.find(AI, session_id)
            if session is None:
                return None

            messages = [*session.get("messages", []), user_message, ai_message]
            return await store.update_chat_session(session_id, {
                "messages": messages,
                "duration": _elapsed_minutes(session.get("created_at"), now),
                "session_summary": (
                    f"Therapeutic conversation - {len(messages)} exchanges. "
                    f"Mood: {responder.context.current_mood}/10"
                ),
            })


chat_service = ChatService()


async def get_chat_service() -> ChatService:
    """dependency injection for the chat service"""
    return chat_service
