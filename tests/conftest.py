# shared fixtures for backend api tests
# provides mock db, test identity, fresh singletons, and httpx test client

import asyncio

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from httpx import AsyncClient, ASGITransport

from hopeocd.config import settings
from hopeocd.main import app
from hopeocd.dependencies import get_current_user
from hopeocd.routers.notifications import get_local_storage
from hopeocd.services.chat_service import ChatService, get_chat_service
from hopeocd.services.connectivity import Connectivity, get_connectivity
from hopeocd.services.db import get_db
from hopeocd.services.entity_store import StoreRegistry, get_registry
from hopeocd.services.local_storage import LocalStorage
from hopeocd.services.offline_queue import OfflineQueue, get_offline_queue


# test ids
USER_ID = "user-alex-0001"
OTHER_USER_ID = "user-jordan-0002"
USER_EMAIL = "alex.rivera@email.com"


# sample rows (as they'd appear in the backend)

SAMPLE_MOOD = {
    "id": "mood-0001",
    "user_id": USER_ID,
    "mood": 4,
    "anxiety": 7,
    "notes": "Rough morning, lots of checking before leaving.",
    "triggers": ["Checking behaviors"],
    "created_at": "2025-06-10T08:00:00+00:00",
    "updated_at": "2025-06-10T08:00:00+00:00",
}

SAMPLE_MOOD_2 = {
    "id": "mood-0002",
    "user_id": USER_ID,
    "mood": 6,
    "anxiety": 5,
    "notes": "Better after a walk.",
    "triggers": [],
    "created_at": "2025-06-12T08:00:00+00:00",
    "updated_at": "2025-06-12T08:00:00+00:00",
}

OTHER_USER_MOOD = {
    "id": "mood-9999",
    "user_id": OTHER_USER_ID,
    "mood": 2,
    "anxiety": 9,
    "notes": "Not Alex's entry.",
    "triggers": [],
    "created_at": "2025-06-13T08:00:00+00:00",
    "updated_at": "2025-06-13T08:00:00+00:00",
}

SAMPLE_THOUGHT = {
    "id": "thought-0001",
    "user_id": USER_ID,
    "situation": "Left the house for work",
    "automatic_thought": "I left the stove on and the flat will burn",
    "emotion": "Fear",
    "emotion_intensity": 8,
    "evidence_for": "I can't remember turning it off",
    "evidence_against": "I didn't cook this morning",
    "balanced_thought": "Doubt is not evidence",
    "new_emotion": "Uneasy",
    "created_at": "2025-06-11T09:00:00+00:00",
    "updated_at": "2025-06-11T09:00:00+00:00",
}

SAMPLE_ERP = {
    "id": "erp-0001",
    "user_id": USER_ID,
    "exposure": "Touching doorknobs without washing hands",
    "anxiety_before": 8,
    "anxiety_after": 4,
    "duration": 20,
    "completed": False,
    "notes": "",
    "created_at": "2025-06-11T18:00:00+00:00",
    "updated_at": "2025-06-11T18:00:00+00:00",
}

SAMPLE_CHAT = {
    "id": "chat-0001",
    "user_id": USER_ID,
    "session_type": "chat",
    "messages": [
        {
            "id": "m1",
            "role": "ai",
            "content": "Good morning! I'm Dr. Sage.",
            "timestamp": "2025-06-12T09:00:00+00:00",
            "category": "general",
            "emotion": "supportive",
        }
    ],
    "session_summary": "Initial warm greeting and rapport building",
    "duration": 0,
    "created_at": "2025-06-12T09:00:00+00:00",
    "updated_at": "2025-06-12T09:00:00+00:00",
}


# async cursor mock

class AsyncCursorMock:
    """mock for motor's async cursor: supports async for and chained methods"""

    def __init__(self, data=None):
        self._data = data or []
        self._index = 0

    def sort(self, key, direction=1):
        self._data = sorted(self._data, key=lambda d: d.get(key) or "", reverse=direction == -1)
        return self

    def skip(self, n):
        self._data = self._data[n:]
        return self

    def limit(self, n):
        self._data = self._data[:n]
        return self

    def __aiter__(self):
        self._index = 0
        return self

    async def __anext__(self):
        if self._index >= len(self._data):
            raise StopAsyncIteration
        item = self._data[self._index]
        self._index += 1
        return item

    async def to_list(self, length=None):
        if length is not None:
            return self._data[:length]
        return self._data


class MockCollection:
    """mock for a motor collection with async methods.
    set `fail = True` to make every call raise like an unreachable server.
    set `latency` to make async calls yield to the loop like a network round-trip."""

    def __init__(self, data=None):
        self._data = data or []
        self.inserted = []
        self.fail = False
        self.latency = 0.0
        self.calls = 0

    async def _round_trip(self):
        if self.latency:
            await asyncio.sleep(self.latency)

    def _check(self):
        self.calls += 1
        if self.fail:
            raise ServerSelectionTimeoutError("backend unreachable")

    def find(self, query=None, projection=None):
        self._check()
        results = self._data
        if query:
            results = [d for d in results if self._matches(d, query)]
        return AsyncCursorMock([dict(d) for d in results])

    async def find_one(self, query=None, projection=None):
        self._check()
        await self._round_trip()
        if not query:
            return dict(self._data[0]) if self._data else None
        for doc in self._data:
            if self._matches(doc, query):
                return dict(doc)
        return None

    async def insert_one(self, doc):
        self._check()
        await self._round_trip()
        oid = doc.get("_id", ObjectId())
        doc["_id"] = oid
        self._data.append(doc)
        self.inserted.append(doc)
        result = MagicMock()
        result.inserted_id = oid
        return result

    async def find_one_and_update(self, query, update, return_document=None):
        self._check()
        await self._round_trip()
        for doc in self._data:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                return dict(doc)
        return None

    async def update_one(self, query, update, upsert=False):
        self._check()
        await self._round_trip()
        result = MagicMock()
        result.modified_count = 0
        result.upserted_id = None
        for doc in self._data:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                result.modified_count = 1
                return result
        if upsert:
            doc = {**query, **update.get("$setOnInsert", {}), **update.get("$set", {}), "_id": ObjectId()}
            self._data.append(doc)
            self.inserted.append(doc)
            result.upserted_id = doc["_id"]
        return result

    async def delete_one(self, query):
        self._check()
        await self._round_trip()
        result = MagicMock()
        result.deleted_count = 0
        for i, doc in enumerate(self._data):
            if self._matches(doc, query):
                del self._data[i]
                result.deleted_count = 1
                break
        return result

    def _matches(self, doc, query):
        for key, value in query.items():
            if isinstance(value, dict) and "$in" in value:
                if doc.get(key) not in value["$in"]:
                    return False
            elif doc.get(key) != value:
                return False
        return True


class MockDatabase:
    """mock database that mimics the Database class"""

    def __init__(self):
        self.mood_entries = MockCollection([
            dict(SAMPLE_MOOD),
            dict(SAMPLE_MOOD_2),
            dict(OTHER_USER_MOOD),
        ])
        self.thought_records = MockCollection([dict(SAMPLE_THOUGHT)])
        self.erp_sessions = MockCollection([dict(SAMPLE_ERP)])
        self.meditation_sessions = MockCollection([])
        self.sleep_sessions = MockCollection([])
        self.crisis_logs = MockCollection([])
        self.education_progress = MockCollection([])
        self.ai_sessions = MockCollection([dict(SAMPLE_CHAT, messages=list(SAMPLE_CHAT["messages"]))])
        self.user_preferences = MockCollection([])
        self.reachable = True

    @property
    def collections(self):
        return [v for v in vars(self).values() if isinstance(v, MockCollection)]

    def total_calls(self) -> int:
        return sum(c.calls for c in self.collections)

    async def connect(self):
        pass

    async def ping(self):
        if not self.reachable:
            raise ServerSelectionTimeoutError("backend unreachable")

    async def close(self):
        pass


@pytest.fixture(autouse=True)
def no_thinking_delay(monkeypatch):
    """chat replies come back immediately in tests"""
    monkeypatch.setattr(settings, "CHAT_THINKING_MIN_SECONDS", 0.0)
    monkeypatch.setattr(settings, "CHAT_THINKING_MAX_SECONDS", 0.0)


@pytest.fixture
def mock_db():
    """create a fresh mock database for each test"""
    return MockDatabase()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local")


@pytest.fixture
def queue(storage):
    return OfflineQueue(storage, "pendingSync")


@pytest.fixture
def registry():
    return StoreRegistry()


@pytest.fixture
def connectivity():
    return Connectivity()


@pytest.fixture
def chat_service():
    return ChatService()


def _user_dict():
    """return the identity as get_current_user would return it"""
    return {"id": USER_ID, "email": USER_EMAIL}


def _override_common(mock_db, registry, queue, connectivity, storage, chat_service):
    async def override_get_db():
        return mock_db

    async def override_registry():
        return registry

    async def override_queue():
        return queue

    async def override_connectivity():
        return connectivity

    async def override_storage():
        return storage

    async def override_chat():
        return chat_service

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registry] = override_registry
    app.dependency_overrides[get_offline_queue] = override_queue
    app.dependency_overrides[get_connectivity] = override_connectivity
    app.dependency_overrides[get_local_storage] = override_storage
    app.dependency_overrides[get_chat_service] = override_chat


@pytest_asyncio.fixture
async def client(mock_db, registry, queue, connectivity, storage, chat_service):
    """httpx async test client with mocked dependencies, no identity"""
    _override_common(mock_db, registry, queue, connectivity, storage, chat_service)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_client(mock_db, registry, queue, connectivity, storage, chat_service):
    """client authenticated as the test user"""
    _override_common(mock_db, registry, queue, connectivity, storage, chat_service)

    async def override_get_current_user():
        return _user_dict()

    app.dependency_overrides[get_current_user] = override_get_current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def boundary_client(mock_db, registry, queue, connectivity, storage, chat_service):
    """authenticated client that returns 500 responses instead of raising"""
    _override_common(mock_db, registry, queue, connectivity, storage, chat_service)

    async def override_get_current_user():
        return _user_dict()

    app.dependency_overrides[get_current_user] = override_get_current_user

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
