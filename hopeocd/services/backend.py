# row contract over the hosted store
# every collection is a flat list of rows owned by one user, addressed by a string id

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """a backend call failed (network, server, or driver error)"""


@dataclass(frozen=True)
class CollectionSpec:
    """one per-user collection: table name, sort key, export key"""
    kind: str
    table: str
    order_by: str
    export_key: str
    label: str
    updatable: frozenset = frozenset()


MOOD = "mood"
THOUGHTS = "thoughts"
ERP = "erp"
MEDITATION = "meditation"
SLEEP = "sleep"
CRISIS = "crisis"
EDUCATION = "education"
AI = "ai"

COLLECTIONS: dict[str, CollectionSpec] = {
    MOOD: CollectionSpec(MOOD, "mood_entries", "created_at", "moodEntries", "mood entry"),
    THOUGHTS: CollectionSpec(THOUGHTS, "thought_records", "created_at", "thoughtRecords", "thought record"),
    ERP: CollectionSpec(
        ERP, "erp_sessions", "created_at", "erpSessions", "ERP session",
        updatable=frozenset({"completed", "anxiety_after", "duration", "notes"}),
    ),
    MEDITATION: CollectionSpec(MEDITATION, "meditation_sessions", "created_at", "meditationSessions", "meditation session"),
    SLEEP: CollectionSpec(SLEEP, "sleep_sessions", "created_at", "sleepSessions", "sleep session"),
    CRISIS: CollectionSpec(CRISIS, "crisis_logs", "created_at", "crisisLogs", "crisis log"),
    EDUCATION: CollectionSpec(EDUCATION, "education_progress", "updated_at", "educationProgress", "education progress"),
    AI: CollectionSpec(
        AI, "ai_sessions", "created_at", "aiSessions", "AI session",
        updatable=frozenset({"messages", "session_summary", "duration", "mood_before", "mood_after"}),
    ),
}

PREFERENCES_TABLE = "user_preferences"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clean(doc: Optional[dict]) -> Optional[dict]:
    """strip the driver's _id so rows are plain json"""
    if doc is None:
        return None
    row = dict(doc)
    row.pop("_id", None)
    return row


class BackendTable:
    """select / insert / update / delete for one collection, always scoped to a user"""

    def __init__(self, collection, name: str = ""):
        self.collection = collection
        self.name = name

    async def select_for_user(self, user_id: str, order_by: str = "created_at") -> list[dict]:
        """select * where user_id = <id> order by <order_by> desc"""
        try:
            cursor = self.collection.find({"user_id": user_id}).sort(order_by, -1)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise BackendError(f"select from {self.name} failed: {e}") from e
        return [_clean(d) for d in docs]

    async def select_single(self, user_id: str) -> Optional[dict]:
        try:
            doc = await self.collection.find_one({"user_id": user_id})
        except PyMongoError as e:
            raise BackendError(f"select from {self.name} failed: {e}") from e
        return _clean(doc)

    async def insert(self, user_id: str, fields: dict) -> dict:
        """insert returning row. id and created_at are assigned here, not by the caller"""
        now = utc_now()
        row = {
            **fields,
            "id": uuid.uuid4().hex,
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        }
        try:
            await self.collection.insert_one(dict(row))
        except PyMongoError as e:
            raise BackendError(f"insert into {self.name} failed: {e}") from e
        return row

    async def insert_if_absent(self, user_id: str, fields: dict, row_id: str) -> Optional[dict]:
        """insert under a caller-chosen id unless a row with that id exists.
        returns the new row, or None when it was already there"""
        now = utc_now()
        row = {
            **fields,
            "id": row_id,
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self.collection.update_one(
                {"id": row_id},
                {"$setOnInsert": row},
                upsert=True,
            )
        except DuplicateKeyError:
            # a concurrent upsert for the same id won
            return None
        except PyMongoError as e:
            raise BackendError(f"insert into {self.name} failed: {e}") from e
        if result.upserted_id is None:
            return None
        return row

    async def update(self, row_id: str, user_id: str, patch: dict) -> Optional[dict]:
        """update ... where id = <id> and user_id = <id> returning row"""
        changes = {**patch, "updated_at": utc_now()}
        try:
            doc = await self.collection.find_one_and_update(
                {"id": row_id, "user_id": user_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise BackendError(f"update of {self.name} failed: {e}") from e
        return _clean(doc)

    async def delete(self, row_id: str, user_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"id": row_id, "user_id": user_id})
        except PyMongoError as e:
            raise BackendError(f"delete from {self.name} failed: {e}") from e
        return result.deleted_count > 0

    async def upsert_single(self, user_id: str, fields: dict) -> dict:
        """create or merge the user's single row (preferences)"""
        now = utc_now()
        try:
            await self.collection.update_one(
                {"user_id": user_id},
                {
                    "$set": {**fields, "updated_at": now},
                    "$setOnInsert": {"id": uuid.uuid4().hex, "user_id": user_id, "created_at": now},
                },
                upsert=True,
            )
            doc = await self.collection.find_one({"user_id": user_id})
        except PyMongoError as e:
            raise BackendError(f"upsert into {self.name} failed: {e}") from e
        return _clean(doc)


def table_for(db, kind: str) -> BackendTable:
    spec = COLLECTIONS[kind]
    return BackendTable(getattr(db, spec.table), spec.table)


def preferences_table(db) -> BackendTable:
    return BackendTable(getattr(db, PREFERENCES_TABLE), PREFERENCES_TABLE)
