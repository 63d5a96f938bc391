# entity store: in-memory cache of every per-user collection
# loaded wholesale on identity change, merged optimistically on writes

import asyncio
import logging
from collections import OrderedDict
from typing import Optional

from hopeocd.config import settings
from hopeocd.services.backend import (
    AI,
    COLLECTIONS,
    CRISIS,
    EDUCATION,
    ERP,
    MEDITATION,
    MOOD,
    SLEEP,
    THOUGHTS,
    BackendError,
    preferences_table,
    table_for,
)

logger = logging.getLogger(__name__)


class EntityStore:
    """cache of one identity's rows. every backend failure is logged and turned
    into a None/False sentinel; callers never see the exception."""

    def __init__(self, db, user_id: Optional[str] = None):
        self.db = db
        self.user_id = user_id
        self.collections: dict[str, list[dict]] = {kind: [] for kind in COLLECTIONS}
        self.preferences: Optional[dict] = None
        self.loading = False
        self.loaded = False

    def _clear(self):
        self.collections = {kind: [] for kind in COLLECTIONS}
        self.preferences = None
        self.loaded = False

    async def switch_identity(self, user_id: Optional[str]) -> bool:
        """drop everything cached for the previous identity, then reload"""
        self.user_id = user_id
        self._clear()
        if user_id is None:
            return False
        return await self.load_all()

    async def load_all(self) -> bool:
        """one parallel batch of selects. any failure aborts the batch and keeps the old cache"""
        if not self.user_id:
            return False

        kinds = list(COLLECTIONS)
        self.loading = True
        try:
            results = await asyncio.gather(
                *(
                    table_for(self.db, kind).select_for_user(self.user_id, COLLECTIONS[kind].order_by)
                    for kind in kinds
                ),
                preferences_table(self.db).select_single(self.user_id),
            )
        except BackendError as e:
            logger.error(f"Error loading data: {e}")
            return False
        finally:
            self.loading = False

        *rows, preferences = results
        self.collections = dict(zip(kinds, rows))
        self.preferences = preferences
        self.loaded = True
        return True

    # writes

    async def add(self, kind: str, fields: dict) -> Optional[dict]:
        if not self.user_id:
            return None

        spec = COLLECTIONS[kind]
        try:
            row = await table_for(self.db, kind).insert(self.user_id, fields)
        except BackendError as e:
            logger.error(f"Error adding {spec.label}: {e}")
            return None

        self.collections[kind] = [row, *self.collections[kind]]
        return row

    async def update(self, kind: str, row_id: str, patch: dict) -> Optional[dict]:
        if not self.user_id:
            return None

        spec = COLLECTIONS[kind]
        unknown = set(patch) - spec.updatable
        if unknown:
            raise ValueError(f"{spec.label} fields cannot be updated: {sorted(unknown)}")

        try:
            row = await table_for(self.db, kind).update(row_id, self.user_id, patch)
        except BackendError as e:
            logger.error(f"Error updating {spec.label}: {e}")
            return None
        if row is None:
            logger.error(f"Error updating {spec.label}: no row {row_id}")
            return None

        self.collections[kind] = [row if r["id"] == row_id else r for r in self.collections[kind]]
        return row

    async def delete(self, kind: str, row_id: str) -> bool:
        if not self.user_id:
            return False

        spec = COLLECTIONS[kind]
        try:
            deleted = await table_for(self.db, kind).delete(row_id, self.user_id)
        except BackendError as e:
            logger.error(f"Error deleting {spec.label}: {e}")
            return False
        if not deleted:
            return False

        self.collections[kind] = [r for r in self.collections[kind] if r["id"] != row_id]
        return True

    async def save_preferences(self, fields: dict) -> Optional[dict]:
        if not self.user_id:
            return None
        try:
            row = await preferences_table(self.db).upsert_single(self.user_id, fields)
        except BackendError as e:
            logger.error(f"Error saving preferences: {e}")
            return None
        self.preferences = row
        return row

    # typed wrappers

    async def add_mood_entry(self, entry: dict) -> Optional[dict]:
        return await self.add(MOOD, entry)

    async def add_thought_record(self, record: dict) -> Optional[dict]:
        return await self.add(THOUGHTS, record)

    async def add_erp_session(self, session: dict) -> Optional[dict]:
        return await self.add(ERP, session)

    async def add_meditation_session(self, session: dict) -> Optional[dict]:
        return await self.add(MEDITATION, session)

    async def add_sleep_session(self, session: dict) -> Optional[dict]:
        return await self.add(SLEEP, session)

    async def add_crisis_log(self, log: dict) -> Optional[dict]:
        return await self.add(CRISIS, log)

    async def add_education_progress(self, progress: dict) -> Optional[dict]:
        return await self.add(EDUCATION, progress)

    async def add_chat_session(self, session: dict) -> Optional[dict]:
        return await self.add(AI, session)

    async def update_chat_session(self, session_id: str, patch: dict) -> Optional[dict]:
        return await self.update(AI, session_id, patch)

    async def delete_mood_entry(self, row_id: str) -> bool:
        return await self.delete(MOOD, row_id)

    async def delete_thought_record(self, row_id: str) -> bool:
        return await self.delete(THOUGHTS, row_id)

    async def delete_erp_session(self, row_id: str) -> bool:
        return await self.delete(ERP, row_id)

    def find(self, kind: str, row_id: str) -> Optional[dict]:
        for row in self.collections[kind]:
            if row["id"] == row_id:
                return row
        return None

    async def complete_erp_session(self, session_id: str) -> Optional[dict]:
        """mark an exposure completed. repeating it never writes a second time"""
        cached = self.find(ERP, session_id)
        if cached is not None and cached.get("completed"):
            return cached
        return await self.update(ERP, session_id, {"completed": True})

    async def mark_education_complete(self, content_id: str, content_type: str = "educational") -> Optional[dict]:
        for row in self.collections[EDUCATION]:
            if row.get("content_id") == content_id and row.get("completed"):
                return row
        return await self.add_education_progress({
            "content_id": content_id,
            "content_type": content_type,
            "progress_percentage": 100,
            "completed": True,
        })

    # offline queue hook

    async def replay(self, item: dict) -> bool:
        """deliver one queued write. the queue item id becomes the row id and the insert
        is an upsert on it, so an item whose earlier delivery went through is acknowledged
        instead of duplicated."""
        kind = item.get("type")
        if kind not in COLLECTIONS:
            logger.warning(f"Dropping offline item {item.get('id')} with unknown type {kind!r}")
            return True
        if not self.user_id:
            return False

        logger.info(f"Syncing offline item {item['id']} ({kind})")
        try:
            row = await table_for(self.db, kind).insert_if_absent(
                self.user_id, item.get("payload") or {}, item["id"]
            )
        except BackendError as e:
            logger.warning(f"Sync failed for offline item {item['id']}: {e}")
            return False

        if row is not None:
            self.collections[kind] = [row, *self.collections[kind]]
        return True

    def snapshot(self) -> dict[str, list[dict]]:
        return {COLLECTIONS[kind].export_key: list(rows) for kind, rows in self.collections.items()}


class StoreRegistry:
    """one store per identity, loaded on first use. keeps the most recently
    used `max_stores` identities; an evicted identity reloads on its next request."""

    def __init__(self, max_stores: Optional[int] = None):
        self.max_stores = max_stores or settings.MAX_CACHED_IDENTITIES
        self._stores: OrderedDict[str, EntityStore] = OrderedDict()
        self._locks: dict[str, asyncio.Lock] = {}

    async def get(self, user_id: str, db) -> EntityStore:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        # concurrent first requests for one identity share a single load
        async with lock:
            store = self._stores.get(user_id)
            if store is None or store.db is not db:
                store = EntityStore(db)
                await store.switch_identity(user_id)
                self._stores[user_id] = store
            self._stores.move_to_end(user_id)
            self._evict()
        return store

    def _evict(self):
        while len(self._stores) > self.max_stores:
            user_id = next(iter(self._stores))
            lock = self._locks.get(user_id)
            if lock is not None and lock.locked():
                break
            self.drop(user_id)

    async def refresh(self, user_id: str, db) -> bool:
        store = self._stores.get(user_id)
        if store is None or store.db is not db:
            # first use loads anyway
            store = await self.get(user_id, db)
            return store.loaded
        return await store.load_all()

    def drop(self, user_id: str):
        self._stores.pop(user_id, None)
        self._locks.pop(user_id, None)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._stores

    def __len__(self) -> int:
        return len(self._stores)


registry = StoreRegistry()


async def get_registry() -> StoreRegistry:
    """dependency injection for the store registry"""
    return registry
