# offline sync queue: writes attempted while the backend is unreachable
# persisted to local storage on every change, replayed in enqueue order once back online.
# an item leaves the queue only after its replay is acknowledged.

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from hopeocd.config import settings
from hopeocd.services.local_storage import LocalStorage, local_storage

logger = logging.getLogger(__name__)

Replay = Callable[[dict], Awaitable[bool]]


@dataclass
class SyncResult:
    synced: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    remaining: int = 0


class OfflineQueue:
    """fifo of pending writes: {id, type, payload, timestamp, user_id}"""

    def __init__(self, storage: LocalStorage, key: str = "pendingSync"):
        self.storage = storage
        self.key = key
        self._items: Optional[list[dict]] = None
        # one sync pass at a time; overlapping passes would replay the same items
        self._lock = asyncio.Lock()

    @property
    def items(self) -> list[dict]:
        if self._items is None:
            self._items = list(self.storage.get(self.key, []) or [])
        return self._items

    def _save(self, items: list[dict]):
        self._items = items
        self.storage.set(self.key, items)

    def __len__(self) -> int:
        return len(self.items)

    def enqueue(self, user_id: str, type: str, payload: dict) -> str:
        item = {
            "id": uuid.uuid4().hex,
            "type": type,
            "payload": payload,
            "timestamp": int(time.time() * 1000),
            "user_id": user_id,
        }
        self._save([*self.items, item])
        logger.info(f"Queued offline {type} write {item['id']}")
        return item["id"]

    def pending(self, user_id: Optional[str] = None) -> list[dict]:
        if user_id is None:
            return list(self.items)
        return [i for i in self.items if i.get("user_id") == user_id]

    def identities(self) -> list[str]:
        seen = []
        for item in self.items:
            uid = item.get("user_id")
            if uid and uid not in seen:
                seen.append(uid)
        return seen

    async def sync(self, user_id: Optional[str], replay: Replay) -> SyncResult:
        """replay this identity's items oldest first, dropping each one only once acknowledged"""
        if not user_id:
            return SyncResult(remaining=len(self.items))

        async with self._lock:
            return await self._sync_locked(user_id, replay)

    async def _sync_locked(self, user_id: str, replay: Replay) -> SyncResult:
        # read inside the lock: a pass that just finished may have drained these items
        batch = self.pending(user_id)
        if not batch:
            return SyncResult(remaining=len(self.items))

        result = SyncResult()
        for item in batch:
            try:
                delivered = await replay(item)
            except Exception as e:
                logger.warning(f"Sync failed for offline item {item['id']}: {e}")
                delivered = False

            if delivered:
                result.synced.append(item["id"])
                # persist after every ack so a crash mid-pass cannot resend delivered items
                self._save([i for i in self.items if i["id"] != item["id"]])
            else:
                result.failed.append(item["id"])

        result.remaining = len(self.items)
        logger.info(
            f"Offline sync for {user_id}: {len(result.synced)} synced, "
            f"{len(result.failed)} failed, {result.remaining} remaining"
        )
        return result


offline_queue = OfflineQueue(local_storage, settings.OFFLINE_QUEUE_KEY)


async def get_offline_queue() -> OfflineQueue:
    """dependency injection for the offline queue"""
    return offline_queue
