# glue between writes, the offline queue and the entity store

import logging
from typing import Optional

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from hopeocd.models.sync import QueuedWriteResponse
from hopeocd.services.backend import COLLECTIONS
from hopeocd.services.connectivity import Connectivity
from hopeocd.services.entity_store import EntityStore, StoreRegistry
from hopeocd.services.offline_queue import OfflineQueue, SyncResult

logger = logging.getLogger(__name__)


async def write_or_enqueue(
    kind: str,
    payload: dict,
    store: EntityStore,
    queue: OfflineQueue,
    connectivity: Connectivity,
):
    """insert through the store when online, otherwise queue the write and answer 202"""
    if not connectivity.online:
        queue_id = queue.enqueue(store.user_id, kind, payload)
        body = QueuedWriteResponse(queueId=queue_id, type=kind)
        return JSONResponse(status_code=status.HTTP_202_ACCEPTED, content=body.model_dump(by_alias=True))

    row = await store.add(kind, payload)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Could not save {COLLECTIONS[kind].label}",
        )
    return row


async def flush_offline_queue(queue: OfflineQueue, registry: StoreRegistry, db, user_id: Optional[str] = None) -> dict[str, SyncResult]:
    """replay queued writes for one identity, or for every identity in the queue"""
    identities = [user_id] if user_id else queue.identities()
    results = {}
    for uid in identities:
        if not queue.pending(uid):
            continue
        store = await registry.get(uid, db)
        results[uid] = await queue.sync(uid, store.replay)
    return results


def flush_on_reconnect(queue: OfflineQueue, registry: StoreRegistry, db):
    """connectivity listener that drains the whole queue after an offline spell"""

    async def listener():
        if len(queue) == 0:
            return
        await flush_offline_queue(queue, registry, db)

    return listener
