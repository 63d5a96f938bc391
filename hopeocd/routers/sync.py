# sync router: offline queue status, connectivity signals, manual flush

import logging
from fastapi import APIRouter, Depends

from hopeocd.dependencies import get_current_user
from hopeocd.models.sync import ConnectivitySignal, SyncResultResponse, SyncStatusResponse
from hopeocd.services.connectivity import Connectivity, get_connectivity
from hopeocd.services.db import Database, get_db
from hopeocd.services.entity_store import StoreRegistry, get_registry
from hopeocd.services.offline_queue import OfflineQueue, get_offline_queue
from hopeocd.services.sync_service import flush_offline_queue

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/sync", tags=["sync"])


def _status(user_id: str, queue: OfflineQueue, connectivity: Connectivity) -> SyncStatusResponse:
    return SyncStatusResponse(
        online=connectivity.online,
        pending=len(queue.pending(user_id)),
        pendingTotal=len(queue),
    )


@router.get("", response_model=SyncStatusResponse)
async def sync_status(
    current_user: dict = Depends(get_current_user),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    return _status(current_user["id"], queue, connectivity)


@router.post("/connectivity", response_model=SyncStatusResponse)
async def connectivity_signal(
    body: ConnectivitySignal,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
    registry: StoreRegistry = Depends(get_registry),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    """platform online/offline signal. coming back online replays the caller's queued writes"""
    was_online = connectivity.online
    await connectivity.set_online(body.online)
    if body.online and not was_online:
        await flush_offline_queue(queue, registry, db, current_user["id"])
    return _status(current_user["id"], queue, connectivity)


@router.post("/flush", response_model=SyncResultResponse)
async def flush(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
    registry: StoreRegistry = Depends(get_registry),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    """replay this user's queued writes now"""
    if not connectivity.online:
        return SyncResultResponse(remaining=len(queue.pending(current_user["id"])))

    results = await flush_offline_queue(queue, registry, db, current_user["id"])
    result = results.get(current_user["id"])
    if result is None:
        return SyncResultResponse(remaining=0)
    return SyncResultResponse(
        synced=result.synced,
        failed=result.failed,
        remaining=len(queue.pending(current_user["id"])),
    )
