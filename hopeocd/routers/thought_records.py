# thought records router: CBT journaling entries

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from hopeocd.dependencies import get_store
from hopeocd.models.sync import QueuedWriteResponse
from hopeocd.models.tracking import ThoughtRecordCreate, ThoughtRecordResponse
from hopeocd.services.backend import THOUGHTS
from hopeocd.services.connectivity import Connectivity, get_connectivity
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.offline_queue import OfflineQueue, get_offline_queue
from hopeocd.services.sync_service import write_or_enqueue

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/thought-records", tags=["thought-records"])


@router.get("", response_model=list[ThoughtRecordResponse])
async def list_thought_records(store: EntityStore = Depends(get_store)):
    return [ThoughtRecordResponse(**row) for row in store.collections[THOUGHTS]]


@router.post(
    "",
    response_model=ThoughtRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={202: {"model": QueuedWriteResponse}},
)
async def create_thought_record(
    body: ThoughtRecordCreate,
    store: EntityStore = Depends(get_store),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    result = await write_or_enqueue(THOUGHTS, body.model_dump(), store, queue, connectivity)
    if not isinstance(result, dict):
        return result
    return ThoughtRecordResponse(**result)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_thought_record(record_id: str, store: EntityStore = Depends(get_store)):
    if not await store.delete_thought_record(record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Thought record not found",
        )
