# moods router: list, log and delete mood/anxiety check-ins

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from hopeocd.dependencies import get_store
from hopeocd.models.sync import QueuedWriteResponse
from hopeocd.models.tracking import MoodEntryCreate, MoodEntryResponse
from hopeocd.services.backend import MOOD
from hopeocd.services.connectivity import Connectivity, get_connectivity
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.offline_queue import OfflineQueue, get_offline_queue
from hopeocd.services.sync_service import write_or_enqueue

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/moods", tags=["moods"])


@router.get("", response_model=list[MoodEntryResponse])
async def list_mood_entries(store: EntityStore = Depends(get_store)):
    """mood entries, newest first"""
    return [MoodEntryResponse(**row) for row in store.collections[MOOD]]


@router.post(
    "",
    response_model=MoodEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={202: {"model": QueuedWriteResponse}},
)
async def create_mood_entry(
    body: MoodEntryCreate,
    store: EntityStore = Depends(get_store),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    """log a mood entry. queued on this device while the backend is offline"""
    result = await write_or_enqueue(MOOD, body.model_dump(), store, queue, connectivity)
    if not isinstance(result, dict):
        return result
    return MoodEntryResponse(**result)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mood_entry(entry_id: str, store: EntityStore = Depends(get_store)):
    if not await store.delete_mood_entry(entry_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Mood entry not found",
        )
