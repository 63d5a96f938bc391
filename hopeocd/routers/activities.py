# activities router: meditation, sleep, crisis-tool and education logs
# append-only: list and create, plus idempotent "mark complete" for education content

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from hopeocd.dependencies import get_store
from hopeocd.models.activity import (
    CrisisLogCreate,
    CrisisLogResponse,
    EducationProgressCreate,
    EducationProgressResponse,
    MeditationSessionCreate,
    MeditationSessionResponse,
    SleepSessionCreate,
    SleepSessionResponse,
)
from hopeocd.models.sync import QueuedWriteResponse
from hopeocd.services.backend import CRISIS, EDUCATION, MEDITATION, SLEEP
from hopeocd.services.connectivity import Connectivity, get_connectivity
from hopeocd.services.content import find_education_content
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.offline_queue import OfflineQueue, get_offline_queue
from hopeocd.services.sync_service import write_or_enqueue

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/activities", tags=["activities"])

QUEUED = {202: {"model": QueuedWriteResponse}}


# meditation

@router.get("/meditation", response_model=list[MeditationSessionResponse])
async def list_meditation_sessions(store: EntityStore = Depends(get_store)):
    return [MeditationSessionResponse(**row) for row in store.collections[MEDITATION]]


@router.post("/meditation", response_model=MeditationSessionResponse, status_code=status.HTTP_201_CREATED, responses=QUEUED)
async def log_meditation_session(
    body: MeditationSessionCreate,
    store: EntityStore = Depends(get_store),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    result = await write_or_enqueue(MEDITATION, body.model_dump(), store, queue, connectivity)
    if not isinstance(result, dict):
        return result
    return MeditationSessionResponse(**result)


# sleep

@router.get("/sleep", response_model=list[SleepSessionResponse])
async def list_sleep_sessions(store: EntityStore = Depends(get_store)):
    return [SleepSessionResponse(**row) for row in store.collections[SLEEP]]


@router.post("/sleep", response_model=SleepSessionResponse, status_code=status.HTTP_201_CREATED, responses=QUEUED)
async def log_sleep_session(
    body: SleepSessionCreate,
    store: EntityStore = Depends(get_store),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    result = await write_or_enqueue(SLEEP, body.model_dump(), store, queue, connectivity)
    if not isinstance(result, dict):
        return result
    return SleepSessionResponse(**result)


# crisis tools

@router.get("/crisis", response_model=list[CrisisLogResponse])
async def list_crisis_logs(store: EntityStore = Depends(get_store)):
    return [CrisisLogResponse(**row) for row in store.collections[CRISIS]]


@router.post("/crisis", response_model=CrisisLogResponse, status_code=status.HTTP_201_CREATED, responses=QUEUED)
async def log_crisis_tool(
    body: CrisisLogCreate,
    store: EntityStore = Depends(get_store),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    result = await write_or_enqueue(CRISIS, body.model_dump(), store, queue, connectivity)
    if not isinstance(result, dict):
        return result
    return CrisisLogResponse(**result)


# education

@router.get("/education", response_model=list[EducationProgressResponse])
async def list_education_progress(store: EntityStore = Depends(get_store)):
    return [EducationProgressResponse(**row) for row in store.collections[EDUCATION]]


@router.post("/education", response_model=EducationProgressResponse, status_code=status.HTTP_201_CREATED, responses=QUEUED)
async def log_education_progress(
    body: EducationProgressCreate,
    store: EntityStore = Depends(get_store),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    result = await write_or_enqueue(EDUCATION, body.model_dump(), store, queue, connectivity)
    if not isinstance(result, dict):
        return result
    return EducationProgressResponse(**result)


@router.post("/education/{content_id}/complete", response_model=EducationProgressResponse)
async def complete_education_content(content_id: str, store: EntityStore = Depends(get_store)):
    """record a library item as finished. repeating it returns the existing row"""
    if find_education_content(content_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Content not found",
        )

    row = await store.mark_education_complete(content_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not save education progress",
        )
    return EducationProgressResponse(**row)
