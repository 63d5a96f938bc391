# exposures router: ERP session tracking
# completing a session patches the existing row, never logs a new one

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from hopeocd.dependencies import get_store
from hopeocd.models.sync import QueuedWriteResponse
from hopeocd.models.tracking import ErpSessionCreate, ErpSessionResponse
from hopeocd.services.backend import ERP
from hopeocd.services.connectivity import Connectivity, get_connectivity
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.offline_queue import OfflineQueue, get_offline_queue
from hopeocd.services.sync_service import write_or_enqueue

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/exposures", tags=["exposures"])


@router.get("", response_model=list[ErpSessionResponse])
async def list_erp_sessions(store: EntityStore = Depends(get_store)):
    return [ErpSessionResponse(**row) for row in store.collections[ERP]]


@router.post(
    "",
    response_model=ErpSessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={202: {"model": QueuedWriteResponse}},
)
async def create_erp_session(
    body: ErpSessionCreate,
    store: EntityStore = Depends(get_store),
    queue: OfflineQueue = Depends(get_offline_queue),
    connectivity: Connectivity = Depends(get_connectivity),
):
    result = await write_or_enqueue(ERP, body.model_dump(), store, queue, connectivity)
    if not isinstance(result, dict):
        return result
    return ErpSessionResponse(**result)


@router.post("/{session_id}/complete", response_model=ErpSessionResponse)
async def complete_erp_session(session_id: str, store: EntityStore = Depends(get_store)):
    """mark an exposure completed. safe to repeat"""
    if store.find(ERP, session_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="ERP session not found",
        )

    row = await store.complete_erp_session(session_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not update ERP session",
        )
    return ErpSessionResponse(**row)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_erp_session(session_id: str, store: EntityStore = Depends(get_store)):
    if not await store.delete_erp_session(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="ERP session not found",
        )
