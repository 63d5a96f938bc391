# data router: manual full reload and user preferences

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from hopeocd.dependencies import get_current_user, get_store
from hopeocd.models.user import PreferencesResponse, PreferencesUpdate
from hopeocd.services.backend import COLLECTIONS
from hopeocd.services.db import Database, get_db
from hopeocd.services.entity_store import EntityStore, StoreRegistry, get_registry

logger = logging.getLogger(__name__)
router = APIRouter(tags=["data"])


@router.post("/data/refresh")
async def refresh_data(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
    registry: StoreRegistry = Depends(get_registry),
):
    """reload every collection from the backend. a failed reload keeps the previous cache"""
    refreshed = await registry.refresh(current_user["id"], db)
    if not refreshed:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not reload data",
        )
    store = await registry.get(current_user["id"], db)
    return {
        "refreshed": True,
        "counts": {COLLECTIONS[kind].export_key: len(rows) for kind, rows in store.collections.items()},
    }


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(store: EntityStore = Depends(get_store)):
    return PreferencesResponse(**(store.preferences or {}))


@router.put("/preferences", response_model=PreferencesResponse)
async def save_preferences(body: PreferencesUpdate, store: EntityStore = Depends(get_store)):
    row = await store.save_preferences(body.model_dump())
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not save preferences",
        )
    return PreferencesResponse(**row)
