# progress router: stats and achievements for the current user

from fastapi import APIRouter, Depends

from hopeocd.dependencies import get_store
from hopeocd.models.analytics import ProgressResponse
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.progress_service import compute_progress

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("", response_model=ProgressResponse)
async def get_progress(store: EntityStore = Depends(get_store)):
    return ProgressResponse(**compute_progress(store.collections))
