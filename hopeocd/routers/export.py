# export router: download the cached collections as json or csv

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from hopeocd.dependencies import get_current_user, get_store
from hopeocd.services.entity_store import EntityStore
from hopeocd.services.export_service import DEFAULT_SELECTION, ExportError, build_export

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/export", tags=["export"])


@router.get("")
async def export_data(
    types: list[str] = Query(DEFAULT_SELECTION, description="mood, thoughts, erp, meditation, sleep, ai"),
    fmt: str = Query("json", alias="format", pattern="^(json|csv)$"),
    current_user: dict = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
):
    """build the export from what is already in memory. no backend round-trip"""
    # accept both ?types=mood&types=erp and ?types=mood,erp
    selected = [t.strip() for value in types for t in value.split(",") if t.strip()]
    try:
        content, filename, media_type = build_export(current_user, store.snapshot(), selected, fmt)
    except ExportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Exported {', '.join(selected)} as {fmt} for user {current_user['id']}")
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
