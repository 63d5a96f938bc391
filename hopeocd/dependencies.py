# fastapi dependency injection
# provides the current identity and that identity's entity store

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from hopeocd.services.auth_service import decode_token
from hopeocd.services.db import Database, get_db
from hopeocd.services.entity_store import EntityStore, StoreRegistry, get_registry

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """the identity carried by the bearer token, or None"""
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access" or not payload.get("sub"):
        return None

    return {"id": payload["sub"], "email": payload.get("email")}


async def get_current_user(user: Optional[dict] = Depends(get_optional_user)) -> dict:
    """require an identity; every data operation is scoped to it"""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing token",
        )
    return user


async def get_store(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_db),
    registry: StoreRegistry = Depends(get_registry),
) -> EntityStore:
    """the cached entity store for the current identity, loaded on first use"""
    return await registry.get(current_user["id"], db)
