# notifications router: device-local reminders and encouragement
# lists live in local storage, one blob per user

from fastapi import APIRouter, Depends, HTTPException, status

from hopeocd.config import settings
from hopeocd.dependencies import get_current_user
from hopeocd.models.user import NotificationCreate, NotificationListResponse, NotificationResponse
from hopeocd.services.local_storage import LocalStorage, local_storage
from hopeocd.services.notifications import (
    Notification,
    NotificationCenter,
    load_notifications,
    save_notifications,
    storage_key,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


async def get_local_storage() -> LocalStorage:
    """dependency injection for device-local storage"""
    return local_storage


def _key(current_user: dict) -> str:
    return storage_key(settings.NOTIFICATIONS_KEY, current_user["id"])


def _load(storage: LocalStorage, current_user: dict) -> NotificationCenter:
    return load_notifications(storage, _key(current_user), settings.MAX_NOTIFICATIONS)


def _list_response(center: NotificationCenter) -> NotificationListResponse:
    return NotificationListResponse(
        notifications=[NotificationResponse(**vars(n)) for n in center.items],
        unreadCount=center.unread_count,
    )


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: dict = Depends(get_current_user),
    storage: LocalStorage = Depends(get_local_storage),
):
    return _list_response(_load(storage, current_user))


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def add_notification(
    body: NotificationCreate,
    current_user: dict = Depends(get_current_user),
    storage: LocalStorage = Depends(get_local_storage),
):
    center = _load(storage, current_user)
    notification = center.add(Notification(**body.model_dump()))
    save_notifications(storage, _key(current_user), center)
    return NotificationResponse(**vars(notification))


@router.post("/{notification_id}/read", response_model=NotificationListResponse)
async def mark_notification_read(
    notification_id: str,
    current_user: dict = Depends(get_current_user),
    storage: LocalStorage = Depends(get_local_storage),
):
    center = _load(storage, current_user)
    if not center.mark_read(notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    save_notifications(storage, _key(current_user), center)
    return _list_response(center)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_notification(
    notification_id: str,
    current_user: dict = Depends(get_current_user),
    storage: LocalStorage = Depends(get_local_storage),
):
    center = _load(storage, current_user)
    if not center.remove(notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    save_notifications(storage, _key(current_user), center)
