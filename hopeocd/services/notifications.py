# local notifications: per-identity list kept in local storage
# the list is an explicit object; load/save are the only functions touching storage

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional

from hopeocd.services.local_storage import LocalStorage

NOTIFICATION_TYPES = ("reminder", "encouragement", "milestone", "tip")


@dataclass
class Notification:
    type: str
    title: str
    message: str
    action_url: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    read: bool = False


@dataclass
class NotificationCenter:
    items: list[Notification] = field(default_factory=list)
    limit: int = 20

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.items if not n.read)

    def add(self, notification: Notification) -> Notification:
        """newest first, only the most recent `limit` are kept"""
        self.items = [notification, *self.items][: self.limit]
        return notification

    def mark_read(self, notification_id: str) -> bool:
        for n in self.items:
            if n.id == notification_id:
                n.read = True
                return True
        return False

    def remove(self, notification_id: str) -> bool:
        before = len(self.items)
        self.items = [n for n in self.items if n.id != notification_id]
        return len(self.items) < before


def storage_key(prefix: str, user_id: str) -> str:
    return f"{prefix}-{user_id}"


def load_notifications(storage: LocalStorage, key: str, limit: int = 20) -> NotificationCenter:
    raw = storage.get(key, []) or []
    items = [Notification(**n) for n in raw]
    return NotificationCenter(items=items[:limit], limit=limit)


def save_notifications(storage: LocalStorage, key: str, center: NotificationCenter):
    storage.set(key, [asdict(n) for n in center.items])
