import logging
import time
from datetime import date
from typing import List

from maktab.notifications.schemas import Notification, NotificationCreate
from maktab.storage import NOTIFICATIONS, StorageBackend

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def add_notification(self, notification: NotificationCreate) -> Notification:
        data = notification.model_dump()
        data["date"] = date.today().isoformat()
        data["timestamp"] = time.time()
        key = self.storage.add(NOTIFICATIONS, data)
        logger.info(f"Posted notification {key}")
        return Notification(id=key, **data)

    def get_notifications(self) -> List[Notification]:
        """Newest first."""
        return [Notification(**r) for r in self.storage.list_ordered(NOTIFICATIONS, "timestamp", descending=True)]

    def delete_notification(self, notification_id: str) -> bool:
        if not self.storage.get(NOTIFICATIONS, notification_id):
            return False
        self.storage.delete(NOTIFICATIONS, notification_id)
        return True
