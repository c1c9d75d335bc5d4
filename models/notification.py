# models/notification.py

from typing import List, Optional
from pydantic import BaseModel

from models.common import RecordRead
from models.enums import NotificationType, NotificationStatus


class NotificationBase(BaseModel):
    title: str
    message: str
    type: NotificationType = NotificationType.system
    target_user_id: Optional[str] = None          # None → broadcast
    target_property_id: Optional[str] = None


class NotificationCreate(NotificationBase):
    """Status is always stamped `unread` by the repository."""
    pass


class NotificationRead(RecordRead, NotificationBase):
    status: NotificationStatus = NotificationStatus.unread


class NotificationList(BaseModel):
    unread_count: int
    data: List[NotificationRead]
