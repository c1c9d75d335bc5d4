# services/notification_pipeline.py

"""
Live notification list for one consumer.

The feed keeps the visible notifications in memory and reloads the
whole list whenever a matching change arrives on the notifications
table. There is no delta merge: a reload is always a fresh query, so
the in-memory list cannot drift from the store. Auth transitions for
the consumer's user reload (SIGNED_IN) or clear (SIGNED_OUT) it.
"""

import threading
from typing import Any, Callable, Dict, List, Optional

from core.change_feed import (
    SIGNED_IN,
    SIGNED_OUT,
    AuthStateChange,
    ChangeEvent,
    ChangeFeed,
    EventBroker,
    Subscription,
    auth_events,
    change_feed,
)
from core.errors import StoreError
from core.logging_config import logger
from models.enums import NotificationStatus
from repositories.notification_repo import NotificationRepository, NotificationScope


class NotificationFeed:
    def __init__(
        self,
        repo: NotificationRepository,
        scope: NotificationScope,
        user_id: Optional[str] = None,
        on_update: Optional[Callable[[List[Dict[str, Any]]], None]] = None,
        feed: ChangeFeed = change_feed,
        auth_feed: EventBroker = auth_events,
    ):
        self.repo = repo
        self.scope = scope
        self.user_id = user_id or scope.user_id
        self.on_update = on_update
        self.feed = feed
        self.auth_feed = auth_feed

        self.items: List[Dict[str, Any]] = []
        self.signed_in = False
        self.reload_count = 0
        self._subscriptions: List[Subscription] = []
        self._lock = threading.RLock()

    # -----------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------
    def start(self) -> "NotificationFeed":
        self._subscriptions.append(
            self.feed.subscribe_changes(self.scope.change_filter(), self._on_change)
        )
        if self.user_id:
            self._subscriptions.append(
                self.auth_feed.subscribe(
                    lambda e: isinstance(e, AuthStateChange) and e.user_id == self.user_id,
                    self._on_auth,
                )
            )
        self.signed_in = True
        self.reload()
        return self

    def stop(self):
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions = []

    # -----------------------------------------------------
    # State transitions
    # -----------------------------------------------------
    # Emits happen under the lock so a sign-out cannot be overtaken by a
    # reload that started before it.
    def reload(self) -> List[Dict[str, Any]]:
        with self._lock:
            if not self.signed_in:
                return self.items
            self.items = self.repo.list(self.scope)
            self.reload_count += 1
            items = list(self.items)
            self._emit(items)
        return items

    def clear(self):
        with self._lock:
            self.items = []
            self._emit([])

    def _on_change(self, event: ChangeEvent):
        try:
            self.reload()
        except StoreError as e:
            # Keep the last good list; the next change retries
            logger.error(f"Notification reload failed after {event.event_type}: {e}")

    def _on_auth(self, event: AuthStateChange):
        with self._lock:
            if event.event == SIGNED_OUT:
                self.signed_in = False
                self.clear()
            elif event.event == SIGNED_IN:
                self.signed_in = True
                self.reload()

    def _emit(self, items: List[Dict[str, Any]]):
        if self.on_update is not None:
            self.on_update(items)

    # -----------------------------------------------------
    # Derived
    # -----------------------------------------------------
    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.items if n.get("status") == NotificationStatus.unread.value)

    # -----------------------------------------------------
    # Operations (the resulting change events trigger reloads)
    # -----------------------------------------------------
    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.repo.create(data)

    def mark_read(self, notification_id: str) -> Dict[str, Any]:
        return self.repo.mark_read(notification_id)

    def mark_all_read(self) -> int:
        return self.repo.mark_all_read(self.scope)

    def delete(self, notification_id: str) -> Dict[str, Any]:
        return self.repo.delete(notification_id)


def publish_auth_state(event: str, user_id: str, auth_feed: EventBroker = auth_events) -> int:
    return auth_feed.publish(AuthStateChange(event=event, user_id=user_id))
