# core/change_feed.py

import asyncio
import itertools
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from supabase import acreate_client

from core.config import settings
from core.logging_config import logger


# ============================================================
# Events
# ============================================================

@dataclass(frozen=True)
class ChangeEvent:
    """One row-level change on a table (mirrors Supabase postgres_changes)."""

    table: str
    event_type: str                      # INSERT | UPDATE | DELETE
    record: Dict[str, Any] = field(default_factory=dict)
    old_record: Dict[str, Any] = field(default_factory=dict)

    @property
    def row(self) -> Dict[str, Any]:
        return self.record or self.old_record

    @classmethod
    def from_realtime(cls, table: str, payload: dict) -> "ChangeEvent":
        """Normalize a Supabase Realtime postgres_changes payload."""
        data = payload.get("data", payload) if isinstance(payload, dict) else {}
        return cls(
            table=data.get("table") or table,
            event_type=(data.get("type") or data.get("eventType") or "").upper(),
            record=data.get("record") or data.get("new") or {},
            old_record=data.get("old_record") or data.get("old") or {},
        )


@dataclass(frozen=True)
class AuthStateChange:
    event: str                            # SIGNED_IN | SIGNED_OUT
    user_id: str


SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


# ============================================================
# Filter
# ============================================================

@dataclass(frozen=True)
class ChangeFilter:
    """
    Declarative subscription filter.

    `where` maps a column to the tuple of accepted values; None in the
    tuple accepts NULL. DELETE events usually carry only the primary
    key, so a DELETE whose row lacks a filtered column always matches.
    """

    table: str
    event_type: str = "*"
    where: Tuple[Tuple[str, Tuple[Any, ...]], ...] = ()

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        if self.event_type != "*" and event.event_type != self.event_type:
            return False

        row = event.row
        for column, accepted in self.where:
            if column not in row:
                if event.event_type == "DELETE":
                    continue
                return False
            if row[column] not in accepted:
                return False
        return True


# ============================================================
# Subscription handle
# ============================================================

class Subscription:
    def __init__(self, broker: "EventBroker", sub_id: int):
        self._broker = broker
        self._id = sub_id
        self.active = True

    def cancel(self):
        if self.active:
            self._broker._remove(self._id)
            self.active = False

    # supabase-js naming
    unsubscribe = cancel


# ============================================================
# In-process broker
# ============================================================

class EventBroker:
    """
    Synchronous observer registry. Callbacks run on the publishing
    thread; one failing callback does not stop delivery to the rest.
    """

    def __init__(self, name: str):
        self.name = name
        self._subscribers: Dict[int, Tuple[Callable[[Any], bool], Callable[[Any], None]]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def subscribe(self, matcher: Callable[[Any], bool], callback: Callable[[Any], None]) -> Subscription:
        with self._lock:
            sub_id = next(self._ids)
            self._subscribers[sub_id] = (matcher, callback)
        return Subscription(self, sub_id)

    def publish(self, event: Any) -> int:
        with self._lock:
            targets = list(self._subscribers.values())

        delivered = 0
        for matcher, callback in targets:
            if not matcher(event):
                continue
            try:
                callback(event)
                delivered += 1
            except Exception:
                logger.exception(f"[{self.name}] subscriber callback failed for {event!r}")
        return delivered

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def _remove(self, sub_id: int):
        with self._lock:
            self._subscribers.pop(sub_id, None)


class ChangeFeed(EventBroker):
    def __init__(self):
        super().__init__("change_feed")

    def subscribe_changes(self, change_filter: ChangeFilter, callback: Callable[[ChangeEvent], None]) -> Subscription:
        return self.subscribe(change_filter.matches, callback)

    def publish_row(self, table: str, event_type: str, record: Optional[dict] = None, old_record: Optional[dict] = None) -> int:
        return self.publish(
            ChangeEvent(table=table, event_type=event_type, record=record or {}, old_record=old_record or {})
        )


change_feed = ChangeFeed()
auth_events = EventBroker("auth_events")


# ============================================================
# Supabase Realtime bridge
# ============================================================

async def start_realtime_bridge(table: str, feed: ChangeFeed = change_feed):
    """
    Forward postgres_changes for `table` into the in-process feed, so
    writes made by other processes (SPA, SQL console) also trigger
    reloads. Returns the subscribed channel; call `unsubscribe()` on it
    at shutdown.

    Realtime invokes the callback on the event loop, while subscribers
    reload through blocking PostgREST calls, so delivery happens on the
    default executor.
    """
    loop = asyncio.get_running_loop()
    client = await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)

    def handler(payload):
        loop.run_in_executor(None, feed.publish, ChangeEvent.from_realtime(table, payload))

    channel = client.channel(f"{table}_changes")
    await channel.on_postgres_changes(
        "*", schema="public", table=table, callback=handler
    ).subscribe()

    logger.info(f"Realtime bridge subscribed to {table}")
    return channel
