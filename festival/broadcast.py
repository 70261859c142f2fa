"""Broadcaster capability and its implementations.

The engine only ever calls ``publish``; transports, connected observers and
lifecycles belong to the broadcaster.
"""
from __future__ import annotations

from collections import deque
from threading import Lock
from typing import Callable, Deque, List, Optional, Protocol

import requests

from . import config
from .errors import BroadcastError
from .logging import get_logger

logger = get_logger(__name__)

Subscriber = Callable[[str], None]


class Broadcaster(Protocol):
    """Pushes serialized engine state to remote observers."""

    def publish(self, snapshot: str) -> None:
        ...


class NullBroadcaster:
    """Discards every snapshot."""

    def publish(self, snapshot: str) -> None:
        return None


class MemoryBroadcaster:
    """Thread-safe in-process broadcaster.

    Keeps the latest snapshot for observers that connect late, a bounded
    history, and a list of subscriber callables invoked on every publish.
    """

    def __init__(self, history_size: int = config.SNAPSHOT_HISTORY_SIZE) -> None:
        self._lock = Lock()
        self._history: Deque[str] = deque(maxlen=history_size)
        self._subscribers: List[Subscriber] = []

    @property
    def latest(self) -> Optional[str]:
        with self._lock:
            return self._history[-1] if self._history else None

    @property
    def history(self) -> List[str]:
        with self._lock:
            return list(self._history)

    def subscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

    def publish(self, snapshot: str) -> None:
        with self._lock:
            self._history.append(snapshot)
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            try:
                subscriber(snapshot)
            except Exception:
                logger.exception("subscriber_failed", subscriber=repr(subscriber))


class WebhookBroadcaster:
    """POSTs each snapshot as JSON to an HTTP endpoint."""

    def __init__(
        self,
        url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = config.WEBHOOK_TIMEOUT_SECONDS,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def publish(self, snapshot: str) -> None:
        try:
            response = self.session.post(
                self.url,
                data=snapshot.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as error:
            raise BroadcastError(f"Webhook delivery to {self.url} failed: {error}") from error
        logger.debug("webhook_delivered", url=self.url, status=response.status_code)


class FanOutBroadcaster:
    """Publishes to several broadcasters; one failure does not stop the rest."""

    def __init__(self, *broadcasters: Broadcaster) -> None:
        self.broadcasters = list(broadcasters)

    def publish(self, snapshot: str) -> None:
        failures: List[str] = []
        for broadcaster in self.broadcasters:
            try:
                broadcaster.publish(snapshot)
            except BroadcastError as error:
                failures.append(str(error))
        if failures:
            raise BroadcastError("; ".join(failures))
