"""
Publishing change events.

Each change event becomes exactly one JSON message. Events are independent,
so they are sent concurrently from a bounded thread pool. Every event is
attempted; failures are collected and reported together as PublishError.
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import requests

from loiwatch.errors import PublishError
from loiwatch.model import ChangeEvent

logger = logging.getLogger(__name__)


def event_to_json(event: ChangeEvent) -> str:
    return json.dumps(event.to_dict(), ensure_ascii=False)


class ChangePublisher:
    """
    Accepts one change event at a time. Implementations must be thread-safe.
    """

    def publish(self, event: ChangeEvent) -> None:
        raise NotImplementedError


class OutboxPublisher(ChangePublisher):
    """
    Appends each event as one JSON line to a local outbox file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def publish(self, event: ChangeEvent) -> None:
        line = event_to_json(event)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")


class WebhookPublisher(ChangePublisher):
    """
    POSTs each event as a JSON body to an HTTP endpoint.
    """

    def __init__(self, url: str, session: Optional[requests.Session] = None, timeout: float = 10) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def publish(self, event: ChangeEvent) -> None:
        resp = self.session.post(
            self.url,
            data=event_to_json(event).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()


def publish_all(events: Sequence[ChangeEvent], publisher: ChangePublisher, max_workers: int = 8) -> int:
    """
    Publish all events concurrently. Returns the number of published events.

    Raises PublishError (after all attempts finished) if any event failed.
    """
    if not events:
        return 0

    failures: List[Tuple[ChangeEvent, BaseException]] = []

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        future_to_event = {executor.submit(publisher.publish, event): event for event in events}

        for future in as_completed(future_to_event):
            event = future_to_event[future]
            try:
                future.result()
            except Exception as e:
                logger.error("Publishing %s change for %r failed: %s", event.change_type.value, event.location.location, e)
                failures.append((event, e))

    if failures:
        raise PublishError(failures)

    logger.info("Published %d change events", len(events))
    return len(events)
