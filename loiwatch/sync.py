"""
One sync run: fetch -> parse -> index -> diff -> publish -> save snapshot.

Ordering rules:
- parsing errors abort the run before anything is published or written
- the full change set is computed before the first publish
- the new snapshot is saved only after every change was published, so a
  crash in between repeats notifications instead of losing them
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from loiwatch.config import Config
from loiwatch.diff import diff_indexes
from loiwatch.index import build_index
from loiwatch.model import ChangeEvent, Index
from loiwatch.parse import parse_loi_page
from loiwatch.publish import ChangePublisher, OutboxPublisher, WebhookPublisher, publish_all
from loiwatch.scrape import fetch_page
from loiwatch.storage import load_snapshot, save_snapshot

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    changes: List[ChangeEvent] = field(default_factory=list)
    index: Index = field(default_factory=dict)


def publisher_from_config(config: Config) -> ChangePublisher:
    if config.webhook_url:
        return WebhookPublisher(config.webhook_url, timeout=config.request_timeout)
    return OutboxPublisher(config.outbox_path)


def run_sync(
    config: Config,
    fetch: Callable[[str], str] | None = None,
    publisher: Optional[ChangePublisher] = None,
    dry_run: bool = False,
) -> SyncResult:
    """
    Run one full sync.

    `fetch` defaults to an HTTP GET of config.page_url; `publisher` defaults
    to the one chosen by publisher_from_config(). With dry_run=True nothing
    is published and the snapshot is left untouched.
    """
    if fetch is None:
        def fetch(url: str) -> str:
            return fetch_page(url, timeout=config.request_timeout)

    html = fetch(config.page_url)
    current = build_index(parse_loi_page(html, config.content_selector))
    baseline = load_snapshot(config.snapshot_path)
    result = SyncResult(changes=diff_indexes(baseline, current), index=current)

    logger.info("Detected %d changes", len(result.changes))

    if dry_run:
        logger.info("Dry run: skipping publish and snapshot write")
        return result

    publish_all(result.changes, publisher or publisher_from_config(config), max_workers=config.max_workers)
    save_snapshot(result.index, config.snapshot_path)
    return result
