"""
Run configuration.

All settings a sync run needs are passed in as one Config value; nothing
is read from the process environment. The CLI builds it from arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loiwatch.parse import DEFAULT_CONTENT_SELECTOR

# PACKAGE_DIR always points to the folder where this file is located
PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

DEFAULT_PAGE_URL = "https://www.health.govt.nz/our-work/diseases-and-conditions/covid-19-novel-coronavirus/covid-19-health-advice-public/contact-tracing-covid-19/covid-19-contact-tracing-locations-interest"
DEFAULT_SNAPSHOT_PATH = DATA_DIR / "locations-of-interest.json"
DEFAULT_OUTBOX_PATH = DATA_DIR / "outbox.jsonl"


@dataclass(frozen=True)
class Config:
    page_url: str = DEFAULT_PAGE_URL
    snapshot_path: Path = DEFAULT_SNAPSHOT_PATH
    outbox_path: Path = DEFAULT_OUTBOX_PATH
    webhook_url: Optional[str] = None
    content_selector: str = DEFAULT_CONTENT_SELECTOR
    max_workers: int = 8
    request_timeout: float = 30.0
    # defaults for the `messages` command only; sync runs do not render text
    link_url: str = DEFAULT_PAGE_URL
    message_max_length: int = 280
