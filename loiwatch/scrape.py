from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

USER_AGENT = "loiwatch/0.1 (+https://github.com/loiwatch/loiwatch)"


def fetch_page(url: str, timeout: float = 30, session: Optional[requests.Session] = None) -> str:
    """
    Download the locations-of-interest page and return its HTML.

    Raises requests.HTTPError for non-2xx responses.
    """
    http = session or requests
    logger.info("Fetching %s", url)

    resp = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    resp.raise_for_status()

    logger.debug("Fetched %d bytes", len(resp.content))
    return resp.text
