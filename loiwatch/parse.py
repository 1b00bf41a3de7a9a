"""
Parsing (HTML -> structured records).

- Locates the main content region of the locations-of-interest page
- Extracts EACH table as one group (caption = group name)
- Resolves column roles from the header row
- Converts EACH body row into exactly ONE LocationRecord

Important rules:
- 1 table row = 1 record (rows are never skipped)
- Columns are found by header text, never by position
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from loiwatch.errors import HeaderResolutionError, StructureError
from loiwatch.model import LocationRecord

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_SELECTOR = "#block-system-main"


# ---------------------------------------------------------------------------
# Header patterns
# ---------------------------------------------------------------------------

# (role, pattern, required) - checked against trimmed, lower-cased header text
HEADER_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]", bool], ...] = (
    ("location", re.compile(r"location"), True),
    ("address", re.compile(r"address"), True),
    ("day", re.compile(r"^day$"), True),
    ("times", re.compile(r"^time"), True),
    ("instructions", re.compile(r"what to do"), False),
    ("date_added", re.compile(r"date.added"), False),
)


@dataclass(frozen=True)
class RawTable:
    """
    One table as found on the page, before normalization.
    """

    group: str
    headers: List[str]
    rows: List[List[str]]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clean(text: str) -> str:
    return unicodedata.normalize("NFC", text.strip())


def _cell_texts(row: Tag) -> List[str]:
    return [_clean(cell.get_text()) for cell in row.find_all(["td", "th"], recursive=False)]


def _header_row(table: Tag) -> Optional[Tag]:
    """
    Find the header row: first row of <thead>, otherwise the first row with <th> cells.
    """
    thead = table.find("thead")
    if thead is not None:
        row = thead.find("tr")
        if row is not None:
            return row

    for row in table.find_all("tr"):
        if row.find("th", recursive=False) is not None:
            return row
    return None


def _body_rows(table: Tag, header: Optional[Tag]) -> List[Tag]:
    bodies = table.find_all("tbody")
    if bodies:
        return [row for body in bodies for row in body.find_all("tr", recursive=False) if row is not header]

    # No <tbody>: every data row except the header row
    return [
        row
        for row in table.find_all("tr")
        if row is not header and row.find("td", recursive=False) is not None
    ]


# ---------------------------------------------------------------------------
# Table extraction
# ---------------------------------------------------------------------------


def extract_tables(html: str, content_selector: str = DEFAULT_CONTENT_SELECTOR) -> List[RawTable]:
    """
    Find all tables inside the main content region.

    Zero, one or many tables are all valid results.
    Raises StructureError if the content region itself is missing.
    """
    soup = BeautifulSoup(html, "html.parser")

    main = soup.select_one(content_selector)
    if main is None:
        raise StructureError(f"Content region {content_selector!r} not found in page")

    tables: List[RawTable] = []
    for table in main.find_all("table"):
        caption = table.find("caption")
        group = _clean(caption.get_text()) if caption is not None else ""

        header = _header_row(table)
        headers = [h.lower() for h in _cell_texts(header)] if header is not None else []
        rows = [_cell_texts(row) for row in _body_rows(table, header)]

        logger.debug("Found table %r with %d rows", group, len(rows))
        tables.append(RawTable(group=group, headers=headers, rows=rows))

    return tables


# ---------------------------------------------------------------------------
# Record normalization (CORE LOGIC)
# ---------------------------------------------------------------------------


def resolve_header(headers: Sequence[str]) -> Dict[str, Optional[int]]:
    """
    Map each column role to its index in the header row.

    Optional roles that are not found map to None.
    Raises HeaderResolutionError for a missing required role.
    """
    columns: Dict[str, Optional[int]] = {}

    for role, pattern, required in HEADER_PATTERNS:
        index = next((i for i, text in enumerate(headers) if pattern.search(text.strip().lower())), None)
        if index is None and required:
            raise HeaderResolutionError(role, list(headers))
        columns[role] = index

    return columns


def normalize_row(columns: Dict[str, Optional[int]], cells: Sequence[str]) -> LocationRecord:
    """
    Convert one body row into exactly one LocationRecord.

    Never fails: short rows give "" for required fields and None for optional ones.
    """

    def cell(role: str) -> Optional[str]:
        index = columns.get(role)
        if index is None or index >= len(cells):
            return None
        return _clean(cells[index])

    return LocationRecord(
        location=cell("location") or "",
        address=cell("address") or "",
        day=cell("day") or "",
        times=cell("times") or "",
        instructions=cell("instructions"),
        date_added=cell("date_added"),
    )


def parse_table(table: RawTable) -> List[LocationRecord]:
    columns = resolve_header(table.headers)
    return [normalize_row(columns, row) for row in table.rows]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_loi_page(html: str, content_selector: str = DEFAULT_CONTENT_SELECTOR) -> Dict[str, List[LocationRecord]]:
    """
    Parse the whole page and return {group: [records...]}.

    Tables that share a caption are merged into the same group.
    """
    result: Dict[str, List[LocationRecord]] = {}

    for table in extract_tables(html, content_selector):
        result.setdefault(table.group, []).extend(parse_table(table))

    logger.info(
        "Parsed %d records in %d groups",
        sum(len(records) for records in result.values()),
        len(result),
    )
    return result
