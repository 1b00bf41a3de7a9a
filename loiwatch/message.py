"""
Short text messages for published changes.

A message looks like:

    New location of interest (Testing Sites): Test Site, 123 Main St
    Monday 9am-5pm
    Bring ID
    https://example.org/locations

Instructions are left out for removed locations. The text part is cut with
an ellipsis so that text, newline and link together fit in max_length.
"""

from __future__ import annotations

from loiwatch.model import ChangeEvent, ChangeType

ELLIPSIS = "…"

HEADINGS = {
    ChangeType.ADDED: "New location of interest",
    ChangeType.UPDATED: "Updated location of interest",
    ChangeType.REMOVED: "Removed location of interest",
}


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return ELLIPSIS[:max(limit, 0)]
    return text[: limit - len(ELLIPSIS)].rstrip() + ELLIPSIS


def format_change_message(event: ChangeEvent, link: str, max_length: int = 280) -> str:
    """
    Raises ValueError if the link leaves no room for any text.
    """
    limit = max_length - len(link) - 1
    if limit < 1:
        raise ValueError(f"Link of {len(link)} characters does not fit in a {max_length}-character message")

    loc = event.location

    heading = HEADINGS[event.change_type]
    if event.group:
        heading = f"{heading} ({event.group})"

    site = ", ".join(part for part in (loc.location, loc.address) if part)
    lines = [f"{heading}: {site}", f"{loc.day} {loc.times}".strip()]

    if event.change_type is not ChangeType.REMOVED and loc.instructions:
        lines.append(loc.instructions)

    text = "\n".join(line for line in lines if line)
    text = _truncate(text, limit)
    return f"{text}\n{link}"
