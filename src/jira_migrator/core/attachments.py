from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, Mapping

from jira_migrator.core.constants import DEFAULT_ATTACHMENT_HEADER


class AttachmentSource(str, Enum):
    """
    Which columns of a row are scanned for attachment URLs.

    HEADER: only columns whose header contains the configured substring.
    ALL: every column.
    """
    HEADER = "header"
    ALL = "all"


class MatchMode(str, Enum):
    """
    How URLs are pulled out of a single cell.

    INLINE: every http(s):// run of non-whitespace characters.
    DELIMITED: split on ';' and keep trimmed segments that start with 'http'.
    MIXED: split on ';' then take every inline URL from each segment.
    """
    INLINE = "inline"
    DELIMITED = "delimited"
    MIXED = "mixed"


_URL_PATTERN = re.compile(r"https?://\S+")
_DELIMITER = ";"


def extract_urls(cell: str | None, mode: MatchMode = MatchMode.MIXED) -> list[str]:
    if not cell:
        return []

    if mode is MatchMode.INLINE:
        return _URL_PATTERN.findall(cell)

    segments = [s.strip() for s in cell.split(_DELIMITER)]
    if mode is MatchMode.DELIMITED:
        return [s for s in segments if s.startswith("http")]

    urls: list[str] = []
    for segment in segments:
        urls.extend(_URL_PATTERN.findall(segment))
    return urls


# This is a function to pick the attachment-bearing headers (Jira repeats "Attachment" per file).
def attachment_columns(
    headers: Iterable[str],
    header_match: str = DEFAULT_ATTACHMENT_HEADER,
) -> list[str]:
    needle = header_match.lower()
    return [h for h in headers if h and needle in str(h).lower()]


def collect_attachments(
    row: Mapping[str, str],
    *,
    source: AttachmentSource = AttachmentSource.HEADER,
    mode: MatchMode = MatchMode.MIXED,
    header_match: str = DEFAULT_ATTACHMENT_HEADER,
) -> list[str]:
    """
    Return every URL in the row's attachment columns.

    Order is column order, then position inside the cell. Duplicates are kept.
    """
    if source is AttachmentSource.ALL:
        columns = list(row.keys())
    else:
        columns = attachment_columns(row.keys(), header_match)

    urls: list[str] = []
    for col in columns:
        value = row.get(col)
        if isinstance(value, str) and value:
            urls.extend(extract_urls(value, mode))
    return urls
