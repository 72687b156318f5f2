from __future__ import annotations

import logging
from pathlib import Path

from jira_migrator.core.attachments import MatchMode, attachment_columns, collect_attachments
from jira_migrator.core.constants import DEFAULT_ATTACHMENT_HEADER
from jira_migrator.core.datasource import iter_rows, load_csv, write_lines

LOGGER = logging.getLogger(__name__)


def extract_attachment_links(
    input_path: Path,
    output_path: Path,
    *,
    header_match: str = DEFAULT_ATTACHMENT_HEADER,
    mode: MatchMode = MatchMode.MIXED,
) -> int:
    """
    Write every attachment URL found in a CSV export to a text file, one per line.

    Returns the number of links written.
    """
    df = load_csv(input_path, role="input")
    columns = attachment_columns(map(str, df.columns), header_match)
    LOGGER.info("Attachment columns: %s", ", ".join(columns) or "(none)")

    links: list[str] = []
    for row in iter_rows(df):
        links.extend(collect_attachments(row, mode=mode, header_match=header_match))

    write_lines(links, output_path)
    LOGGER.info("Extracted %d attachment links to %s", len(links), output_path)
    return len(links)
