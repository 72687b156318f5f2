from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from jira_migrator.core.config import MigrationConfig
from jira_migrator.core.constants import JIRA_LINK_LABEL, NO_ATTACHMENTS, NO_DESCRIPTION
from jira_migrator.core.dates import to_iso8601
from jira_migrator.core.models import (
    EnrichmentRecord,
    IssueRecord,
    MergeResult,
    MergeStats,
    OutputRecord,
)

LOGGER = logging.getLogger(__name__)

SECTION_TITLES = ("Description", "Environment", "Original Issue", "Attachments")
_SECTION_HEADER = re.compile(r"^### (" + "|".join(SECTION_TITLES) + r")\n", re.MULTILINE)
_LINK = re.compile(r"^\[[^\]]*\]\((?P<url>.*)\)$")


def issue_link(base_url: str, issue_key: str) -> str:
    return f"[{JIRA_LINK_LABEL}]({base_url}{issue_key})"


def compose_description(
    *,
    description: str,
    environment: str,
    issue_key: str,
    base_url: str,
    attachments: str,
) -> str:
    sections = [
        ("Description", description),
        ("Environment", environment),
        ("Original Issue", issue_link(base_url, issue_key)),
        ("Attachments", attachments),
    ]
    return "\n\n".join(f"### {title}\n{body}" for title, body in sections)


def split_description(text: str) -> dict[str, str]:
    """
    Inverse of `compose_description`: section title -> body.

    The "Original Issue" body is returned as the link target URL.
    Bodies that themselves contain a "### <section title>" line cannot be
    split back unambiguously.
    """
    matches = list(_SECTION_HEADER.finditer(text))
    parts: dict[str, str] = {}
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        body = text[m.end():end]
        if i + 1 < len(matches) and body.endswith("\n\n"):
            body = body[:-2]
        parts[m.group(1)] = body

    link = _LINK.match(parts.get("Original Issue", ""))
    if link:
        parts["Original Issue"] = link.group("url")
    return parts


def build_output_record(
    issue: IssueRecord,
    enrichment: EnrichmentRecord | None,
    config: MigrationConfig,
) -> OutputRecord:
    if enrichment is None:
        description, environment, attachments = NO_DESCRIPTION, "", NO_ATTACHMENTS
    else:
        description = enrichment.description or NO_DESCRIPTION
        environment = enrichment.environment
        attachments = enrichment.render_attachments()

    return OutputRecord(
        work_item_type=config.work_item_type,
        title=issue.summary,
        assigned_to=issue.assignee,
        created_by=issue.reporter,
        priority=config.priority.map(issue.priority),
        state=issue.status,
        created_date=to_iso8601(issue.created),
        changed_date=to_iso8601(issue.updated),
        description=compose_description(
            description=description,
            environment=environment,
            issue_key=issue.issue_key,
            base_url=config.jira_base_url,
            attachments=attachments,
        ),
    )


def merge_rows(
    rows: Iterable[Mapping[str, str]],
    lookup: Mapping[str, EnrichmentRecord],
    config: MigrationConfig,
) -> MergeResult:
    """
    Join the "default fields" export with the enrichment lookup, row by row.

    Rows without an issue key are skipped; a row that fails is logged and
    skipped without stopping the run. Output keeps input order.
    """
    records: list[OutputRecord] = []
    stats = MergeStats()

    for idx, row in enumerate(rows):
        try:
            issue = IssueRecord.from_row(row, config.columns)
            if not issue.issue_key:
                stats.skipped += 1
                LOGGER.debug("Skipping default-fields row %d: missing %r", idx, config.columns.issue_key)
                continue

            enrichment = lookup.get(issue.issue_key)
            if enrichment is None:
                stats.unmatched += 1
                LOGGER.debug("No all-fields entry for %s; using defaults", issue.issue_key)

            records.append(build_output_record(issue, enrichment, config))
        except (AttributeError, TypeError, ValueError) as e:
            stats.failed += 1
            LOGGER.warning("Failed to process default-fields row %d: %s", idx, e)
            continue

    stats.emitted = len(records)
    LOGGER.info(
        "Merged %d rows (skipped=%d, failed=%d, without enrichment=%d)",
        stats.emitted,
        stats.skipped,
        stats.failed,
        stats.unmatched,
    )
    return MergeResult(records=records, stats=stats)
