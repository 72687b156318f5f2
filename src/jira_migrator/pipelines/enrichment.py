from __future__ import annotations

import logging
from typing import Iterable, Mapping

from jira_migrator.core.attachments import collect_attachments
from jira_migrator.core.config import MigrationConfig
from jira_migrator.core.constants import NO_ENVIRONMENT
from jira_migrator.core.models import EnrichmentRecord, EnrichmentResult, EnrichmentStats
from jira_migrator.core.text_utils import normalize_description

LOGGER = logging.getLogger(__name__)


def build_enrichment_record(row: Mapping[str, str], config: MigrationConfig) -> EnrichmentRecord:
    columns = config.columns
    environment = (row.get(columns.environment) or "").strip()
    attachments = collect_attachments(
        row,
        source=config.attachments.source,
        mode=config.attachments.mode,
        header_match=config.attachments.header_match,
    )
    return EnrichmentRecord(
        description=normalize_description(row.get(columns.description), config.description_default),
        environment=environment or NO_ENVIRONMENT,
        attachments=tuple(attachments),
    )


def load_enrichment(rows: Iterable[Mapping[str, str]], config: MigrationConfig) -> EnrichmentResult:
    """
    Build the issue key -> EnrichmentRecord lookup from the "all fields" export.

    The whole input is consumed before returning; the merge stage relies on a
    complete table. Later rows win on duplicate keys.
    """
    key_column = config.columns.issue_key
    records: dict[str, EnrichmentRecord] = {}
    stats = EnrichmentStats()

    for idx, row in enumerate(rows):
        issue_key = (row.get(key_column) or "").strip()
        if not issue_key:
            stats.skipped += 1
            LOGGER.debug("Skipping all-fields row %d: missing %r", idx, key_column)
            continue

        try:
            record = build_enrichment_record(row, config)
        except (AttributeError, TypeError, ValueError) as e:
            stats.failed += 1
            LOGGER.warning("Failed to process all-fields row %d (%s): %s", idx, issue_key, e)
            continue

        if issue_key in records:
            stats.duplicates += 1
            LOGGER.debug("Duplicate issue key %s in all-fields export; keeping the later row", issue_key)
        records[issue_key] = record

    stats.loaded = len(records)
    LOGGER.info(
        "Enrichment table ready: %d issues (skipped=%d, duplicates=%d, failed=%d)",
        stats.loaded,
        stats.skipped,
        stats.duplicates,
        stats.failed,
    )
    return EnrichmentResult(records=records, stats=stats)
