from __future__ import annotations

import logging

from jira_migrator.core.config import MigrationConfig
from jira_migrator.core.constants import OUTPUT_COLUMNS
from jira_migrator.core.datasource import iter_rows, load_csv, malformed_rows, write_csv
from jira_migrator.core.exceptions import InputFileNotFoundError
from jira_migrator.core.models import RunSummary
from jira_migrator.pipelines.enrichment import load_enrichment
from jira_migrator.pipelines.merge import merge_rows

LOGGER = logging.getLogger(__name__)


def run_migration(config: MigrationConfig) -> RunSummary:
    """
    all fields CSV -> lookup table -> join with default fields CSV -> Azure DevOps CSV.

    Both inputs are checked before anything is read so a missing file never
    produces output. The output is written once, at the end.
    """
    all_fields_path, default_fields_path, output_path = config.require_paths()

    for path, role in ((all_fields_path, "all fields"), (default_fields_path, "default fields")):
        if not path.is_file():
            raise InputFileNotFoundError(path, role)

    all_fields = load_csv(all_fields_path, role="all fields")
    enrichment = load_enrichment(iter_rows(all_fields), config)
    enrichment.stats.malformed = malformed_rows(all_fields)

    default_fields = load_csv(default_fields_path, role="default fields")
    merged = merge_rows(iter_rows(default_fields), enrichment.records, config)
    merged.stats.malformed = malformed_rows(default_fields)

    LOGGER.info("Writing %d work items: %s", len(merged.records), output_path)
    write_csv((r.to_row() for r in merged.records), output_path, OUTPUT_COLUMNS)

    summary = RunSummary(enrichment=enrichment.stats, merge=merged.stats, output_path=output_path)
    LOGGER.info("Done. %s", summary.as_dict())
    return summary
