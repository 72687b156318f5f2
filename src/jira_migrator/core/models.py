from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from jira_migrator.core import constants as c


@dataclass(frozen=True)
class ColumnMap:
    """
    Source column names for the fields the migration reads.
    Jira exports are usually consistent, but localized or renamed exports are not.
    """
    issue_key: str = c.ISSUE_KEY
    summary: str = c.SUMMARY
    assignee: str = c.ASSIGNEE
    reporter: str = c.REPORTER
    priority: str = c.PRIORITY
    status: str = c.STATUS
    created: str = c.CREATED
    updated: str = c.UPDATED
    description: str = c.DESCRIPTION
    environment: str = c.ENVIRONMENT


def _cell(row: Mapping[str, Any], column: str) -> str:
    value = row.get(column)
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class IssueRecord:
    """
    One row of the "default fields" (primary) export.
    """

    issue_key: str
    summary: str = ""
    assignee: str = ""
    reporter: str = ""
    priority: str = ""
    status: str = ""
    created: str = ""
    updated: str = ""
    description: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any], columns: ColumnMap | None = None) -> IssueRecord:
        columns = columns or ColumnMap()
        return cls(
            issue_key=_cell(row, columns.issue_key).strip(),
            summary=_cell(row, columns.summary),
            assignee=_cell(row, columns.assignee),
            reporter=_cell(row, columns.reporter),
            priority=_cell(row, columns.priority).strip(),
            status=_cell(row, columns.status),
            created=_cell(row, columns.created),
            updated=_cell(row, columns.updated),
            description=_cell(row, columns.description),
        )


@dataclass(frozen=True)
class EnrichmentRecord:
    """
    Fields taken from the "all fields" (secondary) export for one issue key.
    """
    description: str
    environment: str = c.NO_ENVIRONMENT
    attachments: tuple[str, ...] = ()

    def render_attachments(self) -> str:
        return render_attachments(self.attachments)


def render_attachments(attachments: tuple[str, ...] | list[str]) -> str:
    if not attachments:
        return c.NO_ATTACHMENTS
    return "\n".join(attachments)


@dataclass(frozen=True)
class OutputRecord:
    """
    One Azure DevOps work item row.
    """
    work_item_type: str
    title: str
    assigned_to: str
    created_by: str
    priority: str
    state: str
    created_date: str
    changed_date: str
    description: str

    def to_row(self) -> dict[str, str]:
        return dict(
            zip(
                c.OUTPUT_COLUMNS,
                (
                    self.work_item_type,
                    self.title,
                    self.assigned_to,
                    self.created_by,
                    self.priority,
                    self.state,
                    self.created_date,
                    self.changed_date,
                    self.description,
                ),
            )
        )


@dataclass
class EnrichmentStats:
    loaded: int = 0
    skipped: int = 0
    duplicates: int = 0
    failed: int = 0
    malformed: int = 0


@dataclass
class MergeStats:
    emitted: int = 0
    skipped: int = 0
    failed: int = 0
    unmatched: int = 0
    malformed: int = 0


@dataclass(frozen=True)
class EnrichmentResult:
    records: dict[str, EnrichmentRecord]
    stats: EnrichmentStats = field(default_factory=EnrichmentStats)


@dataclass(frozen=True)
class MergeResult:
    records: list[OutputRecord]
    stats: MergeStats = field(default_factory=MergeStats)


@dataclass(frozen=True)
class RunSummary:
    """
    End-of-run counts, logged once instead of per-row noise.
    """
    enrichment: EnrichmentStats
    merge: MergeStats
    output_path: Path

    def as_dict(self) -> dict[str, Any]:
        return {
            "enrichment_loaded": self.enrichment.loaded,
            "enrichment_skipped": self.enrichment.skipped,
            "enrichment_duplicates": self.enrichment.duplicates,
            "enrichment_failed": self.enrichment.failed,
            "enrichment_malformed": self.enrichment.malformed,
            "rows_written": self.merge.emitted,
            "rows_skipped": self.merge.skipped,
            "rows_failed": self.merge.failed,
            "rows_malformed": self.merge.malformed,
            "rows_without_enrichment": self.merge.unmatched,
            "output": str(self.output_path),
        }
