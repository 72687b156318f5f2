from __future__ import annotations

import logging
from pathlib import Path

from jira_migrator.core.constants import DESCRIPTION
from jira_migrator.core.datasource import iter_rows, load_csv, write_csv
from jira_migrator.core.text_utils import DescriptionDefault, normalize_description

LOGGER = logging.getLogger(__name__)


# This is a function to rewrite one CSV's description column and keep every other column as-is.
def clean_descriptions(
    input_path: Path,
    output_path: Path,
    *,
    column: str = DESCRIPTION,
    default: DescriptionDefault = DescriptionDefault.EMPTY,
) -> int:
    df = load_csv(input_path, role="input")
    columns = [str(col) for col in df.columns]
    if column not in columns:
        LOGGER.warning("Column %r not found in %s; copying rows unchanged", column, input_path)

    rows = []
    for row in iter_rows(df):
        if column in row:
            row[column] = normalize_description(row[column], default)
        rows.append(row)

    write_csv(rows, output_path, columns)
    LOGGER.info("Cleaned %d rows: %s", len(rows), output_path)
    return len(rows)
