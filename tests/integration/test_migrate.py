from pathlib import Path

import pandas as pd
import pytest

from jira_migrator.core.config import MigrationConfig
from jira_migrator.core.constants import OUTPUT_COLUMNS
from jira_migrator.core.exceptions import InputFileNotFoundError
from jira_migrator.pipelines.merge import split_description
from jira_migrator.pipelines.migrate import run_migration

BASE_URL = "https://acme.atlassian.net/browse/"


def _config(all_fields: Path, default_fields: Path, output: Path) -> MigrationConfig:
    return MigrationConfig(
        all_fields_path=all_fields,
        default_fields_path=default_fields,
        output_path=output,
        jira_base_url=BASE_URL,
    )


def test_end_to_end(tmp_path, all_fields_csv, default_fields_csv):
    out = tmp_path / "out" / "azure_output.csv"

    summary = run_migration(_config(all_fields_csv, default_fields_csv, out))

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert list(df.columns) == OUTPUT_COLUMNS
    assert df["Title"].tolist() == ["Crash on save", "Slow search", "No details"]
    assert df["Priority"].tolist() == ["2", "3", "3"]
    assert df["Created Date"].tolist() == ["2024-01-02T00:00:00.000Z", "", ""]
    assert df["Changed Date"].tolist()[0] == "2024-01-03T10:30:00.000Z"
    assert set(df["Work Item Type"]) == {"Bug"}

    bug1 = split_description(df["Description"][0])
    assert bug1 == {
        "Description": "**Steps:**\nDo X",
        "Environment": "Windows 11",
        "Original Issue": BASE_URL + "BUG-1",
        "Attachments": "https://x/a.png\nhttps://x/b.png\nhttps://x/log.txt",
    }

    bug2 = split_description(df["Description"][1])
    assert bug2["Description"] == "No description available."
    assert bug2["Environment"] == "Not Provided"
    assert bug2["Attachments"] == "No Attachments"

    bug3 = split_description(df["Description"][2])
    assert bug3["Environment"] == ""
    assert bug3["Attachments"] == "No Attachments"

    assert summary.enrichment.loaded == 2
    assert summary.enrichment.skipped == 1
    assert summary.merge.emitted == 3
    assert summary.merge.skipped == 1
    assert summary.merge.unmatched == 1
    assert summary.as_dict()["rows_written"] == 3


def test_missing_input_writes_nothing(tmp_path, default_fields_csv):
    out = tmp_path / "azure_output.csv"
    with pytest.raises(InputFileNotFoundError, match="all fields"):
        run_migration(_config(tmp_path / "missing.csv", default_fields_csv, out))
    assert not out.exists()


def test_row_with_extra_fields_is_dropped_not_fatal(tmp_path, all_fields_csv):
    default_fields = tmp_path / "default.csv"
    default_fields.write_text(
        "Issue key,Summary,Priority\nA-1,one,High\nA-2,two,High,EXTRA\nA-3,three,Low\n",
        encoding="utf-8",
    )
    out = tmp_path / "azure_output.csv"

    summary = run_migration(_config(all_fields_csv, default_fields, out))

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert df["Title"].tolist() == ["one", "three"]
    assert df["Priority"].tolist() == ["2", "4"]
    assert summary.merge.malformed == 1
    assert summary.enrichment.malformed == 0
    assert summary.as_dict()["rows_malformed"] == 1
