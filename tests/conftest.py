from pathlib import Path

import pytest

ALL_FIELDS_CSV = (
    "Issue key,Summary,Description,Environment,Attachment,Attachment\n"
    '"BUG-1","Crash on save","h3.*Steps:*\n\nDo X","Windows 11",'
    '"https://x/a.png; https://x/b.png","01/Mar/24 10:00 AM;5570:abc;log.txt;https://x/log.txt"\n'
    '"BUG-2","Slow search","","","",""\n'
    '"","orphan","ignored","","https://x/orphan.png",""\n'
)

DEFAULT_FIELDS_CSV = (
    "Issue key,Summary,Assignee,Reporter,Priority,Status,Created,Updated\n"
    "BUG-1,Crash on save,Ana,Ben,High,Open,2024-01-02,2024-01-03 10:30\n"
    "BUG-2,Slow search,,Ben,Blocker,Done,not a date,\n"
    "BUG-3,No details,Cai,Dee,,New,,\n"
    ",missing key,,,,,,\n"
)


@pytest.fixture
def all_fields_csv(tmp_path: Path) -> Path:
    path = tmp_path / "all_fields.csv"
    path.write_text(ALL_FIELDS_CSV, encoding="utf-8")
    return path


@pytest.fixture
def default_fields_csv(tmp_path: Path) -> Path:
    path = tmp_path / "default_fields.csv"
    path.write_text(DEFAULT_FIELDS_CSV, encoding="utf-8")
    return path
