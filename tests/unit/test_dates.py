import pytest

from jira_migrator.core.dates import to_iso8601


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-01-02", "2024-01-02T00:00:00.000Z"),
        ("2024-01-02 10:30", "2024-01-02T10:30:00.000Z"),
        ("2024-01-02T10:30:15.250+02:00", "2024-01-02T08:30:15.250Z"),
        ("12/Mar/24 3:45 PM", "2024-03-12T15:45:00.000Z"),
        ("0099-01-01T00:00:00.000+0000", "0099-01-01T00:00:00.000Z"),
    ],
)
def test_valid_dates(value, expected):
    assert to_iso8601(value) == expected


def test_numeric_slash_dates_are_month_first():
    assert to_iso8601("01/02/2024 10:00") == "2024-01-02T10:00:00.000Z"


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "   ",
        "not a date",
        "2024-13-45",
        "now",
        "today",
        "0001-01-01T00:00:00.000+0100",
    ],
)
def test_invalid_or_missing_dates_are_empty(value):
    assert to_iso8601(value) == ""
