from jira_migrator.core.attachments import (
    AttachmentSource,
    MatchMode,
    attachment_columns,
    collect_attachments,
    extract_urls,
)


def test_inline_mode_finds_http_and_https():
    cell = "see http://a/1.png and https://b/2.png\nhttps://c/3.png"
    assert extract_urls(cell, MatchMode.INLINE) == ["http://a/1.png", "https://b/2.png", "https://c/3.png"]


def test_delimited_mode_keeps_trimmed_http_segments():
    cell = "01/Mar/24 10:00 AM;5570:abc;file.png; https://x/file.png ;ftp://nope"
    assert extract_urls(cell, MatchMode.DELIMITED) == ["https://x/file.png"]


def test_mixed_mode_handles_semicolon_lists():
    assert extract_urls("https://x/a.png; https://x/b.png") == ["https://x/a.png", "https://x/b.png"]


def test_mixed_mode_finds_urls_inside_segments():
    cell = "note https://x/a.png here;https://x/b.png"
    assert extract_urls(cell, MatchMode.MIXED) == ["https://x/a.png", "https://x/b.png"]


def test_malformed_urls_pass_through():
    assert extract_urls("https://exa mple", MatchMode.INLINE) == ["https://exa"]
    assert extract_urls("http-not-a-url", MatchMode.DELIMITED) == ["http-not-a-url"]


def test_empty_cell():
    assert extract_urls("") == []
    assert extract_urls(None) == []


def test_attachment_columns_case_insensitive_substring():
    headers = ["Issue key", "Attachment", "attachment.1", "Attachments (old)", "Description"]
    assert attachment_columns(headers) == ["Attachment", "attachment.1", "Attachments (old)"]


def test_collect_preserves_column_then_cell_order_and_duplicates():
    row = {
        "Issue key": "BUG-1",
        "Attachment": "https://x/1.png;https://x/2.png",
        "Description": "https://x/in-description.png",
        "Attachment.1": "https://x/1.png",
    }
    assert collect_attachments(row) == ["https://x/1.png", "https://x/2.png", "https://x/1.png"]


def test_collect_all_columns():
    row = {
        "Issue key": "BUG-1",
        "Description": "see https://x/in-description.png",
        "Attachment": "https://x/1.png",
    }
    urls = collect_attachments(row, source=AttachmentSource.ALL)
    assert urls == ["https://x/in-description.png", "https://x/1.png"]


def test_collect_custom_header_match():
    row = {"Files": "https://x/1.png", "Attachment": "https://x/2.png"}
    assert collect_attachments(row, header_match="files") == ["https://x/1.png"]
