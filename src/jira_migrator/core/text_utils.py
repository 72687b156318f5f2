"""
Jira wiki markup -> Azure DevOps (Markdown) text.

The rewrites run in a fixed order; changing the order changes the output.
"""
from __future__ import annotations

import re
from enum import Enum

from jira_migrator.core.constants import NO_DESCRIPTION


class DescriptionDefault(str, Enum):
    """
    What an empty description turns into.
    """
    PLACEHOLDER = "placeholder"
    EMPTY = "empty"


# h3. *Title:*  ->  **Title:**
_HEADING_SPAN = re.compile(r"h[34]\.\s*\*([^*\n]*)\*")
# h3. *Title without a closing asterisk
_HEADING_OPENER = re.compile(r"h[34]\.\s*\*")
# *text* -> _text_, but never touch the asterisks of a ** pair.
_EMPHASIS_SPAN = re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)")
_BLANK_LINES = re.compile(r"\n\s*\n")


def normalize_jira_markup(text: str) -> str:
    text = _HEADING_SPAN.sub(r"**\1**", text)
    text = _HEADING_OPENER.sub("**", text)
    text = _EMPHASIS_SPAN.sub(r"_\1_", text)
    # Unconditional: '#' inside URLs or words is rewritten too.
    text = text.replace("#", "-")
    text = _BLANK_LINES.sub("\n", text)
    return text.strip()


# This is a function to clean a description cell, applying the empty-input policy.
def normalize_description(
    text: str | None,
    default: DescriptionDefault = DescriptionDefault.PLACEHOLDER,
) -> str:
    if not text or not text.strip():
        return NO_DESCRIPTION if default is DescriptionDefault.PLACEHOLDER else ""
    return normalize_jira_markup(text)
