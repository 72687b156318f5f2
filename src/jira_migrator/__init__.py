"""Jira CSV export -> Azure DevOps CSV import migration."""

__version__ = "0.1.0"
