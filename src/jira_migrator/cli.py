from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Sequence

from jira_migrator.core.attachments import AttachmentSource, MatchMode
from jira_migrator.core.config import MigrationConfig, load_config
from jira_migrator.core.exceptions import MigrationError
from jira_migrator.core.logging import setup_logging
from jira_migrator.core.text_utils import DescriptionDefault
from jira_migrator.pipelines.clean_descriptions import clean_descriptions
from jira_migrator.pipelines.extract_attachments import extract_attachment_links
from jira_migrator.pipelines.migrate import run_migration

LOGGER = logging.getLogger(__name__)


def _path(value: str) -> Path:
    return Path(value).expanduser()


# This is a function to parse CLI arguments for the migrate / clean / extract-attachments commands.
def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="jira-migrate",
        description="Convert Jira CSV exports into an Azure DevOps work item import CSV.",
    )
    p.add_argument("--log-level", default="INFO")
    sub = p.add_subparsers(dest="command", required=True)

    m = sub.add_parser("migrate", help="Join all-fields and default-fields exports into an Azure DevOps CSV.")
    m.add_argument("--config", type=_path, help="YAML config file. Flags below override it.")
    m.add_argument("--all-fields", type=_path, help="Jira export with all fields (description, attachments).")
    m.add_argument("--default-fields", type=_path, help="Jira export with default fields.")
    m.add_argument("--output", type=_path, help="Azure DevOps CSV to write.")
    m.add_argument("--jira-base-url", help="Prefix for issue links, e.g. https://acme.atlassian.net/browse/")
    m.add_argument("--work-item-type", help="Azure DevOps work item type (default: Bug).")
    m.add_argument("--attachment-source", choices=[s.value for s in AttachmentSource])
    m.add_argument("--attachment-mode", choices=[s.value for s in MatchMode])
    m.add_argument("--description-default", choices=[s.value for s in DescriptionDefault])

    c = sub.add_parser("clean", help="Convert the Description column of a single CSV.")
    c.add_argument("--input", type=_path, required=True)
    c.add_argument("--output", type=_path, required=True)
    c.add_argument("--column", default="Description")
    c.add_argument(
        "--description-default",
        choices=[s.value for s in DescriptionDefault],
        default=DescriptionDefault.EMPTY.value,
    )

    x = sub.add_parser("extract-attachments", help="List every attachment URL in a CSV export.")
    x.add_argument("--input", type=_path, required=True)
    x.add_argument("--output", type=_path, default=Path("attachment-links.txt"))
    x.add_argument("--header-match", default="attachment")
    x.add_argument("--mode", choices=[s.value for s in MatchMode], default=MatchMode.MIXED.value)

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> MigrationConfig:
    config = load_config(args.config) if args.config else MigrationConfig()

    attachments = config.attachments
    if args.attachment_source:
        attachments = dataclasses.replace(attachments, source=AttachmentSource(args.attachment_source))
    if args.attachment_mode:
        attachments = dataclasses.replace(attachments, mode=MatchMode(args.attachment_mode))

    return config.with_overrides(
        all_fields_path=args.all_fields,
        default_fields_path=args.default_fields,
        output_path=args.output,
        jira_base_url=args.jira_base_url,
        work_item_type=args.work_item_type,
        attachments=attachments,
        description_default=DescriptionDefault(args.description_default) if args.description_default else None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "migrate":
            run_migration(build_config(args))
        elif args.command == "clean":
            clean_descriptions(
                args.input,
                args.output,
                column=args.column,
                default=DescriptionDefault(args.description_default),
            )
        elif args.command == "extract-attachments":
            extract_attachment_links(
                args.input,
                args.output,
                header_match=args.header_match,
                mode=MatchMode(args.mode),
            )
    except MigrationError as e:
        LOGGER.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
