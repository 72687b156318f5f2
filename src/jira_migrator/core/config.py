from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from jira_migrator.core import constants as c
from jira_migrator.core.attachments import AttachmentSource, MatchMode
from jira_migrator.core.exceptions import ConfigError
from jira_migrator.core.models import ColumnMap
from jira_migrator.core.text_utils import DescriptionDefault


@dataclass(frozen=True)
class PriorityMap:
    """
    Jira priority label -> Azure DevOps numeric priority (as a string).
    Unknown or missing labels map to `default`.
    """
    mapping: Mapping[str, str] = field(default_factory=lambda: dict(c.DEFAULT_PRIORITY_MAPPING))
    default: str = c.DEFAULT_PRIORITY_MAPPING[c.DEFAULT_PRIORITY_LABEL]

    def map(self, label: str | None) -> str:
        if not label:
            return self.default
        return self.mapping.get(label.strip(), self.default)


@dataclass(frozen=True)
class AttachmentConfig:
    source: AttachmentSource = AttachmentSource.HEADER
    mode: MatchMode = MatchMode.MIXED
    header_match: str = c.DEFAULT_ATTACHMENT_HEADER


@dataclass(frozen=True)
class MigrationConfig:
    """
    Everything one migration run needs. Built from YAML and/or CLI flags.
    """
    all_fields_path: Path | None = None
    default_fields_path: Path | None = None
    output_path: Path | None = None
    jira_base_url: str = ""
    work_item_type: str = c.DEFAULT_WORK_ITEM_TYPE
    priority: PriorityMap = field(default_factory=PriorityMap)
    attachments: AttachmentConfig = field(default_factory=AttachmentConfig)
    description_default: DescriptionDefault = DescriptionDefault.PLACEHOLDER
    columns: ColumnMap = field(default_factory=ColumnMap)

    def with_overrides(self, **overrides: Any) -> MigrationConfig:
        values = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **values)

    def require_paths(self) -> tuple[Path, Path, Path]:
        missing = [
            name
            for name, value in (
                ("all_fields", self.all_fields_path),
                ("default_fields", self.default_fields_path),
                ("output", self.output_path),
            )
            if value is None
        ]
        if missing:
            raise ConfigError(f"Missing required path(s): {missing}")
        return self.all_fields_path, self.default_fields_path, self.output_path  # type: ignore[return-value]


def _enum(enum_cls: type, value: Any, key: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Invalid value for {key}: {value!r} (expected one of: {allowed})") from e


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


# This is a function to build the priority table, falling back to the Medium code for unknowns.
def parse_priority(data: Mapping[str, Any]) -> PriorityMap:
    raw_mapping = data.get("mapping")
    if raw_mapping is None:
        mapping = dict(c.DEFAULT_PRIORITY_MAPPING)
    elif isinstance(raw_mapping, Mapping) and raw_mapping:
        mapping = {str(k).strip(): str(v).strip() for k, v in raw_mapping.items()}
    else:
        raise ConfigError("priority.mapping must be a non-empty mapping")

    default = data.get("default")
    if default is None:
        default = mapping.get(c.DEFAULT_PRIORITY_LABEL)
    if default is None:
        raise ConfigError(
            f"priority.default is required when the mapping has no '{c.DEFAULT_PRIORITY_LABEL}' entry"
        )
    return PriorityMap(mapping=mapping, default=str(default).strip())


def parse_config(data: Mapping[str, Any], *, base_dir: Path | None = None) -> MigrationConfig:
    """
    Build a MigrationConfig from an already-loaded mapping.

    Relative paths are resolved against `base_dir` (the config file's folder).
    """
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration root must be a mapping")

    def _path(value: Any) -> Path | None:
        if not value:
            return None
        p = Path(str(value)).expanduser()
        if base_dir is not None and not p.is_absolute():
            p = base_dir / p
        return p

    paths = _section(data, "paths")
    attachments = _section(data, "attachments")
    columns = _section(data, "columns")

    known_columns = {f.name for f in dataclasses.fields(ColumnMap)}
    unknown = sorted(set(columns) - known_columns)
    if unknown:
        raise ConfigError(f"Unknown column mapping key(s): {unknown}")

    return MigrationConfig(
        all_fields_path=_path(paths.get("all_fields")),
        default_fields_path=_path(paths.get("default_fields")),
        output_path=_path(paths.get("output")),
        jira_base_url=str(data.get("jira_base_url") or ""),
        work_item_type=str(data.get("work_item_type") or c.DEFAULT_WORK_ITEM_TYPE),
        priority=parse_priority(_section(data, "priority")),
        attachments=AttachmentConfig(
            source=_enum(AttachmentSource, attachments.get("source", AttachmentSource.HEADER.value), "attachments.source"),
            mode=_enum(MatchMode, attachments.get("mode", MatchMode.MIXED.value), "attachments.mode"),
            header_match=str(attachments.get("header_match") or c.DEFAULT_ATTACHMENT_HEADER),
        ),
        description_default=_enum(
            DescriptionDefault,
            data.get("description_default", DescriptionDefault.PLACEHOLDER.value),
            "description_default",
        ),
        columns=ColumnMap(**{k: str(v) for k, v in columns.items()}),
    )


def load_config(path: Path) -> MigrationConfig:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}: {e}") from e

    return parse_config(data or {}, base_dir=path.resolve().parent)
