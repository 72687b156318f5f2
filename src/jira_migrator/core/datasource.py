from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence

import pandas as pd

from jira_migrator.core.exceptions import InputFileNotFoundError, InputFormatError, OutputWriteError

LOGGER = logging.getLogger(__name__)


def _safe_str(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


MALFORMED_ROWS = "malformed_rows"


def load_csv(csv_path: Path, *, role: str = "CSV") -> pd.DataFrame:
    """
    Read a Jira CSV export with every cell as a string.

    Empty cells stay "" (no NaN). Repeated headers such as "Attachment" are
    kept apart by pandas as "Attachment", "Attachment.1", ...
    Lines with more fields than the header are logged and dropped; their
    count is kept in ``df.attrs["malformed_rows"]``.
    """
    if not csv_path.is_file():
        raise InputFileNotFoundError(csv_path, role)

    bad_lines: list[list[str]] = []

    def _drop_bad_line(fields: list[str]) -> None:
        bad_lines.append(fields)
        LOGGER.warning(
            "Dropping malformed %s row (%d fields, starts with %r)",
            role,
            len(fields),
            fields[0] if fields else "",
        )
        return None

    try:
        df = pd.read_csv(
            csv_path,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            encoding_errors="replace",
            engine="python",
            on_bad_lines=_drop_bad_line,
        )
    except pd.errors.EmptyDataError as e:
        raise InputFormatError(f"{role} file has no header row: {csv_path}") from e
    except pd.errors.ParserError as e:
        raise InputFormatError(f"{role} file is not valid CSV: {csv_path}: {e}") from e

    df.attrs[MALFORMED_ROWS] = len(bad_lines)
    LOGGER.info(
        "Loaded %s %s (rows=%d, cols=%d, malformed=%d)",
        role,
        csv_path,
        df.shape[0],
        df.shape[1],
        len(bad_lines),
    )
    LOGGER.debug("%s headers: %s", role, ", ".join(map(str, df.columns)))
    return df


def malformed_rows(df: pd.DataFrame) -> int:
    return int(df.attrs.get(MALFORMED_ROWS, 0))


# This is a function to stream rows as plain dicts, in file order.
def iter_rows(df: pd.DataFrame) -> Iterator[dict[str, str]]:
    columns = [str(col) for col in df.columns]
    for values in df.itertuples(index=False, name=None):
        yield {col: _safe_str(v) for col, v in zip(columns, values)}


def read_rows(csv_path: Path, *, role: str = "CSV") -> Iterator[dict[str, str]]:
    return iter_rows(load_csv(csv_path, role=role))


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; give the output the mode a plain open() would.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write(out_path: Path, write) -> None:
    out_path = Path(out_path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent
        )
    except OSError as e:
        raise OutputWriteError(out_path, str(e)) from e

    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        write(tmp_path)
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, out_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise OutputWriteError(out_path, str(e)) from e
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def write_csv(rows: Iterable[Mapping[str, Any]], out_path: Path, columns: Sequence[str]) -> None:
    """
    Write rows with an explicit column order.

    The file is written next to `out_path` and renamed into place, so a failed
    write never leaves a partial file at the final path.
    """
    df = pd.DataFrame(list(rows), columns=list(columns))
    _atomic_write(out_path, lambda p: df.to_csv(p, index=False, encoding="utf-8"))


def write_lines(lines: Iterable[str], out_path: Path) -> None:
    text = "\n".join(lines)
    _atomic_write(out_path, lambda p: p.write_text(text, encoding="utf-8"))
