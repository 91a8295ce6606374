# CSV files and printable HTML reports built from already filtered/sorted rows
from __future__ import annotations

import html
import os
import tempfile
import webbrowser
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence

from utils.logger import get_logger

_logger = get_logger(__name__)

REPORT_DIR = os.path.join(tempfile.gettempdir(), "fakestore-admin")


class ExportError(Exception):
    """Raised when an export file cannot be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
        self.reason = reason


def csv_field(value: Any) -> str:
    """
    Render one CSV field.

    Strings holding a comma or a double quote are quoted, with inner quotes
    doubled. None is an empty field; anything else goes through str().
    """
    if value is None:
        return ""
    if isinstance(value, str):
        if "," in value or '"' in value:
            return '"' + value.replace('"', '""') + '"'
        return value
    return str(value)


def to_csv(headers: Sequence[str], rows: Sequence[Mapping[str, Any]]) -> str:
    lines = [",".join(headers)]
    lines.extend(
        ",".join(csv_field(row.get(header)) for header in headers) for row in rows
    )
    return "\n".join(lines)


def csv_filename(entity: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{entity}-{today.isoformat()}.csv"


def export_csv(
    entity: str,
    headers: Sequence[str],
    rows: Sequence[Mapping[str, Any]],
    directory: str,
    today: Optional[date] = None,
) -> Optional[str]:
    """
    Write rows to <directory>/<entity>-<YYYY-MM-DD>.csv.

    Returns the written path, or None when there is nothing to export.
    Raises ExportError when the file cannot be written.
    """
    if not rows:
        _logger.info(f"Nothing to export for {entity}.")
        return None

    path = os.path.join(directory, csv_filename(entity, today))
    try:
        os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(to_csv(headers, rows))
    except OSError as e:
        raise ExportError(path, e.strerror or str(e)) from e
    _logger.info(f"Exported {len(rows)} {entity} to {path}")
    return path


_REPORT_STYLE = """
    body { font-family: Arial, sans-serif; margin: 20px; }
    h1 { color: #333; text-align: center; }
    table { width: 100%; border-collapse: collapse; margin-top: 20px; }
    th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
    th { background-color: #f2f2f2; font-weight: bold; }
    tr:nth-child(even) { background-color: #f9f9f9; }
    .date { text-align: center; margin-top: 20px; color: #666; }
"""


def _esc(value: Any) -> str:
    return html.escape("" if value is None else str(value), quote=True)


def to_html_report(
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    generated: Optional[datetime] = None,
    auto_print: bool = True,
) -> str:
    """Build a self-contained, print-ready HTML document with one table."""
    generated = generated or datetime.now()

    head_cells = "".join(f"<th>{_esc(h)}</th>" for h in headers)
    body_rows = "\n".join(
        "<tr>" + "".join(f"<td>{_esc(cell)}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    script = "<script>window.onload = function () { window.print(); };</script>"

    parts: List[str] = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{_esc(title)}</title>",
        f"<style>{_REPORT_STYLE}</style>",
        "</head>",
        "<body>",
        f"<h1>{_esc(title)}</h1>",
        "<table>",
        f"<thead><tr>{head_cells}</tr></thead>",
        f"<tbody>\n{body_rows}\n</tbody>",
        "</table>",
        f'<div class="date">Generated on: {_esc(generated.strftime("%Y-%m-%d %H:%M"))}</div>',
    ]
    if auto_print:
        parts.append(script)
    parts.extend(["</body>", "</html>"])
    return "\n".join(parts)


def report_path(entity: str, directory: Optional[str] = None) -> str:
    """One report file per entity, overwritten by every print."""
    return os.path.join(directory or REPORT_DIR, f"{entity}-report.html")


def print_report(
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    entity: str = "report",
    opener: Callable[[str], bool] = webbrowser.open,
    directory: Optional[str] = None,
) -> bool:
    """
    Hand a report to the browser, which opens its print dialog.

    Returns False, without raising, when no browser could be opened.
    Raises ExportError when the report file cannot be written.
    """
    document = to_html_report(title, headers, rows)
    path = report_path(entity, directory)
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(document)
    except OSError as e:
        raise ExportError(path, e.strerror or str(e)) from e

    try:
        opened = opener(Path(path).resolve().as_uri())
    except webbrowser.Error as e:
        _logger.debug(f"Browser unavailable: {e}")
        opened = False

    if not opened:
        _logger.debug(f"Print of '{title}' aborted, no browser could be opened.")
        os.remove(path)
        return False

    _logger.info(f"Sent '{title}' ({len(rows)} rows) to the browser for printing.")
    return True
