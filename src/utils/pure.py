from typing import Any, List, Literal, Optional, Sequence

Align = Literal["l", "c", "r"]

_ALIGN_RULES = {
    "l": ":---",
    "c": ":---:",
    "r": "---:",
}


def md_cell(value: Any) -> str:
    """Stringify a value for a Markdown table cell; pipes would split the cell."""
    if value is None:
        return ""
    return str(value).replace("|", "\\|").replace("\n", " ")


def generate_markdown_table(
    headers: Optional[Sequence[Any]],
    rows: Sequence[Sequence[Any]],
    aligns: Optional[Sequence[Align]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: Column headers, or None to use the first row as headers.
        rows: Rows of cell values; None becomes an empty cell.
        aligns: 'l', 'c' or 'r' per column. Defaults to all left.

    Returns:
        str: Markdown formatted table, or "" when there is nothing to show.
    """
    if not rows and not headers:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    header_cells: List[str] = [md_cell(h) for h in headers]
    num_cols = len(header_cells)
    if aligns is None:
        aligns = ["l"] * num_cols
    elif len(aligns) != num_cols:
        raise ValueError("Length of aligns must match number of headers.")

    lines = [
        "| " + " | ".join(header_cells) + " |",
        "| " + " | ".join(_ALIGN_RULES[a] for a in aligns) + " |",
    ]
    lines.extend("| " + " | ".join(md_cell(c) for c in row) + " |" for row in rows)
    return "\n".join(lines)
