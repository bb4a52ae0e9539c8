"""Plain-text table of open pull requests."""

from typing import Sequence

from pr_view.models import FetchOutcome

TITLE_LIMIT = 60
ELLIPSIS = "..."
HEADERS = ("REPO", "URL", "TITLE")
MIN_WIDTHS = (4, 3, 5)
COLUMN_GAP = "  "

Row = tuple[str, str, str]


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, marking the cut with '...'."""
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return text[:limit]
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def build_rows(outcomes: Sequence[FetchOutcome]) -> list[Row]:
    rows: list[Row] = []
    for outcome in outcomes:
        if outcome.error is not None:
            rows.append((outcome.ref, "", f"(error: {outcome.error})"))
        elif not outcome.pull_requests:
            rows.append((outcome.ref, "", "(no open PRs)"))
        else:
            for pr in outcome.pull_requests:
                rows.append((outcome.ref, pr.url, truncate(pr.title, TITLE_LIMIT)))
    return rows


def column_widths(rows: Sequence[Row]) -> list[int]:
    """Widest cell per column, never narrower than the column minimum."""
    widths = list(MIN_WIDTHS)
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return widths


def _format_row(cells: Sequence[str], widths: Sequence[int]) -> str:
    return COLUMN_GAP.join(cell.ljust(w) for cell, w in zip(cells, widths))


def render_table(outcomes: Sequence[FetchOutcome]) -> str:
    """Header, separator and one line per row, newline-terminated."""
    rows = build_rows(outcomes)
    widths = column_widths(rows)
    lines = [
        _format_row(HEADERS, widths),
        COLUMN_GAP.join("-" * w for w in widths),
    ]
    lines.extend(_format_row(row, widths) for row in rows)
    return "\n".join(lines) + "\n"
