"""
Aggregation, ranking and rendering of probe results.
"""

import io
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from promdisk.modules.probe import ProbeResult

logger = logging.getLogger(__name__)

HEADERS = ["KUBECONFIG", "POD", "(Size   Used    Avail   Use%) df -h", "du -sh /prometheus"]
MAX_CELL_WIDTH = 60
DF_FIELDS = 5

_PERCENT = re.compile(r"\d+%")


@dataclass(frozen=True)
class ReportRow:
    """A successful probe, trimmed and ready for display."""

    config: str
    pod: str
    df_output: str
    du_output: str
    percent: int

    def cells(self) -> List[str]:
        return [self.config, self.pod, self.df_output, self.du_output]


def trim_df_output(df_output: str) -> str:
    """Collapse df output to its last five fields (size used avail use% mount)."""
    fields = df_output.split()
    if len(fields) > DF_FIELDS - 1:
        fields = fields[-DF_FIELDS:]
    return " ".join(fields)


def parse_percent(df_output: str) -> Optional[int]:
    """Return the first ``N%`` value in the text, or None if there is none."""
    match = _PERCENT.search(df_output)
    if match is None:
        return None
    return int(match.group()[:-1])


def build_rows(results: Iterable[ProbeResult]) -> List[ReportRow]:
    """
    Turn probe results into report rows.

    Results missing either output are dropped. Rows whose df output has no
    percentage are dropped with a warning since they cannot be ranked.
    """
    rows = []
    for result in results:
        if not result.ok:
            continue
        df_output = trim_df_output(result.df_output)
        percent = parse_percent(df_output)
        if percent is None:
            logger.warning(
                f"kubeconfig: {result.config}, pod: {result.pod}, "
                f"no usage percentage in df output {df_output!r}, skipping"
            )
            continue
        rows.append(ReportRow(result.config, result.pod, df_output, result.du_output, percent))
    return rows


def sort_rows(rows: Iterable[ReportRow]) -> List[ReportRow]:
    """Order rows by usage percentage, fullest first. Ties keep their order."""
    return sorted(rows, key=lambda row: row.percent, reverse=True)


def render_table(rows: Iterable[ReportRow]) -> str:
    """Render rows as a plain, right-aligned text table."""
    table = Table(
        box=box.SIMPLE,
        show_edge=False,
        header_style="",
        pad_edge=False,
    )
    for header in HEADERS:
        table.add_column(header, justify="right", max_width=MAX_CELL_WIDTH, overflow="fold")

    for row in rows:
        # Text() keeps brackets in paths from being read as markup
        table.add_row(*(Text(cell) for cell in row.cells()))

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=len(HEADERS) * (MAX_CELL_WIDTH + 3),
        color_system=None,
        force_terminal=False,
        highlight=False,
        emoji=False,
    )
    console.print(table)
    return "\n".join(line.rstrip() for line in buffer.getvalue().splitlines()).strip("\n")


def build_report(results: Iterable[ProbeResult]) -> str:
    """Filter, rank and render probe results in one step."""
    return render_table(sort_rows(build_rows(results)))
