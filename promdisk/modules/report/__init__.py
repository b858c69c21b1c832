"""
Report Module - Black Box Interface

Purpose: Turn raw probe results into a ranked text table
Interface: build_rows(), sort_rows(), render_table(), build_report(), ReportRow
Hidden: df output trimming, percentage parsing, table layout
"""

from .report import (
    HEADERS,
    MAX_CELL_WIDTH,
    ReportRow,
    build_report,
    build_rows,
    parse_percent,
    render_table,
    sort_rows,
    trim_df_output,
)

__all__ = [
    "HEADERS",
    "MAX_CELL_WIDTH",
    "ReportRow",
    "build_report",
    "build_rows",
    "parse_percent",
    "render_table",
    "sort_rows",
    "trim_df_output",
]
