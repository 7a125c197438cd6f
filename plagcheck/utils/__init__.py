"""
Report helpers for presenting similarity results.

- Matrix and flag tables (pandas)
- CSV and flag-list export
"""

from .report_writer import (
    ReportWriter, matrix_to_dataframe, flags_to_dataframe,
    format_matrix_table, format_flag_lines
)

__all__ = [
    'ReportWriter',
    'matrix_to_dataframe',
    'flags_to_dataframe',
    'format_matrix_table',
    'format_flag_lines'
]
