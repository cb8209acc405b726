"""
Report presentation: text summaries and polars DataFrames.
"""

from .formatting import format_megabytes, format_report_summary
from .frames import report_to_frame, reports_to_frame

__all__ = [
    "format_megabytes",
    "format_report_summary",
    "report_to_frame",
    "reports_to_frame",
]
