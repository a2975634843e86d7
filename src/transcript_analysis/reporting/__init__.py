"""
Markdown report generation for the heuristic corpus analysis.
"""

from .markdown import (
    PublicationReportTemplate,
    ReportMeta,
    ReportTemplate,
    StandardReportTemplate,
    build_markdown_report,
    get_report_template,
)

__all__ = [
    "ReportMeta",
    "ReportTemplate",
    "StandardReportTemplate",
    "PublicationReportTemplate",
    "build_markdown_report",
    "get_report_template",
]
