"""JSON report models and writer."""

from dsflint.report.models import FileReport, FindingModel, ProjectReport, ReportSummary
from dsflint.report.writer import JsonReportWriter, build_project_report, report_dir_name

__all__ = [
    "FindingModel",
    "ReportSummary",
    "FileReport",
    "ProjectReport",
    "JsonReportWriter",
    "build_project_report",
    "report_dir_name",
]
