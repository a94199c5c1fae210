"""JSON report writer.

Layout below the output directory::

    <file-stem>/findings.json   all findings of one file
    <file-stem>/success.json    only its SUCCESS findings
    <file-stem>/other.json      everything else
    aggregate.json              the whole run
"""

import logging
import re
from pathlib import Path

from pydantic import BaseModel

from dsflint.common.exceptions import ReportError
from dsflint.models.finding import LintReport
from dsflint.report.models import FileReport, FindingModel, ProjectReport, ReportSummary
from dsflint.runner import ProjectLintResult

logger = logging.getLogger(__name__)

AGGREGATE_FILE_NAME = "aggregate.json"
FINDINGS_FILE_NAME = "findings.json"
SUCCESS_FILE_NAME = "success.json"
OTHER_FILE_NAME = "other.json"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def report_dir_name(file_name: str) -> str:
    """Directory name for a file's reports: the file stem, made filesystem safe."""
    stem = Path(file_name).stem or file_name
    return _UNSAFE_CHARS.sub("_", stem)


def build_project_report(result: ProjectLintResult) -> ProjectReport:
    aggregate = result.aggregate
    return ProjectReport(
        generated_at=result.timestamp,
        project=result.project_name,
        api_version=result.api_version,
        summary=ReportSummary.from_report(aggregate),
        files=[report.source for report in result.file_reports],
        findings=[FindingModel.from_finding(f) for f in aggregate.findings],
    )


class JsonReportWriter:
    """Writes per-file and aggregate JSON reports into ``output_dir``."""

    def __init__(self, output_dir: Path, indent: int = 2):
        self.output_dir = output_dir
        self.indent = indent

    def write(self, result: ProjectLintResult) -> list[Path]:
        """
        Write every report of a run.

        Returns:
            Paths of all files written, aggregate last

        Raises:
            ReportError: If a report file cannot be written
        """
        written: list[Path] = []
        used: set[str] = set()
        for report in result.file_reports:
            written.extend(self.write_file_report(report, self._unique_dir_name(report.source, used)))
        written.append(self._dump(self.output_dir / AGGREGATE_FILE_NAME, build_project_report(result)))
        logger.info(f"Wrote {len(written)} report files to {self.output_dir}")
        return written

    def write_file_report(self, report: LintReport, dir_name: str | None = None) -> list[Path]:
        directory = self.output_dir / (dir_name or report_dir_name(report.source))
        success = LintReport.from_findings(report.source, report.success_findings())
        other = LintReport.from_findings(report.source, report.other_findings())
        return [
            self._dump(directory / FINDINGS_FILE_NAME, FileReport.from_report(report)),
            self._dump(directory / SUCCESS_FILE_NAME, FileReport.from_report(success)),
            self._dump(directory / OTHER_FILE_NAME, FileReport.from_report(other)),
        ]

    def _unique_dir_name(self, source: str, used: set[str]) -> str:
        base = report_dir_name(source)
        name = base
        counter = 2
        while name in used:
            name = f"{base}_{counter}"
            counter += 1
        used.add(name)
        return name

    def _dump(self, path: Path, model: BaseModel) -> Path:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(model.model_dump_json(indent=self.indent), encoding="utf-8")
        except OSError as e:
            raise ReportError(f"Failed to write report {path}: {e}", output_path=str(path)) from e
        logger.debug(f"Wrote {path}")
        return path
