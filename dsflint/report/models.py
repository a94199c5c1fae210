"""Serializable report models."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dsflint.models.enums import LintSeverity
from dsflint.models.finding import Finding, LintReport


class FindingModel(BaseModel):
    """One finding as written to a report file."""

    severity: LintSeverity
    kind: str
    description: str
    file: str
    process_id: str | None = None
    element_id: str | None = None
    reference: str | None = None

    @classmethod
    def from_finding(cls, finding: Finding) -> "FindingModel":
        location = finding.location
        return cls(
            severity=finding.severity,
            kind=finding.kind.value,
            description=finding.description,
            file=location.file_name,
            process_id=location.process_id,
            element_id=location.element_id,
            reference=location.reference,
        )


class ReportSummary(BaseModel):
    """Per-severity counts."""

    errors: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)
    infos: int = Field(default=0, ge=0)
    successes: int = Field(default=0, ge=0)

    @classmethod
    def from_report(cls, report: LintReport) -> "ReportSummary":
        return cls(
            errors=report.errors,
            warnings=report.warnings,
            infos=report.infos,
            successes=report.successes,
        )

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.infos + self.successes


class FileReport(BaseModel):
    """Findings of a single process or resource file."""

    file: str
    process_ids: list[str] = Field(default_factory=list)
    summary: ReportSummary
    findings: list[FindingModel] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: LintReport) -> "FileReport":
        return cls(
            file=report.source,
            process_ids=report.process_ids,
            summary=ReportSummary.from_report(report),
            findings=[FindingModel.from_finding(f) for f in report.findings],
        )


class ProjectReport(BaseModel):
    """Aggregate of a whole run."""

    generated_at: datetime
    project: str
    api_version: str
    summary: ReportSummary
    files: list[str] = Field(default_factory=list)
    findings: list[FindingModel] = Field(default_factory=list)

    @field_validator("api_version", mode="before")
    @classmethod
    def normalize_api_version(cls, v):
        """Accept ApiVersion members as well as plain strings."""
        return getattr(v, "value", v)
