"""Finding and report model for dsflint.

A finding is one reported outcome of a rule check. Findings are immutable and
append-only: linters only ever add new findings, and the report never
deduplicates or suppresses any of them. Several true findings about the same
field (for example a SUCCESS from one check and an ERROR from another) are
all kept.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from dsflint.models.enums import LintKind, LintSeverity


@dataclass(frozen=True)
class FindingLocation:
    """Where a finding was observed."""

    file_name: str
    element_id: str | None = None
    process_id: str | None = None
    reference: str | None = None

    def describe(self) -> str:
        parts = [f"file={self.file_name}"]
        if self.process_id:
            parts.append(f"process={self.process_id}")
        if self.element_id:
            parts.append(f"element={self.element_id}")
        if self.reference:
            parts.append(f"ref={self.reference}")
        return ", ".join(parts)


@dataclass(frozen=True)
class Finding:
    """Individual validation finding."""

    severity: LintSeverity
    kind: LintKind
    description: str
    location: FindingLocation

    @classmethod
    def of(
        cls,
        severity: LintSeverity,
        kind: LintKind,
        description: str,
        location: FindingLocation,
    ) -> "Finding":
        return cls(severity=severity, kind=kind, description=description, location=location)

    @classmethod
    def success(cls, description: str, location: FindingLocation) -> "Finding":
        """Create a SUCCESS finding for a passed check."""
        return cls(
            severity=LintSeverity.SUCCESS,
            kind=LintKind.SUCCESS,
            description=description,
            location=location,
        )

    @property
    def is_success(self) -> bool:
        return self.severity == LintSeverity.SUCCESS

    @property
    def file_name(self) -> str:
        return self.location.file_name

    @property
    def process_id(self) -> str | None:
        return self.location.process_id

    @property
    def text(self) -> str:
        """One-line rendering, also used as the secondary sort key."""
        return f"[{self.severity}] {self.kind} ({self.location.describe()}): {self.description}"

    def sort_key(self) -> tuple[int, str]:
        return (self.severity.rank, self.text)

    def __str__(self) -> str:
        return self.text


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Order findings by severity rank, then by rendered text."""
    return sorted(findings, key=Finding.sort_key)


def extract_process_id(findings: Iterable[Finding]) -> str | None:
    """Return the first non-empty process identifier carried by the findings."""
    for finding in findings:
        if finding.process_id:
            return finding.process_id
    return None


@dataclass(frozen=True)
class LintReport:
    """Severity-ranked collection of findings for one source (file or run)."""

    source: str
    findings: list[Finding]
    errors: int
    warnings: int
    infos: int
    successes: int

    @classmethod
    def from_findings(cls, source: str, findings: Iterable[Finding]) -> "LintReport":
        """Create a report from findings, sorting them deterministically."""
        ordered = sort_findings(findings)
        return cls(
            source=source,
            findings=ordered,
            errors=sum(1 for f in ordered if f.severity == LintSeverity.ERROR),
            warnings=sum(1 for f in ordered if f.severity == LintSeverity.WARN),
            infos=sum(1 for f in ordered if f.severity == LintSeverity.INFO),
            successes=sum(1 for f in ordered if f.severity == LintSeverity.SUCCESS),
        )

    @classmethod
    def merge(cls, source: str, reports: Iterable["LintReport"]) -> "LintReport":
        """Combine several reports into one aggregate report."""
        collected: list[Finding] = []
        for report in reports:
            collected.extend(report.findings)
        return cls.from_findings(source, collected)

    @property
    def has_errors(self) -> bool:
        """Check if report contains errors."""
        return self.errors > 0

    @property
    def has_warnings(self) -> bool:
        return self.warnings > 0

    @property
    def is_clean(self) -> bool:
        """Check if report has no findings other than successes."""
        return self.errors == 0 and self.warnings == 0 and self.infos == 0

    @property
    def total(self) -> int:
        return len(self.findings)

    @property
    def process_id(self) -> str | None:
        return extract_process_id(self.findings)

    @property
    def process_ids(self) -> list[str]:
        """Distinct process identifiers in report order."""
        seen: list[str] = []
        for finding in self.findings:
            if finding.process_id and finding.process_id not in seen:
                seen.append(finding.process_id)
        return seen

    def by_severity(self, severity: LintSeverity) -> list[Finding]:
        return [f for f in self.findings if f.severity == severity]

    def success_findings(self) -> list[Finding]:
        return self.by_severity(LintSeverity.SUCCESS)

    def other_findings(self) -> list[Finding]:
        """All findings that are not successes."""
        return [f for f in self.findings if not f.is_success]

    def at_least(self, severity: LintSeverity) -> list[Finding]:
        """Findings as severe as, or more severe than, the given level."""
        return [f for f in self.findings if f.severity.rank <= severity.rank]

    def counts(self) -> dict[str, int]:
        return {
            LintSeverity.ERROR.value: self.errors,
            LintSeverity.WARN.value: self.warnings,
            LintSeverity.INFO.value: self.infos,
            LintSeverity.SUCCESS.value: self.successes,
        }
