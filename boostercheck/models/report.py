"""
Validation findings.

Every check returns a ValidationReport instead of appending to shared
lists. The job entry points merge the reports and decide the exit code:
errors fail the run, warnings and infos never do.
"""

from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """How serious a finding is."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Finding:
    """A single validation result tied to the file or set it concerns."""

    severity: Severity
    subject: str
    message: str

    def __str__(self) -> str:
        return f"{self.subject}: {self.message}"


@dataclass
class ValidationReport:
    """Accumulated findings from one or more checks."""

    findings: list[Finding] = field(default_factory=list)

    def error(self, subject: str, message: str) -> None:
        self.findings.append(Finding(Severity.ERROR, subject, message))

    def warning(self, subject: str, message: str) -> None:
        self.findings.append(Finding(Severity.WARNING, subject, message))

    def info(self, subject: str, message: str) -> None:
        self.findings.append(Finding(Severity.INFO, subject, message))

    def _by_severity(self, severity: Severity) -> list[Finding]:
        return [f for f in self.findings if f.severity == severity]

    @property
    def errors(self) -> list[Finding]:
        return self._by_severity(Severity.ERROR)

    @property
    def warnings(self) -> list[Finding]:
        return self._by_severity(Severity.WARNING)

    @property
    def infos(self) -> list[Finding]:
        return self._by_severity(Severity.INFO)

    @property
    def has_errors(self) -> bool:
        return any(f.severity == Severity.ERROR for f in self.findings)

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        """Append another report's findings to this one and return self."""
        self.findings.extend(other.findings)
        return self

    @property
    def exit_code(self) -> int:
        return 1 if self.has_errors else 0
