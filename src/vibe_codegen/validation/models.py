from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from vibe_codegen.parsing import GeneratedFile


class Severity(IntEnum):
    CRITICAL = 1
    IMPORTANT = 2
    MINOR = 3


class IssueType(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


ISSUE_TYPE_BY_SEVERITY = {
    Severity.CRITICAL: IssueType.ERROR,
    Severity.IMPORTANT: IssueType.WARNING,
    Severity.MINOR: IssueType.INFO,
}


@dataclass(frozen=True)
class ValidationIssue:
    type: IssueType
    category: str
    message: str
    severity: Severity
    file: str | None = None


def issue(category: str, message: str, severity: Severity, file: str | None = None) -> ValidationIssue:
    return ValidationIssue(ISSUE_TYPE_BY_SEVERITY[severity], category, message, severity, file)


@dataclass(frozen=True)
class ComponentFile:
    path: str
    content: str
    line_count: int

    @classmethod
    def from_generated(cls, file: GeneratedFile) -> "ComponentFile":
        return cls(file.path, file.content, len(file.content.split("\n")))


@dataclass
class ValidationResult:
    valid: bool
    score: int
    issues: list[ValidationIssue] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def by_severity(self, severity: Severity) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == severity]

    @property
    def has_critical(self) -> bool:
        return any(i.severity == Severity.CRITICAL for i in self.issues)


def clamp_score(score: int) -> int:
    return max(0, min(100, score))


def score_issues(issues: Iterable[ValidationIssue], weights: dict[Severity, int], start: int = 100) -> int:
    """Вычесть вес каждой проблемы из стартового балла и зажать в [0, 100]."""
    score = start
    for i in issues:
        score -= weights[i.severity]
    return clamp_score(score)


def is_valid(score: int, issues: Iterable[ValidationIssue], threshold: int) -> bool:
    return score >= threshold and not any(i.severity == Severity.CRITICAL for i in issues)
