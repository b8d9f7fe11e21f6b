from vibe_codegen.validation.architecture import ComponentArchitectureValidator
from vibe_codegen.validation.design_patterns import DesignPatternValidation, DesignPatternValidator, PatternCheck
from vibe_codegen.validation.models import (
    ComponentFile,
    IssueType,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from vibe_codegen.validation.preflight import PreflightResult, preflight_check
from vibe_codegen.validation.quality import CodeQualityValidator
from vibe_codegen.validation.standards import StandardsReport, check_modern_standards

__all__ = [
    "ComponentArchitectureValidator",
    "CodeQualityValidator",
    "DesignPatternValidator",
    "DesignPatternValidation",
    "PatternCheck",
    "ComponentFile",
    "IssueType",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "PreflightResult",
    "preflight_check",
    "StandardsReport",
    "check_modern_standards",
]
