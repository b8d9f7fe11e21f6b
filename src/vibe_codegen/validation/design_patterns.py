from dataclasses import dataclass, field
from enum import Enum

from vibe_codegen.parsing import GeneratedFile
from vibe_codegen.validation.models import Severity, ValidationResult, clamp_score, issue


class Importance(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    NICE_TO_HAVE = "nice-to-have"


DEDUCTIONS = {Importance.CRITICAL: 20, Importance.IMPORTANT: 12, Importance.NICE_TO_HAVE: 5}
SEVERITY_BY_IMPORTANCE = {
    Importance.CRITICAL: Severity.CRITICAL,
    Importance.IMPORTANT: Severity.IMPORTANT,
    Importance.NICE_TO_HAVE: Severity.MINOR,
}
PASS_THRESHOLD = 80


@dataclass(frozen=True)
class PatternCheck:
    pattern: str
    found: bool
    importance: Importance
    description: str


@dataclass
class DesignPatternValidation(ValidationResult):
    patterns: list[PatternCheck] = field(default_factory=list)


def _has_gradients(css: str) -> bool:
    return "linear-gradient" in css or "radial-gradient" in css or "gradient-to-" in css


def _has_glassmorphism(css: str) -> bool:
    return "backdrop-filter" in css or "blur" in css or ("rgba" in css and "0.1" in css)


def _has_animations(css: str) -> bool:
    return any(k in css for k in ("transition", "cubic-bezier", "animation", "transform"))


def _has_typography(css: str) -> bool:
    return any(k in css for k in ("letter-spacing", "font-weight", "line-height", "inter", "poppins"))


def _has_responsive(css: str) -> bool:
    return any(k in css for k in ("@media", "clamp", "grid", "flex"))


def _has_modern_colors(css: str) -> bool:
    return "hsl" in css or "rgba" in css or "var(--" in css


# (название, важность, описание, проверка, подсказка)
PATTERNS = [
    (
        "Gradient Backgrounds", Importance.CRITICAL,
        "Modern gradient backgrounds for visual depth", _has_gradients,
        "Add gradient backgrounds: linear-gradient(135deg, #6366f1 0%, #8b5cf6 100%)",
    ),
    (
        "Glassmorphism Effects", Importance.IMPORTANT,
        "Glassmorphism cards with blur and transparency", _has_glassmorphism,
        "Implement glassmorphism: backdrop-filter: blur(16px); background: rgba(255,255,255,0.1)",
    ),
    (
        "Smooth Animations", Importance.CRITICAL,
        "Smooth hover effects and transitions", _has_animations,
        "Add smooth transitions: transition: all 0.3s cubic-bezier(0.4, 0, 0.2, 1)",
    ),
    (
        "Modern Typography", Importance.IMPORTANT,
        "Professional typography with proper spacing", _has_typography,
        "Use modern typography: letter-spacing, font-weight variations, line-height",
    ),
    (
        "Responsive Design", Importance.CRITICAL,
        "Mobile-first responsive layouts", _has_responsive,
        "Add responsive layouts: CSS Grid, Flexbox, media queries, clamp()",
    ),
    (
        "Modern Color System", Importance.IMPORTANT,
        "Professional color palette with design tokens", _has_modern_colors,
        "Use design tokens: CSS custom properties with HSL values",
    ),
]


class DesignPatternValidator:
    """Наличие современных CSS-паттернов по фиксированной таблице весов."""

    def validate(self, files: list[GeneratedFile]) -> DesignPatternValidation:
        styled = [
            f for f in files
            if f.path.endswith(".css") or "className" in f.content or "style" in f.content
        ]
        css = "\n".join(f.content for f in styled).lower()

        patterns = []
        issues = []
        suggestions = []
        score = 100

        for name, importance, description, check, suggestion in PATTERNS:
            found = check(css)
            patterns.append(PatternCheck(name, found, importance, description))
            if not found:
                score -= DEDUCTIONS[importance]
                issues.append(issue("design", f"Missing pattern: {name}", SEVERITY_BY_IMPORTANCE[importance]))
                suggestions.append(suggestion)

        score = clamp_score(score)
        criticals_found = all(p.found for p in patterns if p.importance is Importance.CRITICAL)
        return DesignPatternValidation(
            valid=score >= PASS_THRESHOLD and criticals_found,
            score=score,
            issues=issues,
            suggestions=suggestions,
            patterns=patterns,
        )
