import re
from dataclasses import replace

from vibe_codegen.parsing import GeneratedFile
from vibe_codegen.validation.architecture import ComponentArchitectureValidator
from vibe_codegen.validation.models import (
    ComponentFile,
    Severity,
    ValidationIssue,
    ValidationResult,
    is_valid,
    issue,
    score_issues,
)

WEIGHTS = {Severity.CRITICAL: 15, Severity.IMPORTANT: 8, Severity.MINOR: 3}
PASS_THRESHOLD = 80

MIN_FILES = {"html": 3, "react": 5}
REQUIRED_HTML_FILES = ["index.html", ".css", ".js"]
REQUIRED_REACT_COMPONENTS = ["App.tsx", "Navbar", "Hero", "Features", "Footer"]

SEMANTIC_TAGS = ["<header>", "<nav>", "<main>", "<section>", "<footer>"]
HARDCODED_COLOR_RE = re.compile(r"#[0-9a-fA-F]{3,6}|rgb\(|rgba\([^)]*255[^)]*\)")

MARKUP_SUFFIXES = (".html", ".tsx", ".jsx")
COMPONENT_SUFFIXES = (".tsx", ".jsx")


def _has_any(content: str, needles: list[str]) -> bool:
    return any(n in content for n in needles)


class CodeQualityValidator:
    """Общая проверка качества: структура, дизайн, современные практики, доступность."""

    def __init__(self, architecture: ComponentArchitectureValidator | None = None):
        self.architecture = architecture or ComponentArchitectureValidator()

    def validate(self, files: list[GeneratedFile], code_type: str) -> ValidationResult:
        issues: list[ValidationIssue] = []
        start = 100

        if code_type == "react":
            components = [ComponentFile.from_generated(f) for f in files]
            architecture = self.architecture.validate(components, code_type)
            issues += [replace(i, category="architecture") for i in architecture.issues]
            # Архитектура ограничивает итоговый балл сверху
            start = min(start, architecture.score)

        issues += self._check_structure(files, code_type)
        issues += self._check_design(files)
        issues += self._check_modern(files)
        issues += self._check_accessibility(files)

        score = score_issues(issues, WEIGHTS, start=start)
        return ValidationResult(
            valid=is_valid(score, issues, PASS_THRESHOLD),
            score=score,
            issues=issues,
            suggestions=self._suggestions(issues, code_type),
        )

    def _check_structure(self, files: list[GeneratedFile], code_type: str) -> list[ValidationIssue]:
        issues = []
        min_files = MIN_FILES.get(code_type)

        if code_type == "html":
            if len(files) < min_files:
                issues.append(issue(
                    "structure",
                    f"HTML projects must have at least {min_files} files, found {len(files)}",
                    Severity.CRITICAL,
                ))

            for required in REQUIRED_HTML_FILES:
                if required == "index.html":
                    found = any("index.html" in f.path for f in files)
                else:
                    found = any(f.path.endswith(required) for f in files)
                if not found:
                    issues.append(issue("structure", f"Missing required file type: {required}", Severity.CRITICAL))

            for f in files:
                if f.path.endswith(".html") and ("<style>" in f.content or "<script>" in f.content):
                    issues.append(issue(
                        "structure", "Avoid inline styles and scripts. Use external files.", Severity.IMPORTANT, f.path
                    ))

        if code_type == "react":
            if len(files) < min_files:
                issues.append(issue(
                    "structure",
                    f"React projects must have at least {min_files} component files, found {len(files)}",
                    Severity.CRITICAL,
                ))

            for required in REQUIRED_REACT_COMPONENTS:
                if not any(required in f.path for f in files):
                    issues.append(issue(
                        "structure", f"Missing required React component: {required}", Severity.CRITICAL
                    ))

            has_tokens = any(
                "design-tokens" in f.path
                or "tokens.css" in f.path
                or "--primary-" in f.content
                or "--space-" in f.content
                for f in files
            )
            if not has_tokens:
                issues.append(issue(
                    "structure", "Missing design tokens system (design-tokens.css)", Severity.CRITICAL
                ))

            for f in files:
                if not f.path.endswith(COMPONENT_SUFFIXES):
                    continue
                if "export default" in f.content and "import" not in f.content:
                    issues.append(issue(
                        "structure", "Component should have proper imports", Severity.MINOR, f.path
                    ))
        return issues

    def _check_design(self, files: list[GeneratedFile]) -> list[ValidationIssue]:
        styled = [f for f in files if f.path.endswith(".css") or "style" in f.content]
        if not styled:
            return [issue("design", "No CSS files found for styling", Severity.CRITICAL)]

        issues = []
        for f in styled:
            content = f.content.lower()

            if not _has_any(content, ["grid", "flexbox", "flex"]):
                issues.append(issue(
                    "design", "Missing modern layout methods (CSS Grid or Flexbox)", Severity.CRITICAL, f.path
                ))

            if not _has_any(content, ["transition", "animation", "@keyframes", "transform"]):
                issues.append(issue(
                    "design", "Missing smooth transitions and animations", Severity.IMPORTANT, f.path
                ))

            if not _has_any(content, ["gradient", "rgba", "hsla", "var(--", "hsl("]):
                issues.append(issue(
                    "design", "Missing modern color schemes or gradients", Severity.IMPORTANT, f.path
                ))

            if not _has_any(content, [":hover", "hover:"]):
                issues.append(issue(
                    "design", "Missing hover effects for interactive elements", Severity.IMPORTANT, f.path
                ))

            if not _has_any(content, ["@media", "sm:", "md:", "lg:", "clamp("]):
                issues.append(issue(
                    "design", "Missing responsive design patterns", Severity.CRITICAL, f.path
                ))

            outdated = (
                ("table" in content and "layout" in content)
                or "float:" in content
                or ("position: absolute" in content and "top: 50%" in content)
            )
            if outdated:
                issues.append(issue(
                    "design", "Contains outdated CSS layout patterns", Severity.IMPORTANT, f.path
                ))
        return issues

    def _check_modern(self, files: list[GeneratedFile]) -> list[ValidationIssue]:
        issues = []

        for f in files:
            content = f.content.lower()
            if f.path.endswith(".html") and not _has_any(content, SEMANTIC_TAGS):
                issues.append(issue(
                    "modern",
                    "Missing semantic HTML elements (header, nav, main, section, footer)",
                    Severity.IMPORTANT,
                    f.path,
                ))
            if f.path.endswith(".css") and "@font-face" in content and "font-display" not in content:
                issues.append(issue(
                    "modern", "Consider adding font-display: swap for better performance", Severity.MINOR, f.path
                ))

        for f in files:
            if not f.path.endswith(COMPONENT_SUFFIXES):
                continue
            content = f.content

            if "class " in content and "extends Component" in content:
                issues.append(issue(
                    "modern",
                    "Consider using functional components instead of class components",
                    Severity.IMPORTANT,
                    f.path,
                ))

            untyped_props = "props" in content and "interface" not in content and "type" not in content
            if f.path.endswith(".tsx") and untyped_props:
                issues.append(issue(
                    "modern", "Consider adding TypeScript interfaces for props", Severity.MINOR, f.path
                ))

            hardcoded = (
                HARDCODED_COLOR_RE.search(content)
                or "color: black" in content
                or "color: white" in content
            )
            if hardcoded:
                issues.append(issue(
                    "modern", "Avoid hardcoded colors. Use design tokens instead.", Severity.IMPORTANT, f.path
                ))
        return issues

    def _check_accessibility(self, files: list[GeneratedFile]) -> list[ValidationIssue]:
        issues = []
        for f in files:
            if not f.path.endswith(MARKUP_SUFFIXES):
                continue
            content = f.content.lower()

            if "<img" in content and "alt=" not in content:
                issues.append(issue(
                    "accessibility", "Images should have alt attributes for accessibility", Severity.IMPORTANT, f.path
                ))

            if "onclick" in content and "onkeypress" not in content:
                issues.append(issue(
                    "accessibility",
                    "Interactive elements should support keyboard navigation",
                    Severity.MINOR,
                    f.path,
                ))

            if "<input" in content and "label" not in content and "aria-label" not in content:
                issues.append(issue(
                    "accessibility", "Form inputs should have associated labels", Severity.IMPORTANT, f.path
                ))

            if "<h1>" in content and "<h3>" in content and "<h2>" not in content:
                issues.append(issue(
                    "accessibility", "Heading hierarchy should be logical (h1 → h2 → h3)", Severity.IMPORTANT, f.path
                ))
        return issues

    def _suggestions(self, issues: list[ValidationIssue], code_type: str) -> list[str]:
        suggestions = []
        categories = {i.category for i in issues}
        architecture = [i for i in issues if i.category == "architecture"]

        if any(i.severity == Severity.CRITICAL for i in issues):
            suggestions.append("CRITICAL: Fix structural issues before proceeding")

        if architecture:
            suggestions.append(
                "Refactor component architecture: use proper folder structure (layout/, sections/, ui/)"
            )
            if any("exceeds" in i.message for i in architecture):
                suggestions.append("Break down large components into smaller, focused components")
            if any("TypeScript" in i.message for i in architecture):
                suggestions.append("Add proper TypeScript interfaces for all component props")

        if "design" in categories:
            suggestions.append("Add modern design patterns: CSS Grid/Flexbox, gradients, animations")

        if "modern" in categories:
            suggestions.append("Update to modern development practices and remove outdated patterns")

        if code_type == "react" and any("design-tokens" in i.message for i in issues):
            suggestions.append("Implement comprehensive design token system")

        if "accessibility" in categories:
            suggestions.append("Improve accessibility with proper ARIA labels and semantic HTML")

        return suggestions
