import re
from pathlib import PurePosixPath

from vibe_codegen.validation.models import (
    ComponentFile,
    Severity,
    ValidationIssue,
    ValidationResult,
    is_valid,
    issue,
    score_issues,
)

WEIGHTS = {Severity.CRITICAL: 12, Severity.IMPORTANT: 6, Severity.MINOR: 2}
PASS_THRESHOLD = 85

APPROVED_FOLDERS = ("layout/", "sections/", "ui/")
REQUIRED_COMPONENTS = ["Navbar", "Footer", "Hero", "Features", "Button", "Card"]

DEFAULT_MAX_LINES = 200
APP_MAX_LINES = 50
FOLDER_MAX_LINES = {
    "components/ui/": 100,
    "components/layout/": 150,
    "components/sections/": 200,
}
# Превышение больше чем на столько строк считается критическим
CRITICAL_OVERFLOW = 50
MIN_COMPONENT_LINES = 10

HARDCODED_COLOR_RE = re.compile(r"#[0-9a-fA-F]{3,6}|rgba?\(")

SUGGESTIONS = {
    "structure": "Fix component organization: use layout/, sections/, ui/ folder structure",
    "size": "Break down large components into smaller, focused components",
    "patterns": "Update to modern React patterns: functional components, design tokens",
    "typescript": "Add proper TypeScript interfaces for component props",
}
HARDCODED_SUGGESTION = "Replace all hardcoded values with design tokens"


def _clean(path: str) -> str:
    return path.lstrip("/")


def _is_app(path: str) -> bool:
    return PurePosixPath(path).name == "App.tsx"


def _is_types_module(path: str) -> bool:
    return "types/" in path and path.endswith(".ts")


class ComponentArchitectureValidator:
    """Проверка структуры React-проекта: папки, размеры, паттерны, типизация."""

    def validate(self, files: list[ComponentFile], code_type: str = "react") -> ValidationResult:
        if code_type != "react":
            return ValidationResult(valid=True, score=100)

        files = [ComponentFile(_clean(f.path), f.content, f.line_count) for f in files]

        issues: list[ValidationIssue] = []
        issues += self._check_structure(files)
        issues += self._check_sizes(files)
        issues += self._check_patterns(files)
        issues += self._check_typescript(files)

        score = score_issues(issues, WEIGHTS)
        return ValidationResult(
            valid=is_valid(score, issues, PASS_THRESHOLD),
            score=score,
            issues=issues,
            suggestions=self._suggestions(issues),
        )

    def _check_structure(self, files: list[ComponentFile]) -> list[ValidationIssue]:
        issues = []
        paths = [f.path for f in files]

        required = {
            "src/App.tsx": any(_is_app(p) for p in paths),
            "src/components/layout/": any("components/layout/" in p for p in paths),
            "src/components/sections/": any("components/sections/" in p for p in paths),
            "src/components/ui/": any("components/ui/" in p for p in paths),
            "src/styles/design-tokens.css": any("design-tokens.css" in p for p in paths),
            "src/styles/globals.css": any("globals.css" in p for p in paths),
            "src/types/index.ts": any(_is_types_module(p) for p in paths),
        }
        for path, exists in required.items():
            if not exists:
                issues.append(issue("structure", f"Missing required file/folder: {path}", Severity.CRITICAL))

        for component in REQUIRED_COMPONENTS:
            if not any(f"{component}.tsx" in p for p in paths):
                issues.append(issue("structure", f"Missing required component: {component}", Severity.CRITICAL))

        flat = []
        for p in paths:
            if "components/" not in p or not p.endswith(".tsx"):
                continue
            rest = p.split("components/", 1)[1]
            if not rest.startswith(APPROVED_FOLDERS):
                flat.append(p)

        if flat:
            issues.append(issue(
                "structure",
                f"Found {len(flat)} components in flat structure. Use layout/, sections/, ui/ folders.",
                Severity.IMPORTANT,
            ))
        return issues

    def _max_lines(self, path: str) -> int:
        if _is_app(path):
            return APP_MAX_LINES
        for folder, limit in FOLDER_MAX_LINES.items():
            if folder in path:
                return limit
        return DEFAULT_MAX_LINES

    def _check_sizes(self, files: list[ComponentFile]) -> list[ValidationIssue]:
        issues = []
        for f in files:
            if not f.path.endswith(".tsx"):
                continue

            max_lines = self._max_lines(f.path)
            if f.line_count > max_lines:
                severity = Severity.CRITICAL if f.line_count > max_lines + CRITICAL_OVERFLOW else Severity.IMPORTANT
                issues.append(issue(
                    "size",
                    f"Component exceeds {max_lines} lines ({f.line_count} lines). "
                    "Consider breaking into smaller components.",
                    severity,
                    f.path,
                ))

            if f.line_count < MIN_COMPONENT_LINES and "components/" in f.path:
                issues.append(issue(
                    "size",
                    f"Component seems very small ({f.line_count} lines). Ensure it's complete.",
                    Severity.MINOR,
                    f.path,
                ))
        return issues

    def _check_patterns(self, files: list[ComponentFile]) -> list[ValidationIssue]:
        issues = []
        for f in files:
            if not f.path.endswith(".tsx"):
                continue
            content = f.content

            if "class " in content and "extends Component" in content:
                issues.append(issue(
                    "patterns", "Use functional components instead of class components", Severity.IMPORTANT, f.path
                ))

            if "export default" not in content and "export {" not in content:
                issues.append(issue(
                    "patterns", "Component must have proper export statement", Severity.CRITICAL, f.path
                ))

            if "className" in content and "var(--" not in content and "bg-[var(" not in content:
                issues.append(issue(
                    "patterns",
                    "Component should use design tokens instead of hardcoded values",
                    Severity.IMPORTANT,
                    f.path,
                ))

            if HARDCODED_COLOR_RE.search(content):
                issues.append(issue(
                    "patterns", "Avoid hardcoded colors. Use design tokens.", Severity.IMPORTANT, f.path
                ))

            if "React." in content and "import React" not in content:
                issues.append(issue("patterns", "Missing React import", Severity.CRITICAL, f.path))

            if _is_app(f.path) and ("useState" in content or "useEffect" in content):
                issues.append(issue(
                    "patterns",
                    "App.tsx should only compose components, not contain business logic",
                    Severity.IMPORTANT,
                    f.path,
                ))

            is_ui_button = "components/ui/" in f.path and f.path.endswith("Button.tsx")
            if is_ui_button and "variant" not in content and "size" not in content:
                issues.append(issue(
                    "patterns", "Button component should support variant and size props", Severity.IMPORTANT, f.path
                ))
        return issues

    def _check_typescript(self, files: list[ComponentFile]) -> list[ValidationIssue]:
        issues = []
        if not any(_is_types_module(f.path) for f in files):
            issues.append(issue("typescript", "Missing types file (src/types/index.ts)", Severity.CRITICAL))

        for f in files:
            if not f.path.endswith(".tsx"):
                continue
            content = f.content

            if "props" in content and "interface" not in content and "type " not in content:
                issues.append(issue(
                    "typescript",
                    "Component props should have TypeScript interface definitions",
                    Severity.IMPORTANT,
                    f.path,
                ))

            if ": any" in content:
                issues.append(issue(
                    "typescript", 'Avoid using "any" type. Use specific types instead.', Severity.MINOR, f.path
                ))

            if "function " in content and ": React.FC" not in content and "React.ReactNode" not in content:
                issues.append(issue(
                    "typescript", "Consider using explicit function component typing", Severity.MINOR, f.path
                ))
        return issues

    def _suggestions(self, issues: list[ValidationIssue]) -> list[str]:
        categories = {i.category for i in issues}
        suggestions = [text for category, text in SUGGESTIONS.items() if category in categories]
        if any("hardcoded" in i.message.lower() for i in issues):
            suggestions.append(HARDCODED_SUGGESTION)
        return suggestions
