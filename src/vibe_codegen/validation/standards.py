from dataclasses import dataclass, field

from vibe_codegen.parsing import GeneratedFile

PASS_THRESHOLD = 80
MIN_FILES = 3


@dataclass
class StandardsReport:
    passed: bool
    score: int
    patterns: dict[str, bool] = field(default_factory=dict)
    issues: list[str] = field(default_factory=list)


# (ключ, штраф, сообщение)
CHECKS = [
    ("tailwind", 25, "Missing Tailwind CSS for modern styling"),
    ("gradients", 20, "Missing gradient backgrounds for visual depth"),
    ("glassmorphism", 15, "Missing glassmorphism effects (backdrop-blur, transparency)"),
    ("animations", 20, "Missing smooth hover animations and transitions"),
    ("responsive", 15, "Missing responsive design patterns"),
    ("typography", 5, "Missing modern typography with proper spacing"),
]


def detect_patterns(content: str) -> dict[str, bool]:
    return {
        "tailwind": "tailwind" in content or "bg-" in content or "text-" in content,
        "gradients": "gradient-to-" in content or "linear-gradient" in content,
        "glassmorphism": "backdrop-blur" in content and "bg-white/" in content,
        "animations": "transition" in content or "animate-" in content or "hover:" in content,
        "responsive": "md:" in content or "lg:" in content or "@media" in content,
        "typography": "font-" in content and "text-" in content and "leading-" in content,
    }


def check_modern_standards(files: list[GeneratedFile]) -> StandardsReport:
    """Быстрая проверка «современности» результата; по ней вызывающий решает, нужен ли повтор."""
    content = " ".join(f.content for f in files).lower()
    patterns = detect_patterns(content)

    score = 100
    issues = []
    for key, penalty, message in CHECKS:
        if not patterns[key]:
            score -= penalty
            issues.append(message)

    if len(files) < MIN_FILES:
        score -= 20
        issues.append(f"Insufficient file structure (needs minimum {MIN_FILES} files)")

    score = max(0, score)
    return StandardsReport(
        passed=score >= PASS_THRESHOLD and patterns["tailwind"],
        score=score,
        patterns=patterns,
        issues=issues,
    )
