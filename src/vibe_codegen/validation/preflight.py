import re
from dataclasses import dataclass

MAX_FILE_CHARS = 200_000
MAX_DIV_IMBALANCE = 20
MAX_UNCLOSED_COMPONENTS = 10
MAX_BRACE_IMBALANCE = 5

SUSPICIOUS_PLACEHOLDERS = [
    re.compile(r"= undefined"),
    re.compile(r": undefined"),
    re.compile(r"\(undefined\)"),
    re.compile(r"return undefined"),
    re.compile(r"= null(?![a-zA-Z])"),
    re.compile(r": null(?![a-zA-Z])"),
]

MARKDOWN_FENCES = ["```tsx", "```typescript", "```jsx"]

FORBIDDEN_IMPORTS = [
    "lucide-react",
    "framer-motion",
    "@radix-ui",
    "@/components/ui",
    "clsx",
    "tailwind-merge",
    "shadcn",
]

EMPTY_IMPORTS = ['from ""', "from ''", "from null"]


@dataclass(frozen=True)
class PreflightResult:
    ok: bool
    error: str | None = None
    details: str | None = None


def _fail(error: str, details: str) -> PreflightResult:
    return PreflightResult(ok=False, error=error, details=details)


def _check_jsx(path: str, content: str) -> PreflightResult | None:
    if "import" not in content and "export" not in content:
        return _fail(
            f"Missing import/export statements in {path}",
            "React components must have import and export statements.",
        )

    open_divs = len(re.findall(r"<div\b", content))
    close_divs = content.count("</div>")
    if close_divs > open_divs:
        return _fail(
            f"Too many closing </div> tags in {path}",
            f"Found {close_divs} closing tags but only {open_divs} opening tags.",
        )
    if abs(open_divs - close_divs) > MAX_DIV_IMBALANCE:
        return _fail(
            f"Likely unbalanced <div> tags in {path}",
            f"Opening tags: {open_divs}, closing tags: {close_divs}. Difference is too large.",
        )

    opened = len(re.findall(r"<[A-Z][a-zA-Z0-9]*\b", content))
    closed = len(re.findall(r"</[A-Z][a-zA-Z0-9]*>", content))
    self_closing = content.count("/>")
    if closed < opened - self_closing - MAX_UNCLOSED_COMPONENTS:
        return _fail(
            f"Likely unclosed JSX elements in {path}",
            "Some React components may not be properly closed.",
        )
    return None


def _check_file(path: str, content) -> PreflightResult | None:
    if not isinstance(content, str):
        return _fail(
            f"Invalid file content type in {path}",
            f"Expected string, got {type(content).__name__}",
        )

    if not content.strip():
        return _fail(f"Empty file: {path}", "Generated files must contain code.")

    if any(p.search(content) for p in SUSPICIOUS_PLACEHOLDERS):
        return _fail(
            f"Suspicious placeholder detected in {path}",
            "The generated code contains undefined or null values. "
            "This usually indicates incomplete generation.",
        )

    if any(fence in content for fence in MARKDOWN_FENCES):
        return _fail(
            f"Markdown code fences found in {path}",
            "The code is wrapped in markdown. This indicates a formatting error.",
        )

    if len(content) > MAX_FILE_CHARS:
        return _fail(
            f"File too large: {path}",
            f"File is {len(content)} characters (max: {MAX_FILE_CHARS:,}). "
            "This may indicate runaway generation.",
        )

    if path.endswith((".tsx", ".jsx")):
        result = _check_jsx(path, content)
        if result:
            return result

    for forbidden in FORBIDDEN_IMPORTS:
        if f'from "{forbidden}"' in content or f"from '{forbidden}'" in content:
            return _fail(
                f"Forbidden import detected in {path}",
                f'Cannot import from "{forbidden}". Only "react" and relative imports are allowed.',
            )

    if any(e in content for e in EMPTY_IMPORTS):
        return _fail(
            f"Invalid empty import in {path}",
            "Found an import statement with an empty or null source.",
        )

    if path.endswith((".tsx", ".ts")):
        open_braces = content.count("{")
        close_braces = content.count("}")
        if abs(open_braces - close_braces) > MAX_BRACE_IMBALANCE:
            return _fail(
                f"Likely unbalanced braces in {path}",
                f"Opening braces: {open_braces}, closing braces: {close_braces}.",
            )
    return None


def preflight_check(files: dict[str, str]) -> PreflightResult:
    """Проверить файлы перед передачей в превью, чтобы сломанный код не ронял песочницу."""
    if not files:
        return _fail("No files were generated", "The model did not return any code files.")

    if "src/App.tsx" not in files and "/src/App.tsx" not in files:
        return _fail(
            "Missing required file: src/App.tsx",
            "At least an App.tsx file is required for the preview to work.",
        )

    for path, content in files.items():
        result = _check_file(path, content)
        if result:
            return result
    return PreflightResult(ok=True)
