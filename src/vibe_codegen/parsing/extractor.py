import re
from collections.abc import Callable
from dataclasses import dataclass, field

from vibe_codegen.parsing.schemas import DiagnosticInfo, ExtractionMethod, GeneratedFile

FILE_MARKER_RE = re.compile(r"\[FILE:([^\]]+)\](.*?)\[/FILE\]", re.DOTALL)

# ```lang  // path/to/file.ext
CODE_BLOCK_RE = re.compile(
    r"```(\w+)?[^\S\n]*\n?[^\S\n]*(?://[^\S\n]*([^\n]+?)[^\S\n]*\n)?(.*?)```",
    re.DOTALL,
)

HTML_SIGNATURE_RE = re.compile(r"<html|<!doctype", re.IGNORECASE)
CSS_SIGNATURE_RE = re.compile(r"\{[^{}]*?[\w-]+\s*:\s*[^;{}]+;[^{}]*\}")
JS_SIGNATURE_RE = re.compile(r"\b(?:function|const|let|var|import|export)\b|=>")

BLOCK_EXTENSIONS = {
    "html": ".html",
    "css": ".css",
    "javascript": ".js",
    "js": ".js",
    "typescript": ".ts",
    "ts": ".ts",
    "tsx": ".tsx",
    "jsx": ".jsx",
    "json": ".json",
}

RAW_FALLBACK_PATH = "output.txt"
EMPTY_OUTPUT = "No content generated"


@dataclass
class ExtractionResult:
    files: list[GeneratedFile]
    diagnostic: DiagnosticInfo

    @property
    def method(self) -> ExtractionMethod:
        return self.diagnostic.extraction_method


@dataclass(frozen=True)
class StrategyMatch:
    method: ExtractionMethod
    files: list[GeneratedFile] = field(default_factory=list)


def _dedupe(files: list[GeneratedFile]) -> list[GeneratedFile]:
    by_path: dict[str, GeneratedFile] = {}
    for f in files:
        by_path[f.path] = f
    return list(by_path.values())


def iter_file_markers(text: str):
    """Пары [FILE:path]...[/FILE]; незакрытый хвост игнорируется."""
    for match in FILE_MARKER_RE.finditer(text):
        yield match.group(1).strip(), match.group(2).strip()


def match_file_markers(text: str, diagnostic: DiagnosticInfo) -> StrategyMatch:
    files = []
    for path, content in iter_file_markers(text):
        if not path:
            diagnostic.parsing_errors.append("File marker with empty path skipped")
            continue
        if not content:
            diagnostic.parsing_errors.append(f"Empty content for file: {path}")
        files.append(GeneratedFile(path=path, content=content))

    diagnostic.file_markers_found = len(files)
    if not files:
        diagnostic.parsing_errors.append("No [FILE:path]...[/FILE] markers found")
    return StrategyMatch(ExtractionMethod.FILE_MARKERS, _dedupe(files))


def _block_path(index: int, language: str, comment: str | None) -> str:
    ext = BLOCK_EXTENSIONS.get(language.lower(), ".txt")
    if comment:
        if "." in comment:
            return comment
        return re.sub(r"\s+", "-", comment).lower() + ext
    return f"file{index}{ext}"


def match_code_blocks(text: str, diagnostic: DiagnosticInfo) -> StrategyMatch:
    files = []
    matches = list(CODE_BLOCK_RE.finditer(text))
    diagnostic.code_blocks_found = len(matches)

    for index, match in enumerate(matches, start=1):
        language = match.group(1) or "text"
        comment = (match.group(2) or "").strip() or None
        content = match.group(3).strip()
        path = _block_path(index, language, comment)
        if not content:
            diagnostic.parsing_errors.append(f"Empty content for file: {path}")
            continue
        files.append(GeneratedFile(path=path, content=content))

    if not files:
        diagnostic.parsing_errors.append("No fenced code blocks found")
    return StrategyMatch(ExtractionMethod.CODE_BLOCKS, _dedupe(files))


def match_content_signatures(text: str, diagnostic: DiagnosticInfo) -> StrategyMatch:
    files = []
    has_html = "<html" in text.lower()

    if HTML_SIGNATURE_RE.search(text):
        files.append(GeneratedFile(path="index.html", content=text.strip()))
    if not has_html and CSS_SIGNATURE_RE.search(text):
        files.append(GeneratedFile(path="styles.css", content=text.strip()))
    if not has_html and JS_SIGNATURE_RE.search(text):
        files.append(GeneratedFile(path="script.js", content=text.strip()))

    if not files:
        diagnostic.parsing_errors.append("Content matches no HTML, CSS or JS signature")
    return StrategyMatch(ExtractionMethod.HEURISTIC, files)


def match_raw_fallback(text: str, diagnostic: DiagnosticInfo) -> StrategyMatch:
    content = text if text.strip() else EMPTY_OUTPUT
    return StrategyMatch(
        ExtractionMethod.FALLBACK_RAW,
        [GeneratedFile(path=RAW_FALLBACK_PATH, content=content)],
    )


# Порядок важен: побеждает первая стратегия с непустым результатом
STRATEGIES: tuple[Callable[[str, DiagnosticInfo], StrategyMatch], ...] = (
    match_file_markers,
    match_code_blocks,
    match_content_signatures,
    match_raw_fallback,
)


def extract_files(full_text: str) -> ExtractionResult:
    """Извлечь набор файлов из накопленного ответа модели. Никогда не возвращает пустой список."""
    diagnostic = DiagnosticInfo(raw_content=full_text)

    for strategy in STRATEGIES:
        result = strategy(full_text, diagnostic)
        if result.files:
            break

    diagnostic.extraction_method = result.method
    return ExtractionResult(files=result.files, diagnostic=diagnostic)
