from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, ValidationError

LANGUAGES_BY_EXTENSION = {
    "tsx": "typescript",
    "ts": "typescript",
    "jsx": "javascript",
    "js": "javascript",
    "css": "css",
    "html": "html",
    "json": "json",
    "md": "markdown",
}


def language_for_path(path: str) -> str:
    suffix = PurePosixPath(path).suffix.lstrip(".").lower()
    return LANGUAGES_BY_EXTENSION.get(suffix, "text")


class ExtractionMethod(str, Enum):
    UNKNOWN = "unknown"
    FILE_MARKERS = "file-markers"
    CODE_BLOCKS = "code-blocks"
    HEURISTIC = "heuristic"
    FALLBACK_RAW = "fallback-raw"


class GeneratedFile(BaseModel):
    """Один файл, извлечённый из ответа модели."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str

    @property
    def language(self) -> str:
        return language_for_path(self.path)


class FilePlanEntry(BaseModel):
    """Запись из блока [PLAN]; носит справочный характер."""

    path: str
    description: str = ""


class Plan(BaseModel):
    files: list[FilePlanEntry] = []


class CompletionSummary(BaseModel):
    """Тело блока [COMPLETE]."""

    model_config = ConfigDict(populate_by_name=True)

    files_generated: int | None = Field(default=None, alias="filesGenerated")
    success: bool | None = None


class DiagnosticInfo(BaseModel):
    """Журнал одной попытки извлечения: какая стратегия сработала и почему не сработали другие."""

    raw_content: str = ""
    extraction_method: ExtractionMethod = ExtractionMethod.UNKNOWN
    file_markers_found: int = 0
    code_blocks_found: int = 0
    parsing_errors: list[str] = []


def parse_plan(body: str) -> Plan | None:
    """Разобрать JSON из [PLAN]. Любая ошибка даёт None."""
    try:
        return Plan.model_validate_json(body.strip())
    except ValidationError:
        return None


def parse_completion(body: str) -> CompletionSummary | None:
    """Разобрать JSON из [COMPLETE]. Любая ошибка даёт None."""
    text = body.strip()
    if not text:
        return None
    try:
        return CompletionSummary.model_validate_json(text)
    except ValidationError:
        return None
