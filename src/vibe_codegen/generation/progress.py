from dataclasses import dataclass
from enum import Enum

from rich.console import Console
from rich.markup import escape

from vibe_codegen.parsing import (
    CompletionSummary,
    DiagnosticInfo,
    ExtractionMethod,
    FilePlanEntry,
    GeneratedFile,
    MarkerScanner,
    extract_files,
)
from vibe_codegen.parsing.scanner import (
    CompleteSeen,
    CompletionParsed,
    FileClosed,
    FileOpened,
    PlanParsed,
)

console = Console()


class GenerationPhase(str, Enum):
    IDLE = "idle"
    PLANNING = "planning"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


TERMINAL_PHASES = {GenerationPhase.COMPLETE, GenerationPhase.ERROR}


@dataclass(frozen=True)
class ProgressSnapshot:
    """Неизменяемый срез состояния для UI."""

    phase: GenerationPhase
    current_file: str | None
    files_complete: tuple[str, ...]
    files_plan: tuple[FilePlanEntry, ...]
    files: tuple[GeneratedFile, ...]
    error_message: str | None = None


class GenerationProgress:
    """Машина состояний одной попытки генерации.

    idle -> planning -> generating -> complete, и error из любой
    нетерминальной фазы. Новая попытка начинается через start(), который
    полностью сбрасывает состояние.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self.phase = GenerationPhase.IDLE
        self.current_file: str | None = None
        self.files_plan: list[FilePlanEntry] = []
        self.files_complete: list[str] = []
        self.error_message: str | None = None
        self.completion: CompletionSummary | None = None
        self.diagnostic: DiagnosticInfo | None = None
        self._scanner = MarkerScanner()
        self._files: dict[str, GeneratedFile] = {}

    @property
    def buffer(self) -> str:
        return self._scanner.buffer

    @property
    def files(self) -> list[GeneratedFile]:
        return list(self._files.values())

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def start(self) -> ProgressSnapshot:
        self.reset()
        self.phase = GenerationPhase.PLANNING
        return self.snapshot()

    def feed(self, chunk: str) -> ProgressSnapshot:
        """Дописать очередной фрагмент потока и пересчитать состояние."""
        if self.phase is GenerationPhase.IDLE:
            self.start()
        if self.phase is GenerationPhase.ERROR:
            return self.snapshot()

        for event in self._scanner.feed(chunk):
            if isinstance(event, CompletionParsed):
                self._apply_completion(event)
            elif self.phase is not GenerationPhase.COMPLETE:
                self._apply(event)
        return self.snapshot()

    def finish(self) -> ProgressSnapshot:
        """Поток закончился без [COMPLETE]: фиксируем то, что есть."""
        if self.phase is GenerationPhase.IDLE:
            self.start()
        if not self.is_terminal:
            self._finalize()
        return self.snapshot()

    def fail(self, message: str) -> ProgressSnapshot:
        if self.is_terminal:
            return self.snapshot()
        console.print(f"[red]Генерация прервана: {escape(message)}[/red]")
        self.phase = GenerationPhase.ERROR
        self.error_message = message
        self.current_file = None
        return self.snapshot()

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            phase=self.phase,
            current_file=self.current_file,
            files_complete=tuple(self.files_complete),
            files_plan=tuple(self.files_plan),
            files=tuple(self._files.values()),
            error_message=self.error_message,
        )

    def _apply(self, event):
        if isinstance(event, PlanParsed):
            if event.plan is None:
                console.print("[yellow]Не удалось разобрать JSON плана, продолжаем без него[/yellow]")
            else:
                self.files_plan = list(event.plan.files)
            self.phase = GenerationPhase.GENERATING

        elif isinstance(event, FileOpened):
            self.phase = GenerationPhase.GENERATING
            self.current_file = event.path

        elif isinstance(event, FileClosed):
            path = event.file.path
            self._files[path] = event.file
            if path not in self.files_complete:
                self.files_complete.append(path)
            self.current_file = None

        elif isinstance(event, CompleteSeen):
            self._finalize()

    def _apply_completion(self, event: CompletionParsed):
        if event.summary is None and event.raw.strip():
            console.print("[yellow]Не удалось разобрать JSON блока COMPLETE[/yellow]")
        self.completion = event.summary

    def _finalize(self):
        if self._files:
            self.diagnostic = DiagnosticInfo(
                raw_content=self.buffer,
                extraction_method=ExtractionMethod.FILE_MARKERS,
                file_markers_found=len(self._files),
            )
        else:
            result = extract_files(self.buffer)
            self.diagnostic = result.diagnostic
            self._files = {f.path: f for f in result.files}

        if self._scanner.open_path:
            self.diagnostic.parsing_errors.append(
                f"Unterminated file marker dropped: {self._scanner.open_path}"
            )

        for path in self._files:
            if path not in self.files_complete:
                self.files_complete.append(path)
        self.current_file = None
        self.phase = GenerationPhase.COMPLETE
