import re
from dataclasses import dataclass
from enum import Enum

from vibe_codegen.parsing.schemas import (
    CompletionSummary,
    GeneratedFile,
    Plan,
    parse_completion,
    parse_plan,
)

OPEN_MARKER_RE = re.compile(r"\[PLAN\]|\[COMPLETE\]|\[FILE:([^\]]+)\]")

PLAN_CLOSE = "[/PLAN]"
FILE_CLOSE = "[/FILE]"
COMPLETE_CLOSE = "[/COMPLETE]"

# Длина самого длинного открывающего маркера без последнего символа
MARKER_PREFIX_HOLD = len("[COMPLETE]") - 1


class ScanState(str, Enum):
    AWAITING_MARKER = "awaiting_marker"
    IN_PLAN = "in_plan"
    IN_FILE = "in_file"
    IN_COMPLETE = "in_complete"


@dataclass(frozen=True)
class PlanParsed:
    plan: Plan | None
    raw: str


@dataclass(frozen=True)
class FileOpened:
    path: str


@dataclass(frozen=True)
class FileClosed:
    file: GeneratedFile


@dataclass(frozen=True)
class CompleteSeen:
    pass


@dataclass(frozen=True)
class CompletionParsed:
    summary: CompletionSummary | None
    raw: str


ScanEvent = PlanParsed | FileOpened | FileClosed | CompleteSeen | CompletionParsed


class MarkerScanner:
    """Инкрементальный разбор маркерного протокола.

    Хранит позицию курсора и просматривает только дописанный текст (плюс
    хвост, который может оказаться началом разрезанного маркера). Для
    корректного потока закрытые файлы совпадают с результатом стратегии
    file-markers из extract_files на том же буфере.
    """

    def __init__(self):
        self.buffer = ""
        self.state = ScanState.AWAITING_MARKER
        self._cursor = 0
        self._body_start = 0
        self._open_path: str | None = None

    @property
    def open_path(self) -> str | None:
        return self._open_path

    def feed(self, chunk: str) -> list[ScanEvent]:
        self.buffer += chunk
        events: list[ScanEvent] = []
        while self._step(events):
            pass
        return events

    def _step(self, events: list[ScanEvent]) -> bool:
        if self.state is ScanState.AWAITING_MARKER:
            return self._find_open_marker(events)
        if self.state is ScanState.IN_PLAN:
            return self._find_close(PLAN_CLOSE, events)
        if self.state is ScanState.IN_FILE:
            return self._find_close(FILE_CLOSE, events)
        return self._find_close(COMPLETE_CLOSE, events)

    def _resume_point(self, start: int) -> int:
        """Первая позиция после start, где может начинаться недописанный открывающий маркер."""
        last_close = self.buffer.rfind("]", start)
        file_start = self.buffer.find("[FILE:", max(start, last_close + 1))
        if file_start != -1:
            return file_start
        bracket = self.buffer.rfind("[", max(start, len(self.buffer) - MARKER_PREFIX_HOLD))
        return bracket if bracket != -1 else len(self.buffer)

    def _find_open_marker(self, events: list[ScanEvent]) -> bool:
        match = OPEN_MARKER_RE.search(self.buffer, self._cursor)
        if match is None:
            self._cursor = self._resume_point(self._cursor)
            return False

        self._cursor = self._body_start = match.end()
        marker = match.group(0)
        if marker == "[PLAN]":
            self.state = ScanState.IN_PLAN
        elif marker == "[COMPLETE]":
            self.state = ScanState.IN_COMPLETE
            events.append(CompleteSeen())
        else:
            path = match.group(1).strip()
            self.state = ScanState.IN_FILE
            self._open_path = path or None
            if path:
                events.append(FileOpened(path))
        return True

    def _find_close(self, close_marker: str, events: list[ScanEvent]) -> bool:
        index = self.buffer.find(close_marker, self._cursor)

        if self.state is not ScanState.IN_FILE:
            # Незакрытый PLAN или COMPLETE обрывается следующим открывающим маркером
            end = index if index != -1 else len(self.buffer)
            interrupt = OPEN_MARKER_RE.search(self.buffer, self._cursor, end)
            if interrupt is not None:
                self._emit_block(self.buffer[self._body_start:interrupt.start()], events)
                self._cursor = interrupt.start()
                self.state = ScanState.AWAITING_MARKER
                return True

        if index == -1:
            self._cursor = max(self._body_start, len(self.buffer) - len(close_marker) + 1)
            if self.state is not ScanState.IN_FILE:
                self._cursor = min(self._cursor, self._resume_point(self._body_start))
            return False

        self._emit_block(self.buffer[self._body_start:index], events)
        self._cursor = index + len(close_marker)
        self.state = ScanState.AWAITING_MARKER
        return True

    def _emit_block(self, body: str, events: list[ScanEvent]):
        if self.state is ScanState.IN_PLAN:
            events.append(PlanParsed(parse_plan(body), body))
        elif self.state is ScanState.IN_FILE:
            if self._open_path:
                events.append(FileClosed(GeneratedFile(path=self._open_path, content=body.strip())))
            self._open_path = None
        else:
            events.append(CompletionParsed(parse_completion(body), body))
