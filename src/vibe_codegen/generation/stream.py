import asyncio
from collections.abc import AsyncIterable, AsyncIterator, Callable

import httpx
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape

from vibe_codegen.config import Settings
from vibe_codegen.generation.progress import GenerationProgress, ProgressSnapshot

console = Console()

DeltaSource = Callable[[], AsyncIterator[str]]
UpdateCallback = Callable[[ProgressSnapshot], None]


class GenerationTransportError(Exception):
    """Ошибка транспорта: не-2xx ответ, пустое тело, ошибка в кадре."""


class StreamFrame(BaseModel):
    """Тело одного SSE-кадра: data: {"content": "...", "done": false}."""

    content: str | None = None
    done: bool = False
    error: str | None = None


async def iter_sse_deltas(lines: AsyncIterable[str]) -> AsyncIterator[str]:
    """Достать текстовые дельты из SSE-строк в порядке получения."""
    async for line in lines:
        line = line.strip()
        if not line.startswith("data:"):
            continue

        payload = line[len("data:"):].strip()
        if not payload:
            continue
        if payload == "[DONE]":
            return

        try:
            frame = StreamFrame.model_validate_json(payload)
        except ValidationError:
            console.print(f"[dim]Пропущен некорректный кадр: {escape(payload[:80])}[/dim]")
            continue

        if frame.error:
            raise GenerationTransportError(frame.error)
        if frame.content:
            yield frame.content
        if frame.done:
            return


class HttpGenerationSource:
    """POST на эндпоинт генерации и чтение SSE-ответа через httpx."""

    def __init__(
        self,
        settings: Settings,
        prompt: str,
        code_type: str,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not settings.generation_endpoint:
            raise ValueError("generation_endpoint is not configured")
        self.settings = settings
        self.transport = transport
        self.payload = {
            "prompt": prompt,
            "codeType": code_type,
            "model": model or settings.llm_model,
        }

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "text/event-stream"}
        if self.settings.generation_token:
            headers["Authorization"] = f"Bearer {self.settings.generation_token}"
        return headers

    async def deltas(self) -> AsyncIterator[str]:
        async with httpx.AsyncClient(timeout=self.settings.request_timeout, transport=self.transport) as client:
            async with client.stream(
                "POST",
                self.settings.generation_endpoint,
                json=self.payload,
                headers=self._headers(),
            ) as response:
                if response.is_error:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise GenerationTransportError(
                        f"HTTP error! status: {response.status_code}, message: {body}"
                    )
                async for delta in iter_sse_deltas(response.aiter_lines()):
                    yield delta


class StreamingGeneration:
    """Одна попытка генерации: читает дельты и ведёт GenerationProgress."""

    def __init__(self, source: DeltaSource, on_update: UpdateCallback | None = None):
        self.source = source
        self.on_update = on_update
        self.progress = GenerationProgress()

    def _notify(self, snapshot: ProgressSnapshot):
        if self.on_update:
            self.on_update(snapshot)

    async def run(self) -> GenerationProgress:
        progress = self.progress = GenerationProgress()
        self._notify(progress.start())

        received = False
        try:
            async for delta in self.source():
                if not delta:
                    continue
                received = True
                self._notify(progress.feed(delta))
        except (httpx.HTTPError, GenerationTransportError) as e:
            self._notify(progress.fail(str(e) or type(e).__name__))
            return progress

        if not received:
            self._notify(progress.fail("No response body received"))
        else:
            self._notify(progress.finish())
        return progress


class GenerationSession:
    """Держит текущую попытку; новая попытка отменяет предыдущую."""

    def __init__(self, on_update: UpdateCallback | None = None):
        self.on_update = on_update
        self.current: StreamingGeneration | None = None
        self._task: asyncio.Task | None = None

    def start(self, source: DeltaSource) -> asyncio.Task:
        self.cancel()
        self.current = StreamingGeneration(source, self.on_update)
        self._task = asyncio.create_task(self.current.run())
        return self._task

    def cancel(self):
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None

    async def generate(self, source: DeltaSource) -> GenerationProgress:
        return await self.start(source)
