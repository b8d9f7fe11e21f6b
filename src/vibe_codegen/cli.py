import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from vibe_codegen.config import get_settings
from vibe_codegen.generation import (
    GenerationPhase,
    GenerationProgress,
    HttpGenerationSource,
    ProgressSnapshot,
    StreamingGeneration,
)
from vibe_codegen.llm import LLMClient, PromptType, build_retry_prompt, detect_prompt_type
from vibe_codegen.parsing import GeneratedFile, extract_files
from vibe_codegen.sandbox import AdapterError, PreviewDebouncer, TreeNode, adapt, build_file_tree
from vibe_codegen.sandbox.adapter import is_react_project
from vibe_codegen.validation import (
    CodeQualityValidator,
    ComponentArchitectureValidator,
    ComponentFile,
    DesignPatternValidator,
    ValidationResult,
    check_modern_standards,
    preflight_check,
)
from vibe_codegen.workspace import read_project, write_project

app = typer.Typer(
    name="vibe-codegen",
    help="Разбор потоковых ответов модели, проверка и подготовка кода к превью",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()

SEVERITY_STYLES = {1: "red", 2: "yellow", 3: "dim"}


def _render_tree(node: TreeNode, branch: Tree):
    for child in node.children:
        if child.is_dir:
            _render_tree(child, branch.add(f"[bold]{escape(child.name)}/[/bold]"))
        else:
            branch.add(escape(child.name))


def _print_files(files: list[GeneratedFile]):
    tree = Tree("[bold]файлы[/bold]")
    _render_tree(build_file_tree([f.path for f in files]), tree)
    console.print(tree)


def _print_result(title: str, result: ValidationResult):
    status = "[green]OK[/green]" if result.valid else "[red]FAIL[/red]"
    console.print(f"\n[bold]{title}[/bold]: {result.score}/100 {status}")
    if result.issues:
        table = Table(show_header=True, header_style="bold")
        table.add_column("sev")
        table.add_column("category")
        table.add_column("file")
        table.add_column("message")
        for i in result.issues:
            style = SEVERITY_STYLES[int(i.severity)]
            table.add_row(f"[{style}]{int(i.severity)}[/{style}]", i.category, escape(i.file or ""), escape(i.message))
        console.print(table)
    for s in result.suggestions:
        console.print(f"  [blue]→[/blue] {escape(s)}")


def _validate_all(files: list[GeneratedFile], code_type: str) -> ValidationResult:
    components = [ComponentFile.from_generated(f) for f in files]
    if code_type == "react":
        _print_result("Архитектура", ComponentArchitectureValidator().validate(components, code_type))
    _print_result("Дизайн-паттерны", DesignPatternValidator().validate(files))
    quality = CodeQualityValidator().validate(files, code_type)
    _print_result("Качество кода", quality)
    return quality


@app.command()
def extract(
    transcript: Path = typer.Argument(..., help="Файл с накопленным ответом модели"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Куда записать извлечённые файлы"),
):
    """Извлечь файлы из сохранённого ответа модели."""
    try:
        text = transcript.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Не удалось прочитать {transcript}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    result = extract_files(text)
    console.print(f"[blue]Стратегия:[/blue] {result.method.value}")
    for message in result.diagnostic.parsing_errors:
        console.print(f"[dim]{escape(message)}[/dim]")
    _print_files(result.files)

    if out:
        written = write_project(result.files, out)
        console.print(f"[green]Записано файлов: {len(written)} в {out}[/green]")


@app.command()
def validate(
    project: Path = typer.Argument(..., help="Папка с проектом"),
    code_type: str = typer.Option("react", "--code-type", "-c", help="Тип проекта: react или html"),
    strict: bool = typer.Option(False, "--strict", help="Код возврата 1, если проверка не пройдена"),
):
    """Проверить структуру, дизайн и качество проекта."""
    files = read_project(project)
    if not files:
        console.print(f"[red]В {project} нет исходных файлов[/red]")
        raise typer.Exit(1)

    quality = _validate_all(files, code_type)
    if strict and not quality.valid:
        raise typer.Exit(1)


@app.command()
def preview(
    project: Path = typer.Argument(..., help="Папка с проектом"),
):
    """Собрать набор файлов для песочницы превью и вывести его как JSON."""
    files = read_project(project)
    if files and is_react_project(files):
        check = preflight_check({f.path: f.content for f in files})
        if not check.ok:
            console.print(f"[red]{escape(check.error)}[/red]")
            console.print(f"[dim]{escape(check.details)}[/dim]")
            raise typer.Exit(1)

    bundle = adapt(files)
    if isinstance(bundle, AdapterError):
        console.print(f"[red]{escape(bundle.error)}[/red]")
        if bundle.details:
            console.print(f"[dim]{escape(bundle.details)}[/dim]")
        raise typer.Exit(1)
    console.print_json(data=bundle.to_renderer_payload())


class _ProgressPrinter:
    def __init__(self):
        self.phase = None
        self.current = None

    def __call__(self, snapshot: ProgressSnapshot):
        if snapshot.phase != self.phase:
            self.phase = snapshot.phase
            console.print(f"[blue]Фаза: {snapshot.phase.value}[/blue]")
        if snapshot.current_file and snapshot.current_file != self.current:
            console.print(f"  [dim]пишу {escape(snapshot.current_file)}...[/dim]")
        if self.current and self.current in snapshot.files_complete:
            console.print(f"  [green]✓[/green] {escape(self.current)}")
        self.current = snapshot.current_file


def _preview_update(files: tuple[GeneratedFile, ...]):
    bundle = adapt(files)
    if isinstance(bundle, AdapterError):
        console.print(f"  [dim]превью недоступно: {escape(bundle.error)}[/dim]")
    else:
        console.print(f"  [dim]превью: {len(files)} файлов, шаблон {bundle.template.value}[/dim]")


async def _run_generation(prompt: str, code_type: str) -> GenerationProgress:
    settings = get_settings()
    if settings.generation_endpoint:
        source = HttpGenerationSource(settings, prompt, code_type).deltas
    else:
        source = LLMClient(settings).source(prompt, code_type)

    printer = _ProgressPrinter()
    debouncer = PreviewDebouncer(_preview_update, settings.preview_debounce_ms)

    def on_update(snapshot: ProgressSnapshot):
        printer(snapshot)
        if snapshot.files and snapshot.phase is GenerationPhase.GENERATING:
            debouncer.submit(snapshot.files)

    progress = await StreamingGeneration(source, on_update=on_update).run()
    debouncer.cancel()
    return progress


@app.command()
def generate(
    prompt: str = typer.Option(..., "--prompt", "-p", help="Что сгенерировать"),
    code_type: str = typer.Option("react", "--code-type", "-c", help="Тип проекта: react или html"),
    out: Path = typer.Option(Path("generated"), "--out", "-o", help="Папка для результата"),
):
    """Сгенерировать проект, проверить его и записать на диск."""
    settings = get_settings()
    prompt_type = detect_prompt_type(prompt)
    if prompt_type is not PromptType.CODE_GENERATION:
        console.print(f"[yellow]Запрос похож на {prompt_type.value}, а не на задачу генерации кода[/yellow]")
    current_prompt = prompt

    for attempt in range(settings.max_quality_retries + 1):
        console.print(f"[blue]Генерация (попытка {attempt + 1})...[/blue]")
        progress = asyncio.run(_run_generation(current_prompt, code_type))

        if progress.phase is GenerationPhase.ERROR:
            console.print(f"[red]Ошибка генерации: {escape(progress.error_message)}[/red]")
            raise typer.Exit(1)

        standards = check_modern_standards(progress.files)
        if standards.passed or attempt == settings.max_quality_retries:
            break

        console.print(f"[yellow]Качество {standards.score}/100, повторяем с уточнённым промптом[/yellow]")
        current_prompt = build_retry_prompt(prompt, standards.issues)

    files = progress.files
    if progress.diagnostic:
        console.print(f"[dim]Стратегия извлечения: {progress.diagnostic.extraction_method.value}[/dim]")
    _print_files(files)
    _validate_all(files, code_type)

    written = write_project(files, out)
    console.print(f"[green]Готово! Записано файлов: {len(written)} в {out}[/green]")


if __name__ == "__main__":
    app()
