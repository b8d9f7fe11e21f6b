from pathlib import Path

from vibe_codegen.parsing import GeneratedFile

IGNORE_DIRS = {
    ".git", ".venv", "venv", "node_modules", "__pycache__",
    ".idea", ".vscode", "dist", "build",
}

SOURCE_SUFFIXES = {".ts", ".tsx", ".js", ".jsx", ".css", ".html", ".json", ".md", ".txt"}

MAX_FILE_SIZE = 200_000


def read_project(root: str | Path) -> list[GeneratedFile]:
    """Прочитать исходники проекта с диска в виде GeneratedFile с относительными путями."""
    root = Path(root)
    files = []
    for filepath in sorted(root.rglob("*")):
        if not filepath.is_file() or filepath.suffix not in SOURCE_SUFFIXES:
            continue
        rel_path = filepath.relative_to(root)
        if any(part in IGNORE_DIRS for part in rel_path.parts):
            continue

        content = _read_file(filepath)
        if content is not None:
            files.append(GeneratedFile(path=rel_path.as_posix(), content=content))
    return files


def _read_file(filepath: Path) -> str | None:
    try:
        content = filepath.read_text(encoding="utf-8")
    except (UnicodeDecodeError, PermissionError):
        return None
    if len(content) > MAX_FILE_SIZE:
        return None
    return content


def write_project(files: list[GeneratedFile], root: str | Path) -> list[Path]:
    """Записать сгенерированные файлы; пути за пределами root отбрасываются."""
    root = Path(root).resolve()
    written = []
    for f in files:
        target = (root / f.path.lstrip("/")).resolve()
        if not target.is_relative_to(root):
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f.content, encoding="utf-8")
        written.append(target)
    return written
