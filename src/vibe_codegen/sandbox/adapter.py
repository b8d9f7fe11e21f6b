import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vibe_codegen.parsing import GeneratedFile


class SandboxTemplate(str, Enum):
    REACT_TS = "react-ts"
    VANILLA_TS = "vanilla-ts"
    STATIC = "static"


DEFAULT_DEPENDENCIES = {"react": "^18.3.1", "react-dom": "^18.3.1"}

CONFIG_PATH = "/sandbox.config.json"
# Файлы шаблона, которые сгенерированный код переопределять не может
PROTECTED_PATHS = {CONFIG_PATH}

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Preview</title>
</head>
<body>
  <div id="root"></div>
</body>
</html>"""

REACT_ENTRY_RE = re.compile(r"(?:^|/)src/(?:main|index)\.(?:tsx?|jsx?)$|^(?:main|index)\.(?:tsx?|jsx?)$")
REACT_IMPORT_MARKERS = ['from "react"', "from 'react'", "import React"]

ENTRY_PATTERNS = [
    re.compile(r"^src/main\.tsx?$"),
    re.compile(r"^src/index\.tsx?$"),
    re.compile(r"^main\.tsx?$"),
    re.compile(r"^index\.tsx?$"),
    re.compile(r"^src/App\.tsx?$"),
]
DEFAULT_REACT_ENTRY = "/src/main.tsx"
DEFAULT_STATIC_ENTRY = "/index.html"


class PackageManifest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = Field(default={}, alias="devDependencies")


@dataclass(frozen=True)
class AdapterError:
    """Структурированная ошибка адаптации; рендерер показывает по ней заглушку."""

    error: str
    details: str = ""


@dataclass(frozen=True)
class SandboxBundle:
    template: SandboxTemplate
    files: dict[str, dict[str, str]]
    dependencies: dict[str, str] = field(default_factory=dict)
    entry: str = DEFAULT_REACT_ENTRY

    def to_renderer_payload(self) -> dict:
        return {
            "files": self.files,
            "dependencies": self.dependencies,
            "template": self.template.value,
            "entry": self.entry,
        }


def normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def _relative(path: str) -> str:
    return path.lstrip("/")


def _read_manifest(files: list[GeneratedFile]) -> PackageManifest | None:
    manifest = next((f for f in files if _relative(f.path) == "package.json"), None)
    if manifest is None:
        return None
    try:
        return PackageManifest.model_validate_json(manifest.content)
    except ValidationError:
        return None


def is_react_project(files: list[GeneratedFile]) -> bool:
    if any(REACT_ENTRY_RE.search(_relative(f.path)) for f in files):
        return True

    manifest = _read_manifest(files)
    if manifest and ("react" in manifest.dependencies or "react" in manifest.dev_dependencies):
        return True

    return any(marker in f.content for f in files for marker in REACT_IMPORT_MARKERS)


def uses_typescript(files: list[GeneratedFile]) -> bool:
    return any(
        f.path.endswith((".ts", ".tsx")) or _relative(f.path) == "tsconfig.json"
        for f in files
    )


def extract_dependencies(files: list[GeneratedFile]) -> dict[str, str]:
    manifest = _read_manifest(files)
    if manifest is None:
        return dict(DEFAULT_DEPENDENCIES)
    return {**manifest.dependencies, **manifest.dev_dependencies}


def find_entry(files: list[GeneratedFile], is_react: bool) -> str:
    paths = [_relative(f.path) for f in files]

    if not is_react:
        html = next((p for p in paths if p == "index.html" or p.endswith("/index.html")), None)
        return normalize_path(html) if html else DEFAULT_STATIC_ENTRY

    for pattern in ENTRY_PATTERNS:
        entry = next((p for p in paths if pattern.match(p)), None)
        if entry:
            return normalize_path(entry)

    first_component = next((p for p in paths if p.endswith((".tsx", ".jsx"))), None)
    return normalize_path(first_component) if first_component else DEFAULT_REACT_ENTRY


def _coerce(files: Iterable) -> list[GeneratedFile] | AdapterError:
    try:
        items = list(files)
    except TypeError:
        return AdapterError("Malformed file set", f"Expected a list of files, got {type(files).__name__}")

    coerced = []
    for index, item in enumerate(items):
        if isinstance(item, GeneratedFile):
            candidate = item
        else:
            try:
                candidate = GeneratedFile.model_validate(item)
            except ValidationError as e:
                return AdapterError(f"Malformed file at position {index}", str(e))
        if not candidate.path.strip("/ "):
            return AdapterError(f"File at position {index} has an empty path")
        coerced.append(candidate)
    return coerced


def adapt(files: Iterable) -> SandboxBundle | AdapterError:
    """Привести файлы к формату песочницы. Никогда не бросает исключений наружу."""
    if files is None:
        return AdapterError("No files were generated", "The file set is missing.")

    coerced = _coerce(files)
    if isinstance(coerced, AdapterError):
        return coerced
    if not coerced:
        return AdapterError("No files were generated", "The model did not return any code files.")

    sandbox_files: dict[str, dict[str, str]] = {}
    for f in coerced:
        path = normalize_path(f.path.strip())
        if path in PROTECTED_PATHS:
            return AdapterError(
                f"Generated file overrides a protected template file: {path}",
                "Template configuration files are owned by the preview and cannot be replaced.",
            )
        if path in sandbox_files:
            return AdapterError(f"Duplicate file path: {path}", "Each generated file must have a unique path.")
        sandbox_files[path] = {"code": f.content}

    is_react = is_react_project(coerced)
    if is_react:
        template = SandboxTemplate.REACT_TS
    elif uses_typescript(coerced):
        template = SandboxTemplate.VANILLA_TS
    else:
        template = SandboxTemplate.STATIC

    dependencies = extract_dependencies(coerced)

    if is_react:
        if "/index.html" not in sandbox_files and "/public/index.html" not in sandbox_files:
            sandbox_files["/index.html"] = {"code": INDEX_HTML}
        if "/package.json" not in sandbox_files:
            package = {"name": "generated-preview", "version": "1.0.0", "dependencies": dependencies}
            sandbox_files["/package.json"] = {"code": json.dumps(package, indent=2)}

    sandbox_files[CONFIG_PATH] = {
        "code": json.dumps({"template": template.value, "infiniteLoopProtection": True}, indent=2)
    }

    return SandboxBundle(
        template=template,
        files=sandbox_files,
        dependencies=dependencies,
        entry=find_entry(coerced, is_react),
    )
