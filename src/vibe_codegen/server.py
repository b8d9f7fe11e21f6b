from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console

from vibe_codegen.parsing import GeneratedFile, extract_files
from vibe_codegen.sandbox import AdapterError, adapt
from vibe_codegen.validation import (
    CodeQualityValidator,
    ComponentArchitectureValidator,
    ComponentFile,
    DesignPatternValidator,
)

console = Console()


@asynccontextmanager
async def lifespan(app: FastAPI):
    console.print("[green]Сервер запущен[/green]")
    yield
    console.print("[yellow]Сервер остановлен[/yellow]")


app = FastAPI(lifespan=lifespan)


class ExtractRequest(BaseModel):
    text: str = ""


class ValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    files: list[GeneratedFile]
    code_type: str = Field(default="react", alias="codeType")


class SandboxRequest(BaseModel):
    files: list[dict]


@app.post("/extract")
async def extract(request: ExtractRequest):
    result = extract_files(request.text)
    return {
        "files": [f.model_dump() for f in result.files],
        "diagnostic": result.diagnostic.model_dump(mode="json"),
    }


@app.post("/validate")
async def validate(request: ValidateRequest):
    components = [ComponentFile.from_generated(f) for f in request.files]
    architecture = ComponentArchitectureValidator().validate(components, request.code_type)
    quality = CodeQualityValidator().validate(request.files, request.code_type)
    design = DesignPatternValidator().validate(request.files)

    console.print(
        f"[blue]Проверка {len(request.files)} файлов ({request.code_type}): "
        f"архитектура {architecture.score}, качество {quality.score}, дизайн {design.score}[/blue]"
    )
    return {
        "architecture": asdict(architecture),
        "quality": asdict(quality),
        "designPatterns": asdict(design),
    }


@app.post("/sandbox")
async def sandbox(request: SandboxRequest):
    bundle = adapt(request.files)
    if isinstance(bundle, AdapterError):
        raise HTTPException(status_code=422, detail={"error": bundle.error, "details": bundle.details})
    return bundle.to_renderer_payload()


@app.get("/health")
async def health():
    return {"status": "healthy"}
