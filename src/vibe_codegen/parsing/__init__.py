from vibe_codegen.parsing.extractor import ExtractionResult, extract_files
from vibe_codegen.parsing.scanner import MarkerScanner
from vibe_codegen.parsing.schemas import (
    CompletionSummary,
    DiagnosticInfo,
    ExtractionMethod,
    FilePlanEntry,
    GeneratedFile,
    Plan,
)

__all__ = [
    "extract_files",
    "ExtractionResult",
    "MarkerScanner",
    "CompletionSummary",
    "DiagnosticInfo",
    "ExtractionMethod",
    "FilePlanEntry",
    "GeneratedFile",
    "Plan",
]
