from vibe_codegen.generation.progress import GenerationPhase, GenerationProgress, ProgressSnapshot
from vibe_codegen.generation.stream import (
    GenerationSession,
    GenerationTransportError,
    HttpGenerationSource,
    StreamingGeneration,
    iter_sse_deltas,
)

__all__ = [
    "GenerationPhase",
    "GenerationProgress",
    "ProgressSnapshot",
    "GenerationSession",
    "GenerationTransportError",
    "HttpGenerationSource",
    "StreamingGeneration",
    "iter_sse_deltas",
]
