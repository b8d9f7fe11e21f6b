import os
from collections.abc import AsyncIterator

import litellm

from vibe_codegen.config import Settings
from vibe_codegen.generation.stream import GenerationTransportError
from vibe_codegen.llm.prompts import build_messages

# Все исключения провайдеров, которые поднимает litellm
LLM_ERRORS = tuple(litellm.LITELLM_EXCEPTION_TYPES)


class LLMClient:
    def __init__(self, settings: Settings):
        self.model = settings.llm_model
        self._setup_api_keys(settings)

    def _setup_api_keys(self, settings: Settings):
        if settings.gemini_api_key:
            os.environ["GEMINI_API_KEY"] = settings.gemini_api_key
        if settings.openai_api_key:
            os.environ["OPENAI_API_KEY"] = settings.openai_api_key
        if settings.anthropic_api_key:
            os.environ["ANTHROPIC_API_KEY"] = settings.anthropic_api_key
        if settings.xai_api_key:
            os.environ["XAI_API_KEY"] = settings.xai_api_key

    def source(self, prompt: str, code_type: str):
        """Источник дельт для StreamingGeneration."""
        return lambda: self.stream_generation(prompt, code_type)

    async def stream_generation(self, prompt: str, code_type: str) -> AsyncIterator[str]:
        """Потоковый ответ модели в маркерном протоколе, по одной текстовой дельте."""
        try:
            response = await litellm.acompletion(
                model=self.model,
                messages=build_messages(prompt, code_type),
                stream=True,
            )
            async for chunk in response:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except LLM_ERRORS as e:
            raise GenerationTransportError(str(e)) from e
