import asyncio
from types import SimpleNamespace

import litellm
import pytest

from vibe_codegen.config import Settings
from vibe_codegen.generation import GenerationPhase, GenerationTransportError, StreamingGeneration
from vibe_codegen.llm import LLMClient, build_messages, build_retry_prompt
from vibe_codegen.llm import client as client_module


def chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class TestPrompts:
    def test_system_prompt_describes_markers(self):
        system, user = build_messages("landing page", "react")
        assert system["role"] == "system"
        assert "[FILE:src/App.tsx]" in system["content"]
        assert '{"filesGenerated":' in system["content"]
        assert "src/components/layout/" in system["content"]
        assert user == {"role": "user", "content": "landing page"}

    def test_html_prompt(self):
        system, _ = build_messages("site", "html")
        assert "index.html, styles.css and script.js" in system["content"]

    def test_retry_prompt_lists_issues(self):
        prompt = build_retry_prompt("landing page", ["Missing Tailwind CSS for modern styling"])
        assert prompt.startswith("landing page")
        assert "- Missing Tailwind CSS for modern styling" in prompt


class TestLLMClient:
    def test_streams_deltas(self, monkeypatch):
        captured = {}

        async def fake_acompletion(**kwargs):
            captured.update(kwargs)

            async def stream():
                for part in ["[FILE:a.js]", None, "x[/FILE]"]:
                    yield chunk(part)
                yield SimpleNamespace(choices=[])

            return stream()

        monkeypatch.setattr(client_module.litellm, "acompletion", fake_acompletion)
        client = LLMClient(Settings(llm_model="test/model"))

        async def collect():
            return [d async for d in client.source("page", "html")()]

        assert asyncio.run(collect()) == ["[FILE:a.js]", "x[/FILE]"]
        assert captured["model"] == "test/model"
        assert captured["stream"] is True

    def test_unknown_model_ends_in_error_phase(self, monkeypatch):
        async def fake_acompletion(**kwargs):
            raise litellm.exceptions.NotFoundError(
                message="model not found", model="test/missing", llm_provider="openai"
            )

        monkeypatch.setattr(client_module.litellm, "acompletion", fake_acompletion)
        client = LLMClient(Settings(llm_model="test/missing"))

        progress = asyncio.run(StreamingGeneration(client.source("page", "html")).run())
        assert progress.phase == GenerationPhase.ERROR
        assert "model not found" in progress.error_message

    def test_server_error_is_transport_error(self, monkeypatch):
        async def fake_acompletion(**kwargs):
            raise litellm.exceptions.InternalServerError(
                message="upstream down", model="test/model", llm_provider="openai"
            )

        monkeypatch.setattr(client_module.litellm, "acompletion", fake_acompletion)
        client = LLMClient(Settings(llm_model="test/model"))

        async def collect():
            return [d async for d in client.source("page", "html")()]

        with pytest.raises(GenerationTransportError, match="upstream down"):
            asyncio.run(collect())
