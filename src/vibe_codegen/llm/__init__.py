from vibe_codegen.llm.client import LLMClient
from vibe_codegen.llm.prompt_type import PromptType, detect_prompt_type
from vibe_codegen.llm.prompts import build_messages, build_retry_prompt

__all__ = ["LLMClient", "PromptType", "detect_prompt_type", "build_messages", "build_retry_prompt"]
