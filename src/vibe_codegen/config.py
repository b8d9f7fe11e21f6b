from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    llm_model: str = "openai/gpt-4o-mini"
    gemini_api_key: str | None = None
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    xai_api_key: str | None = None

    # HTTP-эндпоинт, отдающий SSE-поток генерации (data: {"content": ..., "done": ...})
    generation_endpoint: str | None = None
    generation_token: str | None = None
    request_timeout: float = 120.0

    preview_debounce_ms: int = 500
    max_quality_retries: int = 2


def get_settings() -> Settings:
    return Settings()
