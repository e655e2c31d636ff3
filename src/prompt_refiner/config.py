from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None
    OPENAI_ORG: str | None = None

    LLM_MODEL: str = "gpt-4o-mini"
    TEMPERATURE: float = 0.2
    LLM_TIMEOUT: float = 30.0
    LLM_MAX_TOKENS: int = 600
    # Rewrite the synthesized draft with the chat model before scoring
    USE_LLM_DRAFT: bool = False

    # Convergence cutoffs for the refinement loop
    INTENT_CUTOFF: int = 95
    PROMPT_CUTOFF: int = 95
    MAX_TURNS: int = 10
    MAX_QUESTIONS_PER_TURN: int = 2
    MAX_PROMPT_LENGTH: int = 500

    CONFIG_VERSION: str = "pc-0.3"
    PROMPT_LANGUAGE: Literal["ko"] = "ko"

    # Relay targets per domain (empty = echo only)
    MCP_IMAGE_MODEL: str = "Nanobanana"
    MCP_IMAGE_ENDPOINT: str = ""
    MCP_VIDEO_MODEL: str = "Pika"
    MCP_VIDEO_ENDPOINT: str = ""
    MCP_DEV_MODEL: str = "Claude"
    MCP_DEV_ENDPOINT: str = ""

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    TELEMETRY_ENABLED: bool = True
    log_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
