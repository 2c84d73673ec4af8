from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent
RULES_DIR = BASE_DIR / "rules"


class LLMClientConfig(BaseModel):
    """Connection settings handed to ``LLMGateway``."""

    base_url: str = "https://api.groq.com/openai/v1"
    api_key: SecretStr = SecretStr("")
    model: str = "llama3-8b-8192"
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout: float = 15.0  # seconds before the completion is abandoned

    model_config = {"frozen": True}


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "BoostIQ Pro"
    debug: bool = False

    # --- llm ---
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_api_key: SecretStr = SecretStr("")
    llm_model: str = "llama3-8b-8192"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000
    llm_timeout: float = 15.0

    # --- optimization ---
    ai_enabled: bool = True
    rules_file: str = str(RULES_DIR / "recommendations.yaml")

    # --- metrics ---
    metrics_interval: float = 30.0  # seconds between dashboard refreshes

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:8081"]

    model_config = {"env_file": ".env", "env_prefix": "BOOSTIQ_"}

    def llm_client_config(self) -> LLMClientConfig:
        return LLMClientConfig(
            base_url=self.llm_base_url,
            api_key=self.llm_api_key,
            model=self.llm_model,
            temperature=self.llm_temperature,
            max_tokens=self.llm_max_tokens,
            timeout=self.llm_timeout,
        )


settings = Settings()
