"""Application settings using pydantic-settings."""

from functools import cache
from pathlib import Path
from typing import Annotated, Any, Literal

from flowstate import CompletionConfig, GeneratorConfig, ResolverConfig
from flowstate.config import DEFAULT_INVIDIOUS_INSTANCES, DEFAULT_PIPED_INSTANCES
from flowstate.lib.parsing import parse_string_list
from flowstate.services.store import DEFAULT_NAMESPACE
from pydantic import BeforeValidator, Field, SecretStr
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from flowstate_api.db.engine import DB_FILE

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


def _split_list(v: Any) -> Any:
    """Accept a JSON list or a comma-separated string."""
    if not isinstance(v, str):
        return v
    return parse_string_list(v)


StringList = Annotated[list[str], NoDecode, BeforeValidator(_split_list)]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FLOWSTATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Completion service
    completion_api_key: SecretStr | None = Field(
        default=None, description="Completion service API key"
    )
    completion_base_url: str = Field(
        default=CompletionConfig.base_url,
        description="OpenAI-compatible completion API base URL",
    )
    completion_model: str = Field(
        default=CompletionConfig.model, description="Completion model name"
    )
    completion_timeout: float = Field(
        default=CompletionConfig.timeout,
        gt=0,
        description="Completion request timeout in seconds",
    )

    # Search providers
    youtube_api_keys: StringList = Field(
        default_factory=list, description="YouTube Data API keys"
    )
    piped_instances: StringList = Field(
        default_factory=lambda: list(DEFAULT_PIPED_INSTANCES),
        description="Piped instance base URLs, in fallback order",
    )
    invidious_instances: StringList = Field(
        default_factory=lambda: list(DEFAULT_INVIDIOUS_INSTANCES),
        description="Invidious instance base URLs, in fallback order",
    )
    primary_timeout: float = Field(
        default=10.0, gt=0, description="YouTube Data API timeout in seconds"
    )
    mirror_timeout: float = Field(
        default=5.0, gt=0, description="Per-instance mirror timeout in seconds"
    )

    # Generation
    suggestion_count: int = Field(
        default=GeneratorConfig.suggestion_count,
        ge=1,
        le=50,
        description="Songs requested per playlist",
    )
    resolve_concurrency: int | None = Field(
        default=None,
        ge=1,
        description="Maximum concurrent lookups (unbounded if unset)",
    )

    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Log level")

    # Storage
    data: Path = Field(default=Path("data"), description="Data directory")
    storage_namespace: str = Field(
        default=DEFAULT_NAMESPACE, description="Playlist storage namespace"
    )

    # CORS settings
    cors_origins: StringList = Field(
        default_factory=lambda: ["*"], description="Allowed CORS origins"
    )

    @property
    def db_path(self) -> Path:
        return self.data / DB_FILE

    def completion_config(self) -> CompletionConfig:
        api_key = self.completion_api_key
        return CompletionConfig(
            api_key=api_key.get_secret_value() if api_key else None,
            base_url=self.completion_base_url,
            model=self.completion_model,
            timeout=self.completion_timeout,
        )

    def resolver_config(self) -> ResolverConfig:
        return ResolverConfig(
            youtube_api_keys=tuple(self.youtube_api_keys),
            piped_instances=tuple(self.piped_instances),
            invidious_instances=tuple(self.invidious_instances),
            primary_timeout=self.primary_timeout,
            mirror_timeout=self.mirror_timeout,
        )

    def generator_config(self) -> GeneratorConfig:
        return GeneratorConfig(
            suggestion_count=self.suggestion_count,
            resolve_concurrency=self.resolve_concurrency,
        )


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
