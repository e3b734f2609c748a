from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    host: str = Field(default="localhost", alias="POSTGRES_HOST")
    port: int = Field(default=5432, alias="POSTGRES_DB_PORT")
    db_name: str = Field(default="flashcarder", alias="POSTGRES_DB_NAME")
    user: str = Field(default="postgres", alias="POSTGRES_DB_USER")
    password: str = Field(default="postgres", alias="POSTGRES_DB_PASSWORD")
    echo: bool = Field(default=False, alias="DB_ECHO")
    auto_create: bool = Field(default=True, alias="DB_AUTO_CREATE")

    @computed_field
    def connection_string(self) -> str:
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db_name}"
        )


class OpenRouterSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    base_url: str = Field(
        default="https://openrouter.ai/api/v1", alias="OPENROUTER_BASE_URL"
    )
    api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")
    model: str = Field(
        default="google/gemini-2.0-flash-exp:free", alias="OPENROUTER_MODEL"
    )
    referer: str = Field(default="http://localhost:5173", alias="APP_URL")
    app_title: str = Field(default="FlashCarder App", alias="OPENROUTER_APP_TITLE")
    timeout_seconds: float = Field(default=60.0, alias="OPENROUTER_TIMEOUT_SECONDS")


class GenerationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    # When false, a sentinel-only result is rejected as an upstream failure.
    persist_degraded: bool = Field(default=True, alias="GENERATION_PERSIST_DEGRADED")


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="flashcarder", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"], alias="CORS_ORIGINS"
    )

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    database: DatabaseSettings = Field(default_factory=lambda: DatabaseSettings())
    openrouter: OpenRouterSettings = Field(default_factory=lambda: OpenRouterSettings())
    generation: GenerationSettings = Field(default_factory=lambda: GenerationSettings())


settings = Settings()
