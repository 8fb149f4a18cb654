from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import PostgresDsn


class PostgresSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    host: str = Field(alias="POSTGRES_HOST")
    port: int = Field(alias="POSTGRES_DB_PORT")
    db_name: str = Field(alias="POSTGRES_DB_NAME")
    user: str = Field(alias="POSTGRES_DB_USER")
    password: str = Field(alias="POSTGRES_DB_PASSWORD")

    @computed_field
    def connection_string(self) -> PostgresDsn:
        return PostgresDsn(
            f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db_name}"
        )


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    secret: str = Field(alias="JWT_SECRET")
    audience: str = Field(default="fastapi-users:auth", alias="JWT_AUDIENCE")
    token_lifetime_seconds: int = Field(
        default=3600, alias="JWT_TOKEN_LIFETIME_SECONDS"
    )


class GeminiSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    # Comma separated; list position is rotation priority
    api_keys_raw: Optional[str] = Field(default=None, alias="GEMINI_API_KEYS")
    api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")

    primary_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_PRIMARY_MODEL")
    fallback_model: str = Field(default="gemini-pro", alias="GEMINI_FALLBACK_MODEL")

    max_attempts: int = Field(default=5, alias="GEMINI_MAX_ATTEMPTS")
    rotation_pause_sec: float = Field(default=1.0, alias="GEMINI_ROTATION_PAUSE_SEC")
    request_timeout_sec: float = Field(default=120.0, alias="GEMINI_TIMEOUT_SEC")

    max_prompt_chars: int = Field(default=30000, alias="GEMINI_MAX_PROMPT_CHARS")
    debug_excerpt_chars: int = Field(default=500, alias="GEMINI_DEBUG_EXCERPT_CHARS")
    error_detail_chars: int = Field(default=150, alias="GEMINI_ERROR_DETAIL_CHARS")

    @computed_field
    def api_keys(self) -> list[str]:
        keys = [k.strip() for k in (self.api_keys_raw or "").split(",") if k.strip()]
        if not keys and self.api_key and self.api_key.strip():
            keys = [self.api_key.strip()]
        return keys


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="studyaid", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")
    db_echo: bool = Field(default=False, alias="DB_ECHO")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"

    @computed_field
    def is_testing(self) -> bool:
        return self.mode == "test"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    postgres: PostgresSettings = Field(default_factory=lambda: PostgresSettings())
    jwt: JWTSettings = Field(default_factory=lambda: JWTSettings())
    gemini: GeminiSettings = Field(default_factory=lambda: GeminiSettings())

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"], alias="CORS_ORIGINS"
    )


settings = Settings()
