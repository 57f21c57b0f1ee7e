from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    mongo_uri: str
    mongo_tls: bool = False
    mongo_connect_timeout_ms: int = 5000

    # No default: the signing secret must come from the environment.
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expires_minutes: int = 60

    blacklist_backend: Literal["memory", "redis"] = "memory"
    redis_db: int = 0
    redis_port: int = 6379
    redis_host: str = "localhost"
    redis_password: str | None = None

    seed_on_startup: bool = False
    admin_username: str | None = None
    admin_email: str | None = None
    admin_password: str | None = None
    viewer_username: str | None = None
    viewer_email: str | None = None
    viewer_password: str | None = None

    model_config = SettingsConfigDict(env_file=(".env",), case_sensitive=False, extra="ignore")

    @property
    def access_token_expires_seconds(self) -> int:
        return self.access_token_expires_minutes * 60


def get_settings() -> Settings:
    return Settings()
