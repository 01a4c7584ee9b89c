from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    DB_URL: str = "sqlite:///./afterschool.db"
    SQL_ECHO: bool = False

    CORS_ORIGINS: str = "*"

    IMAGES_DIR: str = "public/images"

    LOG_LEVEL: str = "INFO"

    def cors_list(self) -> list[str]:
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]


settings = Settings()
