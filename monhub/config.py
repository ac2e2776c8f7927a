from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
import json


class Settings(BaseSettings):
    # Remote marketplace API
    API_BASE_URL: str = "http://localhost:4000/api"
    API_TIMEOUT_SECONDS: float = 15.0

    # JWT (tokens are issued by the backend, we only decode them)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # CDN
    CDN_URL: str = "https://cdn.monhubimmo.fr"
    CDN_FALLBACK_URL: str = "https://d2of14y3b5uig5.cloudfront.net"
    S3_URL: str = "https://monhubimmo.s3.amazonaws.com"

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Dates and times are displayed in this zone
    TIMEZONE: str = "Europe/Paris"

    # JSON list or comma separated string
    CORS_ORIGINS: str = "*"

    @field_validator("API_BASE_URL", "CDN_URL", "CDN_FALLBACK_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @property
    def cors_origins(self) -> list[str]:
        value = self.CORS_ORIGINS.strip()
        if value.startswith("["):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                raise ValueError(f"Invalid JSON in CORS_ORIGINS: {value}")
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
