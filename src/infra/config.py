from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


STORE_BACKENDS = ("json", "memory", "sqlite")


class Settings(BaseSettings):
    # Environment
    environment: str = Field(default="development")

    # Store
    store_backend: str = Field(default="json")
    users_file: str = Field(default="./data/users.json")
    database_path: str = Field(default="./data/accounts.db")

    # Auth
    auth_realm: str = Field(default="account-api")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # CORS
    cors_origins: List[str] = Field(default=["http://localhost:3000"])

    # Rate limit
    rate_limit_enabled: bool = Field(default=True)
    signup_rate_limit: str = Field(default="10/minute")

    # Logging
    log_file: Optional[str] = Field(default=None)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v):
        v = v.lower()
        if v not in STORE_BACKENDS:
            raise ValueError(f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if not 0 < v < 65536:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )
