# taskapi/config.py
"""Environment-driven settings for the task manager API."""

import os
from dataclasses import dataclass

DEFAULT_JWT_SECRET = "taskapi-local-development-secret-change-in-production"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    jwt_secret: str = DEFAULT_JWT_SECRET
    token_ttl_hours: int = 24
    cors_origins: tuple[str, ...] = ("*",)
    database_url: str = ""
    allow_demo_passwords: bool = True
    log_level: str = "INFO"

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to demo defaults."""
        origins = os.getenv("CORS_ORIGINS", "*").split(",")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
            token_ttl_hours=int(os.getenv("TOKEN_TTL_HOURS", "24")),
            cors_origins=tuple(o.strip() for o in origins if o.strip()),
            database_url=os.getenv("DATABASE_URL", ""),
            allow_demo_passwords=_env_bool("DEMO_PLAINTEXT_PASSWORDS", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
