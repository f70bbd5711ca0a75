from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEV_JWT_SECRET = "dev-only-secret-change-me-please-0123456789"
_ENVIRONMENTS = ("development", "production", "test")


@dataclass(frozen=True)
class Settings:
    environment: str
    data_dir: Path
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    jwt_expires_minutes: int
    bcrypt_rounds: int
    cors_origins: tuple[str, ...]
    log_level: str

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def _env(name: str, default: str) -> str:
    value = os.getenv(f"BANKAPP_{name}")
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"BANKAPP_{name} must be an integer, got {raw!r}") from exc


def get_settings() -> Settings:
    environment = _env("ENV", "development").lower()
    if environment not in _ENVIRONMENTS:
        raise ValueError(f"BANKAPP_ENV must be one of {_ENVIRONMENTS}, got {environment!r}")

    # default: backend/data
    # bankapp/settings.py -> bankapp/ -> backend/
    data_dir = Path(_env("DATA_DIR", str(Path(__file__).resolve().parents[1] / "data"))).expanduser()

    database_url = _env("DATABASE_URL", "")
    if not database_url:
        data_dir.mkdir(parents=True, exist_ok=True)
        database_url = f"sqlite:///{(data_dir / 'bankapp.db').as_posix()}"

    jwt_secret = _env("JWT_SECRET", DEV_JWT_SECRET)
    if environment == "production" and jwt_secret == DEV_JWT_SECRET:
        raise ValueError("BANKAPP_JWT_SECRET must be set in production")
    if len(jwt_secret) < 32:
        raise ValueError("BANKAPP_JWT_SECRET must be at least 32 characters")

    origins = tuple(
        o.strip() for o in _env("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()
    )

    return Settings(
        environment=environment,
        data_dir=data_dir,
        database_url=database_url,
        jwt_secret=jwt_secret,
        jwt_algorithm="HS256",
        # 7 days
        jwt_expires_minutes=_env_int("JWT_EXPIRES_MINUTES", 7 * 24 * 60),
        bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 10),
        cors_origins=origins,
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
