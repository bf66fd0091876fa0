from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]
AuthMode = Literal["jwt", "legacy"]

# Display labels shown next to each course, keyed by category name.
# Override with CATEGORY_LABELS='{"Design": "🎨", ...}'.
DEFAULT_CATEGORY_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "Desenvolvimento Web": "🌐",
        "Mobile Development": "📱",
        "Ciência de Dados": "📊",
        "Design": "🎨",
    }
)
DEFAULT_FALLBACK_LABEL = "📚"


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("", "0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


def _parse_int(name: str, raw: str, *, minimum: int = 0) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum} (got {value})")
    return value


def _parse_category_labels(raw: str) -> Mapping[str, str]:
    if not raw:
        return DEFAULT_CATEGORY_LABELS
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        raise ValueError("CATEGORY_LABELS must be a JSON object") from None
    if not isinstance(parsed, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in parsed.items()
    ):
        raise ValueError("CATEGORY_LABELS must map category names to strings")
    return MappingProxyType(dict(parsed))


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    database_url: str | None
    redis_url: str | None
    auth_mode: AuthMode = "jwt"
    legacy_user_id: int = 1
    jwt_private_key: str | None = None
    access_token_ttl_min: int = 60
    cors_origins: tuple[str, ...] = ("*",)
    category_labels: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_CATEGORY_LABELS
    )
    default_category_label: str = DEFAULT_FALLBACK_LABEL

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def trusts_bearer_tokens(self) -> bool:
        """True when bearer tokens are accepted without verification."""
        return self.auth_mode == "legacy"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    auth_mode_raw = _getenv("AUTH_MODE", "jwt").lower()

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if auth_mode_raw not in ("jwt", "legacy"):
        raise ValueError(f"AUTH_MODE must be jwt|legacy (got {auth_mode_raw!r})")

    port = _parse_int("PORT", _getenv("PORT", "8000"), minimum=1)
    legacy_user_id = _parse_int(
        "LEGACY_USER_ID", _getenv("LEGACY_USER_ID", "1"), minimum=1
    )
    ttl = _parse_int(
        "ACCESS_TOKEN_TTL_MIN", _getenv("ACCESS_TOKEN_TTL_MIN", "60"), minimum=1
    )

    origins = tuple(
        o.strip() for o in _getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    )

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=_parse_bool("LOG_JSON", _getenv("LOG_JSON", "false")),
        port=port,
        database_url=_getenv("DATABASE_URL", "") or None,
        redis_url=_getenv("REDIS_URL", "") or None,
        auth_mode=auth_mode_raw,
        legacy_user_id=legacy_user_id,
        jwt_private_key=_getenv("JWT_PRIVATE_KEY", "") or None,
        access_token_ttl_min=ttl,
        cors_origins=origins or ("*",),
        category_labels=_parse_category_labels(_getenv("CATEGORY_LABELS", "")),
        default_category_label=(
            _getenv("DEFAULT_CATEGORY_LABEL", "") or DEFAULT_FALLBACK_LABEL
        ),
    )


SETTINGS = load_settings()
