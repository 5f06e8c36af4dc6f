"""Runtime configuration read from ``STOREFRONT_*`` environment variables."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

DEFAULT_BASE_URL = "http://127.0.0.1:8000/api"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Routes:
    """API paths relative to ``Settings.base_url``."""

    category_products: str = "/categories-with-products"
    zones: str = "/zones"
    order: str = "/orders"
    my_orders: str = "/my-orders"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    img_url: str = ""
    log_level: str = "INFO"
    request_timeout: float | None = None
    max_retries: int = 1
    routes: Routes = field(default_factory=Routes)

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def image_url(self, image: str) -> str:
        return f"{self.img_url}{image}" if image else ""


def _parse_timeout(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"Invalid STOREFRONT_TIMEOUT: {value!r}") from None
    if timeout <= 0:
        raise ValueError(f"STOREFRONT_TIMEOUT must be > 0, got {timeout}")
    return timeout


def _parse_log_level(value: str | None) -> str:
    level = (value or "INFO").strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"Invalid STOREFRONT_LOG_LEVEL: {value!r}. "
            f"Use one of: {', '.join(sorted(_LOG_LEVELS))}"
        )
    return level


def _parse_retries(value: str | None) -> int:
    if value is None or not value.strip():
        return 1
    try:
        retries = int(value)
    except ValueError:
        raise ValueError(f"Invalid STOREFRONT_MAX_RETRIES: {value!r}") from None
    if retries < 1:
        raise ValueError(f"STOREFRONT_MAX_RETRIES must be >= 1, got {retries}")
    return retries


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build ``Settings`` from ``env`` (defaults to ``os.environ``).

    Raises:
        ValueError: If a variable is present but malformed.
    """
    env = os.environ if env is None else env
    return Settings(
        base_url=(env.get("STOREFRONT_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        img_url=env.get("STOREFRONT_IMG_URL", ""),
        log_level=_parse_log_level(env.get("STOREFRONT_LOG_LEVEL")),
        request_timeout=_parse_timeout(env.get("STOREFRONT_TIMEOUT")),
        max_retries=_parse_retries(env.get("STOREFRONT_MAX_RETRIES")),
    )
