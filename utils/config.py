"""Process-wide settings, read once from the environment (and .env).

Handlers take the result of get_settings() through FastAPI's Depends so that
tests can swap it with app.dependency_overrides.
"""
import os
from functools import lru_cache
from typing import FrozenSet, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    mongo_uri: Optional[str] = None
    mongo_db: str = "purity"
    preview_secret: Optional[str] = None
    site_url: str = "http://localhost:3000"
    site_name: str = "PURITY Fashion Studio"
    draft_cookie_name: str = "__prerender_bypass"
    draft_ttl_seconds: int = 3600
    skip_routers: FrozenSet[str] = frozenset()
    log_level: str = "INFO"


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        mongo_uri=os.getenv("MONGO_URI") or None,
        mongo_db=os.getenv("MONGO_DB") or "purity",
        preview_secret=os.getenv("PAYLOAD_SECRET") or None,
        site_url=os.getenv("SITE_URL") or "http://localhost:3000",
        draft_cookie_name=os.getenv("DRAFT_COOKIE_NAME") or "__prerender_bypass",
        draft_ttl_seconds=_int_env("DRAFT_TTL_SECONDS", 3600),
        skip_routers=frozenset(
            s.strip()
            for s in (os.getenv("SKIP_ROUTERS") or "").split(",")
            if s.strip()
        ),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
