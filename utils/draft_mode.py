"""Signed draft-mode cookie: ``draft.<expiry>.<sig>``."""
import base64
import hashlib
import hmac
import time
from typing import Optional

from fastapi import Request, Response

from utils.config import Settings

DRAFT_MARKER = "draft"


def _sign(secret: str, value: str) -> str:
    sig = hmac.new(secret.encode(), value.encode(), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(sig).decode().rstrip("=")


def serialize_draft_cookie(secret: str, expiry_ts: int) -> str:
    payload = f"{DRAFT_MARKER}.{expiry_ts}"
    return f"{payload}.{_sign(secret, payload)}"


def verify_draft_cookie(secret: Optional[str], value: Optional[str], now: Optional[float] = None) -> bool:
    if not secret or not value:
        return False
    try:
        marker, expiry, sig = value.split(".")
        expiry_ts = int(expiry)
    except ValueError:
        return False
    if marker != DRAFT_MARKER:
        return False
    if not hmac.compare_digest(sig, _sign(secret, f"{marker}.{expiry}")):
        return False
    return expiry_ts > (now if now is not None else time.time())


def enable_draft_mode(response: Response, settings: Settings) -> None:
    expiry = int(time.time()) + settings.draft_ttl_seconds
    response.set_cookie(
        key=settings.draft_cookie_name,
        value=serialize_draft_cookie(settings.preview_secret, expiry),
        httponly=True,
        secure=settings.site_url.startswith("https://"),
        samesite="lax",
        max_age=settings.draft_ttl_seconds,
        path="/",
    )


def is_draft_mode(request: Request, settings: Settings) -> bool:
    return verify_draft_cookie(settings.preview_secret, request.cookies.get(settings.draft_cookie_name))
