import hmac
import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, RedirectResponse
from pydantic import BaseModel, ConfigDict

from utils.config import Settings, get_settings
from utils.draft_mode import enable_draft_mode
from utils.locale import cast_locale

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/preview", tags=["Preview"])

# collection whose documents live directly under the locale root
PAGES_COLLECTION = "pages"


class PreviewRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret: Optional[str] = None
    slug: Optional[str] = None
    collection: Optional[str] = None
    locale: str

    def redirect_path(self) -> str:
        locale = quote(self.locale, safe="")
        slug = quote(self.slug, safe="")
        if self.collection == PAGES_COLLECTION:
            return f"/{locale}/{slug}"
        return f"/{locale}/{quote(self.collection, safe='')}/{slug}"


def secret_matches(expected: str, provided: Optional[str]) -> bool:
    if provided is None:
        return False
    return hmac.compare_digest(expected.encode(), provided.encode())


@router.get("")
def preview(
    secret: Optional[str] = Query(None),
    slug: Optional[str] = Query(None),
    collection: Optional[str] = Query(None),
    locale: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
):
    """Enable draft mode and redirect to the document's public URL."""
    if not settings.preview_secret:
        logger.error("[preview] PAYLOAD_SECRET not configured")
        raise HTTPException(status_code=500, detail="Preview secret not configured")

    req = PreviewRequest(secret=secret, slug=slug, collection=collection, locale=cast_locale(locale))

    if not secret_matches(settings.preview_secret, req.secret):
        logger.warning("[preview] rejected request with invalid secret")
        return PlainTextResponse("Invalid token", status_code=401)

    if not req.slug or not req.collection:
        return PlainTextResponse("Missing required params", status_code=400)

    target = req.redirect_path()
    response = RedirectResponse(url=target, status_code=302)
    enable_draft_mode(response, settings)
    logger.info(f"[preview] draft mode enabled, redirecting to {target}")
    return response
