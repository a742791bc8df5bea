import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from utils.content_client import find_site_settings
from utils.dependencies import get_document_store
from utils.document_store import DocumentStore
from utils.locale import cast_locale

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/site-settings", tags=["Site Settings"])

_INTERNAL_FIELDS = ("_status", "globalType", "updatedBy")


@router.get("")
def get_site_settings(
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
):
    locale = cast_locale(locale)
    try:
        settings_doc = find_site_settings(store, locale)
    except Exception:
        logger.exception(f"[site-settings] lookup failed locale={locale}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch site settings"})

    if settings_doc is None:
        return JSONResponse(status_code=404, content={"error": "Site settings not found"})
    return {k: v for k, v in settings_doc.items() if k not in _INTERNAL_FIELDS}
