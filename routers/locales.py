import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from utils.content_client import find_available_locales, LOCALIZED_COLLECTIONS
from utils.dependencies import get_document_store
from utils.document_store import DocumentStore
from utils.locale import DEFAULT_LOCALE, LOCALE_PREFIX, LOCALES, get_locale_mapping

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/locales", tags=["Locales"])


@router.get("", summary="List supported locales", response_description="Locale registry")
async def list_locales():
    """Return the static locale registry used by backend & frontend.

    Shape:
    {
      "locales": ["uk", "ru", "en"],
      "defaultLocale": "uk",
      "localePrefix": "always",
      "labels": {"uk": {"cms": "uk", "label": "Українська"}, ...}
    }
    """
    return {
        "locales": list(LOCALES),
        "defaultLocale": DEFAULT_LOCALE,
        "localePrefix": LOCALE_PREFIX,
        "labels": {code: dict(meta) for code, meta in get_locale_mapping().items()},
    }


@router.get("/available")
def available_locales(
    collection: str = Query(..., description="One of services, courses, portfolio, lookbooks"),
    slug: str = Query(...),
    store: DocumentStore = Depends(get_document_store),
):
    """Locales in which a document has its own translation."""
    if collection not in LOCALIZED_COLLECTIONS:
        return JSONResponse(status_code=400, content={"error": f"Unknown collection '{collection}'"})
    try:
        locales = find_available_locales(store, collection, slug)
    except Exception:
        logger.exception(f"[locales] availability lookup failed collection={collection} slug={slug}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch available locales"})
    return {"locales": locales}
