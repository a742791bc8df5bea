import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from utils.content_client import LOOKBOOKS, find_collection_by_slug, find_collections
from utils.dependencies import draft_mode, get_document_store
from utils.document_store import DocumentStore
from utils.locale import cast_locale
from utils.shaping import LOOKBOOK_FIELDS, normalize_document, normalize_documents, project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/collections", tags=["Collections"])


@router.get("")
def list_collections(
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
):
    """Lookbook collections, newest release first."""
    locale = cast_locale(locale)
    try:
        result = find_collections(store, locale)
    except Exception:
        logger.exception(f"[collections] list failed locale={locale}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch collections"})

    payload = result.model_dump()
    payload["docs"] = normalize_documents(LOOKBOOKS, result.docs)
    return payload


@router.get("/{slug}")
def get_collection(
    slug: str,
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
    draft: bool = Depends(draft_mode),
):
    locale = cast_locale(locale)
    try:
        lookbook = find_collection_by_slug(store, slug, locale, draft=draft)
    except Exception:
        logger.exception(f"[collections] lookup failed slug={slug} locale={locale}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch collection"})

    if lookbook is None:
        return JSONResponse(status_code=404, content={"error": "Collection not found"})
    return project(normalize_document(LOOKBOOKS, lookbook), LOOKBOOK_FIELDS)
