import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from utils.content_client import SERVICES, find_service_by_slug, find_services
from utils.dependencies import draft_mode, get_document_store
from utils.document_store import DocumentStore
from utils.locale import cast_locale
from utils.shaping import SERVICE_FIELDS, normalize_document, normalize_documents, project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/services", tags=["Services"])


@router.get("")
def list_services(
    category: Optional[str] = Query(None, description="Service category (e.g. styling)"),
    locale: Optional[str] = Query(None, description="Content locale, defaults to uk"),
    store: DocumentStore = Depends(get_document_store),
):
    locale = cast_locale(locale)
    try:
        result = find_services(store, locale, category=category)
    except Exception:
        logger.exception(f"[services] list failed locale={locale} category={category}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch services"})

    payload = result.model_dump()
    payload["docs"] = normalize_documents(SERVICES, result.docs)
    return payload


@router.get("/{slug}")
def get_service(
    slug: str,
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
    draft: bool = Depends(draft_mode),
):
    locale = cast_locale(locale)
    try:
        service = find_service_by_slug(store, slug, locale, draft=draft)
    except Exception:
        logger.exception(f"[services] lookup failed slug={slug} locale={locale}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch service"})

    if service is None:
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return project(normalize_document(SERVICES, service), SERVICE_FIELDS)
