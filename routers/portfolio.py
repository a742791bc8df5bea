import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from utils.content_client import DEFAULT_LIMIT, PORTFOLIO, find_portfolio, find_portfolio_by_slug
from utils.dependencies import draft_mode, get_document_store
from utils.document_store import DocumentStore
from utils.locale import cast_locale
from utils.params import MAX_LIMIT, MAX_PAGE, parse_positive_int
from utils.shaping import PORTFOLIO_FIELDS, normalize_document, normalize_documents, project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolio", tags=["Portfolio"])


@router.get("")
def list_portfolio(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None),
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
):
    locale = cast_locale(locale)
    page_value = parse_positive_int(page, 1, MAX_PAGE)
    limit_value = parse_positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT)
    try:
        result = find_portfolio(store, locale, page=page_value, limit=limit_value)
    except Exception:
        logger.exception(f"[portfolio] list failed locale={locale} page={page_value}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch portfolio"})

    payload = result.model_dump()
    payload["docs"] = normalize_documents(PORTFOLIO, result.docs)
    return payload


@router.get("/{slug}")
def get_portfolio_item(
    slug: str,
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
    draft: bool = Depends(draft_mode),
):
    locale = cast_locale(locale)
    try:
        item = find_portfolio_by_slug(store, slug, locale, draft=draft)
    except Exception:
        logger.exception(f"[portfolio] lookup failed slug={slug} locale={locale}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch portfolio item"})

    if item is None:
        return JSONResponse(status_code=404, content={"error": "Portfolio item not found"})
    return project(normalize_document(PORTFOLIO, item), PORTFOLIO_FIELDS)
