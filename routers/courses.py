import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from utils.content_client import COURSES, DEFAULT_LIMIT, find_course_by_slug, find_courses
from utils.dependencies import draft_mode, get_document_store
from utils.document_store import DocumentStore
from utils.locale import cast_locale
from utils.params import MAX_LIMIT, parse_positive_int
from utils.shaping import COURSE_DETAIL_FIELDS, course_summary, normalize_document, project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/courses", tags=["Courses"])


@router.get("")
def list_courses(
    category: Optional[str] = Query(None),
    level: Optional[str] = Query(None, description="beginner | intermediate | advanced | all"),
    limit: Optional[str] = Query(None, description="Max courses to return (default 10)"),
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
):
    locale = cast_locale(locale)
    limit_value = parse_positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT)
    try:
        result = find_courses(store, locale, category=category, level=level, limit=limit_value)
    except Exception:
        logger.exception(f"[courses] list failed locale={locale} category={category} level={level}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch courses"})

    return {
        "courses": [course_summary(normalize_document(COURSES, c)) for c in result.docs],
        "totalDocs": result.totalDocs,
        "totalPages": result.totalPages,
    }


@router.get("/{slug}")
def get_course(
    slug: str,
    locale: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_document_store),
    draft: bool = Depends(draft_mode),
):
    locale = cast_locale(locale)
    try:
        course = find_course_by_slug(store, slug, locale, draft=draft)
    except Exception:
        logger.exception(f"[courses] lookup failed slug={slug} locale={locale}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch course"})

    if course is None:
        return JSONResponse(status_code=404, content={"error": "Course not found"})
    return project(normalize_document(COURSES, course), COURSE_DETAIL_FIELDS)
