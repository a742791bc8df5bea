"""Per-resource queries over the document store.

Callers pass only locale, filter values and paging; a filter whose value is
missing or empty is left out of the query instead of becoming a
match-nothing condition.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from utils.document_store import DocumentStore, PaginatedDocs, has_translation
from utils.locale import DEFAULT_LOCALE, LOCALES


DEFAULT_LIMIT = 10

SERVICES = "services"
COURSES = "courses"
PORTFOLIO = "portfolio"
LOOKBOOKS = "lookbooks"
SITE_SETTINGS = "site-settings"

LOCALIZED_COLLECTIONS = (SERVICES, COURSES, PORTFOLIO, LOOKBOOKS)


class CatalogQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    collection: str
    locale: str = DEFAULT_LOCALE
    where: Dict[str, Any] = Field(default_factory=dict)
    page: int = 1
    limit: int = DEFAULT_LIMIT
    sort: Optional[str] = None
    draft: bool = False

    @classmethod
    def build(cls, collection: str, locale: str, filters: Optional[Dict[str, Any]] = None, **kwargs) -> "CatalogQuery":
        where = {field: value for field, value in (filters or {}).items() if value not in (None, "")}
        return cls(collection=collection, locale=locale, where=where, **kwargs)

    def run(self, store: DocumentStore) -> PaginatedDocs:
        return store.find(
            self.collection,
            where=self.where or None,
            locale=self.locale,
            sort=self.sort,
            page=self.page,
            limit=self.limit,
            draft=self.draft,
        )

    def first(self, store: DocumentStore) -> Optional[Dict[str, Any]]:
        return store.find_one(self.collection, self.where, locale=self.locale, draft=self.draft)


def find_services(store: DocumentStore, locale: str, category: Optional[str] = None) -> PaginatedDocs:
    query = CatalogQuery.build(SERVICES, locale, {"category": category}, sort="-featured,-createdAt")
    return query.run(store)


def find_service_by_slug(store: DocumentStore, slug: str, locale: str, draft: bool = False) -> Optional[Dict[str, Any]]:
    return CatalogQuery.build(SERVICES, locale, {"slug": slug}, draft=draft).first(store)


def find_courses(
    store: DocumentStore,
    locale: str,
    category: Optional[str] = None,
    level: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
) -> PaginatedDocs:
    filters = {"status": "published", "category": category, "level": level}
    query = CatalogQuery.build(COURSES, locale, filters, limit=limit, sort="-createdAt")
    return query.run(store)


def find_course_by_slug(store: DocumentStore, slug: str, locale: str, draft: bool = False) -> Optional[Dict[str, Any]]:
    filters = {"slug": slug, "status": "published"}
    return CatalogQuery.build(COURSES, locale, filters, draft=draft).first(store)


def find_portfolio(store: DocumentStore, locale: str, page: int = 1, limit: int = DEFAULT_LIMIT) -> PaginatedDocs:
    query = CatalogQuery.build(PORTFOLIO, locale, page=page, limit=limit, sort="-featured,-createdAt")
    return query.run(store)


def find_portfolio_by_slug(store: DocumentStore, slug: str, locale: str, draft: bool = False) -> Optional[Dict[str, Any]]:
    return CatalogQuery.build(PORTFOLIO, locale, {"slug": slug}, draft=draft).first(store)


def find_collections(store: DocumentStore, locale: str) -> PaginatedDocs:
    return CatalogQuery.build(LOOKBOOKS, locale, sort="-releaseDate").run(store)


def find_collection_by_slug(store: DocumentStore, slug: str, locale: str, draft: bool = False) -> Optional[Dict[str, Any]]:
    return CatalogQuery.build(LOOKBOOKS, locale, {"slug": slug}, draft=draft).first(store)


def find_site_settings(store: DocumentStore, locale: str) -> Optional[Dict[str, Any]]:
    return store.find_global(SITE_SETTINGS, locale=locale)


def find_available_locales(store: DocumentStore, collection: str, slug: str, draft: bool = False) -> List[str]:
    """Locales in which the document has its own translation (no fallback)."""
    if collection not in LOCALIZED_COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}'")
    doc = store.find_raw(collection, {"slug": slug}, draft=draft)
    if not doc:
        return []
    return [code for code in LOCALES if has_translation(doc, code)]
