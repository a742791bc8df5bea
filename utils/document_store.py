"""Document store behind the content API.

The catalog code talks to a DocumentStore and only ever passes a collection
name, a locale, and a flat {field: value} mapping of equality filters. The
MongoDB implementation is the production backend; localized fields are kept
as {locale: value} maps inside each document.
"""
import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from utils.locale import DEFAULT_LOCALE, LOCALES

logger = logging.getLogger(__name__)

GLOBALS_COLLECTION = "globals"


class ContentStoreError(RuntimeError):
    """Raised when the underlying store fails; message is for logs only."""


class PaginatedDocs(BaseModel):
    docs: List[Dict[str, Any]]
    totalDocs: int
    limit: int
    totalPages: int
    page: int
    pagingCounter: int
    hasPrevPage: bool
    hasNextPage: bool
    prevPage: Optional[int] = None
    nextPage: Optional[int] = None


def build_envelope(docs: List[Dict[str, Any]], total: int, page: int, limit: int) -> PaginatedDocs:
    total_pages = max(1, math.ceil(total / limit)) if limit else 1
    return PaginatedDocs(
        docs=docs,
        totalDocs=total,
        limit=limit,
        totalPages=total_pages,
        page=page,
        pagingCounter=(page - 1) * limit + 1,
        hasPrevPage=page > 1,
        hasNextPage=page < total_pages,
        prevPage=page - 1 if page > 1 else None,
        nextPage=page + 1 if page < total_pages else None,
    )


def _is_localized_map(value: Any) -> bool:
    return isinstance(value, dict) and bool(value) and all(k in LOCALES for k in value)


def localize_value(value: Any, locale: str, fallback_locale: str = DEFAULT_LOCALE) -> Any:
    """Resolve {locale: value} maps anywhere inside a document value."""
    if _is_localized_map(value):
        # an empty translation counts as missing, same as has_translation
        own = value.get(locale)
        if own not in (None, ""):
            return localize_value(own, locale, fallback_locale)
        return localize_value(value.get(fallback_locale), locale, fallback_locale)
    if isinstance(value, dict):
        return {k: localize_value(v, locale, fallback_locale) for k, v in value.items()}
    if isinstance(value, list):
        return [localize_value(v, locale, fallback_locale) for v in value]
    return value


def localize_document(doc: Mapping[str, Any], locale: str, fallback_locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
    return {k: localize_value(v, locale, fallback_locale) for k, v in doc.items()}


def has_translation(doc: Mapping[str, Any], locale: str) -> bool:
    """True when at least one localized field carries its own value for locale."""

    def _walk(value):
        if _is_localized_map(value):
            return value.get(locale) not in (None, "")
        if isinstance(value, dict):
            return any(_walk(v) for v in value.values())
        if isinstance(value, list):
            return any(_walk(v) for v in value)
        return False

    return any(_walk(v) for v in doc.values())


def parse_sort(sort: Optional[str]):
    """'-featured,-createdAt' -> [('featured', DESCENDING), ('createdAt', DESCENDING)]"""
    spec = []
    for part in (sort or "").split(","):
        part = part.strip()
        if not part:
            continue
        if part.startswith("-"):
            spec.append((part[1:], DESCENDING))
        else:
            spec.append((part, ASCENDING))
    return spec


def _serialize_doc(doc: dict) -> dict:
    def _serialize_value(value):
        if isinstance(value, ObjectId):
            return str(value)
        if isinstance(value, dict):
            return {k: _serialize_value(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_serialize_value(v) for v in value]
        return value

    if not doc:
        return {}
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = doc.pop("_id")
    return _serialize_value(doc)


class DocumentStore:
    """Interface for the CMS document store."""

    def find(
        self,
        collection: str,
        where: Optional[Mapping[str, Any]] = None,
        locale: str = DEFAULT_LOCALE,
        sort: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        draft: bool = False,
    ) -> PaginatedDocs:
        raise NotImplementedError

    def find_one(
        self,
        collection: str,
        where: Mapping[str, Any],
        locale: str = DEFAULT_LOCALE,
        draft: bool = False,
    ) -> Optional[Dict[str, Any]]:
        result = self.find(collection, where=where, locale=locale, page=1, limit=1, draft=draft)
        return result.docs[0] if result.docs else None

    def find_raw(self, collection: str, where: Mapping[str, Any], draft: bool = False) -> Optional[Dict[str, Any]]:
        """Return one document without locale resolution."""
        raise NotImplementedError

    def find_global(self, slug: str, locale: str = DEFAULT_LOCALE) -> Optional[Dict[str, Any]]:
        raise NotImplementedError


class MongoDocumentStore(DocumentStore):
    def __init__(self, db):
        self._db = db

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str) -> "MongoDocumentStore":
        # connect=False defers the initial connection to the first query
        client = MongoClient(mongo_uri, connect=False)
        return cls(client[db_name])

    @staticmethod
    def _build_query(where: Optional[Mapping[str, Any]], draft: bool) -> Dict[str, Any]:
        query = {field: value for field, value in (where or {}).items()}
        if not draft:
            query["_status"] = {"$ne": "draft"}
        return query

    def find(self, collection, where=None, locale=DEFAULT_LOCALE, sort=None, page=1, limit=10, draft=False):
        query = self._build_query(where, draft)
        coll = self._db[collection]
        try:
            total = coll.count_documents(query)
            cursor = coll.find(query)
            sort_spec = parse_sort(sort)
            if sort_spec:
                cursor = cursor.sort(sort_spec)
            cursor = cursor.skip((page - 1) * limit).limit(limit)
            docs = [localize_document(_serialize_doc(d), locale) for d in cursor]
        except PyMongoError as e:
            raise ContentStoreError(f"find on '{collection}' failed: {e}") from e
        return build_envelope(docs, total, page, limit)

    def find_raw(self, collection, where, draft=False):
        try:
            doc = self._db[collection].find_one(self._build_query(where, draft))
        except PyMongoError as e:
            raise ContentStoreError(f"find_one on '{collection}' failed: {e}") from e
        return _serialize_doc(doc) if doc else None

    def find_global(self, slug, locale=DEFAULT_LOCALE):
        try:
            doc = self._db[GLOBALS_COLLECTION].find_one({"globalType": slug})
        except PyMongoError as e:
            raise ContentStoreError(f"global '{slug}' lookup failed: {e}") from e
        if not doc:
            return None
        return localize_document(_serialize_doc(doc), locale)
