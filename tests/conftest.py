import copy

import pytest
from fastapi.testclient import TestClient
from pymongo import DESCENDING

from main import app
from utils.config import Settings, get_settings
from utils.dependencies import get_document_store
from utils.document_store import (
    ContentStoreError,
    DocumentStore,
    build_envelope,
    localize_document,
    parse_sort,
)

PREVIEW_SECRET = "test-preview-secret"

RICH_DESCRIPTION = {
    "root": {
        "type": "root",
        "children": [
            {"type": "paragraph", "children": [{"type": "text", "text": "Learn which colours"}]},
            {"type": "paragraph", "children": [{"type": "text", "text": "suit you best."}]},
        ],
    }
}

DOCUMENTS = {
    "services": [
        {
            "id": "svc-1",
            "slug": "wardrobe-audit",
            "category": "styling",
            "title": {"uk": "Аудит гардеробу", "ru": "Аудит гардероба", "en": "Wardrobe audit"},
            "featured": True,
            "pricing": {"uah": 4000, "eur": 100},
            "createdAt": "2025-01-02",
            "_status": "published",
            "updatedBy": "admin-1",
        },
        {
            "id": "svc-2",
            "slug": "tailoring",
            "category": "atelier",
            "title": {"uk": "Пошиття", "en": "Tailoring"},
            "featured": False,
            "createdAt": "2025-02-01",
            "_status": "published",
        },
        {
            "id": "svc-3",
            "slug": "unreleased-service",
            "category": "styling",
            "title": {"uk": "Чернетка"},
            "featured": False,
            "createdAt": "2025-03-01",
            "_status": "draft",
        },
    ],
    "courses": [
        {
            "id": "crs-1",
            "slug": "color-basics",
            "status": "published",
            "category": "color-analysis",
            "level": "beginner",
            "title": {"uk": "Основи кольору", "en": "Colour basics"},
            "excerpt": "",
            "description": RICH_DESCRIPTION,
            "createdAt": "2025-03-01",
            "_status": "published",
        },
        {
            "id": "crs-2",
            "slug": "masterclass-pro",
            "status": "published",
            "category": "masterclass",
            "level": "advanced",
            "title": {"uk": "Майстерклас", "en": "Masterclass"},
            "excerpt": {"uk": "Для професіоналів", "en": "For professionals"},
            "createdAt": "2025-04-01",
            "_status": "published",
        },
        {
            "id": "crs-3",
            "slug": "coming-later",
            "status": "coming-soon",
            "category": "masterclass",
            "level": "all",
            "title": {"uk": "Скоро"},
            "createdAt": "2025-05-01",
            "_status": "published",
        },
    ],
    "portfolio": [
        {
            "id": f"pf-{n}",
            "slug": f"case-{n}",
            "title": {"uk": f"Кейс {n}", "en": f"Case {n}"},
            "featured": n == 1,
            "createdAt": f"2025-0{n}-01",
            "_status": "published",
        }
        for n in range(1, 4)
    ],
    "lookbooks": [
        {"id": "lb-1", "slug": "autumn", "name": {"uk": "Осінь", "en": "Autumn"}, "releaseDate": "2024-09-01"},
        {"id": "lb-2", "slug": "spring", "name": {"uk": "Весна", "en": "Spring"}, "releaseDate": "2025-03-01"},
        {"id": "lb-3", "slug": "winter", "name": {"uk": "Зима", "en": "Winter"}, "releaseDate": "2024-12-01"},
    ],
}

GLOBALS = {
    "site-settings": {
        "id": "settings-1",
        "globalType": "site-settings",
        "siteName": {"uk": "PURITY", "en": "PURITY Studio"},
        "contactEmail": "hello@purity.style",
    }
}


class InMemoryDocumentStore(DocumentStore):
    """Dictionary-backed store with the same filtering/locale rules as Mongo."""

    def __init__(self, documents=None, globals_=None):
        self.documents = copy.deepcopy(documents if documents is not None else DOCUMENTS)
        self.globals = copy.deepcopy(globals_ if globals_ is not None else GLOBALS)
        self.calls = []

    def _matching(self, collection, where, draft):
        docs = []
        for doc in self.documents.get(collection, []):
            if not draft and doc.get("_status") == "draft":
                continue
            if all(doc.get(field) == value for field, value in (where or {}).items()):
                docs.append(doc)
        return docs

    def find(self, collection, where=None, locale="uk", sort=None, page=1, limit=10, draft=False):
        self.calls.append({
            "collection": collection,
            "where": dict(where) if where is not None else None,
            "locale": locale,
            "sort": sort,
            "page": page,
            "limit": limit,
            "draft": draft,
        })
        docs = self._matching(collection, where, draft)
        for field, direction in reversed(parse_sort(sort)):
            docs = sorted(docs, key=lambda d: (d.get(field) is not None, d.get(field)), reverse=direction == DESCENDING)
        window = docs[(page - 1) * limit: page * limit]
        return build_envelope([localize_document(d, locale) for d in window], len(docs), page, limit)

    def find_raw(self, collection, where, draft=False):
        docs = self._matching(collection, where, draft)
        return copy.deepcopy(docs[0]) if docs else None

    def find_global(self, slug, locale="uk"):
        doc = self.globals.get(slug)
        return localize_document(doc, locale) if doc else None


class FailingDocumentStore(DocumentStore):
    def find(self, collection, where=None, locale="uk", sort=None, page=1, limit=10, draft=False):
        raise ContentStoreError("connection refused by mongo-0.internal:27017")

    def find_raw(self, collection, where, draft=False):
        raise ContentStoreError("connection refused by mongo-0.internal:27017")

    def find_global(self, slug, locale="uk"):
        raise ContentStoreError("connection refused by mongo-0.internal:27017")


@pytest.fixture
def settings():
    return Settings(preview_secret=PREVIEW_SECRET, mongo_uri=None)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def client(settings, store):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_document_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_document_store] = lambda: FailingDocumentStore()
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
