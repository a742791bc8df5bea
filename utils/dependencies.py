import logging

from fastapi import Depends, HTTPException, Request, status

from utils.config import Settings, get_settings
from utils.document_store import DocumentStore, MongoDocumentStore
from utils.draft_mode import is_draft_mode

logger = logging.getLogger(__name__)

# Created lazily at request time to avoid DNS/SRV lookups during module import
_store = None


def get_document_store(settings: Settings = Depends(get_settings)) -> DocumentStore:
    global _store
    if _store is None:
        if not settings.mongo_uri:
            logger.error("[content-store] MONGO_URI not configured")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Content store not configured",
            )
        _store = MongoDocumentStore.from_uri(settings.mongo_uri, settings.mongo_db)
    return _store


def draft_mode(request: Request, settings: Settings = Depends(get_settings)) -> bool:
    return is_draft_mode(request, settings)
