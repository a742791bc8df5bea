# main.py: locale routing, catalog API and preview, with skippable routers
import importlib
import logging

from fastapi import FastAPI

from utils.config import get_settings
from utils.locale_routing import LocaleRoutingMiddleware

settings = get_settings()

if not logging.getLogger().handlers:
    logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("main")

app = FastAPI(
    title="PURITY Studio API",
    description="Locale routing, catalog queries and draft preview for the studio website.",
    version="1.0.0",
)

app.add_middleware(LocaleRoutingMiddleware)


# -------- Health check --------
@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


def _include_router(module_path: str, attr: str = "router") -> None:
    """Import a router module safely and include its FastAPI router."""
    try:
        mod = importlib.import_module(module_path)
    except Exception:
        logger.exception(f"[ROUTER-IMPORT] FAILED to import '{module_path}'")
        return
    router = getattr(mod, attr, None)
    if router is None:
        logger.error(f"[ROUTER-IMPORT] Module '{module_path}' missing '{attr}'")
        return
    app.include_router(router)
    logger.info(f"[ROUTER-IMPORT] Included '{module_path}'")


# -------- Which routers to include? --------
ROUTERS = {
    # catalog
    "services": "routers.services",
    "courses": "routers.courses",
    "portfolio": "routers.portfolio",
    "lookbooks": "routers.lookbooks",
    "site_settings": "routers.site_settings",

    # locales / preview
    "locales": "routers.locales",
    "preview": "routers.preview",
}

logger.info(f"[STARTUP] SKIP_ROUTERS={sorted(settings.skip_routers)}")

for name, module_path in ROUTERS.items():
    if name in settings.skip_routers:
        logger.info(f"[ROUTER-IMPORT] Skipping '{name}' ({module_path}) per SKIP_ROUTERS")
        continue
    _include_router(module_path)
