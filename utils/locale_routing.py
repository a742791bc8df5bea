"""Locale-prefix routing applied to every inbound request path.

Rules are evaluated in order and the first match wins:

1. excluded paths (API, framework assets, files with an extension, admin root)
   pass through untouched
2. ``/{locale}/admin...`` redirects to the same admin path without the locale
3. paths that already carry a registered locale prefix pass through
4. everything else redirects to the default-locale-prefixed path
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from utils.locale import DEFAULT_LOCALE, LOCALES

logger = logging.getLogger(__name__)

PASS = "pass"
REDIRECT = "redirect"

EXCLUDED_SEGMENTS = ("api", "_next", "_vercel", "admin", "static", "healthz", "docs", "redoc")

_LOCALE_GROUP = "|".join(re.escape(code) for code in LOCALES)
_EXCLUDED_GROUP = "|".join(re.escape(segment) for segment in EXCLUDED_SEGMENTS)
_EXCLUDED_RE = re.compile(r"^/(?:(?:%s)(?:/|$)|.*\.)" % _EXCLUDED_GROUP)
_ADMIN_RE = re.compile(r"^/(?:%s)(/admin(?:/.*)?)$" % _LOCALE_GROUP)
_LOCALE_PREFIX_RE = re.compile(r"^/(?:%s)(?:/|$)" % _LOCALE_GROUP)


@dataclass(frozen=True)
class RouteDecision:
    action: str
    rule: str
    location: Optional[str] = None


Rule = Tuple[str, Callable[[str], bool], Callable[[str], RouteDecision]]


def _is_excluded(path: str) -> bool:
    return bool(_EXCLUDED_RE.match(path))


def _is_prefixed_admin(path: str) -> bool:
    return bool(_ADMIN_RE.match(path))


def _has_locale_prefix(path: str) -> bool:
    return bool(_LOCALE_PREFIX_RE.match(path))


def _passthrough(rule: str) -> Callable[[str], RouteDecision]:
    return lambda path: RouteDecision(action=PASS, rule=rule)


def _strip_admin_locale(path: str) -> RouteDecision:
    return RouteDecision(action=REDIRECT, rule="admin", location=_ADMIN_RE.match(path).group(1))


def _prefix_default_locale(path: str) -> RouteDecision:
    suffix = "" if path in ("", "/") else path
    return RouteDecision(action=REDIRECT, rule="default-locale", location=f"/{DEFAULT_LOCALE}{suffix}")


RULES: List[Rule] = [
    ("excluded", _is_excluded, _passthrough("excluded")),
    ("admin", _is_prefixed_admin, _strip_admin_locale),
    ("localized", _has_locale_prefix, _passthrough("localized")),
]


def resolve_route(path: str) -> RouteDecision:
    """Return the routing decision for a request path (no query string)."""
    path = path or "/"
    for _name, matches, action in RULES:
        if matches(path):
            return action(path)
    return _prefix_default_locale(path)


class LocaleRoutingMiddleware(BaseHTTPMiddleware):
    """Apply resolve_route() to every request; redirects are temporary (307)."""

    async def dispatch(self, request: Request, call_next):
        decision = resolve_route(request.url.path)
        if decision.action == REDIRECT:
            location = decision.location
            if request.url.query:
                location = f"{location}?{request.url.query}"
            logger.debug("[locale-routing] %s -> %s (%s)", request.url.path, location, decision.rule)
            return RedirectResponse(url=location, status_code=307)
        return await call_next(request)
