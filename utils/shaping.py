"""Response shaping: safe defaults for catalog documents and field allow-lists."""
from typing import Any, Dict, Iterable, List, Mapping

from utils.richtext import truncate_rich_text

SERVICE_FIELDS = (
    "id", "title", "slug", "description", "excerpt", "category", "format",
    "duration", "heroImage", "includes", "steps", "pricing", "featured",
    "bookable", "paymentEnabled", "layout", "createdAt", "updatedAt",
)

COURSE_LIST_FIELDS = (
    "id", "title", "slug", "category", "level", "excerpt", "featuredImage",
    "duration", "format", "pricing", "upcomingDates",
)

COURSE_DETAIL_FIELDS = (
    "id", "title", "slug", "category", "level", "excerpt", "description",
    "featuredImage", "duration", "format", "pricing", "curriculum", "instructor",
    "testimonials", "upcomingDates", "faq", "seo",
)

PORTFOLIO_FIELDS = (
    "id", "title", "slug", "category", "mainImage", "description", "challenge",
    "solution", "result", "gallery", "servicesUsed", "pricing", "featured",
    "bookable", "paymentEnabled", "createdAt",
)

LOOKBOOK_FIELDS = (
    "id", "name", "slug", "season", "description", "coverImage", "looks",
    "releaseDate", "pricing", "featured", "bookable", "paymentEnabled",
)

# per-collection defaults for flags missing on older documents
_FLAG_DEFAULTS = {
    "services": {"paymentEnabled": False, "bookable": True, "featured": False},
    "portfolio": {"paymentEnabled": False, "bookable": False, "featured": False},
    "lookbooks": {"paymentEnabled": False, "bookable": False, "featured": False},
    "courses": {"paymentEnabled": False, "bookable": True, "featured": False},
}


def project(doc: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Copy only the allow-listed fields; absent fields come back as None."""
    return {field: doc.get(field) for field in fields}


def normalize_document(collection: str, doc: Mapping[str, Any]) -> Dict[str, Any]:
    result = dict(doc)
    for flag, default in _FLAG_DEFAULTS.get(collection, {}).items():
        if result.get(flag) is None:
            result[flag] = default
    pricing = result.get("pricing") or {}
    normalized_pricing = {
        "uah": pricing.get("uah"),
        "eur": pricing.get("eur"),
        "priceNote": pricing.get("priceNote"),
    }
    if collection == "courses":
        normalized_pricing["earlyBirdAmount"] = pricing.get("earlyBirdAmount")
    result["pricing"] = normalized_pricing
    return result


def normalize_documents(collection: str, docs: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [normalize_document(collection, doc) for doc in docs]


def course_summary(course: Mapping[str, Any]) -> Dict[str, Any]:
    summary = project(course, COURSE_LIST_FIELDS)
    if not summary.get("excerpt"):
        summary["excerpt"] = truncate_rich_text(course.get("description")) or None
    return summary
