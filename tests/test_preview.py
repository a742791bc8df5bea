import time

import pytest

from tests.conftest import PREVIEW_SECRET
from utils.config import Settings, get_settings
from utils.draft_mode import serialize_draft_cookie, verify_draft_cookie
from main import app


def _preview(client, **params):
    return client.get("/api/preview", params=params, follow_redirects=False)


def test_wrong_secret_is_401(client):
    response = _preview(client, secret="nope", slug="x", collection="services")
    assert response.status_code == 401
    assert response.text == "Invalid token"


def test_missing_secret_is_401(client):
    assert _preview(client, slug="x", collection="services").status_code == 401


@pytest.mark.parametrize("missing", ["slug", "collection"])
def test_missing_params_is_400(client, missing):
    params = {"secret": PREVIEW_SECRET, "slug": "x", "collection": "services"}
    params.pop(missing)
    response = _preview(client, **params)
    assert response.status_code == 400
    assert response.text == "Missing required params"


def test_pages_collection_has_no_segment(client):
    response = _preview(client, secret=PREVIEW_SECRET, slug="about", collection="pages", locale="en")
    assert response.status_code == 302
    assert response.headers["location"] == "/en/about"


def test_other_collection_keeps_segment(client):
    response = _preview(client, secret=PREVIEW_SECRET, slug="wardrobe-audit", collection="services", locale="ru")
    assert response.status_code == 302
    assert response.headers["location"] == "/ru/services/wardrobe-audit"


def test_locale_defaults_to_uk(client):
    response = _preview(client, secret=PREVIEW_SECRET, slug="autumn", collection="lookbooks")
    assert response.headers["location"] == "/uk/lookbooks/autumn"


def test_redirect_segments_are_escaped(client):
    response = _preview(client, secret=PREVIEW_SECRET, slug="x", collection="services", locale="/evil.example")
    assert response.headers["location"].startswith("/%2Fevil.example/")


def test_preview_sets_draft_cookie_and_unlocks_drafts(client):
    assert client.get("/api/services/unreleased-service").status_code == 404

    response = _preview(client, secret=PREVIEW_SECRET, slug="unreleased-service", collection="services")
    assert response.status_code == 302
    assert "__prerender_bypass" in response.headers["set-cookie"]
    assert "HttpOnly" in response.headers["set-cookie"]

    response = client.get("/api/services/unreleased-service")
    assert response.status_code == 200
    assert response.json()["title"] == "Чернетка"


def test_preview_is_reentrant(client):
    for _ in range(2):
        response = _preview(client, secret=PREVIEW_SECRET, slug="about", collection="pages")
        assert response.status_code == 302


def test_unconfigured_secret_is_500(client):
    app.dependency_overrides[get_settings] = lambda: Settings(preview_secret=None)
    response = _preview(client, secret="", slug="x", collection="services")
    assert response.status_code == 500


def test_draft_cookie_signature():
    expiry = int(time.time()) + 60
    value = serialize_draft_cookie("s3cret", expiry)
    assert verify_draft_cookie("s3cret", value)
    assert not verify_draft_cookie("other", value)
    assert not verify_draft_cookie("s3cret", value.replace(str(expiry), str(expiry + 1)))
    assert not verify_draft_cookie("s3cret", value, now=expiry + 1)
    assert not verify_draft_cookie("s3cret", "garbage")
    assert not verify_draft_cookie(None, value)
