"""Tests for the page, preference and vCard endpoints."""
from __future__ import annotations

import re

import pytest
from httpx import ASGITransport, AsyncClient

from services.print_styles import PRINT_STYLE_ID, document_head
from services.profile_service import profile_service
from tests.factories import make_profile


def _client(app, cookies=None):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test", cookies=cookies)


@pytest.mark.asyncio
async def test_health(app):
    async with _client(app) as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_home_defaults_to_japanese_light(app):
    async with _client(app) as client:
        response = await client.get("/")
    assert response.status_code == 200
    assert '<html lang="ja" class="light">' in response.text
    assert "エンジニア" in response.text
    assert "vCardをダウンロード" in response.text
    assert response.headers["accept-ch"] == "Sec-CH-Prefers-Color-Scheme"


@pytest.mark.asyncio
async def test_home_uses_client_hint_when_no_cookie(app):
    async with _client(app) as client:
        response = await client.get("/", headers={"Sec-CH-Prefers-Color-Scheme": "dark"})
    assert 'class="dark"' in response.text


@pytest.mark.asyncio
async def test_home_uses_cookies(app):
    async with _client(app, cookies={"locale": "en", "theme": "dark"}) as client:
        response = await client.get("/", headers={"Sec-CH-Prefers-Color-Scheme": "light"})
    assert '<html lang="en" class="dark">' in response.text
    assert "Engineer" in response.text
    assert "Download vCard" in response.text
    assert "April 2021" in response.text
    assert "85% (Advanced)" in response.text


@pytest.mark.asyncio
async def test_print_query_invokes_print_dialog(app):
    async with _client(app) as client:
        plain = await client.get("/")
        printing = await client.get("/?print=1")
    assert "window.addEventListener" not in plain.text
    assert "window.addEventListener" in printing.text


@pytest.mark.asyncio
async def test_locale_toggle_sequence(app):
    async with _client(app) as client:
        first = await client.post("/preferences/locale")
        assert first.status_code == 303
        assert first.headers["location"] == "/"
        assert client.cookies.get("locale") == "en"

        second = await client.post("/preferences/locale")
        assert second.status_code == 303
        assert client.cookies.get("locale") == "ja"

        prefs = await client.get("/api/preferences")
    assert prefs.json()["locale"] == "ja"


@pytest.mark.asyncio
async def test_set_locale_explicitly(app):
    async with _client(app) as client:
        response = await client.post("/preferences/locale", data={"locale": "en"})
        page = await client.get("/")
    assert response.status_code == 303
    assert '<html lang="en"' in page.text


@pytest.mark.asyncio
async def test_set_locale_rejects_unknown(app):
    async with _client(app) as client:
        response = await client.post("/preferences/locale", data={"locale": "fr"})
    assert response.status_code == 400
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_theme_toggle_from_platform_preference(app):
    async with _client(app) as client:
        response = await client.post("/preferences/theme", headers={"Sec-CH-Prefers-Color-Scheme": "dark"})
        assert response.status_code == 303
        assert client.cookies.get("theme") == "light"
        page = await client.get("/", headers={"Sec-CH-Prefers-Color-Scheme": "dark"})
    assert 'class="light"' in page.text


@pytest.mark.asyncio
async def test_set_theme_explicitly(app):
    async with _client(app) as client:
        await client.post("/preferences/theme", data={"theme": "dark"})
        assert client.cookies.get("theme") == "dark"
        bad = await client.post("/preferences/theme", data={"theme": "sepia"})
    assert bad.status_code == 400


@pytest.mark.asyncio
async def test_vcard_download(app):
    async with _client(app, cookies={"locale": "en"}) as client:
        response = await client.get("/vcard")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/vcard")
    assert response.headers["content-disposition"] == 'attachment; filename="Aki Tanaka.vcf"'
    assert "URL;type=GitHub:aki" in response.text
    assert response.text.endswith("END:VCARD")


@pytest.mark.asyncio
async def test_vcard_missing_email_shows_alert(app):
    profile_service.use_profile(make_profile(contacts={"email": ""}))
    async with _client(app) as client:
        response = await client.get("/vcard")
    assert response.status_code == 422
    assert "content-disposition" not in response.headers
    assert "エラー: vCardの生成に必要な情報が不足しています。" in response.text
    assert 'role="alert"' in response.text


@pytest.mark.asyncio
async def test_vcard_delivery_failure_shows_generic_alert(app, monkeypatch):
    from services import export_service

    def broken_deliver(self, file):
        raise OSError("boom")

    monkeypatch.setattr(export_service.ResponseDownload, "deliver", broken_deliver)
    async with _client(app, cookies={"locale": "en"}) as client:
        response = await client.get("/vcard")
    assert response.status_code == 500
    assert "content-disposition" not in response.headers
    assert "An error occurred while generating the vCard." in response.text


@pytest.mark.asyncio
async def test_api_profile(app):
    async with _client(app) as client:
        response = await client.get("/api/profile")
    data = response.json()
    assert data["name"] == "Aki Tanaka"
    assert data["contacts"]["email"] == "a@x.com"


@pytest.mark.asyncio
async def test_lifespan_installs_and_removes_print_styles(app):
    from app import lifespan

    async with lifespan(app):
        assert document_head.count(PRINT_STYLE_ID) == 1
        async with _client(app) as client:
            response = await client.get("/")
        assert response.text.count(f'<style id="{PRINT_STYLE_ID}"') == 1
        assert "@media print" in response.text
    assert document_head.count(PRINT_STYLE_ID) == 0

    async with _client(app) as client:
        response = await client.get("/")
    assert PRINT_STYLE_ID not in response.text


@pytest.mark.asyncio
async def test_export_link_is_plain_navigation(app):
    async with _client(app) as client:
        response = await client.get("/")
    assert '<a class="button" href="/vcard">' in response.text
    assert re.search(r"<a[^>]*\sdownload[\s>=]", response.text) is None


@pytest.mark.asyncio
async def test_failed_export_page_keeps_plain_export_link(app):
    profile_service.use_profile(make_profile(contacts={"email": ""}))
    async with _client(app) as client:
        response = await client.get("/vcard")
    assert response.status_code == 422
    assert response.headers["content-type"].startswith("text/html")
    assert '<a class="button" href="/vcard">' in response.text


@pytest.mark.asyncio
async def test_skill_without_level_renders_without_progress(app):
    profile_service.use_profile(make_profile(skills=[{"name": "Rust"}]))
    async with _client(app, cookies={"locale": "en"}) as client:
        response = await client.get("/")
    assert "None%" not in response.text
    assert "N/A" in response.text
    assert "progress-bar" not in response.text
