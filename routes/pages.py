from __future__ import annotations

from typing import Any, Dict, Tuple

from fastapi import APIRouter, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from core.config import settings
from services.export_service import ExportIOError, ResponseDownload, VCardExporter
from services.formatting import avatar_url, contact_links, format_certification_date, skill_summary
from services.locales import get_messages
from services.preference_store import COLOR_SCHEME_HINT, CookieStorage, PreferenceStore, prefers_dark_from_headers
from services.print_styles import document_head
from services.profile_service import profile_service

router = APIRouter()
templates = Jinja2Templates(directory=str(settings.template_dir))

_HINT_HEADERS = {
    "Accept-CH": COLOR_SCHEME_HINT,
    "Vary": f"{COLOR_SCHEME_HINT}, Cookie",
}


def _open_store(request: Request) -> Tuple[PreferenceStore, CookieStorage]:
    storage = CookieStorage.from_request(request)
    return PreferenceStore(storage, prefers_dark=prefers_dark_from_headers(request.headers)), storage


def _page_context(store: PreferenceStore, alert: str | None = None, auto_print: bool = False) -> Dict[str, Any]:
    profile = profile_service.get_profile()
    locale = store.state.locale
    return {
        "t": get_messages(locale),
        "state": store.state,
        "html_class": store.html_class,
        "locale": locale,
        "profile": profile,
        "title": profile.title.get(locale),
        "bio": profile.bio.get(locale),
        "avatar": avatar_url(profile.avatar),
        "interests": profile.interests.get(locale),
        "links": contact_links(profile.contacts),
        "skills": [
            {
                "skill": skill,
                "summary": skill_summary(skill, locale),
                "sub_skills": [{"skill": sub, "summary": skill_summary(sub, locale)} for sub in skill.sub_skills],
            }
            for skill in profile.skills
        ],
        "certifications": [
            {"name": cert.name.get(locale), "date": format_certification_date(cert, locale)}
            for cert in profile.certifications
        ],
        "styles": document_head.styles,
        "alert": alert,
        "auto_print": auto_print,
        "site_url": settings.site_url,
    }


def _render(request: Request, store: PreferenceStore, status_code: int = 200, **kwargs: Any) -> Response:
    return templates.TemplateResponse(
        request,
        "index.html",
        _page_context(store, **kwargs),
        status_code=status_code,
        headers=_HINT_HEADERS,
    )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, print_mode: bool = Query(False, alias="print")):
    """Profilsidan i besökarens språk och tema."""
    store, _ = _open_store(request)
    return _render(request, store, auto_print=print_mode)


@router.post("/preferences/locale")
async def change_locale(request: Request, locale: str | None = Form(None)):
    """Växla språk, eller sätt ett bestämt språk om formuläret anger det."""
    store, storage = _open_store(request)
    if locale:
        try:
            store.set_locale(locale)
        except ValueError:
            raise HTTPException(status_code=400, detail="Unsupported locale")
    else:
        store.toggle_locale()
    return storage.apply(RedirectResponse(url="/", status_code=303))


@router.post("/preferences/theme")
async def change_theme(request: Request, theme: str | None = Form(None)):
    store, storage = _open_store(request)
    if theme:
        if theme not in ("dark", "light"):
            raise HTTPException(status_code=400, detail="Unsupported theme")
        store.set_dark(theme == "dark")
    else:
        store.toggle_dark()
    return storage.apply(RedirectResponse(url="/", status_code=303))


@router.get("/vcard")
async def download_vcard(request: Request):
    """Exportera kontaktuppgifterna som .vcf, eller visa sidan med ett felmeddelande."""
    store, _ = _open_store(request)
    target = ResponseDownload()
    outcome = VCardExporter().export(profile_service.get_profile(), store.state.locale, target)
    if outcome.ok and target.response is not None:
        return target.response
    status_code = 500 if isinstance(outcome.error, ExportIOError) else 422
    return _render(request, store, status_code=status_code, alert=outcome.message)
