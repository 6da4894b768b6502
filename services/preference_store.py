from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Protocol, Tuple

from fastapi import Request, Response

from core.config import settings
from models.ui_state import DEFAULT_LOCALE, Locale, UIState, is_locale

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
LOCALE_KEY = "locale"
COLOR_SCHEME_HINT = "Sec-CH-Prefers-Color-Scheme"


class PreferenceStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Enkel dict-lagring för tester och skript."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class CookieStorage:
    """Läser preferenser från requestens cookies och köar nya värden till svaret."""

    def __init__(self, cookies: Mapping[str, str]) -> None:
        self._cookies = dict(cookies)
        self._pending: List[Tuple[str, str]] = []

    @classmethod
    def from_request(cls, request: Request) -> "CookieStorage":
        return cls(request.cookies)

    def get(self, key: str) -> Optional[str]:
        return self._cookies.get(key)

    def set(self, key: str, value: str) -> None:
        self._cookies[key] = value
        self._pending.append((key, value))

    def apply(self, response: Response) -> Response:
        for key, value in self._pending:
            response.set_cookie(
                key,
                value,
                max_age=settings.cookie_max_age,
                path="/",
                samesite="lax",
                secure=settings.cookie_secure,
            )
        self._pending.clear()
        return response


def prefers_dark_from_headers(headers: Mapping[str, str]) -> bool:
    """Plattformens färgschema via client hint (saknas headern blir det ljust)."""
    hint = headers.get(COLOR_SCHEME_HINT) or headers.get(COLOR_SCHEME_HINT.lower()) or ""
    return hint.strip().strip('"').lower() == "dark"


class PreferenceStore:
    """Äger besökarens UIState. Enda vägen att läsa och ändra språk och tema."""

    def __init__(self, storage: PreferenceStorage, prefers_dark: bool = False) -> None:
        self._storage = storage
        self._prefers_dark = prefers_dark
        self._state = self.get_initial_state()
        self._html_class = self._state.theme

    @classmethod
    def from_request(cls, request: Request) -> "PreferenceStore":
        return cls(CookieStorage.from_request(request), prefers_dark=prefers_dark_from_headers(request.headers))

    @property
    def state(self) -> UIState:
        return self._state

    @property
    def html_class(self) -> str:
        """Temaklassen för dokumentets rotelement."""
        return self._html_class

    def get_initial_state(self) -> UIState:
        theme = self._storage.get(THEME_KEY)
        is_dark = theme == "dark" if theme else self._prefers_dark
        stored_locale = self._storage.get(LOCALE_KEY)
        if stored_locale and not is_locale(stored_locale):
            logger.debug("Ignoring unsupported stored locale %r", stored_locale)
        locale: Locale = stored_locale if is_locale(stored_locale) else DEFAULT_LOCALE  # type: ignore[assignment]
        return UIState(locale=locale, is_dark=is_dark)

    def set_locale(self, locale: str) -> UIState:
        if not is_locale(locale):
            raise ValueError(f"unsupported locale: {locale!r}")
        self._storage.set(LOCALE_KEY, locale)
        self._state = self._state.model_copy(update={"locale": locale})
        return self._state

    def set_dark(self, is_dark: bool) -> UIState:
        # Lagring och temaklass uppdateras i samma anrop
        new_state = self._state.model_copy(update={"is_dark": bool(is_dark)})
        self._storage.set(THEME_KEY, new_state.theme)
        self._state = new_state
        self._html_class = new_state.theme
        return self._state

    def toggle_locale(self) -> UIState:
        return self.set_locale("en" if self._state.locale == "ja" else "ja")

    def toggle_dark(self) -> UIState:
        return self.set_dark(not self._state.is_dark)


__all__ = [
    "COLOR_SCHEME_HINT",
    "CookieStorage",
    "LOCALE_KEY",
    "MemoryStorage",
    "PreferenceStorage",
    "PreferenceStore",
    "THEME_KEY",
    "prefers_dark_from_headers",
]
