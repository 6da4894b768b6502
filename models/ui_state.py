from __future__ import annotations

from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

Locale = Literal["ja", "en"]

SUPPORTED_LOCALES: Tuple[str, ...] = ("ja", "en")
DEFAULT_LOCALE: Locale = "ja"


def is_locale(value: object) -> bool:
    return value in SUPPORTED_LOCALES


class UIState(BaseModel):
    """Aktuellt språk och tema för en besökare."""

    model_config = ConfigDict(frozen=True)

    locale: Locale = Field(DEFAULT_LOCALE, description="Språkkod (ja/en)")
    is_dark: bool = Field(False, description="Mörkt tema aktivt")

    @property
    def theme(self) -> str:
        return "dark" if self.is_dark else "light"
