from __future__ import annotations

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.ui_state import Locale

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class LocalizedText(BaseModel):
    """Text i båda språken, slås upp med språkkod."""

    model_config = ConfigDict(frozen=True)

    ja: str = ""
    en: str = ""

    def get(self, locale: Locale) -> str:
        return getattr(self, locale, "") or ""


class LocalizedList(BaseModel):
    model_config = ConfigDict(frozen=True)

    ja: List[str] = Field(default_factory=list)
    en: List[str] = Field(default_factory=list)

    def get(self, locale: Locale) -> List[str]:
        return list(getattr(self, locale, []))


class Contacts(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str = Field("", description="Kontaktmail (krävs för vCard)")
    github: Optional[str] = Field(None, description="GitHub-användarnamn")
    x: Optional[str] = Field(None, description="X-användarnamn")


class SubSkill(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Namn på färdigheten")
    level: Optional[int] = Field(None, ge=0, le=100, description="Nivå 0-100")
    description: LocalizedText = Field(default_factory=LocalizedText)


class Skill(SubSkill):
    sub_skills: List[SubSkill] = Field(default_factory=list)


class Certification(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: LocalizedText
    date: str = Field(..., description="Datum som YYYY-MM")

    @field_validator("date")
    @classmethod
    def _check_month(cls, value: str) -> str:
        if not _MONTH_PATTERN.match(value):
            raise ValueError("date must be formatted as YYYY-MM")
        return value


class ProfileRecord(BaseModel):
    """Den statiska profilen som sidan visar. Ändras aldrig under körning."""

    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Visningsnamn")
    title: LocalizedText = Field(default_factory=LocalizedText)
    bio: LocalizedText = Field(default_factory=LocalizedText)
    avatar: Optional[str] = Field(None, description="Bild-URL")
    contacts: Contacts = Field(default_factory=Contacts)
    skills: List[Skill] = Field(default_factory=list)
    interests: LocalizedList = Field(default_factory=LocalizedList)
    certifications: List[Certification] = Field(default_factory=list)
