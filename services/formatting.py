from __future__ import annotations

import calendar
from typing import Dict, Optional

from models.profile import Certification, Contacts, SubSkill
from models.ui_state import Locale
from services.locales import get_messages

PLACEHOLDER_AVATAR = "/static/img/placeholder.svg"


def skill_level_text(level: Optional[int], locale: Locale) -> str:
    if level is None:
        return "N/A"
    messages = get_messages(locale)
    if level >= 80:
        return messages["skill_level_advanced"]
    if level >= 50:
        return messages["skill_level_intermediate"]
    return messages["skill_level_beginner"]


def skill_summary(skill: SubSkill, locale: Locale) -> str:
    """Beskrivningen om den finns, annars nivå i procent med text."""
    description = skill.description.get(locale)
    if description:
        return description
    if skill.level is None:
        return skill_level_text(None, locale)
    return f"{skill.level}% ({skill_level_text(skill.level, locale)})"


def format_certification_date(certification: Certification, locale: Locale) -> str:
    year, month = (int(part) for part in certification.date.split("-"))
    if locale == "ja":
        return f"{year}年{month}月"
    return f"{calendar.month_name[month]} {year}"


def contact_links(contacts: Contacts) -> Dict[str, str]:
    links = {"email": f"mailto:{contacts.email}"}
    if contacts.github:
        links["github"] = f"https://github.com/{contacts.github}"
    if contacts.x:
        links["x"] = f"https://twitter.com/{contacts.x}"
    return links


def avatar_url(avatar: Optional[str]) -> str:
    return avatar or PLACEHOLDER_AVATAR


__all__ = [
    "PLACEHOLDER_AVATAR",
    "avatar_url",
    "contact_links",
    "format_certification_date",
    "skill_level_text",
    "skill_summary",
]
