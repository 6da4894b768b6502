from __future__ import annotations

from typing import Dict, Mapping

from models.ui_state import Locale, SUPPORTED_LOCALES


class LocaleTableError(RuntimeError):
    """Språktabellen saknar nycklar i något språk."""


# Platta etikettposter per språk. Alla språk måste ha exakt samma nycklar.
LOCALES: Dict[str, Dict[str, str]] = {
    "ja": {
        "page_title": "プロフィール",
        "print_button": "印刷",
        "download_vcard": "vCardをダウンロード",
        "interests": "研究分野・興味",
        "contacts": "連絡先",
        "skills": "スキル",
        "certifications": "資格",
        "email_label": "メール",
        "github_label": "GitHub",
        "x_label": "X (Twitter)",
        "vcard_github_label": "Github",
        "vcard_x_label": "X",
        "skill_level_beginner": "初級",
        "skill_level_intermediate": "中級",
        "skill_level_advanced": "上級",
        "avatar_alt_text": "プロフィール画像",
        "switch_locale": "EN",
        "switch_locale_aria": "Switch to English",
        "switch_to_dark_aria": "Switch to Dark Mode",
        "switch_to_light_aria": "Switch to Light Mode",
        "vcard_error": "エラー: vCardの生成に必要な情報が不足しています。",
        "vcard_generate_error": "vCardの生成中にエラーが発生しました。コンソールを確認してください。",
    },
    "en": {
        "page_title": "Profile",
        "print_button": "Print",
        "download_vcard": "Download vCard",
        "interests": "Interests",
        "contacts": "Contacts",
        "skills": "Skills",
        "certifications": "Certifications",
        "email_label": "Email",
        "github_label": "GitHub",
        "x_label": "X (Twitter)",
        "vcard_github_label": "GitHub",
        "vcard_x_label": "X (Twitter)",
        "skill_level_beginner": "Beginner",
        "skill_level_intermediate": "Intermediate",
        "skill_level_advanced": "Advanced",
        "avatar_alt_text": "Profile Picture",
        "switch_locale": "日本語",
        "switch_locale_aria": "日本語に切り替える",
        "switch_to_dark_aria": "Switch to Dark Mode",
        "switch_to_light_aria": "Switch to Light Mode",
        "vcard_error": "Error: Insufficient information to generate vCard.",
        "vcard_generate_error": "An error occurred while generating the vCard. Check the console.",
    },
}


def validate_locale_table(table: Mapping[str, Mapping[str, str]]) -> None:
    """Kontrollera att alla språk finns och har samma nycklar."""
    missing_locales = [code for code in SUPPORTED_LOCALES if code not in table]
    if missing_locales:
        raise LocaleTableError(f"missing locales: {', '.join(missing_locales)}")
    reference = set(table[SUPPORTED_LOCALES[0]])
    for code in SUPPORTED_LOCALES[1:]:
        keys = set(table[code])
        if keys != reference:
            diff = sorted(keys.symmetric_difference(reference))
            raise LocaleTableError(f"locale '{code}' has mismatching keys: {', '.join(diff)}")


def get_messages(locale: Locale) -> Dict[str, str]:
    """Returnera etiketterna för ett språk (okänt språk ger KeyError)."""
    return LOCALES[locale]


def translate(locale: Locale, key: str) -> str:
    return LOCALES[locale][key]


# Fånga saknade översättningar redan vid import
validate_locale_table(LOCALES)

__all__ = ["LOCALES", "LocaleTableError", "get_messages", "translate", "validate_locale_table"]
