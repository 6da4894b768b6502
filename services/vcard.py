from __future__ import annotations

from models.profile import ProfileRecord
from models.ui_state import Locale
from services.locales import get_messages

VCARD_VERSION = "3.0"
VCARD_MEDIA_TYPE = "text/vcard"


class VCardValidationError(ValueError):
    """Profilen saknar uppgifter som vCard-filen kräver."""

    kind = "ValidationError"


class MissingFieldError(VCardValidationError):
    kind = "MissingField"

    def __init__(self, field: str) -> None:
        super().__init__(f"missing required field: {field}")
        self.field = field


def _check_required(profile: ProfileRecord, locale: Locale) -> None:
    # Ordningen styr vilket fel som rapporteras först
    if not profile.name:
        raise MissingFieldError("name")
    if not profile.title.get(locale):
        raise MissingFieldError(f"title.{locale}")
    if not profile.contacts.email:
        raise MissingFieldError("contacts.email")


def serialize(profile: ProfileRecord, locale: Locale) -> str:
    """Bygg vCard 3.0-text för profilen.

    Värdena skrivs in ordagrant utan escaping eller radvikning, och
    URL-etiketterna hämtas från språktabellen.
    """
    _check_required(profile, locale)
    messages = get_messages(locale)
    lines = [
        "BEGIN:VCARD",
        f"VERSION:{VCARD_VERSION}",
        f"FN:{profile.name}",
        f"TITLE:{profile.title.get(locale)}",
        f"EMAIL:{profile.contacts.email}",
        f"URL;type={messages['vcard_github_label']}:{profile.contacts.github or ''}",
        f"URL;type={messages['vcard_x_label']}:{profile.contacts.x or ''}",
        f"NOTE:{profile.bio.get(locale)}",
        "END:VCARD",
    ]
    return "\n".join(lines)


def vcard_filename(profile: ProfileRecord) -> str:
    return f"{profile.name}.vcf"


__all__ = [
    "MissingFieldError",
    "VCARD_MEDIA_TYPE",
    "VCARD_VERSION",
    "VCardValidationError",
    "serialize",
    "vcard_filename",
]
