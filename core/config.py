from __future__ import annotations

import os
from pathlib import Path


class Settings:
    """Grundläggande inställningar för profilsidan."""

    def __init__(self) -> None:
        self.base_dir = Path(__file__).resolve().parent.parent
        self.data_dir = self.base_dir / "data"
        self.static_dir = self.base_dir / "static"
        self.template_dir = self.base_dir / "templates"
        self.profile_path = Path(os.getenv("PROFILE_PATH", str(self.data_dir / "profile.json")))
        self.site_url = os.getenv("SITE_URL") or None
        # Preferenscookies lever ett år om inget annat anges
        max_age_raw = os.getenv("PREFERENCE_COOKIE_MAX_AGE", "")
        self.cookie_max_age = int(max_age_raw) if max_age_raw.isdigit() else 60 * 60 * 24 * 365
        self.cookie_secure = os.getenv("COOKIE_SECURE", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.debug = os.getenv("DEBUG", "false").lower() == "true"


settings = Settings()
