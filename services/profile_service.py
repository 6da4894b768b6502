from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from core.config import settings
from models.profile import ProfileRecord

logger = logging.getLogger(__name__)


class ProfileLoadError(RuntimeError):
    """Profilfilen saknas, är trasig eller följer inte modellen."""


class ProfileService:
    """Profilen läses från en JSON-fil en gång och delas sedan som skrivskyddad post."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._profile: Optional[ProfileRecord] = None

    @property
    def path(self) -> Path:
        return self._path or settings.profile_path

    def load(self) -> ProfileRecord:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProfileLoadError(f"could not read profile file {self.path}: {exc}") from exc
        try:
            profile = ProfileRecord.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ProfileLoadError(f"invalid profile file {self.path}: {exc}") from exc
        logger.info("Loaded profile '%s' from %s", profile.name, self.path)
        self._profile = profile
        return profile

    def get_profile(self) -> ProfileRecord:
        if self._profile is None:
            return self.load()
        return self._profile

    def use_profile(self, profile: ProfileRecord) -> None:
        """Ersätt den cachade profilen (används av tester och skript)."""
        self._profile = profile

    def reset(self) -> None:
        self._profile = None


# Delad instans
profile_service = ProfileService()

__all__ = ["ProfileLoadError", "ProfileService", "profile_service"]
