from __future__ import annotations

import io
import logging
import re
from contextlib import closing
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol
from urllib.parse import quote

from fastapi import Response

from models.profile import ProfileRecord
from models.ui_state import Locale
from services.locales import translate
from services.vcard import VCARD_MEDIA_TYPE, VCardValidationError, serialize, vcard_filename

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\x00-\x1f\x7f"\\]')


class ExportState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SERIALIZED = "serialized"
    DOWNLOADING = "downloading"
    COMPLETED = "completed"
    FAILED = "failed"


class ExportIOError(RuntimeError):
    """Något gick fel när filen skulle lämnas ut."""


class ExportFile:
    """Tillfällig fil i minnet som bara lever under en export."""

    def __init__(self, payload: str, filename: str, media_type: str = VCARD_MEDIA_TYPE) -> None:
        self.filename = filename
        self.media_type = media_type
        self._buffer: Optional[io.BytesIO] = io.BytesIO(payload.encode("utf-8"))

    @property
    def closed(self) -> bool:
        return self._buffer is None

    def read(self) -> bytes:
        if self._buffer is None:
            raise ExportIOError("export file already released")
        return self._buffer.getvalue()

    def close(self) -> None:
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None


class DownloadTarget(Protocol):
    def deliver(self, file: ExportFile) -> None: ...


def content_disposition(filename: str) -> str:
    """Attachment-header med ASCII-reserv och RFC 5987-namn för t.ex. japanska namn."""
    # Kontrolltecken, citattecken och backslash får inte hamna i headern
    clean = _UNSAFE_FILENAME_CHARS.sub("_", filename)
    if clean.isascii():
        return f'attachment; filename="{clean}"'
    ascii_name = clean.encode("ascii", "replace").decode("ascii")
    return f"attachment; filename=\"{ascii_name}\"; filename*=utf-8''{quote(clean, safe='')}"


class ResponseDownload:
    """Lämnar ut filen som HTTP-svar med Content-Disposition: attachment."""

    def __init__(self) -> None:
        self.response: Optional[Response] = None

    def deliver(self, file: ExportFile) -> None:
        self.response = Response(
            content=file.read(),
            media_type=file.media_type,
            headers={"Content-Disposition": content_disposition(file.filename)},
        )


@dataclass
class ExportOutcome:
    ok: bool
    message: Optional[str] = None
    error: Optional[Exception] = None
    filename: Optional[str] = None


@dataclass
class VCardExporter:
    """Validera, serialisera och lämna ut vCard-filen. Slutar alltid i IDLE."""

    state: ExportState = ExportState.IDLE
    history: List[ExportState] = field(default_factory=list)

    def _move(self, state: ExportState) -> None:
        self.state = state
        self.history.append(state)

    def export(self, profile: ProfileRecord, locale: Locale, target: DownloadTarget) -> ExportOutcome:
        self.history = []
        self._move(ExportState.VALIDATING)
        try:
            payload = serialize(profile, locale)
        except VCardValidationError as exc:
            logger.warning("vCard validation failed: %s", exc)
            self._move(ExportState.FAILED)
            self._move(ExportState.IDLE)
            return ExportOutcome(ok=False, message=translate(locale, "vcard_error"), error=exc)

        self._move(ExportState.SERIALIZED)
        filename = vcard_filename(profile)
        try:
            self._move(ExportState.DOWNLOADING)
            with closing(ExportFile(payload, filename)) as export_file:
                target.deliver(export_file)
        except Exception as exc:
            logger.exception("vCard export failed for %s", filename)
            self._move(ExportState.FAILED)
            io_error = exc if isinstance(exc, ExportIOError) else ExportIOError(str(exc))
            if io_error is not exc:
                io_error.__cause__ = exc
            return ExportOutcome(ok=False, message=translate(locale, "vcard_generate_error"), error=io_error)
        finally:
            if self.state is not ExportState.FAILED:
                self._move(ExportState.COMPLETED)
            self._move(ExportState.IDLE)

        logger.info("vCard exported as %s", filename)
        return ExportOutcome(ok=True, filename=filename)


__all__ = [
    "DownloadTarget",
    "ExportFile",
    "ExportIOError",
    "ExportOutcome",
    "ExportState",
    "ResponseDownload",
    "VCardExporter",
    "content_disposition",
]
