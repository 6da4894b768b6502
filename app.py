from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from core.config import settings
from routes import api, pages
from services.print_styles import print_style_injector
from services.profile_service import profile_service

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    # Trasig profilfil ska stoppa uppstarten direkt
    profile_service.get_profile()
    handle = print_style_injector.activate()
    logger.info("Print styles installed")
    try:
        yield
    finally:
        handle.release()
        logger.info("Print styles removed")


app = FastAPI(title="Profile", lifespan=lifespan)

# Routers
app.include_router(pages.router)
app.include_router(api.router, prefix="/api", tags=["api"])

# Static files
app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")


@app.get("/health")
def health_check() -> dict[str, str]:
    """Enkel hälso-kontroll för lokal utveckling."""
    return {"status": "ok"}


@app.get("/favicon.ico")
def favicon() -> FileResponse:
    """Serva favicon till klienter som implicit frågar efter /favicon.ico."""
    return FileResponse(settings.static_dir / "img" / "placeholder.svg", media_type="image/svg+xml")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="127.0.0.1", port=8000, reload=settings.debug)
