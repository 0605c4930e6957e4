from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from snaptalk.api.routes import request_validation_response, router
from snaptalk.core.config import Settings, settings as default_settings
from snaptalk.core.logging import configure_logging
from snaptalk.ocr.base_ocr import OCREngine
from snaptalk.ocr.factory import get_ocr_engine


def create_app(settings: Settings | None = None, ocr_engine: OCREngine | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)
    app = FastAPI(title="SnapTalk OCR", version="0.1.0")
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, request_validation_response)

    app.state.settings = settings
    # One engine per process, shared by every request through get_pipeline.
    app.state.ocr_engine = ocr_engine or get_ocr_engine(settings)

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to the SnapTalk OCR API",
            "docs": "/docs",
            "health": "/api/health",
        }

    @app.on_event("startup")
    async def _startup() -> None:
        logging.getLogger(__name__).info(
            "startup",
            extra={
                "app_env": settings.app_env,
                "ocr_provider": app.state.ocr_engine.name,
                "tessdata_dir": settings.tessdata_dir or settings.platform_tessdata_dir,
            },
        )

    return app


app = create_app()
