from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from snaptalk.core.errors import MissingImageError, OCRServiceError, ValidationError
from snaptalk.pipeline.pipeline import RecognitionPipeline
from snaptalk.schemas import CameraCaptureRequest, ExtractTextResponse, HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")

PROCESSING_TIME_HINT = "< 2 seconds"

# path -> (missing-image message, error prefix)
_INGRESS = {
    "/api/extract-text": ("No image file provided", "Error extracting text"),
    "/api/extract-text-camera": ("No image data provided", "Error extracting text from camera"),
}


def get_pipeline(request: Request) -> RecognitionPipeline:
    """Wrap the process-wide engine built at startup in a per-request pipeline."""
    return RecognitionPipeline(request.app.state.ocr_engine)


def error_response(exc: Exception, prefix: str) -> JSONResponse:
    """Map any failure to the uniform error envelope.

    Both extraction endpoints go through here so their error shapes stay identical.
    """
    if isinstance(exc, MissingImageError):
        body = ExtractTextResponse(success=False, message=str(exc))
    else:
        body = ExtractTextResponse(success=False, extracted_text="", message=f"{prefix}: {exc}")

    status_code = exc.status_code if isinstance(exc, OCRServiceError) else 500
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


async def request_validation_response(request: Request, exc: RequestValidationError):
    """Keep malformed extraction requests in the uniform envelope instead of FastAPI's 422."""
    ingress = _INGRESS.get(request.url.path)
    if ingress is None:
        return await request_validation_exception_handler(request, exc)

    missing_message, prefix = ingress
    errors = exc.errors()
    # No body, a non-JSON body or an unusable image field all mean "no image".
    if not errors or any(tuple(err.get("loc", ()))[:1] == ("body",) for err in errors):
        error: OCRServiceError = MissingImageError(missing_message)
    else:
        error = ValidationError(errors[0].get("msg", "Invalid request"))

    logger.warning(
        "request_validation_failed",
        extra={"path": request.url.path, "error_count": len(errors)},
    )
    return error_response(error, prefix)


def _log_failure(event: str, exc: Exception) -> None:
    if isinstance(exc, OCRServiceError):
        logger.warning(event, extra={"error": str(exc), "error_type": exc.__class__.__name__})
    else:
        logger.exception(event, extra={"error": str(exc)})


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    return HealthResponse(
        status="UP",
        service=request.app.state.settings.service_name,
        message="Service is running successfully",
        timestamp=int(time.time() * 1000),
    )


@router.post(
    "/extract-text",
    response_model=ExtractTextResponse,
    response_model_exclude_none=True,
)
async def extract_text(
    image: UploadFile | None = File(None),
    pipeline: RecognitionPipeline = Depends(get_pipeline),
):
    if image is None:
        return error_response(MissingImageError("No image file provided"), "Error extracting text")

    try:
        logger.info("file_upload_received", extra={"upload_filename": image.filename})
        raw_bytes = await image.read()
        result = await pipeline.extract_text(
            raw_bytes,
            source_hint=image.filename,
            content_type=image.content_type,
        )
    except Exception as exc:
        _log_failure("text_extraction_failed", exc)
        return error_response(exc, "Error extracting text")

    logger.info("text_extraction_succeeded", extra={"elapsed_ms": result.elapsed_ms})
    return ExtractTextResponse(
        success=True,
        extracted_text=result.text,
        message="Text extracted successfully",
        processing_time=PROCESSING_TIME_HINT,
    )


@router.post(
    "/extract-text-camera",
    response_model=ExtractTextResponse,
    response_model_exclude_none=True,
)
async def extract_text_camera(
    body: CameraCaptureRequest,
    pipeline: RecognitionPipeline = Depends(get_pipeline),
):
    if not body.image:
        return error_response(MissingImageError("No image data provided"), "Error extracting text from camera")

    try:
        logger.info("camera_capture_received", extra={"payload_chars": len(body.image)})
        result = await pipeline.extract_text_from_base64(body.image)
    except Exception as exc:
        _log_failure("camera_text_extraction_failed", exc)
        return error_response(exc, "Error extracting text from camera")

    logger.info("camera_text_extraction_succeeded", extra={"elapsed_ms": result.elapsed_ms})
    return ExtractTextResponse(
        success=True,
        extracted_text=result.text,
        message="Text extracted successfully from camera",
        processing_time=PROCESSING_TIME_HINT,
    )
