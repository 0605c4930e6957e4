from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ExtractTextResponse(_CamelModel):
    """Uniform envelope returned by both extraction endpoints."""
    success: bool
    extracted_text: str | None = None
    message: str
    processing_time: str | None = None


class CameraCaptureRequest(_CamelModel):
    # Raw base64 or a data URL ("data:image/png;base64,....")
    image: str | None = None


class HealthResponse(_CamelModel):
    status: str
    service: str
    message: str
    timestamp: int  # epoch millis
