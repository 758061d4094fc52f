"""Uniform response envelope."""

from typing import Any, ClassVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ResponseEnvelope(BaseModel):
    """Wrapper for every reply. Exactly one of ``data`` and ``errors`` is set."""

    status_code: int = Field(..., description="Status code of the outcome")
    data: Any | None = Field(None, description="Payload on success")
    errors: Any | None = Field(None, description="Error details on failure")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "status_code": 200,
                "data": {"message": "ok"},
                "errors": None,
            }
        }


def new_response(status_code: int, data: Any = None, errors: Any = None) -> ResponseEnvelope:
    """Build an envelope; ``errors`` wins when both are given."""
    if errors is not None:
        return ResponseEnvelope(status_code=status_code, errors=errors)
    return ResponseEnvelope(status_code=status_code, data=data)


def envelope_response(http_status: int, envelope: ResponseEnvelope, headers: dict[str, str] | None = None) -> JSONResponse:
    """Render an envelope as a JSON response with the given transport status."""
    return JSONResponse(status_code=http_status, content=jsonable_encoder(envelope), headers=headers)
