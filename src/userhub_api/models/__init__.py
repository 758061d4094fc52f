"""API response models."""

from userhub_api.models.health import HealthCheckResponse
from userhub_api.models.response import ResponseEnvelope, envelope_response, new_response

__all__ = [
    "HealthCheckResponse",
    "ResponseEnvelope",
    "envelope_response",
    "new_response",
]
