import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ConfigurationError(APIException):
    """A required provider credential is missing."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service is not configured."
    default_code = "configuration_error"


class UpstreamServiceError(APIException):
    """An external provider (geocoding, directions, weather) failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream provider request failed."
    default_code = "upstream_error"

    def __init__(self, detail=None, code=None, provider_status=None):
        super().__init__(detail, code)
        self.provider_status = provider_status


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


def api_exception_handler(exc, context):
    """Render errors as ``{"error": ...}`` or, for validation, ``{"errors": {...}}``."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        detail = exc.detail
        if not isinstance(detail, dict):
            detail = {"non_field_errors": detail if isinstance(detail, list) else [detail]}
        response.data = {"errors": detail}
        return response

    if isinstance(exc, (ConfigurationError, UpstreamServiceError)):
        logger.warning("%s: %s", type(exc).__name__, exc.detail)

    if isinstance(exc, APIException):
        response.data = {"error": str(exc.detail)}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": str(response.data["detail"])}
    return response


def error_response(message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    return Response({"error": message}, status=status_code)
