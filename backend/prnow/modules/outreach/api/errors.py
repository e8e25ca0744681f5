"""
Domain exception -> HTTPException translation for the outreach endpoints.
"""
import logging

from fastapi import HTTPException

from prnow.shared.utils.exceptions import (
    CapabilityMismatchError,
    ConfigurationError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
    ProviderHTTPError,
    ProviderTransportError,
    UnsupportedProviderError,
)

logger = logging.getLogger("outreach_api")

OUTREACH_ERRORS = (
    ConfigurationError,
    CapabilityMismatchError,
    UnsupportedProviderError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
    ProviderHTTPError,
    ProviderTransportError,
)


def to_http_exception(e: Exception) -> HTTPException:
    if isinstance(e, (ConfigurationError, CapabilityMismatchError, UnsupportedProviderError)):
        return HTTPException(status_code=400, detail=e.message)
    if isinstance(e, EntityNotFoundError):
        return HTTPException(status_code=404, detail=e.message)
    if isinstance(e, InvalidStatusTransitionError):
        return HTTPException(status_code=409, detail=e.message)
    if isinstance(e, ProviderHTTPError):
        logger.warning(f"Provider error surfaced to client: {e.message}")
        return HTTPException(status_code=e.status_code, detail=e.body or e.message)
    if isinstance(e, ProviderTransportError):
        return HTTPException(status_code=502, detail=e.message)
    return HTTPException(status_code=500, detail=str(e))
