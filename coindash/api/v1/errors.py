"""
ServiceError -> HTTPException mapping shared by endpoints.
"""

import logging

from fastapi import HTTPException

from coindash.services.base import ServiceError

logger = logging.getLogger(__name__)


def to_http_error(error: ServiceError) -> HTTPException:
    """Provider failures surface as 502 (429 for rate limits) with the provider message."""
    logger.warning(f"{error.service_name} failed ({error.http_status}): {error.message}")
    return HTTPException(status_code=error.http_status, detail=error.message)
