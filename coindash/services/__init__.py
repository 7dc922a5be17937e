"""
CoinDash Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from coindash.services.base import (
    BaseService,
    ServiceError,
    ValidationError,
    ExternalAPIError,
    RateLimitError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "ValidationError",
    "ExternalAPIError",
    "RateLimitError",
]
