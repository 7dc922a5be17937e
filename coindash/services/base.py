"""
Service contract and error types shared by the dashboard services.

A service turns one typed input into one typed output (market data,
indicators, risk/return, AI insight). Failures the user should see are
raised as ServiceError subclasses; each carries the HTTP status the API
reports it with.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """Typed input -> typed output, plus a health probe."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging and error attribution."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the service.

        Raises:
            ServiceError: when the result cannot be produced
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass


class ServiceError(Exception):
    """A failure with a message fit for display."""

    http_status = 502

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Request rejected before any provider call."""

    http_status = 422


class ExternalAPIError(ServiceError):
    """Market-data or LLM provider call failed."""


class RateLimitError(ExternalAPIError):
    """Provider answered 429."""

    http_status = 429


def require_asset_id(service_name: str, asset_id: str) -> str:
    """Strip and reject blank asset ids."""
    cleaned = (asset_id or "").strip()
    if not cleaned:
        raise ValidationError(service_name, "Asset id must not be empty")
    return cleaned
