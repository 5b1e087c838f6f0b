"""Exception types shared by the console tools."""

from typing import Optional


class StoreOpsError(Exception):
    """Base class for all console errors."""


class InputMissingError(StoreOpsError):
    """A required file or field was not provided."""


class DecodeFailureError(StoreOpsError):
    """A CSV document or archive could not be decoded."""


class UpstreamFailureError(StoreOpsError):
    """A proxied Shopify request returned a non-success response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
