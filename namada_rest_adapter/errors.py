"""Exceptions raised while answering a validator query."""


class AdapterError(Exception):
    """Base class for per-request failures."""


class InvalidAddressError(AdapterError, ValueError):
    """The requested address is not a valid validator identifier."""


class UpstreamError(AdapterError):
    """The chain node could not answer a query."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class UpstreamTimeoutError(UpstreamError):
    """The chain node did not answer within the configured timeout."""


class UpstreamDecodeError(UpstreamError):
    """The chain node answered with a payload that could not be decoded."""
