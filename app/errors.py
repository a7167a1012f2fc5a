from typing import Optional


class FetchError(Exception):
    """Base class for anything that stops a location from resolving to a record."""

    def __init__(self, location: str, message: str):
        super().__init__(message)
        self.location = location


class TransportError(FetchError):
    """Network failure, timeout or non-2xx status from the provider."""

    def __init__(self, location: str, message: str, status_code: Optional[int] = None):
        super().__init__(location, message)
        self.status_code = status_code


class ProviderError(FetchError):
    """The provider answered 2xx but with an ``error`` object in the body."""

    def __init__(self, location: str, info: str, code: Optional[int] = None, error_type: Optional[str] = None):
        super().__init__(location, info)
        self.info = info
        self.code = code
        self.type = error_type


class MalformedResponseError(FetchError):
    pass


class DateParseError(FetchError):
    pass
