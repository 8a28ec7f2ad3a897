from typing import Optional


class UjeebuError(Exception):
    pass


class UjeebuConfigError(UjeebuError, ValueError):
    """The component cannot work at all, e.g. the API key is missing."""


class UjeebuExtractionError(UjeebuError):
    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class UjeebuAuthenticationError(UjeebuExtractionError):
    pass


class UjeebuNotFoundError(UjeebuExtractionError):
    pass


class UjeebuTimeoutError(UjeebuExtractionError):
    """The API itself gave up on the page (HTTP 408)."""
