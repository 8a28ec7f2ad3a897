import logging
from typing import Any, Dict, Optional
import requests
from pydantic import SecretStr, ValidationError
from langchain_ujeebu.article import (
    ArticleData,
    ExtractionFlags,
    ExtractionRequest,
)
from langchain_ujeebu.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S
from langchain_ujeebu.errors import (
    UjeebuAuthenticationError,
    UjeebuExtractionError,
    UjeebuNotFoundError,
    UjeebuTimeoutError,
)

_LOGGER = logging.getLogger(__name__)


class ExtractClient:
    """A single round trip to the Extract API per :py:meth:`fetch` call."""

    def __init__(
        self,
        api_key: SecretStr,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_s = timeout_s

    def fetch(
        self, url: str, flags: ExtractionFlags = ExtractionFlags()
    ) -> ArticleData:
        """
        Raises:
            UjeebuAuthenticationError: on HTTP 401.
            UjeebuNotFoundError: on HTTP 404.
            UjeebuTimeoutError: on HTTP 408.
            UjeebuExtractionError: on any other HTTP or transport failure, or
            when the response carries no usable article.
        """
        try:
            request = ExtractionRequest(
                url=url, flags=flags, api_key=self._api_key
            )
        except ValidationError as e:
            raise UjeebuExtractionError(str(e), url=url) from e
        response: requests.Response = self._send_request(request)
        ExtractClient._raise_for_status(response, url)
        return ExtractClient._parse_article(response, url)

    def _send_request(self, request: ExtractionRequest) -> requests.Response:
        _LOGGER.info("Extracting article from %s", request.url)
        try:
            return requests.get(
                self._base_url,
                params=request.params(),
                headers=request.headers(),
                timeout=self._timeout_s,
            )
        except (requests.RequestException, ValueError) as e:
            # ValueError covers query params that fail to encode
            raise UjeebuExtractionError(str(e), url=request.url) from e

    @staticmethod
    def _raise_for_status(response: requests.Response, url: str) -> None:
        status: int = response.status_code

        if status == 401:
            raise UjeebuAuthenticationError(
                "Invalid API key.", url=url, status_code=status
            )
        elif status == 404:
            raise UjeebuNotFoundError(
                f"Article not found at URL: {url}", url=url, status_code=status
            )
        elif status == 408:
            raise UjeebuTimeoutError(
                "Request timeout.", url=url, status_code=status
            )

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise UjeebuExtractionError(
                str(e), url=url, status_code=status
            ) from e

    @staticmethod
    def _parse_article(response: requests.Response, url: str) -> ArticleData:
        try:
            body: Any = response.json()
        except ValueError as e:
            raise UjeebuExtractionError(
                f"Response is not valid JSON: {e}", url=url
            ) from e

        article_data: Optional[Dict[str, Any]] = (
            body.get("article") if isinstance(body, dict) else None
        )
        if not isinstance(article_data, dict) or not article_data:
            raise UjeebuExtractionError(
                "Response contains no article data.", url=url
            )

        try:
            return ArticleData(**article_data)
        except ValidationError as e:
            raise UjeebuExtractionError(
                f"Malformed article data: {e}", url=url
            ) from e
