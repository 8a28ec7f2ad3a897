import json
import logging
from typing import Any, List, Optional, Union
from langchain_core.callbacks import CallbackManagerForToolRun
from langchain_core.tools import BaseTool
from pydantic import PrivateAttr, SecretStr, ValidationError
from langchain_ujeebu.article import ArticleData, ExtractionFlags
from langchain_ujeebu.client import ExtractClient
from langchain_ujeebu.config import (
    API_KEY_ENV,
    DEFAULT_BASE_URL,
    resolve_api_key,
)
from langchain_ujeebu.errors import (
    UjeebuAuthenticationError,
    UjeebuError,
    UjeebuNotFoundError,
    UjeebuTimeoutError,
)

_LOGGER = logging.getLogger(__name__)
_MAX_IMAGES = 5
_NO_URL_ERROR = "Error: No URL provided. Please provide a valid article URL."


class ExtractToolInput(ExtractionFlags):
    url: Optional[str] = None

    def flags(self) -> ExtractionFlags:
        return ExtractionFlags(**self.model_dump(exclude={"url"}))


class UjeebuExtractTool(BaseTool):
    """
    Extracts clean, structured content (text, HTML, author, publication date,
    title, summary, images) from an article URL with the Ujeebu Extract API.

    The API key is taken from ``api_key`` or the ``UJEEBU_API_KEY``
    environment variable. Get one at https://ujeebu.com/signup.
    """

    name: str = "ujeebu_extract"
    description: str = (
        "Extract clean, structured content from news articles and blog posts. "
        "Useful for retrieving article text, metadata, author, publication "
        "date, and other structured information from web pages. "
        "Input should be a valid article URL."
    )
    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL

    _client: ExtractClient = PrivateAttr()

    def __init__(
        self,
        api_key: Optional[Union[str, SecretStr]] = None,
        base_url: str = DEFAULT_BASE_URL,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            api_key=resolve_api_key(api_key), base_url=base_url, **kwargs
        )
        self._client = ExtractClient(self.api_key, self.base_url)

    def _run(
        self,
        tool_input: str = "",
        run_manager: Optional[CallbackManagerForToolRun] = None,
    ) -> str:
        """
        Args:
            tool_input: Either a bare article URL or a JSON object with
            ``url`` and any of the extraction flags.
        """
        if not tool_input or not tool_input.strip():
            return _NO_URL_ERROR

        try:
            params: ExtractToolInput = _parse_input(tool_input.strip())
        except ValidationError as e:
            return f"Error: Invalid input: {e}"

        if not params.url:
            return _NO_URL_ERROR

        try:
            article: ArticleData = self._client.fetch(
                params.url, params.flags()
            )
        except UjeebuAuthenticationError:
            return (
                f"Error: Invalid API key. Please check your {API_KEY_ENV}."
            )
        except UjeebuNotFoundError:
            return f"Error: Article not found at URL: {params.url}"
        except UjeebuTimeoutError:
            return (
                "Error: Request timeout. Try increasing the timeout or using "
                "a premium proxy."
            )
        except UjeebuError as e:
            _LOGGER.warning("Extraction of %s failed: %s", params.url, e)
            return f"Error extracting article: {e}"
        except Exception as e:
            _LOGGER.exception("Unexpected error extracting %s", params.url)
            return f"Error extracting article: {e}"

        return format_article(article, params.flags())


def _parse_input(tool_input: str) -> ExtractToolInput:
    """Anything that is not a JSON object is taken for a bare URL."""
    try:
        parsed: Any = json.loads(tool_input)
    except ValueError:
        parsed = None

    if isinstance(parsed, dict):
        return ExtractToolInput(**parsed)
    if isinstance(parsed, str):
        return ExtractToolInput(url=parsed)
    return ExtractToolInput(url=tool_input)


def format_article(article: ArticleData, flags: ExtractionFlags) -> str:
    result_parts: List[str] = []

    if article.title:
        result_parts.append(f"Title: {article.title}")
    if article.author:
        result_parts.append(f"Author: {article.author}")
    if article.pub_date:
        result_parts.append(f"Published: {article.pub_date}")
    if article.site_name:
        result_parts.append(f"Site: {article.site_name}")
    if article.summary:
        result_parts.append(f"\nSummary: {article.summary}")
    if flags.text and article.text:
        result_parts.append(f"\nContent:\n{article.text}")
    if flags.html and article.html:
        result_parts.append(f"\nHTML:\n{article.html}")
    if flags.images and article.images:
        images: str = ", ".join(article.images[:_MAX_IMAGES])
        result_parts.append(f"\nImages: {images}")

    return "\n".join(result_parts)
