"""LangChain integration for the Ujeebu Extract API."""

from langchain_ujeebu.article import ArticleData, ExtractionFlags
from langchain_ujeebu.client import ExtractClient
from langchain_ujeebu.document_loaders import UjeebuLoader
from langchain_ujeebu.errors import (
    UjeebuAuthenticationError,
    UjeebuConfigError,
    UjeebuError,
    UjeebuExtractionError,
    UjeebuNotFoundError,
    UjeebuTimeoutError,
)
from langchain_ujeebu.tools import UjeebuExtractTool

__all__ = [
    "ArticleData",
    "ExtractClient",
    "ExtractionFlags",
    "UjeebuAuthenticationError",
    "UjeebuConfigError",
    "UjeebuError",
    "UjeebuExtractTool",
    "UjeebuExtractionError",
    "UjeebuLoader",
    "UjeebuNotFoundError",
    "UjeebuTimeoutError",
]
