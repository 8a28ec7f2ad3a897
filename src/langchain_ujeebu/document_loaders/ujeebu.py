import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, Iterator, List, Optional, Union
from langchain_core.document_loaders import BaseLoader
from langchain_core.documents import Document
from pydantic import SecretStr
from langchain_ujeebu.article import ArticleData, ExtractionFlags
from langchain_ujeebu.client import ExtractClient
from langchain_ujeebu.config import DEFAULT_BASE_URL, resolve_api_key
from langchain_ujeebu.errors import UjeebuError

_LOGGER = logging.getLogger(__name__)

Metadata = Dict[str, Union[str, List[str]]]


class UjeebuLoader(BaseLoader):
    """
    Loads articles with the Ujeebu Extract API as LangChain documents, ready
    for vector stores, retrievers and text splitters.

    All URLs are requested concurrently. A URL that fails to extract is logged
    and left out, it never fails the whole batch.

    Example:
        loader = UjeebuLoader(urls=["https://example.com/article"])
        documents = loader.load()
    """

    def __init__(
        self,
        urls: List[str],
        api_key: Optional[Union[str, SecretStr]] = None,
        extract_text: bool = True,
        extract_html: bool = False,
        extract_author: bool = True,
        extract_pub_date: bool = True,
        extract_images: bool = False,
        quick_mode: bool = False,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._urls = list(urls)
        self._flags = ExtractionFlags(
            text=extract_text,
            html=extract_html,
            author=extract_author,
            pub_date=extract_pub_date,
            images=extract_images,
            quick_mode=quick_mode,
        )
        self._client = ExtractClient(resolve_api_key(api_key), base_url)

    @classmethod
    def from_flags(
        cls,
        urls: List[str],
        flags: ExtractionFlags,
        api_key: Optional[Union[str, SecretStr]] = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> "UjeebuLoader":
        return cls(
            urls=urls,
            api_key=api_key,
            extract_text=flags.text,
            extract_html=flags.html,
            extract_author=flags.author,
            extract_pub_date=flags.pub_date,
            extract_images=flags.images,
            quick_mode=flags.quick_mode,
            base_url=base_url,
        )

    def lazy_load(self) -> Iterator[Document]:
        """
        Documents are yielded in input order once every request has settled.
        """
        articles: List[Optional[ArticleData]] = self._extract_all()

        for url, article in zip(self._urls, articles):
            if article is not None:
                yield self._build_document(url, article)

        _LOGGER.info(
            "Loaded %d of %d articles.",
            sum(article is not None for article in articles),
            len(self._urls),
        )

    def _extract_all(self) -> List[Optional[ArticleData]]:
        articles: List[Optional[ArticleData]] = [None] * len(self._urls)
        if not self._urls:
            return articles

        with ThreadPoolExecutor(max_workers=len(self._urls)) as executor:
            future_map: Dict[Future, int] = {
                executor.submit(self._client.fetch, url, self._flags): idx
                for idx, url in enumerate(self._urls)
            }
            for future in as_completed(future_map):
                idx: int = future_map[future]
                try:
                    articles[idx] = future.result()
                except UjeebuError as e:
                    _LOGGER.error(
                        "Error extracting article from %s: %s",
                        self._urls[idx],
                        e,
                    )
                except Exception:
                    _LOGGER.exception(
                        "Unexpected error extracting article from %s",
                        self._urls[idx],
                    )

        return articles

    def _build_document(self, url: str, article: ArticleData) -> Document:
        content_parts: List[str] = []

        if self._flags.text and article.text:
            content_parts.append(article.text)
        if self._flags.html and article.html:
            content_parts.append(f"HTML: {article.html}")

        return Document(
            page_content="\n\n".join(content_parts),
            metadata=self._build_metadata(url, article),
        )

    def _build_metadata(self, url: str, article: ArticleData) -> Metadata:
        metadata: Metadata = {
            "source": url,
            "url": article.url or url,
            "canonical_url": article.canonical_url or url,
        }
        optional_fields: Dict[str, Union[None, str, List[str]]] = {
            "title": article.title,
            "author": article.author if self._flags.author else None,
            "pub_date": article.pub_date if self._flags.pub_date else None,
            "language": article.language,
            "site_name": article.site_name,
            "summary": article.summary,
            "image": article.image,
            "images": article.images if self._flags.images else None,
        }

        for key, value in optional_fields.items():
            if value:
                metadata[key] = value

        return metadata
