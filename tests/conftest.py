"""Shared pytest fixtures. `requests.get` never reaches the network."""

import json
from typing import Any, Dict, List, Optional, Union

import pytest
import requests

API_KEY = "test_api_key_12345"

ARTICLE: Dict[str, Any] = {
    "title": "Test Article Title",
    "text": "This is the article text content.",
    "html": "<p>This is the article HTML content.</p>",
    "author": "John Doe",
    "pub_date": "2024-01-01 12:00:00",
    "url": "https://example.com/article",
    "canonical_url": "https://example.com/article",
    "site_name": "Example Site",
    "summary": "Article summary",
    "language": "en",
    "image": "https://example.com/image.jpg",
    "images": [
        "https://example.com/image1.jpg",
        "https://example.com/image2.jpg",
    ],
}


def make_response(
    status_code: int = 200,
    body: Optional[Any] = None,
    raw: Optional[str] = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://api.ujeebu.com/extract"
    if raw is not None:
        response._content = raw.encode("utf-8")
    else:
        payload = {"article": ARTICLE} if body is None else body
        response._content = json.dumps(payload).encode("utf-8")
    return response


Outcome = Union[requests.Response, Exception]


class FakeApi:
    """Stands in for `requests.get`, answering per requested article URL."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.outcomes: Dict[str, Outcome] = {}
        self.default: Outcome = make_response()

    def respond(self, article_url: str, outcome: Outcome) -> None:
        self.outcomes[article_url] = outcome

    def __call__(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        params = params or {}
        self.calls.append(
            {"url": url, "params": params, "headers": headers, "timeout": timeout}
        )
        outcome = self.outcomes.get(params.get("url", ""), self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def no_api_key_env(monkeypatch):
    monkeypatch.delenv("UJEEBU_API_KEY", raising=False)


@pytest.fixture
def fake_api(monkeypatch) -> FakeApi:
    api = FakeApi()
    monkeypatch.setattr("langchain_ujeebu.client.requests.get", api)
    return api
