import itertools

import pytest
import requests
from pydantic import SecretStr

from conftest import API_KEY, make_response
from langchain_ujeebu.article import ExtractionFlags
from langchain_ujeebu.client import ExtractClient
from langchain_ujeebu.errors import (
    UjeebuAuthenticationError,
    UjeebuExtractionError,
    UjeebuNotFoundError,
    UjeebuTimeoutError,
)

URL = "https://example.com/article"


def make_client(base_url: str = "https://api.ujeebu.com/extract") -> ExtractClient:
    return ExtractClient(SecretStr(API_KEY), base_url)


def test_fetch_parses_article(fake_api):
    article = make_client().fetch(URL)

    assert article.title == "Test Article Title"
    assert article.author == "John Doe"
    assert article.images == [
        "https://example.com/image1.jpg",
        "https://example.com/image2.jpg",
    ]
    assert article.favicon is None


def test_fetch_sends_key_header_and_timeout(fake_api):
    make_client().fetch(URL)

    call = fake_api.calls[0]
    assert call["url"] == "https://api.ujeebu.com/extract"
    assert call["headers"] == {"ApiKey": API_KEY}
    assert call["timeout"] == 60
    assert call["params"]["url"] == URL


def test_fetch_default_flags(fake_api):
    make_client().fetch(URL)

    params = fake_api.calls[0]["params"]
    assert params == {
        "url": URL,
        "text": 1,
        "html": 0,
        "author": 1,
        "pub_date": 1,
        "images": 0,
        "quick_mode": 0,
    }


def test_flags_are_encoded_as_integers(fake_api):
    names = ["text", "html", "author", "pub_date", "images", "quick_mode"]
    client = make_client()

    for values in itertools.product([False, True], repeat=len(names)):
        flags = ExtractionFlags(**dict(zip(names, values)))
        client.fetch(URL, flags)
        params = fake_api.calls[-1]["params"]
        assert [params[name] for name in names] == [int(v) for v in values]


def test_fetch_uses_custom_base_url(fake_api):
    make_client("https://custom-api.ujeebu.com/extract").fetch(URL)

    assert fake_api.calls[0]["url"] == "https://custom-api.ujeebu.com/extract"


@pytest.mark.parametrize(
    "status, error",
    [
        (401, UjeebuAuthenticationError),
        (404, UjeebuNotFoundError),
        (408, UjeebuTimeoutError),
    ],
)
def test_fetch_maps_status_codes(fake_api, status, error):
    fake_api.default = make_response(status, body={"error": "nope"})

    with pytest.raises(error) as exc_info:
        make_client().fetch(URL)

    assert exc_info.value.status_code == status
    assert exc_info.value.url == URL


def test_fetch_other_http_error_is_generic(fake_api):
    fake_api.default = make_response(500, body={"error": "boom"})

    with pytest.raises(UjeebuExtractionError) as exc_info:
        make_client().fetch(URL)

    assert type(exc_info.value) is UjeebuExtractionError
    assert exc_info.value.status_code == 500
    assert "500" in str(exc_info.value)


def test_fetch_network_error_is_generic(fake_api):
    fake_api.default = requests.ConnectionError("Network error")

    with pytest.raises(UjeebuExtractionError, match="Network error"):
        make_client().fetch(URL)


def test_fetch_local_timeout_is_generic(fake_api):
    fake_api.default = requests.Timeout("read timed out")

    with pytest.raises(UjeebuExtractionError) as exc_info:
        make_client().fetch(URL)

    assert not isinstance(exc_info.value, UjeebuTimeoutError)


@pytest.mark.parametrize(
    "response",
    [
        make_response(raw="<html>not json</html>"),
        make_response(body={"success": True}),
        make_response(body={"article": None}),
        make_response(body={"article": {}}),
        make_response(body={"article": {"images": "not-a-list"}}),
        make_response(body=["article"]),
    ],
)
def test_fetch_rejects_malformed_payload(fake_api, response):
    fake_api.default = response

    with pytest.raises(UjeebuExtractionError):
        make_client().fetch(URL)


def test_fetch_ignores_unknown_fields(fake_api):
    fake_api.default = make_response(
        body={"article": {"title": "T", "word_count": 1200}}
    )

    assert make_client().fetch(URL).title == "T"


def test_fetch_unencodable_params_are_generic(fake_api):
    fake_api.default = UnicodeEncodeError(
        "utf-8", "\ud800", 0, 1, "surrogates not allowed"
    )

    with pytest.raises(UjeebuExtractionError, match="surrogates"):
        make_client().fetch(URL)
