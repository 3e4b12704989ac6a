import httpx
import pytest

from newsplus.api.news.client import RATE_LIMIT_MESSAGE, NewsApiClient
from newsplus.api.news.refresh import seeded_shuffle
from conftest import make_article, news_payload

BASE_URL = "https://newsapi.test/v2"


def make_client(handler, seen=None):
    def recording(request):
        if seen is not None:
            seen.append(request)
        return handler(request)

    return NewsApiClient(BASE_URL, "k", transport=httpx.MockTransport(recording))


def ok(payload=None):
    return lambda request: httpx.Response(200, json=payload or news_payload())


class TestFetchNews:
    @pytest.mark.asyncio
    async def test_browse_uses_top_headlines_and_tags_category(self):
        seen = []
        client = make_client(ok(), seen)
        res = await client.fetch_news(category="science")
        await client.aclose()

        assert res.status == "ok"
        req = seen[0]
        assert req.url.path == "/v2/top-headlines"
        assert req.headers["X-Api-Key"] == "k"
        assert req.url.params["category"] == "science"
        assert req.url.params["pageSize"] == "12"
        assert [a.category for a in res.articles] == ["science"] * 3

    @pytest.mark.asyncio
    async def test_normalizes_missing_fields(self):
        client = make_client(ok())
        res = await client.fetch_news()
        await client.aclose()

        a = res.articles[0]
        assert a.description == "No description available"
        assert a.content == "No content available"
        assert a.author == "Unknown"
        assert a.category is None

    @pytest.mark.asyncio
    async def test_search_uses_everything_with_modulated_query(self):
        seen = []
        client = make_client(ok(), seen)
        res = await client.fetch_news(category="science", query="ai", seed=7)
        await client.aclose()

        req = seen[0]
        assert req.url.path == "/v2/everything"
        assert req.url.params["q"] == "ai trending"
        assert "category" not in req.url.params
        assert all(a.category is None for a in res.articles)

    @pytest.mark.asyncio
    async def test_seeded_browse_modulates_and_shuffles(self):
        seen = []
        payload = news_payload(count=6)
        client = make_client(ok(payload), seen)
        res = await client.fetch_news(category="technology", seed=4)
        await client.aclose()

        params = seen[0].url.params
        assert params["sortBy"] == "popularity"
        assert params["pageSize"] == "13"
        original = [a["url"] for a in payload["articles"]]
        assert [a.url for a in res.articles] == seeded_shuffle(original, 4)

    @pytest.mark.asyncio
    async def test_skips_articles_without_url(self):
        payload = {"status": "ok", "totalResults": 2, "articles": [make_article(1), make_article(2, url="")]}
        client = make_client(ok(payload))
        res = await client.fetch_news()
        await client.aclose()
        assert [a.title for a in res.articles] == ["Headline 1"]


class TestErrors:
    @pytest.mark.asyncio
    async def test_rate_limited(self):
        client = make_client(lambda r: httpx.Response(429, json={"status": "error"}))
        res = await client.fetch_news()
        await client.aclose()
        assert res.status == "error"
        assert res.message == RATE_LIMIT_MESSAGE
        assert res.articles == []
        assert res.total_results == 0

    @pytest.mark.asyncio
    async def test_server_error(self):
        client = make_client(lambda r: httpx.Response(500, text="boom"))
        res = await client.fetch_news()
        await client.aclose()
        assert res.status == "error"
        assert res.message == "API Error: 500"

    @pytest.mark.asyncio
    async def test_bad_json(self):
        client = make_client(lambda r: httpx.Response(200, text="<html>"))
        res = await client.fetch_news()
        await client.aclose()
        assert res.message == "Error parsing API response"

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)
        res = await client.fetch_news()
        await client.aclose()
        assert res.status == "error"
        assert res.message == "timed out"

    @pytest.mark.asyncio
    async def test_upstream_error_body(self):
        body = {"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid."}
        client = make_client(ok(body))
        res = await client.fetch_news()
        await client.aclose()
        assert res.status == "error"
        assert res.message == "Your API key is invalid."


@pytest.mark.asyncio
async def test_fetch_trending():
    seen = []
    client = make_client(ok(), seen)
    res = await client.fetch_trending(3)
    await client.aclose()

    params = seen[0].url.params
    assert seen[0].url.path == "/v2/everything"
    assert params["q"] == "trending OR popular OR important"
    assert params["sortBy"] == "popularity"
    assert params["pageSize"] == "3"
    assert {a.category for a in res.articles} == {"trending"}


@pytest.mark.asyncio
async def test_fetch_by_source():
    seen = []
    client = make_client(ok(), seen)
    await client.fetch_by_source("bbc-news,reuters", 2)
    await client.aclose()
    assert seen[0].url.params["sources"] == "bbc-news,reuters"
    assert seen[0].url.params["pageSize"] == "2"


@pytest.mark.asyncio
async def test_fetch_multi_category_isolates_failures():
    def handler(request):
        if request.url.params.get("category") == "sports":
            return httpx.Response(500)
        return httpx.Response(200, json=news_payload(count=2))

    client = make_client(handler)
    res = await client.fetch_multi_category(["science", "sports"], per_category=2)
    await client.aclose()

    assert list(res) == ["science", "sports"]
    assert [a.category for a in res["science"]] == ["science", "science"]
    assert res["sports"] == []
