import httpx
import pytest
from fastapi.testclient import TestClient

from newsplus.config import Settings
from newsplus.main import create_app
from newsplus.storage.stores import MemoryStore

JWT_SECRET = "newsplus-test-secret-0123456789abcdef"


def make_article(n, **extra):
    article = {
        "source": {"id": None, "name": f"Source {n}"},
        "author": None,
        "title": f"Headline {n}",
        "description": None,
        "url": f"https://news.example.com/articles/{n}",
        "urlToImage": None,
        "publishedAt": "2024-05-01T09:00:00Z",
        "content": None,
    }
    article.update(extra)
    return article


def news_payload(count=3):
    return {
        "status": "ok",
        "totalResults": count,
        "articles": [make_article(i) for i in range(count)],
    }


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        SKIP_DB_INIT=False,
        NEWS_API_BASE_URL="https://newsapi.test/v2",
        NEWS_API_KEY="test-key",
        JWT_SECRET=JWT_SECRET,
        STORE_BACKEND="memory",
        DISPLAY_TZ="UTC",
        HISTORY_LIMIT=100,
    )


@pytest.fixture
def news_api():
    """뉴스 API 목. requests에 받은 요청이 쌓이고, handler를 바꿔 끼울 수 있다."""

    class FakeNewsApi:
        def __init__(self):
            self.requests = []
            self.handler = lambda request: httpx.Response(200, json=news_payload())

        def __call__(self, request):
            self.requests.append(request)
            return self.handler(request)

    return FakeNewsApi()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(settings, store, news_api):
    app = create_app(settings, store=store, news_transport=httpx.MockTransport(news_api))
    with TestClient(app) as c:
        yield c


def register_and_login(client, username="reader", email="reader@example.com", password="secret123"):
    r = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)
