from typing import AsyncGenerator, Callable, Dict, Optional, Tuple
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from starlette.responses import Response

from app.core.config import Settings
from app.core.cookies import CookieStore
from app.main import app


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Yield an ``httpx.AsyncClient`` wired to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def client_with_cookies() -> Callable[[Dict[str, str]], AsyncClient]:
    """Factory for clients whose jar already holds attribution cookies."""

    def _make(cookies: Dict[str, str]) -> AsyncClient:
        transport = ASGITransport(app=app)
        return AsyncClient(
            transport=transport, base_url="http://test", cookies=cookies
        )

    return _make


@pytest.fixture
def dev_settings() -> Settings:
    return Settings(ENVIRONMENT="development")


@pytest.fixture
def prod_settings() -> Settings:
    return Settings(ENVIRONMENT="production", COOKIE_DOMAIN=".example.com")


@pytest.fixture
def make_store(dev_settings: Settings) -> Callable[..., Tuple[CookieStore, Response]]:
    """Build a :class:`CookieStore` over a fake request and a real response."""

    def _make(
        cookies: Optional[Dict[str, str]] = None,
        settings: Optional[Settings] = None,
    ) -> Tuple[CookieStore, Response]:
        request = MagicMock()
        request.cookies = dict(cookies or {})
        response = Response()
        store = CookieStore(request, response, settings=settings or dev_settings)
        return store, response

    return _make


@pytest.fixture
def written_cookies() -> Callable[[Response], Dict[str, str]]:
    """Map cookie name -> raw ``Set-Cookie`` header found on a response."""

    def _collect(response: Response) -> Dict[str, str]:
        headers = {}
        for key, value in response.raw_headers:
            if key == b"set-cookie":
                text = value.decode("latin-1")
                headers[text.split("=", 1)[0]] = text
        return headers

    return _collect
