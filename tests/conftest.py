from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from tldr.api.app import create_app
from tldr.api.deps.clients import get_http_client, get_llm_client
from tldr.core.config import Settings

ARTICLE_URL = "https://example.com/posts/hello"

ARTICLE_HTML = """
<html>
<head>
    <title>Fallback Title</title>
    <meta property="og:title" content="Hello, World">
    <meta name="description" content="A short greeting.">
    <meta property="og:image" content="/images/hero.png">
    <meta property="og:site_name" content="Example Blog">
    <meta property="article:published_time" content="2024-03-01T10:00:00Z">
    <meta name="author" content="Jane Writer">
    <style>body { color: red; }</style>
    <script>window.tracker = "secret-tracker";</script>
</head>
<body>
    <h1>Hello</h1>
    <p>This is the article body.</p>
    <noscript>Enable JavaScript</noscript>
    <iframe src="https://ads.example.com">ad frame</iframe>
</body>
</html>
"""


def make_chunk(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class FakeStream:
    """Stands in for the `AsyncStream` returned by a streaming completion."""

    def __init__(self, chunks: list[SimpleNamespace], *, fail_after: int | None = None) -> None:
        self.chunks = chunks
        self.fail_after = fail_after
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[SimpleNamespace]:
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index == self.fail_after:
                raise RuntimeError("upstream connection reset")
            yield chunk

    async def close(self) -> None:
        self.closed = True


class FakeCompletions:
    """Stands in for `AsyncOpenAI().chat.completions`."""

    def __init__(
        self,
        fragments: list[str],
        *,
        fail_after: int | None = None,
        start_error: Exception | None = None,
    ) -> None:
        self.fragments = fragments
        self.fail_after = fail_after
        self.start_error = start_error
        self.calls: list[dict[str, Any]] = []
        self.streams: list[FakeStream] = []

    async def create(self, **kwargs: Any) -> FakeStream:
        self.calls.append(kwargs)
        if self.start_error is not None:
            raise self.start_error
        stream = FakeStream([make_chunk(fragment) for fragment in self.fragments], fail_after=self.fail_after)
        self.streams.append(stream)
        return stream


class FakeLLMClient:
    def __init__(self, completions: FakeCompletions) -> None:
        self.chat = SimpleNamespace(completions=completions)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, OPENAI_API_KEY="sk-test", OPENAI_MODEL="test-model")


@pytest.fixture
def completions() -> FakeCompletions:
    return FakeCompletions(["Hello ", "summary ", "text."])


@pytest.fixture
def fetch_handler() -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=ARTICLE_HTML, headers={"Content-Type": "text/html"})

    return handler


@pytest.fixture
def fetch_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def client(
    settings: Settings,
    completions: FakeCompletions,
    fetch_handler: Callable[[httpx.Request], httpx.Response],
    fetch_requests: list[httpx.Request],
) -> Iterator[TestClient]:
    app = create_app(settings)

    def recording_handler(request: httpx.Request) -> httpx.Response:
        fetch_requests.append(request)
        return fetch_handler(request)

    async def override_http_client() -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)) as http_client:
            yield http_client

    app.dependency_overrides[get_http_client] = override_http_client
    app.dependency_overrides[get_llm_client] = lambda: FakeLLMClient(completions)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
