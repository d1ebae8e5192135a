# ruff: noqa: E402
from __future__ import annotations

import sys
from pathlib import Path

# Ensure repository root is first on sys.path
_repo_root: Path = Path(__file__).resolve().parent.parent  # tests/ -> repo root
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import json
from collections import deque
from typing import Any, Deque, Dict, List

import httpx
import pytest
import pytest_asyncio

from nlclassifier.core.config import ClientSettings
from nlclassifier.services.natural_language_classifier import (
    AsyncNaturalLanguageClassifier,
    NaturalLanguageClassifier,
)

FIXTURES_DIR: Path = Path(__file__).resolve().parent / "fixtures"
TEST_ENDPOINT = "http://testserver"


def load_fixture(name: str) -> Dict[str, Any]:
    """Return the parsed JSON fixture *name* from ``tests/fixtures``."""
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


class MockServer:
    """In-process stand-in for the remote service.

    Responses are served in the order they were enqueued and every request
    that reaches the transport is recorded, so a test can assert both what
    was sent and that nothing was sent at all.
    """

    def __init__(self) -> None:
        self._responses: Deque[httpx.Response] = deque()
        self.requests: List[httpx.Request] = []

    def enqueue(self, response: httpx.Response) -> None:
        self._responses.append(response)

    def enqueue_json(self, payload: Any, status_code: int = 200) -> None:
        self.enqueue(httpx.Response(status_code, json=payload))

    def take_request(self) -> httpx.Request:
        assert self.requests, "no request reached the server"
        return self.requests.pop(0)

    @property
    def request_count(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(500, json={"error": "no response enqueued"})
        return self._responses.popleft()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``.env`` files and ``NLC_*`` variables out of the tests."""

    monkeypatch.setitem(ClientSettings.model_config, "env_file", None)
    for name in (
        "NLC_ENDPOINT",
        "NLC_API_KEY",
        "NLC_USERNAME",
        "NLC_PASSWORD",
        "NLC_TIMEOUT",
        "NLC_VERIFY_SSL",
        "NLC_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def server() -> MockServer:
    return MockServer()


@pytest.fixture
def classifier_id() -> str:
    return "foo"


@pytest.fixture
def service(server: MockServer):
    """Blocking client wired to the mock server."""
    client = NaturalLanguageClassifier(
        endpoint=TEST_ENDPOINT, api_key="", transport=server.transport
    )
    yield client
    client.close()


@pytest_asyncio.fixture
async def async_service(server: MockServer):
    """asyncio client wired to the mock server."""
    client = AsyncNaturalLanguageClassifier(
        endpoint=TEST_ENDPOINT, api_key="", transport=server.transport
    )
    yield client
    await client.aclose()


@pytest.fixture
def classifier_payload() -> Dict[str, Any]:
    return load_fixture("classifier.json")


@pytest.fixture
def classifiers_payload() -> Dict[str, Any]:
    return load_fixture("classifiers.json")


@pytest.fixture
def classification_payload() -> Dict[str, Any]:
    return load_fixture("classification.json")


@pytest.fixture
def collection_payload() -> Dict[str, Any]:
    return load_fixture("classification_collection.json")


@pytest.fixture
def training_csv() -> Path:
    return FIXTURES_DIR / "weather_data_train.csv"
