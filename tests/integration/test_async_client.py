from __future__ import annotations

import json
from typing import Any, Dict

import httpx
import pytest

from nlclassifier.core.exceptions import (
    InvalidArgumentError,
    NotFoundError,
    TransportError,
)
from nlclassifier.models import (
    Classification,
    Classifier,
    ClassifierList,
    ClassifyCollectionOptions,
    ClassifyOptions,
    CreateClassifierOptions,
    DeleteClassifierOptions,
    GetClassifierOptions,
)
from nlclassifier.services.natural_language_classifier import (
    AsyncNaturalLanguageClassifier,
)
from tests.conftest import TEST_ENDPOINT, MockServer

pytestmark = [pytest.mark.integration]


@pytest.mark.asyncio
async def test_async_classify(
    async_service: AsyncNaturalLanguageClassifier,
    server: MockServer,
    classifier_id: str,
    classification_payload: Dict[str, Any],
) -> None:
    server.enqueue_json(classification_payload)
    text = classification_payload["text"]

    result = await async_service.classify(
        ClassifyOptions(classifier_id=classifier_id, text=text)
    )
    request = server.take_request()

    assert request.method == "POST"
    assert request.url.path == f"/v1/classifiers/{classifier_id}/classify"
    assert json.loads(request.content) == {"text": text}
    assert result == Classification.model_validate(classification_payload)


@pytest.mark.asyncio
async def test_async_get_and_list(
    async_service: AsyncNaturalLanguageClassifier,
    server: MockServer,
    classifier_id: str,
    classifier_payload: Dict[str, Any],
    classifiers_payload: Dict[str, Any],
) -> None:
    server.enqueue_json(classifier_payload)
    server.enqueue_json(classifiers_payload)

    classifier = await async_service.get_classifier(
        GetClassifierOptions(classifier_id=classifier_id)
    )
    classifiers = await async_service.list_classifiers()

    assert server.take_request().url.path == f"/v1/classifiers/{classifier_id}"
    assert server.take_request().url.path == "/v1/classifiers"
    assert classifier == Classifier.model_validate(classifier_payload)
    assert classifiers == ClassifierList.model_validate(classifiers_payload)


@pytest.mark.asyncio
async def test_async_create_and_delete(
    async_service: AsyncNaturalLanguageClassifier,
    server: MockServer,
    classifier_payload: Dict[str, Any],
    training_csv,
) -> None:
    server.enqueue_json(classifier_payload)
    server.enqueue_json({})

    created = await async_service.create_classifier(
        CreateClassifierOptions.from_files(training_csv, {"language": "en"})
    )
    deleted = await async_service.delete_classifier(
        DeleteClassifierOptions(classifier_id=created.classifier_id)
    )

    create_request = server.take_request()
    delete_request = server.take_request()
    assert create_request.headers["content-type"].startswith("multipart/form-data")
    assert delete_request.method == "DELETE"
    assert delete_request.url.path == f"/v1/classifiers/{created.classifier_id}"
    assert deleted is None


@pytest.mark.asyncio
async def test_async_validation_happens_before_dispatch(
    async_service: AsyncNaturalLanguageClassifier, server: MockServer
) -> None:
    with pytest.raises(InvalidArgumentError):
        await async_service.classify(ClassifyOptions(text="test"))
    with pytest.raises(InvalidArgumentError):
        await async_service.classify_collection(
            ClassifyCollectionOptions(classifier_id="foo")
        )
    with pytest.raises(InvalidArgumentError):
        await async_service.delete_classifier(DeleteClassifierOptions())
    with pytest.raises(InvalidArgumentError):
        await async_service.create_classifier(CreateClassifierOptions())
    assert server.request_count == 0


@pytest.mark.asyncio
async def test_async_service_error(
    async_service: AsyncNaturalLanguageClassifier, server: MockServer
) -> None:
    server.enqueue_json(
        {"code": 404, "error": "Not found", "description": "Classifier not found."},
        status_code=404,
    )

    with pytest.raises(NotFoundError) as exc_info:
        await async_service.get_classifier(GetClassifierOptions(classifier_id="nope"))

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Not found"


@pytest.mark.asyncio
async def test_async_transport_error() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with AsyncNaturalLanguageClassifier(
        endpoint=TEST_ENDPOINT, transport=httpx.MockTransport(refuse)
    ) as service:
        with pytest.raises(TransportError) as exc_info:
            await service.list_classifiers()

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
