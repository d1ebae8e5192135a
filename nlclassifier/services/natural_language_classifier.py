"""
Natural language classifier clients.

Each public operation validates its options bundle, maps it to exactly one
REST call and parses the JSON answer into a response model:

=====================  ======  ======================================
operation              method  path
=====================  ======  ======================================
classify               POST    /v1/classifiers/{id}/classify
classify_collection    POST    /v1/classifiers/{id}/classify_collection
get_classifier         GET     /v1/classifiers/{id}
list_classifiers       GET     /v1/classifiers
create_classifier      POST    /v1/classifiers (multipart)
delete_classifier      DELETE  /v1/classifiers/{id}
=====================  ======  ======================================

The request mapping lives in `_ClassifierCalls` so the blocking and the
asyncio client cannot drift apart.
"""

from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional, Type
from urllib.parse import quote

from pydantic import BaseModel

from nlclassifier.models.classification import (
    Classification,
    ClassificationCollection,
)
from nlclassifier.models.classifier import Classifier, ClassifierList
from nlclassifier.models.options import (
    ClassifyCollectionOptions,
    ClassifyOptions,
    CreateClassifierOptions,
    DeleteClassifierOptions,
    GetClassifierOptions,
)

from .base import AsyncServiceClient, ServiceClient

__all__: list[str] = [
    "NaturalLanguageClassifier",
    "AsyncNaturalLanguageClassifier",
    "CLASSIFIERS_PATH",
]

CLASSIFIERS_PATH = "/v1/classifiers"


def _classifier_path(classifier_id: str, *suffix: str) -> str:
    return "/".join([CLASSIFIERS_PATH, quote(classifier_id, safe=""), *suffix])


class _Call(NamedTuple):
    method: str
    path: str
    kwargs: Dict[str, Any]
    model: Optional[Type[BaseModel]]


class _ClassifierCalls:
    """Options bundle -> HTTP call mapping shared by both clients."""

    @staticmethod
    def _classify_call(options: ClassifyOptions) -> _Call:
        options.validate()
        assert options.classifier_id is not None
        return _Call(
            "POST",
            _classifier_path(options.classifier_id, "classify"),
            {"json": {"text": options.text}},
            Classification,
        )

    @staticmethod
    def _classify_collection_call(options: ClassifyCollectionOptions) -> _Call:
        options.validate()
        assert options.classifier_id is not None and options.texts is not None
        return _Call(
            "POST",
            _classifier_path(options.classifier_id, "classify_collection"),
            {"json": {"collection": [{"text": text} for text in options.texts]}},
            ClassificationCollection,
        )

    @staticmethod
    def _get_classifier_call(options: GetClassifierOptions) -> _Call:
        options.validate()
        assert options.classifier_id is not None
        return _Call("GET", _classifier_path(options.classifier_id), {}, Classifier)

    @staticmethod
    def _list_classifiers_call() -> _Call:
        return _Call("GET", CLASSIFIERS_PATH, {}, ClassifierList)

    @staticmethod
    def _create_classifier_call(options: CreateClassifierOptions) -> _Call:
        options.validate()
        files = {
            "training_metadata": (
                "training_metadata.json",
                options.metadata_payload(),
                "application/json",
            ),
            "training_data": ("training_data.csv", options.training_data, "text/csv"),
        }
        return _Call("POST", CLASSIFIERS_PATH, {"files": files}, Classifier)

    @staticmethod
    def _delete_classifier_call(options: DeleteClassifierOptions) -> _Call:
        options.validate()
        assert options.classifier_id is not None
        return _Call("DELETE", _classifier_path(options.classifier_id), {}, None)


class NaturalLanguageClassifier(_ClassifierCalls, ServiceClient):
    """
    Blocking client for the natural language classifier service.

    Example::

        with NaturalLanguageClassifier(api_key="...") as service:
            result = service.classify(
                ClassifyOptions(classifier_id="10D41B-nlc-1", text="Is it sunny?")
            )
            print(result.top_class)
    """

    def _execute(self, call: _Call) -> Any:
        response = self.request(call.method, call.path, **call.kwargs)
        if call.model is None:
            return None
        return self._parse(response, call.model)

    def classify(self, options: ClassifyOptions) -> Classification:
        """Classify one text with the given classifier."""
        return self._execute(self._classify_call(options))

    def classify_collection(
        self, options: ClassifyCollectionOptions
    ) -> ClassificationCollection:
        """Classify up to 30 texts in a single request."""
        return self._execute(self._classify_collection_call(options))

    def get_classifier(self, options: GetClassifierOptions) -> Classifier:
        """Fetch a classifier's metadata and training status."""
        return self._execute(self._get_classifier_call(options))

    def list_classifiers(self) -> ClassifierList:
        return self._execute(self._list_classifiers_call())

    def create_classifier(self, options: CreateClassifierOptions) -> Classifier:
        """Upload training data; the returned classifier is usually still training."""
        return self._execute(self._create_classifier_call(options))

    def delete_classifier(self, options: DeleteClassifierOptions) -> None:
        self._execute(self._delete_classifier_call(options))


class AsyncNaturalLanguageClassifier(_ClassifierCalls, AsyncServiceClient):
    """asyncio flavour of :class:`NaturalLanguageClassifier`."""

    async def _execute(self, call: _Call) -> Any:
        response = await self.request(call.method, call.path, **call.kwargs)
        if call.model is None:
            return None
        return self._parse(response, call.model)

    async def classify(self, options: ClassifyOptions) -> Classification:
        return await self._execute(self._classify_call(options))

    async def classify_collection(
        self, options: ClassifyCollectionOptions
    ) -> ClassificationCollection:
        return await self._execute(self._classify_collection_call(options))

    async def get_classifier(self, options: GetClassifierOptions) -> Classifier:
        return await self._execute(self._get_classifier_call(options))

    async def list_classifiers(self) -> ClassifierList:
        return await self._execute(self._list_classifiers_call())

    async def create_classifier(self, options: CreateClassifierOptions) -> Classifier:
        return await self._execute(self._create_classifier_call(options))

    async def delete_classifier(self, options: DeleteClassifierOptions) -> None:
        await self._execute(self._delete_classifier_call(options))
