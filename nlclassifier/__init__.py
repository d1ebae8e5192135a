"""
nlclassifier ─ client for the hosted natural language classifier service.

Typical use::

    from nlclassifier import ClassifyOptions, NaturalLanguageClassifier

    with NaturalLanguageClassifier(api_key="...") as service:
        print(service.list_classifiers())

Configuration falls back to ``NLC_*`` environment variables (see
:class:`~nlclassifier.core.config.ClientSettings`).
"""

from __future__ import annotations

import logging

from .core.config import ClientSettings, get_settings
from .core.exceptions import (
    ClassifierClientError,
    InvalidArgumentError,
    ServiceResponseError,
    TransportError,
)
from .core.logging import configure_logging
from .models import (
    Classification,
    ClassificationCollection,
    ClassifiedClass,
    Classifier,
    ClassifierList,
    ClassifierStatus,
    ClassifyCollectionOptions,
    ClassifyOptions,
    CollectionItem,
    CreateClassifierOptions,
    DeleteClassifierOptions,
    GetClassifierOptions,
)
from .services import AsyncNaturalLanguageClassifier, NaturalLanguageClassifier
from .version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = [
    "__version__",
    "ClientSettings",
    "get_settings",
    "configure_logging",
    "ClassifierClientError",
    "InvalidArgumentError",
    "ServiceResponseError",
    "TransportError",
    "Classification",
    "ClassificationCollection",
    "ClassifiedClass",
    "Classifier",
    "ClassifierList",
    "ClassifierStatus",
    "ClassifyCollectionOptions",
    "ClassifyOptions",
    "CollectionItem",
    "CreateClassifierOptions",
    "DeleteClassifierOptions",
    "GetClassifierOptions",
    "AsyncNaturalLanguageClassifier",
    "NaturalLanguageClassifier",
]
