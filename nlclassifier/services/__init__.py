from __future__ import annotations

from .base import AsyncServiceClient, BaseService, ServiceClient
from .natural_language_classifier import (
    AsyncNaturalLanguageClassifier,
    NaturalLanguageClassifier,
)

__all__: list[str] = [
    "AsyncServiceClient",
    "BaseService",
    "ServiceClient",
    "AsyncNaturalLanguageClassifier",
    "NaturalLanguageClassifier",
]
