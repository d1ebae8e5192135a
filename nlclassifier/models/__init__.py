from __future__ import annotations

from .classification import (
    Classification,
    ClassificationCollection,
    ClassifiedClass,
    CollectionItem,
)
from .classifier import Classifier, ClassifierList, ClassifierStatus
from .options import (
    MAX_COLLECTION_SIZE,
    ClassifyCollectionOptions,
    ClassifyOptions,
    CreateClassifierOptions,
    DeleteClassifierOptions,
    GetClassifierOptions,
)

__all__: list[str] = [
    "Classification",
    "ClassificationCollection",
    "ClassifiedClass",
    "CollectionItem",
    "Classifier",
    "ClassifierList",
    "ClassifierStatus",
    "MAX_COLLECTION_SIZE",
    "ClassifyCollectionOptions",
    "ClassifyOptions",
    "CreateClassifierOptions",
    "DeleteClassifierOptions",
    "GetClassifierOptions",
]
