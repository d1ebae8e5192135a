"""
Classification result models.

`Classification` is the answer to a single text, `ClassificationCollection`
the answer to a batch. Both keep the service's ordering of ``classes``
(highest confidence first); nothing is re-sorted client-side.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__: list[str] = [
    "ClassifiedClass",
    "Classification",
    "CollectionItem",
    "ClassificationCollection",
]


class ClassifiedClass(BaseModel):
    """One (label, confidence) pair."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    class_name: str = Field(..., description="Class label.")
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Confidence score of the label (0.0 to 1.0).",
    )


class CollectionItem(BaseModel):
    """Classification of one text within a batch."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    text: str
    top_class: Optional[str] = None
    classes: List[ClassifiedClass] = Field(default_factory=list)


class Classification(CollectionItem):
    """Prediction for a single input text.

    Extends :class:`CollectionItem` with the classifier reference the
    single-text endpoint echoes back.
    """

    classifier_id: Optional[str] = None
    url: Optional[str] = None

    def confidence_for(self, class_name: str) -> Optional[float]:
        """Return the confidence reported for *class_name*, if present."""
        for item in self.classes:
            if item.class_name == class_name:
                return item.confidence
        return None


class ClassificationCollection(BaseModel):
    """Predictions for a batch of texts, in request order."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    classifier_id: Optional[str] = None
    url: Optional[str] = None
    collection: List[CollectionItem] = Field(default_factory=list)
