from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

__all__: list[str] = ["ClassifierStatus", "Classifier", "ClassifierList"]


class ClassifierStatus(str, Enum):
    """Training state reported by the service."""

    NON_EXISTENT = "Non Existent"
    TRAINING = "Training"
    FAILED = "Failed"
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"


class Classifier(BaseModel):
    """A classifier as described by the service.

    List responses only carry a subset of the fields, hence the optionals.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    classifier_id: str = Field(..., description="Opaque identifier.")
    name: Optional[str] = Field(None, description="User-supplied name.")
    language: Optional[str] = Field(None, description="Language code, e.g. 'en'.")
    created: Optional[datetime] = Field(None, description="Creation timestamp.")
    # statuses the enum does not know yet are kept as plain strings
    status: Optional[Union[ClassifierStatus, str]] = Field(
        None, union_mode="left_to_right"
    )
    status_description: Optional[str] = None
    url: Optional[str] = Field(None, description="Link to the classifier resource.")

    @property
    def is_available(self) -> bool:
        return self.status is ClassifierStatus.AVAILABLE


class ClassifierList(BaseModel):
    """Ordered collection of classifiers returned by the list endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    classifiers: List[Classifier] = Field(default_factory=list)

    def __iter__(self) -> Iterator[Classifier]:  # type: ignore[override]
        return iter(self.classifiers)

    def __len__(self) -> int:
        return len(self.classifiers)
