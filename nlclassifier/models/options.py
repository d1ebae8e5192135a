"""
Per-operation option bundles.

Each bundle is a frozen dataclass whose fields all default to ``None`` so a
bundle can be built incrementally (``dataclasses.replace``) and validated
only when it is handed to the client. ``validate()`` raises
:class:`~nlclassifier.core.exceptions.InvalidArgumentError` naming the first
missing field; the client calls it before building any request.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Mapping, Optional, Tuple, Union

from nlclassifier.core.exceptions import InvalidArgumentError

__all__: list[str] = [
    "ClassifyOptions",
    "ClassifyCollectionOptions",
    "GetClassifierOptions",
    "DeleteClassifierOptions",
    "CreateClassifierOptions",
    "MAX_COLLECTION_SIZE",
]

# Upper bound the service accepts for one classify_collection call.
MAX_COLLECTION_SIZE = 30

Payload = Union[bytes, BinaryIO]


def _require(value: Any, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} cannot be null")


def _require_id(value: Optional[str], name: str = "classifier_id") -> None:
    _require(value, name)
    if not str(value).strip():
        raise InvalidArgumentError(f"{name} cannot be empty")


def _require_payload(value: Any, name: str) -> None:
    _require(value, name)
    # text-mode files have .read too, but httpx can only stream bytes
    readable = hasattr(value, "read") and not isinstance(value, io.TextIOBase)
    if not isinstance(value, bytes) and not readable:
        raise InvalidArgumentError(
            f"{name} must be bytes or a readable binary stream, "
            f"got {type(value).__name__}"
        )


@dataclass(frozen=True)
class ClassifyOptions:
    classifier_id: Optional[str] = None
    text: Optional[str] = None

    def validate(self) -> None:
        _require_id(self.classifier_id)
        _require(self.text, "text")


@dataclass(frozen=True)
class ClassifyCollectionOptions:
    """Texts to classify in one round trip, at most ``MAX_COLLECTION_SIZE``."""

    classifier_id: Optional[str] = None
    texts: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        # accept any sequence but store a tuple to stay hashable
        if self.texts is not None and not isinstance(self.texts, tuple):
            object.__setattr__(self, "texts", tuple(self.texts))

    def validate(self) -> None:
        _require_id(self.classifier_id)
        _require(self.texts, "texts")
        assert self.texts is not None
        if not self.texts:
            raise InvalidArgumentError("texts cannot be empty")
        if len(self.texts) > MAX_COLLECTION_SIZE:
            raise InvalidArgumentError(
                f"texts accepts at most {MAX_COLLECTION_SIZE} items, "
                f"got {len(self.texts)}"
            )
        for index, text in enumerate(self.texts):
            _require(text, f"texts[{index}]")


@dataclass(frozen=True)
class GetClassifierOptions:
    classifier_id: Optional[str] = None

    def validate(self) -> None:
        _require_id(self.classifier_id)


@dataclass(frozen=True)
class DeleteClassifierOptions:
    classifier_id: Optional[str] = None

    def validate(self) -> None:
        _require_id(self.classifier_id)


@dataclass(frozen=True)
class CreateClassifierOptions:
    """
    Training data plus metadata for a new classifier.

    Attributes:
        training_data: CSV rows of ``text,class[,class...]`` as bytes or a
            readable binary stream
        metadata: JSON describing the classifier (``language``, ``name``)
            as bytes, a readable binary stream, or a mapping that will be
            serialised to JSON
    """

    training_data: Optional[Payload] = None
    metadata: Optional[Union[Payload, Mapping[str, Any]]] = None

    @classmethod
    def from_files(
        cls,
        training_data: Union[str, Path],
        metadata: Union[str, Path, Mapping[str, Any]],
    ) -> "CreateClassifierOptions":
        """Read the training CSV, and the metadata JSON unless it is a mapping."""
        meta: Union[bytes, Mapping[str, Any]]
        if isinstance(metadata, Mapping):
            meta = metadata
        else:
            meta = Path(metadata).read_bytes()
        return cls(training_data=Path(training_data).read_bytes(), metadata=meta)

    def validate(self) -> None:
        _require_payload(self.training_data, "training_data")
        _require(self.metadata, "metadata")
        if not isinstance(self.metadata, Mapping):
            _require_payload(self.metadata, "metadata")

    def metadata_payload(self) -> Payload:
        """Metadata ready to be sent as a multipart part."""
        if isinstance(self.metadata, Mapping):
            return json.dumps(dict(self.metadata)).encode("utf-8")
        assert self.metadata is not None
        return self.metadata
