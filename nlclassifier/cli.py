from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel, ValidationError

from nlclassifier.core.config import get_settings
from nlclassifier.core.exceptions import (
    ClassifierClientError,
    InvalidArgumentError,
)
from nlclassifier.core.logging import configure_logging
from nlclassifier.models.options import (
    ClassifyCollectionOptions,
    ClassifyOptions,
    CreateClassifierOptions,
    DeleteClassifierOptions,
    GetClassifierOptions,
)
from nlclassifier.services.natural_language_classifier import (
    NaturalLanguageClassifier,
)

__all__: list[str] = ["main", "build_parser"]

EXIT_OK = 0
EXIT_SERVICE_ERROR = 1
EXIT_INVALID_ARGUMENT = 2

ServiceFactory = Callable[[argparse.Namespace], NaturalLanguageClassifier]


def build_parser() -> argparse.ArgumentParser:  # noqa: D401 – CLI helper
    parser = argparse.ArgumentParser(
        prog="nlc",
        description="Command-line access to the natural language classifier service",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--endpoint", help="Service URL (defaults to NLC_ENDPOINT)")
    parser.add_argument("--api-key", help="API key (defaults to NLC_API_KEY)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List classifiers")

    get = commands.add_parser("get", help="Show one classifier")
    get.add_argument("classifier_id")

    classify = commands.add_parser("classify", help="Classify one text")
    classify.add_argument("classifier_id")
    classify.add_argument("text")

    collection = commands.add_parser(
        "classify-collection", help="Classify several texts at once"
    )
    collection.add_argument("classifier_id")
    collection.add_argument("texts", nargs="+")

    create = commands.add_parser("create", help="Train a new classifier")
    create.add_argument("--training-data", type=Path, required=True)
    create.add_argument("--metadata", type=Path, help="Metadata JSON file")
    create.add_argument("--name", help="Classifier name, when --metadata is omitted")
    create.add_argument("--language", default="en")

    delete = commands.add_parser("delete", help="Delete a classifier")
    delete.add_argument("classifier_id")

    return parser


def _default_factory(args: argparse.Namespace) -> NaturalLanguageClassifier:
    return NaturalLanguageClassifier(
        get_settings(), endpoint=args.endpoint, api_key=args.api_key
    )


def _create_options(args: argparse.Namespace) -> CreateClassifierOptions:
    if args.metadata is not None:
        return CreateClassifierOptions.from_files(args.training_data, args.metadata)
    if not args.name:
        raise InvalidArgumentError("either --metadata or --name is required")
    return CreateClassifierOptions.from_files(
        args.training_data, {"language": args.language, "name": args.name}
    )


def _run(
    service: NaturalLanguageClassifier, args: argparse.Namespace
) -> Optional[BaseModel]:
    if args.command == "list":
        return service.list_classifiers()
    if args.command == "get":
        options = GetClassifierOptions(classifier_id=args.classifier_id)
        return service.get_classifier(options)
    if args.command == "classify":
        return service.classify(
            ClassifyOptions(classifier_id=args.classifier_id, text=args.text)
        )
    if args.command == "classify-collection":
        return service.classify_collection(
            ClassifyCollectionOptions(
                classifier_id=args.classifier_id, texts=args.texts
            )
        )
    if args.command == "create":
        return service.create_classifier(_create_options(args))
    if args.command == "delete":
        service.delete_classifier(
            DeleteClassifierOptions(classifier_id=args.classifier_id)
        )
        return None
    raise InvalidArgumentError(f"unknown command: {args.command}")


def main(
    argv: Optional[List[str]] = None,
    service_factory: Optional[ServiceFactory] = None,
) -> int:  # noqa: D401 – entry-point
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)

    factory = service_factory or _default_factory
    try:
        with factory(args) as service:
            result = _run(service, args)
    except (InvalidArgumentError, ValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT
    except (ClassifierClientError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_SERVICE_ERROR

    if result is None:
        print(json.dumps({"deleted": args.classifier_id}))
    else:
        print(result.model_dump_json(indent=2))
    return EXIT_OK
