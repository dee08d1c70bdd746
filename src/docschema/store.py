#!/usr/bin/env python3
"""
Document store boundary.

The inference core never talks to a database directly. It asks a
``DocumentStore`` for a bounded sample of documents at a path and for the
value detector that recognises the store's native value types.

``LocalDocumentStore`` serves documents from an in-memory export tree::

    {
      "users": {
        "u1": {"name": "Ada", "__collections__": {"orders": {"o1": {...}}}},
      }
    }

Collections map document ids to field mappings; the reserved
``__collections__`` key nests subcollections under a document.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol

from .classify import DEFAULT_DETECTOR, ValueDetector
from .constants import (
    EXAMPLE_ID_KEY,
    MODE_COLLECTION,
    PATH_SEPARATOR,
    SUBCOLLECTIONS_KEY,
)
from .exceptions import DataFormatError, handle_store_exceptions
from .io_utils import head_records, load_structured
from .logging_config import get_logger, log_function_call

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreDocument:
    """One sampled document: its id, field data and full path."""

    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None


class DocumentStore(Protocol):
    """What the inference service needs from a document database."""

    value_detector: ValueDetector

    def sample(self, path: str, mode: str, limit: int) -> List[StoreDocument]:
        """Return up to ``limit`` documents (collection) or at most one (document)."""
        ...

    def path_looks_like_collection(self, path: str) -> bool:
        """Return True when ``path`` addresses a collection."""
        ...


def split_path(path: str) -> List[str]:
    """Split a slash path into its non-empty segments."""
    return [s for s in path.split(PATH_SEPARATOR) if s]


def is_collection_path(path: str) -> bool:
    """Collections sit at odd segment counts (users, users/u1/orders)."""
    return len(split_path(path)) % 2 == 1


def join_path(segments: List[str]) -> str:
    return PATH_SEPARATOR.join(segments)


class LocalDocumentStore:
    """Document store backed by an in-memory export tree."""

    def __init__(
        self,
        tree: Mapping[str, Any],
        value_detector: Optional[ValueDetector] = None,
    ):
        _validate_collections(tree, "")
        self._tree = tree
        self.value_detector = value_detector or DEFAULT_DETECTOR

    @classmethod
    def from_export_file(cls, path: str) -> "LocalDocumentStore":
        """Load a JSON or YAML export tree from ``path``."""
        tree = load_structured(path)
        if tree is None:
            tree = {}
        if not isinstance(tree, Mapping):
            raise DataFormatError(
                "Export file must contain a mapping of collection names to documents",
                file_path=path,
            )
        logger.info("Loaded export %s with %d top-level collection(s)", path, len(tree))
        return cls(tree)

    @classmethod
    def from_records_file(
        cls,
        path: str,
        collection_path: str,
        max_records: Optional[int] = None,
    ) -> "LocalDocumentStore":
        """
        Load a flat JSON/NDJSON records file as the documents of one collection.

        Each record's ``id`` field becomes its document id; records without
        one are numbered from 1.
        """
        segments = split_path(collection_path)
        if len(segments) % 2 == 0:
            raise DataFormatError(
                f'Records can only be loaded into a collection path, got "{collection_path}"',
                file_path=path,
            )

        documents: Dict[str, Any] = {}
        for i, record in enumerate(head_records(path, max_records), 1):
            if not isinstance(record, Mapping):
                raise DataFormatError(
                    f"Record {i} is not a JSON object", file_path=path, line_number=i
                )
            doc_id = str(record.get(EXAMPLE_ID_KEY, i))
            documents[doc_id] = {k: v for k, v in record.items() if k != EXAMPLE_ID_KEY}

        logger.info("Loaded %d record(s) from %s into %s", len(documents), path, collection_path)
        return cls(_nest(segments, documents))

    def path_looks_like_collection(self, path: str) -> bool:
        return is_collection_path(path)

    @handle_store_exceptions("sample")
    @log_function_call
    def sample(self, path: str, mode: str, limit: int) -> List[StoreDocument]:
        segments = split_path(path)
        is_collection = len(segments) % 2 == 1

        if mode == MODE_COLLECTION:
            if not is_collection:
                return []
            docs = self._collection(segments)
            return [
                self._document(segments + [doc_id], data)
                for doc_id, data in list(docs.items())[:limit]
            ]

        if is_collection or not segments:
            return []
        data = self._collection(segments[:-1]).get(segments[-1])
        if data is None:
            return []
        return [self._document(segments, data)]

    def _collection(self, segments: List[str]) -> Mapping[str, Any]:
        level: Mapping[str, Any] = self._tree
        for i in range(0, len(segments), 2):
            collection = level.get(segments[i]) or {}
            if i + 1 >= len(segments):
                return collection
            document = collection.get(segments[i + 1])
            if document is None:
                return {}
            level = document.get(SUBCOLLECTIONS_KEY) or {}
        return {}

    @staticmethod
    def _document(segments: List[str], data: Mapping[str, Any]) -> StoreDocument:
        return StoreDocument(
            id=segments[-1],
            data={k: v for k, v in data.items() if k != SUBCOLLECTIONS_KEY},
            path=join_path(segments),
        )


def _validate_collections(tree: Mapping[str, Any], prefix: str) -> None:
    """Reject trees whose collections or documents are not mappings."""
    for name, documents in tree.items():
        where = f"{prefix}{name}"
        if not isinstance(documents, Mapping):
            raise DataFormatError(f'Collection "{where}" must map document ids to documents')
        for doc_id, data in documents.items():
            if not isinstance(data, Mapping):
                raise DataFormatError(f'Document "{where}/{doc_id}" must be a mapping')
            nested = data.get(SUBCOLLECTIONS_KEY)
            if nested is not None:
                if not isinstance(nested, Mapping):
                    raise DataFormatError(
                        f'"{SUBCOLLECTIONS_KEY}" of "{where}/{doc_id}" must be a mapping'
                    )
                _validate_collections(nested, f"{where}/{doc_id}/")


def _nest(segments: List[str], documents: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap ``documents`` so they sit at the collection path ``segments``."""
    tree: Dict[str, Any] = {segments[-1]: documents}
    for i in range(len(segments) - 3, -1, -2):
        tree = {segments[i]: {segments[i + 1]: {SUBCOLLECTIONS_KEY: tree}}}
    return tree


__all__ = [
    "StoreDocument",
    "DocumentStore",
    "LocalDocumentStore",
    "split_path",
    "is_collection_path",
    "join_path",
]
