"""Firestore client utilities and document store for docschema.

This module provides Firestore client creation and a ``DocumentStore``
implementation that samples collections and reads single documents.
``google-cloud-firestore`` is imported lazily so the rest of the package
works without it.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .classify import ValueDetector
from .constants import MODE_COLLECTION
from .exceptions import DependencyError, StoreError, handle_store_exceptions
from .logging_config import get_logger, log_function_call
from .store import StoreDocument, is_collection_path, join_path, split_path

logger = get_logger(__name__)


def _import_firestore():
    try:
        from google.cloud import firestore  # type: ignore[import]
    except ImportError as e:
        raise DependencyError(
            "Firestore functionality requires google-cloud-firestore. "
            "Install with: pip install google-cloud-firestore",
            dependency_name="google-cloud-firestore",
            cause=e,
        ) from e
    return firestore


def get_firestore_client(project: Optional[str] = None, database: Optional[str] = None):
    """Get a Firestore client with optional project and database overrides.

    Parameters
    ----------
    project : str, optional
        Project ID. If None, uses the default from environment or credentials.
    database : str, optional
        Database ID. If None, the ``(default)`` database is used.

    Returns
    -------
    google.cloud.firestore.Client
        Configured Firestore client

    Raises
    ------
    DependencyError
        If google-cloud-firestore is not installed
    StoreError
        If client creation fails for any other reason
    """
    firestore = _import_firestore()

    kwargs = {}
    if project:
        kwargs["project"] = project
    if database:
        kwargs["database"] = database
    try:
        return firestore.Client(**kwargs)
    except Exception as e:
        raise StoreError(
            f"Failed to create Firestore client: {e}",
            operation="client_init",
            cause=e,
        ) from e


def firestore_value_detector() -> ValueDetector:
    """Build a detector for Firestore's native value types.

    Timestamps arrive as ``DatetimeWithNanoseconds`` (a ``datetime``
    subclass), so the default timestamp test already covers them.
    """
    firestore = _import_firestore()
    geo_point = firestore.GeoPoint
    document_reference = firestore.DocumentReference

    def is_geopoint(value: Any) -> bool:
        return isinstance(value, geo_point)

    def is_reference(value: Any) -> bool:
        return isinstance(value, document_reference)

    def reference_path(value: Any) -> Optional[str]:
        return getattr(value, "path", None)

    return ValueDetector(
        is_geopoint=is_geopoint,
        is_reference=is_reference,
        reference_path=reference_path,
    )


class FirestoreDocumentStore:
    """Document store reading from Cloud Firestore."""

    def __init__(
        self,
        client=None,
        project: Optional[str] = None,
        database: Optional[str] = None,
        value_detector: Optional[ValueDetector] = None,
    ):
        self._client = client if client is not None else get_firestore_client(project, database)
        self.value_detector = value_detector or firestore_value_detector()

    def path_looks_like_collection(self, path: str) -> bool:
        return is_collection_path(path)

    @handle_store_exceptions("sample")
    @log_function_call
    def sample(self, path: str, mode: str, limit: int) -> List[StoreDocument]:
        segments = split_path(path)
        clean = join_path(segments)
        is_collection = len(segments) % 2 == 1

        if mode == MODE_COLLECTION:
            if not is_collection:
                logger.debug("Skipping collection sample of document path %s", clean)
                return []
            snapshots = self._client.collection(clean).limit(limit).stream()
            return [self._to_document(s) for s in snapshots]

        if is_collection or not segments:
            logger.debug("Skipping document read of collection path %s", clean)
            return []
        snapshot = self._client.document(clean).get()
        if not snapshot.exists:
            return []
        return [self._to_document(snapshot)]

    @staticmethod
    def _to_document(snapshot) -> StoreDocument:
        return StoreDocument(
            id=snapshot.id,
            data=snapshot.to_dict() or {},
            path=snapshot.reference.path,
        )


__all__ = [
    "get_firestore_client",
    "firestore_value_detector",
    "FirestoreDocumentStore",
]
