"""
Document aggregation: sampled documents → one inferred schema.

Collection mode folds every sampled document through ``merge_two`` and then
corrects top-level optionality from presence counts. Document mode
classifies a single document as-is.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from .classify import ValueClassifier
from .constants import EXAMPLE_ID_KEY
from .exceptions import NoDataError
from .logging_config import get_logger, log_performance
from .merge import merge_two
from .models import InferenceResult, InferenceStats, SchemaNode
from .presence import apply_presence, count_presence
from .store import StoreDocument

logger = get_logger(__name__)


def _example(document: StoreDocument, classifier: ValueClassifier) -> Dict[str, Any]:
    return {EXAMPLE_ID_KEY: document.id, **classifier.to_plain(document.data)}


@log_performance
def infer_collection_schema(
    documents: Sequence[StoreDocument],
    classifier: Optional[ValueClassifier] = None,
) -> InferenceResult:
    """
    Infer one schema for a sample of top-level collection documents.

    Raises
    ------
    NoDataError
        If ``documents`` is empty.
    """
    if not documents:
        raise NoDataError("No documents were sampled from the collection")
    classifier = classifier or ValueClassifier()

    merged: Optional[SchemaNode] = None
    for document in documents:
        schema = classifier.classify(document.data)
        merged = schema if merged is None else merge_two(merged, schema)

    total = len(documents)
    presence = count_presence(d.data for d in documents)
    merged = apply_presence(merged, presence, total)  # type: ignore[arg-type]
    logger.debug("Merged %d document(s) into %d top-level field(s)", total, len(presence))

    return InferenceResult(
        schema_node=merged,
        stats=InferenceStats(sampled_documents=total),
        example=_example(documents[0], classifier),
    )


@log_performance
def infer_document_schema(
    document: Optional[StoreDocument],
    classifier: Optional[ValueClassifier] = None,
) -> InferenceResult:
    """Infer the schema of a single document; fields are never optional."""
    if document is None:
        raise NoDataError("Document not found")
    classifier = classifier or ValueClassifier()

    return InferenceResult(
        schema_node=classifier.classify(document.data),
        stats=InferenceStats(sampled_documents=1, document_id=document.id),
        example=_example(document, classifier),
    )


__all__ = ["infer_collection_schema", "infer_document_schema"]
