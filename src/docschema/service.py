#!/usr/bin/env python3
"""
Schema inference service.

``SchemaService`` is the request boundary: it validates a
``SchemaRequest``, resolves the effective inference mode from the path,
samples documents from its ``DocumentStore``, aggregates them and renders
the result.

Mode resolution
---------------
- ``collection`` / ``document``: the path parity must agree (odd segment
  count for collections, even for documents), otherwise ``InvalidPathError``.
- ``auto``: parity picks the first mode to try; when it finds no data the
  other mode is tried before giving up with ``NoDataError``.

``handle`` maps a raw JSON payload to ``(status, body)`` for HTTP callers.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .aggregate import infer_collection_schema, infer_document_schema
from .classify import ValueClassifier
from .config import Config
from .constants import DEFAULT_SAMPLE_COUNT, MODE_AUTO, MODE_COLLECTION, MODE_DOCUMENT
from .exceptions import (
    DocSchemaError,
    InvalidPathError,
    NoDataError,
    StoreError,
    wrap_exception,
)
from .logging_config import get_logger, log_performance
from .models import AnySchemaNode, InferenceResult, InferenceStats
from .render import derive_type_name, to_summary, to_type_alias
from .store import DocumentStore, StoreDocument, split_path

logger = get_logger(__name__)

_DEFAULT_CONFIG = Config()

NO_DATA_MESSAGE = "No data found for the provided path. Ensure the collection/document exists."


class SchemaRequest(BaseModel):
    """Inference request as received from a caller (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    target_path: str = ""
    mode: Literal["auto", "collection", "document"] = MODE_AUTO
    sample_count: int = DEFAULT_SAMPLE_COUNT

    @field_validator("target_path", mode="before")
    @classmethod
    def _strip_path(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("mode", mode="before")
    @classmethod
    def _default_mode(cls, v: Any) -> Any:
        if v is None or v == "":
            return MODE_AUTO
        return v.lower() if isinstance(v, str) else v

    @field_validator("sample_count", mode="before")
    @classmethod
    def _clamp_sample_count(cls, v: Any) -> int:
        return _DEFAULT_CONFIG.clamp_sample_count(v)


class SchemaResponse(BaseModel):
    """Everything one inference produced, ready to serialize."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    target_path: str
    mode: str
    effective_mode: str
    type_name: str
    schema_node: AnySchemaNode = Field(alias="schema")
    summary: Dict[str, Any]
    declaration: str
    example: Optional[Dict[str, Any]] = None
    stats: InferenceStats


class SchemaService:
    """Run schema inference against a document store."""

    def __init__(self, store: DocumentStore, cfg: Optional[Config] = None):
        self.store = store
        self.cfg = cfg or _DEFAULT_CONFIG
        self.classifier = ValueClassifier(getattr(store, "value_detector", None), self.cfg)

    @log_performance
    def infer(self, request: SchemaRequest) -> SchemaResponse:
        """
        Infer, render and package the schema for ``request``.

        Raises
        ------
        InvalidPathError
            Empty path, or an explicit mode that contradicts path parity.
        NoDataError
            Nothing found in any mode tried.
        StoreError
            The store failed while sampling.
        """
        path = request.target_path
        if not split_path(path):
            raise InvalidPathError("targetPath is required")

        modes = self._resolve_modes(path, request.mode)
        limit = self.cfg.clamp_sample_count(request.sample_count)
        result, effective_mode = self._infer_first(path, modes, limit)

        type_name = derive_type_name(path, effective_mode)
        return SchemaResponse(
            target_path=path,
            mode=request.mode,
            effective_mode=effective_mode,
            type_name=type_name,
            schema_node=result.schema_node,
            summary=to_summary(result.schema_node),
            declaration=to_type_alias(type_name, result.schema_node, self.cfg.indent_size),
            example=result.example,
            stats=result.stats,
        )

    def handle(self, payload: Any) -> Tuple[int, Dict[str, Any]]:
        """Serve one raw JSON request; returns ``(status, body)``."""
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            return 400, _error_body("Request body must be a JSON object")
        try:
            request = SchemaRequest.model_validate(dict(payload))
        except ValidationError as e:
            return 400, _error_body(_validation_message(e))

        try:
            response = self.infer(request)
        except InvalidPathError as e:
            return 400, _error_body(e.message)
        except NoDataError as e:
            return 404, _error_body(e.message)
        except StoreError as e:
            logger.error("Store failure for %s: %s", request.target_path, e)
            return 502, _error_body(e.message)
        except DocSchemaError as e:
            logger.error("Inference failed for %s: %s", request.target_path, e)
            return 500, _error_body(e.message)

        return 200, {"success": True, "data": response.model_dump(mode="json", by_alias=True)}

    def _resolve_modes(self, path: str, mode: str) -> List[str]:
        looks_like_collection = self.store.path_looks_like_collection(path)

        if mode == MODE_COLLECTION and not looks_like_collection:
            raise InvalidPathError(
                f'Path "{path}" looks like a document path. A collection path must have '
                "an odd number of segments (e.g., users or users/{userId}/orders).",
                path=path,
                mode=mode,
            )
        if mode == MODE_DOCUMENT and looks_like_collection:
            raise InvalidPathError(
                f'Path "{path}" looks like a collection path. A document path must have '
                "an even number of segments (e.g., users/{userId}).",
                path=path,
                mode=mode,
            )

        if mode != MODE_AUTO:
            return [mode]
        if looks_like_collection:
            return [MODE_COLLECTION, MODE_DOCUMENT]
        return [MODE_DOCUMENT, MODE_COLLECTION]

    def _infer_first(
        self, path: str, modes: List[str], limit: int
    ) -> Tuple[InferenceResult, str]:
        for mode in modes:
            documents = self._sample(path, mode, limit)
            try:
                if mode == MODE_COLLECTION:
                    result = infer_collection_schema(documents, self.classifier)
                else:
                    first = documents[0] if documents else None
                    result = infer_document_schema(first, self.classifier)
                return result, mode
            except NoDataError:
                logger.info("No data for %s in %s mode", path, mode)

        raise NoDataError(NO_DATA_MESSAGE, path=path, mode=modes[0])

    def _sample(self, path: str, mode: str, limit: int) -> List[StoreDocument]:
        try:
            return list(self.store.sample(path, mode, limit))
        except DocSchemaError:
            raise
        except Exception as e:
            raise wrap_exception(
                e,
                message=str(e) or type(e).__name__,
                exception_class=StoreError,
                path=path,
                operation="sample",
            ) from e


def _error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def _validation_message(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


__all__ = ["SchemaRequest", "SchemaResponse", "SchemaService", "NO_DATA_MESSAGE"]
