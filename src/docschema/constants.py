#!/usr/bin/env python3
"""Constants for docschema operations.

This module centralizes default values, limits, and patterns used throughout
the docschema codebase.
"""
from __future__ import annotations

# ──────────────────────────────────────────────────────────────────────────────
# Sampling
# ──────────────────────────────────────────────────────────────────────────────

# Default number of documents to sample from a collection
DEFAULT_SAMPLE_COUNT = 50

# Hard cap on the number of sampled documents per request
MAX_SAMPLE_COUNT = 500

# Smallest accepted sample
MIN_SAMPLE_COUNT = 1

# Inference modes accepted at the request boundary
MODE_AUTO = "auto"
MODE_COLLECTION = "collection"
MODE_DOCUMENT = "document"
INFERENCE_MODES = (MODE_AUTO, MODE_COLLECTION, MODE_DOCUMENT)

# ──────────────────────────────────────────────────────────────────────────────
# Document Store
# ──────────────────────────────────────────────────────────────────────────────

# Path separator for collection/document paths (users/{id}/orders)
PATH_SEPARATOR = "/"

# Key holding nested subcollections in local export files
SUBCOLLECTIONS_KEY = "__collections__"

# Key under which the document id is merged into the example payload
EXAMPLE_ID_KEY = "id"

# ──────────────────────────────────────────────────────────────────────────────
# Rendering
# ──────────────────────────────────────────────────────────────────────────────

# Default indentation for nested declarations
DEFAULT_INDENT_SIZE = 2

# Field names that can be emitted as bare keys
IDENTIFIER_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

# Type-name suffixes derived from the inference mode
DOCUMENT_TYPE_SUFFIX = "Document"
COLLECTION_TYPE_SUFFIX = "CollectionDocument"
FALLBACK_TYPE_PREFIX = "Inferred"

# Target type names for store-native leaf kinds
TIMESTAMP_TYPE_NAME = "FirebaseFirestore.Timestamp"
GEOPOINT_TYPE_NAME = "FirebaseFirestore.GeoPoint"
REFERENCE_TYPE_NAME = "FirebaseFirestore.DocumentReference"
BYTES_TYPE_NAME = "Uint8Array"
EMPTY_ARRAY_TYPE_NAME = "any[]"

# ──────────────────────────────────────────────────────────────────────────────
# Output and Formatting
# ──────────────────────────────────────────────────────────────────────────────

# Default output directory for generated files
DEFAULT_OUTPUT_DIR = "output"

# File extensions per output format
OUTPUT_EXTENSIONS = {
    "typescript": "ts",
    "summary": "json",
    "json": "json",
}

# ──────────────────────────────────────────────────────────────────────────────
# Supported Formats and Extensions
# ──────────────────────────────────────────────────────────────────────────────

# Extensions read as YAML exports
YAML_EXTENSIONS = {".yml", ".yaml"}

# ──────────────────────────────────────────────────────────────────────────────
# Logging and Debugging
# ──────────────────────────────────────────────────────────────────────────────

# Default log level
DEFAULT_LOG_LEVEL = "WARNING"

# Maximum log file size in MB
MAX_LOG_FILE_SIZE = 50

# Number of log files to keep in rotation
LOG_FILE_BACKUP_COUNT = 5

# Log format string
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ──────────────────────────────────────────────────────────────────────────────
# Export all constants
# ──────────────────────────────────────────────────────────────────────────────

__all__ = [
    # Sampling
    "DEFAULT_SAMPLE_COUNT",
    "MAX_SAMPLE_COUNT",
    "MIN_SAMPLE_COUNT",
    "MODE_AUTO",
    "MODE_COLLECTION",
    "MODE_DOCUMENT",
    "INFERENCE_MODES",
    # Document Store
    "PATH_SEPARATOR",
    "SUBCOLLECTIONS_KEY",
    "EXAMPLE_ID_KEY",
    # Rendering
    "DEFAULT_INDENT_SIZE",
    "IDENTIFIER_PATTERN",
    "DOCUMENT_TYPE_SUFFIX",
    "COLLECTION_TYPE_SUFFIX",
    "FALLBACK_TYPE_PREFIX",
    "TIMESTAMP_TYPE_NAME",
    "GEOPOINT_TYPE_NAME",
    "REFERENCE_TYPE_NAME",
    "BYTES_TYPE_NAME",
    "EMPTY_ARRAY_TYPE_NAME",
    # Output and Formatting
    "DEFAULT_OUTPUT_DIR",
    "OUTPUT_EXTENSIONS",
    # Supported Formats and Extensions
    "YAML_EXTENSIONS",
    # Logging and Debugging
    "DEFAULT_LOG_LEVEL",
    "MAX_LOG_FILE_SIZE",
    "LOG_FILE_BACKUP_COUNT",
    "DEFAULT_LOG_FORMAT",
]
