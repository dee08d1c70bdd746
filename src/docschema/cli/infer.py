#!/usr/bin/env python3
"""Infer command implementation for the docschema CLI.

Samples documents from a local export, a records file or Firestore and prints
the inferred schema as a TypeScript declaration, a display summary or the
full JSON response.
"""
from __future__ import annotations

import json
import sys

from ..cli_config import DocSchemaSettings
from ..constants import INFERENCE_MODES, OUTPUT_EXTENSIONS
from ..exceptions import ArgumentError
from ..firestore_store import FirestoreDocumentStore
from ..logging_config import get_logger, setup_logging
from ..output_utils import output_filename, print_output_success, write_output_file
from ..service import SchemaRequest, SchemaResponse, SchemaService
from ..store import DocumentStore, LocalDocumentStore, is_collection_path

logger = get_logger(__name__)


def add_infer_subcommand(subparsers) -> None:
    """Add infer subcommand to the parser."""
    from ..helpfmt import ColorDefaultsFormatter

    infer_parser = subparsers.add_parser(
        "infer",
        help="Infer a schema from sampled documents",
        description=(
            "Infer a structural schema for a collection or document path.\n"
            "Collection paths have an odd number of segments (users, users/u1/orders),\n"
            "document paths an even number (users/u1)."
        ),
        formatter_class=ColorDefaultsFormatter,
    )

    infer_parser.add_argument("path", help="Collection or document path")

    # Inference options
    infer_parser.add_argument(
        "--mode",
        choices=INFERENCE_MODES,
        default=None,
        help="Inference mode (default: from config, else auto)",
    )
    infer_parser.add_argument(
        "--sample-count",
        type=int,
        default=None,
        help="Documents to sample in collection mode (clamped to 1..500)",
    )
    infer_parser.add_argument(
        "--infer-datetimes",
        action="store_true",
        help="Treat ISO-8601 strings as timestamps",
    )

    # Source options
    source = infer_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--export", metavar="FILE", help="Read documents from a JSON/YAML export tree"
    )
    source.add_argument(
        "--records",
        metavar="FILE",
        help="Read a JSON/NDJSON records file as the documents of PATH",
    )
    infer_parser.add_argument("--project", help="Firestore project (default: from config)")
    infer_parser.add_argument("--database", help="Firestore database (default: from config)")
    infer_parser.add_argument(
        "--config", metavar="PATH", help="Path to config file (default: auto-discover)"
    )

    # Output options
    infer_parser.add_argument(
        "--format",
        choices=sorted(OUTPUT_EXTENSIONS),
        default="typescript",
        help="Rendering to print",
    )
    infer_parser.add_argument(
        "--output", action="store_true", help="Save the rendering to the output directory"
    )
    infer_parser.add_argument(
        "--output-dir", metavar="DIR", help="Output directory (default: from config)"
    )

    # Logging options
    infer_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: from config)",
    )
    infer_parser.add_argument("--log-file", metavar="FILE", help="Also log to FILE")
    infer_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG"
    )
    infer_parser.set_defaults(func=cmd_infer)


def build_store(args, settings: DocSchemaSettings) -> DocumentStore:
    """Pick the document store the arguments ask for."""
    if args.export:
        return LocalDocumentStore.from_export_file(args.export)
    if args.records:
        if not is_collection_path(args.path):
            raise ArgumentError(
                "--records loads a collection; PATH must have an odd number of segments",
                argument_name="path",
                argument_value=args.path,
            )
        return LocalDocumentStore.from_records_file(args.records, args.path)
    return FirestoreDocumentStore(
        project=args.project or settings.project,
        database=args.database or settings.database,
    )


def render_response(response: SchemaResponse, format_type: str) -> str:
    """Render a response in one of the supported output formats."""
    if format_type == "typescript":
        return response.declaration
    if format_type == "summary":
        return json.dumps(response.summary, indent=2)
    return json.dumps(response.model_dump(mode="json", by_alias=True), indent=2)


def cmd_infer(args) -> int:
    """Execute the infer command."""
    settings = DocSchemaSettings.load(args.config)

    level = "DEBUG" if args.verbose else (args.log_level or settings.log_level)
    setup_logging(
        level=level,
        log_file=args.log_file,
        colored_output=settings.color_enabled(),
        force=True,
    )

    cfg = settings.to_config(infer_datetimes=True if args.infer_datetimes else None)
    service = SchemaService(build_store(args, settings), cfg)

    request = SchemaRequest(
        target_path=args.path,
        mode=args.mode or settings.default_mode,
        sample_count=(
            args.sample_count if args.sample_count is not None else settings.default_sample_count
        ),
    )

    _, _, cyan, reset = cfg.colors()
    print(f"{cyan}🔍 Inferring schema for {request.target_path} ({request.mode}){reset}", file=sys.stderr)
    response = service.infer(request)
    logger.info(
        "Inferred %s from %d document(s) in %s mode",
        response.type_name,
        response.stats.sampled_documents,
        response.effective_mode,
    )

    content = render_response(response, args.format)
    if args.output:
        filename = output_filename(response.target_path, response.effective_mode, args.format)
        output_path = write_output_file(content, filename, args.output_dir or settings.output_dir)
        print_output_success(output_path, "Schema")
    else:
        print(content)
    return 0
