#!/usr/bin/env python3
"""Command-line interface for docschema.

Each subcommand lives in its own module and registers itself on the main
parser; ``main`` dispatches to the handler stored in ``args.func``.
"""
from __future__ import annotations

import sys
from typing import List, Optional

from ..exceptions import DocSchemaError
from .colors import error_text, warning_text
from .infer import cmd_infer


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the docschema CLI."""
    import argparse
    import warnings

    from ..cli_config import add_config_subcommands
    from ..helpfmt import ColorDefaultsFormatter
    from .infer import add_infer_subcommand

    # Suppress Google Cloud SDK authentication warnings
    # These are informational warnings about quota projects that don't affect functionality
    warnings.filterwarnings(
        "ignore",
        message="Your application has authenticated using end user credentials.*",
        category=UserWarning,
        module="google.auth._default",
    )

    parser = argparse.ArgumentParser(
        prog="docschema",
        description="Infer structural schemas and TypeScript declarations from document stores",
        formatter_class=ColorDefaultsFormatter,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        metavar="{infer,config-show,config-init}",
    )

    add_infer_subcommand(subparsers)
    add_config_subcommands(subparsers)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args) or 0
    except KeyboardInterrupt:
        print(warning_text("\n⚠️ Operation cancelled by user"), file=sys.stderr)
        return 130
    except DocSchemaError as e:
        print(error_text(f"❌ Error: {e}"), file=sys.stderr)
        return 1
    except Exception as e:
        print(error_text(f"❌ Unexpected error: {e}"), file=sys.stderr)
        return 1


__all__ = ["main", "cmd_infer"]
