"""Custom argparse help formatter.

This combines:
- ArgumentDefaultsHelpFormatter → automatically appends default values to help text.
- RawTextHelpFormatter → preserves newlines and indentation in help strings.
"""

from __future__ import annotations

import argparse


class ColorDefaultsFormatter(
    argparse.ArgumentDefaultsHelpFormatter,
    argparse.RawTextHelpFormatter,
):
    """Argparse help formatter showing defaults, keeping line breaks and
    coloring section headers.
    """

    def __init__(self, *a, **k):
        k.setdefault("max_help_position", 32)
        k.setdefault("width", 100)
        super().__init__(*a, **k)

    def start_section(self, heading):
        # Only headers are colored; ANSI codes in option columns break alignment
        from .cli.colors import section_header

        if heading:
            heading = section_header(heading)
        return super().start_section(heading)
