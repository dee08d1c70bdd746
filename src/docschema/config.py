from dataclasses import dataclass

from .constants import (
    DEFAULT_INDENT_SIZE,
    DEFAULT_SAMPLE_COUNT,
    MAX_SAMPLE_COUNT,
    MIN_SAMPLE_COUNT,
)


@dataclass(frozen=True)
class Config:
    infer_datetimes: bool = False  # ISO-looking strings stay "string" unless enabled
    default_sample_count: int = DEFAULT_SAMPLE_COUNT
    max_sample_count: int = MAX_SAMPLE_COUNT
    indent_size: int = DEFAULT_INDENT_SIZE
    color_enabled: bool = True

    def clamp_sample_count(self, requested) -> int:
        """Coerce a requested sample count into 1..max_sample_count."""
        if requested is None or requested == "":
            return self.default_sample_count
        try:
            count = int(requested)
        except (TypeError, ValueError):
            return self.default_sample_count
        return max(MIN_SAMPLE_COUNT, min(count, self.max_sample_count))

    # derived ANSI codes (empty strings if color disabled)
    def colors(self):
        if not self.color_enabled:
            return "", "", "", ""
        return "\033[91m", "\033[92m", "\033[96m", "\033[0m"
