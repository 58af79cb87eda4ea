from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_DIMENSION = 10000
DEFAULT_MAX_COUNT = 10000


@dataclass(frozen=True)
class CodecSettings:
    """Limits applied to header values before any body parsing happens."""

    max_dimension: int = DEFAULT_MAX_DIMENSION
    max_count: int = DEFAULT_MAX_COUNT

    def validate(self) -> None:
        if self.max_dimension <= 0:
            raise ValueError("max_dimension must be greater than zero")
        if self.max_count <= 0:
            raise ValueError("max_count must be greater than zero")


DEFAULT_SETTINGS = CodecSettings()
