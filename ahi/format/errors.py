from __future__ import annotations

from typing import Optional


class AhiError(Exception):
    """Base error for all AHI/AHF operations."""


class AhiFormatError(AhiError, ValueError):
    """Input text does not follow the file grammar."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        self.detail = message
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MalformedHeader(AhiFormatError):
    pass


class UnsupportedVersion(AhiFormatError):
    def __init__(self, version: int, kind: str = "AHI", line: Optional[int] = 1) -> None:
        self.version = version
        super().__init__(f"unsupported {kind} version: {version}", line)


class RowLengthMismatch(AhiFormatError):
    def __init__(self, expected: int, actual: int, line: Optional[int] = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"pixel row has {actual} characters, expected {expected}", line)


class InvalidPixelChar(AhiFormatError):
    def __init__(self, char: str, column: int, line: Optional[int] = None) -> None:
        self.char = char
        self.column = column
        super().__init__(f"invalid pixel character {char!r} at column {column}", line)


class TruncatedImage(AhiFormatError):
    pass


class MissingSeparator(AhiFormatError):
    pass


class ImageCountMismatch(AhiFormatError):
    def __init__(self, message: str, expected: int, found: int, line: Optional[int] = None) -> None:
        self.expected = expected
        self.found = found
        super().__init__(message, line)


class AhiContractError(AhiError, ValueError):
    """In-memory data handed to an encoder breaks the format's invariants."""


class InvalidPaletteIndex(AhiContractError):
    pass


class InvalidDimensions(AhiContractError):
    pass


class DimensionMismatch(InvalidDimensions):
    pass


class EmptyCollection(AhiContractError):
    pass
