# vex_fixer/errors.py
from typing import Optional


class VexFixError(Exception):
    """Base class for every error raised while fixing a VEX document."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(message)

    def with_path(self, path: str) -> "VexFixError":
        # Keep the first path we were tagged with
        if self.path is None:
            self.path = path
        return self

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class FileReadError(VexFixError):
    """The input file could not be read."""


class DocumentDecodeError(VexFixError):
    """The input bytes are not a VEX JSON document."""


class TimestampFormatError(VexFixError):
    """A timestamp does not match 'YYYY-MM-DD HH:MM:SS.ffffff'."""

    def __init__(self, value, field: Optional[str] = None, statement_index: Optional[int] = None, path: Optional[str] = None):
        self.value = value
        self.field = field
        self.statement_index = statement_index
        super().__init__(self._build_message(), path)

    def _build_message(self) -> str:
        base = f"invalid timestamp {self.value!r}, expected 'YYYY-MM-DD HH:MM:SS.ffffff'"
        if self.field is None:
            return base
        if self.statement_index is None:
            return f"error formatting document '{self.field}': {base}"
        return f"error formatting '{self.field}' in statement {self.statement_index}: {base}"

    def locate(self, field: str, statement_index: Optional[int] = None) -> "TimestampFormatError":
        """Records which field of the document failed and rebuilds the message."""
        self.field = field
        self.statement_index = statement_index
        self.message = self._build_message()
        self.args = (self.message,)
        return self


class DocumentEncodeError(VexFixError):
    """The transformed document could not be serialized."""


class FileWriteError(VexFixError):
    """The output file could not be written."""


class DirectoryTraversalError(VexFixError):
    """A directory could not be read during a recursive scan. Never fatal."""


class ConfigError(VexFixError):
    """The configuration file is invalid."""
