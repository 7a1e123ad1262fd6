"""Exceptions raised by the dependency tree walker."""

from typing import Optional


class DeptreeError(Exception):
    """Base class for all walker errors."""


class InvalidArgument(DeptreeError, ValueError):
    """A required entry-point argument is missing or unusable."""


class UnreadableFile(DeptreeError):
    """A file could not be read during expansion."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read: {path} ({reason})")
        self.path = path
        self.reason = reason


class ExtractionFailure(DeptreeError):
    """Specifiers could not be extracted from readable content."""

    def __init__(self, reason: str, path: Optional[str] = None):
        where = f"{path} " if path else ""
        super().__init__(f"cannot extract dependencies: {where}({reason})")
        self.path = path
        self.reason = reason


class AliasConfigError(DeptreeError):
    """An alias configuration file could not be loaded."""
