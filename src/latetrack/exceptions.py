"""Exceptions raised while loading data and planning a commute."""

from typing import Optional


class LoadError(Exception):
    """A data file could not be loaded."""


class LoadIOError(LoadError):
    """A data file is missing or unreadable."""


class LoadFormatError(LoadError):
    """A data file is not valid JSON, has the wrong shape, or lacks a field."""

    def __init__(
        self,
        message: str,
        entry_index: Optional[int] = None,
        class_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.entry_index = entry_index
        self.class_index = class_index


class ValidationError(ValueError):
    """User input cannot be planned; the flow does not advance."""


class EmptySelectionError(ValidationError):
    pass


class ClassTimeFormatError(ValidationError):
    pass


class LineResolutionError(ValidationError):
    pass


class LoginError(ValueError):
    """Empty CUNY ID or no matching account."""
