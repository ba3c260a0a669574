"""Operational failures raised at the edges of prcheck."""

from __future__ import annotations


class PrCheckError(RuntimeError):
    """Base class for failures that stop a run before a verdict exists."""


class TemplateFetchError(PrCheckError):
    """The template lookup failed for a reason other than "not found"."""

    def __init__(self, message: str, *, path: str = "", status: int | None = None):
        super().__init__(message)
        self.path = path
        self.status = status


class SettingsError(PrCheckError, ValueError):
    """A configured value is outside its accepted range or shape."""

    def __init__(self, key: str, message: str):
        super().__init__(f'"{key}" {message}')
        self.key = key


class InputReadError(PrCheckError):
    """A local input file could not be read as UTF-8 text."""

    def __init__(self, path: str, reason: object):
        super().__init__(f"unable to read {path}: {reason}")
        self.path = path
