"""Errors raised by json2struct transforms."""

from __future__ import annotations


class TransformError(ValueError):
    """Base class for every error a transform can raise."""


class InvalidStructName(TransformError):
    """The requested root type name is not a valid identifier."""

    def __init__(self, name: str):
        super().__init__(f"invalid struct name: {name!r}")
        self.name = name


class InvalidJSON(TransformError):
    """The input text could not be decoded as JSON.

    The decoder error is kept on ``decode_error`` and chained as the cause.
    """

    def __init__(self, decode_error: Exception):
        super().__init__(f"invalid json: {decode_error}")
        self.decode_error = decode_error


class ConfigError(TransformError):
    """A configuration value is out of range."""
