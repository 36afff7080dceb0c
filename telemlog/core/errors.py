"""Error kinds raised inside the pipeline.

All of them are recovered by `telemlog.core.classifier.handle_message`, which
turns them into INVALID_LOG envelopes.
"""
from typing import Any


class TelemlogError(Exception):
    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.detail = detail if detail is not None else message


class TransportDecodeError(TelemlogError):
    """Raw message is not decodable into an envelope with a `log` string."""


class SchemaValidationError(TelemlogError):
    """Object failed validation against a named schema."""

    def __init__(self, schema: str, errors: list):
        super().__init__(f"{schema} validation failed", detail=errors)
        self.schema = schema
        self.errors = errors


class UnsupportedLevel(TelemlogError):
    def __init__(self, level: Any):
        super().__init__("unsupported log level")
        self.level = level


class UnsupportedCommand(TelemlogError):
    def __init__(self, command: Any):
        super().__init__(f"Not support request command: {command}")
        self.command = command
