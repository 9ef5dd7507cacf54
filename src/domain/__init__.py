"""Domain layer: errors, constants and schemas."""

from .errors import ErrorCodes, OplogStateError, StateIOError, StateParseError
from .schemas import OplogRecord

__all__ = [
    "ErrorCodes",
    "OplogStateError",
    "StateIOError",
    "StateParseError",
    "OplogRecord",
]
