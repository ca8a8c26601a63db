"""
Typed errors for the generation layer.

Agents raise a ``GenerationError`` subclass, chained to the original exception.
``GenerationClient`` converts it into an ``Err`` result carrying ``ErrorInfo``,
which is what the view stores and the UI displays.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    PROVIDER = "provider"
    PARSE = "parse"


class ErrorInfo(BaseModel):
    """Serializable description of a failure. ``message`` is safe to show to users."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    detail: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)


class GenerationError(Exception):
    kind: ErrorKind = ErrorKind.PROVIDER

    def __init__(self, message: str, detail: Optional[str] = None, **context: Any):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.context = context

    def to_info(self) -> ErrorInfo:
        return ErrorInfo(kind=self.kind, message=self.message, detail=self.detail, context=self.context)


class InputValidationError(GenerationError):
    kind = ErrorKind.VALIDATION


class ProviderError(GenerationError):
    kind = ErrorKind.PROVIDER


class ParseError(GenerationError):
    kind = ErrorKind.PARSE
