"""Request pipeline: exception capture, sanitization and validation around every handler."""

from taskforge.application.pipeline.context import (
    InvalidStateTransition,
    RequestContext,
    RequestState,
)
from taskforge.application.pipeline.exception_capture import ExceptionCaptureBehavior
from taskforge.application.pipeline.pipeline import (
    Behavior,
    Handler,
    NoHandlerRegistered,
    RequestPipeline,
    default_behaviors,
)
from taskforge.application.pipeline.sanitization import (
    SanitizationBehavior,
    SanitizationPolicy,
    Sanitizer,
    SkipSanitization,
    sanitize_string,
)
from taskforge.application.pipeline.validation import ValidationBehavior

__all__ = [
    "Behavior",
    "ExceptionCaptureBehavior",
    "Handler",
    "InvalidStateTransition",
    "NoHandlerRegistered",
    "RequestContext",
    "RequestPipeline",
    "RequestState",
    "SanitizationBehavior",
    "SanitizationPolicy",
    "Sanitizer",
    "SkipSanitization",
    "ValidationBehavior",
    "default_behaviors",
    "sanitize_string",
]
