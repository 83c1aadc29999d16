"""In-place HTML escaping of request string fields.

Fields that must reach the handler verbatim (passwords, tokens) are listed in
a ``SanitizationPolicy`` instead of being escaped. Escaping is not idempotent:
sanitizing ``&lt;`` again yields ``&amp;lt;``.
"""

from __future__ import annotations

import dataclasses
import unicodedata
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from taskforge.application.pipeline.context import RequestContext, RequestState

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

_KEPT_CONTROLS = frozenset("\t\n\r")


def sanitize_string(value: str | None) -> str | None:
    """HTML-escape ``value`` and drop control characters other than tab/newline/CR."""
    if not value:
        return value
    stripped = "".join(
        ch for ch in value if ch in _KEPT_CONTROLS or unicodedata.category(ch) != "Cc"
    )
    return stripped.translate(_HTML_ESCAPES)


@dataclass(frozen=True)
class SkipSanitization:
    """Exempts one field from sanitization; ``reason`` is kept for auditing."""

    field: str
    reason: str


class SanitizationPolicy:
    """Per-type list of fields that must not be sanitized."""

    def __init__(self, exemptions: Mapping[type, Iterable[SkipSanitization]] | None = None) -> None:
        self._exemptions: dict[type, tuple[SkipSanitization, ...]] = {}
        for request_type, skips in (exemptions or {}).items():
            self.exempt(request_type, *skips)

    def exempt(self, request_type: type, *skips: SkipSanitization) -> None:
        for skip in skips:
            if not skip.reason.strip():
                raise ValueError(f"Exemption of {request_type.__name__}.{skip.field} needs a reason")
        self._exemptions[request_type] = self._exemptions.get(request_type, ()) + skips

    def exempt_fields(self, request_type: type) -> frozenset[str]:
        return frozenset(skip.field for skip in self._exemptions.get(request_type, ()))


class Sanitizer:
    """Walks a request dataclass and escapes its string fields in place."""

    def __init__(self, policy: SanitizationPolicy | None = None) -> None:
        self._policy = policy or SanitizationPolicy()

    @property
    def policy(self) -> SanitizationPolicy:
        return self._policy

    def sanitize(self, obj: Any) -> None:
        self._walk(obj, seen=set())

    def _walk(self, obj: Any, seen: set[int]) -> None:
        if obj is None or not dataclasses.is_dataclass(obj) or isinstance(obj, type):
            return
        if id(obj) in seen:
            return
        seen.add(id(obj))

        exempt = self._policy.exempt_fields(type(obj))
        for field in dataclasses.fields(obj):
            if field.name in exempt:
                continue
            value = getattr(obj, field.name)
            if isinstance(value, str):
                cleaned = sanitize_string(value)
                if cleaned != value:
                    # frozen dataclasses are request values too
                    object.__setattr__(obj, field.name, cleaned)
            elif isinstance(value, (list, tuple)):
                for item in value:
                    self._walk(item, seen)
            else:
                self._walk(value, seen)


class SanitizationBehavior:
    """Escapes request strings before validators see them."""

    def __init__(self, sanitizer: Sanitizer) -> None:
        self._sanitizer = sanitizer

    async def handle(self, context: RequestContext, call_next):
        context.token.raise_if_cancelled()
        context.advance(RequestState.SANITIZING)
        self._sanitizer.sanitize(context.request)
        context.token.raise_if_cancelled()
        return await call_next(context)
