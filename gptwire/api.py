"""Description of a single REST call: method, path, query, body and how to read the reply."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar
from urllib.parse import urlencode

T = TypeVar("T")

_BETA_HEADER = "OpenAI-Beta"
_JSON_CONTENT_TYPE = "application/json"


class HttpMethod(str, Enum):
    """HTTP verbs used by the API."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Pagination:
    """Cursor options shared by the list endpoints."""

    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def to_query(self) -> list[tuple[str, str]]:
        """Query pairs for the options that are set."""
        pairs: list[tuple[str, str]] = []
        if self.limit is not None:
            pairs.append(("limit", str(int(self.limit))))
        for name in ("order", "after", "before"):
            value = getattr(self, name)
            if value is not None:
                pairs.append((name, value))
        return pairs


@dataclass(frozen=True)
class ApiCall(Generic[T]):
    """A request to send and the function that turns its JSON reply into a result."""

    method: HttpMethod
    path: str
    query: tuple[tuple[str, str], ...] = ()
    body: Any = None
    beta_assistants: bool = False
    parse: Callable[[Any], T] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod(self.method))
        object.__setattr__(self, "query", tuple(tuple(pair) for pair in self.query))

    def url(self, base_url: str) -> str:
        """The full URL below ``base_url``; query keys are sorted."""
        full = base_url.rstrip("/") + self.path
        if self.query:
            full += "?" + urlencode(sorted(self.query, key=lambda pair: pair[0]))
        return full

    def headers(self, assistant_version: str) -> dict[str, str]:
        """Headers this call needs beyond authentication."""
        out: dict[str, str] = {}
        if self.body is not None:
            out["Content-Type"] = _JSON_CONTENT_TYPE
        if self.beta_assistants:
            out[_BETA_HEADER] = f"assistants={assistant_version}"
        return out