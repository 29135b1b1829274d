"""Reader for server-sent event streams of JSON chunks."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any, BinaryIO, Callable, Generic, TypeVar

T = TypeVar("T")

DEFAULT_EMPTY_MESSAGES_LIMIT = 300

_HEADER_DATA = b"data: "
_ERROR_PREFIX = b'data: {"error":'
_DONE = b"[DONE]"


class TooManyEmptyStreamMessagesError(Exception):
    """The stream sent more non-data lines in a row than allowed."""

    def __init__(self) -> None:
        super().__init__("stream has sent too many empty messages")


class StreamAPIError(Exception):
    """An error object sent by the server in place of stream data."""

    def __init__(
        self,
        message: str = "",
        type: str = "",
        param: Any = None,
        code: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = type
        self.param = param
        self.code = code

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StreamAPIError:
        return cls(
            message=data.get("message") or "",
            type=data.get("type") or "",
            param=data.get("param"),
            code=data.get("code"),
        )


class StreamReader(Generic[T]):
    """Reads ``data:`` lines from a binary stream and decodes them as JSON.

    ``recv`` raises :class:`EOFError` when the stream ends or sends
    ``[DONE]``. Non-data lines are collected; if the stream ends after
    them and they form an error object, :class:`StreamAPIError` is raised.
    """

    def __init__(
        self,
        source: BinaryIO,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
        parse: Callable[[Any], T] | None = None,
    ) -> None:
        self._source = source
        self._empty_messages_limit = empty_messages_limit
        self._parse = parse
        self._errors = bytearray()
        self._finished = False

    def recv(self) -> T:
        """Return the next decoded chunk."""
        data = json.loads(self.recv_raw())
        return self._parse(data) if self._parse is not None else data

    def recv_raw(self) -> bytes:
        """Return the payload of the next data line, undecoded."""
        if self._finished:
            raise EOFError("stream finished")
        return self._process_lines()

    def _process_lines(self) -> bytes:
        empty_count = 0
        has_error_prefix = False
        while True:
            raw = self._source.readline()
            if not raw.endswith(b"\n") or has_error_prefix:
                error = self._unmarshal_error()
                if error is not None:
                    raise error
                raise EOFError("end of stream")

            line = raw.strip()
            if line.startswith(_ERROR_PREFIX):
                has_error_prefix = True
            if not line.startswith(_HEADER_DATA) or has_error_prefix:
                if has_error_prefix:
                    line = line[len(_HEADER_DATA):]
                self._errors += line
                empty_count += 1
                if empty_count > self._empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = line[len(_HEADER_DATA):]
            if payload == _DONE:
                self._finished = True
                raise EOFError("stream finished")
            return payload

    def _unmarshal_error(self) -> StreamAPIError | None:
        if not self._errors:
            return None
        try:
            decoded = json.loads(bytes(self._errors))
        except ValueError:
            return None
        if not isinstance(decoded, dict) or not isinstance(decoded.get("error"), dict):
            return None
        return StreamAPIError.from_dict(decoded["error"])

    def close(self) -> None:
        """Close the underlying stream."""
        self._source.close()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()