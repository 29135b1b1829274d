"""Assistant threads: request and response shapes and their calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gptwire.api import ApiCall, HttpMethod

_THREADS = "/threads"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


class ThreadMessageRole(str, Enum):
    """Who wrote a thread message."""

    ASSISTANT = "assistant"
    USER = "user"


class ChunkingStrategyType(str, Enum):
    """How files are split for a vector store."""

    AUTO = "auto"
    STATIC = "static"


@dataclass
class StaticChunkingStrategy:
    """Fixed-size chunking parameters."""

    max_chunk_size_tokens: int = 0
    chunk_overlap_tokens: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_chunk_size_tokens": self.max_chunk_size_tokens,
            "chunk_overlap_tokens": self.chunk_overlap_tokens,
        }


@dataclass
class ChunkingStrategy:
    """Chunking choice for files added to a vector store."""

    type: ChunkingStrategyType | str = ChunkingStrategyType.AUTO
    static: StaticChunkingStrategy | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": _value(self.type)}
        if self.static is not None:
            out["static"] = self.static.to_dict()
        return out


@dataclass
class VectorStoreToolResources:
    """A vector store to create along with a thread."""

    file_ids: list[str] | None = None
    chunking_strategy: ChunkingStrategy | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.chunking_strategy is not None:
            out["chunking_strategy"] = self.chunking_strategy.to_dict()
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class ToolResources:
    """Files and vector stores available to a thread's tools.

    ``None`` means the tool section is absent; an empty list means it is
    present with no entries.
    """

    code_interpreter_file_ids: list[str] | None = None
    file_search_vector_store_ids: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code_interpreter_file_ids is not None:
            section: dict[str, Any] = {}
            if self.code_interpreter_file_ids:
                section["file_ids"] = list(self.code_interpreter_file_ids)
            out["code_interpreter"] = section
        if self.file_search_vector_store_ids is not None:
            section = {}
            if self.file_search_vector_store_ids:
                section["vector_store_ids"] = list(self.file_search_vector_store_ids)
            out["file_search"] = section
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ToolResources:
        data = data or {}
        code = data.get("code_interpreter")
        search = data.get("file_search")
        return cls(
            code_interpreter_file_ids=(
                None if code is None else list(code.get("file_ids") or [])
            ),
            file_search_vector_store_ids=(
                None if search is None else list(search.get("vector_store_ids") or [])
            ),
        )


@dataclass
class ToolResourcesRequest:
    """Tool resources supplied when creating a thread."""

    code_interpreter_file_ids: list[str] | None = None
    file_search_vector_store_ids: list[str] | None = None
    file_search_vector_stores: list[VectorStoreToolResources] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code_interpreter_file_ids is not None:
            section: dict[str, Any] = {}
            if self.code_interpreter_file_ids:
                section["file_ids"] = list(self.code_interpreter_file_ids)
            out["code_interpreter"] = section
        if (
            self.file_search_vector_store_ids is not None
            or self.file_search_vector_stores is not None
        ):
            section = {}
            if self.file_search_vector_store_ids:
                section["vector_store_ids"] = list(self.file_search_vector_store_ids)
            if self.file_search_vector_stores:
                section["vector_stores"] = [
                    store.to_dict() for store in self.file_search_vector_stores
                ]
            out["file_search"] = section
        return out


@dataclass
class ThreadAttachment:
    """A file attached to a message, with the tools that may use it."""

    file_id: str
    tools: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_id": self.file_id,
            "tools": [{"type": tool} for tool in self.tools],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThreadAttachment:
        return cls(
            file_id=data.get("file_id") or "",
            tools=[tool.get("type") or "" for tool in data.get("tools") or []],
        )


@dataclass
class ThreadMessage:
    """A message included when creating a thread or run."""

    role: ThreadMessageRole | str
    content: str
    file_ids: list[str] | None = None
    attachments: list[ThreadAttachment] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": _value(self.role), "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.attachments:
            out["attachments"] = [item.to_dict() for item in self.attachments]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class ThreadRequest:
    """Body for creating a thread."""

    messages: list[ThreadMessage] | None = None
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResourcesRequest | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.messages:
            out["messages"] = [message.to_dict() for message in self.messages]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class ModifyThreadRequest:
    """Body for modifying a thread; ``metadata`` is always sent."""

    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "metadata": None if self.metadata is None else dict(self.metadata)
        }
        if self.tool_resources is not None:
            out["tool_resources"] = self.tool_resources.to_dict()
        return out


@dataclass
class Thread:
    """A conversation thread."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources = field(default_factory=ToolResources)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Thread:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            metadata=data.get("metadata"),
            tool_resources=ToolResources.from_dict(data.get("tool_resources")),
        )


@dataclass
class ThreadDeleteResponse:
    """Result of deleting a thread."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThreadDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def create_thread(request: ThreadRequest) -> ApiCall[Thread]:
    """Create a new thread."""
    return ApiCall(
        HttpMethod.POST,
        _THREADS,
        body=request.to_dict(),
        beta_assistants=True,
        parse=Thread.from_dict,
    )


def retrieve_thread(thread_id: str) -> ApiCall[Thread]:
    """Fetch a thread."""
    return ApiCall(
        HttpMethod.GET,
        f"{_THREADS}/{thread_id}",
        beta_assistants=True,
        parse=Thread.from_dict,
    )


def modify_thread(thread_id: str, request: ModifyThreadRequest) -> ApiCall[Thread]:
    """Change a thread's metadata or tool resources."""
    return ApiCall(
        HttpMethod.POST,
        f"{_THREADS}/{thread_id}",
        body=request.to_dict(),
        beta_assistants=True,
        parse=Thread.from_dict,
    )


def delete_thread(thread_id: str) -> ApiCall[ThreadDeleteResponse]:
    """Delete a thread."""
    return ApiCall(
        HttpMethod.DELETE,
        f"{_THREADS}/{thread_id}",
        beta_assistants=True,
        parse=ThreadDeleteResponse.from_dict,
    )