"""Vector stores, their files and file batches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gptwire.api import ApiCall, HttpMethod, Pagination

_VECTOR_STORES = "/vector_stores"
_FILES = "/files"
_FILE_BATCHES = "/file_batches"


@dataclass
class VectorStoreFileCount:
    """Number of files in each processing state."""

    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> VectorStoreFileCount:
        data = data or {}
        return cls(
            in_progress=data.get("in_progress") or 0,
            completed=data.get("completed") or 0,
            failed=data.get("failed") or 0,
            cancelled=data.get("cancelled") or 0,
            total=data.get("total") or 0,
        )


@dataclass
class VectorStoreExpires:
    """Expiry policy: ``days`` after ``anchor``."""

    anchor: str = ""
    days: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"anchor": self.anchor, "days": self.days}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreExpires:
        return cls(anchor=data.get("anchor") or "", days=data.get("days") or 0)


@dataclass
class VectorStore:
    """A vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    name: str = ""
    usage_bytes: int = 0
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)
    status: str = ""
    expires_after: VectorStoreExpires | None = None
    expires_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStore:
        expires_after = data.get("expires_after")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            name=data.get("name") or "",
            usage_bytes=data.get("usage_bytes") or 0,
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts")),
            status=data.get("status") or "",
            expires_after=(
                None if expires_after is None else VectorStoreExpires.from_dict(expires_after)
            ),
            expires_at=data.get("expires_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class VectorStoreRequest:
    """Body for creating or modifying a vector store."""

    name: str = ""
    file_ids: list[str] | None = None
    expires_after: VectorStoreExpires | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.expires_after is not None:
            out["expires_after"] = self.expires_after.to_dict()
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class VectorStoresList:
    """A page of vector stores."""

    vector_stores: list[VectorStore] = field(default_factory=list)
    last_id: str | None = None
    first_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoresList:
        return cls(
            vector_stores=[VectorStore.from_dict(item) for item in data.get("data") or []],
            last_id=data.get("last_id"),
            first_id=data.get("first_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreDeleteResponse:
    """Result of deleting a vector store."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


@dataclass
class VectorStoreFile:
    """A file held in a vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    usage_bytes: int = 0
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreFile:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            vector_store_id=data.get("vector_store_id") or "",
            usage_bytes=data.get("usage_bytes") or 0,
            status=data.get("status") or "",
        )


@dataclass
class VectorStoreFileRequest:
    """Body for adding a file to a vector store."""

    file_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"file_id": self.file_id}


@dataclass
class VectorStoreFilesList:
    """A page of vector store files."""

    vector_store_files: list[VectorStoreFile] = field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreFilesList:
        return cls(
            vector_store_files=[
                VectorStoreFile.from_dict(item) for item in data.get("data") or []
            ],
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class VectorStoreFileBatch:
    """A batch of files being added to a vector store."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    status: str = ""
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VectorStoreFileBatch:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            vector_store_id=data.get("vector_store_id") or "",
            status=data.get("status") or "",
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts")),
        )


@dataclass
class VectorStoreFileBatchRequest:
    """Body for creating a file batch; ``None`` is sent as JSON null."""

    file_ids: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"file_ids": None if self.file_ids is None else list(self.file_ids)}


def _store_path(vector_store_id: str) -> str:
    return f"{_VECTOR_STORES}/{vector_store_id}"


def _query(pagination: Pagination | None) -> tuple[tuple[str, str], ...]:
    return tuple((pagination or Pagination()).to_query())


def create_vector_store(request: VectorStoreRequest) -> ApiCall[VectorStore]:
    """Create a vector store."""
    return ApiCall(
        HttpMethod.POST,
        _VECTOR_STORES,
        body=request.to_dict(),
        beta_assistants=True,
        parse=VectorStore.from_dict,
    )


def retrieve_vector_store(vector_store_id: str) -> ApiCall[VectorStore]:
    """Fetch a vector store."""
    return ApiCall(
        HttpMethod.GET,
        _store_path(vector_store_id),
        beta_assistants=True,
        parse=VectorStore.from_dict,
    )


def modify_vector_store(
    vector_store_id: str, request: VectorStoreRequest
) -> ApiCall[VectorStore]:
    """Change a vector store."""
    return ApiCall(
        HttpMethod.POST,
        _store_path(vector_store_id),
        body=request.to_dict(),
        beta_assistants=True,
        parse=VectorStore.from_dict,
    )


def delete_vector_store(vector_store_id: str) -> ApiCall[VectorStoreDeleteResponse]:
    """Delete a vector store."""
    return ApiCall(
        HttpMethod.DELETE,
        _store_path(vector_store_id),
        beta_assistants=True,
        parse=VectorStoreDeleteResponse.from_dict,
    )


def list_vector_stores(pagination: Pagination | None = None) -> ApiCall[VectorStoresList]:
    """List vector stores."""
    return ApiCall(
        HttpMethod.GET,
        _VECTOR_STORES,
        query=_query(pagination),
        beta_assistants=True,
        parse=VectorStoresList.from_dict,
    )


def create_vector_store_file(
    vector_store_id: str, request: VectorStoreFileRequest
) -> ApiCall[VectorStoreFile]:
    """Add a file to a vector store."""
    return ApiCall(
        HttpMethod.POST,
        _store_path(vector_store_id) + _FILES,
        body=request.to_dict(),
        beta_assistants=True,
        parse=VectorStoreFile.from_dict,
    )


def retrieve_vector_store_file(vector_store_id: str, file_id: str) -> ApiCall[VectorStoreFile]:
    """Fetch a file of a vector store."""
    return ApiCall(
        HttpMethod.GET,
        f"{_store_path(vector_store_id)}{_FILES}/{file_id}",
        beta_assistants=True,
        parse=VectorStoreFile.from_dict,
    )


def delete_vector_store_file(vector_store_id: str, file_id: str) -> ApiCall[None]:
    """Remove a file from a vector store; the reply body is not read."""
    return ApiCall(
        HttpMethod.DELETE,
        f"{_store_path(vector_store_id)}{_FILES}/{file_id}",
        beta_assistants=True,
    )


def list_vector_store_files(
    vector_store_id: str, pagination: Pagination | None = None
) -> ApiCall[VectorStoreFilesList]:
    """List the files of a vector store."""
    return ApiCall(
        HttpMethod.GET,
        _store_path(vector_store_id) + _FILES,
        query=_query(pagination),
        beta_assistants=True,
        parse=VectorStoreFilesList.from_dict,
    )


def create_vector_store_file_batch(
    vector_store_id: str, request: VectorStoreFileBatchRequest
) -> ApiCall[VectorStoreFileBatch]:
    """Add several files to a vector store at once."""
    return ApiCall(
        HttpMethod.POST,
        _store_path(vector_store_id) + _FILE_BATCHES,
        body=request.to_dict(),
        beta_assistants=True,
        parse=VectorStoreFileBatch.from_dict,
    )


def retrieve_vector_store_file_batch(
    vector_store_id: str, batch_id: str
) -> ApiCall[VectorStoreFileBatch]:
    """Fetch a file batch."""
    return ApiCall(
        HttpMethod.GET,
        f"{_store_path(vector_store_id)}{_FILE_BATCHES}/{batch_id}",
        beta_assistants=True,
        parse=VectorStoreFileBatch.from_dict,
    )


def cancel_vector_store_file_batch(
    vector_store_id: str, batch_id: str
) -> ApiCall[VectorStoreFileBatch]:
    """Cancel a file batch in progress."""
    return ApiCall(
        HttpMethod.POST,
        f"{_store_path(vector_store_id)}{_FILE_BATCHES}/{batch_id}/cancel",
        beta_assistants=True,
        parse=VectorStoreFileBatch.from_dict,
    )


def list_vector_store_files_in_batch(
    vector_store_id: str, batch_id: str, pagination: Pagination | None = None
) -> ApiCall[VectorStoreFilesList]:
    """List the files of a file batch."""
    return ApiCall(
        HttpMethod.GET,
        f"{_store_path(vector_store_id)}{_FILE_BATCHES}/{batch_id}/files",
        query=_query(pagination),
        beta_assistants=True,
        parse=VectorStoreFilesList.from_dict,
    )