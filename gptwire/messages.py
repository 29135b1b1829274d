"""Messages inside assistant threads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gptwire.api import ApiCall, HttpMethod, Pagination
from gptwire.threads import ThreadAttachment

_MESSAGES = "messages"


@dataclass
class MessageText:
    """Text content with its annotations."""

    value: str = ""
    annotations: list[Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageText:
        return cls(value=data.get("value") or "", annotations=data.get("annotations"))


@dataclass
class ImageFile:
    """An image stored as an uploaded file."""

    file_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageFile:
        return cls(file_id=data.get("file_id") or "")


@dataclass
class ImageURL:
    """An image referenced by URL."""

    url: str = ""
    detail: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageURL:
        return cls(url=data.get("url") or "", detail=data.get("detail") or "")


@dataclass
class MessageContent:
    """One piece of a message: text, an image file or an image URL."""

    type: str = ""
    text: MessageText | None = None
    image_file: ImageFile | None = None
    image_url: ImageURL | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageContent:
        text = data.get("text")
        image_file = data.get("image_file")
        image_url = data.get("image_url")
        return cls(
            type=data.get("type") or "",
            text=None if text is None else MessageText.from_dict(text),
            image_file=None if image_file is None else ImageFile.from_dict(image_file),
            image_url=None if image_url is None else ImageURL.from_dict(image_url),
        )


@dataclass
class Message:
    """A message in a thread."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    role: str = ""
    content: list[MessageContent] = field(default_factory=list)
    file_ids: list[str] | None = None
    assistant_id: str | None = None
    run_id: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        file_ids = data.get("file_ids")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            role=data.get("role") or "",
            content=[MessageContent.from_dict(c) for c in data.get("content") or []],
            file_ids=None if file_ids is None else list(file_ids),
            assistant_id=data.get("assistant_id"),
            run_id=data.get("run_id"),
            metadata=data.get("metadata"),
        )


@dataclass
class MessagesList:
    """A page of messages."""

    messages: list[Message] = field(default_factory=list)
    object: str = ""
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessagesList:
        return cls(
            messages=[Message.from_dict(m) for m in data.get("data") or []],
            object=data.get("object") or "",
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class MessageRequest:
    """Body for creating a message."""

    role: str
    content: str
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None
    attachments: list[ThreadAttachment] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.attachments:
            out["attachments"] = [item.to_dict() for item in self.attachments]
        return out


@dataclass
class MessageFile:
    """A file attached to a message."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    message_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageFile:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            message_id=data.get("message_id") or "",
        )


@dataclass
class MessageFilesList:
    """Files attached to a message."""

    message_files: list[MessageFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageFilesList:
        return cls(message_files=[MessageFile.from_dict(f) for f in data.get("data") or []])


@dataclass
class MessageDeletionStatus:
    """Result of deleting a message."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageDeletionStatus:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def _messages_path(thread_id: str) -> str:
    return f"/threads/{thread_id}/{_MESSAGES}"


def create_message(thread_id: str, request: MessageRequest) -> ApiCall[Message]:
    """Add a message to a thread."""
    return ApiCall(
        HttpMethod.POST,
        _messages_path(thread_id),
        body=request.to_dict(),
        beta_assistants=True,
        parse=Message.from_dict,
    )


def list_messages(
    thread_id: str,
    limit: int | None = None,
    order: str | None = None,
    after: str | None = None,
    before: str | None = None,
    run_id: str | None = None,
) -> ApiCall[MessagesList]:
    """List the messages of a thread, optionally paged and filtered by run."""
    query = Pagination(limit=limit, order=order, after=after, before=before).to_query()
    if run_id is not None:
        query.append(("run_id", run_id))
    return ApiCall(
        HttpMethod.GET,
        _messages_path(thread_id),
        query=tuple(query),
        beta_assistants=True,
        parse=MessagesList.from_dict,
    )


def retrieve_message(thread_id: str, message_id: str) -> ApiCall[Message]:
    """Fetch one message."""
    return ApiCall(
        HttpMethod.GET,
        f"{_messages_path(thread_id)}/{message_id}",
        beta_assistants=True,
        parse=Message.from_dict,
    )


def modify_message(
    thread_id: str, message_id: str, metadata: dict[str, str] | None
) -> ApiCall[Message]:
    """Replace a message's metadata."""
    return ApiCall(
        HttpMethod.POST,
        f"{_messages_path(thread_id)}/{message_id}",
        body={"metadata": None if metadata is None else dict(metadata)},
        beta_assistants=True,
        parse=Message.from_dict,
    )


def retrieve_message_file(
    thread_id: str, message_id: str, file_id: str
) -> ApiCall[MessageFile]:
    """Fetch one file attached to a message."""
    return ApiCall(
        HttpMethod.GET,
        f"{_messages_path(thread_id)}/{message_id}/files/{file_id}",
        beta_assistants=True,
        parse=MessageFile.from_dict,
    )


def list_message_files(thread_id: str, message_id: str) -> ApiCall[MessageFilesList]:
    """List the files attached to a message."""
    return ApiCall(
        HttpMethod.GET,
        f"{_messages_path(thread_id)}/{message_id}/files",
        beta_assistants=True,
        parse=MessageFilesList.from_dict,
    )


def delete_message(thread_id: str, message_id: str) -> ApiCall[MessageDeletionStatus]:
    """Delete a message."""
    return ApiCall(
        HttpMethod.DELETE,
        f"{_messages_path(thread_id)}/{message_id}",
        beta_assistants=True,
        parse=MessageDeletionStatus.from_dict,
    )