"""Model listing, lookup and deletion of fine-tuned models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gptwire.api import ApiCall, HttpMethod


@dataclass
class Permission:
    """Access rights attached to a model."""

    created_at: int = 0
    id: str = ""
    object: str = ""
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: str = ""
    group: Any = None
    is_blocking: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Permission:
        return cls(
            created_at=data.get("created") or 0,
            id=data.get("id") or "",
            object=data.get("object") or "",
            allow_create_engine=bool(data.get("allow_create_engine")),
            allow_sampling=bool(data.get("allow_sampling")),
            allow_logprobs=bool(data.get("allow_logprobs")),
            allow_search_indices=bool(data.get("allow_search_indices")),
            allow_view=bool(data.get("allow_view")),
            allow_fine_tuning=bool(data.get("allow_fine_tuning")),
            organization=data.get("organization") or "",
            group=data.get("group"),
            is_blocking=bool(data.get("is_blocking")),
        )


@dataclass
class Model:
    """A model available to the account."""

    created_at: int = 0
    id: str = ""
    object: str = ""
    owned_by: str = ""
    permission: list[Permission] = field(default_factory=list)
    root: str = ""
    parent: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Model:
        return cls(
            created_at=data.get("created") or 0,
            id=data.get("id") or "",
            object=data.get("object") or "",
            owned_by=data.get("owned_by") or "",
            permission=[Permission.from_dict(p) for p in data.get("permission") or []],
            root=data.get("root") or "",
            parent=data.get("parent") or "",
        )


@dataclass
class ModelsList:
    """Models belonging to the user, the organisation or the public."""

    models: list[Model] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModelsList:
        return cls(models=[Model.from_dict(m) for m in data.get("data") or []])


@dataclass
class FineTuneModelDeleteResponse:
    """Result of deleting a fine-tuned model."""

    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FineTuneModelDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def list_models() -> ApiCall[ModelsList]:
    """List the currently available models."""
    return ApiCall(HttpMethod.GET, "/models", parse=ModelsList.from_dict)


def get_model(model_id: str) -> ApiCall[Model]:
    """Fetch one model's details."""
    return ApiCall(HttpMethod.GET, f"/models/{model_id}", parse=Model.from_dict)


def delete_fine_tune_model(model_id: str) -> ApiCall[FineTuneModelDeleteResponse]:
    """Delete a fine-tuned model (requires the owner role)."""
    return ApiCall(
        HttpMethod.DELETE,
        "/models/" + model_id,
        parse=FineTuneModelDeleteResponse.from_dict,
    )