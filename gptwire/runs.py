"""Assistant runs and run steps: request and response shapes and their calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from gptwire.api import ApiCall, HttpMethod, Pagination
from gptwire.threads import ThreadMessage, ThreadRequest

_E = TypeVar("_E", bound=Enum)


def _plain(item: Any) -> Any:
    """Turn enums and objects with ``to_dict`` into JSON-ready values."""
    if isinstance(item, Enum):
        return item.value
    to_dict = getattr(item, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(item, list):
        return [_plain(element) for element in item]
    if isinstance(item, dict):
        return {key: _plain(value) for key, value in item.items()}
    return item


def _enum_or_str(kind: type[_E], value: Any) -> _E | str:
    if value is None:
        return ""
    try:
        return kind(value)
    except ValueError:
        return value


class RunStatus(str, Enum):
    """Lifecycle state of a run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class RequiredActionType(str, Enum):
    """What a run needs from the caller before it can continue."""

    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, Enum):
    """Error codes reported for a failed run."""

    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class TruncationStrategy(str, Enum):
    """How a thread is cut down to fit the model's context."""

    AUTO = "auto"
    LAST_MESSAGES = "last_messages"


class RunStepStatus(str, Enum):
    """Lifecycle state of a run step."""

    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    """Kind of work done in a run step."""

    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


@dataclass
class ThreadTruncationStrategy:
    """Truncation settings; ``last_messages`` goes with ``LAST_MESSAGES``."""

    type: TruncationStrategy | str = ""
    last_messages: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = _plain(self.type)
        if self.last_messages is not None:
            out["last_messages"] = self.last_messages
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThreadTruncationStrategy:
        return cls(
            type=_enum_or_str(TruncationStrategy, data.get("type")),
            last_messages=data.get("last_messages"),
        )


@dataclass
class RunLastError:
    """The last error a run or step ran into."""

    code: RunError | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunLastError:
        return cls(
            code=_enum_or_str(RunError, data.get("code")),
            message=data.get("message") or "",
        )


@dataclass
class RunRequiredAction:
    """An action the caller must take, such as submitting tool outputs."""

    type: RequiredActionType | str = ""
    submit_tool_outputs: list[dict[str, Any]] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunRequiredAction:
        outputs = data.get("submit_tool_outputs")
        return cls(
            type=_enum_or_str(RequiredActionType, data.get("type")),
            submit_tool_outputs=(
                None if outputs is None else list(outputs.get("tool_calls") or [])
            ),
        )


def _optional(data: dict[str, Any], key: str, build: Any) -> Any:
    value = data.get(key)
    return None if value is None else build(value)


@dataclass
class Run:
    """An execution of an assistant on a thread."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[dict[str, Any]] | None = None
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None
    usage: dict[str, Any] = field(default_factory=dict)
    temperature: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Run:
        tools = data.get("tools")
        file_ids = data.get("file_ids")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            assistant_id=data.get("assistant_id") or "",
            status=_enum_or_str(RunStatus, data.get("status")),
            required_action=_optional(data, "required_action", RunRequiredAction.from_dict),
            last_error=_optional(data, "last_error", RunLastError.from_dict),
            expires_at=data.get("expires_at") or 0,
            started_at=data.get("started_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            model=data.get("model") or "",
            instructions=data.get("instructions") or "",
            tools=None if tools is None else list(tools),
            file_ids=None if file_ids is None else list(file_ids),
            metadata=data.get("metadata"),
            usage=dict(data.get("usage") or {}),
            temperature=data.get("temperature"),
            max_prompt_tokens=data.get("max_prompt_tokens") or 0,
            max_completion_tokens=data.get("max_completion_tokens") or 0,
            truncation_strategy=_optional(
                data, "truncation_strategy", ThreadTruncationStrategy.from_dict
            ),
        )


@dataclass
class RunRequest:
    """Body for starting a run.

    ``tool_choice``, ``response_format`` and ``parallel_tool_calls`` are
    sent whenever they are not ``None``, even when falsy.
    """

    assistant_id: str
    model: str = ""
    instructions: str = ""
    additional_instructions: str = ""
    additional_messages: list[ThreadMessage] | None = None
    tools: list[Any] | None = None
    metadata: dict[str, Any] | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None
    tool_choice: Any = None
    response_format: Any = None
    parallel_tool_calls: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"assistant_id": self.assistant_id}
        for name in ("model", "instructions", "additional_instructions"):
            value = getattr(self, name)
            if value:
                out[name] = value
        if self.additional_messages:
            out["additional_messages"] = [m.to_dict() for m in self.additional_messages]
        if self.tools:
            out["tools"] = [_plain(tool) for tool in self.tools]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        for name in ("temperature", "top_p"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        for name in ("max_prompt_tokens", "max_completion_tokens"):
            value = getattr(self, name)
            if value:
                out[name] = value
        if self.truncation_strategy is not None:
            out["truncation_strategy"] = self.truncation_strategy.to_dict()
        for name in ("tool_choice", "response_format", "parallel_tool_calls"):
            value = getattr(self, name)
            if value is not None:
                out[name] = _plain(value)
        return out


@dataclass
class RunModifyRequest:
    """Body for modifying a run."""

    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": dict(self.metadata)} if self.metadata else {}


@dataclass
class RunList:
    """A page of runs."""

    runs: list[Run] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunList:
        return cls(runs=[Run.from_dict(item) for item in data.get("data") or []])


@dataclass
class ToolOutput:
    """The output of one tool call."""

    tool_call_id: str
    output: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"tool_call_id": self.tool_call_id, "output": _plain(self.output)}


@dataclass
class SubmitToolOutputsRequest:
    """Body for submitting tool outputs; ``None`` is sent as JSON null."""

    tool_outputs: list[ToolOutput] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool_outputs": (
                None
                if self.tool_outputs is None
                else [item.to_dict() for item in self.tool_outputs]
            )
        }


@dataclass
class CreateThreadAndRunRequest:
    """Body for creating a thread and starting a run on it in one call."""

    run: RunRequest
    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        out = self.run.to_dict()
        out["thread"] = self.thread.to_dict()
        return out


@dataclass
class StepDetails:
    """What a run step did: created a message or called tools."""

    type: RunStepType | str = ""
    message_creation_id: str | None = None
    tool_calls: list[dict[str, Any]] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StepDetails:
        data = data or {}
        creation = data.get("message_creation")
        tool_calls = data.get("tool_calls")
        return cls(
            type=_enum_or_str(RunStepType, data.get("type")),
            message_creation_id=(
                None if creation is None else creation.get("message_id") or ""
            ),
            tool_calls=None if tool_calls is None else list(tool_calls),
        )


@dataclass
class RunStep:
    """One step taken during a run."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = field(default_factory=StepDetails)
    last_error: RunLastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunStep:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            assistant_id=data.get("assistant_id") or "",
            thread_id=data.get("thread_id") or "",
            run_id=data.get("run_id") or "",
            type=_enum_or_str(RunStepType, data.get("type")),
            status=_enum_or_str(RunStepStatus, data.get("status")),
            step_details=StepDetails.from_dict(data.get("step_details")),
            last_error=_optional(data, "last_error", RunLastError.from_dict),
            expired_at=data.get("expired_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class RunStepList:
    """A page of run steps."""

    run_steps: list[RunStep] = field(default_factory=list)
    first_id: str = ""
    last_id: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunStepList:
        return cls(
            run_steps=[RunStep.from_dict(item) for item in data.get("data") or []],
            first_id=data.get("first_id") or "",
            last_id=data.get("last_id") or "",
            has_more=bool(data.get("has_more")),
        )


def _runs_path(thread_id: str) -> str:
    return f"/threads/{thread_id}/runs"


def create_run(thread_id: str, request: RunRequest) -> ApiCall[Run]:
    """Start a run on a thread."""
    return ApiCall(
        HttpMethod.POST,
        _runs_path(thread_id),
        body=request.to_dict(),
        beta_assistants=True,
        parse=Run.from_dict,
    )


def retrieve_run(thread_id: str, run_id: str) -> ApiCall[Run]:
    """Fetch a run."""
    return ApiCall(
        HttpMethod.GET,
        f"{_runs_path(thread_id)}/{run_id}",
        beta_assistants=True,
        parse=Run.from_dict,
    )


def modify_run(thread_id: str, run_id: str, request: RunModifyRequest) -> ApiCall[Run]:
    """Change a run's metadata."""
    return ApiCall(
        HttpMethod.POST,
        f"{_runs_path(thread_id)}/{run_id}",
        body=request.to_dict(),
        beta_assistants=True,
        parse=Run.from_dict,
    )


def list_runs(thread_id: str, pagination: Pagination | None = None) -> ApiCall[RunList]:
    """List the runs of a thread."""
    return ApiCall(
        HttpMethod.GET,
        _runs_path(thread_id),
        query=tuple((pagination or Pagination()).to_query()),
        beta_assistants=True,
        parse=RunList.from_dict,
    )


def submit_tool_outputs(
    thread_id: str, run_id: str, request: SubmitToolOutputsRequest
) -> ApiCall[Run]:
    """Send the outputs of the tool calls a run is waiting for."""
    return ApiCall(
        HttpMethod.POST,
        f"{_runs_path(thread_id)}/{run_id}/submit_tool_outputs",
        body=request.to_dict(),
        beta_assistants=True,
        parse=Run.from_dict,
    )


def cancel_run(thread_id: str, run_id: str) -> ApiCall[Run]:
    """Cancel a run in progress."""
    return ApiCall(
        HttpMethod.POST,
        f"{_runs_path(thread_id)}/{run_id}/cancel",
        beta_assistants=True,
        parse=Run.from_dict,
    )


def create_thread_and_run(request: CreateThreadAndRunRequest) -> ApiCall[Run]:
    """Create a thread and start a run on it."""
    return ApiCall(
        HttpMethod.POST,
        "/threads/runs",
        body=request.to_dict(),
        beta_assistants=True,
        parse=Run.from_dict,
    )


def retrieve_run_step(thread_id: str, run_id: str, step_id: str) -> ApiCall[RunStep]:
    """Fetch one step of a run."""
    return ApiCall(
        HttpMethod.GET,
        f"{_runs_path(thread_id)}/{run_id}/steps/{step_id}",
        beta_assistants=True,
        parse=RunStep.from_dict,
    )


def list_run_steps(
    thread_id: str, run_id: str, pagination: Pagination | None = None
) -> ApiCall[RunStepList]:
    """List the steps of a run."""
    return ApiCall(
        HttpMethod.GET,
        f"{_runs_path(thread_id)}/{run_id}/steps",
        query=tuple((pagination or Pagination()).to_query()),
        beta_assistants=True,
        parse=RunStepList.from_dict,
    )