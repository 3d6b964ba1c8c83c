"""Assistant runs and run steps: requests, responses and endpoint calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar, Union

from gptkit.request_builder import BETA_ASSISTANTS_V1, ApiCall
from gptkit.thread import ThreadRequest


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RequiredActionType(str, Enum):
    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class RunStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: type[E], value: Any) -> Union[E, str]:
    """The enum member for ``value``, or the raw text when it is not a known one."""
    if value is None:
        return ""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


@dataclass
class RunLastError:
    code: Union[RunError, str] = ""
    message: str = ""

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> RunLastError:
        return cls(
            code=_coerce(RunError, data.get("code")),
            message=data.get("message") or "",
        )


@dataclass
class RunRequiredAction:
    """What the run waits for; ``tool_calls`` holds the calls to answer, if any."""

    type: Union[RequiredActionType, str] = ""
    tool_calls: list[Any] | None = None

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> RunRequiredAction:
        submit = data.get("submit_tool_outputs")
        return cls(
            type=_coerce(RequiredActionType, data.get("type")),
            tool_calls=list(submit.get("tool_calls") or []) if submit is not None else None,
        )


def _optional(data: dict[str, Any], key: str, parse: Any) -> Any:
    value = data.get(key)
    return parse(value) if value is not None else None


@dataclass
class Run:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: Union[RunStatus, str] = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[Any] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Run:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            assistant_id=data.get("assistant_id") or "",
            status=_coerce(RunStatus, data.get("status")),
            required_action=_optional(data, "required_action", RunRequiredAction._from_dict),
            last_error=_optional(data, "last_error", RunLastError._from_dict),
            expires_at=data.get("expires_at") or 0,
            started_at=data.get("started_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            model=data.get("model") or "",
            instructions=data.get("instructions") or "",
            tools=list(data.get("tools") or []),
            file_ids=list(data.get("file_ids") or []),
            metadata=data.get("metadata"),
        )


@dataclass
class RunList:
    runs: list[Run] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunList:
        return cls(runs=[Run.from_dict(item) for item in data.get("data") or []])


@dataclass
class RunRequest:
    """``model`` and ``instructions`` are sent whenever they are not None, even if empty."""

    assistant_id: str = ""
    model: str | None = None
    instructions: str | None = None
    tools: list[Any] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"assistant_id": self.assistant_id}
        if self.model is not None:
            out["model"] = self.model
        if self.instructions is not None:
            out["instructions"] = self.instructions
        if self.tools:
            out["tools"] = list(self.tools)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class RunModifyRequest:
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": dict(self.metadata)} if self.metadata else {}


@dataclass
class ToolOutput:
    tool_call_id: str = ""
    output: Any = None


@dataclass
class SubmitToolOutputsRequest:
    tool_outputs: list[ToolOutput] | None = None

    def to_dict(self) -> dict[str, Any]:
        """The outputs are always sent, as null when unset."""
        if self.tool_outputs is None:
            return {"tool_outputs": None}
        return {
            "tool_outputs": [
                {"tool_call_id": item.tool_call_id, "output": item.output}
                for item in self.tool_outputs
            ]
        }


@dataclass
class CreateThreadAndRunRequest(RunRequest):
    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["thread"] = self.thread.to_dict()
        return out


@dataclass
class StepDetails:
    """Step detail; ``message_id`` is set for message creation steps."""

    type: Union[RunStepType, str] = ""
    message_id: str | None = None
    tool_calls: list[Any] | None = None

    @classmethod
    def _from_dict(cls, data: dict[str, Any] | None) -> StepDetails:
        data = data or {}
        creation = data.get("message_creation")
        tool_calls = data.get("tool_calls")
        return cls(
            type=_coerce(RunStepType, data.get("type")),
            message_id=(creation.get("message_id") or "") if creation is not None else None,
            tool_calls=list(tool_calls) if tool_calls is not None else None,
        )


@dataclass
class RunStep:
    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: Union[RunStepType, str] = ""
    status: Union[RunStepStatus, str] = ""
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
            type=_coerce(RunStepType, data.get("type")),
            status=_coerce(RunStepStatus, data.get("status")),
            step_details=StepDetails._from_dict(data.get("step_details")),
            last_error=_optional(data, "last_error", RunLastError._from_dict),
            expired_at=data.get("expired_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class RunStepList:
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


@dataclass
class Pagination:
    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def query(self) -> dict[str, Any]:
        """Query parameters; unset ones are None and left out when encoded."""
        return {
            "limit": None if self.limit is None else int(self.limit),
            "order": self.order,
            "after": self.after,
            "before": self.before,
        }


def _runs(thread_id: str, *rest: str) -> str:
    return "/".join(("", "threads", thread_id, "runs", *rest))


def _call(method: str, path: str, parse: Any, **kwargs: Any) -> ApiCall:
    return ApiCall(method, path, headers=dict(BETA_ASSISTANTS_V1), parse=parse, **kwargs)


def create_run(thread_id: str, request: RunRequest) -> ApiCall:
    """Call that starts a run on a thread."""
    return _call("POST", _runs(thread_id), Run.from_dict, body=request.to_dict())


def retrieve_run(thread_id: str, run_id: str) -> ApiCall:
    """Call that fetches a run."""
    return _call("GET", _runs(thread_id, run_id), Run.from_dict)


def modify_run(thread_id: str, run_id: str, request: RunModifyRequest) -> ApiCall:
    """Call that updates a run's metadata."""
    return _call("POST", _runs(thread_id, run_id), Run.from_dict, body=request.to_dict())


def list_runs(thread_id: str, pagination: Pagination | None = None) -> ApiCall:
    """Call that lists a thread's runs."""
    pagination = pagination if pagination is not None else Pagination()
    return _call("GET", _runs(thread_id), RunList.from_dict, query=pagination.query())


def submit_tool_outputs(
    thread_id: str, run_id: str, request: SubmitToolOutputsRequest
) -> ApiCall:
    """Call that hands tool results back to a waiting run."""
    return _call(
        "POST",
        _runs(thread_id, run_id, "submit_tool_outputs"),
        Run.from_dict,
        body=request.to_dict(),
    )


def cancel_run(thread_id: str, run_id: str) -> ApiCall:
    """Call that cancels a run."""
    return _call("POST", _runs(thread_id, run_id, "cancel"), Run.from_dict)


def create_thread_and_run(request: CreateThreadAndRunRequest) -> ApiCall:
    """Call that creates a thread and starts a run on it at once."""
    return _call("POST", "/threads/runs", Run.from_dict, body=request.to_dict())


def retrieve_run_step(thread_id: str, run_id: str, step_id: str) -> ApiCall:
    """Call that fetches one step of a run."""
    return _call("GET", _runs(thread_id, run_id, "steps", step_id), RunStep.from_dict)


def list_run_steps(thread_id: str, run_id: str, pagination: Pagination | None = None) -> ApiCall:
    """Call that lists the steps of a run."""
    pagination = pagination if pagination is not None else Pagination()
    return _call(
        "GET",
        _runs(thread_id, run_id, "steps"),
        RunStepList.from_dict,
        query=pagination.query(),
    )