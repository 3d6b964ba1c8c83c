"""Assistant threads: requests, responses and endpoint calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gptkit.request_builder import BETA_ASSISTANTS_V1, ApiCall

_THREADS = "/threads"

THREAD_MESSAGE_ROLE_USER = "user"


@dataclass
class ThreadMessage:
    role: str = THREAD_MESSAGE_ROLE_USER
    content: str = ""
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def _to_dict(self) -> dict[str, Any]:
        role = getattr(self.role, "value", self.role)
        out: dict[str, Any] = {"role": role, "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class ThreadRequest:
    messages: list[ThreadMessage] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Messages and metadata, each only when non-empty."""
        out: dict[str, Any] = {}
        if self.messages:
            out["messages"] = [message._to_dict() for message in self.messages]
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class ModifyThreadRequest:
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Metadata is always sent, as null when unset."""
        return {"metadata": None if self.metadata is None else dict(self.metadata)}


@dataclass
class Thread:
    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Thread:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            metadata=data.get("metadata"),
        )


@dataclass
class ThreadDeleteResponse:
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


def create_thread(request: ThreadRequest) -> ApiCall:
    """Call that creates a thread."""
    return ApiCall(
        "POST",
        _THREADS,
        body=request.to_dict(),
        headers=dict(BETA_ASSISTANTS_V1),
        parse=Thread.from_dict,
    )


def retrieve_thread(thread_id: str) -> ApiCall:
    """Call that fetches a thread."""
    return ApiCall(
        "GET",
        f"{_THREADS}/{thread_id}",
        headers=dict(BETA_ASSISTANTS_V1),
        parse=Thread.from_dict,
    )


def modify_thread(thread_id: str, request: ModifyThreadRequest) -> ApiCall:
    """Call that replaces a thread's metadata."""
    return ApiCall(
        "POST",
        f"{_THREADS}/{thread_id}",
        body=request.to_dict(),
        headers=dict(BETA_ASSISTANTS_V1),
        parse=Thread.from_dict,
    )


def delete_thread(thread_id: str) -> ApiCall:
    """Call that deletes a thread."""
    return ApiCall(
        "DELETE",
        f"{_THREADS}/{thread_id}",
        headers=dict(BETA_ASSISTANTS_V1),
        parse=ThreadDeleteResponse.from_dict,
    )