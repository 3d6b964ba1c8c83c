"""Thread messages and their files: requests, responses and endpoint calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gptkit.request_builder import BETA_ASSISTANTS_V1, ApiCall

_MESSAGES = "messages"


@dataclass
class MessageText:
    value: str = ""
    annotations: list[Any] | None = None

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> MessageText:
        return cls(value=data.get("value") or "", annotations=data.get("annotations"))


@dataclass
class ImageFile:
    file_id: str = ""

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> ImageFile:
        return cls(file_id=data.get("file_id") or "")


@dataclass
class MessageContent:
    type: str = ""
    text: MessageText | None = None
    image_file: ImageFile | None = None

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> MessageContent:
        text = data.get("text")
        image_file = data.get("image_file")
        return cls(
            type=data.get("type") or "",
            text=MessageText._from_dict(text) if text is not None else None,
            image_file=ImageFile._from_dict(image_file) if image_file is not None else None,
        )


@dataclass
class Message:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    role: str = ""
    content: list[MessageContent] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    assistant_id: str | None = None
    run_id: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            role=data.get("role") or "",
            content=[MessageContent._from_dict(item) for item in data.get("content") or []],
            file_ids=list(data.get("file_ids") or []),
            assistant_id=data.get("assistant_id"),
            run_id=data.get("run_id"),
            metadata=data.get("metadata"),
        )


@dataclass
class MessagesList:
    messages: list[Message] = field(default_factory=list)
    object: str = ""
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessagesList:
        return cls(
            messages=[Message.from_dict(item) for item in data.get("data") or []],
            object=data.get("object") or "",
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class MessageRequest:
    role: str = ""
    content: str = ""
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Role and content always; file ids and metadata only when non-empty."""
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.file_ids:
            out["file_ids"] = list(self.file_ids)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        return out


@dataclass
class MessageFile:
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
    message_files: list[MessageFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageFilesList:
        return cls(message_files=[MessageFile.from_dict(item) for item in data.get("data") or []])


def _path(thread_id: str, *rest: str) -> str:
    return "/".join(("", "threads", thread_id, _MESSAGES, *rest))


def create_message(thread_id: str, request: MessageRequest) -> ApiCall:
    """Call that adds a message to a thread."""
    return ApiCall(
        "POST",
        _path(thread_id),
        body=request.to_dict(),
        headers=dict(BETA_ASSISTANTS_V1),
        parse=Message.from_dict,
    )


def list_messages(
    thread_id: str,
    limit: int | None = None,
    order: str | None = None,
    after: str | None = None,
    before: str | None = None,
) -> ApiCall:
    """Call that lists a thread's messages, with optional pagination."""
    query: dict[str, Any] = {
        "limit": None if limit is None else int(limit),
        "order": order,
        "after": after,
        "before": before,
    }
    return ApiCall(
        "GET",
        _path(thread_id),
        query=query,
        headers=dict(BETA_ASSISTANTS_V1),
        parse=MessagesList.from_dict,
    )


def retrieve_message(thread_id: str, message_id: str) -> ApiCall:
    """Call that fetches one message."""
    return ApiCall(
        "GET",
        _path(thread_id, message_id),
        headers=dict(BETA_ASSISTANTS_V1),
        parse=Message.from_dict,
    )


def modify_message(thread_id: str, message_id: str, metadata: dict[str, Any] | None) -> ApiCall:
    """Call that sends new metadata for a message."""
    return ApiCall(
        "POST",
        _path(thread_id, message_id),
        body=metadata,
        headers=dict(BETA_ASSISTANTS_V1),
        parse=Message.from_dict,
    )


def retrieve_message_file(thread_id: str, message_id: str, file_id: str) -> ApiCall:
    """Call that fetches one file attached to a message."""
    return ApiCall(
        "GET",
        _path(thread_id, message_id, "files", file_id),
        headers=dict(BETA_ASSISTANTS_V1),
        parse=MessageFile.from_dict,
    )


def list_message_files(thread_id: str, message_id: str) -> ApiCall:
    """Call that lists the files attached to a message."""
    return ApiCall(
        "GET",
        _path(thread_id, message_id, "files"),
        headers=dict(BETA_ASSISTANTS_V1),
        parse=MessageFilesList.from_dict,
    )