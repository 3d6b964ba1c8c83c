import json

import pytest

from gptkit.codec import JSONMarshaller
from gptkit.run import (
    CreateThreadAndRunRequest,
    Pagination,
    RequiredActionType,
    Run,
    RunError,
    RunList,
    RunModifyRequest,
    RunRequest,
    RunStatus,
    RunStep,
    RunStepList,
    RunStepStatus,
    RunStepType,
    SubmitToolOutputsRequest,
    ToolOutput,
    cancel_run,
    create_run,
    create_thread_and_run,
    list_run_steps,
    list_runs,
    modify_run,
    retrieve_run,
    retrieve_run_step,
    submit_tool_outputs,
)
from gptkit.thread import ThreadMessage, ThreadRequest

ASSISTANT_ID = "asst_abc123"
THREAD_ID = "thread_abc123"
RUN_ID = "run_abc123"
STEP_ID = "step_abc123"
BETA = {"OpenAI-Beta": "assistants=v1"}


@pytest.fixture
def pagination():
    return Pagination(limit=20, order="desc", after="asst_abc122", before="asst_abc124")


def _run_payload(status):
    return {"id": RUN_ID, "object": "run", "created_at": 1234567890, "status": status}


def test_create_run():
    call = create_run(THREAD_ID, RunRequest(assistant_id=ASSISTANT_ID))
    assert call.method == "POST"
    assert call.target() == "/threads/thread_abc123/runs"
    assert call.body == {"assistant_id": ASSISTANT_ID}
    assert call.headers == BETA
    run = call.parse(_run_payload("queued"))
    assert run.id == RUN_ID
    assert run.status is RunStatus.QUEUED
    assert run.created_at == 1234567890


def test_retrieve_run():
    call = retrieve_run(THREAD_ID, RUN_ID)
    assert call.method == "GET"
    assert call.target() == "/threads/thread_abc123/runs/run_abc123"
    assert call.body is None
    assert call.headers == BETA


def test_modify_run_sends_metadata_and_parses_it_back():
    call = modify_run(THREAD_ID, RUN_ID, RunModifyRequest(metadata={"key": "value"}))
    assert call.method == "POST"
    assert call.target() == "/threads/thread_abc123/runs/run_abc123"
    assert call.body == {"metadata": {"key": "value"}}
    run = call.parse({**_run_payload("queued"), "metadata": call.body["metadata"]})
    assert run.metadata == {"key": "value"}


def test_list_runs_with_pagination(pagination):
    call = list_runs(THREAD_ID, pagination)
    assert call.method == "GET"
    assert call.target() == (
        "/threads/thread_abc123/runs?after=asst_abc122&before=asst_abc124&limit=20&order=desc"
    )
    result = call.parse({"data": [_run_payload("queued")]})
    assert isinstance(result, RunList)
    assert [run.id for run in result.runs] == [RUN_ID]


def test_list_runs_without_pagination_has_no_query():
    assert list_runs(THREAD_ID).target() == "/threads/thread_abc123/runs"
    assert list_runs(THREAD_ID, Pagination()).target() == "/threads/thread_abc123/runs"


def test_submit_tool_outputs():
    call = submit_tool_outputs(THREAD_ID, RUN_ID, SubmitToolOutputsRequest())
    assert call.method == "POST"
    assert call.target() == "/threads/thread_abc123/runs/run_abc123/submit_tool_outputs"
    assert call.body == {"tool_outputs": None}
    run = call.parse(_run_payload("cancelling"))
    assert run.status is RunStatus.CANCELLING


def test_submit_tool_outputs_body_lists_outputs():
    request = SubmitToolOutputsRequest(
        tool_outputs=[ToolOutput(tool_call_id="call_1", output="42")]
    )
    assert request.to_dict() == {"tool_outputs": [{"tool_call_id": "call_1", "output": "42"}]}


def test_cancel_run():
    call = cancel_run(THREAD_ID, RUN_ID)
    assert call.method == "POST"
    assert call.target() == "/threads/thread_abc123/runs/run_abc123/cancel"
    assert call.body is None
    assert call.parse(_run_payload("cancelling")).status is RunStatus.CANCELLING


def test_create_thread_and_run():
    request = CreateThreadAndRunRequest(
        assistant_id=ASSISTANT_ID,
        thread=ThreadRequest(messages=[ThreadMessage(role="user", content="Hello, World!")]),
    )
    call = create_thread_and_run(request)
    assert call.method == "POST"
    assert call.target() == "/threads/runs"
    assert call.headers == BETA
    assert call.body == {
        "assistant_id": ASSISTANT_ID,
        "thread": {"messages": [{"role": "user", "content": "Hello, World!"}]},
    }


def test_retrieve_run_step():
    call = retrieve_run_step(THREAD_ID, RUN_ID, STEP_ID)
    assert call.method == "GET"
    assert call.target() == "/threads/thread_abc123/runs/run_abc123/steps/step_abc123"
    step = call.parse(_run_payload("completed"))
    assert isinstance(step, RunStep)
    assert step.status is RunStepStatus.COMPLETED
    assert step.id == RUN_ID


def test_list_run_steps(pagination):
    call = list_run_steps(THREAD_ID, RUN_ID, pagination)
    assert call.method == "GET"
    assert call.target() == (
        "/threads/thread_abc123/runs/run_abc123/steps"
        "?after=asst_abc122&before=asst_abc124&limit=20&order=desc"
    )
    result = call.parse({"data": [_run_payload("completed")], "first_id": "a", "last_id": "b"})
    assert isinstance(result, RunStepList)
    assert len(result.run_steps) == 1
    assert (result.first_id, result.last_id, result.has_more) == ("a", "b", False)


def test_run_request_keeps_set_but_empty_pointers():
    request = RunRequest(assistant_id=ASSISTANT_ID, model="", instructions="be brief")
    assert request.to_dict() == {
        "assistant_id": ASSISTANT_ID,
        "model": "",
        "instructions": "be brief",
    }


def test_run_modify_request_leaves_out_empty_metadata():
    assert RunModifyRequest().to_dict() == {}


def test_run_from_dict_nested_fields():
    run = Run.from_dict(
        {
            "id": RUN_ID,
            "status": "requires_action",
            "required_action": {
                "type": "submit_tool_outputs",
                "submit_tool_outputs": {"tool_calls": [{"id": "call_1"}]},
            },
            "last_error": {"code": "rate_limit_exceeded", "message": "slow down"},
            "started_at": 5,
            "file_ids": ["file_1"],
        }
    )
    assert run.status is RunStatus.REQUIRES_ACTION
    assert run.required_action.type is RequiredActionType.SUBMIT_TOOL_OUTPUTS
    assert run.required_action.tool_calls == [{"id": "call_1"}]
    assert run.last_error.code is RunError.RATE_LIMIT_EXCEEDED
    assert run.last_error.message == "slow down"
    assert run.started_at == 5
    assert run.completed_at is None
    assert run.file_ids == ["file_1"]


def test_unknown_status_is_kept_as_text():
    assert Run.from_dict({"status": "paused"}).status == "paused"


def test_run_step_details():
    step = RunStep.from_dict(
        {
            "type": "message_creation",
            "step_details": {
                "type": "message_creation",
                "message_creation": {"message_id": "msg_1"},
            },
        }
    )
    assert step.type is RunStepType.MESSAGE_CREATION
    assert step.step_details.type is RunStepType.MESSAGE_CREATION
    assert step.step_details.message_id == "msg_1"
    assert step.step_details.tool_calls is None


def test_create_thread_and_run_marshals_to_json():
    request = CreateThreadAndRunRequest(assistant_id=ASSISTANT_ID)
    decoded = json.loads(JSONMarshaller().marshal(request.to_dict()))
    assert decoded == {"assistant_id": ASSISTANT_ID, "thread": {}}