import json

import pytest

from gptkit.fine_tuning import (
    FineTuningJob,
    FineTuningJobEventList,
    FineTuningJobRequest,
    Hyperparameters,
    cancel_fine_tuning_job,
    create_fine_tuning_job,
    list_fine_tuning_job_events,
    retrieve_fine_tuning_job,
)
from gptkit.request_builder import RequestBuilder

JOB_ID = "fine-tuning-job-id"

JOB_DOC = {
    "object": "fine_tuning.job",
    "id": JOB_ID,
    "model": "davinci-002",
    "created_at": 1692661014,
    "finished_at": 1692661190,
    "fine_tuned_model": "ft:davinci-002:my-org:custom_suffix:7q8mpxmy",
    "organization_id": "org-123",
    "result_files": ["file-abc123"],
    "status": "succeeded",
    "training_file": "file-abc123",
    "hyperparameters": {"n_epochs": "auto"},
    "trained_tokens": 5768,
}


def test_create_job_call_and_parse():
    call = create_fine_tuning_job(FineTuningJobRequest())
    assert call.method == "POST"
    assert call.target() == "/fine_tuning/jobs"
    assert call.body == {"training_file": ""}
    job = call.parse(JOB_DOC)
    assert job.id == JOB_ID
    assert job.hyperparameters.epochs == "auto"
    assert job.result_files == ["file-abc123"]
    assert job.trained_tokens == 5768
    assert job.validation_file == ""


def test_full_request_body_encoding():
    request = FineTuningJobRequest(
        training_file="file-abc123",
        validation_file="file-def456",
        model="davinci-002",
        hyperparameters=Hyperparameters(epochs=3),
        suffix="custom",
    )
    call = create_fine_tuning_job(request)
    built = RequestBuilder().build(call.method, call.target(), call.body)
    assert json.loads(built.body) == {
        "training_file": "file-abc123",
        "validation_file": "file-def456",
        "model": "davinci-002",
        "hyperparameters": {"n_epochs": 3},
        "suffix": "custom",
    }


def test_empty_hyperparameters_are_an_empty_object():
    request = FineTuningJobRequest(training_file="f", hyperparameters=Hyperparameters())
    assert request.to_dict() == {"training_file": "f", "hyperparameters": {}}


def test_cancel_and_retrieve_calls():
    cancel = cancel_fine_tuning_job(JOB_ID)
    assert (cancel.method, cancel.target()) == ("POST", f"/fine_tuning/jobs/{JOB_ID}/cancel")
    assert cancel.body is None
    retrieve = retrieve_fine_tuning_job(JOB_ID)
    assert (retrieve.method, retrieve.target()) == ("GET", f"/fine_tuning/jobs/{JOB_ID}")
    assert retrieve.parse({}) == FineTuningJob()


@pytest.mark.parametrize(
    "after, limit, suffix",
    [
        (None, None, ""),
        ("last-event-id", None, "?after=last-event-id"),
        (None, 10, "?limit=10"),
        ("last-event-id", 10, "?after=last-event-id&limit=10"),
    ],
)
def test_list_events_targets(after, limit, suffix):
    call = list_fine_tuning_job_events(JOB_ID, after=after, limit=limit)
    assert call.method == "GET"
    assert call.target() == f"/fine_tuning/jobs/{JOB_ID}/events{suffix}"


def test_event_list_parse():
    call = list_fine_tuning_job_events(JOB_ID)
    empty = call.parse({"object": "", "data": None, "has_more": False})
    assert empty == FineTuningJobEventList()
    listing = call.parse(
        {
            "object": "list",
            "data": [{"id": "ev-1", "level": "info", "message": "started", "created_at": 5}],
            "has_more": True,
        }
    )
    assert listing.has_more is True
    assert [event.id for event in listing.data] == ["ev-1"]
    assert listing.data[0].message == "started"