# gptkit

gptkit is a small, dependency-free toolkit for working with a GPT-style HTTP
API: typed request and response models, helpers that describe each endpoint
call, a multipart form builder, JSON Schema definitions for function calling,
rate-limit header parsing and a reader for server-sent event streams.

It performs no network I/O of its own. You describe a call with gptkit, send it
with whatever HTTP client you like, and turn the JSON you get back into typed
objects with gptkit again.

## What is inside

| Module | Purpose |
| --- | --- |
| `gptkit.codec` | `JSONMarshaller`, `JSONUnmarshaler` and `to_jsonable` for turning models into JSON and back |
| `gptkit.request_builder` | `RequestBuilder`, `HTTPRequest`, `ApiCall` and `encode_query` |
| `gptkit.form_builder` | `FormBuilder`, a `multipart/form-data` writer for file uploads |
| `gptkit.accumulator` | `ErrorAccumulator`, which collects the body of an error sent inside a stream |
| `gptkit.stream_reader` | `StreamReader`, which reads `data: ...` event streams up to `[DONE]` |
| `gptkit.jsonschema` | `DataType` and `Definition`, a minimal JSON Schema description |
| `gptkit.ratelimit` | `RateLimitHeaders`, `ResetTime` and `parse_duration` |
| `gptkit.models` | listing, fetching and deleting models |
| `gptkit.moderation` | moderation requests and results |
| `gptkit.image` | image generation, edits and variations |
| `gptkit.fine_tuning` | fine-tuning jobs and their events |
| `gptkit.thread` | assistant threads |
| `gptkit.messages` | messages in a thread and their files |
| `gptkit.run` | runs, run steps and tool outputs |
| `gptkit.speech` | text-to-speech requests |

## Describing a call

Every endpoint helper, such as `gptkit.thread.create_thread`,
`gptkit.messages.list_messages` or `gptkit.run.list_runs`, returns an
`ApiCall`. It holds the HTTP method, the path below the API root, the body,
query parameters, extra headers (the assistant endpoints add
`OpenAI-Beta: assistants=v1`), the model name where the endpoint takes one, and
`parse`, the function that turns the decoded JSON reply into a typed object.
`ApiCall.target()` gives the path together with its encoded query string;
parameters that are `None` are left out and the rest are sorted by name.

```python
from gptkit.thread import ThreadMessage, ThreadRequest, create_thread
from gptkit.run import Pagination, list_runs

call = create_thread(
    ThreadRequest(messages=[ThreadMessage(role="user", content="Hello, World!")])
)
print(call.target())    # "/threads"

runs = list_runs("thread_abc123", Pagination(limit=20, order="desc"))
print(runs.target())    # "/threads/thread_abc123/runs?limit=20&order=desc"
```

Checks happen before anything is sent. `gptkit.moderation.moderations` raises
`InvalidModerationModelError` for a model other than `text-moderation-stable`
or `text-moderation-latest` (an empty model is allowed), and
`gptkit.speech.create_speech` raises `InvalidSpeechModelError` or
`InvalidVoiceError` for an unknown model or voice.

`gptkit.image.create_edit_image` and `create_variation_image` write their
request as a `multipart/form-data` body with `FormBuilder` and set the matching
`Content-Type` header on the call.

## Building the request

`RequestBuilder.build` turns a method, URL, body and headers into an
`HTTPRequest`. Bytes and readable file objects are passed through as they are;
any other body is encoded as compact JSON by `JSONMarshaller`.

```python
from gptkit.request_builder import RequestBuilder

request = RequestBuilder().build(
    call.method,
    "https://api.example.com/v1" + call.target(),
    call.body,
    {**call.headers, "Authorization": "Bearer token"},
)
```

## Reading responses

Response models build themselves from decoded JSON with `from_dict`, and each
`ApiCall` carries the right one in `parse`:

```python
from gptkit.thread import Thread

thread = Thread.from_dict(
    {"id": "thread_abc123", "object": "thread", "created_at": 1234567890}
)
print(thread.id)
```

`RateLimitHeaders.from_headers` reads the `x-ratelimit-*` headers of a
response, matching names without regard to case; a missing or malformed number
reads as zero. `ResetTime.time()` turns a reset value such as `"1m30s"` into a
point in time, and an unparsable value into the current time.
`parse_duration` parses such values into a `timedelta` and raises `ValueError`
for malformed ones.

## Streams

`StreamReader` takes the lines of a streamed response body, each ending in a
newline. Each call to `recv()` returns the next decoded event and raises
`EOFError` once the server has sent `data: [DONE]` or the lines run out;
iterating over the reader yields events until then. An error object sent in
place of events is raised as `StreamAPIError`, and a stream that keeps sending
empty or unknown lines past its limit (300 by default) raises
`TooManyEmptyStreamMessagesError`. The reader can be used as a context manager
and closes its source on exit.

## JSON Schema for function calling

`gptkit.jsonschema.Definition` describes the parameters of a function. Its
`to_dict()` and `to_json()` always include a `properties` object, empty when no
properties were given, at every level of nesting; other empty fields are left
out.

## What it does not do

gptkit has no HTTP client: it does not send requests, hold a base URL or API
key, retry, or time out. Sending an `HTTPRequest` and decoding the reply is up
to the caller. It also has no helpers for chat or text completions, embeddings,
file uploads or audio transcription.

## Running the tests

The test suite uses pytest and lives in `tests/`:

```
pip install -e ".[test]"
pytest tests
```