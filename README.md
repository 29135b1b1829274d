# gptwire

`gptwire` describes the wire format of a chat-completion style HTTP API:
assistant threads, messages, runs and run steps, vector stores, models,
moderation and speech. It builds descriptions of requests, parses decoded
JSON replies into dataclasses, checks JSON against simple schemas, reads
rate-limit headers and reads server-sent event streams. It has no runtime
dependencies.

## Installation

```
pip install gptwire
```

To run the test suite:

```
pip install "gptwire[test]"
pytest
```

## What the package does not do

- It sends nothing over the network. There is no HTTP client, no
  authentication, no retries and no timeouts; you send each request with
  the client of your choice and add the `Authorization` header yourself.
- It has no builders for chat completions, text completions, embeddings,
  file uploads or audio transcription. `StreamReader` can read any
  event stream of JSON chunks, but the package does not create the request
  that opens one.
- There is no command-line program.

## Modules

| Module | Contents |
| --- | --- |
| `gptwire.api` | `ApiCall`, `HttpMethod`, `Pagination` |
| `gptwire.threads` | thread models; `create_thread`, `retrieve_thread`, `modify_thread`, `delete_thread` |
| `gptwire.messages` | message models; `create_message`, `list_messages`, `retrieve_message`, `modify_message`, `delete_message`, `retrieve_message_file`, `list_message_files` |
| `gptwire.runs` | run and run-step models and enums; `create_run`, `retrieve_run`, `modify_run`, `list_runs`, `submit_tool_outputs`, `cancel_run`, `create_thread_and_run`, `retrieve_run_step`, `list_run_steps` |
| `gptwire.vector_stores` | vector store, file and file-batch models; `create_vector_store`, `retrieve_vector_store`, `modify_vector_store`, `delete_vector_store`, `list_vector_stores`, `create_vector_store_file`, `retrieve_vector_store_file`, `delete_vector_store_file`, `list_vector_store_files`, `create_vector_store_file_batch`, `retrieve_vector_store_file_batch`, `cancel_vector_store_file_batch`, `list_vector_store_files_in_batch` |
| `gptwire.models` | `Model`, `ModelsList`, `Permission`, `FineTuneModelDeleteResponse`; `list_models`, `get_model`, `delete_fine_tune_model` |
| `gptwire.moderation` | `ModerationModel`, `ModerationRequest`, `ModerationResponse`, `Result`, `ResultCategories`, `ResultCategoryScores`; `moderations` |
| `gptwire.speech` | `SpeechModel`, `SpeechVoice`, `SpeechResponseFormat`, `CreateSpeechRequest`; `create_speech` |
| `gptwire.jsonschema` | `Definition`, `DataType`, `validate`, `verify_schema_and_unmarshal`, `generate_schema_for_type` |
| `gptwire.reasoning` | `ReasoningValidator` and its errors |
| `gptwire.ratelimit` | `RateLimitHeaders`, `ResetTime`, `parse_duration`, `new_rate_limit_headers` |
| `gptwire.streaming` | `StreamReader`, `StreamAPIError`, `TooManyEmptyStreamMessagesError` |

## Building requests

Every endpoint function returns an `ApiCall`: a frozen description holding
the `method`, the `path`, the `query` pairs, the JSON `body` and a `parse`
function for the reply. `url(base_url)` joins the base URL, the path and the
query (keys sorted); `headers(assistant_version)` gives `Content-Type:
application/json` when there is a body and, for assistant endpoints, the
`OpenAI-Beta: assistants=<version>` header.

```python
import json
from gptwire.threads import retrieve_thread

call = retrieve_thread("thread_abc123")
url = call.url("https://api.example.com/v1")
headers = {**call.headers("v2"), "Authorization": "Bearer token"}
body = None if call.body is None else json.dumps(call.body)
# send call.method to url with any HTTP client, then:
# thread = call.parse(response_json)
```

`create_speech` and `delete_vector_store_file` have no `parse` function: the
speech reply is raw audio and the deletion reply is not read.

List endpoints take an optional `Pagination`; its `to_query()` returns the
query pairs for the options that are set:

```python
from gptwire.api import Pagination
from gptwire.runs import list_runs

call = list_runs("thread_abc123", Pagination(limit=20, order="desc"))
```

`list_messages` takes `limit`, `order`, `after`, `before` and `run_id` as
separate keyword arguments.

Request models have `to_dict()`, which leaves out empty optional fields;
response models have a `from_dict()` class method that builds them from
decoded JSON. Enum-valued fields accept either the enum or a plain string,
and values the enum does not know are kept as strings.

`moderations` raises `InvalidModerationModelError` when the request names a
model other than the four current moderation models; an empty model is left
to the server. The request's `extra_query` entries become query parameters.

## JSON schemas

```python
from gptwire.jsonschema import DataType, Definition, validate

schema = Definition(
    type=DataType.OBJECT,
    properties={"location": Definition(type=DataType.STRING)},
    required=["location"],
)
validate(schema, {"location": "Paris"})   # True
validate(schema, {})                      # False
schema.to_json()                          # JSON text; "properties" is always present
```

`verify_schema_and_unmarshal(schema, content)` decodes JSON text, checks it
against the schema and returns the decoded value, raising
`SchemaValidationError` when it does not match. `Definition.unmarshal(content)`
does the same with its own schema.

`generate_schema_for_type` builds a `Definition` from a type or an instance:
`str`, `int`, `float`, `bool`, lists and homogeneous tuples, `Optional[...]`
and dataclasses. Dataclass fields may carry `json`, `description` and
`required` metadata; a `json` name ending in `,omitempty` makes the field
optional. Other types raise `UnsupportedTypeError`.

## Reasoning models

```python
from gptwire.reasoning import ReasoningValidator

ReasoningValidator().validate({"model": "o1-mini", "max_tokens": 100})
# raises MaxTokensDeprecatedError
```

The request may be a mapping or an object with the matching attributes. For
models whose names start with `o1` or `o3`, `validate` raises
`MaxTokensDeprecatedError`, `LogprobsNotSupportedError` or
`FixedSamplingParametersError` (all subclasses of `ReasoningModelError`).
Other models pass unchecked.

## Rate limits

`new_rate_limit_headers(headers)` reads the `x-ratelimit-*` headers
(case-insensitively) into a `RateLimitHeaders`; missing or malformed numbers
become 0. The reset values are `ResetTime` strings such as `"6m0s"`;
`ResetTime.time()` returns the local time at which the limit resets, or the
current time if the string cannot be parsed. `parse_duration` turns such a
string into a `timedelta` and raises `ValueError` for malformed input.

## Streams

`StreamReader(source, empty_messages_limit=300, parse=None)` reads a binary
file-like event stream line by line. `recv_raw()` returns the payload of the
next `data:` line; `recv()` decodes it as JSON and passes it through `parse`
if one was given. At `data: [DONE]` or the end of the input both raise
`EOFError`. Iterating over the reader yields decoded chunks until then, and
using it as a context manager closes the source on exit.

Lines that are not `data:` lines are collected; if they form an error object
when the stream ends, `StreamAPIError` is raised with the server's `message`,
`type`, `param` and `code`. More than `empty_messages_limit` such lines in a
row raise `TooManyEmptyStreamMessagesError`.