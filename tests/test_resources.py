import pytest

from conftest import json_response
from openai_api.resources.assistants import AssistantFileRequest, AssistantRequest
from openai_api.resources.chat import (
    ChatCompletionMessage,
    ChatCompletionRequest,
    FinishReason,
    Function,
    JSONSchemaType,
    Tool,
    ToolChoiceType,
)
from openai_api.resources.completions import CompletionRequest, EditRequest
from openai_api.resources.embeddings import EmbeddingRequest
from openai_api.resources.fine_tuning import CreateFineTuningJobRequest, FineTuningStatus, HyperParameters
from openai_api.resources.images import ImageEditRequest, ImageGenerationRequest
from openai_api.resources.messages import CreateMessageRequest
from openai_api.resources.models import EmbeddingModel, GPT3
from openai_api.resources.moderations import CreateModerationRequest


def get_weather(city: str, days: int = 1):
    """Forecast for a city."""


def test_function_from_callable():
    function = Function.from_callable(get_weather)

    assert function.name == "get_weather"
    assert function.description == "Forecast for a city."
    assert function.parameters.required == ["city"]
    assert function.parameters.properties["days"].type == JSONSchemaType.INTEGER
    assert function.parameters.properties["days"].default == 1


def test_chat_request_with_tools(client, transport):
    transport.add("POST", "/chat/completions", {
        "id": "chatcmpl_1",
        "object": "chat.completion",
        "model": "gpt-3.5-turbo",
        "choices": [{
            "index": 0,
            "message": {
                "role": "assistant",
                "content": None,
                "tool_calls": [{"id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": "{\"city\": \"Oslo\"}"}}],
            },
            "finish_reason": "tool_calls",
        }],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    })
    tool = Tool(Function.from_callable(get_weather))

    request = ChatCompletionRequest(
        GPT3.GPT35_TURBO,
        [ChatCompletionMessage.system("Be terse."), ChatCompletionMessage.user("Weather in Oslo?")],
        tools=[tool],
        tool_choice=tool,
    )
    response = client.chat.completions.create(request)

    body = transport.calls[0].body
    assert body["tool_choice"] == {"type": "function", "function": {"name": "get_weather"}}
    assert body["tools"][0]["function"]["parameters"]["properties"]["city"] == {"type": "string"}
    choice = response.choices[0]
    assert choice.finish_reason == FinishReason.TOOL_CALLS
    assert choice.message.tool_calls[0].function.name == "get_weather"
    assert response.get_choice() == ""
    assert response.usage.total_tokens == 15


def test_tool_choice_auto_and_vision_parts():
    request = ChatCompletionRequest(
        "gpt-4o",
        ChatCompletionMessage.vision("What is this?", ["https://img.test/a.png"], detail="low"),
        tool_choice=ToolChoiceType.AUTO,
    )

    body = request.to_dict()
    assert body["tool_choice"] == "auto"
    assert body["messages"][0]["content"] == [
        {"type": "text", "text": "What is this?"},
        {"type": "image_url", "image_url": {"url": "https://img.test/a.png", "detail": "low"}},
    ]


def test_moderation_categories_use_wire_names(client, transport):
    categories = {
        "hate": False, "hate/threatening": False, "self-harm": True, "sexual": False,
        "sexual/minors": False, "violence": True, "violence/graphic": False,
    }
    scores = {key: 0.9 if value else 0.01 for key, value in categories.items()}
    transport.add("POST", "/moderations", {
        "id": "modr_1",
        "model": "text-moderation-007",
        "results": [{"flagged": True, "categories": categories, "category_scores": scores}],
    })

    response = client.moderations.create(CreateModerationRequest("some text"))

    result = response.results[0]
    assert result.categories.self_harm is True
    assert result.category_scores.hate_threatening == 0.01
    assert result.flagged_categories() == ["self-harm", "violence"]
    assert result.categories.to_dict()["hate/threatening"] is False


def test_embeddings(client, transport):
    transport.add("POST", "/embeddings", {
        "object": "list",
        "model": "text-embedding-3-small",
        "data": [{"object": "embedding", "index": 0, "embedding": [0.1, 0.2]}],
    })

    response = client.embeddings.create(EmbeddingRequest(EmbeddingModel.TEXT_EMBEDDING_3_SMALL, "hello"))

    assert response.data[0].embedding == [0.1, 0.2]
    assert transport.calls[0].body == {"model": "text-embedding-3-small", "input": "hello"}


def test_image_generation_and_edit(client, transport):
    transport.add("POST", "/images/generations", {"created": 1, "data": [{"url": "https://img.test/1.png"}]})
    transport.add("POST", "/images/edits", {"created": 2, "data": [{"b64_json": "aGk="}]})

    generated = client.images.generate(ImageGenerationRequest("a cat", n=1))
    edited = client.images.edit(ImageEditRequest(("cat.png", b"PNG", "image/png"), "add a hat"))

    assert generated.data[0].url == "https://img.test/1.png"
    assert edited.data[0].b64_json == "aGk="
    edit_call = transport.calls[1]
    assert edit_call.fields == {"prompt": "add a hat"}
    assert set(edit_call.files) == {"image"}


def test_fine_tuning_lifecycle(client, transport):
    job = {"id": "ftjob_1", "object": "fine_tuning.job", "model": "gpt-3.5-turbo", "training_file": "file_1"}
    transport.add("POST", "/fine_tuning/jobs", dict(job, status="validating_files"))
    transport.add(
        "GET",
        "/fine_tuning/jobs/ftjob_1",
        dict(job, status="running"),
        dict(job, status="succeeded", fine_tuned_model="ft:gpt-3.5-turbo:org::abc"),
    )
    transport.add("GET", "/fine_tuning/jobs/ftjob_1/events", {
        "object": "list",
        "data": [{"id": "ev_1", "level": "info", "message": "Job succeeded"}],
        "has_more": False,
    })

    request = CreateFineTuningJobRequest("gpt-3.5-turbo", "file_1", hyperparameters=HyperParameters(n_epochs=3))
    created = client.fine_tuning.create(request)
    assert created.status == FineTuningStatus.VALIDATING_FILES
    assert transport.calls[0].body == {"model": "gpt-3.5-turbo", "training_file": "file_1", "hyperparameters": {"n_epochs": 3}}

    done = client.fine_tuning.await_terminal("ftjob_1", poll_interval=0.01, max_wait=5)
    assert done.is_terminal
    assert done.fine_tuned_model == "ft:gpt-3.5-turbo:org::abc"

    events = client.fine_tuning.list_events("ftjob_1", limit=10)
    assert [e.message for e in events] == ["Job succeeded"]
    assert transport.calls[-1].params == {"after": None, "limit": 10}


def test_assistant_crud(client, transport):
    assistant = {"id": "asst_1", "object": "assistant", "model": "gpt-4", "tools": [{"type": "code_interpreter"}]}
    transport.add("POST", "/assistants", assistant)
    transport.add("POST", "/assistants/asst_1", dict(assistant, name="Tutor"))
    transport.add("DELETE", "/assistants/asst_1", {"id": "asst_1", "object": "assistant.deleted", "deleted": True})
    transport.add("POST", "/assistants/asst_1/files", {"id": "file_1", "assistant_id": "asst_1"})

    created = client.assistants.create(AssistantRequest("gpt-4", tools=[{"type": "code_interpreter"}]))
    assert created.tools == [{"type": "code_interpreter"}]

    modified = client.assistants.modify("asst_1", AssistantRequest("gpt-4").set(name="Tutor"))
    assert modified.name == "Tutor"
    assert transport.calls[1].body == {"model": "gpt-4", "name": "Tutor"}

    assert client.assistants.delete("asst_1").deleted is True
    assert client.assistants.create_file("asst_1", AssistantFileRequest("file_1")).assistant_id == "asst_1"


def test_messages_text_parts(client, transport):
    message = {
        "id": "msg_1",
        "object": "thread.message",
        "thread_id": "thread_1",
        "role": "assistant",
        "content": [
            {"type": "text", "text": {"value": "Hello", "annotations": []}},
            {"type": "image_file", "image_file": {"file_id": "file_9"}},
            {"type": "text", "text": {"value": "there", "annotations": []}},
        ],
    }
    transport.add("POST", "/threads/thread_1/messages", dict(message, role="user"))
    transport.add("GET", "/threads/thread_1/messages", json_response(
        {"object": "list", "data": [message], "first_id": "msg_1", "last_id": "msg_1", "has_more": False},
        headers={"x-request-id": "list_1"},
    ))

    client.messages.create("thread_1", CreateMessageRequest("Hi", metadata={"source": "test"}))
    assert transport.calls[0].body == {"role": "user", "content": "Hi", "metadata": {"source": "test"}}

    page = client.messages.list("thread_1", order="asc")
    assert page.headers == {"x-request-id": "list_1"}
    assert page.data[0].text == "Hello\nthere"
    assert page.data[0].content[1].image_file.file_id == "file_9"


@pytest.mark.parametrize("model", [GPT3.GPT35_TURBO, "gpt-3.5-turbo"])
def test_model_retrieve_accepts_enum_or_string(client, transport, model):
    transport.add("GET", "/models/gpt-3.5-turbo", {"id": "gpt-3.5-turbo", "object": "model", "owned_by": "openai"})

    assert client.models.retrieve(model).owned_by == "openai"


def test_legacy_completion_and_edit(client, transport):
    transport.add("POST", "/completions", {
        "id": "cmpl_1",
        "object": "text_completion",
        "choices": [{"text": "\n\nThis is indeed a test", "index": 0, "finish_reason": "length"}],
    })
    transport.add("POST", "/edits", {"object": "edit", "choices": [{"text": "What day of the week is it?", "index": 0}]})

    completion = client.completions.create(CompletionRequest(GPT3.GPT35_TURBO_INSTRUCT, "Say this is a test", max_tokens=7))
    edit = client.edits.create(EditRequest("text-davinci-edit-001", "Fix the spelling mistakes", input="What day of the wek is it?"))

    assert completion.choices[0].finish_reason == "length"
    assert transport.calls[0].body == {"model": "gpt-3.5-turbo-instruct", "prompt": "Say this is a test", "max_tokens": 7}
    assert edit.choices[0].text == "What day of the week is it?"
