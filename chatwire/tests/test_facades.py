"""Tests for the ``Chat`` and ``Embedding`` facades."""
from __future__ import annotations

from typing import List

import httpx
import pytest

from chatwire import Chat, Embedding
from chatwire.base.errors import ErrorCode, ProviderError
from chatwire.embedding import EmbeddingRequest, EmbeddingResponse
from chatwire.ollama import OllamaEmbeddingModel
from chatwire.prompt import Prompt, Role, new_prompt, system_message, user_message
from chatwire.tests.helpers import RecordingSink


class EchoChatModel:
    """Returns (or streams) the text of the last message."""

    def __init__(self) -> None:
        self.prompts: List[Prompt] = []

    def call(self, prompt, *, token=None):
        self.prompts.append(prompt)
        return prompt.messages[-1].text

    def stream(self, prompt, sink, *, token=None):
        self.prompts.append(prompt)
        for ch in prompt.messages[-1].text:
            sink(ch.encode())


class FakeEmbeddingModel:
    def __init__(self) -> None:
        self.requests: List[EmbeddingRequest] = []

    def call(self, request, *, token=None):
        self.requests.append(request)
        return EmbeddingResponse.from_vectors([[float(len(t)), 1.0] for t in request.inputs])


def test_chat_returns_echo_of_single_user_turn():
    model = EchoChatModel()
    assert Chat(model).chat("hello") == "hello"  # nosec B101
    (prompt,) = model.prompts
    assert len(prompt.messages) == 1 and prompt.messages[0].role is Role.USER  # nosec B101


def test_chat_stream_forwards_to_sink():
    sink = RecordingSink()
    Chat(EchoChatModel()).chat_stream("abc", sink)
    assert sink.frames == [b"a", b"b", b"c"]  # nosec B101


def test_prompt_and_stream_pass_prompt_through():
    model = EchoChatModel()
    chat = Chat(model)
    prompt = new_prompt(system_message("s"), user_message("u"))
    assert chat.prompt(prompt) == "u"  # nosec B101
    chat.stream(prompt, RecordingSink())
    assert model.prompts == [prompt, prompt]  # nosec B101


def test_chat_propagates_adapter_errors():
    class Failing:
        def call(self, prompt, *, token=None):
            raise ProviderError(code=ErrorCode.AUTH, message="denied", provider="p")

        def stream(self, prompt, sink, *, token=None):
            raise AssertionError("unused")

    with pytest.raises(ProviderError):
        Chat(Failing()).chat("x")


def test_embeds_uses_one_batched_call():
    model = FakeEmbeddingModel()
    vectors = Embedding(model).embeds("a", "bb", "ccc")
    assert vectors == [(1.0, 1.0), (2.0, 1.0), (3.0, 1.0)]  # nosec B101
    assert [r.inputs for r in model.requests] == [("a", "bb", "ccc")]  # nosec B101


def test_embed_equals_first_of_embeds():
    facade = Embedding(FakeEmbeddingModel())
    assert facade.embed("x") == facade.embeds("x")[0]  # nosec B101


def test_embed_propagates_backend_error(make_ollama_client):
    client = make_ollama_client(lambda r: httpx.Response(500, json={"error": "boom"}))
    with pytest.raises(ProviderError) as info:
        Embedding(OllamaEmbeddingModel(client, "e")).embed("x")
    assert "boom" in info.value.message  # nosec B101
