"""Tests for the OpenAI-compatible patch generator."""

from types import SimpleNamespace

import httpx
import openai
import pytest

from coderoast.config import GeneratorConfig
from coderoast.exceptions import PatchGenerationError
from coderoast.fixes.generator import OpenAIPatchGenerator


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class TestOpenAIPatchGenerator:
    def test_sends_configured_request(self):
        completions = FakeCompletions(content="--- a/x\n+++ b/x\n")
        config = GeneratorConfig(api_key="k", model="m", temperature=0.2, max_output_tokens=123)
        generator = OpenAIPatchGenerator(config, client=fake_client(completions))

        assert generator.generate("fix it") == "--- a/x\n+++ b/x\n"
        call = completions.calls[0]
        assert call["model"] == "m"
        assert call["temperature"] == 0.2
        assert call["max_tokens"] == 123
        assert call["messages"] == [{"role": "user", "content": "fix it"}]

    def test_api_error_becomes_patch_generation_error(self):
        request = httpx.Request("POST", "https://example.invalid/v1/chat/completions")
        completions = FakeCompletions(error=openai.APIConnectionError(request=request))
        generator = OpenAIPatchGenerator(GeneratorConfig(api_key="k"), client=fake_client(completions))

        with pytest.raises(PatchGenerationError, match="Patch generation failed"):
            generator.generate("prompt")

    def test_empty_response(self):
        generator = OpenAIPatchGenerator(
            GeneratorConfig(api_key="k"), client=fake_client(FakeCompletions(content=""))
        )
        with pytest.raises(PatchGenerationError, match="empty response"):
            generator.generate("prompt")

    def test_requires_api_key_without_client(self):
        with pytest.raises(PatchGenerationError, match="no API key"):
            OpenAIPatchGenerator(GeneratorConfig(api_key=None))
