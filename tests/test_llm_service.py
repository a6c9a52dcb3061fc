from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from upi_extractor.services.llm import ImageProcessingRequest, LLMService
from upi_extractor.utils.exceptions import ExtractionError


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create.return_value = _completion("  some text  ")
    return client


class TestLLMService:
    def test_generate_text(self, openai_client):
        service = LLMService(client=openai_client, model="test-model")

        assert service.generate_text("hello") == "some text"

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0
        assert kwargs["messages"][0]["role"] == "system"
        assert kwargs["messages"][1] == {"role": "user", "content": "hello"}

    def test_generate_from_image_sends_data_url(self, openai_client):
        service = LLMService(client=openai_client, model="test-model")
        image = ImageProcessingRequest(image_bytes=b"abc", mime_type="image/png")

        service.generate_from_image("read this", image)

        content = openai_client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        assert content[0] == {"type": "text", "text": "read this"}
        assert content[1] == {"type": "image_url", "image_url": {"url": "data:image/png;base64,YWJj"}}

    def test_api_failure_is_wrapped(self, openai_client):
        openai_client.chat.completions.create.side_effect = RuntimeError("quota exceeded")
        service = LLMService(client=openai_client)

        with pytest.raises(ExtractionError) as exc_info:
            service.generate_text("hello")
        assert exc_info.value.status_code == 500

    def test_empty_response_raises(self, openai_client):
        openai_client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        service = LLMService(client=openai_client)

        with pytest.raises(ExtractionError):
            service.generate_text("hello")

    def test_empty_content_raises(self, openai_client):
        openai_client.chat.completions.create.return_value = _completion(None)
        service = LLMService(client=openai_client)

        with pytest.raises(ExtractionError):
            service.generate_text("hello")
