import json
import logging

import httpx
import pytest

from classroom_ai.errors import ConfigurationError
from classroom_ai.llm_client import LLMConfig, LLMGateway, response_text
from classroom_ai.schemas import ChatMessage

URL = "https://llm.test/v1/chat/completions"
MESSAGES = [
	ChatMessage(role="system", content="You are a teacher."),
	ChatMessage(role="user", content="Explain fractions."),
]


def _gateway(handler):
	config = LLMConfig(api_key="sk-test", base_url=URL, default_model="gpt-test")
	return LLMGateway(config, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_missing_api_key_is_a_configuration_error():
	with pytest.raises(ConfigurationError):
		LLMGateway(LLMConfig(api_key=None, base_url=URL, default_model="gpt-test"))


def test_complete_posts_model_and_messages_with_bearer_token():
	seen = {}

	def handler(request: httpx.Request) -> httpx.Response:
		seen["url"] = str(request.url)
		seen["auth"] = request.headers["Authorization"]
		seen["body"] = json.loads(request.content)
		return httpx.Response(200, json={
			"id": "chatcmpl-1",
			"choices": [{"index": 0, "message": {"role": "assistant", "content": "Halves and quarters."}}],
			"usage": {"total_tokens": 12},
		})

	response = _gateway(handler).complete("gpt-test", MESSAGES)

	assert response is not None
	assert response_text(response) == "Halves and quarters."
	assert seen["url"] == URL
	assert seen["auth"] == "Bearer sk-test"
	assert seen["body"] == {
		"model": "gpt-test",
		"messages": [
			{"role": "system", "content": "You are a teacher."},
			{"role": "user", "content": "Explain fractions."},
		],
	}


def test_complete_makes_exactly_one_request_on_server_error(caplog):
	calls = []

	def handler(request):
		calls.append(request)
		return httpx.Response(503, text="overloaded")

	with caplog.at_level(logging.ERROR):
		assert _gateway(handler).complete("gpt-test", MESSAGES, context="lesson") is None
	assert len(calls) == 1
	assert "[lesson]" in caplog.text


def test_complete_returns_none_on_transport_error():
	def handler(request):
		raise httpx.ConnectError("connection refused", request=request)

	assert _gateway(handler).complete("gpt-test", MESSAGES) is None


def test_complete_returns_none_on_malformed_body():
	def handler(request):
		return httpx.Response(200, text="<html>not json</html>")

	assert _gateway(handler).complete("gpt-test", MESSAGES) is None


def test_complete_returns_none_when_choices_missing_content():
	def handler(request):
		return httpx.Response(200, json={"choices": [{"message": {"role": "assistant"}}]})

	assert _gateway(handler).complete("gpt-test", MESSAGES) is None


def test_complete_treats_empty_choices_as_absent():
	def handler(request):
		return httpx.Response(200, json={"choices": []})

	assert _gateway(handler).complete("gpt-test", MESSAGES) is None


def test_response_text_of_absent_response_is_none():
	assert response_text(None) is None
