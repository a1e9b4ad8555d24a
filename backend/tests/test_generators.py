import logging

import pytest

from classroom_ai.generators import FEEDBACK_FALLBACK, LESSON_FALLBACK, ContentGenerator
from classroom_ai.schemas import ChatResponse

from conftest import QUIZ_JSON, FakeGateway, chat_response


def _errors(caplog):
	return [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_lesson_content_is_first_choice_unchanged():
	gateway = FakeGateway(chat_response("  # Photosynthesis\n\nPlants make food.  ", "second choice"))
	assert ContentGenerator(gateway).generate_lesson_content("Photosynthesis") == "  # Photosynthesis\n\nPlants make food.  "


def test_prompt_is_system_then_user_with_topic_verbatim():
	gateway = FakeGateway(chat_response("ok"))
	ContentGenerator(gateway, model="fixed-model").generate_lesson_content("Fractions <b>& decimals</b>")

	call = gateway.calls[0]
	assert call["model"] == "fixed-model"
	assert [m.role for m in call["messages"]] == ["system", "user"]
	assert "Fractions <b>& decimals</b>" in call["messages"][1].content


def test_feedback_passes_submission_text_through():
	gateway = FakeGateway(chat_response("Great structure."))
	assert ContentGenerator(gateway).generate_feedback("My essay on rivers") == "Great structure."
	assert "My essay on rivers" in gateway.calls[0]["messages"][1].content


def test_quiz_is_parsed_from_first_choice():
	gateway = FakeGateway(chat_response(QUIZ_JSON))
	questions = ContentGenerator(gateway).generate_quiz("Photosynthesis", 3)

	assert len(questions) == 3
	assert "3-question" in gateway.calls[0]["messages"][1].content


@pytest.mark.parametrize("response", [None, ChatResponse(choices=[])])
@pytest.mark.parametrize(
	"call, fallback",
	[
		(lambda g: g.generate_lesson_content("Topic"), LESSON_FALLBACK),
		(lambda g: g.generate_quiz("Topic", 3), []),
		(lambda g: g.generate_feedback("Essay"), FEEDBACK_FALLBACK),
	],
)
def test_absent_response_returns_task_fallback_and_logs_once(caplog, response, call, fallback):
	generator = ContentGenerator(FakeGateway(response))
	with caplog.at_level(logging.ERROR):
		assert call(generator) == fallback
	assert len(_errors(caplog)) == 1


def test_fallbacks_are_distinct():
	assert LESSON_FALLBACK != FEEDBACK_FALLBACK
