from __future__ import annotations
import logging
from typing import List, Optional
from .llm_client import LLMGateway, response_text
from .quiz_parser import parse_quiz
from .schemas import ChatMessage, QuizQuestion

logger = logging.getLogger(__name__)

LESSON_FALLBACK = "Error generating lesson content."
FEEDBACK_FALLBACK = "Error generating feedback."

LESSON_SYSTEM_PROMPT = (
	"You are an experienced teacher who writes clear, well-structured lesson content "
	"for a classroom audience. Include learning objectives, an explanation of the key ideas, "
	"a worked example and a short recap."
)
QUIZ_SYSTEM_PROMPT = (
	"You are an assessment writer who creates multiple-choice quizzes. "
	"Return ONLY a JSON array. Each element must be an object with keys: "
	"question (string), options (array of 4 strings), answer (string, exactly equal to one of the options). "
	"No markdown, no extra commentary."
)
FEEDBACK_SYSTEM_PROMPT = (
	"You are a supportive teacher giving written feedback on student work. "
	"Point out strengths, the most important areas to improve, and concrete next steps."
)


class ContentGenerator:
	def __init__(self, gateway: LLMGateway, model: Optional[str] = None) -> None:
		self.gateway = gateway
		self.model = model or gateway.default_model

	def _ask(self, system: str, user: str, context: str) -> Optional[str]:
		messages = [
			ChatMessage(role="system", content=system),
			ChatMessage(role="user", content=user),
		]
		text = response_text(self.gateway.complete(self.model, messages, context=context))
		if text is None:
			logger.error("[%s] no usable response from the model", context)
		return text

	def generate_lesson_content(self, topic: str) -> str:
		text = self._ask(LESSON_SYSTEM_PROMPT, f"Create lesson content on the topic: {topic}", "lesson")
		return LESSON_FALLBACK if text is None else text

	def generate_quiz(self, topic: str, num_questions: int) -> List[QuizQuestion]:
		text = self._ask(
			QUIZ_SYSTEM_PROMPT,
			f"Generate a {num_questions}-question multiple-choice quiz on the topic: {topic}",
			"quiz",
		)
		if text is None:
			return []
		return parse_quiz(text)

	def generate_feedback(self, submission_text: str) -> str:
		text = self._ask(FEEDBACK_SYSTEM_PROMPT, f"Provide feedback on this student submission:\n\n{submission_text}", "feedback")
		return FEEDBACK_FALLBACK if text is None else text
