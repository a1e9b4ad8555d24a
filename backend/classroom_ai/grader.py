from __future__ import annotations
import logging
import re
from typing import Optional
from .llm_client import LLMGateway, response_text
from .schemas import ChatMessage, GradeResult

logger = logging.getLogger(__name__)

MIN_GRADE = 0
MAX_GRADE = 100

GRADER_SYSTEM_PROMPT = (
	"You are a strict but fair grader. Score the student's submission against the rubric "
	f"on a scale from {MIN_GRADE} to {MAX_GRADE}. "
	"Respond with ONLY the integer score: no words, no punctuation, no explanation."
)

_INTEGER = re.compile(r"[+-]?\d+")


def parse_grade(raw: str) -> GradeResult:
	"""Parse a bare base-10 integer score out of model output.

	Whitespace is trimmed. Anything else around the number, or a value outside
	0-100, is rejected rather than coerced.
	"""
	text = (raw or "").strip()
	if not _INTEGER.fullmatch(text):
		logger.warning("[grade] could not parse a score from model output: %r", text[:200])
		return GradeResult.failure("unparsable", raw=raw or "")
	value = int(text)
	if value < MIN_GRADE or value > MAX_GRADE:
		logger.warning("[grade] score %d outside %d-%d, rejecting", value, MIN_GRADE, MAX_GRADE)
		return GradeResult.failure("out_of_range", raw=raw)
	return GradeResult(score=value, ok=True, raw=raw)


class Grader:
	def __init__(self, gateway: LLMGateway, model: Optional[str] = None) -> None:
		self.gateway = gateway
		self.model = model or gateway.default_model

	def grade(self, submission: str, rubric: str) -> GradeResult:
		messages = [
			ChatMessage(role="system", content=GRADER_SYSTEM_PROMPT),
			ChatMessage(role="user", content=f"Rubric:\n{rubric}\n\nSubmission:\n{submission}"),
		]
		text = response_text(self.gateway.complete(self.model, messages, context="grade"))
		if text is None:
			logger.error("[grade] no usable response from the model")
			return GradeResult.failure("no_response")
		return parse_grade(text)
