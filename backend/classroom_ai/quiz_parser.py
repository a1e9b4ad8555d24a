from __future__ import annotations
import json
import logging
import re
from typing import Any, List
from pydantic import ValidationError
from .schemas import QuizQuestion

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*([\s\S]*?)\s*```\s*$")


def _strip_code_fence(text: str) -> str:
	match = _CODE_FENCE.match(text)
	return match.group(1) if match else text


def parse_quiz(raw_text: str) -> List[QuizQuestion]:
	"""Parse a quiz payload produced by the model.

	Accepts a JSON array of ``{question, options, answer}`` objects, or an object
	wrapping that array under ``questions``. Any failure yields an empty list;
	a partially valid quiz is never returned.
	"""
	try:
		data: Any = json.loads(_strip_code_fence(raw_text or ""))
	except json.JSONDecodeError as err:
		logger.error("[quiz] model output is not valid JSON: %s", err)
		return []
	if isinstance(data, dict):
		data = data.get("questions")
	if not isinstance(data, list):
		logger.error("[quiz] expected a JSON array of questions, got %s", type(data).__name__)
		return []
	try:
		return [QuizQuestion.model_validate(item) for item in data]
	except ValidationError as err:
		logger.error("[quiz] question failed validation: %s", err.errors()[0].get("msg"))
		return []
