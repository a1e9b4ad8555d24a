from __future__ import annotations

from typing import Any, Dict, List, Optional

from classroom_ai.schemas import ChatResponse


def chat_response(*contents: str) -> ChatResponse:
	return ChatResponse.model_validate(
		{"choices": [{"message": {"role": "assistant", "content": c}} for c in contents]}
	)


class FakeGateway:
	"""Stands in for LLMGateway; returns a canned response and records calls."""

	default_model = "test-model"

	def __init__(self, response: Optional[ChatResponse] = None) -> None:
		self.response = response
		self.calls: List[Dict[str, Any]] = []

	def complete(self, model, messages, *, context="llm"):
		self.calls.append({"model": model, "messages": list(messages), "context": context})
		return self.response



QUIZ_JSON = """[
  {"question": "What gas do plants absorb?", "options": ["Oxygen", "Carbon dioxide", "Nitrogen", "Helium"], "answer": "Carbon dioxide"},
  {"question": "Where does photosynthesis occur?", "options": ["Mitochondria", "Nucleus", "Chloroplast", "Ribosome"], "answer": "Chloroplast"},
  {"question": "Which pigment captures light?", "options": ["Chlorophyll", "Melanin", "Keratin", "Hemoglobin"], "answer": "Chlorophyll"}
]"""
