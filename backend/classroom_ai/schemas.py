from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

Role = Literal["system", "user", "assistant"]
OutcomeStatus = Literal["success", "not_found", "failed"]


class ChatMessage(BaseModel):
	role: Role
	content: str


class ChoiceMessage(BaseModel):
	role: Optional[str] = None
	content: str


class Choice(BaseModel):
	message: ChoiceMessage


class ChatResponse(BaseModel):
	# Providers return extra fields (id, usage, finish_reason...); only choices are read
	choices: List[Choice] = Field(default_factory=list)

	@property
	def usable(self) -> bool:
		return bool(self.choices)

	def first_content(self) -> str:
		return self.choices[0].message.content


class QuizQuestion(BaseModel):
	question: str
	options: List[str] = Field(min_length=2)
	answer: str

	@model_validator(mode="after")
	def _answer_is_an_option(self) -> "QuizQuestion":
		# Forms rejects blank or repeated choice values at batchUpdate time
		if any(not option.strip() for option in self.options):
			raise ValueError("options must not be blank")
		if len(set(self.options)) != len(self.options):
			raise ValueError("options must be unique")
		if self.answer not in self.options:
			raise ValueError("answer must be one of the options")
		return self


class GradeResult(BaseModel):
	"""Outcome of extracting a score from model output.

	``ok`` separates a real score (including a legitimate 0) from a failure.
	Failed results always carry ``score=0`` and an ``error`` code.
	"""
	score: int = 0
	ok: bool
	error: Optional[Literal["unparsable", "out_of_range", "no_response"]] = None
	raw: str = ""

	@classmethod
	def failure(cls, error: str, raw: str = "") -> "GradeResult":
		return cls(score=0, ok=False, error=error, raw=raw)


class ProgressRecord(BaseModel):
	timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
	course_id: str
	student_id: str
	grade: int

	def as_row(self) -> List[Any]:
		return [self.timestamp.isoformat(), self.course_id, self.student_id, self.grade]


class DocumentHandle(BaseModel):
	document_id: str
	title: str


class FormHandle(BaseModel):
	form_id: str
	title: str


class WorkflowOutcome(BaseModel):
	status: OutcomeStatus
	message: str
	detail: Dict[str, Any] = Field(default_factory=dict)

	@classmethod
	def success(cls, message: str, **detail: Any) -> "WorkflowOutcome":
		return cls(status="success", message=message, detail=detail)

	@classmethod
	def not_found(cls, message: str) -> "WorkflowOutcome":
		return cls(status="not_found", message=message)

	@classmethod
	def failed(cls, message: str) -> "WorkflowOutcome":
		return cls(status="failed", message=message)


# ---- Action API request bodies ----

class LessonRequest(BaseModel):
	course_id: str = Field(min_length=1)
	topic: str = Field(min_length=1)


class QuizRequest(BaseModel):
	course_id: str = Field(min_length=1)
	topic: str = Field(min_length=1)
	num_questions: int = Field(default=5, ge=1, le=50)


class GradeRequest(BaseModel):
	course_id: str = Field(min_length=1)
	coursework_id: str = Field(min_length=1)
	student_id: str = Field(min_length=1)
	submission_text: str = Field(min_length=1)
	rubric: str = Field(min_length=1)


class FeedbackRequest(BaseModel):
	course_id: str = Field(min_length=1)
	coursework_id: str = Field(min_length=1)
	student_id: str = Field(min_length=1)
	submission_text: str = Field(min_length=1)
