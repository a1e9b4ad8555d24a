from __future__ import annotations
from typing import Any, Dict, List, Sequence
from .schemas import FormHandle, QuizQuestion


def multiple_choice_item(question: QuizQuestion, point_value: int = 1) -> Dict[str, Any]:
	return {
		"title": question.question,
		"questionItem": {
			"question": {
				"required": True,
				"grading": {
					"pointValue": point_value,
					"correctAnswers": {"answers": [{"value": question.answer}]},
				},
				"choiceQuestion": {
					"type": "RADIO",
					"options": [{"value": option} for option in question.options],
					"shuffle": False,
				},
			}
		},
	}


class FormService:
	def __init__(self, forms_service: Any) -> None:
		self._forms = forms_service.forms()

	def create_form(self, title: str) -> FormHandle:
		# The Forms API only accepts a title on create; everything else goes through batchUpdate
		form = self._forms.create(body={"info": {"title": title}}).execute()
		return FormHandle(form_id=form["formId"], title=title)

	def make_quiz(self, handle: FormHandle) -> None:
		self._batch_update(handle, [{
			"updateSettings": {
				"settings": {"quizSettings": {"isQuiz": True}},
				"updateMask": "quizSettings.isQuiz",
			}
		}])

	def add_multiple_choice(self, handle: FormHandle, questions: Sequence[QuizQuestion]) -> None:
		requests = [
			{"createItem": {"item": multiple_choice_item(q), "location": {"index": i}}}
			for i, q in enumerate(questions)
		]
		if requests:
			self._batch_update(handle, requests)

	def get_published_url(self, handle: FormHandle) -> str:
		form = self._forms.get(formId=handle.form_id).execute()
		return form["responderUri"]

	def _batch_update(self, handle: FormHandle, requests: List[Dict[str, Any]]) -> None:
		self._forms.batchUpdate(formId=handle.form_id, body={"requests": requests}).execute()
