"""
Teacher-facing workflows.

Each workflow runs one user action end to end: it calls the model through a
generator or the grader, then drives Classroom, Docs, Forms and the progress
log. Workflows are the only layer that reports to the user, always as a
``WorkflowOutcome`` with a short message. Errors from external services are
logged with context and turned into a ``failed`` outcome.
"""

from __future__ import annotations

import logging
from statistics import mean
from typing import Any, Dict, List, Optional

from .classroom import ClassroomService
from .documents import DocumentService
from .forms import FormService
from .generators import FEEDBACK_FALLBACK, LESSON_FALLBACK, ContentGenerator
from .grader import Grader
from .progress import ProgressLog
from .schemas import DocumentHandle, ProgressRecord, WorkflowOutcome

logger = logging.getLogger(__name__)

GRADE_UPDATE_MASK = "assignedGrade,draftGrade"


def _find_submission(
	classroom: ClassroomService,
	course_id: str,
	coursework_id: str,
	student_id: str,
	context: str,
) -> Optional[Dict[str, Any]]:
	"""Return the first matching submission or None. Lookup errors propagate."""
	submissions = classroom.get_submissions(course_id, coursework_id, student_id)
	if not submissions:
		logger.warning("[%s] no submission found for course=%s coursework=%s student=%s", context, course_id, coursework_id, student_id)
		return None
	return submissions[0]


class LessonWorkflow:
	def __init__(self, generator: ContentGenerator, classroom: ClassroomService) -> None:
		self.generator = generator
		self.classroom = classroom

	def run(self, course_id: str, topic: str) -> WorkflowOutcome:
		content = self.generator.generate_lesson_content(topic)
		if content == LESSON_FALLBACK:
			return WorkflowOutcome.failed("Could not generate lesson content.")
		try:
			announcement = self.classroom.create_announcement(course_id, content)
		except Exception:
			logger.exception("[lesson] failed to post announcement to course %s", course_id)
			return WorkflowOutcome.failed("Could not post lesson content to the course.")
		return WorkflowOutcome.success(
			"Lesson content posted.",
			announcement_id=announcement.get("id"),
			content=content,
		)


class QuizWorkflow:
	def __init__(self, generator: ContentGenerator, forms: FormService, classroom: ClassroomService) -> None:
		self.generator = generator
		self.forms = forms
		self.classroom = classroom

	def run(self, course_id: str, topic: str, num_questions: int) -> WorkflowOutcome:
		questions = self.generator.generate_quiz(topic, num_questions)
		if not questions:
			return WorkflowOutcome.failed("Could not generate quiz.")
		title = f"Quiz: {topic}"
		try:
			form = self.forms.create_form(title)
			self.forms.make_quiz(form)
			self.forms.add_multiple_choice(form, questions)
			form_url = self.forms.get_published_url(form)
		except Exception:
			logger.exception("[quiz] failed to build form for topic %s", topic)
			return WorkflowOutcome.failed("Could not create the quiz form.")
		coursework_spec = {
			"title": title,
			"description": f"{len(questions)}-question quiz on {topic}.",
			"workType": "ASSIGNMENT",
			"state": "PUBLISHED",
			"maxPoints": len(questions),
			"materials": [{"link": {"url": form_url, "title": title}}],
		}
		try:
			coursework = self.classroom.create_course_work(course_id, coursework_spec)
		except Exception:
			logger.exception("[quiz] failed to create coursework in course %s", course_id)
			return WorkflowOutcome.failed("Quiz form created but could not be assigned to the course.")
		return WorkflowOutcome.success(
			"Quiz created and assigned.",
			form_id=form.form_id,
			form_url=form_url,
			coursework_id=coursework.get("id"),
			num_questions=len(questions),
		)


class GradingWorkflow:
	def __init__(self, grader: Grader, classroom: ClassroomService, progress_log: ProgressLog) -> None:
		self.grader = grader
		self.classroom = classroom
		self.progress_log = progress_log

	def run(
		self,
		course_id: str,
		coursework_id: str,
		student_id: str,
		submission_text: str,
		rubric: str,
	) -> WorkflowOutcome:
		result = self.grader.grade(submission_text, rubric)
		if not result.ok:
			logger.error("[grading] grade unavailable (%s); nothing submitted for student %s", result.error, student_id)
			return WorkflowOutcome.failed("Could not grade submission.")
		grade = result.score

		try:
			submission = _find_submission(self.classroom, course_id, coursework_id, student_id, "grading")
		except Exception:
			logger.exception("[grading] submission lookup failed for course=%s coursework=%s", course_id, coursework_id)
			return WorkflowOutcome.failed("Could not look up the submission.")
		if submission is None:
			return WorkflowOutcome.not_found("Submission not found.")

		try:
			self.classroom.patch_submission(
				course_id,
				coursework_id,
				submission["id"],
				{"assignedGrade": grade, "draftGrade": grade},
				GRADE_UPDATE_MASK,
			)
		except Exception:
			logger.exception("[grading] failed to submit grade for submission %s", submission.get('id'))
			return WorkflowOutcome.failed("Could not submit the grade.")

		try:
			self.progress_log.append(ProgressRecord(course_id=course_id, student_id=student_id, grade=grade))
		except Exception:
			# The patch above sets fixed fields, so re-running the action is safe
			logger.exception("[grading] grade %s submitted but progress was not recorded for student %s", grade, student_id)
			return WorkflowOutcome.failed("Grade submitted but progress was not recorded.")

		return WorkflowOutcome.success(f"Grade {grade} submitted.", grade=grade, submission_id=submission["id"])


class FeedbackWorkflow:
	def __init__(self, generator: ContentGenerator, classroom: ClassroomService, documents: DocumentService) -> None:
		self.generator = generator
		self.classroom = classroom
		self.documents = documents

	def run(self, course_id: str, coursework_id: str, student_id: str, submission_text: str) -> WorkflowOutcome:
		feedback = self.generator.generate_feedback(submission_text)
		if feedback == FEEDBACK_FALLBACK:
			return WorkflowOutcome.failed("Could not generate feedback.")

		try:
			submission = _find_submission(self.classroom, course_id, coursework_id, student_id, "feedback")
		except Exception:
			logger.exception("[feedback] submission lookup failed for course=%s coursework=%s", course_id, coursework_id)
			return WorkflowOutcome.failed("Could not attach feedback.")
		if submission is None:
			return WorkflowOutcome.not_found("Submission not found.")

		document: Optional[DocumentHandle] = None
		try:
			document = self.documents.create_document(f"Feedback for {student_id}")
			self.documents.set_body(document, feedback)
			url = self.documents.get_shareable_url(document)
			self.classroom.modify_attachments(
				course_id,
				coursework_id,
				submission["id"],
				{"addAttachments": [{"link": {"url": url}}]},
			)
		except Exception:
			logger.exception("[feedback] failed to publish feedback for submission %s", submission.get('id'))
			if document is not None:
				self._discard(document)
			return WorkflowOutcome.failed("Could not attach feedback.")

		return WorkflowOutcome.success(
			"Feedback attached.",
			document_id=document.document_id,
			document_url=url,
			submission_id=submission["id"],
		)

	def _discard(self, document: DocumentHandle) -> None:
		try:
			self.documents.delete_document(document)
		except Exception:
			logger.exception("[feedback] could not delete orphaned document %s", document.document_id)


class ProgressWorkflow:
	def __init__(self, progress_log: ProgressLog) -> None:
		self.progress_log = progress_log

	def run(self, course_id: str, student_id: str) -> WorkflowOutcome:
		try:
			records = self.progress_log.history(course_id, student_id)
		except Exception:
			logger.exception("[progress] could not read progress for course=%s student=%s", course_id, student_id)
			return WorkflowOutcome.failed("Could not read progress.")
		if not records:
			return WorkflowOutcome.not_found("No progress recorded for this student.")
		grades: List[int] = [r.grade for r in records]
		return WorkflowOutcome.success(
			f"{len(records)} grade(s) recorded.",
			count=len(records),
			latest_grade=grades[-1],
			average_grade=round(mean(grades), 2),
			records=[r.model_dump(mode="json") for r in records],
		)
