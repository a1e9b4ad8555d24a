from __future__ import annotations
import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class ClassroomService:
	"""Thin wrapper over the Classroom v1 discovery client.

	Errors from the API (``googleapiclient.errors.HttpError``) propagate to the caller.
	"""

	def __init__(self, service: Any) -> None:
		self._courses = service.courses()

	def get_submissions(self, course_id: str, coursework_id: str, student_id: str) -> List[Dict[str, Any]]:
		result = self._courses.courseWork().studentSubmissions().list(
			courseId=course_id,
			courseWorkId=coursework_id,
			userId=student_id,
		).execute()
		submissions = result.get("studentSubmissions", [])
		logger.info("Found %s submission(s) for student %s on coursework %s", len(submissions), student_id, coursework_id)
		return submissions

	def patch_submission(
		self,
		course_id: str,
		coursework_id: str,
		submission_id: str,
		fields: Dict[str, Any],
		update_mask: str,
	) -> Dict[str, Any]:
		return self._courses.courseWork().studentSubmissions().patch(
			courseId=course_id,
			courseWorkId=coursework_id,
			id=submission_id,
			updateMask=update_mask,
			body=fields,
		).execute()

	def create_announcement(self, course_id: str, text: str) -> Dict[str, Any]:
		return self._courses.announcements().create(
			courseId=course_id,
			body={"text": text, "state": "PUBLISHED"},
		).execute()

	def create_course_work(self, course_id: str, spec: Dict[str, Any]) -> Dict[str, Any]:
		return self._courses.courseWork().create(courseId=course_id, body=spec).execute()

	def modify_attachments(
		self,
		course_id: str,
		coursework_id: str,
		submission_id: str,
		attachment_spec: Dict[str, Any],
	) -> Dict[str, Any]:
		return self._courses.courseWork().studentSubmissions().modifyAttachments(
			courseId=course_id,
			courseWorkId=coursework_id,
			id=submission_id,
			body=attachment_spec,
		).execute()
