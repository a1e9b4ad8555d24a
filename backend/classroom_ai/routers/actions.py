from __future__ import annotations
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from ..deps import (
	get_feedback_workflow,
	get_grading_workflow,
	get_lesson_workflow,
	get_progress_workflow,
	get_quiz_workflow,
)
from ..schemas import FeedbackRequest, GradeRequest, LessonRequest, QuizRequest, WorkflowOutcome
from ..workflows import FeedbackWorkflow, GradingWorkflow, LessonWorkflow, ProgressWorkflow, QuizWorkflow

router = APIRouter(prefix="/actions", tags=["actions"])

_STATUS_CODES = {"success": 200, "not_found": 404, "failed": 502}


def _respond(outcome: WorkflowOutcome) -> JSONResponse:
	return JSONResponse(status_code=_STATUS_CODES[outcome.status], content=outcome.model_dump(mode="json"))


@router.post("/lesson")
def generate_lesson(req: LessonRequest, workflow: LessonWorkflow = Depends(get_lesson_workflow)):
	return _respond(workflow.run(req.course_id, req.topic))


@router.post("/quiz")
def generate_quiz(req: QuizRequest, workflow: QuizWorkflow = Depends(get_quiz_workflow)):
	return _respond(workflow.run(req.course_id, req.topic, req.num_questions))


@router.post("/grade")
def grade_submission(req: GradeRequest, workflow: GradingWorkflow = Depends(get_grading_workflow)):
	return _respond(workflow.run(
		req.course_id,
		req.coursework_id,
		req.student_id,
		req.submission_text,
		req.rubric,
	))


@router.post("/feedback")
def give_feedback(req: FeedbackRequest, workflow: FeedbackWorkflow = Depends(get_feedback_workflow)):
	return _respond(workflow.run(req.course_id, req.coursework_id, req.student_id, req.submission_text))


@router.get("/progress/{course_id}/{student_id}")
def track_progress(course_id: str, student_id: str, workflow: ProgressWorkflow = Depends(get_progress_workflow)):
	return _respond(workflow.run(course_id, student_id))
