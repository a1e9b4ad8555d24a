from __future__ import annotations
from functools import lru_cache
from typing import Callable, Optional
from fastapi import Depends
from sqlalchemy.orm import Session
from .classroom import ClassroomService
from .db import SessionLocal
from .documents import DocumentService
from .forms import FormService
from .generators import ContentGenerator
from .google_services import GoogleServices
from .grader import Grader
from .llm_client import LLMConfig, LLMGateway
from .progress import ProgressLog, progress_log_from_settings
from .settings import settings
from .workflows import (
	FeedbackWorkflow,
	GradingWorkflow,
	LessonWorkflow,
	ProgressWorkflow,
	QuizWorkflow,
)

# Each action depends only on the services it drives, so a missing credential
# for one service does not block actions that never call it.


@lru_cache(maxsize=1)
def get_gateway() -> LLMGateway:
	return LLMGateway(LLMConfig.from_settings(settings))


@lru_cache(maxsize=1)
def get_google() -> GoogleServices:
	return GoogleServices.from_settings(settings)


def close_gateway() -> None:
	if get_gateway.cache_info().currsize:
		get_gateway().close()
		get_gateway.cache_clear()


def get_session_factory() -> Callable[[], Session]:
	return SessionLocal


def get_progress_log(session_factory: Callable[[], Session] = Depends(get_session_factory)) -> ProgressLog:
	sheets_service: Optional[object] = None
	if settings.progress_backend.lower() == "sheets":
		sheets_service = get_google().sheets
	return progress_log_from_settings(settings, sheets_service=sheets_service, session_factory=session_factory)


def get_generator(gateway: LLMGateway = Depends(get_gateway)) -> ContentGenerator:
	return ContentGenerator(gateway)


def get_classroom(google: GoogleServices = Depends(get_google)) -> ClassroomService:
	return ClassroomService(google.classroom)


def get_lesson_workflow(
	generator: ContentGenerator = Depends(get_generator),
	classroom: ClassroomService = Depends(get_classroom),
) -> LessonWorkflow:
	return LessonWorkflow(generator, classroom)


def get_quiz_workflow(
	generator: ContentGenerator = Depends(get_generator),
	classroom: ClassroomService = Depends(get_classroom),
	google: GoogleServices = Depends(get_google),
) -> QuizWorkflow:
	return QuizWorkflow(generator, FormService(google.forms), classroom)


def get_grading_workflow(
	gateway: LLMGateway = Depends(get_gateway),
	classroom: ClassroomService = Depends(get_classroom),
	progress_log: ProgressLog = Depends(get_progress_log),
) -> GradingWorkflow:
	return GradingWorkflow(Grader(gateway), classroom, progress_log)


def get_feedback_workflow(
	generator: ContentGenerator = Depends(get_generator),
	classroom: ClassroomService = Depends(get_classroom),
	google: GoogleServices = Depends(get_google),
) -> FeedbackWorkflow:
	documents = DocumentService(google.docs, google.drive, share=settings.share_documents)
	return FeedbackWorkflow(generator, classroom, documents)


def get_progress_workflow(progress_log: ProgressLog = Depends(get_progress_log)) -> ProgressWorkflow:
	return ProgressWorkflow(progress_log)
