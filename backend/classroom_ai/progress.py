from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Protocol
from sqlalchemy import select
from sqlalchemy.orm import Session
from .errors import ConfigurationError
from .models import ProgressEntry
from .schemas import ProgressRecord
from .settings import Settings

logger = logging.getLogger(__name__)


class ProgressLog(Protocol):
	def append(self, record: ProgressRecord) -> None: ...

	def history(self, course_id: str, student_id: str) -> List[ProgressRecord]: ...


class SheetsProgressLog:
	"""Appends one row per record: timestamp, course id, student id, grade."""

	def __init__(self, sheets_service: Any, spreadsheet_id: str, sheet_range: str = "Progress!A:D") -> None:
		self._values = sheets_service.spreadsheets().values()
		self.spreadsheet_id = spreadsheet_id
		self.sheet_range = sheet_range

	def append(self, record: ProgressRecord) -> None:
		self._values.append(
			spreadsheetId=self.spreadsheet_id,
			range=self.sheet_range,
			valueInputOption="RAW",
			insertDataOption="INSERT_ROWS",
			body={"values": [record.as_row()]},
		).execute()

	def history(self, course_id: str, student_id: str) -> List[ProgressRecord]:
		result = self._values.get(spreadsheetId=self.spreadsheet_id, range=self.sheet_range).execute()
		records: List[ProgressRecord] = []
		for row in result.get("values", []):
			if len(row) < 4 or str(row[1]) != course_id or str(row[2]) != student_id:
				continue
			try:
				records.append(ProgressRecord(
					timestamp=datetime.fromisoformat(str(row[0])),
					course_id=str(row[1]),
					student_id=str(row[2]),
					grade=int(row[3]),
				))
			except ValueError:
				# Header rows and hand-edited cells
				logger.debug("Skipping malformed progress row: %s", row)
		return sorted(records, key=lambda r: _as_utc(r.timestamp))


class SqlProgressLog:
	def __init__(self, session_factory: Callable[[], Session]) -> None:
		self._session_factory = session_factory

	def append(self, record: ProgressRecord) -> None:
		with self._session_factory() as db:
			db.add(ProgressEntry(
				recorded_at=_as_utc(record.timestamp).replace(tzinfo=None),
				course_id=record.course_id,
				student_id=record.student_id,
				grade=record.grade,
			))
			db.commit()

	def history(self, course_id: str, student_id: str) -> List[ProgressRecord]:
		stmt = (
			select(ProgressEntry)
			.where(ProgressEntry.course_id == course_id, ProgressEntry.student_id == student_id)
			.order_by(ProgressEntry.recorded_at, ProgressEntry.id)
		)
		with self._session_factory() as db:
			rows = db.execute(stmt).scalars().all()
			return [
				ProgressRecord(
					timestamp=row.recorded_at.replace(tzinfo=timezone.utc),
					course_id=row.course_id,
					student_id=row.student_id,
					grade=row.grade,
				)
				for row in rows
			]


def _as_utc(ts: datetime) -> datetime:
	if ts.tzinfo is None:
		return ts.replace(tzinfo=timezone.utc)
	return ts.astimezone(timezone.utc)


def progress_log_from_settings(s: Settings, *, sheets_service: Optional[Any] = None, session_factory: Optional[Callable[[], Session]] = None) -> ProgressLog:
	backend = (s.progress_backend or "sql").lower()
	if backend == "sheets":
		if not s.progress_spreadsheet_id:
			raise ConfigurationError("PROGRESS_SPREADSHEET_ID is required when PROGRESS_BACKEND=sheets")
		if sheets_service is None:
			raise ConfigurationError("A Sheets service is required when PROGRESS_BACKEND=sheets")
		return SheetsProgressLog(sheets_service, s.progress_spreadsheet_id, s.progress_sheet_range)
	if backend == "sql":
		if session_factory is None:
			from .db import SessionLocal
			session_factory = SessionLocal
		return SqlProgressLog(session_factory)
	raise ConfigurationError(f"Unknown PROGRESS_BACKEND: {s.progress_backend}")
