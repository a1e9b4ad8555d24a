from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classroom_ai.db import Base
from classroom_ai.errors import ConfigurationError
from classroom_ai.models import ProgressEntry
from classroom_ai.progress import SheetsProgressLog, SqlProgressLog, progress_log_from_settings
from classroom_ai.schemas import ProgressRecord
from classroom_ai.settings import Settings

T0 = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def session_factory():
	engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
	Base.metadata.create_all(bind=engine)
	return sessionmaker(bind=engine, autoflush=False)


def test_sql_log_appends_and_reads_back_in_time_order(session_factory):
	log = SqlProgressLog(session_factory)
	log.append(ProgressRecord(timestamp=T0 + timedelta(days=1), course_id="c1", student_id="s1", grade=90))
	log.append(ProgressRecord(timestamp=T0, course_id="c1", student_id="s1", grade=75))
	log.append(ProgressRecord(timestamp=T0, course_id="c1", student_id="s2", grade=60))
	log.append(ProgressRecord(timestamp=T0, course_id="c2", student_id="s1", grade=50))

	history = log.history("c1", "s1")

	assert [r.grade for r in history] == [75, 90]
	assert history[0].timestamp == T0


def test_sql_log_never_updates_rows(session_factory):
	log = SqlProgressLog(session_factory)
	record = ProgressRecord(timestamp=T0, course_id="c1", student_id="s1", grade=80)
	log.append(record)
	log.append(record)

	with session_factory() as db:
		assert db.query(ProgressEntry).count() == 2


def test_sheets_log_appends_one_ordered_row():
	service = MagicMock()
	values = service.spreadsheets.return_value.values.return_value
	log = SheetsProgressLog(service, "sheet-123", "Progress!A:D")

	log.append(ProgressRecord(timestamp=T0, course_id="c1", student_id="s1", grade=88))

	kwargs = values.append.call_args.kwargs
	assert kwargs["spreadsheetId"] == "sheet-123"
	assert kwargs["range"] == "Progress!A:D"
	assert kwargs["body"] == {"values": [["2026-03-01T09:30:00+00:00", "c1", "s1", 88]]}
	values.append.return_value.execute.assert_called_once()


def test_sheets_history_filters_and_skips_malformed_rows():
	service = MagicMock()
	values = service.spreadsheets.return_value.values.return_value
	values.get.return_value.execute.return_value = {"values": [
		["Timestamp", "Course", "Student", "Grade"],
		["2026-03-02T09:30:00+00:00", "c1", "s1", "91"],
		["2026-03-01T09:30:00+00:00", "c1", "s1", "70"],
		["2026-03-01T09:30:00+00:00", "c1", "s2", "40"],
		["2026-03-03T09:30:00+00:00", "c1", "s1", "n/a"],
		["short row"],
	]}

	history = SheetsProgressLog(service, "sheet-123").history("c1", "s1")

	assert [r.grade for r in history] == [70, 91]


def test_backend_selection():
	assert isinstance(
		progress_log_from_settings(Settings(PROGRESS_BACKEND="sql"), session_factory=MagicMock()),
		SqlProgressLog,
	)
	sheets = progress_log_from_settings(
		Settings(PROGRESS_BACKEND="sheets", PROGRESS_SPREADSHEET_ID="abc"),
		sheets_service=MagicMock(),
	)
	assert isinstance(sheets, SheetsProgressLog)


@pytest.mark.parametrize("env", [
	{"PROGRESS_BACKEND": "sheets"},
	{"PROGRESS_BACKEND": "csv"},
])
def test_backend_misconfiguration_raises(env):
	with pytest.raises(ConfigurationError):
		progress_log_from_settings(Settings(**env), sheets_service=MagicMock())
