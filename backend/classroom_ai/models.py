from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer
from .db import Base


class ProgressEntry(Base):
	__tablename__ = "progress_log"
	# Append-only: rows are inserted once per submitted grade and never updated
	id = Column(Integer, primary_key=True, autoincrement=True)
	recorded_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
	course_id = Column(String(64), nullable=False, index=True)
	student_id = Column(String(128), nullable=False, index=True)
	grade = Column(Integer, nullable=False)
