from __future__ import annotations
import logging
from typing import Any, List, Optional
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from .errors import ConfigurationError
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

SCOPES: List[str] = [
	"https://www.googleapis.com/auth/classroom.courses.readonly",
	"https://www.googleapis.com/auth/classroom.coursework.students",
	"https://www.googleapis.com/auth/classroom.announcements",
	"https://www.googleapis.com/auth/documents",
	"https://www.googleapis.com/auth/drive.file",
	"https://www.googleapis.com/auth/forms.body",
	"https://www.googleapis.com/auth/spreadsheets",
]


def load_credentials(s: Optional[Settings] = None) -> Any:
	s = s or default_settings
	if s.google_service_account_file:
		creds = service_account.Credentials.from_service_account_file(s.google_service_account_file, scopes=SCOPES)
		if s.google_delegated_user:
			creds = creds.with_subject(s.google_delegated_user)
		return creds
	if s.google_token_file:
		creds = Credentials.from_authorized_user_file(s.google_token_file, SCOPES)
		if creds.expired and creds.refresh_token:
			try:
				creds.refresh(Request())
				logger.info("Refreshed Google access token")
			except Exception as e:
				logger.error("Failed to refresh Google token: %s", e)
				raise ConfigurationError("Google token is expired and could not be refreshed") from e
		return creds
	raise ConfigurationError("Google credentials are not configured (set GOOGLE_SERVICE_ACCOUNT_FILE or GOOGLE_TOKEN_FILE)")


class GoogleServices:
	"""Lazily built discovery clients sharing one set of credentials."""

	def __init__(self, credentials: Any) -> None:
		self.credentials = credentials
		self._cache: dict = {}

	@classmethod
	def from_settings(cls, s: Optional[Settings] = None) -> "GoogleServices":
		return cls(load_credentials(s))

	def _service(self, name: str, version: str) -> Any:
		key = (name, version)
		if key not in self._cache:
			self._cache[key] = build(name, version, credentials=self.credentials, cache_discovery=False)
		return self._cache[key]

	@property
	def classroom(self) -> Any:
		return self._service("classroom", "v1")

	@property
	def docs(self) -> Any:
		return self._service("docs", "v1")

	@property
	def drive(self) -> Any:
		return self._service("drive", "v3")

	@property
	def forms(self) -> Any:
		return self._service("forms", "v1")

	@property
	def sheets(self) -> Any:
		return self._service("sheets", "v4")
