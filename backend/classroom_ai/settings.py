from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
	# OpenAI-compatible chat completions endpoint
	openai_base_url: str = Field(default="https://api.openai.com/v1/chat/completions", validation_alias="OPENAI_BASE_URL")
	openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
	llm_timeout_seconds: float = Field(default=30, validation_alias="LLM_TIMEOUT_SECONDS")

	# Google credentials: either a service account (optionally delegated to a teacher account)
	# or an authorized-user token file produced by an OAuth consent flow
	google_service_account_file: str | None = Field(default=None, validation_alias="GOOGLE_SERVICE_ACCOUNT_FILE")
	google_delegated_user: str | None = Field(default=None, validation_alias="GOOGLE_DELEGATED_USER")
	google_token_file: str | None = Field(default=None, validation_alias="GOOGLE_TOKEN_FILE")

	# Progress log: "sql" (local table) or "sheets" (append to a spreadsheet)
	progress_backend: str = Field(default="sql", validation_alias="PROGRESS_BACKEND")
	progress_spreadsheet_id: str | None = Field(default=None, validation_alias="PROGRESS_SPREADSHEET_ID")
	progress_sheet_range: str = Field(default="Progress!A:D", validation_alias="PROGRESS_SHEET_RANGE")

	# Grant "anyone with the link" read access on generated feedback documents
	share_documents: bool = Field(default=True, validation_alias="SHARE_DOCUMENTS")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# Bind address for the `classroom-ai` server entry point
	host: str = Field(default="127.0.0.1", validation_alias="HOST")
	port: int = Field(default=8000, validation_alias="PORT")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
