from __future__ import annotations
import logging
from typing import Any
from .schemas import DocumentHandle

logger = logging.getLogger(__name__)


class DocumentService:
	def __init__(self, docs_service: Any, drive_service: Any, *, share: bool = True) -> None:
		self._docs = docs_service.documents()
		self._drive = drive_service
		self.share = share

	def create_document(self, title: str) -> DocumentHandle:
		doc = self._docs.create(body={"title": title}).execute()
		logger.info("Created document %s", doc['documentId'])
		return DocumentHandle(document_id=doc["documentId"], title=doc.get("title", title))

	def set_body(self, handle: DocumentHandle, text: str) -> None:
		# A freshly created document has an empty body; index 1 is the start of it
		self._docs.batchUpdate(
			documentId=handle.document_id,
			body={"requests": [{"insertText": {"location": {"index": 1}, "text": text}}]},
		).execute()

	def get_shareable_url(self, handle: DocumentHandle) -> str:
		if self.share:
			self._drive.permissions().create(
				fileId=handle.document_id,
				body={"type": "anyone", "role": "reader"},
				fields="id",
			).execute()
		meta = self._drive.files().get(fileId=handle.document_id, fields="webViewLink").execute()
		return meta["webViewLink"]

	def delete_document(self, handle: DocumentHandle) -> None:
		self._drive.files().delete(fileId=handle.document_id).execute()
		logger.info("Deleted document %s", handle.document_id)
