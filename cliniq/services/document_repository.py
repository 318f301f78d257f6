"""
Document Repository.

CRUD plus substring search over the document collection, always scoped by
the caller's department. Every mutation flushes the whole collection
through the session store.
"""
from __future__ import annotations

from datetime import date
from typing import Optional
import logging
import uuid

from cliniq.models import Department, Document, User
from cliniq.services.session_store import SessionStore

logger = logging.getLogger(__name__)

PLACEHOLDER_CONTENT = (
    "Extracted content for {name}... No clinical summary available yet. "
    "Please edit to add patient notes or protocol data for AI context."
)


def generate_document_id(department: Department) -> str:
    """uuid-<first three letters of department>-<uuid4 hex>."""
    return f"uuid-{department.value.lower()[:3]}-{uuid.uuid4().hex}"


def format_size(num_bytes: int) -> str:
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def new_upload(filename: str, num_bytes: int, user: User) -> Document:
    """
    Build the Document for an uploaded file.

    File content is not extracted; the document carries a placeholder the
    user is expected to replace by editing.
    """
    return Document(
        id=generate_document_id(user.department),
        name=filename,
        content=PLACEHOLDER_CONTENT.format(name=filename),
        department=user.department,
        uploaded_by=user.name,
        uploaded_at=date.today().isoformat(),
        size=format_size(num_bytes),
    )


class DocumentRepository:
    def __init__(self, store: SessionStore):
        self.store = store

    @property
    def all(self) -> list[Document]:
        return self.store.documents

    def list(self, department: Department) -> list[Document]:
        return [doc for doc in self.store.documents if doc.department == department]

    def get(self, department: Department, document_id: str) -> Optional[Document]:
        for doc in self.list(department):
            if doc.id == document_id:
                return doc
        return None

    def search(self, department: Department, query: str) -> list[Document]:
        """Case-insensitive substring match on name OR content."""
        needle = (query or "").lower()
        return [
            doc for doc in self.list(department)
            if needle in doc.name.lower() or needle in doc.content.lower()
        ]

    def add(self, document: Document) -> Document:
        self.store.documents.append(document)
        self.store.save_documents()
        logger.info(f"Added {document.name} ({document.id}) to {document.department.value}")
        return document

    def update(self, document_id: str, name: str, content: str) -> bool:
        for doc in self.store.documents:
            if doc.id == document_id:
                doc.name = name
                doc.content = content
                self.store.save_documents()
                logger.info(f"Updated document {document_id}")
                return True
        return False

    def delete(self, document_id: str) -> bool:
        remaining = [doc for doc in self.store.documents if doc.id != document_id]
        if len(remaining) == len(self.store.documents):
            return False
        self.store.documents[:] = remaining
        self.store.save_documents()
        logger.info(f"Deleted document {document_id}")
        return True
