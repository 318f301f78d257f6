"""Pytest configuration and fixtures."""

import os

# Settings are read at import time
os.environ["OPENAI_API_KEY"] = ""
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LANGSMITH_API_KEY"] = ""

import pytest
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from cliniq.models import Department, Document
from cliniq.services.session_store import InMemoryBlobStore, SessionStore

RADIOLOGY_HEADERS = {
    "X-Department": "Radiology",
    "X-Access-Key": "rad123",
    "X-User-Name": "Dr. X",
}
ONCOLOGY_HEADERS = {
    "X-Department": "Oncology",
    "X-Access-Key": "onc123",
    "X-User-Name": "Dr. Y",
}


def make_document(doc_id: str, name: str, content: str, department: Department) -> Document:
    return Document(
        id=doc_id,
        name=name,
        content=content,
        department=department,
        uploaded_by="Tester",
        uploaded_at="2024-01-01",
        size="0.1 MB",
    )


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def store(blob_store):
    """Freshly seeded store (two Radiology documents, no sessions)."""
    return SessionStore(blob_store).load()


@pytest.fixture
def echo_llm():
    """Fake model that answers with the system prompt it received."""
    return RunnableLambda(lambda prompt: AIMessage(content=prompt.to_messages()[0].content))


@pytest.fixture
def failing_llm():
    def _fail(_prompt):
        raise ConnectionError("node unreachable")

    return RunnableLambda(_fail)


@pytest.fixture
def client(store, echo_llm):
    from fastapi.testclient import TestClient

    from cliniq import main

    main.init_services(store, echo_llm)
    return TestClient(main.app)
