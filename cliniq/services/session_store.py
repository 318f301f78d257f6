"""
Session Store.

Holds the full document collection and the full chat-session collection in
memory. Both are loaded once from a key-value blob store and the whole
collection is re-serialised and written back under its key after every
mutation. There are no partial writes, no transactions and no schema
version: the last writer wins.

The blob store is injected, so the same store runs on a JSON file directory,
on Redis, or on a plain dict in tests.
"""
from pydantic import TypeAdapter, ValidationError
from typing import Optional, Protocol
import logging
import os
import tempfile

import redis

from cliniq.config import settings
from cliniq.models import ChatSession, Department, Document

logger = logging.getLogger(__name__)

DOCUMENTS_ADAPTER = TypeAdapter(list[Document])
SESSIONS_ADAPTER = TypeAdapter(list[ChatSession])

SEED_DOCUMENTS = [
    Document(
        id="uuid-rad-001",
        name="MRI_Protocol_v2.pdf",
        content=(
            "MRI Safety guidelines and scanning protocols for high-field "
            "magnets. Ensure patient is screened for metal implants."
        ),
        department=Department.RADIOLOGY,
        uploaded_by="System",
        uploaded_at="2023-10-24",
        size="2.4 MB",
    ),
    Document(
        id="uuid-rad-002",
        name="Patient_Safety_Guidelines.pdf",
        content=(
            "Standard patient safety procedures in diagnostic imaging "
            "environment. Focus on sedation and monitoring."
        ),
        department=Department.RADIOLOGY,
        uploaded_by="System",
        uploaded_at="2023-10-25",
        size="1.1 MB",
    ),
]


class PersistenceError(Exception):
    """A stored collection could not be read back. Fatal at start-up."""


# ================================================================
# BLOB STORE BACKENDS
# ================================================================

class BlobStore(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, value: str) -> None: ...


class InMemoryBlobStore:
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.blobs: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def save(self, key: str, value: str) -> None:
        self.blobs[key] = value


class FileBlobStore:
    """One `<key>.json` file per blob inside a directory."""

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            try:
                return f.read()
            except UnicodeDecodeError as e:
                raise PersistenceError(
                    f"Stored value under '{key}' is not valid UTF-8: {e}"
                ) from e

    def save(self, key: str, value: str) -> None:
        # unique temp file per write, then atomic replace
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.directory,
            prefix=f"{key}.", suffix=".tmp", delete=False,
        ) as f:
            f.write(value)
        os.replace(f.name, self._path(key))


class RedisBlobStore:
    def __init__(self, host: str, port: int, db: int = 0):
        self.client = redis.Redis(
            host=host, port=port, db=db,
            decode_responses=True, socket_connect_timeout=5,
        )
        try:
            self.client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            raise PersistenceError(f"Redis blob store unavailable: {e}") from e
        logger.info("Redis blob store connected successfully")

    def load(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def save(self, key: str, value: str) -> None:
        self.client.set(key, value)


def create_blob_store(backend: str = None) -> BlobStore:
    """Build the blob store named by settings.storage_backend."""
    backend = backend or settings.storage_backend
    if backend == "file":
        return FileBlobStore(settings.storage_dir)
    if backend == "redis":
        return RedisBlobStore(
            settings.redis_host, settings.redis_port, settings.redis_db,
        )
    if backend == "memory":
        return InMemoryBlobStore()
    raise ValueError(
        f"Unknown storage backend: {backend}. Use: file, redis, memory"
    )


# ================================================================
# SESSION STORE
# ================================================================

class SessionStore:
    """Process-wide documents + chat sessions, flushed on every mutation."""

    def __init__(
        self,
        blob_store: BlobStore,
        documents_key: str = None,
        sessions_key: str = None,
    ):
        self.blob_store = blob_store
        self.documents_key = documents_key or settings.documents_key
        self.sessions_key = sessions_key or settings.sessions_key
        self.documents: list[Document] = []
        self.sessions: list[ChatSession] = []

    def load(self) -> "SessionStore":
        """
        Load both collections from the blob store.

        A missing document key seeds the two built-in Radiology protocols;
        a missing session key starts empty. A malformed value raises
        PersistenceError instead of resetting the user's data.
        """
        raw_docs = self.blob_store.load(self.documents_key)
        if raw_docs is None:
            self.documents = [doc.model_copy() for doc in SEED_DOCUMENTS]
            logger.info(f"Seeded {len(self.documents)} built-in documents")
        else:
            self.documents = self._parse(DOCUMENTS_ADAPTER, self.documents_key, raw_docs)

        raw_sessions = self.blob_store.load(self.sessions_key)
        if raw_sessions is None:
            self.sessions = []
        else:
            self.sessions = self._parse(SESSIONS_ADAPTER, self.sessions_key, raw_sessions)

        logger.info(
            f"Loaded {len(self.documents)} documents and "
            f"{len(self.sessions)} chat sessions"
        )
        return self

    @staticmethod
    def _parse(adapter: TypeAdapter, key: str, raw: str) -> list:
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            raise PersistenceError(
                f"Stored value under '{key}' is malformed: {e}"
            ) from e

    def save_documents(self):
        self.blob_store.save(
            self.documents_key,
            DOCUMENTS_ADAPTER.dump_json(self.documents).decode("utf-8"),
        )
        logger.debug(f"Flushed {len(self.documents)} documents")

    def save_sessions(self):
        self.blob_store.save(
            self.sessions_key,
            SESSIONS_ADAPTER.dump_json(self.sessions).decode("utf-8"),
        )
        logger.debug(f"Flushed {len(self.sessions)} chat sessions")
