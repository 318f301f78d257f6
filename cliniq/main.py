"""
ClinIQ Vault — FastAPI Backend.

Department-scoped knowledge assistant API:
- Shared-key department gate (X-Department / X-Access-Key / X-User-Name)
- Document repository with substring search, upload, edit and delete
- Chat with the department assistant, saved as named sessions
- Mock metrics dashboard

Both collections live in a SessionStore backed by a file, Redis or memory
blob store and are flushed in full after every change.
"""
from fastapi import FastAPI, UploadFile, File, HTTPException, Request, Query
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from cliniq.config import settings
from cliniq.models import (
    ChatRequest, ChatResponse, ChatSession, DashboardStats, Document,
    DocumentUpdate, LoginRequest, User,
)
from cliniq.security.access_control import (
    InvalidCredential, NoDepartmentSelected, authenticate, get_current_user,
)
from cliniq.services.assistant import HealthcareAssistant
from cliniq.services.chat_manager import ChatSessionManager, suggestions_for
from cliniq.services.dashboard import build_dashboard
from cliniq.services.document_repository import DocumentRepository, new_upload
from cliniq.services.session_store import SessionStore, create_blob_store

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ================================================================
# Global service instances (initialized on startup)
# ================================================================
store: SessionStore = None
document_repo: DocumentRepository = None
assistant: HealthcareAssistant = None
chat_manager: ChatSessionManager = None


def init_services(session_store: SessionStore, llm=None):
    """Wire the services around a loaded store."""
    global store, document_repo, assistant, chat_manager
    store = session_store
    document_repo = DocumentRepository(store)
    assistant = HealthcareAssistant(llm)
    chat_manager = ChatSessionManager(store, assistant)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the vault on startup. A corrupt stored collection aborts start-up."""
    logger.info("Initializing ClinIQ Vault services...")
    init_services(SessionStore(create_blob_store()).load())
    logger.info(f"Services initialized ({settings.storage_backend} storage)")

    yield  # App runs here

    logger.info("Shutting down services...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Department-scoped healthcare knowledge assistant",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ================================================================
# HEALTH CHECK
# ================================================================

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.app_version,
        "storage_backend": settings.storage_backend,
        "model": settings.openai_model,
        "services": {
            "store": store is not None,
            "assistant": assistant is not None,
            "llm_configured": bool(settings.openai_api_key),
            "langsmith": bool(settings.langsmith_api_key),
        },
    }


# ================================================================
# AUTHENTICATION
# ================================================================

@app.post("/auth/login", response_model=User)
async def login(body: LoginRequest):
    """Exchange department + shared key for a transient identity."""
    try:
        return authenticate(body.department, body.access_key, body.name)
    except NoDepartmentSelected as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidCredential as e:
        raise HTTPException(status_code=401, detail=str(e))


# ================================================================
# DOCUMENT REPOSITORY
# ================================================================

@app.get("/documents", response_model=list[Document])
async def list_documents(request: Request, q: str = Query(default="")):
    """Department documents, optionally filtered by a search string."""
    user = get_current_user(request)
    return document_repo.search(user.department, q)


@app.post("/documents/upload", response_model=Document)
async def upload_document(request: Request, file: UploadFile = File(...)):
    """
    Register an uploaded file in the caller's department.

    The file body is only measured for the size label; its text is not
    extracted.
    """
    user = get_current_user(request)
    content = await file.read()
    return document_repo.add(new_upload(file.filename, len(content), user))


@app.put("/documents/{document_id}", response_model=Document)
async def update_document(document_id: str, body: DocumentUpdate, request: Request):
    user = get_current_user(request)
    if not body.name.strip():
        raise HTTPException(status_code=400, detail="Document name cannot be blank")
    if document_repo.get(user.department, document_id) is None:
        raise HTTPException(status_code=404, detail="Document not found")

    document_repo.update(document_id, body.name, body.content)
    return document_repo.get(user.department, document_id)


@app.delete("/documents/{document_id}")
async def delete_document(document_id: str, request: Request):
    user = get_current_user(request)
    doc = document_repo.get(user.department, document_id)
    if doc is None:
        raise HTTPException(status_code=404, detail="Document not found")

    document_repo.delete(document_id)
    return {"message": f"Document {doc.name} deleted", "document_id": document_id}


# ================================================================
# CHAT
# ================================================================

@app.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, request: Request):
    """
    Send one turn to the department assistant.

    Without a session_id a new session is created from the first message;
    with one, that session's transcript is continued and overwritten.
    Store mutations run on the event loop thread, one request at a time.
    """
    user = get_current_user(request)

    transcript = []
    if body.session_id:
        session = chat_manager.get(user.department, body.session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Chat session not found")
        transcript = session.messages

    messages, answer = await chat_manager.asend(
        user.department, document_repo.all, transcript, body.message,
    )
    session_id = chat_manager.save_or_update(body.session_id, user.department, messages)

    return ChatResponse(answer=answer, session_id=session_id, messages=messages)


@app.get("/chat/suggestions", response_model=list[str])
async def chat_suggestions(request: Request):
    user = get_current_user(request)
    return suggestions_for(user.department)


@app.get("/sessions", response_model=list[ChatSession])
async def list_sessions(request: Request):
    """Saved sessions of the caller's department, newest first."""
    user = get_current_user(request)
    return chat_manager.list_by_department(user.department)


@app.get("/sessions/{session_id}", response_model=ChatSession)
async def get_session(session_id: str, request: Request):
    user = get_current_user(request)
    session = chat_manager.get(user.department, session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Chat session not found")
    return session


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str, request: Request):
    user = get_current_user(request)
    if chat_manager.get(user.department, session_id) is None:
        raise HTTPException(status_code=404, detail="Chat session not found")

    chat_manager.delete(session_id)
    return {"message": "Chat session deleted", "session_id": session_id}


# ================================================================
# DASHBOARD
# ================================================================

@app.get("/stats", response_model=DashboardStats)
async def get_stats(request: Request):
    """Dashboard statistics for the caller's department."""
    user = get_current_user(request)
    return build_dashboard(user, document_repo.all)
