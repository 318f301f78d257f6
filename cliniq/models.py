"""
Data models for ClinIQ Vault.

Two small relations (documents, chat sessions), both partitioned by a
department tag, plus the transient user identity and the request/response
models of the HTTP API.
"""
from pydantic import BaseModel, Field
from typing import Literal, Optional
from enum import Enum


# ================================================================
# ENUMS
# ================================================================

class Department(str, Enum):
    """Partitioning tag for every document and chat session."""
    RADIOLOGY = "Radiology"
    ONCOLOGY = "Oncology"
    PATHOLOGY = "Pathology"
    ADMINISTRATION = "Administration"


# ================================================================
# DOMAIN MODELS
# ================================================================

class User(BaseModel):
    """Client-side identity granted at login. Never persisted."""
    id: str
    name: str
    role: Literal["Doctor", "Admin", "Staff"] = "Doctor"
    department: Department


class Document(BaseModel):
    id: str
    name: str
    content: str  # used verbatim as model context
    department: Department
    uploaded_by: str
    uploaded_at: str
    size: str


class Message(BaseModel):
    id: str
    role: Literal["user", "assistant"]
    text: str
    timestamp: str  # HH:MM

    model_config = {"frozen": True}


class ChatSession(BaseModel):
    id: str
    title: str
    messages: list[Message] = Field(default_factory=list)
    department: Department


# ================================================================
# REQUEST MODELS
# ================================================================

class LoginRequest(BaseModel):
    department: Optional[Department] = None
    access_key: str = ""
    name: str = ""


class DocumentUpdate(BaseModel):
    name: str = Field(..., min_length=1)
    content: str = ""


class ChatRequest(BaseModel):
    """A chat turn. Omit session_id to start a new conversation."""
    message: str = Field(..., min_length=1, max_length=4000)
    session_id: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "message": "What are the safety requirements for MRI?",
                "session_id": None,
            }]
        }
    }


# ================================================================
# RESPONSE MODELS
# ================================================================

class ChatResponse(BaseModel):
    answer: str
    session_id: str
    messages: list[Message]


class StatCard(BaseModel):
    label: str
    value: int | str
    trend: str
    description: str


class ActivityEntry(BaseModel):
    id: int
    type: str
    msg: str
    time: str
    status: str


class DashboardStats(BaseModel):
    department: Department
    indexed_files: int
    stats: list[StatCard]
    query_volume: dict[str, int]
    storage_distribution: dict[str, int]
    recent_activity: list[ActivityEntry]
