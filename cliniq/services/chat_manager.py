"""
Chat Session Manager.

Builds transcripts turn by turn and keeps them as named sessions, newest
first, in the session store.
"""
from datetime import datetime
from typing import Optional
import logging
import uuid

from cliniq.models import ChatSession, Department, Document, Message
from cliniq.services.assistant import HealthcareAssistant
from cliniq.services.session_store import SessionStore

logger = logging.getLogger(__name__)

TITLE_LENGTH = 30


def derive_title(first_message: str) -> str:
    if len(first_message) > TITLE_LENGTH:
        return first_message[:TITLE_LENGTH] + "..."
    return first_message


def make_message(role: str, text: str) -> Message:
    return Message(
        id=uuid.uuid4().hex,
        role=role,
        text=text,
        timestamp=datetime.now().strftime("%H:%M"),
    )


def suggestions_for(department: Department) -> list[str]:
    """Starter questions shown on an empty chat."""
    topic = "MRI" if department == Department.RADIOLOGY else "clinical procedures"
    return [
        f"What are the safety requirements for {topic}?",
        "Summarize the latest department protocols",
        "Contraindications for current patient records?",
    ]


class ChatSessionManager:
    def __init__(self, store: SessionStore, assistant: HealthcareAssistant):
        self.store = store
        self.assistant = assistant

    def send(
        self,
        department: Department,
        documents: list[Document],
        transcript: list[Message],
        question: str,
    ) -> tuple[list[Message], str]:
        """Append the user turn, ask the assistant, append its reply."""
        updated = list(transcript) + [make_message("user", question)]
        answer = self.assistant.ask(question, department, documents)
        updated.append(make_message("assistant", answer))
        return updated, answer

    async def asend(
        self,
        department: Department,
        documents: list[Document],
        transcript: list[Message],
        question: str,
    ) -> tuple[list[Message], str]:
        """send() for the event loop: only the model call is awaited."""
        updated = list(transcript) + [make_message("user", question)]
        answer = await self.assistant.aask(question, department, documents)
        updated.append(make_message("assistant", answer))
        return updated, answer

    def save_or_update(
        self,
        session_id: Optional[str],
        department: Department,
        transcript: list[Message],
    ) -> str:
        """
        Create a new session (prepended) or replace the messages of an
        existing one in place. Title and position of an existing session
        never change.
        """
        if not transcript:
            raise ValueError("Cannot save an empty transcript")

        if session_id:
            for session in self.store.sessions:
                if session.id == session_id:
                    session.messages = list(transcript)
                    self.store.save_sessions()
                    return session_id

        session = ChatSession(
            id=uuid.uuid4().hex,
            title=derive_title(transcript[0].text),
            messages=list(transcript),
            department=department,
        )
        self.store.sessions.insert(0, session)
        self.store.save_sessions()
        logger.info(f"Created chat session {session.id} for {department.value}")
        return session.id

    def list_by_department(self, department: Department) -> list[ChatSession]:
        return [s for s in self.store.sessions if s.department == department]

    def get(self, department: Department, session_id: str) -> Optional[ChatSession]:
        for session in self.list_by_department(department):
            if session.id == session_id:
                return session
        return None

    def delete(self, session_id: str) -> bool:
        remaining = [s for s in self.store.sessions if s.id != session_id]
        if len(remaining) == len(self.store.sessions):
            return False
        self.store.sessions[:] = remaining
        self.store.save_sessions()
        logger.info(f"Deleted chat session {session_id}")
        return True
