"""
Prompt Builder.

Assembles the department's documents into the system instruction handed to
the model. There is no ranking, chunking or size bound: every document of
the department goes into every prompt, in repository order. Callers only
see build_prompt(), so a bounded or ranked variant can replace it later.
"""
from langchain_core.prompts import ChatPromptTemplate

from cliniq.models import Department, Document

NO_DOCUMENTS_MARKER = "No documents found for this department."

SYSTEM_PROMPT = """You are ClinIQ Vault, a secure, offline-compatible Healthcare Knowledge Assistant.
Your environment is a private server isolated from the public internet.

CRITICAL SECURITY PROTOCOL:
1. Access Context: You are currently assisting the {department} department.
2. Data Isolation: You only have access to the documents provided in the context below.
3. Privacy: Do not mention any names or sensitive identifiers unless explicitly present in the provided context.
4. Accuracy: If the answer is not in the provided documents, state clearly that you do not have that information in the authorized records.

AUTHORIZED DEPARTMENT RECORDS:
{context}"""

ASSISTANT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", "{question}"),
])


def format_document(doc: Document) -> str:
    return f"[DOCUMENT: {doc.name}]\n{doc.content}"


def build_context(department: Department, documents: list[Document]) -> str:
    """Concatenate the department's documents, or the no-documents marker."""
    blocks = [format_document(doc) for doc in documents if doc.department == department]
    return "\n\n".join(blocks) or NO_DOCUMENTS_MARKER


def build_prompt(question: str, department: Department, documents: list[Document]) -> dict:
    """Variables for ASSISTANT_PROMPT."""
    return {
        "department": department.value,
        "context": build_context(department, documents),
        "question": question,
    }
