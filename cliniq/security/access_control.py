"""
Department Access Gate.

Each department shares a single access key. A user picks a department,
types the key and a display name, and is handed a transient identity
scoped to that department. Every document and chat session lookup is then
filtered by the identity's department.

IMPORTANT: this is a capability gate, not a security boundary. The keys are
plaintext constants, there is no hashing, rate limiting or lockout. Callers
depend on the AccessGate interface only, so a real identity provider
(SSO, LDAP, JWT) can replace SharedKeyGate without touching them.
"""
from fastapi import Request, HTTPException
from typing import Optional, Protocol
import logging
import uuid

from cliniq.models import Department, User

logger = logging.getLogger(__name__)

FALLBACK_DISPLAY_NAME = "Healthcare Professional"

# Shared department keys. Administration has no key, so it cannot log in.
DEPARTMENT_KEYS: dict[Department, str] = {
    Department.RADIOLOGY: "rad123",
    Department.ONCOLOGY: "onc123",
    Department.PATHOLOGY: "pat123",
}


class AuthError(Exception):
    """Login rejected. Shown inline on the login form, never fatal."""


class NoDepartmentSelected(AuthError):
    def __init__(self):
        super().__init__("Please select a department node.")


class InvalidCredential(AuthError):
    def __init__(self, department: Department):
        self.department = department
        super().__init__(
            f"Invalid access key for {department.value} department."
        )


class AccessGate(Protocol):
    def authenticate(
        self,
        department: Optional[Department],
        supplied_key: str,
        display_name: str,
    ) -> User: ...


class SharedKeyGate:
    """Compares the supplied key against a fixed per-department secret."""

    def __init__(self, keys: dict[Department, str]):
        self.keys = dict(keys)

    def authenticate(
        self,
        department: Optional[Department],
        supplied_key: str,
        display_name: str,
    ) -> User:
        if department is None:
            raise NoDepartmentSelected()

        expected = self.keys.get(department)
        if expected is None or supplied_key != expected:
            logger.warning(f"Rejected login for {department.value}")
            raise InvalidCredential(department)

        name = (display_name or "").strip() or FALLBACK_DISPLAY_NAME
        user = User(
            id=f"user-{uuid.uuid4().hex[:8]}",
            name=name,
            role="Doctor",
            department=department,
        )
        logger.info(f"{user.name} authorised for {department.value}")
        return user


gate: AccessGate = SharedKeyGate(DEPARTMENT_KEYS)


def authenticate(
    department: Optional[Department],
    supplied_key: str,
    display_name: str,
) -> User:
    """Authenticate against the module-level gate."""
    return gate.authenticate(department, supplied_key, display_name)


def parse_department(value: Optional[str]) -> Optional[Department]:
    """Map a raw header/form value to a Department. Blank means none."""
    if not value:
        return None
    try:
        return Department(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown department: {value}")


def get_current_user(request: Request) -> User:
    """
    Re-run the gate for every request from the identity headers.

    Nothing is stored server-side: the client keeps the department, key and
    display name it logged in with and sends them as X-Department,
    X-Access-Key and X-User-Name.
    """
    department = parse_department(request.headers.get("X-Department"))
    try:
        return authenticate(
            department,
            request.headers.get("X-Access-Key", ""),
            request.headers.get("X-User-Name", ""),
        )
    except NoDepartmentSelected as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidCredential as e:
        raise HTTPException(status_code=401, detail=str(e))
