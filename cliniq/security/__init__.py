"""Security module for the department access gate."""
from cliniq.security.access_control import (
    AuthError,
    InvalidCredential,
    NoDepartmentSelected,
    authenticate,
    get_current_user,
)

__all__ = [
    "AuthError",
    "InvalidCredential",
    "NoDepartmentSelected",
    "authenticate",
    "get_current_user",
]
