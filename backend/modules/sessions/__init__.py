"""
Sessions module.

Issues, resolves and destroys durable opaque session tokens.

Public API:
- ISessionService: Interface for session operations
- ISessionStore: Durable token store contract
- Session / SessionToken: Stored row and issued token
"""

from .interfaces import ISessionService, ISessionStore
from .models import Session, SessionToken

__all__ = [
    "ISessionService",
    "ISessionStore",
    "Session",
    "SessionToken",
]
