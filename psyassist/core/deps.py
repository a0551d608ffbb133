# /psyassist/core/deps.py

"""
Request-scoped session context.

Authentication itself happens upstream (the hosted auth provider / gateway);
by the time a request reaches this service it carries the authenticated user's
id in the `X-User-Id` header. Instead of reading that identity from a global,
every service function receives a `SessionContext` explicitly.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException, status


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    display_name: Optional[str] = None


def get_session_context(
    x_user_id: Optional[str] = Header(default=None),
    x_user_name: Optional[str] = Header(default=None),
) -> SessionContext:
    """FastAPI dependency that builds the SessionContext for the current request."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authenticated user.",
        )
    display_name = x_user_name.strip() if x_user_name and x_user_name.strip() else None
    return SessionContext(user_id=x_user_id.strip(), display_name=display_name)
