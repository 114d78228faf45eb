import uuid
from typing import Optional

from fastapi import Header, Request

SESSION_KEY = "cart_session_id"


def resolve_session_id(request: Request, explicit: Optional[str], header: Optional[str]) -> str:
    """
    Pick the cart session id for a request.

    An explicit id from the body or query wins, then the X-Session-ID header,
    then the id kept in the cookie session (generated on first use).
    """
    if explicit:
        return explicit
    if header:
        return header

    session_id = request.session.get(SESSION_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[SESSION_KEY] = session_id
    return session_id


async def get_session_id(
    request: Request,
    session_id: Optional[str] = None,
    x_session_id: Optional[str] = Header(None),
) -> str:
    """Dependency form of resolve_session_id, reading ``?session_id=``."""
    return resolve_session_id(request, session_id, x_session_id)
