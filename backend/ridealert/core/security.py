from typing import Optional

from fastapi import Header, Request

from ridealert.core.singleton import auth_service
from ridealert.exceptions import Unauthorized
from ridealert.schemas.schedule import AuthUser


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Strip an optional ``Bearer`` prefix; blank values count as missing."""
    if not authorization:
        return None
    parts = authorization.strip().split(None, 1)
    if not parts:
        return None
    if parts[0].lower() == "bearer":
        return parts[1].strip() if len(parts) == 2 else None
    return authorization.strip()


async def get_current_user(request: Request, authorization: Optional[str] = Header(None)) -> AuthUser:
    token = bearer_token(authorization)
    if not token:
        raise Unauthorized("No token provided")
    user = await auth_service.verify_token(token)
    request.state.user = user
    return user
