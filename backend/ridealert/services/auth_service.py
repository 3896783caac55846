import logging
from typing import Optional

import httpx

from ridealert.config import settings
from ridealert.exceptions import StorageError, Unauthorized
from ridealert.schemas.schedule import AuthUser

logger = logging.getLogger(__name__)


class AuthService:
    """Exchanges a bearer token for the user it belongs to via the data store's auth endpoint."""

    def __init__(
        self,
        base_url: str = settings.SUPABASE_URL,
        api_key: str = settings.SUPABASE_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.user_url = f"{base_url}/auth/v1/user"
        self.api_key = api_key
        self.transport = transport

    async def verify_token(self, token: str) -> AuthUser:
        headers = {"apikey": self.api_key, "Authorization": f"Bearer {token}"}
        try:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS, transport=self.transport) as client:
                response = await client.get(self.user_url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Token verification request failed: {e}")
            raise StorageError(f"Token verification failed: {e}", operation="verify_token") from e

        if response.status_code != 200:
            logger.info(f"Token rejected by auth endpoint ({response.status_code})")
            raise Unauthorized("Invalid token")

        try:
            data = response.json()
        except ValueError:
            raise Unauthorized("Invalid token")

        user_id = data.get("id") if isinstance(data, dict) else None
        if not user_id:
            raise Unauthorized("Invalid token")
        return AuthUser(id=str(user_id), email=data.get("email"))
