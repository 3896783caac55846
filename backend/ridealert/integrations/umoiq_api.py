import json
from typing import Any, Dict, Optional

import httpx

from ridealert.config import settings
from ridealert.exceptions import UpstreamError
from ridealert.services.debug_logger import log_debug

API_KEY_HEADER = "x-umo-iq-api-key"


def create_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Build an AsyncClient pointed at the UmoIQ base URL with the API key attached."""
    return httpx.AsyncClient(
        base_url=settings.UMOIQ_BASE_URL,
        headers={API_KEY_HEADER: settings.UMO_API_KEY or "", "accept": "application/json"},
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        transport=transport,
    )


async def umoiq_fetch(client: httpx.AsyncClient, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    """
    GET an UmoIQ path and return the parsed JSON body.

    An empty body yields None. Non-2xx statuses, invalid JSON and transport
    failures all raise UpstreamError; nothing is retried.
    """
    log_debug(f"[UmoIQ] GET {path} params={params or {}}")
    try:
        response = await client.get(path, params=params)
    except httpx.HTTPError as e:
        log_debug(f"[UmoIQ] ✗ transport failure for {path}: {e}")
        raise UpstreamError(None, str(e)) from e

    # strip a BOM if the upstream sends one
    text = response.content.decode("utf-8-sig", errors="replace")

    if not response.is_success:
        log_debug(f"[UmoIQ] ✗ {path} -> {response.status_code}")
        raise UpstreamError(response.status_code, text)

    if not text.strip():
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise UpstreamError(
            response.status_code,
            text,
            message=f"UmoIQ returned invalid JSON: {text[:200]}",
        ) from e
