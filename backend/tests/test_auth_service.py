import httpx
import pytest

from ridealert.core.security import bearer_token
from ridealert.exceptions import StorageError, Unauthorized
from ridealert.services.auth_service import AuthService


def _service(handler):
    return AuthService(
        base_url="https://project.supabase.test",
        api_key="service-key",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_verify_token_returns_user():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["apikey"] = request.headers.get("apikey")
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"id": "user-1", "email": "rider@example.com", "aud": "authenticated"})

    user = await _service(handler).verify_token("abc.def.ghi")

    assert user.id == "user-1"
    assert user.email == "rider@example.com"
    assert seen == {
        "url": "https://project.supabase.test/auth/v1/user",
        "apikey": "service-key",
        "auth": "Bearer abc.def.ghi",
    }


@pytest.mark.asyncio
async def test_rejected_token_is_unauthorized():
    service = _service(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))
    with pytest.raises(Unauthorized) as excinfo:
        await service.verify_token("expired")
    assert excinfo.value.message == "Invalid token"


@pytest.mark.asyncio
async def test_response_without_user_id_is_unauthorized():
    service = _service(lambda request: httpx.Response(200, json={"email": "x@example.com"}))
    with pytest.raises(Unauthorized):
        await service.verify_token("token")


@pytest.mark.asyncio
async def test_unreachable_auth_endpoint_is_storage_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(StorageError):
        await _service(handler).verify_token("token")


@pytest.mark.parametrize("header, expected", [
    (None, None),
    ("", None),
    ("Bearer ", None),
    ("Bearer abc", "abc"),
    ("bearer abc", "abc"),
    ("abc", "abc"),
])
def test_bearer_token(header, expected):
    assert bearer_token(header) == expected
