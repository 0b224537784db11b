import pytest
from httpx import AsyncClient

from auth_service.adapter.repositories.session_repository import SessionRepository
from tests.utils.cookies import bearer, cookie_header, response_cookies

API = "/api/v1"


@pytest.mark.asyncio
async def test_logout_deletes_session_and_clears_cookies(
    client: AsyncClient, login, db_session
):
    tokens = await login("alice")

    response = await client.post(f"{API}/auth/logout", headers=bearer(tokens["access_token"]))

    assert response.status_code == 200
    assert response.json() == {
        "message": "Logged out successfully",
        "session_id": tokens["session_id"],
    }

    cookies = response_cookies(response)
    for name in ("access_token", "refresh_token"):
        assert cookies[name].value == ""
        assert cookies[name]["max-age"] == "0"
        assert cookies[name]["domain"] == "test"

    assert await SessionRepository(db_session).get_by_id(tokens["session_id"]) is None


@pytest.mark.asyncio
async def test_logged_out_tokens_stop_working(client: AsyncClient, login):
    tokens = await login("alice")
    await client.post(f"{API}/auth/logout", headers=bearer(tokens["access_token"]))

    me = await client.get(f"{API}/auth/me", headers=bearer(tokens["access_token"]))
    refresh = await client.post(
        f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )

    assert me.status_code == 401
    assert me.json()["error"]["code"] == "SESSION_NOT_FOUND"
    assert refresh.status_code == 401
    assert refresh.json()["error"]["code"] == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_logout_with_refresh_cookie_only(client: AsyncClient, login, db_session):
    tokens = await login("alice")

    response = await client.post(
        f"{API}/auth/logout", headers=cookie_header(refresh_token=tokens["refresh_token"])
    )

    assert response.status_code == 200
    assert response.json()["session_id"] == tokens["session_id"]
    assert await SessionRepository(db_session).get_by_id(tokens["session_id"]) is None


@pytest.mark.asyncio
async def test_logout_twice_succeeds(client: AsyncClient, login):
    tokens = await login("alice")

    first = await client.post(f"{API}/auth/logout", headers=bearer(tokens["access_token"]))
    second = await client.post(f"{API}/auth/logout", headers=bearer(tokens["access_token"]))

    assert first.status_code == 200
    assert second.status_code == 200


@pytest.mark.asyncio
async def test_logout_only_ends_its_own_session(client: AsyncClient, login, test_data):
    first = await login("alice")
    alice = test_data.get_copy("alice")
    second = (
        await client.post(
            f"{API}/auth/login",
            json={"email": alice["email"], "password": alice["password"]},
        )
    ).json()

    await client.post(f"{API}/auth/logout", headers=bearer(first["access_token"]))

    me = await client.get(f"{API}/auth/me", headers=bearer(second["access_token"]))
    assert me.status_code == 200


@pytest.mark.asyncio
async def test_logout_without_credentials(client: AsyncClient):
    response = await client.post(f"{API}/auth/logout")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
