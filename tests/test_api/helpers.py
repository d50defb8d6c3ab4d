"""Shared helpers for API tests."""

from httpx import AsyncClient


async def register_user(client: AsyncClient, username: str, password: str = "secret123") -> dict:
    """Register a user through the API and return the response body."""
    response = await client.post(
        "/api/auth/register",
        json={"name": username.title(), "username": username, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()


async def pair_users(client: AsyncClient, user: dict, partner: dict) -> dict:
    """Connect ``user`` to ``partner`` using the partner's invitation code."""
    response = await client.post(
        f"/api/users/{user['id']}/connect",
        json={"invitationCode": partner["invitationCode"]},
    )
    assert response.status_code == 200, response.text
    return response.json()
