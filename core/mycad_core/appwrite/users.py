from typing import Any, Optional

from .client import AppwriteClient


class Users:
    """User account operations. Requires an API key with the `users.*` scopes."""

    def __init__(self, client: AppwriteClient) -> None:
        self.client = client

    async def create(
        self,
        user_id: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        password: Optional[str] = None,
        name: Optional[str] = None,
    ) -> dict[str, Any]:
        """Creates a user account. Unset values are left out of the request.

        Raises
        ------
        `AppwriteError`
            If the ID, email or phone is already taken (upstream status 409)
            or a value is rejected.
        """
        body = {
            "userId": user_id,
            "email": email,
            "phone": phone,
            "password": password,
            "name": name,
        }
        res = await self.client.request(
            "POST", "/users", json={k: v for k, v in body.items() if v is not None}
        )
        return res.json()

    async def get(self, user_id: str) -> dict[str, Any]:
        res = await self.client.request("GET", f"/users/{user_id}")
        return res.json()
