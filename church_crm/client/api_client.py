"""
Church CRM API Client

An async Python client for the Church CRM REST API.

Collection reads never raise: a failed request is logged and yields an empty
list. Entity writes log failures and return None. User-management calls raise
ChurchAPIError with the server's message.
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from church_crm.models import (
    AttendanceRecord,
    Community,
    Contribution,
    Event,
    Member,
    UserResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ChurchAPIError(Exception):
    """Non-success response from the API"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if isinstance(detail, str):
            return detail
    return default


class ChurchClient:
    """Async client for the Church CRM REST API."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Server root (e.g., "http://localhost:3002"); routes live under /api
            token: Existing session token, if any
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use ASGITransport)
        """
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.user: Optional[dict] = None
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    async def aclose(self):
        await self.client.aclose()

    def _headers(self) -> dict:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    # ==================== Plumbing ====================

    async def _get_collection(self, path: str, model: Type[ModelT]) -> List[ModelT]:
        try:
            response = await self.client.get(path, headers=self._headers())
            if response.is_error:
                logger.error(f"GET {path} failed with {response.status_code}")
                return []
            return [model.model_validate(item) for item in response.json()]
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.error(f"GET {path} failed: {e}")
            return []

    async def _send(self, method: str, path: str, payload: Optional[BaseModel] = None) -> Optional[Any]:
        """Write request whose failure is only logged"""
        try:
            response = await self.client.request(
                method, path, headers=self._headers(), json=self._body(payload)
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            return None
        if response.is_error:
            logger.error(f"{method} {path} failed with {response.status_code}: "
                         f"{_error_message(response, response.text)}")
            return None
        return response.json()

    async def _send_strict(self, method: str, path: str, payload: Optional[Any] = None, default_error: str = "Request failed") -> Any:
        """Write request whose failure raises ChurchAPIError"""
        try:
            response = await self.client.request(
                method, path, headers=self._headers(), json=self._body(payload)
            )
        except httpx.HTTPError as e:
            raise ChurchAPIError(f"{default_error}: {e}") from e
        if response.is_error:
            raise ChurchAPIError(_error_message(response, default_error), response.status_code)
        return response.json()

    @staticmethod
    def _body(payload):
        if isinstance(payload, BaseModel):
            return payload.model_dump(mode="json", by_alias=True)
        return payload

    # ==================== Health & Auth ====================

    async def ping(self) -> bool:
        """Check the backend is reachable"""
        try:
            response = await self.client.get("/api/health")
            return response.is_success
        except httpx.HTTPError as e:
            logger.error(f"Failed to connect to backend: {e}")
            return False

    async def login(self, email: str, password: str) -> dict:
        """Sign in and keep the session token for later calls"""
        data = await self._send_strict(
            "POST", "/api/auth/login", {"email": email, "password": password}, "Login failed"
        )
        self.token = data["token"]
        self.user = data["user"]
        return self.user

    async def logout(self):
        try:
            await self.client.post("/api/auth/logout", headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"Logout request failed: {e}")
        self.token = None
        self.user = None

    async def me(self) -> dict:
        return await self._send_strict("GET", "/api/auth/me", default_error="Failed to load profile")

    async def forgot_password(self, email: str) -> str:
        data = await self._send_strict(
            "POST", "/api/auth/forgot-password", {"email": email}, "Failed to request reset"
        )
        return data["message"]

    async def reset_password(self, token: str, new_password: str) -> str:
        data = await self._send_strict(
            "POST", "/api/auth/reset-password",
            {"token": token, "newPassword": new_password},
            "Failed to reset password",
        )
        return data["message"]

    # ==================== Members ====================

    async def get_members(self) -> List[Member]:
        return await self._get_collection("/api/members", Member)

    async def add_member(self, member: Member) -> Optional[dict]:
        return await self._send("POST", "/api/members", member)

    async def update_member(self, member: Member) -> Optional[dict]:
        return await self._send("PUT", f"/api/members/{member.id}", member)

    async def delete_member(self, member_id: str) -> Optional[dict]:
        return await self._send("DELETE", f"/api/members/{member_id}")

    # ==================== Communities ====================

    async def get_communities(self) -> List[Community]:
        return await self._get_collection("/api/communities", Community)

    async def add_community(self, community: Community) -> Optional[dict]:
        return await self._send("POST", "/api/communities", community)

    async def update_community(self, community: Community) -> Optional[dict]:
        return await self._send("PUT", f"/api/communities/{community.id}", community)

    async def delete_community(self, community_id: str) -> Optional[dict]:
        return await self._send("DELETE", f"/api/communities/{community_id}")

    # ==================== Events ====================

    async def get_events(self) -> List[Event]:
        return await self._get_collection("/api/events", Event)

    async def add_event(self, event: Event) -> Optional[dict]:
        return await self._send("POST", "/api/events", event)

    async def update_event(self, event: Event) -> Optional[dict]:
        return await self._send("PUT", f"/api/events/{event.id}", event)

    async def delete_event(self, event_id: str) -> Optional[dict]:
        return await self._send("DELETE", f"/api/events/{event_id}")

    # ==================== Attendance ====================

    async def get_attendance(self) -> List[AttendanceRecord]:
        return await self._get_collection("/api/attendance", AttendanceRecord)

    async def add_attendance(self, record: AttendanceRecord) -> Optional[dict]:
        return await self._send("POST", "/api/attendance", record)

    # ==================== Contributions ====================

    async def get_contributions(self) -> List[Contribution]:
        return await self._get_collection("/api/contributions", Contribution)

    async def add_contribution(self, contribution: Contribution) -> Optional[dict]:
        return await self._send("POST", "/api/contributions", contribution)

    async def update_contribution(self, contribution: Contribution) -> Optional[dict]:
        return await self._send("PUT", f"/api/contributions/{contribution.id}", contribution)

    # ==================== Users (admin) ====================

    async def get_users(self) -> List[UserResponse]:
        return await self._get_collection("/api/users", UserResponse)

    async def add_user(self, email: str, password: str, name: Optional[str] = None, role: str = "user") -> dict:
        payload = {"email": email, "password": password, "name": name, "role": role}
        return await self._send_strict("POST", "/api/users", payload, "Failed to add user")

    async def update_user(
        self,
        user_id: int,
        email: str,
        name: Optional[str] = None,
        role: str = "user",
        password: Optional[str] = None,
    ) -> dict:
        payload = {"email": email, "name": name, "role": role}
        if password:
            payload["password"] = password
        return await self._send_strict("PUT", f"/api/users/{user_id}", payload, "Failed to update user")

    async def delete_user(self, user_id: int) -> dict:
        return await self._send_strict("DELETE", f"/api/users/{user_id}", default_error="Failed to delete user")
