"""HTTP client for the chore calendar API."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


class ApiError(Exception):
    """A non-2xx response, carrying the server's status and message"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    @property
    def is_duplicate(self) -> bool:
        return self.status_code == 409 and "already exists" in self.message


class ApiClient:
    """
    One method per API route.

    The bearer token is kept in memory and, when ``token_file`` is given,
    mirrored to disk so a later process can pick the session back up. Pass
    ``http_client`` to reuse an existing ``httpx.Client`` (its ``base_url`` is
    then used as is).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        token_file: Optional[Path] = None,
        timeout: float = 30,
    ):
        self.base_url = (base_url or os.getenv("CHORE_CALENDAR_API_URL", DEFAULT_API_URL)).rstrip("/")
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self.token_file = Path(token_file) if token_file else None
        self._token: Optional[str] = None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Token handling

    def set_token(self, token: Optional[str]) -> None:
        self._token = token
        if not self.token_file:
            return
        if token:
            self.token_file.parent.mkdir(parents=True, exist_ok=True)
            self.token_file.write_text(token)
        elif self.token_file.exists():
            self.token_file.unlink()

    def get_token(self) -> Optional[str]:
        if not self._token and self.token_file and self.token_file.exists():
            self._token = self.token_file.read_text().strip() or None
        return self._token

    def _request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None) -> Any:
        headers = {}
        token = self.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = self._http.request(method, path, json=json, params=params, headers=headers)
        if response.is_error:
            raise ApiError(response.status_code, self._error_message(response))
        logger.debug(f"{method} {path} -> {response.status_code}")
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        detail = body.get("detail") if isinstance(body, dict) else None
        if isinstance(detail, str):
            return detail
        return str(detail or body)

    # Auth

    def admin_login(self, email: str, password: str) -> Dict[str, Any]:
        result = self._request("POST", "/auth/admin/login", json={"email": email, "password": password})
        self.set_token(result["token"])
        return result

    def user_login(self, email: str) -> Dict[str, Any]:
        result = self._request("POST", "/auth/user/login", json={"email": email})
        self.set_token(result["token"])
        return result

    def logout(self) -> None:
        self.set_token(None)

    # Families

    def create_family(self, name: str, admin_email: str, admin_password: str) -> Dict[str, Any]:
        result = self._request(
            "POST",
            "/families",
            json={"name": name, "adminEmail": admin_email, "adminPassword": admin_password},
        )
        self.set_token(result["token"])
        return result

    def get_family(self, family_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/families/{family_id}")

    def delete_family(self, family_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/families/{family_id}")

    def add_admin(self, family_id: str, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", f"/families/{family_id}/admins", json={"email": email, "password": password})

    def remove_admin(self, family_id: str, admin_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/families/{family_id}/admins/{admin_id}")

    def get_family_activity(self, family_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        return self._request("GET", f"/families/{family_id}/activity", params={"limit": limit})

    # People

    def get_people(self, family_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/people/family/{family_id}")

    def add_person(self, family_id: str, name: str, email: str, phone: Optional[str] = None) -> Dict[str, Any]:
        return self._request(
            "POST", f"/people/family/{family_id}", json={"name": name, "email": email, "phone": phone}
        )

    def update_person(
        self,
        person_id: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._request(
            "PUT",
            f"/people/{person_id}",
            json={"name": name, "email": email, "phone": phone, "color": color},
        )

    def delete_person(self, person_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/people/{person_id}")

    # Chores

    def get_chores(self, family_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/chores/family/{family_id}")

    def add_chore(self, family_id: str, label: str) -> Dict[str, Any]:
        return self._request("POST", f"/chores/family/{family_id}", json={"label": label})

    def update_chore(self, chore_id: str, label: str) -> Dict[str, Any]:
        return self._request("PUT", f"/chores/{chore_id}", json={"label": label})

    def delete_chore(self, chore_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/chores/{chore_id}")

    # Assignments

    def get_assignments(self, family_id: str, week_start_iso: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/assignments/family/{family_id}/week/{week_start_iso}")

    def add_assignment(
        self, family_id: str, person_id: str, chore_id: str, week_start_iso: str, day_index: int
    ) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/assignments/family/{family_id}",
            json={
                "personId": person_id,
                "choreId": chore_id,
                "weekStartISO": week_start_iso,
                "dayIndex": day_index,
            },
        )

    def add_week_assignment(
        self, family_id: str, person_id: str, chore_id: str, week_start_iso: str
    ) -> List[Dict[str, Any]]:
        return self._request(
            "POST",
            f"/assignments/family/{family_id}/week",
            json={"personId": person_id, "choreId": chore_id, "weekStartISO": week_start_iso},
        )

    def delete_assignment(self, assignment_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/assignments/{assignment_id}")

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
