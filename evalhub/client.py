"""
HTTP client for the portal API

The client keeps an explicit session context (token plus a snapshot of
the signed-in account) and builds every request from it. The context can
be persisted to a JSON file so a session survives restarts.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
ROLE_ADMIN = "Admin"


class ApiError(Exception):
    """Non-success response from the API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class SessionContext:
    """Token and account snapshot of the signed-in user"""

    def __init__(self, token: Optional[str] = None, account: Optional[Dict[str, Any]] = None):
        self.token = token
        self.account = account

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and bool(self.account) and self.account.get("role") == ROLE_ADMIN

    @classmethod
    def load(cls, path) -> "SessionContext":
        """Restore a saved session; a missing or unreadable file gives an empty one"""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {path}: {e}")
            return cls()
        return cls(token=data.get("token"), account=data.get("account"))

    def save(self, path):
        Path(path).write_text(
            json.dumps({"token": self.token, "account": self.account}, ensure_ascii=False),
            encoding="utf-8"
        )

    def clear(self, path=None):
        self.token = None
        self.account = None
        if path is not None:
            Path(path).unlink(missing_ok=True)


class PortalClient:
    """Thin wrapper over the /api endpoints"""

    def __init__(self, base_url: str, session: Optional[SessionContext] = None, http=None):
        self.base_url = base_url.rstrip("/")
        self.session = session or SessionContext()
        self.http = http or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def _request(self, method: str, path: str, params=None, json_body=None):
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        response = self.http.request(
            method,
            f"{self.base_url}/api{path}",
            headers=self._headers(),
            params=params,
            json=json_body,
            timeout=DEFAULT_TIMEOUT
        )
        if response.status_code >= 400:
            raise ApiError(response.status_code, self._error_message(response))
        return response

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or "Request failed"
        if isinstance(body, dict):
            return body.get("message") or body.get("detail") or "Request failed"
        return "Request failed"

    def _data(self, method: str, path: str, **kwargs):
        return self._request(method, path, **kwargs).json().get("data")

    # Authentication

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Sign in and store the token and account in the session context"""
        account = self._data("POST", "/auth/login", json_body={"email": email, "password": password})
        self.session.token = account.pop("token")
        self.session.account = account
        return account

    def logout(self, path=None):
        self.session.clear(path)

    def me(self) -> Dict[str, Any]:
        account = self._data("GET", "/auth/me")
        self.session.account = account
        return account

    # Directory

    def departments(self) -> List[Dict[str, Any]]:
        return self._data("GET", "/departments")

    def users(self, department_id: Optional[int] = None, year: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._data("GET", "/users", params={"departmentId": department_id, "year": year})

    # Evaluations

    def evaluations(
        self,
        department_id: Optional[int] = None,
        year: Optional[int] = None,
        evaluation_number: Optional[int] = None
    ) -> Dict[str, Any]:
        """Evaluation listing; the result keeps count and years next to evaluations"""
        params = {"departmentId": department_id, "year": year, "evaluationNumber": evaluation_number}
        return self._request("GET", "/evaluations", params=params).json()

    def evaluation(self, evaluation_id: int) -> Dict[str, Any]:
        return self._data("GET", f"/evaluations/{evaluation_id}")

    def user_evaluations(self, user_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", f"/evaluations/user/{user_id}").json()["evaluations"]

    def create_evaluation(
        self,
        user_id: int,
        evaluation_number: int,
        criteria: Dict[str, int],
        comments: Optional[str] = None
    ) -> Dict[str, Any]:
        body = {
            "userId": user_id,
            "evaluationNumber": evaluation_number,
            "criteria": criteria,
            "comments": comments,
        }
        return self._data("POST", "/evaluations", json_body=body)

    def update_evaluation(self, evaluation_id: int, **changes) -> Dict[str, Any]:
        """Accepts criteria and/or comments"""
        return self._data("PUT", f"/evaluations/{evaluation_id}", json_body=changes)

    def delete_evaluation(self, evaluation_id: int):
        self._request("DELETE", f"/evaluations/{evaluation_id}")

    def export_evaluations(
        self,
        department_id: Optional[int] = None,
        year: Optional[int] = None,
        evaluation_number: Optional[int] = None
    ) -> bytes:
        """Download the Excel workbook"""
        params = {"departmentId": department_id, "year": year, "evaluationNumber": evaluation_number}
        return self._request("GET", "/evaluations/export", params=params).content
