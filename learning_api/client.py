"""Python client for the learning platform API.

The client holds no credentials of its own.  ``login`` returns an
AuthSession and every authenticated call takes one explicitly, so two
sessions can share one client::

    with httpx.Client(base_url="http://localhost:8000") as http:
        api = LearningPlatformClient(http)
        session = api.login("admin@example.com", "password")
        print(api.get_dashboard(session))

Pass ``token_store=FileTokenStore(path)`` to keep the token across runs;
``AuthSession.restore(store)`` reads it back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

_DEFAULT_ERROR = "Request failed"


class ApiError(Exception):
    """Non-2xx response.  ``message`` is the body's message when it has one."""

    def __init__(self, status_code: int, message: str = _DEFAULT_ERROR) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TokenStore(Protocol):
    def save(self, session: AuthSession) -> None: ...
    def load(self) -> AuthSession | None: ...
    def clear(self) -> None: ...


@dataclass(frozen=True, slots=True)
class AuthSession:
    token: str | None = None
    user: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @staticmethod
    def anonymous() -> AuthSession:
        return AuthSession()

    @staticmethod
    def restore(store: TokenStore) -> AuthSession:
        return store.load() or AuthSession.anonymous()


class FileTokenStore:
    """Keeps one session as a small JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def save(self, session: AuthSession) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps({"token": session.token, "user": session.user}),
            encoding="utf-8",
        )

    def load(self) -> AuthSession | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable token file %s", self._path)
            return None
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str):
            return None
        user = data.get("user")
        return AuthSession(token=token, user=user if isinstance(user, dict) else {})

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class LearningPlatformClient:
    def __init__(
        self, http: httpx.Client, *, token_store: TokenStore | None = None
    ) -> None:
        self._http = http
        self._token_store = token_store

    # -- session --

    def login(self, email: str, password: str) -> AuthSession:
        body = self._request(
            "POST", "/auth", body={"email": email, "password": password}
        )
        session = AuthSession(token=body["token"], user=body.get("user") or {})
        if self._token_store is not None:
            self._token_store.save(session)
        return session

    def logout(self, session: AuthSession) -> AuthSession:
        """Forget the token.  Tokens are stateless; nothing is sent."""
        if self._token_store is not None:
            self._token_store.clear()
        return AuthSession.anonymous()

    # -- resources --

    def get_dashboard(self, session: AuthSession) -> dict[str, Any]:
        return self._request("GET", "/dashboard", session=session)

    def get_courses(self, session: AuthSession) -> list[dict[str, Any]]:
        return self._request("GET", "/courses", session=session)

    def get_videos(self, session: AuthSession) -> list[dict[str, Any]]:
        return self._request("GET", "/videos", session=session)

    def update_video_progress(
        self,
        session: AuthSession,
        video_id: int,
        watched_seconds: int,
        completed: bool | None = None,
    ) -> dict[str, Any]:
        """Report progress.  Leaving ``completed`` out keeps the stored flag."""
        payload: dict[str, Any] = {
            "video_id": video_id,
            "watched_seconds": watched_seconds,
        }
        if completed is not None:
            payload["completed"] = completed
        return self._request("POST", "/videos", session=session, body=payload)

    # -- transport --

    def _request(
        self,
        method: str,
        path: str,
        *,
        session: AuthSession | None = None,
        body: Any = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if session is not None and session.token is not None:
            headers["Authorization"] = f"Bearer {session.token}"

        response = self._http.request(method, path, headers=headers, json=body)
        if response.is_success:
            return response.json()

        raise ApiError(response.status_code, _error_message(response))


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return _DEFAULT_ERROR
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return _DEFAULT_ERROR
