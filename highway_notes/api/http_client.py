"""
HTTP client for the Highway Notes backend.

Every request goes through the ``ApiClient`` of the browser session that
issued it:

- the bearer token from the session store is attached when present
- a 401 response clears the session and redirects to sign-in, whichever
  screen issued the request
- any other failure is raised as ``ApiError`` for the screen to handle

Requests are single-shot. The blocking ``requests`` call runs through an
async runner so the NiceGUI event loop keeps serving the page.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

import requests
from requests import RequestException

from highway_notes.config import settings
from highway_notes.state.session import SessionContext
from highway_notes.utils.logger import get_logger

logger = get_logger(__name__)

Runner = Callable[..., Awaitable[Any]]


class ApiError(RuntimeError):
    """Raised when a backend request fails."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message or "Backend request failed")
        self.message = message
        self.status_code = status_code
        self.errors = errors or []

    def describe(self, fallback: str) -> str:
        """Server-reported message, or ``fallback`` when there is none."""
        return self.message or fallback


class UnauthorizedError(ApiError):
    """Raised after the backend rejected the session token (HTTP 401)."""


class ApiClient:
    """
    Thin wrapper around a ``requests.Session`` with auth interceptors.

    Args:
        base_url: Backend API base URL.
        session: Session context providing and clearing the token.
        on_unauthorized: Called after a 401 cleared the session.
        http: Underlying ``requests.Session`` (injectable for tests).
        runner: Awaitable executor for the blocking call.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: SessionContext,
        on_unauthorized: Optional[Callable[[], None]] = None,
        http: Optional[requests.Session] = None,
        runner: Runner = asyncio.to_thread,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._on_unauthorized = on_unauthorized
        self._runner = runner
        self._timeout = timeout

        self._http = http or requests.Session()
        self._http.headers.update({"Content-Type": "application/json"})

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json_data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, json_data=json_data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Returns:
            The JSON payload, or ``None`` for an empty body.

        Raises:
            UnauthorizedError: On HTTP 401, after the session was cleared.
            ApiError: On any other transport or HTTP failure.
        """
        url = f"{self.base_url}{path}"

        try:
            response = await self._runner(
                self._http.request,
                method,
                url,
                json=json_data,
                params=params,
                headers=self._auth_headers(),
                timeout=self._timeout,
            )
        except RequestException as exc:
            logger.exception(
                "HTTP request failed",
                extra={"method": method, "url": url},
            )
            raise ApiError(status_code=None) from exc

        return self._handle_response(method, url, response)

    def _auth_headers(self) -> Dict[str, str]:
        token = self._session.store.get()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _handle_response(
        self,
        method: str,
        url: str,
        response: requests.Response,
    ) -> Any:
        payload = _decode(response)

        if response.status_code == 401:
            logger.warning(
                "Session rejected by backend",
                extra={"method": method, "url": url},
            )
            self._session.logout()
            if self._on_unauthorized is not None:
                self._on_unauthorized()
            raise UnauthorizedError(
                _message(payload),
                status_code=401,
            )

        if not response.ok:
            logger.warning(
                "Backend returned an error",
                extra={
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                },
            )
            raise ApiError(
                _message(payload),
                status_code=response.status_code,
                errors=_field_errors(payload),
            )

        return payload


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning(
            "Non-JSON response body",
            extra={"status_code": response.status_code},
        )
        return None


def _message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _field_errors(payload: Any) -> List[Dict[str, Any]]:
    if isinstance(payload, dict) and isinstance(payload.get("errors"), list):
        return [err for err in payload["errors"] if isinstance(err, dict)]
    return []


def _redirect_to_sign_in() -> None:
    from highway_notes.utils.ui_bridge import navigate_to

    navigate_to("/signin")


def client_for(session: SessionContext) -> ApiClient:
    """
    Return an API client bound to one browser's session.

    Each client owns its ``requests.Session``, so cookies and connection
    state are never shared between browsers.
    """
    logger.debug(
        "Creating API client",
        extra={"base_url": settings.api_base_url, "env": settings.ENV},
    )
    return ApiClient(
        settings.api_base_url,
        session=session,
        on_unauthorized=_redirect_to_sign_in,
        timeout=settings.REQUEST_TIMEOUT,
    )
