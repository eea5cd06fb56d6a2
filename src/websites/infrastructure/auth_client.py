"""
Identity provider client (GoTrue-compatible auth REST API).
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import httpx

from shared.exceptions import TransportError, UnauthorizedError
from shared.logging import get_logger
from websites.domain.identity import AuthChangeCallback, AuthEvent, UserIdentity

logger = get_logger(__name__)


class AuthApiClient:
    """
    Minimal session-holding client for the hosted auth service.

    - One instance per session; nothing is kept in module globals.
    - Tokens are never logged.
    - Network failures and 5xx responses raise TransportError; rejected
      credentials raise UnauthorizedError.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._access_token: Optional[str] = None
        self._user: Optional[UserIdentity] = None
        self._listeners: List[AuthChangeCallback] = []

    # ------------ Session -----------------------------------------------------
    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    def on_auth_change(self, callback: AuthChangeCallback):
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, event: str, user: Optional[UserIdentity]) -> None:
        for callback in list(self._listeners):
            try:
                callback(event, user)
            except Exception:
                logger.exception("Auth change listener failed", auth_event=event)

    # ------------ Operations --------------------------------------------------
    async def sign_in(self, email: str, password: str) -> UserIdentity:
        """POST /token?grant_type=password"""
        data = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            credentials=True,
        )
        return self._start_session(data)

    async def sign_up(self, email: str, password: str) -> UserIdentity:
        """
        POST /signup

        When the provider auto-confirms accounts the response carries a
        session and the client is signed in; otherwise only the user is
        returned and the session stays empty until confirmation + sign-in.
        """
        data = await self._request(
            "POST", "/signup", json={"email": email, "password": password}, credentials=True
        )
        if data.get("access_token"):
            return self._start_session(data)
        return _identity(data.get("user") or data)

    async def sign_out(self) -> None:
        """POST /logout (local session is cleared even if the call fails)."""
        token = self._access_token
        try:
            if token:
                await self._request("POST", "/logout", token=token)
        finally:
            had_user = self._user
            self._access_token = None
            self._user = None
            if had_user is not None:
                self._emit(AuthEvent.SIGNED_OUT, None)

    async def get_current_user(self) -> Optional[UserIdentity]:
        """GET /user; None when signed out or the token was revoked."""
        if not self._access_token:
            return None
        try:
            data = await self._request("GET", "/user", token=self._access_token, credentials=True)
        except UnauthorizedError:
            self._access_token = None
            self._user = None
            self._emit(AuthEvent.SIGNED_OUT, None)
            return None
        self._user = _identity(data)
        return self._user

    # ------------ Helpers -----------------------------------------------------
    def _start_session(self, data: Dict[str, Any]) -> UserIdentity:
        token = data.get("access_token")
        if not token:
            raise UnauthorizedError(code="invalid_credentials")
        self._access_token = token
        self._user = _identity(data.get("user") or {})
        self._emit(AuthEvent.SIGNED_IN, self._user)
        logger.info("Signed in", user_id=str(self._user.user_id))
        return self._user

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self._api_key:
            headers["apikey"] = self._api_key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        credentials: bool = False,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        url = f"{self._base}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.request(method, url, headers=self._headers(token), **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Auth service unreachable", path=path, error_type=e.__class__.__name__)
            raise TransportError() from e

        if credentials and r.status_code in (400, 401, 403, 422):
            raise UnauthorizedError(code="invalid_credentials" if path != "/user" else "unauthorized")
        if r.status_code >= 400:
            logger.warning("Auth service error", path=path, status_code=r.status_code)
            raise TransportError()
        if not r.content:
            return {}
        try:
            return r.json()
        except ValueError as e:
            logger.warning("Auth service returned a non-JSON body", path=path, status_code=r.status_code)
            raise TransportError() from e


def _identity(user: Dict[str, Any]) -> UserIdentity:
    try:
        return UserIdentity(user_id=UUID(str(user["id"])), email=user.get("email"))
    except (KeyError, ValueError) as e:
        raise TransportError("Auth service returned an unexpected user payload") from e
