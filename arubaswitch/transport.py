"""ArubaOS-Switch REST transport with cookie session authentication."""

from __future__ import annotations

import json
from typing import Any

import requests
import urllib3
from loguru import logger
from requests.adapters import HTTPAdapter

from arubaswitch.config import SwitchConfig, TLSHostVerification
from arubaswitch.exceptions import ApiError, AuthenticationError, ProtocolError, SwitchError, TransportError
from arubaswitch.models.response import ApiResult

LOGIN_ENDPOINT = "/login-sessions"
CONTENT_TYPE = "text/plain"


def _raise_for_status(method: str, path: str, resp: requests.Response) -> None:
    if not 200 <= resp.status_code < 300:
        raise ApiError(f"{method} {path}: HTTP {resp.status_code}", status_code=resp.status_code)


class _NoHostnameCheckAdapter(HTTPAdapter):
    """Verifies the certificate chain but not that it names the host."""

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["assert_hostname"] = False
        super().init_poolmanager(*args, **kwargs)


class ArubaRESTTransport:
    """HTTP transport for the ArubaOS-Switch REST API.

    Login is a POST of the credentials to ``/login-sessions``; the response
    carries a ``cookie`` string (``sessionId=...``) that is sent back verbatim
    in the ``Cookie`` header of every later request. Errors are reported
    in-band as a JSON object with a ``message`` field, often under HTTP 200,
    so every decoded body is checked for it.
    """

    def __init__(self, config: SwitchConfig):
        self.config = config
        self._session: requests.Session | None = None
        self._token: str = ""
        self._session_tls: tuple[bool, TLSHostVerification] | None = None

    @property
    def host(self) -> str:
        return self.config.hostname

    @property
    def token(self) -> str:
        return self._token

    def is_connected(self) -> bool:
        """Check if a session cookie is held."""
        return bool(self._token)

    def _tls_settings(self) -> tuple[bool, TLSHostVerification]:
        return self.config.verify_tls_peer, self.config.verify_tls_host

    def _get_session(self) -> requests.Session:
        """Return the HTTP session, rebuilding it if the TLS settings changed."""
        if self._session is not None and self._session_tls != self._tls_settings():
            logger.debug(f"TLS settings for {self.host} changed, rebuilding HTTP session")
            self._session.close()
            self._session = None
        if self._session is None:
            session = requests.Session()
            session.verify = self.config.verify_tls_peer
            if not self.config.verify_tls_peer:
                urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
            elif self.config.verify_tls_host is TLSHostVerification.OFF:
                session.mount("https://", _NoHostnameCheckAdapter())
            self._session = session
            self._session_tls = self._tls_settings()
        return self._session

    def url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def request(self, method: str, path: str, body: Any = None, timeout_ms: int | None = None) -> ApiResult:
        """Send one request and decode the response envelope.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Endpoint below ``/rest/<version>``, e.g. ``/vlans``.
            body: JSON-serialisable payload, sent as the request body.
            timeout_ms: Per-call timeout; defaults to the configured one.

        Returns:
            ``ApiResult.ok(payload)`` for a JSON body, ``ApiResult.empty()``
            when the switch sent nothing back.

        Raises:
            TransportError: Connection failure or timeout.
            ProtocolError: Body is not valid JSON.
            ApiError: Body carries an error ``message``, or the HTTP status
                is not 2xx.
        """
        headers = {"Content-Type": CONTENT_TYPE}
        if self._token:
            headers["Cookie"] = self._token
        timeout = (timeout_ms or self.config.timeout_ms) / 1000.0
        data = json.dumps(body) if body is not None else None

        try:
            resp = self._get_session().request(method, self.url(path), data=data, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {resp.status_code}")

        text = resp.text
        if not text or not text.strip():
            _raise_for_status(method, path, resp)
            return ApiResult.empty()

        try:
            payload = json.loads(text)
        except ValueError as e:
            raise ProtocolError(f"{method} {path}: response is not valid JSON") from e

        if isinstance(payload, dict) and payload.get("message"):
            raise ApiError(f"{method} {path}: API returned error: {payload['message']}", status_code=resp.status_code)
        _raise_for_status(method, path, resp)
        return ApiResult.ok(payload)

    def get(self, path: str) -> ApiResult:
        return self.request("GET", path)

    def post(self, path: str, body: Any = None, timeout_ms: int | None = None) -> ApiResult:
        return self.request("POST", path, body, timeout_ms)

    def put(self, path: str, body: Any = None) -> ApiResult:
        return self.request("PUT", path, body)

    def delete(self, path: str) -> ApiResult:
        return self.request("DELETE", path)

    def login(self) -> None:
        """Create a session and keep its cookie for later requests."""
        credentials = {"userName": self.config.username, "password": self.config.password}
        result = self.post(LOGIN_ENDPOINT, credentials)
        cookie = result.field("cookie")
        if not cookie:
            raise AuthenticationError("REST login returned no session cookie")

        self._token = str(cookie)
        logger.info(f"REST login successful to {self.host}")

    def logout(self) -> None:
        """Delete the session (best-effort; never raises)."""
        if self._token:
            try:
                self.delete(LOGIN_ENDPOINT)
                logger.info(f"REST logout from {self.host}")
            except SwitchError as e:
                logger.warning(f"REST logout from {self.host} failed (ignored): {e}")
            self._token = ""
        if self._session is not None:
            self._session.close()
            self._session = None
