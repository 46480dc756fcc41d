"""Tests for the REST transport: request primitive and session lifecycle."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from arubaswitch.config import SwitchConfig
from arubaswitch.exceptions import ApiError, AuthenticationError, ProtocolError, TransportError
from arubaswitch.transport import ArubaRESTTransport, _NoHostnameCheckAdapter

LOGIN_OK = {"uri": "/login-sessions", "cookie": "sessionId=abc123"}


def _headers(call) -> dict:
    return call.kwargs["headers"]


class TestRequest:
    """Test ArubaRESTTransport.request with a mocked requests.Session."""

    @patch("arubaswitch.transport.requests.Session")
    def test_url_and_body(self, mock_session_class, config, response_factory):
        """Requests go to https://<host>/rest/<version><path> with a JSON body."""
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({"vlan_id": 10, "name": "servers"})
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        result = transport.post("/vlans", {"vlan_id": 10, "name": "servers"})

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "https://switch01.example.net/rest/v7/vlans")
        assert json.loads(kwargs["data"]) == {"vlan_id": 10, "name": "servers"}
        assert kwargs["headers"]["Content-Type"] == "text/plain"
        assert result.payload == {"vlan_id": 10, "name": "servers"}
        assert not result.is_empty

    @patch("arubaswitch.transport.requests.Session")
    def test_api_version_in_url(self, mock_session_class, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({})
        mock_session_class.return_value = mock_session

        config = SwitchConfig("10.0.0.1", "api", "secret").set_api_version("v8")
        ArubaRESTTransport(config).get("/system/status")

        assert mock_session.request.call_args.args[1] == "https://10.0.0.1/rest/v8/system/status"

    def test_url_follows_config_base_url(self, config):
        transport = ArubaRESTTransport(config)
        assert transport.url("/vlans") == config.base_url + "/vlans"
        config.set_api_version("v8")
        assert transport.url("/vlans") == "https://switch01.example.net/rest/v8/vlans"

    @patch("arubaswitch.transport.requests.Session")
    def test_empty_body_is_empty_result(self, mock_session_class, config, response_factory):
        """An empty body (e.g. after DELETE) is success without payload."""
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory(status_code=204)
        mock_session_class.return_value = mock_session

        result = ArubaRESTTransport(config).delete("/vlans/10")

        assert result.is_empty
        assert result.payload is None
        assert mock_session.request.call_args.kwargs["data"] is None

    @patch("arubaswitch.transport.requests.Session")
    def test_non_json_is_protocol_error(self, mock_session_class, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory(text="<html>502 Bad Gateway</html>")
        mock_session_class.return_value = mock_session

        with pytest.raises(ProtocolError, match="not valid JSON"):
            ArubaRESTTransport(config).get("/vlans")

    @pytest.mark.parametrize("status_code", [200, 400, 404])
    @patch("arubaswitch.transport.requests.Session")
    def test_message_field_is_api_error(self, mock_session_class, status_code, config, response_factory):
        """An in-band message is an ApiError whatever the HTTP status."""
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({"message": "VLAN 5 not found"}, status_code)
        mock_session_class.return_value = mock_session

        with pytest.raises(ApiError, match="VLAN 5 not found") as exc_info:
            ArubaRESTTransport(config).get("/vlans/5")

        assert exc_info.value.status_code == status_code

    @patch("arubaswitch.transport.requests.Session")
    def test_empty_message_is_not_an_error(self, mock_session_class, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({"message": "", "vlan_id": 1})
        mock_session_class.return_value = mock_session

        assert ArubaRESTTransport(config).get("/vlans/1").field("vlan_id") == 1

    @patch("arubaswitch.transport.requests.Session")
    def test_http_error_without_message(self, mock_session_class, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({"detail": "x"}, 500)
        mock_session_class.return_value = mock_session

        with pytest.raises(ApiError, match="HTTP 500"):
            ArubaRESTTransport(config).get("/vlans")

    @pytest.mark.parametrize("status_code", [401, 500])
    @patch("arubaswitch.transport.requests.Session")
    def test_http_error_with_empty_body(self, mock_session_class, status_code, config, response_factory):
        """A non-2xx status with no body is an error, not an empty success."""
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory(status_code=status_code)
        mock_session_class.return_value = mock_session

        with pytest.raises(ApiError, match=f"HTTP {status_code}") as exc_info:
            ArubaRESTTransport(config).delete("/vlans/10")

        assert exc_info.value.status_code == status_code

    @patch("arubaswitch.transport.requests.Session")
    def test_connection_error_is_transport_error(self, mock_session_class, config):
        mock_session = MagicMock()
        cause = requests.ConnectionError("no route to host")
        mock_session.request.side_effect = cause
        mock_session_class.return_value = mock_session

        with pytest.raises(TransportError) as exc_info:
            ArubaRESTTransport(config).get("/vlans")

        assert exc_info.value.__cause__ is cause

    @patch("arubaswitch.transport.requests.Session")
    def test_timeout_is_transport_error(self, mock_session_class, config):
        mock_session = MagicMock()
        mock_session.request.side_effect = requests.Timeout("read timed out")
        mock_session_class.return_value = mock_session

        with pytest.raises(TransportError, match="read timed out"):
            ArubaRESTTransport(config).get("/vlans")
        mock_session.request.assert_called_once()

    @patch("arubaswitch.transport.requests.Session")
    def test_timeouts(self, mock_session_class, config, response_factory):
        """The configured timeout applies unless overridden, converted to seconds."""
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({})
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        transport.get("/vlans")
        assert mock_session.request.call_args.kwargs["timeout"] == 5.0

        transport.post("/cli", {"cmd": "show version"}, timeout_ms=15000)
        assert mock_session.request.call_args.kwargs["timeout"] == 15.0


class TestTLS:
    """Test mapping of TLS verification settings onto requests."""

    @patch("arubaswitch.transport.requests.Session")
    def test_strict_by_default(self, mock_session_class, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({})
        mock_session_class.return_value = mock_session

        ArubaRESTTransport(config).get("/vlans")

        assert mock_session.verify is True
        mock_session.mount.assert_not_called()

    @patch("arubaswitch.transport.requests.Session")
    def test_peer_off_disables_verification(self, mock_session_class, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({})
        mock_session_class.return_value = mock_session

        ArubaRESTTransport(config.set_verify_tls_peer(False)).get("/vlans")

        assert mock_session.verify is False

    @patch("arubaswitch.transport.requests.Session")
    def test_host_off_mounts_adapter(self, mock_session_class, config, response_factory):
        """Peer verification stays on but hostname matching is skipped."""
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({})
        mock_session_class.return_value = mock_session

        ArubaRESTTransport(config.set_verify_tls_host(False)).get("/vlans")

        assert mock_session.verify is True
        prefix, adapter = mock_session.mount.call_args.args
        assert prefix == "https://"
        assert isinstance(adapter, _NoHostnameCheckAdapter)

    @patch("arubaswitch.transport.requests.Session")
    def test_settings_changed_after_first_request(self, mock_session_class, config, response_factory):
        """Changing TLS settings on the config rebuilds the HTTP session."""
        first, second = MagicMock(), MagicMock()
        first.request.return_value = response_factory({})
        second.request.return_value = response_factory({})
        mock_session_class.side_effect = [first, second]

        transport = ArubaRESTTransport(config)
        transport.get("/vlans")
        config.set_verify_tls_peer(False)
        transport.get("/vlans")

        first.close.assert_called_once()
        assert second.verify is False
        second.request.assert_called_once()

    @patch("arubaswitch.transport.requests.Session")
    def test_unchanged_settings_reuse_session(self, mock_session_class, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({})
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        transport.get("/vlans")
        config.set_timeout(9000)
        transport.get("/vlans")

        mock_session_class.assert_called_once()
        mock_session.close.assert_not_called()

    def test_adapter_disables_hostname_assertion(self):
        adapter = _NoHostnameCheckAdapter()
        assert adapter.poolmanager.connection_pool_kw["assert_hostname"] is False


class TestSessionLifecycle:
    """Test login/logout and the session cookie header."""

    @patch("arubaswitch.transport.requests.Session")
    def test_login_stores_cookie(self, mock_session_class, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory(LOGIN_OK, 201)
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        transport.login()

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "https://switch01.example.net/rest/v7/login-sessions")
        assert json.loads(kwargs["data"]) == {"userName": "api", "password": "secret"}
        assert transport.token == "sessionId=abc123"
        assert transport.is_connected()

    @patch("arubaswitch.transport.requests.Session")
    def test_cookie_header_only_after_login(self, mock_session_class, config, response_factory):
        """No Cookie header before login; every later request carries it."""
        mock_session = MagicMock()
        mock_session.request.side_effect = [
            response_factory(LOGIN_OK, 201),
            response_factory({"vlan_element": []}),
            response_factory(),
        ]
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        transport.login()
        transport.get("/vlans")
        transport.delete("/vlans/10")

        calls = mock_session.request.call_args_list
        assert "Cookie" not in _headers(calls[0])
        assert _headers(calls[1])["Cookie"] == "sessionId=abc123"
        assert _headers(calls[2])["Cookie"] == "sessionId=abc123"

    @pytest.mark.parametrize("body", [{"uri": "/login-sessions"}, {"cookie": ""}, None])
    @patch("arubaswitch.transport.requests.Session")
    def test_login_without_cookie(self, mock_session_class, body, config, response_factory):
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory(body, 201)
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        with pytest.raises(AuthenticationError, match="no session cookie"):
            transport.login()
        assert transport.token == ""

    @patch("arubaswitch.transport.requests.Session")
    def test_login_rejected(self, mock_session_class, config, response_factory):
        """A rejected login surfaces as the ApiError the switch reported."""
        mock_session = MagicMock()
        mock_session.request.return_value = response_factory({"message": "Authentication failed"}, 401)
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        with pytest.raises(ApiError, match="Authentication failed") as exc_info:
            transport.login()
        assert not isinstance(exc_info.value, AuthenticationError)
        assert exc_info.value.status_code == 401
        assert transport.token == ""

    @patch("arubaswitch.transport.requests.Session")
    def test_login_transport_error_propagates(self, mock_session_class, config):
        mock_session = MagicMock()
        mock_session.request.side_effect = requests.ConnectionError("refused")
        mock_session_class.return_value = mock_session

        with pytest.raises(TransportError):
            ArubaRESTTransport(config).login()

    @patch("arubaswitch.transport.requests.Session")
    def test_logout(self, mock_session_class, config, response_factory):
        """logout DELETEs the session, clears the cookie and closes the session."""
        mock_session = MagicMock()
        mock_session.request.side_effect = [response_factory(LOGIN_OK, 201), response_factory()]
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        transport.login()
        transport.logout()

        args, kwargs = mock_session.request.call_args
        assert args == ("DELETE", "https://switch01.example.net/rest/v7/login-sessions")
        assert kwargs["headers"]["Cookie"] == "sessionId=abc123"
        assert transport.token == ""
        assert not transport.is_connected()
        mock_session.close.assert_called_once()

    @pytest.mark.parametrize(
        "failure",
        [requests.ConnectionError("gone"), None],
        ids=["transport", "api"],
    )
    @patch("arubaswitch.transport.requests.Session")
    def test_logout_never_raises(self, mock_session_class, failure, config, response_factory):
        mock_session = MagicMock()
        second = failure if failure is not None else response_factory({"message": "Session expired"}, 401)
        mock_session.request.side_effect = [response_factory(LOGIN_OK, 201), second]
        mock_session_class.return_value = mock_session

        transport = ArubaRESTTransport(config)
        transport.login()
        transport.logout()

        assert transport.token == ""
        mock_session.close.assert_called_once()

    @patch("arubaswitch.transport.requests.Session")
    def test_logout_without_login_sends_nothing(self, mock_session_class, config):
        transport = ArubaRESTTransport(config)
        transport.logout()
        mock_session_class.assert_not_called()
